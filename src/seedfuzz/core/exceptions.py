"""Custom exception hierarchy for SeedFuzz."""

from __future__ import annotations


class SeedFuzzError(Exception):
    """Base exception for SeedFuzz."""

    pass


class ConfigError(SeedFuzzError):
    """Raised when configuration loading or validation fails."""

    pass


class RegistryError(SeedFuzzError):
    """Raised when a mutator or reporter is not found or registration fails."""

    pass


class PluginLoadError(SeedFuzzError):
    """Raised when a plugin fails to load."""

    pass


class CommandNotFoundError(SeedFuzzError):
    """Raised when the target command does not exist under the working directory."""

    pass


class HarnessError(SeedFuzzError):
    """Raised when the target process cannot be spawned or driven."""

    pass
