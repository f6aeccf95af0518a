"""Configuration loading from .env and YAML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from seedfuzz.core.exceptions import ConfigError
from seedfuzz.core.schema import RejectionPolicy

log = logging.getLogger(__name__)

DEFAULT_SEED = '<html a="value">...</html>'


def _find_project_root(start: Path | None = None) -> Path:
    """Find project root by looking for pyproject.toml upward."""
    current = Path(start or Path.cwd()).resolve()
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    return Path.cwd().resolve()


class MutatorsConfigModel(BaseModel):
    """Mutators section of config.

    ``static``/``dynamic`` of None mean "whatever the registry enables by default".
    """

    static: list[str] | None = None
    dynamic: list[str] | None = None
    repeat_count: int = Field(default=3, ge=0)
    options: dict[str, dict[str, Any]] = Field(
        default_factory=lambda: {"change_attribute_value_length": {"attribute_name": "a"}}
    )


class HarnessConfigModel(BaseModel):
    """Harness section of config."""

    timeout: float | None = Field(default=None, gt=0)


class CampaignConfigModel(BaseModel):
    """Campaign section of config."""

    on_rejection: RejectionPolicy = RejectionPolicy.ABORT
    rng_seed: int | None = None


class AppConfig(BaseModel):
    """Full application configuration."""

    seed: str = DEFAULT_SEED
    working_directory: str = "./"
    reporters: list[str] = Field(default_factory=lambda: ["json"])
    mutators: MutatorsConfigModel = Field(default_factory=MutatorsConfigModel)
    harness: HarnessConfigModel = Field(default_factory=HarnessConfigModel)
    campaign: CampaignConfigModel = Field(default_factory=CampaignConfigModel)


# Environment variable -> (section or None, key)
_ENV_MAPPING: dict[str, tuple[str | None, str]] = {
    "SEEDFUZZ_SEED": (None, "seed"),
    "SEEDFUZZ_WORKING_DIRECTORY": (None, "working_directory"),
    "SEEDFUZZ_REPEAT_COUNT": ("mutators", "repeat_count"),
    "SEEDFUZZ_TIMEOUT": ("harness", "timeout"),
    "SEEDFUZZ_ON_REJECTION": ("campaign", "on_rejection"),
    "SEEDFUZZ_RNG_SEED": ("campaign", "rng_seed"),
}


class ConfigManager:
    """Load and merge configuration from .env and YAML."""

    def __init__(
        self,
        project_root: Path | None = None,
        env_path: Path | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._root = Path(project_root or _find_project_root()).resolve()
        self._env_path = Path(env_path) if env_path else self._root / ".env"
        self._config_path = Path(config_path) if config_path else self._root / "config" / "default.yaml"
        self._config: AppConfig | None = None
        self._env: dict[str, str] = {}

    def load_env(self) -> dict[str, str]:
        """Load .env file into a dict (without modifying os.environ)."""
        from dotenv import dotenv_values

        try:
            self._env = {k: v for k, v in dotenv_values(self._env_path).items() if v is not None}
            return self._env
        except (OSError, PermissionError) as e:
            log.warning("Failed to read .env file %s: %s", self._env_path, e)
            self._env = {}
            return self._env

    def load_yaml(self) -> dict[str, Any]:
        """Load YAML config file if it exists."""
        if not self._config_path.exists():
            return {}
        import yaml

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, PermissionError) as e:
            log.warning("Failed to read config file %s: %s", self._config_path, e)
            return {}
        except yaml.YAMLError as e:
            log.warning("Malformed YAML in %s: %s", self._config_path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring config file %s: top level is not a mapping", self._config_path)
            return {}
        return data

    def load(self) -> AppConfig:
        """Load .env and YAML, merge with defaults, return AppConfig."""
        env = self.load_env()
        config_dict = self.load_yaml()

        # Environment variables override YAML values
        for env_key, (section, key) in _ENV_MAPPING.items():
            if not env.get(env_key):
                continue
            if section is None:
                config_dict[key] = env[env_key]
            else:
                section_dict = dict(config_dict.get(section) or {})
                section_dict[key] = env[env_key]
                config_dict[section] = section_dict

        try:
            self._config = AppConfig(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return self._config

    @property
    def config(self) -> AppConfig:
        """Return loaded config; load if not yet loaded."""
        if self._config is None:
            self.load()
        if self._config is None:
            raise RuntimeError("ConfigManager.load() failed to produce a config")
        return self._config

    @property
    def project_root(self) -> Path:
        return self._root
