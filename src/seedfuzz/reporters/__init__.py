"""Built-in reporters for campaign results."""

from seedfuzz.reporters.json_reporter import JsonReporter
from seedfuzz.reporters.sarif_reporter import SarifReporter


def register_builtin_reporters(registry) -> None:
    """Register built-in reporters on the given registry."""
    registry.register_reporter("json", JsonReporter)
    registry.register_reporter("sarif", SarifReporter)


__all__ = [
    "JsonReporter",
    "SarifReporter",
    "register_builtin_reporters",
]
