"""Built-in mutation strategies."""

from seedfuzz.mutators.dynamic import DYNAMIC_MUTATORS
from seedfuzz.mutators.static import STATIC_MUTATORS


def register_builtin_mutators(registry) -> None:
    """Register built-in static and dynamic mutators on the given registry."""
    for name, func, enabled in STATIC_MUTATORS:
        registry.register_mutator(name, func, kind="static", enabled=enabled)
    for name, func in DYNAMIC_MUTATORS:
        registry.register_mutator(name, func, kind="dynamic")


__all__ = [
    "DYNAMIC_MUTATORS",
    "STATIC_MUTATORS",
    "register_builtin_mutators",
]
