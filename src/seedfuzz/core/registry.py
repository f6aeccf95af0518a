"""Central registry for mutation strategies and reporters."""

from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any

from seedfuzz.core.exceptions import RegistryError
from seedfuzz.protocols import Mutator, NamedMutator, Reporter

log = logging.getLogger(__name__)

MUTATOR_KINDS = ("static", "dynamic")


@dataclass
class MutatorEntry:
    """Registration record for one named mutation strategy."""

    name: str
    func: Mutator
    kind: str
    enabled: bool = True
    options: dict[str, Any] = field(default_factory=dict)


class ComponentRegistry:
    """Central registry for all pluggable components."""

    def __init__(self) -> None:
        self._mutators: dict[str, MutatorEntry] = {}
        self._reporters: dict[str, type[Reporter]] = {}

    def register_mutator(
        self,
        name: str,
        func: Mutator,
        kind: str = "static",
        enabled: bool = True,
        **options: Any,
    ) -> None:
        """Register a mutation strategy.

        ``options`` are bound as keyword arguments when the mutator is fetched,
        e.g. the attribute name for ``change_attribute_value_length``.
        """
        if kind not in MUTATOR_KINDS:
            raise RegistryError(f"Unknown mutator kind {kind!r} for {name}; expected one of {MUTATOR_KINDS}")
        if name in self._mutators:
            log.warning("Overwriting mutator registration: %s", name)
        self._mutators[name] = MutatorEntry(name=name, func=func, kind=kind, enabled=enabled, options=options)

    def register_reporter(self, fmt: str, cls: type[Reporter]) -> None:
        """Register a reporter class."""
        if fmt in self._reporters:
            log.warning("Overwriting reporter registration: %s", fmt)
        self._reporters[fmt] = cls

    def get_mutator(self, name: str, **overrides: Any) -> NamedMutator:
        """Get a mutator by name with its registered options (and overrides) bound."""
        if name not in self._mutators:
            raise RegistryError(f"Unknown mutator: {name}")
        entry = self._mutators[name]
        opts = {**entry.options, **overrides}
        if opts:
            _check_options(entry, opts)
        func = functools.partial(entry.func, **opts) if opts else entry.func
        return NamedMutator(name=name, func=func)

    def get_reporter(self, fmt: str) -> Reporter:
        """Get a reporter instance by format name."""
        if fmt not in self._reporters:
            raise RegistryError(f"Unknown reporter format: {fmt}")
        cls = self._reporters[fmt]
        return cls()  # type: ignore[call-arg]

    def list_mutators(self, kind: str | None = None) -> list[str]:
        """Return registered mutator names in registration order, optionally filtered by kind."""
        return [e.name for e in self._mutators.values() if kind is None or e.kind == kind]

    def default_mutators(self, kind: str) -> list[str]:
        """Return the names of mutators of ``kind`` that are enabled by default."""
        return [e.name for e in self._mutators.values() if e.kind == kind and e.enabled]

    def list_available(self) -> dict[str, list[str]]:
        """Return all registered component names by category."""
        return {
            "static_mutators": self.list_mutators("static"),
            "dynamic_mutators": self.list_mutators("dynamic"),
            "reporters": list(self._reporters),
        }


def _check_options(entry: MutatorEntry, opts: dict[str, Any]) -> None:
    """Raise RegistryError if ``opts`` cannot be bound to the mutator's signature."""
    try:
        sig = inspect.signature(entry.func)
    except (TypeError, ValueError):
        log.debug("No signature for mutator %s; options not checked", entry.name)
        return
    try:
        sig.bind_partial("", None, **opts)
    except TypeError as e:
        raise RegistryError(f"Invalid options for mutator {entry.name}: {e}") from e
