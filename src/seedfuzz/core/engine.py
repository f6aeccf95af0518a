"""Mutation engine: derive test inputs from the seed."""

from __future__ import annotations

import logging
import random
from typing import Any, Sequence

from seedfuzz.core.exceptions import RegistryError
from seedfuzz.core.registry import ComponentRegistry
from seedfuzz.core.schema import MutatedInput
from seedfuzz.protocols import NamedMutator

log = logging.getLogger(__name__)


def build_mutator_set(
    registry: ComponentRegistry,
    names: Sequence[str],
    repeat_count: int = 1,
    options: dict[str, dict[str, Any]] | None = None,
    kind: str | None = None,
) -> list[NamedMutator]:
    """Resolve ``names`` through the registry and repeat the template ``repeat_count`` times.

    The result is ordered repetition by repetition, each repetition listing
    the mutators in ``names`` order. ``repeat_count`` 0 gives an empty set.
    When ``kind`` is given, every name must be registered as that kind.
    """
    if repeat_count < 0:
        raise ValueError(f"repeat_count must be >= 0, got {repeat_count}")
    options = options or {}
    if kind is not None:
        allowed = set(registry.list_mutators(kind))
        for name in names:
            if name in registry.list_mutators() and name not in allowed:
                raise RegistryError(f"Mutator {name} is not a {kind} mutator")
    template = [registry.get_mutator(name, **options.get(name, {})) for name in names]
    return [m for _ in range(repeat_count) for m in template]


def derive_inputs(
    seed: str,
    mutators: Sequence[NamedMutator],
    rng: random.Random,
) -> list[MutatedInput]:
    """Apply every mutator to ``seed`` (never to a previous result), in order.

    Exceptions raised by a mutator propagate unchanged.
    """
    inputs: list[MutatedInput] = []
    for position, mutator in enumerate(mutators, start=1):
        value = mutator(seed, rng)
        log.debug("Mutator %s produced %r", mutator.name, value)
        inputs.append(MutatedInput(value=value, mutator=mutator.name, position=position))
    return inputs
