"""Protocol for mutation strategies."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol


class Mutator(Protocol):
    """A transformation from one input string to another.

    Randomized strategies draw only from ``rng``; static strategies ignore it.
    """

    def __call__(self, text: str, rng: random.Random) -> str:
        ...


@dataclass(frozen=True)
class NamedMutator:
    """A mutator bound to the name it was registered under."""

    name: str
    func: Mutator

    def __call__(self, text: str, rng: random.Random) -> str:
        return self.func(text, rng)
