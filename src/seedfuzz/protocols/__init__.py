"""Protocol interfaces for pluggable components."""

from seedfuzz.protocols.mutator import Mutator, NamedMutator
from seedfuzz.protocols.reporter import Reporter

__all__ = [
    "Mutator",
    "NamedMutator",
    "Reporter",
]
