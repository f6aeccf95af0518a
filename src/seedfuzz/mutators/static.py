"""Static mutators: fixed, deterministic string transformations.

Each entry in ``STATIC_MUTATORS`` is ``(name, func, enabled_by_default)``.
Adding a strategy means adding a row here (or registering it from a
plugin); nothing else needs to change.
"""

from __future__ import annotations

import random
from typing import Callable


def replacing(old: str, new: str) -> Callable[[str, random.Random], str]:
    """Build a mutator that replaces every occurrence of ``old`` with ``new``."""

    def mutate(text: str, rng: random.Random) -> str:
        return text.replace(old, new)

    mutate.__doc__ = f"Replace {old!r} with {new!r}."
    return mutate


def appending(suffix: str) -> Callable[[str, random.Random], str]:
    def mutate(text: str, rng: random.Random) -> str:
        return text + suffix

    return mutate


def constant(value: str) -> Callable[[str, random.Random], str]:
    """Build a mutator that ignores its input and always returns ``value``."""

    def mutate(text: str, rng: random.Random) -> str:
        return value

    return mutate


def uppercase(text: str, rng: random.Random) -> str:
    return text.upper()


def truncate_half(text: str, rng: random.Random) -> str:
    return text[: len(text) // 2]


def reverse(text: str, rng: random.Random) -> str:
    return text[::-1]


def pad_whitespace(text: str, rng: random.Random) -> str:
    return "   " + text.strip() + "   "


STATIC_MUTATORS: list[tuple[str, Callable[[str, random.Random], str], bool]] = [
    ("replace_html_tag", replacing("<html", "a"), True),
    ("remove_html_tag", replacing("<html", ""), True),
    ("remove_attribute_value", replacing("value", ""), False),
    ("remove_attribute", replacing('a="value"', ""), False),
    ("append_body_tag", appending("<body></body>"), False),
    ("remove_content", replacing("...", ""), False),
    ("invalid_tag_name", replacing("<html", "<invalid"), False),
    ("uppercase", uppercase, False),
    ("swap_attribute", replacing('a="value"', 'b="other"'), False),
    ("truncate_half", truncate_half, False),
    ("strip_closing_brackets", replacing(">", " "), False),
    ("empty_input", constant(""), False),
    ("whitespace_input", constant(" "), False),
    ("reverse", reverse, False),
    ("pad_whitespace", pad_whitespace, False),
    ("double_open_brackets", replacing("<", "<<"), False),
]
