"""Dynamic mutators: randomized transformations of markup-like input.

Every function takes the generator it draws from, so a campaign seeded
with a fixed ``rng_seed`` reproduces the same mutations.
"""

from __future__ import annotations

import random
import re
import string

_TAG_RE = re.compile(r"<\w+")
_CONTENT_RE = re.compile(r">(.*?)<", re.DOTALL)
_HAS_CONTENT_RE = re.compile(r".*>.*<.*", re.DOTALL)

# Replacement pool for replace_random_tag; the last six are malformed on purpose.
TAG_POOL = (
    "div", "header", "footer",
    "xyz123", "di v", "<div>>",
    "<html", "html>", "<", ">",
)


def random_letters(rng: random.Random, min_len: int, max_len: int) -> str:
    """Return a lowercase ASCII string with length uniform in [min_len, max_len]."""
    length = rng.randint(min_len, max_len)
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(length))


def insert_random_character(text: str, rng: random.Random) -> str:
    """Insert one random lowercase letter at a random position."""
    if not text:
        return text
    position = rng.randint(0, len(text))
    return text[:position] + rng.choice(string.ascii_lowercase) + text[position:]


def remove_random_substring(text: str, rng: random.Random) -> str:
    """Delete a random span starting in the first half of the input."""
    if len(text) < 2:
        return text
    start = rng.randrange(len(text) // 2)
    end = start + rng.randrange(len(text) - start)
    return text[:start] + text[end:]


def replace_random_tag(text: str, rng: random.Random) -> str:
    """Replace the first opening-tag token with a random name or a pooled (possibly malformed) tag."""
    if rng.random() < 0.5:
        replacement = "<" + random_letters(rng, 1, 20)
    else:
        replacement = "<" + rng.choice(TAG_POOL)
    return _TAG_RE.sub(lambda _m: replacement, text, count=1)


def randomize_case(text: str, rng: random.Random) -> str:
    """Independently upper- or lower-case every letter; other characters pass through."""
    return "".join(_random_case(c, rng) if c.isalpha() else c for c in text)


def _random_case(char: str, rng: random.Random) -> str:
    cased = char.upper() if rng.random() < 0.5 else char.lower()
    # Some letters expand when case-mapped ("ß" -> "SS"); keep those as-is.
    return cased if len(cased) == 1 else char


def change_attribute_value_length(text: str, rng: random.Random, attribute_name: str = "a") -> str:
    """Replace the first quoted value of ``attribute_name`` with 1-20 random letters."""
    if f'{attribute_name}="' not in text:
        return text
    value = random_letters(rng, 1, 20)
    pattern = re.compile(re.escape(attribute_name) + r'="[^"]*"')
    return pattern.sub(lambda _m: f'{attribute_name}="{value}"', text, count=1)


def replace_content_between_tags(text: str, rng: random.Random) -> str:
    """Replace the content between the first ``>`` and the next ``<`` with 1-100 random letters."""
    if not _HAS_CONTENT_RE.fullmatch(text):
        return text
    content = random_letters(rng, 1, 100)
    return _CONTENT_RE.sub(lambda _m: f">{content}<", text, count=1)


# Template of kinds repeated ``repeat_count`` times to build the dynamic set.
DYNAMIC_MUTATORS = [
    ("insert_random_character", insert_random_character),
    ("remove_random_substring", remove_random_substring),
    ("replace_random_tag", replace_random_tag),
    ("randomize_case", randomize_case),
    ("change_attribute_value_length", change_attribute_value_length),
    ("replace_content_between_tags", replace_content_between_tags),
]
