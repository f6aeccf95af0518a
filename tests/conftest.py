"""Shared pytest fixtures for SeedFuzz tests.

Factory functions live in ``_helpers.py``; this module re-exports them as
pytest fixtures so tests can receive them via dependency injection.
"""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from seedfuzz.core.registry import ComponentRegistry

from _helpers import (  # noqa: F401
    make_registry,
    make_rng,
    make_target,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def registry() -> ComponentRegistry:
    """A registry with the built-in mutators and reporters."""
    return make_registry()


@pytest.fixture()
def rng() -> random.Random:
    """A fixed-seed generator so random mutators are reproducible within a test."""
    return make_rng()


@pytest.fixture()
def echo_target(tmp_path: Path) -> Path:
    """A target that copies stdin to stdout and exits 0."""
    return make_target(tmp_path, "echo_target.sh", "cat")


@pytest.fixture()
def failing_target(tmp_path: Path) -> Path:
    """A target that drains stdin, prints a message on stderr and exits 2."""
    return make_target(tmp_path, "failing_target.sh", "cat >/dev/null\necho 'parse error' >&2\nexit 2")
