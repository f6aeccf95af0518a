"""Payload-style static mutators for markup parsers.

Register as static mutators, disabled by default; enable them by name
under ``mutators.static`` in the config or with ``--static``.
"""

from __future__ import annotations

import random

from seedfuzz.core.registry import ComponentRegistry

XSS_PAYLOAD = " & <script>alert('XSS')</script>"
DOCTYPE = "<!DOCTYPE html>"


def append_xss_payload(text: str, rng: random.Random) -> str:
    return text + XSS_PAYLOAD


def prepend_doctype(text: str, rng: random.Random) -> str:
    return DOCTYPE + text


def escape_angle_brackets(text: str, rng: random.Random) -> str:
    """Replace ``<``/``>`` with their HTML entities."""
    return text.replace(">", "&gt;").replace("<", "&lt;")


def register(registry: ComponentRegistry) -> None:
    """Register the payload mutators."""
    registry.register_mutator("append_xss_payload", append_xss_payload, kind="static", enabled=False)
    registry.register_mutator("prepend_doctype", prepend_doctype, kind="static", enabled=False)
    registry.register_mutator("escape_angle_brackets", escape_angle_brackets, kind="static", enabled=False)
