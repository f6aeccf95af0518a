"""Tests for the mutation engine."""

from __future__ import annotations

import random

import pytest

from seedfuzz.core.engine import build_mutator_set, derive_inputs
from seedfuzz.core.exceptions import RegistryError
from seedfuzz.core.registry import ComponentRegistry
from seedfuzz.protocols import NamedMutator

from _helpers import SEED, tagging


def test_derive_inputs_applies_each_mutator_to_seed(rng: random.Random) -> None:
    mutators = [tagging("1"), tagging("2"), tagging("3")]
    inputs = derive_inputs("s", mutators, rng)
    assert [i.value for i in inputs] == ["s1", "s2", "s3"]
    assert [i.mutator for i in inputs] == ["tag_1", "tag_2", "tag_3"]
    assert [i.position for i in inputs] == [1, 2, 3]


def test_derive_inputs_keeps_duplicates(rng: random.Random) -> None:
    same = tagging("x")
    inputs = derive_inputs("s", [same, same, same], rng)
    assert [i.value for i in inputs] == ["sx", "sx", "sx"]


def test_derive_inputs_empty(rng: random.Random) -> None:
    assert derive_inputs(SEED, [], rng) == []


def test_derive_inputs_propagates_mutator_error(rng: random.Random) -> None:
    def boom(text: str, rng: random.Random) -> str:
        raise ValueError("mutator failed")

    with pytest.raises(ValueError, match="mutator failed"):
        derive_inputs(SEED, [tagging("a"), NamedMutator("boom", boom)], rng)


def test_derive_inputs_passes_rng(rng: random.Random) -> None:
    seen = []

    def record(text: str, r: random.Random) -> str:
        seen.append(r)
        return text

    derive_inputs(SEED, [NamedMutator("record", record)], rng)
    assert seen == [rng]


def test_build_mutator_set_repeats_template(registry: ComponentRegistry) -> None:
    names = ["randomize_case", "insert_random_character"]
    mutators = build_mutator_set(registry, names, repeat_count=3)
    assert [m.name for m in mutators] == names * 3


def test_build_mutator_set_zero_repeat_is_empty(registry: ComponentRegistry) -> None:
    assert build_mutator_set(registry, registry.default_mutators("dynamic"), repeat_count=0) == []


def test_build_mutator_set_negative_repeat_raises(registry: ComponentRegistry) -> None:
    with pytest.raises(ValueError, match="repeat_count"):
        build_mutator_set(registry, ["randomize_case"], repeat_count=-1)


def test_build_mutator_set_unknown_name_raises(registry: ComponentRegistry) -> None:
    with pytest.raises(RegistryError, match="Unknown mutator"):
        build_mutator_set(registry, ["no_such_mutator"])


def test_build_mutator_set_rejects_other_kind(registry: ComponentRegistry) -> None:
    with pytest.raises(RegistryError, match="not a dynamic mutator"):
        build_mutator_set(registry, ["randomize_case", "replace_html_tag"], kind="dynamic")
    assert len(build_mutator_set(registry, ["replace_html_tag"], kind="static")) == 1


def test_build_mutator_set_rejects_bad_options(registry: ComponentRegistry) -> None:
    with pytest.raises(RegistryError, match="Invalid options for mutator randomize_case"):
        build_mutator_set(registry, ["randomize_case"], options={"randomize_case": {"attribute_name": "b"}})


def test_build_mutator_set_binds_options(registry: ComponentRegistry, rng: random.Random) -> None:
    mutators = build_mutator_set(
        registry,
        ["change_attribute_value_length"],
        options={"change_attribute_value_length": {"attribute_name": "b"}},
    )
    text = '<p a="keep" b="old">'
    out = mutators[0](text, rng)
    assert out.startswith('<p a="keep" b="')
    assert 'b="old"' not in out


def test_static_set_derives_expected_inputs(registry: ComponentRegistry, rng: random.Random) -> None:
    mutators = build_mutator_set(registry, registry.default_mutators("static"))
    inputs = derive_inputs(SEED, mutators, rng)
    assert [i.value for i in inputs] == ['a a="value">...</html>', ' a="value">...</html>']
