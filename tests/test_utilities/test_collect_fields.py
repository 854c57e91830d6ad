# -*- coding: utf-8 -*-

import pytest

from gqlkit.exc import CoercionError
from gqlkit.lang import parse
from gqlkit.sdl import build_schema
from gqlkit.utilities import collect_fields, fragment_applies, should_include

SCHEMA = build_schema(
    """
    interface Pet { name: String }
    type Dog implements Pet { name: String, barks: Boolean }
    type Cat implements Pet { name: String, meows: Boolean }
    union CatOrDog = Cat | Dog
    type Query { pet: Pet, catOrDog: CatOrDog }
    """
)

DOG = SCHEMA.get_type("Dog")


def _collect(source, variables=None, type_name="Dog"):
    document = parse(source)
    operation = document.definitions[0]
    fragments = {d.name.value: d for d in document.definitions[1:]}
    grouped = collect_fields(
        SCHEMA,
        SCHEMA.get_type(type_name),
        operation.selection_set.selections,
        fragments,
        variables or {},
    )
    return {key: len(nodes) for key, nodes in grouped.items()}


def test_groups_fields_by_response_name():
    assert _collect("{ name barks alias: name name }") == {
        "name": 2,
        "barks": 1,
        "alias": 1,
    }


def test_preserves_first_occurrence_order():
    grouped = _collect("{ barks name barks }")
    assert list(grouped) == ["barks", "name"]


def test_inlines_applicable_fragments():
    source = """
    {
        ... on Dog { barks }
        ... on Cat { meows }
        ... on Pet { name }
        ... { other: name }
        ...DogFields
        ...CatFields
    }
    fragment DogFields on CatOrDog { dogName: name }
    fragment CatFields on Cat { catName: name }
    """
    assert _collect(source) == {
        "barks": 1,
        "name": 1,
        "other": 1,
        "dogName": 1,
    }
    assert _collect(source, type_name="Cat") == {
        "meows": 1,
        "name": 1,
        "other": 1,
        "dogName": 1,
        "catName": 1,
    }


def test_fragments_are_only_inlined_once():
    source = """
    { ...Fields ...Fields }
    fragment Fields on Dog { name }
    """
    assert _collect(source) == {"name": 1}


def test_unknown_fragments_are_ignored():
    assert _collect("{ ...Unknown name }") == {"name": 1}


def test_skip_and_include():
    source = """
    query ($skip: Boolean!, $include: Boolean!) {
        a: name @skip(if: true)
        b: name @skip(if: false)
        c: name @include(if: true)
        d: name @include(if: false)
        e: name @skip(if: $skip) @include(if: $include)
        ... on Dog @skip(if: true) { f: name }
        ...Fields @include(if: false)
    }
    fragment Fields on Dog { g: name }
    """
    assert _collect(source, {"skip": False, "include": True}) == {
        "b": 1,
        "c": 1,
        "e": 1,
    }
    assert _collect(source, {"skip": True, "include": True}) == {
        "b": 1,
        "c": 1,
    }


def test_should_include_with_invalid_arguments():
    node = parse("{ a @skip(if: 1) }").definitions[0].selection_set.selections[0]
    with pytest.raises(CoercionError):
        should_include(node, {})


@pytest.mark.parametrize(
    "condition, expected",
    [("Dog", True), ("Cat", False), ("Pet", True), ("CatOrDog", True)],
)
def test_fragment_applies(condition, expected):
    document = parse("{ ... on %s { name } }" % condition)
    fragment = document.definitions[0].selection_set.selections[0]
    assert fragment_applies(SCHEMA, DOG, fragment) is expected
