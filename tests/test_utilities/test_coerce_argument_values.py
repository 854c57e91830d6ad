# -*- coding: utf-8 -*-

import pytest

from gqlkit.exc import CoercionError
from gqlkit.lang import parse
from gqlkit.schema import (
    Argument,
    Field,
    IncludeDirective,
    Int,
    NonNullType,
    SkipDirective,
    String,
)
from gqlkit.utilities import coerce_argument_values, directive_arguments

field_def = Field(
    "field",
    String,
    [
        Argument("required", NonNullType(Int)),
        Argument("optional", String),
        Argument("withDefault", Int, default_value=42),
    ],
)


def _field_node(source):
    return parse(source).definitions[0].selection_set.selections[0]


def test_coerces_literals():
    node = _field_node('{ field(required: 1, optional: "foo", withDefault: 2) }')
    assert coerce_argument_values(field_def, node) == {
        "required": 1,
        "optional": "foo",
        "withDefault": 2,
    }


def test_defaults_and_missing_optional_arguments():
    node = _field_node("{ field(required: 1) }")
    assert coerce_argument_values(field_def, node) == {
        "required": 1,
        "withDefault": 42,
    }


def test_explicit_null():
    node = _field_node("{ field(required: 1, withDefault: null) }")
    assert coerce_argument_values(field_def, node) == {
        "required": 1,
        "withDefault": None,
    }


def test_variables():
    node = _field_node("{ field(required: $a, optional: $b, withDefault: $c) }")
    assert coerce_argument_values(field_def, node, {"a": 3, "b": None}) == {
        "required": 3,
        "optional": None,
        "withDefault": 42,
    }


def test_missing_required_argument():
    node = _field_node("{ field }")
    with pytest.raises(CoercionError) as exc_info:
        coerce_argument_values(field_def, node)
    assert str(exc_info.value) == (
        'Argument "required" of required type "Int!" was not provided'
    )
    assert exc_info.value.nodes == [node]


def test_required_argument_from_missing_variable():
    node = _field_node("{ field(required: $a) }")
    with pytest.raises(CoercionError) as exc_info:
        coerce_argument_values(field_def, node, {})
    assert str(exc_info.value) == (
        'Argument "required" of required type "Int!" was provided the '
        'missing variable "$a"'
    )


def test_invalid_literal():
    node = _field_node('{ field(required: "1") }')
    with pytest.raises(CoercionError) as exc_info:
        coerce_argument_values(field_def, node)
    assert str(exc_info.value) == (
        'Argument "required" of type "Int!" was provided invalid value "1" '
        "(Invalid literal String)"
    )


def test_directive_arguments():
    node = _field_node("{ field @include(if: true) @skip(if: $skip) }")
    assert directive_arguments(IncludeDirective, node) == {"if": True}
    assert directive_arguments(SkipDirective, node, {"skip": False}) == {
        "if": False
    }


def test_directive_arguments_when_directive_is_absent():
    node = _field_node("{ field @include(if: true) }")
    assert directive_arguments(SkipDirective, node) is None
