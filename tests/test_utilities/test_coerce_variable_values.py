# -*- coding: utf-8 -*-

import pytest

from gqlkit.exc import VariablesCoercionError
from gqlkit.lang import parse
from gqlkit.schema import (
    Argument,
    EnumType,
    Field,
    InputField,
    InputObjectType,
    Int,
    NonNullType,
    ObjectType,
    Schema,
    String,
)
from gqlkit.utilities import coerce_variable_values

Color = EnumType("Color", ["RED", "GREEN", "BLUE"])

TestInput = InputObjectType(
    "TestInput",
    [InputField("a", String), InputField("b", NonNullType(Int))],
)

schema = Schema(
    ObjectType(
        "Query",
        [
            Field(
                "field",
                String,
                [Argument("input", TestInput), Argument("color", Color)],
            )
        ],
    )
)


def _operation(source):
    return parse(source).definitions[0]


def _errors(source, variables, **kwargs):
    with pytest.raises(VariablesCoercionError) as exc_info:
        coerce_variable_values(schema, _operation(source), variables, **kwargs)
    return [str(err) for err in exc_info.value.errors]


def test_coerces_provided_values():
    operation = _operation(
        "query ($a: Int, $b: [String], $c: TestInput, $d: Color) { field }"
    )
    assert coerce_variable_values(
        schema,
        operation,
        {"a": 1, "b": "foo", "c": {"b": 2}, "d": "GREEN", "extra": True},
    ) == {"a": 1, "b": ["foo"], "c": {"b": 2}, "d": "GREEN"}


def test_uses_default_values():
    operation = _operation(
        'query ($a: Int = 42, $b: String = "foo", $c: TestInput = {b: 1}) '
        "{ field }"
    )
    assert coerce_variable_values(schema, operation, {"b": "bar"}) == {
        "a": 42,
        "b": "bar",
        "c": {"b": 1},
    }


def test_omits_missing_nullable_variables_without_default():
    operation = _operation("query ($a: Int) { field }")
    assert coerce_variable_values(schema, operation, {}) == {}


def test_explicit_null_is_kept():
    operation = _operation("query ($a: Int = 42) { field }")
    assert coerce_variable_values(schema, operation, {"a": None}) == {
        "a": None
    }


def test_missing_required_variable():
    assert _errors("query ($a: [Int!]!) { field }", {}) == [
        'Variable "$a" of required type "[Int!]!" was not provided.'
    ]


def test_null_for_non_null_variable():
    assert _errors("query ($a: Int!) { field }", {"a": None}) == [
        'Variable "$a" of non-null type "Int!" must not be null.'
    ]


def test_invalid_value():
    assert _errors("query ($a: [Int]) { field }", {"a": [1, "a"]}) == [
        'Variable "$a" got invalid value [1, "a"] '
        "(Int cannot represent non-integer value: 'a' at [1])"
    ]


def test_multiple_invalid_entries_are_reported_separately():
    assert _errors(
        "query ($c: TestInput) { field }", {"c": {"a": 1, "d": 2}}
    ) == [
        'Variable "$c" got invalid value {"a": 1, "d": 2} '
        "(String cannot represent a non string value: 1 at a)",
        'Variable "$c" got invalid value {"a": 1, "d": 2} '
        "(Field b of required type Int! was not provided at b)",
        'Variable "$c" got invalid value {"a": 1, "d": 2} '
        "(Field d is not defined by type TestInput)",
    ]


def test_unknown_type():
    assert _errors("query ($a: Foo) { field }", {"a": 1}) == [
        'Unknown type "Foo" for variable "$a"'
    ]


def test_non_input_type():
    assert _errors("query ($a: Query) { field }", {"a": 1}) == [
        'Variable "$a" expected value of type "Query" which cannot be used '
        "as an input type."
    ]


def test_errors_are_collected_across_variables():
    with pytest.raises(VariablesCoercionError) as exc_info:
        coerce_variable_values(
            schema,
            _operation("query ($a: Int!, $b: Color) { field }"),
            {"b": "PURPLE"},
        )

    assert str(exc_info.value) == (
        'Variable "$a" of required type "Int!" was not provided.,\n'
        'Variable "$b" got invalid value "PURPLE" '
        "(Invalid name PURPLE for enum Color)"
    )
    assert exc_info.value.errors[0].locations == [{"line": 1, "column": 8}]


def test_stops_after_max_errors():
    assert _errors(
        "query ($a: Int!, $b: Int!, $c: Int!) { field }", {}, max_errors=2
    ) == [
        'Variable "$a" of required type "Int!" was not provided.',
        'Variable "$b" of required type "Int!" was not provided.',
        "Too many errors processing variables, error limit reached. "
        "Execution aborted.",
    ]
