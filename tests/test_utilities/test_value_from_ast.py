# -*- coding: utf-8 -*-

import pytest

from gqlkit.exc import InvalidValue
from gqlkit.lang import parse_value
from gqlkit.schema import (
    ID,
    Boolean,
    EnumType,
    EnumValue,
    Float,
    InputField,
    InputObjectType,
    Int,
    ListType,
    NonNullType,
    String,
)
from gqlkit.utilities import value_from_ast

Color = EnumType(
    "Color", [EnumValue("RED", 0), EnumValue("GREEN", 1), EnumValue("BLUE", 2)]
)

TestInput = InputObjectType(
    "TestInput",
    [
        InputField("int", Int, default_value=42),
        InputField("bool", Boolean),
        InputField("requiredBool", NonNullType(Boolean)),
    ],
)

VARIABLES = {"int": 1, "float": 2.5, "string": "foo", "null": None}


def _test(source, type_, expected):
    assert value_from_ast(parse_value(source), type_, VARIABLES) == expected


def _error(source, type_):
    with pytest.raises(InvalidValue) as exc_info:
        value_from_ast(parse_value(source), type_, VARIABLES)
    return str(exc_info.value)


@pytest.mark.parametrize(
    "source, type_, expected",
    [
        ("true", Boolean, True),
        ("false", Boolean, False),
        ("123", Int, 123),
        ("123", Float, 123.0),
        ("45.6", Float, 45.6),
        ('"abc123"', String, "abc123"),
        ('"123456"', ID, "123456"),
        ("123456", ID, "123456"),
        ("null", Int, None),
        ("RED", Color, 0),
        ("BLUE", Color, 2),
        ("$int", Int, 1),
        ("$string", String, "foo"),
        ("$null", Int, None),
    ],
)
def test_leaf_values(source, type_, expected):
    _test(source, type_, expected)


@pytest.mark.parametrize(
    "source, type_, message",
    [
        ("123", Boolean, "Invalid literal Int"),
        ("123.456", Int, "Invalid literal Float"),
        ('"abc"', Int, "Invalid literal String"),
        (
            "2147483648",
            Int,
            "Int cannot represent non 32-bit signed integer: 2147483648",
        ),
        ("45.6", ID, "Invalid literal Float"),
        ('"RED"', Color, "Enum Color cannot represent non enum value"),
        ("PURPLE", Color, "Invalid name PURPLE for enum Color"),
    ],
)
def test_invalid_leaf_values(source, type_, message):
    assert _error(source, type_) == message


def test_non_null_rejects_null():
    assert _error("null", NonNullType(Boolean)) == (
        "Expected non-null value of type Boolean!"
    )


def test_non_null_accepts_values():
    _test("true", NonNullType(Boolean), True)


def test_undefined_variable():
    assert _error("$missing", Int) == 'Variable "$missing" is not defined'


def test_null_variable_in_non_null_position():
    assert _error("$null", NonNullType(Int)) == (
        'Variable "$null" of non-null type "Int!" must not be null'
    )


def test_variables_are_not_coerced_again():
    # Variable values are assumed to have been coerced beforehand.
    _test("$string", Int, "foo")


def test_lists():
    _test("[RED, GREEN]", ListType(Color), [0, 1])
    _test("[RED, null, GREEN]", ListType(Color), [0, None, 1])
    _test("[$int, $missing]", ListType(Int), [1, None])


def test_single_values_are_wrapped_in_lists():
    _test("GREEN", ListType(Color), [1])
    _test("$int", ListType(Int), 1)


def test_invalid_list_item():
    assert _error("[RED, 42]", ListType(Color)) == (
        "Enum Color cannot represent non enum value"
    )


def test_non_null_list_items():
    assert _error("[true, null]", ListType(NonNullType(Boolean))) == (
        "Expected non-null value of type Boolean!"
    )


def test_input_objects():
    _test(
        "{ int: 123, requiredBool: false }",
        TestInput,
        {"int": 123, "requiredBool": False},
    )
    _test(
        "{ bool: true, requiredBool: false }",
        TestInput,
        {"int": 42, "bool": True, "requiredBool": False},
    )


def test_input_object_fields_from_variables():
    _test(
        "{ int: $missing, bool: $null, requiredBool: true }",
        TestInput,
        {"int": 42, "bool": None, "requiredBool": True},
    )


def test_input_object_requires_object_value():
    assert _error("123", TestInput) == "Expected object value of type TestInput"


def test_input_object_unknown_field():
    assert _error("{ requiredBool: true, qux: 1 }", TestInput) == (
        'Field "qux" is not defined by type TestInput'
    )


def test_input_object_missing_required_field():
    assert _error("{ int: 1 }", TestInput) == (
        "Field requiredBool of required type Boolean! was not provided"
    )


def test_input_object_required_field_from_missing_variable():
    assert _error("{ requiredBool: $missing }", TestInput) == (
        "Field requiredBool of required type Boolean! was not provided"
    )


def test_error_nodes():
    node = parse_value("[1, \"a\"]")
    with pytest.raises(InvalidValue) as exc_info:
        value_from_ast(node, ListType(Int))
    assert exc_info.value.nodes == [node.values[1]]
