# -*- coding: utf-8 -*-

import pytest

from gqlkit.exc import CoercionError, MultiCoercionError
from gqlkit.schema import (
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
from gqlkit.utilities import coerce_value

Color = EnumType(
    "Color", [EnumValue("RED", 0), EnumValue("GREEN", 1), EnumValue("BLUE", 2)]
)

TestInput = InputObjectType(
    "TestInput",
    [
        InputField("foo", NonNullType(Int)),
        InputField("bar", ListType(String)),
        InputField("baz", Int, default_value=42),
    ],
)


def _test(value, type_, expected_result, expected_error=None):
    if expected_error is not None:
        with pytest.raises(CoercionError) as exc_info:
            coerce_value(value, type_)
        assert str(exc_info.value) == expected_error
    else:
        assert coerce_value(value, type_) == expected_result


@pytest.mark.parametrize(
    "value, type_, expected",
    [
        (1, Int, 1),
        (-1, Int, -1),
        (1e3, Int, 1000),
        (None, Int, None),
        (1, Float, 1.0),
        (1.5, Float, 1.5),
        ("foo", String, "foo"),
        ("RED", Color, 0),
        ("BLUE", Color, 2),
    ],
)
def test_coerces_leaf_values(value, type_, expected):
    _test(value, type_, expected)


@pytest.mark.parametrize(
    "value, type_, expected_error",
    [
        ("1", Int, "Int cannot represent non-integer value: '1'"),
        (1.5, Int, "Int cannot represent non-integer value: 1.5"),
        (True, Int, "Int cannot represent non-integer value: True"),
        (
            2 ** 32,
            Int,
            "Int cannot represent non 32-bit signed integer: 4294967296",
        ),
        ("1.5", Float, "Float cannot represent non numeric value: '1.5'"),
        (1, String, "String cannot represent a non string value: 1"),
        ("PURPLE", Color, "Invalid name PURPLE for enum Color"),
        (0, Color, "Invalid value 0 for enum Color"),
    ],
)
def test_rejects_invalid_leaf_values(value, type_, expected_error):
    _test(value, type_, None, expected_error)


def test_non_null_rejects_null():
    _test(
        None,
        NonNullType(Int),
        None,
        "Expected non-nullable type Int! not to be null",
    )


def test_list_of_values():
    _test([1, 2, 3], ListType(Int), [1, 2, 3])


def test_single_value_is_wrapped_in_list():
    _test(42, ListType(Int), [42])


def test_list_errors_are_collected():
    with pytest.raises(MultiCoercionError) as exc_info:
        coerce_value([1, "b", None], ListType(NonNullType(Int)))

    assert [str(e) for e in exc_info.value.errors] == [
        "Int cannot represent non-integer value: 'b' at [1]",
        "Expected non-nullable type Int! not to be null at [2]",
    ]
    assert str(exc_info.value) == (
        "Int cannot represent non-integer value: 'b' at [1],\n"
        "Expected non-nullable type Int! not to be null at [2]"
    )


def test_single_list_error_is_not_wrapped():
    with pytest.raises(CoercionError) as exc_info:
        coerce_value([1, "b"], ListType(Int))
    assert not isinstance(exc_info.value, MultiCoercionError)
    assert exc_info.value.value_path == [1]


def test_input_object():
    _test({"foo": 1}, TestInput, {"foo": 1, "baz": 42})
    _test(
        {"foo": 1, "bar": "a", "baz": None},
        TestInput,
        {"foo": 1, "bar": ["a"], "baz": None},
    )


def test_input_object_rejects_non_objects():
    _test("foo", TestInput, None, "Expected type TestInput to be an object")


def test_input_object_missing_required_field():
    _test(
        {"bar": ["a"]},
        TestInput,
        None,
        "Field foo of required type Int! was not provided at foo",
    )


def test_input_object_collects_errors():
    with pytest.raises(MultiCoercionError) as exc_info:
        coerce_value({"foo": "abc", "bar": [1], "extra": 1}, TestInput)

    assert [str(e) for e in exc_info.value.errors] == [
        "Int cannot represent non-integer value: 'abc' at foo",
        "String cannot represent a non string value: 1 at bar[0]",
        "Field extra is not defined by type TestInput",
    ]


def test_nested_value_path():
    Outer = InputObjectType("Outer", [InputField("items", ListType(TestInput))])
    with pytest.raises(CoercionError) as exc_info:
        coerce_value({"items": [{"foo": 1}, {"foo": None}]}, Outer)
    assert str(exc_info.value) == (
        "Expected non-nullable type Int! not to be null at items[1].foo"
    )
