# -*- coding: utf-8 -*-
""" Built-in scalar types. """

import math
from typing import Any, Callable, Mapping, Optional, Tuple, Type, TypeVar

from ..lang import ast as _ast
from .types import ScalarType

T = TypeVar("T")

MAX_INT = 2147483647
MIN_INT = -2147483648


def _literal(
    parse: Callable[[Any], T], *node_types: Type[_ast.Value]
) -> Callable[[_ast.Value, Mapping[str, Any]], T]:
    # Wrap a parse function in a literal parser accepting some node types.
    def parse_literal(node: _ast.Value, _variables: Mapping[str, Any]) -> T:
        if not isinstance(node, node_types):
            raise TypeError(
                "Invalid literal %s" % node.__class__.__name__.replace("Value", "")
            )
        return parse(node.value)  # type: ignore

    return parse_literal


def _check_int(value: int, raw: Any) -> int:
    if not MIN_INT <= value <= MAX_INT:
        raise ValueError("Int cannot represent non 32-bit signed integer: %s" % raw)
    return value


def serialize_int(value: Any) -> int:
    """
    >>> serialize_int(True), serialize_int(4.0), serialize_int("12")
    (1, 4, 12)
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _check_int(value, value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("Int cannot represent non-integer value: %s" % value)
        return _check_int(int(value), value)
    if isinstance(value, str) and value:
        try:
            number = float(value)
        except ValueError:
            pass
        else:
            if number.is_integer():
                return _check_int(int(number), value)
    raise ValueError("Int cannot represent non-integer value: %r" % (value,))


def parse_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Int cannot represent non-integer value: %r" % (value,))
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("Int cannot represent non-integer value: %r" % (value,))
    return _check_int(int(value), value)


def serialize_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        number = float(value)
    elif isinstance(value, str) and value:
        try:
            number = float(value)
        except ValueError:
            raise ValueError("Float cannot represent non numeric value: %r" % value)
    else:
        raise ValueError("Float cannot represent non numeric value: %r" % (value,))
    if not math.isfinite(number):
        raise ValueError("Float cannot represent non numeric value: %r" % (value,))
    return number


def parse_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Float cannot represent non numeric value: %r" % (value,))
    if not math.isfinite(value):
        raise ValueError("Float cannot represent non numeric value: %r" % (value,))
    return float(value)


def serialize_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError("String cannot represent value: %r" % (value,))


def parse_string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("String cannot represent a non string value: %r" % (value,))
    return value


def serialize_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value != 0
    raise ValueError("Boolean cannot represent a non boolean value: %r" % (value,))


def parse_boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError("Boolean cannot represent a non boolean value: %r" % (value,))
    return value


def serialize_id(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError("ID cannot represent value: %r" % (value,))
    return str(value)


def parse_id(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError("ID cannot represent value: %r" % (value,))
    return str(value)


Int = ScalarType(
    "Int",
    serialize=serialize_int,
    parse=parse_int,
    parse_literal=_literal(lambda raw: _check_int(int(raw), raw), _ast.IntValue),
    description=(
        "The `Int` scalar type represents non-fractional signed whole numeric "
        "values. Int can represent values between -(2^31) and 2^31 - 1."
    ),
)

Float = ScalarType(
    "Float",
    serialize=serialize_float,
    parse=parse_float,
    parse_literal=_literal(float, _ast.IntValue, _ast.FloatValue),
    description=(
        "The `Float` scalar type represents signed double-precision "
        "fractional values as specified by IEEE 754."
    ),
)

String = ScalarType(
    "String",
    serialize=serialize_string,
    parse=parse_string,
    parse_literal=_literal(str, _ast.StringValue),
    description=(
        "The `String` scalar type represents textual data, represented as "
        "UTF-8 character sequences."
    ),
)

Boolean = ScalarType(
    "Boolean",
    serialize=serialize_boolean,
    parse=parse_boolean,
    parse_literal=_literal(bool, _ast.BooleanValue),
    description="The `Boolean` scalar type represents `true` or `false`.",
)

ID = ScalarType(
    "ID",
    serialize=serialize_id,
    parse=parse_id,
    parse_literal=_literal(str, _ast.StringValue, _ast.IntValue),
    description=(
        "The `ID` scalar type represents a unique identifier. It is "
        "serialized as a String but accepts both string and integer inputs."
    ),
)

SPECIFIED_SCALAR_TYPES = (Int, Float, String, Boolean, ID)  # type: Tuple[ScalarType, ...]


def _identity(value: T) -> T:
    return value


def default_scalar(
    name: str, description: Optional[str] = None, nodes: Any = None
) -> ScalarType:
    """
    Pass-through scalar used for custom scalars declared in SDL without an
    implementation.
    """
    return ScalarType(
        name,
        serialize=_identity,
        parse=_identity,
        parse_literal=_untyped_literal,
        description=description,
        nodes=nodes,
    )


def _untyped_literal(node: _ast.Value, variables: Mapping[str, Any]) -> Any:
    if isinstance(node, _ast.IntValue):
        return int(node.value)
    elif isinstance(node, _ast.FloatValue):
        return float(node.value)
    elif isinstance(node, (_ast.StringValue, _ast.BooleanValue, _ast.EnumValue)):
        return node.value
    elif isinstance(node, _ast.NullValue):
        return None
    elif isinstance(node, _ast.ListValue):
        return [_untyped_literal(v, variables) for v in node.values]
    elif isinstance(node, _ast.ObjectValue):
        return {
            f.name.value: _untyped_literal(f.value, variables) for f in node.fields
        }
    elif isinstance(node, _ast.Variable):
        return variables.get(node.name.value)
    raise TypeError("Invalid literal %s" % node.__class__.__name__)
