# -*- coding: utf-8 -*-

from typing import Any, Dict, Mapping, Optional

from ..exc import InvalidValue
from ..lang import ast as _ast
from ..schema.types import (
    EnumType,
    GraphQLType,
    InputObjectType,
    ListType,
    NonNullType,
    ScalarType,
)


def _missing_variable(node: _ast.Value, variables: Mapping[str, Any]) -> bool:
    return isinstance(node, _ast.Variable) and node.name.value not in variables


def value_from_ast(
    node: _ast.Value,
    type_: GraphQLType,
    variables: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Convert a value node to a Python value according to an input type.

    Variables are assumed to have been coerced already and are returned as
    is.

    Args:
        node: Value node
        type_: Expected input type
        variables: Coerced variable values

    Raises:
        :class:`~gqlkit.exc.InvalidValue`: if the node is not a valid value
            for ``type_`` or refers to an undefined variable.
    """
    variables = variables or {}

    if isinstance(node, _ast.Variable):
        name = node.name.value
        if name not in variables:
            raise InvalidValue('Variable "$%s" is not defined' % name, [node])
        value = variables[name]
        if value is None and isinstance(type_, NonNullType):
            raise InvalidValue(
                'Variable "$%s" of non-null type "%s" must not be null'
                % (name, type_),
                [node],
            )
        return value

    if isinstance(type_, NonNullType):
        if isinstance(node, _ast.NullValue):
            raise InvalidValue("Expected non-null value of type %s" % type_, [node])
        return value_from_ast(node, type_.type, variables)

    if isinstance(node, _ast.NullValue):
        return None

    if isinstance(type_, ListType):
        if isinstance(node, _ast.ListValue):
            return [
                None
                if _missing_variable(item, variables)
                else value_from_ast(item, type_.type, variables)
                for item in node.values
            ]
        # Single values are coerced to lists of one entry.
        return [value_from_ast(node, type_.type, variables)]

    if isinstance(type_, InputObjectType):
        if not isinstance(node, _ast.ObjectValue):
            raise InvalidValue("Expected object value of type %s" % type_, [node])
        return _input_object_from_ast(node, type_, variables)

    if isinstance(type_, (ScalarType, EnumType)):
        return type_.parse_literal(node, variables)

    raise TypeError("Invalid input type %s" % type_)


def _input_object_from_ast(
    node: _ast.ObjectValue,
    type_: InputObjectType,
    variables: Mapping[str, Any],
) -> Dict[str, Any]:
    fields = {f.name.value: f for f in node.fields}
    for name in fields:
        if name not in type_.field_map:
            raise InvalidValue(
                'Field "%s" is not defined by type %s' % (name, type_), [node]
            )

    coerced = {}
    for field in type_.fields:
        field_node = fields.get(field.name)
        if field_node is None or _missing_variable(field_node.value, variables):
            if field.has_default_value:
                coerced[field.name] = field.default_value
            elif isinstance(field.type, NonNullType):
                raise InvalidValue(
                    "Field %s of required type %s was not provided"
                    % (field.name, field.type),
                    [node],
                )
            continue
        coerced[field.name] = value_from_ast(field_node.value, field.type, variables)
    return coerced
