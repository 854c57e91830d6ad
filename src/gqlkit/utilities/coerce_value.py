# -*- coding: utf-8 -*-
"""
Coercion of runtime values (variables, arguments) against input types.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .._string_utils import PathEntry
from .._utils import find_one
from ..exc import (
    CoercionError,
    InvalidValue,
    MultiCoercionError,
    UnknownType,
    VariableCoercionError,
    VariablesCoercionError,
)
from ..lang import ast as _ast
from ..lang.printer import print_ast
from ..schema import (
    Directive,
    EnumType,
    Field,
    GraphQLType,
    InputObjectType,
    ListType,
    NonNullType,
    ScalarType,
    Schema,
    is_input_type,
)
from .value_from_ast import value_from_ast

MAX_VARIABLE_ERRORS = 50


def _flatten(errors: List[CoercionError], err: CoercionError) -> None:
    if isinstance(err, MultiCoercionError):
        errors.extend(err.errors)
    else:
        errors.append(err)


def _raise_collected(errors: List[CoercionError]) -> None:
    if len(errors) == 1:
        raise errors[0]
    elif errors:
        raise MultiCoercionError(errors)


def coerce_value(
    value: Any,
    type_: GraphQLType,
    node: Optional[_ast.Node] = None,
    path: Optional[Sequence[PathEntry]] = None,
) -> Any:
    """
    Coerce a JSON-like Python value (e.g. decoded variables) to the Python
    value expected for an input type.

    Args:
        value: Value to coerce
        type_: Expected input type
        node: Node the value relates to, used in errors
        path: Position inside the top level value, used in errors

    Raises:
        :class:`~gqlkit.exc.CoercionError`: on the first invalid entry
        :class:`~gqlkit.exc.MultiCoercionError`: when multiple entries of a
            list or input object are invalid
    """
    path = list(path or [])
    nodes = [node] if node is not None else None

    if isinstance(type_, NonNullType):
        if value is None:
            raise CoercionError(
                "Expected non-nullable type %s not to be null" % type_,
                nodes,
                value_path=path,
            )
        return coerce_value(value, type_.type, node, path)

    if value is None:
        return None

    if isinstance(type_, (ScalarType, EnumType)):
        try:
            return type_.parse(value)
        except InvalidValue as err:
            raise CoercionError(err.message, nodes, value_path=path) from err

    if isinstance(type_, ListType):
        if not isinstance(value, (list, tuple)):
            return [coerce_value(value, type_.type, node, path)]

        coerced = []
        errors = []  # type: List[CoercionError]
        for index, entry in enumerate(value):
            try:
                coerced.append(
                    coerce_value(entry, type_.type, node, path + [index])
                )
            except CoercionError as err:
                _flatten(errors, err)
        _raise_collected(errors)
        return coerced

    if isinstance(type_, InputObjectType):
        return _coerce_input_object(value, type_, node, path)

    raise TypeError("Invalid input type %s" % type_)


def _coerce_input_object(
    value: Any,
    type_: InputObjectType,
    node: Optional[_ast.Node],
    path: List[PathEntry],
) -> Dict[str, Any]:
    nodes = [node] if node is not None else None
    if not isinstance(value, Mapping):
        raise CoercionError(
            "Expected type %s to be an object" % type_, nodes, value_path=path
        )

    coerced = {}
    errors = []  # type: List[CoercionError]

    for field in type_.fields:
        if field.name not in value:
            if field.has_default_value:
                coerced[field.name] = field.default_value
            elif isinstance(field.type, NonNullType):
                errors.append(
                    CoercionError(
                        "Field %s of required type %s was not provided"
                        % (field.name, field.type),
                        nodes,
                        value_path=path + [field.name],
                    )
                )
            continue

        try:
            coerced[field.name] = coerce_value(
                value[field.name], field.type, node, path + [field.name]
            )
        except CoercionError as err:
            _flatten(errors, err)

    for key in value:
        if key not in type_.field_map:
            errors.append(
                CoercionError(
                    "Field %s is not defined by type %s" % (key, type_),
                    nodes,
                    value_path=path,
                )
            )

    _raise_collected(errors)
    return coerced


def coerce_argument_values(
    definition: Union[Field, Directive],
    node: Union[_ast.Field, _ast.Directive],
    variables: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Coerced arguments of a field or directive node, keyed by argument name.

    Arguments which are neither provided nor have a default value are left
    out.

    Raises:
        :class:`~gqlkit.exc.CoercionError`: if an argument is invalid or a
            required one is missing.
    """
    variables = variables or {}
    provided = {arg.name.value: arg for arg in node.arguments or []}
    coerced = {}

    for arg_def in definition.arguments:
        name, type_ = arg_def.name, arg_def.type
        arg = provided.get(name)

        missing = arg is None or (
            isinstance(arg.value, _ast.Variable)
            and arg.value.name.value not in variables
        )

        if missing:
            if arg_def.has_default_value:
                coerced[name] = arg_def.default_value
            elif isinstance(type_, NonNullType):
                if arg is None:
                    raise CoercionError(
                        'Argument "%s" of required type "%s" was not provided'
                        % (name, type_),
                        [node],
                    )
                raise CoercionError(
                    'Argument "%s" of required type "%s" was provided the '
                    'missing variable "$%s"'
                    % (name, type_, arg.value.name.value),  # type: ignore
                    [node],
                )
            continue

        try:
            coerced[name] = value_from_ast(arg.value, type_, variables)  # type: ignore
        except InvalidValue as err:
            raise CoercionError(
                'Argument "%s" of type "%s" was provided invalid value %s (%s)'
                % (name, type_, print_ast(arg.value), err.message),  # type: ignore
                [node],
            ) from err

    return coerced


def directive_arguments(
    definition: Directive,
    node: _ast.Node,
    variables: Optional[Mapping[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """
    Coerced arguments of a directive applied to ``node``, ``None`` when the
    directive is not present on the node.
    """
    directive = find_one(
        getattr(node, "directives", None) or [],
        lambda d: d.name.value == definition.name,
    )
    if directive is None:
        return None
    return coerce_argument_values(definition, directive, variables)


def coerce_variable_values(
    schema: Schema,
    operation: _ast.OperationDefinition,
    variables: Mapping[str, Any],
    max_errors: int = MAX_VARIABLE_ERRORS,
) -> Dict[str, Any]:
    """
    Coerce raw variables (usually decoded JSON) against the variable
    definitions of an operation.

    Variables not defined by the operation are dropped.

    Raises:
        :class:`~gqlkit.exc.VariablesCoercionError`: if any variable is
            invalid, at most ``max_errors`` errors are collected.
    """
    coerced = {}  # type: Dict[str, Any]
    errors = []  # type: List[VariableCoercionError]

    for var_def in operation.variable_definitions or []:
        if len(errors) >= max_errors:
            errors.append(
                VariableCoercionError(
                    "Too many errors processing variables, error limit "
                    "reached. Execution aborted."
                )
            )
            break

        name = var_def.variable.name.value

        try:
            type_ = schema.get_type_from_literal(var_def.type)
        except UnknownType:
            errors.append(
                VariableCoercionError(
                    'Unknown type "%s" for variable "$%s"'
                    % (print_ast(var_def.type), name),
                    [var_def],
                )
            )
            continue

        if not is_input_type(type_):
            errors.append(
                VariableCoercionError(
                    'Variable "$%s" expected value of type "%s" which cannot '
                    "be used as an input type." % (name, type_),
                    [var_def],
                )
            )
            continue

        if name not in variables:
            if var_def.default_value is not None:
                try:
                    coerced[name] = value_from_ast(var_def.default_value, type_)
                except InvalidValue as err:
                    errors.append(
                        VariableCoercionError(
                            'Variable "$%s" got invalid default value %s (%s)'
                            % (name, print_ast(var_def.default_value), err),
                            [var_def],
                        )
                    )
            elif isinstance(type_, NonNullType):
                errors.append(
                    VariableCoercionError(
                        'Variable "$%s" of required type "%s" was not provided.'
                        % (name, type_),
                        [var_def],
                    )
                )
            continue

        value = variables[name]
        if value is None and isinstance(type_, NonNullType):
            errors.append(
                VariableCoercionError(
                    'Variable "$%s" of non-null type "%s" must not be null.'
                    % (name, type_),
                    [var_def],
                )
            )
            continue

        try:
            coerced[name] = coerce_value(value, type_)
        except CoercionError as err:
            children = err.errors if isinstance(err, MultiCoercionError) else [err]
            for child in children:
                errors.append(
                    VariableCoercionError(
                        'Variable "$%s" got invalid value %s (%s)'
                        % (name, _dump(value), child),
                        [var_def],
                    )
                )

    if errors:
        raise VariablesCoercionError(errors)

    return coerced


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)
