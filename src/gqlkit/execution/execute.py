# -*- coding: utf-8 -*-

from typing import Any, Mapping, Optional

from ..exc import CoercionError, InvalidOperationError, VariablesCoercionError
from ..lang import ast as _ast
from ..schema import Schema
from ..utilities import coerce_variable_values
from .default_resolver import default_resolver, default_type_resolver
from .executor import Executor
from .get_operation import get_operation_with_type
from .wrappers import ExecutionContext, GraphQLResult, Resolver, TypeResolver


async def execute(
    schema: Schema,
    document: _ast.Document,
    *,
    operation_name: Optional[str] = None,
    variables: Optional[Mapping[str, Any]] = None,
    root_value: Any = None,
    context_value: Any = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None
) -> GraphQLResult:
    """
    Execute a GraphQL document against a schema. This assumes the document
    has been validated beforehand.

    Args:
        schema: Schema to execute the document against.

        document: The parsed document.

        operation_name: Operation to execute.
            If specified, the operation with the given name will be executed.
            If not, this executes the single operation without disambiguation.

        variables: Raw, JSON decoded variables parsed from the request.

        root_value: Value passed as ``source`` to the root field resolvers.

        context_value: Custom application specific value passed to all
            resolvers. Use this to pass in anything your resolvers require
            like database connections, user information, etc.

        field_resolver: Resolver used for fields which do not define one,
            defaults to :func:`~gqlkit.execution.default_resolver`.

        type_resolver: Resolver used for abstract types which do not define
            ``resolve_type``, defaults to
            :func:`~gqlkit.execution.default_type_resolver`.

    Returns:
        Execution result. When no operation can be executed or variables
        are invalid the result only contains errors.
    """
    try:
        operation, root_type = get_operation_with_type(
            schema, document, operation_name
        )
    except InvalidOperationError as err:
        return GraphQLResult(errors=[err])

    try:
        coerced_variables = coerce_variable_values(
            schema, operation, variables or {}
        )
    except VariablesCoercionError as err:
        return GraphQLResult(errors=err.errors)

    context = ExecutionContext(
        schema,
        document,
        operation,
        coerced_variables,
        root_value,
        context_value,
        field_resolver or default_resolver,
        type_resolver or default_type_resolver,
    )

    try:
        data = await Executor(context).execute_operation(root_type)
    except CoercionError as err:
        # @skip / @include arguments on the root selection set.
        return GraphQLResult(errors=[err])
    return GraphQLResult(data=data, errors=context.errors)
