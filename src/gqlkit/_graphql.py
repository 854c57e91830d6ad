# -*- coding: utf-8 -*-

import asyncio
import logging
from typing import Any, Mapping, Optional, Sequence, Type, Union

from .exc import GraphQLSyntaxError
from .execution import GraphQLResult, execute
from .execution.wrappers import Resolver, TypeResolver
from .lang import parse
from .lang.ast import Document
from .schema import Schema
from .validation import ValidationVisitor, validate

logger = logging.getLogger(__name__)


async def graphql(
    schema: Schema,
    document: Union[str, bytes, Document],
    *,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    root_value: Any = None,
    context_value: Any = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
    rules: Optional[Sequence[Type[ValidationVisitor]]] = None
) -> GraphQLResult:
    """
    Main GraphQL entrypoint encapsulating query processing from start to
    finish including parsing, validation, variable coercion and execution.

    Args:
        schema: Schema to execute the query against.

        document: The query document, either as source or already parsed.

        variables: Raw, JSON decoded variables parsed from the request.

        operation_name: Operation to execute.
            If specified, the operation with the given name will be executed.
            If not, this executes the single operation without disambiguation.

        root_value: Value passed as ``source`` to the root field resolvers.

        context_value: Custom application specific value passed to all
            resolvers.

        field_resolver: Resolver used for fields which do not define one.

        type_resolver: Resolver used for abstract types which do not define
            ``resolve_type``.

        rules: Validation rules. Setting this replaces the defaults so if you
            just want to add some rules, extend
            :obj:`gqlkit.validation.SPECIFIED_RULES`.

    Returns:
        Execution result. Syntax and validation errors are reported in a
        result without data.

    Raises:
        :class:`~gqlkit.exc.SchemaValidationError`: if the schema is invalid
    """
    schema.validate()

    if isinstance(document, Document):
        ast = document
    else:
        try:
            ast = parse(document)
        except GraphQLSyntaxError as err:
            logger.debug("Rejected document with syntax error: %s", err)
            return GraphQLResult(errors=[err])

    errors = validate(schema, ast, rules=rules)
    if errors:
        logger.debug("Rejected invalid document (%d errors)", len(errors))
        return GraphQLResult(errors=errors)

    return await execute(
        schema,
        ast,
        operation_name=operation_name,
        variables=variables,
        root_value=root_value,
        context_value=context_value,
        field_resolver=field_resolver,
        type_resolver=type_resolver,
    )


def graphql_blocking(
    schema: Schema, document: Union[str, bytes, Document], **kwargs: Any
) -> GraphQLResult:
    """
    Synchronous version of :func:`graphql` for callers without a running
    event loop. Keyword arguments are the same.

    Warning:
        This starts a new event loop and cannot be used from inside a
        running one.
    """
    return asyncio.run(graphql(schema, document, **kwargs))
