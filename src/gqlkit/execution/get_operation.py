# -*- coding: utf-8 -*-

from typing import Optional, Tuple

from ..exc import InvalidOperationError
from ..lang import ast as _ast
from ..schema import ObjectType, Schema


def get_operation(
    document: _ast.Document, operation_name: Optional[str] = None
) -> _ast.OperationDefinition:
    """ Find the operation to execute in a parsed document.

    When ``operation_name`` is not provided the document must contain a
    single operation.

    Raises:
        :class:`~gqlkit.exc.InvalidOperationError`: if no operation matches.
    """
    operations = document.operations

    if not operations:
        raise InvalidOperationError("Expected at least one operation definition")

    if not operation_name:
        if len(operations) == 1:
            return operations[0]
        raise InvalidOperationError(
            "Operation name is required when document "
            "contains multiple operation definitions"
        )

    for operation in operations:
        if operation.name is not None and operation.name.value == operation_name:
            return operation

    raise InvalidOperationError('No operation "%s" in document' % operation_name)


def get_operation_with_type(
    schema: Schema, document: _ast.Document, operation_name: Optional[str] = None
) -> Tuple[_ast.OperationDefinition, ObjectType]:
    """ Same as :func:`get_operation` but also return the matching root type.

    Raises:
        :class:`~gqlkit.exc.InvalidOperationError`: if no operation matches
            or the schema does not define the corresponding root type.
    """
    operation = get_operation(document, operation_name)
    root_type = schema.root_type(operation.operation)

    if root_type is None:
        raise InvalidOperationError(
            "Schema doesn't support %s operation" % operation.operation
        )

    return operation, root_type
