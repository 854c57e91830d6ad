# -*- coding: utf-8 -*-

import asyncio
import logging
from inspect import isawaitable
from typing import Any, Awaitable, Dict, Iterable, List, Optional

from .._utils import is_iterable
from ..exc import GraphQLLocatedError, ResolverError, ScalarSerializationError
from ..lang import ast as _ast
from ..schema import (
    EnumType,
    Field,
    GraphQLType,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    is_abstract_type,
)
from .wrappers import (
    ExecutionContext,
    GroupedFields,
    ResolveInfo,
    ResponsePath,
    located,
)

logger = logging.getLogger(__name__)


async def _gather(awaitables: Iterable[Awaitable[Any]]) -> List[Any]:
    # Wait for all siblings before failing so that their errors are all
    # recorded, then re-raise the first failure.
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


def _child_path(path: Optional[ResponsePath], key: Any) -> ResponsePath:
    return ResponsePath(key) if path is None else path.add(key)


class Executor:
    """
    Execute the selected operation of a document.

    Sibling fields are resolved concurrently with :func:`asyncio.gather`
    except for the root fields of mutations which are resolved one after the
    other. Field errors are recorded on the :class:`ExecutionContext` and
    result in the nearest nullable field being set to ``None``.
    """

    def __init__(self, context: ExecutionContext):
        self.context = context

    async def execute_operation(self, root_type: ObjectType) -> Any:
        """ Execute the root selection set, returning the ``data`` entry. """
        operation = self.context.operation
        fields = self.context.collect_fields(
            root_type, operation.selection_set.selections
        )

        logger.debug(
            "Executing %s operation %s",
            operation.operation,
            operation.name.value if operation.name else "<anonymous>",
        )

        try:
            if operation.operation == "mutation":
                return await self.execute_fields_serially(
                    root_type, self.context.root_value, None, fields
                )
            return await self.execute_fields(
                root_type, self.context.root_value, None, fields
            )
        except GraphQLLocatedError as err:
            # A non nullable root field failed.
            self.context.add_error(err)
            return None

    async def execute_fields(
        self,
        parent_type: ObjectType,
        source: Any,
        path: Optional[ResponsePath],
        fields: GroupedFields,
    ) -> Dict[str, Any]:
        keys = []
        pending = []
        for key, nodes in fields.items():
            field_def = self.context.field_definition(
                parent_type, nodes[0].name.value
            )
            if field_def is None:
                continue
            keys.append(key)
            pending.append(
                self.resolve_field(
                    parent_type, source, field_def, nodes, _child_path(path, key)
                )
            )

        return dict(zip(keys, await _gather(pending)))

    async def execute_fields_serially(
        self,
        parent_type: ObjectType,
        source: Any,
        path: Optional[ResponsePath],
        fields: GroupedFields,
    ) -> Dict[str, Any]:
        result = {}  # type: Dict[str, Any]
        for key, nodes in fields.items():
            field_def = self.context.field_definition(
                parent_type, nodes[0].name.value
            )
            if field_def is None:
                continue
            result[key] = await self.resolve_field(
                parent_type, source, field_def, nodes, _child_path(path, key)
            )
        return result

    async def resolve_field(
        self,
        parent_type: ObjectType,
        source: Any,
        field_def: Field,
        nodes: List[_ast.Field],
        path: ResponsePath,
    ) -> Any:
        info = ResolveInfo(field_def, path, parent_type, nodes, self.context)
        resolver = field_def.resolver or self.context.field_resolver

        try:
            args = self.context.argument_values(field_def, nodes[0])
            value = resolver(source, args, self.context.context_value, info)
            if isawaitable(value):
                value = await value
            return await self.complete_value(field_def.type, nodes, path, info, value)
        except Exception as err:
            return self._handle_error(err, field_def.type, nodes, path)

    def _handle_error(
        self,
        error: Exception,
        return_type: GraphQLType,
        nodes: List[_ast.Field],
        path: ResponsePath,
    ) -> None:
        if not isinstance(error, GraphQLLocatedError):
            logger.debug(
                "Unexpected error while resolving %s", path, exc_info=True
            )
        elif isinstance(error, ResolverError):
            logger.debug("Resolver error at %s: %s", path, error)

        error = located(error, nodes, path)
        if isinstance(return_type, NonNullType):
            raise error
        self.context.add_error(error)
        return None

    async def complete_value(
        self,
        return_type: GraphQLType,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        value: Any,
    ) -> Any:
        if isinstance(return_type, NonNullType):
            completed = await self.complete_value(
                return_type.type, nodes, path, info, value
            )
            if completed is None:
                raise GraphQLLocatedError(
                    "Cannot return null for non-nullable field %s.%s."
                    % (info.parent_type.name, info.field_name),
                    nodes,
                    path.as_list(),
                )
            return completed

        if value is None:
            return None

        if isinstance(return_type, ListType):
            return await self.complete_list_value(
                return_type.type, nodes, path, info, value
            )

        if isinstance(return_type, (ScalarType, EnumType)):
            return self.complete_leaf_value(return_type, nodes, path, value)

        if is_abstract_type(return_type):
            runtime_type = await self.resolve_runtime_type(
                return_type, nodes, path, info, value
            )
            return await self.complete_object_value(
                runtime_type, nodes, path, info, value
            )

        if isinstance(return_type, ObjectType):
            return await self.complete_object_value(
                return_type, nodes, path, info, value
            )

        raise TypeError("Invalid field type %s" % return_type)

    async def complete_list_value(
        self,
        item_type: GraphQLType,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        value: Any,
    ) -> List[Any]:
        if not is_iterable(value, strings=False):
            raise GraphQLLocatedError(
                'Expected iterable, but did not find one for field "%s.%s".'
                % (info.parent_type.name, info.field_name),
                nodes,
                path.as_list(),
            )

        return await _gather(
            self._complete_list_item(item_type, nodes, path.add(index), info, item)
            for index, item in enumerate(value)
        )

    async def _complete_list_item(
        self,
        item_type: GraphQLType,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        item: Any,
    ) -> Any:
        try:
            if isawaitable(item):
                item = await item
            return await self.complete_value(item_type, nodes, path, info, item)
        except Exception as err:
            return self._handle_error(err, item_type, nodes, path)

    def complete_leaf_value(
        self,
        return_type: GraphQLType,
        nodes: List[_ast.Field],
        path: ResponsePath,
        value: Any,
    ) -> Any:
        try:
            return return_type.serialize(value)  # type: ignore
        except ScalarSerializationError as err:
            raise GraphQLLocatedError(
                'Expected a value of type "%s" but received: %r (%s)'
                % (return_type, value, err),
                nodes,
                path.as_list(),
                original_error=err,
            ) from err

    async def resolve_runtime_type(
        self,
        abstract_type: GraphQLType,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        value: Any,
    ) -> ObjectType:
        type_resolver = (
            getattr(abstract_type, "resolve_type", None)
            or self.context.type_resolver
        )

        runtime_type = type_resolver(value, self.context.context_value, info)
        if isawaitable(runtime_type):
            runtime_type = await runtime_type

        if isinstance(runtime_type, str):
            runtime_type = self.context.schema.types.get(runtime_type)

        if not isinstance(runtime_type, ObjectType):
            raise GraphQLLocatedError(
                'Abstract type "%s" must resolve to an Object type at runtime '
                'for field "%s.%s". Either the "%s" type should provide a '
                '"resolve_type" function or each possible type should provide '
                'an "is_type_of" function.'
                % (
                    abstract_type,
                    info.parent_type.name,
                    info.field_name,
                    abstract_type,
                ),
                nodes,
                path.as_list(),
            )

        if not self.context.schema.is_possible_type(
            abstract_type, runtime_type  # type: ignore
        ):
            raise GraphQLLocatedError(
                'Runtime Object type "%s" is not a possible type for "%s".'
                % (runtime_type.name, abstract_type),
                nodes,
                path.as_list(),
            )

        return runtime_type

    async def complete_object_value(
        self,
        object_type: ObjectType,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        value: Any,
    ) -> Dict[str, Any]:
        if object_type.is_type_of is not None:
            matches = object_type.is_type_of(
                value, self.context.context_value, info
            )
            if isawaitable(matches):
                matches = await matches
            if not matches:
                raise GraphQLLocatedError(
                    'Expected value of type "%s" but received: %r'
                    % (object_type.name, value),
                    nodes,
                    path.as_list(),
                )

        return await self.execute_fields(
            object_type,
            value,
            path,
            self.context.collect_subfields(object_type, nodes),
        )
