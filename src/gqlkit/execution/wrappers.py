# -*- coding: utf-8 -*-

import copy
import json
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
)

from .._string_utils import PathEntry, stringify_path
from ..exc import GraphQLLocatedError, GraphQLResponseError
from ..lang import ast as _ast
from ..schema import Field, GraphQLType, ObjectType, Schema
from ..schema.introspection import get_meta_field
from ..utilities import coerce_argument_values, collect_fields, directive_arguments

_UNSET = object()

Resolver = Callable[..., Any]
TypeResolver = Callable[..., Any]
GroupedFields = Dict[str, List[_ast.Field]]


class ResponsePath:
    """
    Immutable position in the response, stored as a linked list of keys
    from the current field up to the root.

    >>> path = ResponsePath("foo").add(0).add("bar")
    >>> str(path)
    'foo[0].bar'
    >>> path.as_list()
    ['foo', 0, 'bar']
    """

    __slots__ = ("key", "prev")

    def __init__(self, key: PathEntry, prev: Optional["ResponsePath"] = None):
        self.key = key
        self.prev = prev

    def add(self, key: PathEntry) -> "ResponsePath":
        return ResponsePath(key, self)

    def as_list(self) -> List[PathEntry]:
        keys = []  # type: List[PathEntry]
        current = self  # type: Optional[ResponsePath]
        while current is not None:
            keys.append(current.key)
            current = current.prev
        keys.reverse()
        return keys

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self.as_list())

    def __str__(self) -> str:
        return stringify_path(self.as_list())

    def __repr__(self) -> str:
        return "<ResponsePath %s>" % self


class ExecutionContext:
    """
    Per request state shared by all the fields of an execution.

    Collected sub-fields, field definitions and coerced arguments are cached
    here as they only depend on the schema, the document and the variables.
    """

    def __init__(
        self,
        schema: Schema,
        document: _ast.Document,
        operation: _ast.OperationDefinition,
        variables: Dict[str, Any],
        root_value: Any,
        context_value: Any,
        field_resolver: Resolver,
        type_resolver: TypeResolver,
    ):
        self.schema = schema
        self.document = document
        self.operation = operation
        self.fragments = document.fragments
        self.variables = variables
        self.root_value = root_value
        self.context_value = context_value
        self.field_resolver = field_resolver
        self.type_resolver = type_resolver

        self._errors = []  # type: List[GraphQLResponseError]

        self._grouped_fields = (
            {}
        )  # type: Dict[Tuple[str, Tuple[int, ...]], GroupedFields]
        self._field_defs = {}  # type: Dict[Tuple[str, str], Optional[Field]]
        self._argument_values = {}  # type: Dict[Tuple[int, int], Dict[str, Any]]

    def add_error(self, error: GraphQLResponseError) -> None:
        self._errors.append(error)

    @property
    def errors(self) -> List[GraphQLResponseError]:
        """ Field errors collected so far. """
        return self._errors[:]

    def collect_fields(
        self, parent_type: ObjectType, selections: Sequence[_ast.Selection]
    ) -> GroupedFields:
        return collect_fields(
            self.schema, parent_type, selections, self.fragments, self.variables
        )

    def collect_subfields(
        self, parent_type: ObjectType, nodes: Sequence[_ast.Field]
    ) -> GroupedFields:
        """ Merged sub-selections of all the nodes of a field. """
        key = parent_type.name, tuple(id(node) for node in nodes)
        try:
            return self._grouped_fields[key]
        except KeyError:
            grouped = self._grouped_fields[key] = self.collect_fields(
                parent_type,
                [
                    selection
                    for node in nodes
                    if node.selection_set is not None
                    for selection in node.selection_set.selections
                ],
            )
            return grouped

    def field_definition(
        self, parent_type: ObjectType, name: str
    ) -> Optional[Field]:
        key = parent_type.name, name
        try:
            return self._field_defs[key]
        except KeyError:
            field_def = get_meta_field(parent_type, name)
            if field_def is None:
                field_def = parent_type.field_map.get(name)
            self._field_defs[key] = field_def
            return field_def

    def argument_values(self, field_def: Field, node: _ast.Field) -> Dict[str, Any]:
        """
        Raises:
            :class:`~gqlkit.exc.CoercionError`
        """
        key = id(field_def), id(node)
        try:
            return self._argument_values[key]
        except KeyError:
            args = self._argument_values[key] = coerce_argument_values(
                field_def, node, self.variables
            )
            return args


class ResolveInfo:
    """
    Expose information about the field currently being resolved.

    This is the 4th positional argument provided to resolvers and is
    constructed internally during execution.
    """

    __slots__ = (
        "field_definition",
        "path",
        "parent_type",
        "nodes",
        "_context",
        "_directive_arguments",
    )

    def __init__(
        self,
        field_definition: Field,
        path: ResponsePath,
        parent_type: ObjectType,
        nodes: List[_ast.Field],
        context: ExecutionContext,
    ):
        #: gqlkit.schema.Field: Field being resolved
        self.field_definition = field_definition
        #: ResponsePath: Position of the field in the response
        self.path = path
        #: gqlkit.schema.ObjectType: Type from which the field is resolved
        self.parent_type = parent_type
        #: List[gqlkit.lang.ast.Field]: Nodes selecting the field
        self.nodes = nodes

        self._context = context
        self._directive_arguments = (
            {}
        )  # type: Dict[str, Optional[Dict[str, Any]]]

    @property
    def field_name(self) -> str:
        return self.field_definition.name

    @property
    def return_type(self) -> GraphQLType:
        return self.field_definition.type

    @property
    def schema(self) -> Schema:
        return self._context.schema

    @property
    def fragments(self) -> Dict[str, _ast.FragmentDefinition]:
        return self._context.fragments

    @property
    def root_value(self) -> Any:
        return self._context.root_value

    @property
    def operation(self) -> _ast.OperationDefinition:
        return self._context.operation

    @property
    def variables(self) -> Dict[str, Any]:
        """ Coerced variables. """
        return self._context.variables

    def get_directive_arguments(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Coerced arguments of a directive applied to the current field,
        ``None`` when the directive is not present.

        Raises:
            KeyError: if the directive is not defined by the schema
        """
        try:
            return self._directive_arguments[name]
        except KeyError:
            args = self._directive_arguments[name] = directive_arguments(
                self._context.schema.directives[name],
                self.nodes[0],
                self._context.variables,
            )
            return args

    def __repr__(self) -> str:
        return "<ResolveInfo %s.%s at %s>" % (
            self.parent_type,
            self.field_name,
            self.path,
        )


class GraphQLResult:
    """
    Result of executing a document, to be sent back to the client.

    Supports unpacking as ``data, errors`` and is truthy when there are no
    errors.

    Args:
        data: The data part of the response, leave unset when execution did
            not start
        errors: Errors, included in the response using
            :meth:`~gqlkit.exc.GraphQLResponseError.to_dict`
    """

    __slots__ = ("data", "errors", "_has_data")

    def __init__(
        self,
        data: Any = _UNSET,
        errors: Optional[Sequence[GraphQLResponseError]] = None,
    ):
        self._has_data = data is not _UNSET
        self.data = data if self._has_data else None  # type: Any
        self.errors = list(errors or [])  # type: List[GraphQLResponseError]

    @property
    def has_data(self) -> bool:
        return self._has_data

    def __bool__(self) -> bool:
        return not self.errors

    def __iter__(self) -> Iterator[Any]:
        return iter((self.data, self.errors))

    def __repr__(self) -> str:
        return "<GraphQLResult data=%r errors=%r>" % (self.data, self.errors)

    def response(self) -> Dict[str, Any]:
        """ JSON serializable response payload. """
        payload = {}  # type: Dict[str, Any]
        if self.errors:
            payload["errors"] = [error.to_dict() for error in self.errors]
        if self._has_data:
            payload["data"] = self.data
        return payload

    def json(self, **kwargs: Any) -> str:
        """ Encode the response as JSON using the standard lib ``json`` module.

        Args:
            **kwargs: Passed to ``json.dumps``
        """
        return json.dumps(self.response(), **kwargs)


def located(
    error: Exception, nodes: Sequence[_ast.Node], path: ResponsePath
) -> GraphQLLocatedError:
    """ Attach nodes and response path to an error raised during execution.

    Located errors missing either are copied before being updated.
    """
    if isinstance(error, GraphQLLocatedError):
        if error.path is not None and error.nodes:
            return error
        error = copy.copy(error)
        if error.path is None:
            error.path = path.as_list()
        if not error.nodes:
            error.nodes = list(nodes)
        return error
    return GraphQLLocatedError(
        str(error), nodes, path.as_list(), original_error=error
    )
