# -*- coding: utf-8 -*-
"""This module implements all the exceptions exposed by this library."""

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

from ._string_utils import (
    PathEntry,
    highlight_location,
    index_to_loc,
    stringify_path,
)

if TYPE_CHECKING:
    from .lang.ast import Node  # noqa: F401


class GraphQLError(Exception):
    """
    Base exception from which all other inherit.
    """

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class GraphQLResponseError(GraphQLError):
    """
    Errors suitable to be exposed to end users as part of a response.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Returns:
            JSON serializable representation of the error.
        """
        raise NotImplementedError()


class GraphQLSyntaxError(GraphQLResponseError):
    """
    Syntax error raised while lexing or parsing a document.

    Args:
        message: Explanatory message
        position: 0-indexed position of the offending character
        source: Source string

    Attributes:
        message (str): Explanatory message
        position (int): 0-indexed position of the offending character
        source (str): Source string
    """

    def __init__(self, message: str, position: int, source: str):
        super().__init__(message)
        self.source = source
        self.position = position
        self._highlighted = None  # type: Optional[str]

    @property
    def highlighted(self) -> str:
        """
        str: Message followed by a view of the source document pointing at
        the error.
        """
        if self._highlighted is None:
            self._highlighted = "%s %s" % (
                self.message,
                highlight_location(self.source, self.position),
            )
        return self._highlighted

    @property
    def locations(self) -> List[Dict[str, int]]:
        line, column = index_to_loc(self.source, self.position)
        return [{"line": line, "column": column}]

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "locations": self.locations}


class InvalidCharacter(GraphQLSyntaxError):
    pass


class UnexpectedCharacter(GraphQLSyntaxError):
    pass


class UnexpectedEOF(GraphQLSyntaxError):
    def __init__(self, position: int, source: str):
        super().__init__("Unexpected <EOF>", position, source)


class NonTerminatedString(GraphQLSyntaxError):
    pass


class InvalidEscapeSequence(GraphQLSyntaxError):
    pass


class UnexpectedToken(GraphQLSyntaxError):
    pass


class GraphQLLocatedError(GraphQLResponseError):
    """
    Error which can be traced back to node(s) of a parsed document and, during
    execution, to a position in the response.

    Args:
        message: Explanatory message
        nodes: Nodes relevant to the error
        path: Response path of the field being resolved
        original_error: Wrapped exception, if any
        extensions: Free form data exposed in the response

    Attributes:
        message (str): Explanatory message
        nodes (List[gqlkit.lang.ast.Node]): Nodes relevant to the error
        path (Optional[List[Union[int, str]]]): Response path
        original_error (Optional[Exception]): Wrapped exception
        extensions (Optional[Mapping[str, Any]]): Response extensions
    """

    def __init__(
        self,
        message: str,
        nodes: Optional[Sequence["Node"]] = None,
        path: Optional[Sequence[PathEntry]] = None,
        original_error: Optional[Exception] = None,
        extensions: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.nodes = [n for n in (nodes or []) if n is not None]
        self.path = list(path) if path is not None else None
        self.original_error = original_error
        self.extensions = extensions

    @property
    def source(self) -> Optional[str]:
        for node in self.nodes:
            if node.loc is not None:
                return node.loc.source.body
        return None

    @property
    def positions(self) -> List[int]:
        return [node.loc.start for node in self.nodes if node.loc is not None]

    @property
    def locations(self) -> List[Dict[str, int]]:
        locations = []
        for node in self.nodes:
            if node.loc is None:
                continue
            line, column = index_to_loc(node.loc.source.body, node.loc.start)
            locations.append({"line": line, "column": column})
        return locations

    def to_dict(self) -> Dict[str, Any]:
        data = {"message": self.message}  # type: Dict[str, Any]
        locations = self.locations
        if locations:
            data["locations"] = locations
        if self.path is not None:
            data["path"] = self.path
        if self.extensions:
            data["extensions"] = dict(self.extensions)
        return data


class ValidationError(GraphQLLocatedError):
    pass


class InvalidValue(GraphQLLocatedError, ValueError):
    pass


class UnknownEnumValue(InvalidValue):
    pass


class ScalarSerializationError(GraphQLError, ValueError):
    pass


class ScalarParsingError(InvalidValue):
    pass


class SchemaError(GraphQLError):
    pass


class SchemaValidationError(SchemaError):
    """
    Collection of :class:`SchemaError` found when validating a schema.

    Attributes:
        errors (Sequence[SchemaError]): Wrapped errors
    """

    def __init__(self, errors: Sequence[SchemaError]):
        super().__init__("Invalid schema: %d errors" % len(errors))
        self.errors = errors

    def __str__(self) -> str:
        return ",\n".join(str(err) for err in self.errors)


class UnknownType(SchemaError, KeyError):
    pass


class ExecutionError(GraphQLResponseError):
    """
    Error which prevented execution from starting.
    """

    def to_dict(self) -> Dict[str, Any]:
        return {"message": str(self)}


class InvalidOperationError(ExecutionError):
    pass


class VariableCoercionError(GraphQLLocatedError):
    pass


class VariablesCoercionError(GraphQLError):
    """
    Collection of :class:`VariableCoercionError`.

    Attributes:
        errors (Sequence[VariableCoercionError]): Wrapped errors
    """

    def __init__(self, errors: Sequence[VariableCoercionError]):
        super().__init__("%d errors" % len(errors))
        self.errors = errors

    def __str__(self) -> str:
        return ",\n".join(str(err) for err in self.errors)


class CoercionError(GraphQLLocatedError):
    """
    Raised when a runtime value cannot be coerced to an input type.

    Attributes:
        value_path (Optional[List[Union[int, str]]]):
            Location of the offending entry inside the coerced value
    """

    def __init__(
        self,
        message: str,
        nodes: Optional[Sequence["Node"]] = None,
        path: Optional[Sequence[PathEntry]] = None,
        value_path: Optional[Sequence[PathEntry]] = None,
    ):
        super().__init__(message, nodes, path)
        self.value_path = list(value_path) if value_path else None

    def __str__(self) -> str:
        if self.value_path:
            return "%s at %s" % (self.message, stringify_path(self.value_path))
        return self.message


class MultiCoercionError(CoercionError):
    """
    Collection of :class:`CoercionError`.
    """

    def __init__(self, errors: Sequence[CoercionError]):
        super().__init__("%d errors" % len(errors))
        self.errors = errors

    def __str__(self) -> str:
        return ",\n".join(str(err) for err in self.errors)


class ResolverError(GraphQLLocatedError):
    """
    Raise this from resolvers to report an expected failure.

    The message and ``extensions`` are exposed as is in the response.
    """

    def __init__(
        self,
        message: str,
        nodes: Optional[Sequence["Node"]] = None,
        path: Optional[Sequence[PathEntry]] = None,
        extensions: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message, nodes, path, extensions=extensions)


class SDLError(GraphQLLocatedError):
    """
    Error raised when building a schema from a type system document.
    """


class ExtensionError(SDLError):
    """
    Error raised when applying a type system extension to a schema.
    """
