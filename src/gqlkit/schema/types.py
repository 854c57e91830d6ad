# -*- coding: utf-8 -*-
"""
Runtime representation of GraphQL types.

Named types (scalars, enums, objects, interfaces, unions and input objects)
are compared by identity while wrapping types (:class:`ListType` and
:class:`NonNullType`) are compared structurally.

Fields, arguments, interfaces and union members can be provided as
thunks (zero argument callables) in order to describe mutually recursive
types. Thunks are evaluated once on first access and the result is kept.
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
    cast,
)

from .._utils import Lazy, lazy
from ..exc import ScalarParsingError, ScalarSerializationError, UnknownEnumValue
from ..lang import ast as _ast
from ..lang.parser import DIRECTIVE_LOCATIONS

if TYPE_CHECKING:
    from ..execution.wrappers import ResolveInfo  # noqa: F401

T = TypeVar("T")

LazySeq = Lazy[Sequence[T]]

Resolver = Callable[[Any, Dict[str, Any], Any, "ResolveInfo"], Any]

TypeResolver = Callable[[Any, Any, "ResolveInfo"], Any]

IsTypeOf = Callable[[Any, Any, "ResolveInfo"], Any]

_UNSET = object()


class _Thunk(Generic[T]):
    """ Evaluate a lazy value once and remember the result. """

    __slots__ = ("_source", "_value", "_resolved")

    def __init__(self, source: Lazy[T]):
        self._source = source
        self._value = None  # type: Optional[T]
        self._resolved = False

    def get(self) -> T:
        if not self._resolved:
            self._value = lazy(self._source)
            self._resolved = True
        return cast(T, self._value)


class GraphQLType:
    """
    Base type class, all types used in a :class:`~gqlkit.schema.Schema`
    must be instances of this class.
    """

    def __eq__(self, rhs: Any) -> bool:
        return self is rhs

    def __hash__(self) -> int:
        return id(self)


class NamedType(GraphQLType):
    """
    Named type base class.

    Attributes:
        name (str): Type name, unique across a schema
        description (Optional[str]): Type description
    """

    name = NotImplemented  # type: str
    description = None  # type: Optional[str]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return "<%s %s>" % (self.__class__.__name__, self.name)


class WrappingType(GraphQLType):
    """ Shared implementation of :class:`ListType` and :class:`NonNullType`. """

    __slots__ = ("_type",)

    def __init__(self, type_: Lazy[GraphQLType]):
        self._type = _Thunk(type_)

    @property
    def type(self) -> GraphQLType:
        return self._type.get()

    def __eq__(self, rhs: Any) -> bool:
        return (
            self is rhs
            or (self.__class__ is rhs.__class__ and self.type == rhs.type)
        )

    def __hash__(self) -> int:
        return hash((self.__class__, self.type))

    def __repr__(self) -> str:
        return "<%s %s>" % (self.__class__.__name__, self)


class ListType(WrappingType):
    """
    List of values of the wrapped type.
    """

    __slots__ = ()

    def __str__(self) -> str:
        return "[%s]" % self.type


class NonNullType(WrappingType):
    """
    Wrapped type which is guaranteed never to be ``null``.

    Wrapping a :class:`NonNullType` is allowed, the executor and the
    validation layer unwrap such types one level at a time.
    """

    __slots__ = ()

    def __str__(self) -> str:
        return "%s!" % self.type


class InputValue:
    """
    Argument or input object field definition.

    Warning:
        ``None`` is a valid default value, leave out ``default_value`` to
        define an input value without default.

    Attributes:
        name (str): Value name
        description (Optional[str]): Value description
        has_default_value (bool): ``True`` if a default value was provided
        default_value (Any): Default value; accessing it raises
            :py:class:`AttributeError` when none was provided.
        required (bool): Non nullable and without default value
        node (Optional[gqlkit.lang.ast.InputValueDefinition]): Source node
    """

    def __init__(
        self,
        name: str,
        type_: Lazy[GraphQLType],
        default_value: Any = _UNSET,
        description: Optional[str] = None,
        node: Optional[_ast.InputValueDefinition] = None,
    ):
        self.name = name
        self.description = description
        self.node = node
        self._default_value = default_value
        self._type = _Thunk(type_)

    @property
    def type(self) -> GraphQLType:
        return self._type.get()

    @property
    def has_default_value(self) -> bool:
        return self._default_value is not _UNSET

    @property
    def default_value(self) -> Any:
        if self._default_value is _UNSET:
            raise AttributeError("No default value")
        return self._default_value

    @property
    def required(self) -> bool:
        return isinstance(self.type, NonNullType) and not self.has_default_value

    def __str__(self) -> str:
        return "%s: %s" % (self.name, self.type)

    def __repr__(self) -> str:
        return "<%s %s>" % (self.__class__.__name__, self)


class Argument(InputValue):
    """ Argument of a field or a directive. """


class InputField(InputValue):
    """ Field of an :class:`InputObjectType`. """


def _index(entries: Iterable[Any]) -> Dict[str, Any]:
    return {entry.name: entry for entry in entries}


class Field:
    """
    Field of an :class:`ObjectType` or :class:`InterfaceType`.

    Args:
        name: Field name
        type_: Field type (must be an output type)
        args: Field arguments
        description: Field description
        deprecation_reason: Mark the field as deprecated
        resolver: Resolver called as ``resolver(source, args, context, info)``
        node: Source node when built from SDL
    """

    def __init__(
        self,
        name: str,
        type_: Lazy[GraphQLType],
        args: Optional[LazySeq[Argument]] = None,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
        resolver: Optional[Resolver] = None,
        node: Optional[_ast.FieldDefinition] = None,
    ):
        self.name = name
        self.description = description
        self.deprecation_reason = deprecation_reason
        self.resolver = resolver
        self.node = node
        self._type = _Thunk(type_)
        self._arguments = _Thunk(args or [])
        self._argument_map = None  # type: Optional[Dict[str, Argument]]

    @property
    def type(self) -> GraphQLType:
        return self._type.get()

    @property
    def deprecated(self) -> bool:
        return self.deprecation_reason is not None

    @property
    def arguments(self) -> Sequence[Argument]:
        return self._arguments.get() or []

    @property
    def argument_map(self) -> Dict[str, Argument]:
        if self._argument_map is None:
            self._argument_map = _index(self.arguments)
        return self._argument_map

    def __str__(self) -> str:
        return "%s: %s" % (self.name, self.type)

    def __repr__(self) -> str:
        return "<Field %s>" % self


class _FieldsMixin:
    """ Lazily resolved fields and field map. """

    _fields = None  # type: _Thunk[Sequence[Any]]
    _field_map = None  # type: Optional[Dict[str, Any]]

    @property
    def fields(self) -> Sequence[Any]:
        return self._fields.get() or []

    @property
    def field_map(self) -> Dict[str, Any]:
        if self._field_map is None:
            self._field_map = _index(self.fields)
        return self._field_map


class ScalarType(NamedType):
    """
    Leaf type describing a single value.

    Args:
        name: Type name

        serialize: Convert a Python value to a JSON compatible output value.

        parse: Convert a JSON compatible input value (provided through
            variables) to a Python value.

        parse_literal: Convert a value node found in a document to a Python
            value, called with the node and the variables map. Defaults to
            calling ``parse`` on the node's value.

        description: Type description

        nodes: Source nodes when built from SDL

    All three conversion functions can raise :py:class:`ValueError` or
    :py:class:`TypeError` to reject a value.
    """

    def __init__(
        self,
        name: str,
        serialize: Callable[[Any], Any],
        parse: Callable[[Any], Any],
        parse_literal: Optional[
            Callable[[_ast.Value, Mapping[str, Any]], Any]
        ] = None,
        description: Optional[str] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.name = name
        self.description = description
        self._serialize = serialize
        self._parse = parse
        self._parse_literal = parse_literal
        self.nodes = nodes or []

    def serialize(self, value: Any) -> Any:
        try:
            return self._serialize(value)
        except (ValueError, TypeError) as err:
            raise ScalarSerializationError(str(err)) from err

    def parse(self, value: Any) -> Any:
        try:
            return self._parse(value)
        except (ValueError, TypeError) as err:
            raise ScalarParsingError(str(err)) from err

    def parse_literal(
        self, node: _ast.Value, variables: Optional[Mapping[str, Any]] = None
    ) -> Any:
        try:
            if self._parse_literal is not None:
                return self._parse_literal(node, variables or {})
            return self._parse(getattr(node, "value", None))
        except (ValueError, TypeError) as err:
            raise ScalarParsingError(str(err), [node]) from err


class EnumValue:
    """
    Member of an :class:`EnumType`.

    Args:
        name: Name used in documents and responses
        value: Python value, defaults to ``name``; must be hashable
        deprecation_reason: Mark the value as deprecated
        description: Value description
        node: Source node when built from SDL
    """

    __slots__ = ("name", "value", "deprecation_reason", "description", "node")

    def __init__(
        self,
        name: str,
        value: Any = _UNSET,
        deprecation_reason: Optional[str] = None,
        description: Optional[str] = None,
        node: Optional[_ast.EnumValueDefinition] = None,
    ):
        if name in ("true", "false", "null"):
            raise ValueError('Invalid name "%s" for enum value' % name)
        self.name = name
        self.value = name if value is _UNSET else value
        self.deprecation_reason = deprecation_reason
        self.description = description
        self.node = node

    @property
    def deprecated(self) -> bool:
        return self.deprecation_reason is not None

    @classmethod
    def from_def(cls, definition: Any) -> "EnumValue":
        """
        Accept :class:`EnumValue` instances, names and ``(name, value)``
        tuples.
        """
        if isinstance(definition, cls):
            return definition
        elif isinstance(definition, str):
            return cls(definition)
        elif isinstance(definition, tuple) and len(definition) == 2:
            return cls(*definition)
        raise TypeError("Invalid enum value definition %r" % (definition,))

    def __str__(self) -> str:
        return self.name


class EnumType(NamedType):
    """
    Leaf type restricted to a set of named values.

    Responses contain value names while resolvers and input coercion deal
    with the Python values attached to them.

    Args:
        name: Type name
        values: Values, anything accepted by :meth:`EnumValue.from_def`
        description: Type description
        nodes: Source nodes when built from SDL
    """

    def __init__(
        self,
        name: str,
        values: Iterable[Union[EnumValue, str, Tuple[str, Any]]],
        description: Optional[str] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.name = name
        self.description = description
        self.nodes = nodes or []
        self.values = []  # type: List[EnumValue]
        self._by_name = {}  # type: Dict[str, EnumValue]
        self._by_value = {}  # type: Dict[Any, EnumValue]

        for definition in values:
            value = EnumValue.from_def(definition)
            if value.name in self._by_name:
                raise ValueError(
                    'Duplicate enum value "%s" in %s' % (value.name, name)
                )
            self.values.append(value)
            self._by_name[value.name] = value
            self._by_value[value.value] = value

    @classmethod
    def from_python_enum(cls, enum: Any, **kwargs: Any) -> "EnumType":
        """ Build an enum type from a Python :py:class:`enum.Enum`. """
        return cls(enum.__name__, [(v.name, v) for v in enum], **kwargs)

    @property
    def value_map(self) -> Dict[str, EnumValue]:
        return self._by_name

    def get_value(self, name: str) -> Any:
        """
        Python value for a given name.

        Raises:
            :class:`~gqlkit.exc.UnknownEnumValue`
        """
        try:
            return self._by_name[name].value
        except KeyError:
            raise UnknownEnumValue(
                "Invalid name %s for enum %s" % (name, self.name)
            )

    def get_name(self, value: Any) -> str:
        """
        Name for a given Python value.

        Raises:
            :class:`~gqlkit.exc.UnknownEnumValue`
        """
        try:
            return self._by_value[value].name
        except (KeyError, TypeError):
            raise UnknownEnumValue(
                "Invalid value %r for enum %s" % (value, self.name)
            )

    def serialize(self, value: Any) -> str:
        try:
            return self.get_name(value)
        except UnknownEnumValue as err:
            raise ScalarSerializationError(str(err)) from err

    def parse(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise UnknownEnumValue(
                "Invalid value %r for enum %s" % (value, self.name)
            )
        return self.get_value(value)

    def parse_literal(
        self, node: _ast.Value, variables: Optional[Mapping[str, Any]] = None
    ) -> Any:
        if not isinstance(node, _ast.EnumValue):
            raise UnknownEnumValue(
                "Enum %s cannot represent non enum value" % self.name, [node]
            )
        try:
            return self.get_value(node.value)
        except UnknownEnumValue as err:
            raise UnknownEnumValue(err.message, [node]) from err


class InterfaceType(_FieldsMixin, NamedType):
    """
    Abstract type describing a set of fields shared by its implementers.

    Args:
        name: Type name
        fields: Fields (or thunk)
        interfaces: Implemented interfaces (or thunk)
        resolve_type: Called as ``resolve_type(value, context, info)`` to
            find the concrete type of a value; may return an
            :class:`ObjectType`, a type name or an awaitable of either.
        description: Type description
        nodes: Source nodes when built from SDL
    """

    def __init__(
        self,
        name: str,
        fields: LazySeq[Field],
        interfaces: Optional[LazySeq["InterfaceType"]] = None,
        resolve_type: Optional[TypeResolver] = None,
        description: Optional[str] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.name = name
        self.description = description
        self.resolve_type = resolve_type
        self.nodes = nodes or []
        self._fields = _Thunk(fields)
        self._interfaces = _Thunk(interfaces or [])

    @property
    def interfaces(self) -> Sequence["InterfaceType"]:
        return self._interfaces.get() or []


class ObjectType(_FieldsMixin, NamedType):
    """
    Concrete composite type.

    Args:
        name: Type name
        fields: Fields (or thunk)
        interfaces: Implemented interfaces (or thunk)
        is_type_of: Called as ``is_type_of(value, context, info)`` to check
            whether a value belongs to this type; may return an awaitable.
        description: Type description
        nodes: Source nodes when built from SDL
    """

    def __init__(
        self,
        name: str,
        fields: LazySeq[Field],
        interfaces: Optional[LazySeq[InterfaceType]] = None,
        is_type_of: Optional[IsTypeOf] = None,
        description: Optional[str] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.name = name
        self.description = description
        self.is_type_of = is_type_of
        self.nodes = nodes or []
        self._fields = _Thunk(fields)
        self._interfaces = _Thunk(interfaces or [])

    @property
    def interfaces(self) -> Sequence[InterfaceType]:
        return self._interfaces.get() or []


class UnionType(NamedType):
    """
    Abstract type whose values are one of its member object types.
    """

    def __init__(
        self,
        name: str,
        types: LazySeq[ObjectType],
        resolve_type: Optional[TypeResolver] = None,
        description: Optional[str] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.name = name
        self.description = description
        self.resolve_type = resolve_type
        self.nodes = nodes or []
        self._types = _Thunk(types)

    @property
    def types(self) -> Sequence[ObjectType]:
        return self._types.get() or []


class InputObjectType(_FieldsMixin, NamedType):
    """
    Structured input value, used as argument or variable type.
    """

    def __init__(
        self,
        name: str,
        fields: LazySeq[InputField],
        description: Optional[str] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.name = name
        self.description = description
        self.nodes = nodes or []
        self._fields = _Thunk(fields)


class Directive:
    """
    Directive definition.

    Args:
        name: Directive name
        locations: Locations where the directive can be used
        args: Argument definitions
        repeatable: Whether the directive can be used more than once at a
            single location
        description: Directive description
        node: Source node when built from SDL
    """

    def __init__(
        self,
        name: str,
        locations: Sequence[str],
        args: Optional[Sequence[Argument]] = None,
        repeatable: bool = False,
        description: Optional[str] = None,
        node: Optional[_ast.DirectiveDefinition] = None,
    ):
        if not locations:
            raise ValueError("Expected at least one location")

        invalid = [loc for loc in locations if loc not in DIRECTIVE_LOCATIONS]
        if invalid:
            raise ValueError(
                "Invalid directive location(s) %s" % ", ".join(invalid)
            )

        self.name = name
        self.locations = list(locations)
        self.arguments = list(args or [])
        self.argument_map = _index(self.arguments)
        self.repeatable = repeatable
        self.description = description
        self.node = node

    def __str__(self) -> str:
        return "@%s" % self.name

    def __repr__(self) -> str:
        return "<Directive %s>" % self


def unwrap_type(type_: GraphQLType) -> NamedType:
    """
    Strip all :class:`ListType` and :class:`NonNullType` wrappers.

    >>> from gqlkit.schema import Int
    >>> unwrap_type(NonNullType(ListType(NonNullType(Int)))) is Int
    True
    """
    while isinstance(type_, WrappingType):
        type_ = type_.type
    return cast(NamedType, type_)


def nullable_type(type_: GraphQLType) -> GraphQLType:
    """
    Strip a single :class:`NonNullType` wrapper.

    >>> from gqlkit.schema import Int
    >>> nullable_type(NonNullType(Int)) is Int
    True
    >>> nullable_type(Int) is Int
    True
    """
    if isinstance(type_, NonNullType):
        return type_.type
    return type_


def is_input_type(type_: Any) -> bool:
    """ Types which can be used for arguments, input fields and variables. """
    return isinstance(
        unwrap_type(type_), (ScalarType, EnumType, InputObjectType)
    )


def is_output_type(type_: Any) -> bool:
    """ Types which can be used as field types. """
    return isinstance(
        unwrap_type(type_),
        (ScalarType, EnumType, ObjectType, InterfaceType, UnionType),
    )


def is_leaf_type(type_: Any) -> bool:
    return isinstance(type_, (ScalarType, EnumType))


def is_composite_type(type_: Any) -> bool:
    return isinstance(type_, (ObjectType, InterfaceType, UnionType))


def is_abstract_type(type_: Any) -> bool:
    return isinstance(type_, (InterfaceType, UnionType))
