# -*- coding: utf-8 -*-
""" Schema definition. """

from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..exc import SchemaError, SchemaValidationError, UnknownType
from ..lang import ast as _ast
from ..lang.printer import print_ast
from .directives import SPECIFIED_DIRECTIVES
from .scalars import SPECIFIED_SCALAR_TYPES
from .types import (
    Directive,
    GraphQLType,
    InputObjectType,
    InterfaceType,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    UnionType,
    WrappingType,
    is_abstract_type,
    unwrap_type,
)

AbstractType = Union[InterfaceType, UnionType]


class Schema:
    """
    A GraphQL schema: the set of types reachable from the root types plus
    the supported directives.

    Schemas are meant to be built once and treated as read only afterwards;
    they can be shared across concurrent executions.

    Args:
        query_type: Root type for queries (required for the schema to be
            valid)
        mutation_type: Root type for mutations
        subscription_type: Root type for subscriptions
        types: Additional types which may not be reachable from the root types,
            such as implementations of an interface which is never returned
            directly
        directives: Custom directives, the specified directives (``@include``,
            ``@skip`` and ``@deprecated``) are always included
        nodes: Source nodes when built from SDL

    Attributes:
        types (Dict[str, NamedType]): Named types by name
        directives (Dict[str, Directive]): Directives by name
    """

    def __init__(
        self,
        query_type: Optional[ObjectType] = None,
        mutation_type: Optional[ObjectType] = None,
        subscription_type: Optional[ObjectType] = None,
        types: Optional[Iterable[NamedType]] = None,
        directives: Optional[Iterable[Directive]] = None,
        nodes: Optional[List[_ast.Node]] = None,
    ):
        self.query_type = query_type
        self.mutation_type = mutation_type
        self.subscription_type = subscription_type
        self.nodes = nodes or []

        self.directives = _build_directive_map(directives or [])
        self.types = _build_type_map(
            [query_type, mutation_type, subscription_type, *(types or [])],
            self.directives.values(),
        )

        self._possible_types = {}  # type: Dict[str, List[ObjectType]]
        self._implementations = None  # type: Optional[Dict[str, List[NamedType]]]
        self._literal_types = {}  # type: Dict[str, GraphQLType]
        self._validation_errors = None  # type: Optional[List[SchemaError]]

    def __repr__(self) -> str:
        return "<Schema (%d types)>" % len(self.types)

    @property
    def validation_errors(self) -> List[SchemaError]:
        """
        Errors found by :func:`~gqlkit.schema.validation.validate_schema`,
        computed once.
        """
        if self._validation_errors is None:
            from .validation import validate_schema

            self._validation_errors = validate_schema(self)
        return self._validation_errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors

    def validate(self) -> None:
        """
        Raises:
            :class:`~gqlkit.exc.SchemaValidationError`: if the schema is
                invalid.
        """
        if self.validation_errors:
            raise SchemaValidationError(self.validation_errors)

    def root_type(self, operation: str) -> Optional[ObjectType]:
        """ Root type for ``query``, ``mutation`` or ``subscription``. """
        return {
            "query": self.query_type,
            "mutation": self.mutation_type,
            "subscription": self.subscription_type,
        }[operation]

    def get_type(self, name: str) -> NamedType:
        """
        Raises:
            :class:`~gqlkit.exc.UnknownType`
        """
        try:
            return self.types[name]
        except KeyError:
            raise UnknownType(name)

    def has_type(self, name: str) -> bool:
        return name in self.types

    def get_type_from_literal(self, node: _ast.Type) -> GraphQLType:
        """
        Resolve a type reference node (e.g. the parsed form of ``[User!]``)
        against the schema.

        Raises:
            :class:`~gqlkit.exc.UnknownType`: if a named type is not found
        """
        key = print_ast(node)
        try:
            return self._literal_types[key]
        except KeyError:
            pass

        type_ = self._type_from_literal(node)
        self._literal_types[key] = type_
        return type_

    def _type_from_literal(self, node: _ast.Type) -> GraphQLType:
        if isinstance(node, _ast.ListType):
            return ListType(self._type_from_literal(node.type))
        elif isinstance(node, _ast.NonNullType):
            return NonNullType(self._type_from_literal(node.type))
        elif isinstance(node, _ast.NamedType):
            return self.get_type(node.name.value)
        raise TypeError("Invalid type node %r" % (node,))

    def _implementations_of(self, interface: InterfaceType) -> List[NamedType]:
        if self._implementations is None:
            implementations = {}  # type: Dict[str, List[NamedType]]
            for type_ in self.types.values():
                if isinstance(type_, (ObjectType, InterfaceType)):
                    for iface in type_.interfaces:
                        implementations.setdefault(iface.name, []).append(type_)
            self._implementations = implementations
        return self._implementations.get(interface.name, [])

    def get_possible_types(self, abstract_type: AbstractType) -> Sequence[ObjectType]:
        """
        Object types a value of ``abstract_type`` can resolve to at runtime.
        """
        try:
            return self._possible_types[abstract_type.name]
        except KeyError:
            pass

        if isinstance(abstract_type, UnionType):
            possible = list(abstract_type.types)
        elif isinstance(abstract_type, InterfaceType):
            possible = [
                t
                for t in self._implementations_of(abstract_type)
                if isinstance(t, ObjectType)
            ]
        else:
            raise TypeError("Not an abstract type: %s" % abstract_type)

        self._possible_types[abstract_type.name] = possible
        return possible

    def is_possible_type(
        self, abstract_type: AbstractType, type_: GraphQLType
    ) -> bool:
        return isinstance(type_, ObjectType) and any(
            t is type_ for t in self.get_possible_types(abstract_type)
        )

    def is_subtype(self, abstract_type: AbstractType, maybe_sub: GraphQLType) -> bool:
        """
        Whether ``maybe_sub`` is a possible type of ``abstract_type``, or an
        interface implementing it.
        """
        if isinstance(abstract_type, InterfaceType) and isinstance(
            maybe_sub, InterfaceType
        ):
            return maybe_sub in self._implementations_of(abstract_type)
        return self.is_possible_type(abstract_type, maybe_sub)

    def is_type_subtype_of(
        self, type_: GraphQLType, super_type: GraphQLType
    ) -> bool:
        """
        Whether a value of ``type_`` can always be used where ``super_type``
        is expected (covariance): equal types, a non-null version of the
        expected type or an implementation of the expected abstract type.
        """
        if type_ == super_type:
            return True

        if isinstance(super_type, NonNullType):
            if isinstance(type_, NonNullType):
                return self.is_type_subtype_of(type_.type, super_type.type)
            return False

        if isinstance(type_, NonNullType):
            return self.is_type_subtype_of(type_.type, super_type)

        if isinstance(super_type, ListType):
            if isinstance(type_, ListType):
                return self.is_type_subtype_of(type_.type, super_type.type)
            return False

        if isinstance(type_, ListType):
            return False

        return is_abstract_type(super_type) and self.is_subtype(
            super_type, type_  # type: ignore
        )

    def types_overlap(self, lhs: GraphQLType, rhs: GraphQLType) -> bool:
        """
        Whether two composite types have at least one possible object type
        in common. This is commutative.
        """
        if lhs is rhs:
            return True

        if is_abstract_type(lhs):
            if is_abstract_type(rhs):
                rhs_types = self.get_possible_types(rhs)  # type: ignore
                return any(
                    t in rhs_types
                    for t in self.get_possible_types(lhs)  # type: ignore
                )
            return self.is_possible_type(lhs, rhs)  # type: ignore

        if is_abstract_type(rhs):
            return self.is_possible_type(rhs, lhs)  # type: ignore

        return False


def _build_directive_map(directives: Iterable[Directive]) -> Dict[str, Directive]:
    directive_map = {d.name: d for d in SPECIFIED_DIRECTIVES}

    for directive in directives:
        if not isinstance(directive, Directive):
            raise SchemaError("Expected Directive but got %r" % (directive,))
        existing = directive_map.get(directive.name)
        if existing is directive:
            continue
        if existing is not None:
            if existing in SPECIFIED_DIRECTIVES:
                raise SchemaError(
                    'Cannot override specified directive "%s"' % directive.name
                )
            raise SchemaError('Duplicate directive "%s"' % directive.name)
        directive_map[directive.name] = directive

    return directive_map


def _build_type_map(
    roots: Iterable[Optional[GraphQLType]], directives: Iterable[Directive]
) -> Dict[str, NamedType]:
    type_map = {t.name: t for t in SPECIFIED_SCALAR_TYPES}  # type: Dict[str, NamedType]

    stack = [t for t in roots if t is not None]  # type: List[GraphQLType]
    for directive in directives:
        stack.extend(arg.type for arg in directive.arguments)
    stack.reverse()

    while stack:
        type_ = stack.pop()
        if isinstance(type_, WrappingType):
            type_ = unwrap_type(type_)

        if not isinstance(type_, NamedType):
            raise SchemaError("Expected NamedType but got %r" % (type_,))

        existing = type_map.get(type_.name)
        if existing is type_:
            continue
        if existing is not None:
            raise SchemaError('Duplicate type "%s"' % type_.name)

        type_map[type_.name] = type_

        children = []  # type: List[GraphQLType]
        if isinstance(type_, UnionType):
            children.extend(type_.types)
        if isinstance(type_, (ObjectType, InterfaceType)):
            children.extend(type_.interfaces)
            for field in type_.fields:
                children.append(field.type)
                children.extend(arg.type for arg in field.arguments)
        if isinstance(type_, InputObjectType):
            children.extend(f.type for f in type_.fields)

        stack.extend(reversed(children))

    return type_map
