# -*- coding: utf-8 -*-
"""
AST node classes for GraphQL documents, both executable (operations and
fragments) and type system definitions.

Every concrete node class exposes:

- ``kind``: snake_case name of the class, used for visitor dispatch
  (``enter_field``, ``leave_operation_definition``, etc.);
- ``_fields``: ordered child attribute names;
- ``loc``: the :class:`~gqlkit.lang.source.Location` covered by the node or
  ``None`` when the parser ran with ``no_location=True``.

Nodes produced by the parser are treated as immutable, tools transforming
a document should go through :func:`gqlkit.lang.visitor.visit` which builds
new nodes instead of mutating existing ones.
"""

import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .source import Location

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class Node:
    """
    Base AST node.
    """

    __slots__ = ("loc",)

    kind = "node"
    _fields = ()  # type: Tuple[str, ...]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)  # type: ignore
        if "kind" not in cls.__dict__:
            cls.kind = _CAMEL_BOUNDARY.sub("_", cls.__name__).lower()
        fields = []  # type: List[str]
        for klass in reversed(cls.__mro__):
            for slot in klass.__dict__.get("__slots__", ()):
                if slot != "loc" and slot not in fields:
                    fields.append(slot)
        cls._fields = tuple(fields)

    def __init__(self, *args: Any, loc: Optional[Location] = None, **kwargs: Any):
        if len(args) > len(self._fields):
            raise TypeError(
                "%s takes at most %d positional arguments"
                % (self.__class__.__name__, len(self._fields))
            )
        for name, value in zip(self._fields, args):
            setattr(self, name, value)
        for name in self._fields[len(args) :]:
            setattr(self, name, kwargs.pop(name, None))
        if kwargs:
            raise TypeError(
                "Unknown field(s) %s for %s"
                % (", ".join(sorted(kwargs)), self.__class__.__name__)
            )
        self.loc = loc

    @property
    def source(self) -> Optional[str]:
        return self.loc.source.body if self.loc is not None else None

    def children(self) -> Iterator[Tuple[str, Any]]:
        for name in self._fields:
            yield name, getattr(self, name)

    def __eq__(self, rhs: Any) -> bool:
        return type(rhs) is type(self) and all(
            getattr(self, name) == getattr(rhs, name) for name in self._fields
        )

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return "<%s %s>" % (
            self.__class__.__name__,
            ", ".join("%s=%r" % item for item in self.children()),
        )

    def copy(self, **overrides: Any) -> "Node":
        """
        Shallow copy of the node, optionally replacing some of its fields.
        """
        values = dict(self.children())
        values.update(overrides)
        return self.__class__(loc=self.loc, **values)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the node and its children to plain data, mostly useful in
        tests and for debugging.
        """
        return _to_dict(self)


def _to_dict(value: Any) -> Any:
    if isinstance(value, Node):
        data = {"__kind__": value.__class__.__name__}  # type: Dict[str, Any]
        for name, child in value.children():
            data[name] = _to_dict(child)
        return data
    elif isinstance(value, list):
        return [_to_dict(entry) for entry in value]
    return value


class Name(Node):
    __slots__ = ("value",)


class Definition(Node):
    __slots__ = ()


class ExecutableDefinition(Definition):
    __slots__ = ()


class Selection(Node):
    __slots__ = ()


class Value(Node):
    __slots__ = ()


class Type(Node):
    __slots__ = ()


class NamedType(Type):
    __slots__ = ("name",)


class ListType(Type):
    __slots__ = ("type",)


class NonNullType(Type):
    __slots__ = ("type",)


class Document(Node):
    __slots__ = ("definitions",)

    @property
    def fragments(self) -> Dict[str, "FragmentDefinition"]:
        return {
            d.name.value: d
            for d in self.definitions
            if isinstance(d, FragmentDefinition)
        }

    @property
    def operations(self) -> List["OperationDefinition"]:
        return [
            d for d in self.definitions if isinstance(d, OperationDefinition)
        ]


class OperationDefinition(ExecutableDefinition):
    __slots__ = (
        "operation",
        "name",
        "variable_definitions",
        "directives",
        "selection_set",
    )


class Variable(Value):
    __slots__ = ("name",)


class VariableDefinition(Node):
    __slots__ = ("variable", "type", "default_value", "directives")


class SelectionSet(Node):
    __slots__ = ("selections",)


class Field(Selection):
    __slots__ = ("alias", "name", "arguments", "directives", "selection_set")

    @property
    def response_name(self) -> str:
        return self.alias.value if self.alias else self.name.value


class Argument(Node):
    __slots__ = ("name", "value")


class FragmentSpread(Selection):
    __slots__ = ("name", "directives")


class InlineFragment(Selection):
    __slots__ = ("type_condition", "directives", "selection_set")


class FragmentDefinition(ExecutableDefinition):
    __slots__ = ("name", "type_condition", "directives", "selection_set")


class IntValue(Value):
    __slots__ = ("value",)


class FloatValue(Value):
    __slots__ = ("value",)


class StringValue(Value):
    __slots__ = ("value", "block")


class BooleanValue(Value):
    __slots__ = ("value",)


class NullValue(Value):
    __slots__ = ()


class EnumValue(Value):
    __slots__ = ("value",)


class ListValue(Value):
    __slots__ = ("values",)


class ObjectValue(Value):
    __slots__ = ("fields",)


class ObjectField(Node):
    __slots__ = ("name", "value")


class Directive(Node):
    __slots__ = ("name", "arguments")


class TypeSystemDefinition(Definition):
    __slots__ = ()


class SchemaDefinition(TypeSystemDefinition):
    __slots__ = ("description", "directives", "operation_types")


class OperationTypeDefinition(Node):
    __slots__ = ("operation", "type")


class TypeDefinition(TypeSystemDefinition):
    __slots__ = ()


class ScalarTypeDefinition(TypeDefinition):
    __slots__ = ("description", "name", "directives")


class ObjectTypeDefinition(TypeDefinition):
    __slots__ = ("description", "name", "interfaces", "directives", "fields")


class FieldDefinition(Node):
    __slots__ = ("description", "name", "arguments", "type", "directives")


class InputValueDefinition(Node):
    __slots__ = ("description", "name", "type", "default_value", "directives")


class InterfaceTypeDefinition(TypeDefinition):
    __slots__ = ("description", "name", "interfaces", "directives", "fields")


class UnionTypeDefinition(TypeDefinition):
    __slots__ = ("description", "name", "directives", "types")


class EnumTypeDefinition(TypeDefinition):
    __slots__ = ("description", "name", "directives", "values")


class EnumValueDefinition(Node):
    __slots__ = ("description", "name", "directives")


class InputObjectTypeDefinition(TypeDefinition):
    __slots__ = ("description", "name", "directives", "fields")


class DirectiveDefinition(TypeSystemDefinition):
    __slots__ = ("description", "name", "arguments", "repeatable", "locations")


class TypeSystemExtension(TypeSystemDefinition):
    __slots__ = ()


class SchemaExtension(TypeSystemExtension):
    __slots__ = ("directives", "operation_types")


class TypeExtension(TypeSystemExtension):
    __slots__ = ()


class ScalarTypeExtension(TypeExtension):
    __slots__ = ("name", "directives")


class ObjectTypeExtension(TypeExtension):
    __slots__ = ("name", "interfaces", "directives", "fields")


class InterfaceTypeExtension(TypeExtension):
    __slots__ = ("name", "interfaces", "directives", "fields")


class UnionTypeExtension(TypeExtension):
    __slots__ = ("name", "directives", "types")


class EnumTypeExtension(TypeExtension):
    __slots__ = ("name", "directives", "values")


class InputObjectTypeExtension(TypeExtension):
    __slots__ = ("name", "directives", "fields")
