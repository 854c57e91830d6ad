# -*- coding: utf-8 -*-

from typing import Any, Callable, List, Optional, Sequence, TypeVar, Union

from ..exc import UnknownType
from ..lang import ast as _ast
from ..lang.visitor import Visitor, _callback
from ..schema import (
    Argument,
    Directive,
    EnumType,
    EnumValue,
    Field,
    GraphQLType,
    InputField,
    InputObjectType,
    InterfaceType,
    ListType,
    ObjectType,
    Schema,
    is_composite_type,
    is_input_type,
    is_output_type,
    nullable_type,
    unwrap_type,
)
from ..schema.introspection import get_meta_field

T = TypeVar("T")

OptList = List[Optional[T]]


def _peek(
    lst: Sequence[T], count: int = 1, default: Optional[T] = None
) -> Optional[T]:
    return lst[-1 * count] if len(lst) >= count else default


def _or_none(value: T, predicate: Callable[[T], bool] = bool) -> Optional[T]:
    return value if value is not None and predicate(value) else None


class TypeInfo:
    """
    Track the schema types and definitions matching the current position
    while traversing a document.

    Call :meth:`enter` and :meth:`leave` for every node in traversal order,
    or wrap a visitor with :class:`TypeInfoVisitor` which does it for you.

    Unknown types and fields are downgraded to ``None`` instead of raising
    so that traversal of invalid documents can go on; consumers must handle
    that case.

    Args:
        schema: Reference schema to extract types from

    Attributes:
        directive (Optional[gqlkit.schema.Directive]): Current directive
            definition, if any
        argument (Optional[gqlkit.schema.Argument]): Current argument
            definition, if any
        enum_value (Optional[gqlkit.schema.EnumValue]): Current enum value
            definition, if any
    """

    def __init__(self, schema: Schema):
        self.schema = schema

        self._type_stack = []  # type: OptList[GraphQLType]
        self._parent_type_stack = []  # type: OptList[GraphQLType]
        self._input_type_stack = []  # type: OptList[GraphQLType]
        self._field_stack = []  # type: OptList[Field]
        self._input_value_def_stack = (
            []
        )  # type: OptList[Union[Argument, InputField]]

        self.directive = None  # type: Optional[Directive]
        self.argument = None  # type: Optional[Argument]
        self.enum_value = None  # type: Optional[EnumValue]

    @property
    def type(self) -> Optional[GraphQLType]:
        """ Output type of the current node (field, fragment, operation). """
        return _peek(self._type_stack)

    @property
    def parent_type(self) -> Optional[GraphQLType]:
        """ Composite type owning the current selection set. """
        return _peek(self._parent_type_stack)

    @property
    def input_type(self) -> Optional[GraphQLType]:
        """ Expected type of the current input value. """
        return _peek(self._input_type_stack)

    @property
    def parent_input_type(self) -> Optional[GraphQLType]:
        return _peek(self._input_type_stack, 2)

    @property
    def field(self) -> Optional[Field]:
        return _peek(self._field_stack)

    @property
    def input_value_def(self) -> Optional[Union[Argument, InputField]]:
        """ Argument or input field definition matching the current value. """
        return _peek(self._input_value_def_stack)

    def enter(self, node: _ast.Node) -> None:
        method = getattr(self, "_enter_%s" % node.kind, None)
        if method is not None:
            method(node)

    def leave(self, node: _ast.Node) -> None:
        method = getattr(self, "_leave_%s" % node.kind, None)
        if method is not None:
            method(node)

    def _type_from_ast(self, type_node: _ast.Type) -> Optional[GraphQLType]:
        try:
            return self.schema.get_type_from_literal(type_node)
        except UnknownType:
            return None

    def _field_def(self, node: _ast.Field) -> Optional[Field]:
        parent_type = self.parent_type
        if parent_type is None:
            return None

        name = node.name.value
        meta = get_meta_field(parent_type, name)
        if meta is not None:
            return meta

        if isinstance(parent_type, (ObjectType, InterfaceType)):
            return parent_type.field_map.get(name)
        return None

    def _push_input_value(self, definition, type_):
        self._input_value_def_stack.append(definition)
        self._input_type_stack.append(
            type_ if type_ is not None and is_input_type(type_) else None
        )

    def _pop_input_value(self, _node=None):
        self._input_type_stack.pop()
        self._input_value_def_stack.pop()

    def _pop_type(self, _node=None):
        self._type_stack.pop()

    def _enter_selection_set(self, _node):
        type_ = self.type
        named = unwrap_type(type_) if type_ is not None else None
        self._parent_type_stack.append(_or_none(named, is_composite_type))

    def _leave_selection_set(self, _node):
        self._parent_type_stack.pop()

    def _enter_field(self, node):
        field_def = self._field_def(node)
        self._field_stack.append(field_def)
        self._type_stack.append(
            _or_none(field_def.type, is_output_type) if field_def else None
        )

    def _leave_field(self, _node):
        self._type_stack.pop()
        self._field_stack.pop()

    def _enter_directive(self, node):
        self.directive = self.schema.directives.get(node.name.value)

    def _leave_directive(self, _node):
        self.directive = None

    def _enter_operation_definition(self, node):
        self._type_stack.append(
            _or_none(
                self.schema.root_type(node.operation),
                lambda t: isinstance(t, ObjectType),
            )
        )

    _leave_operation_definition = _pop_type

    def _enter_inline_fragment(self, node):
        if node.type_condition is not None:
            type_ = self._type_from_ast(node.type_condition)
        else:
            type_ = self.type
        self._type_stack.append(_or_none(type_, is_output_type))

    _leave_inline_fragment = _pop_type

    def _enter_fragment_definition(self, node):
        self._type_stack.append(
            _or_none(self._type_from_ast(node.type_condition), is_output_type)
        )

    _leave_fragment_definition = _pop_type

    def _enter_variable_definition(self, node):
        self._push_input_value(None, self._type_from_ast(node.type))

    _leave_variable_definition = _pop_input_value

    def _enter_argument(self, node):
        owner = self.directive or self.field
        argument = (
            owner.argument_map.get(node.name.value)
            if owner is not None
            else None
        )  # type: Optional[Argument]
        self.argument = argument
        self._push_input_value(
            argument, argument.type if argument is not None else None
        )

    def _leave_argument(self, _node):
        self.argument = None
        self._pop_input_value()

    def _enter_list_value(self, _node):
        list_type = nullable_type(self.input_type) if self.input_type else None
        item_type = (
            list_type.type if isinstance(list_type, ListType) else None
        )
        # List entries never have a default value.
        self._push_input_value(None, item_type)

    _leave_list_value = _pop_input_value

    def _enter_object_field(self, node):
        object_type = (
            unwrap_type(self.input_type) if self.input_type is not None else None
        )
        field_def = None  # type: Optional[InputField]
        if isinstance(object_type, InputObjectType):
            field_def = object_type.field_map.get(node.name.value)
        self._push_input_value(
            field_def, field_def.type if field_def is not None else None
        )

    _leave_object_field = _pop_input_value

    def _enter_enum_value(self, node):
        enum = unwrap_type(self.input_type) if self.input_type else None
        self.enum_value = (
            enum.value_map.get(node.value)
            if isinstance(enum, EnumType)
            else None
        )

    def _leave_enum_value(self, _node):
        self.enum_value = None


class TypeInfoVisitor(Visitor):
    """
    Wrap a visitor so that ``type_info`` is kept in sync with the traversal.

    ``type_info`` always enters a node before the wrapped visitor and leaves
    it after, so the wrapped visitor sees the types of the current node.

    Args:
        type_info: Type information tracker
        visitor: Wrapped visitor
    """

    def __init__(self, type_info: TypeInfo, visitor: Visitor):
        self.type_info = type_info
        self.visitor = visitor

    def enter(self, node, key, parent, path, ancestors):
        self.type_info.enter(node)
        result = _callback(self.visitor, "enter", node.kind)(
            node, key, parent, path, ancestors
        )  # type: Any
        if result is not None:
            # The node's leave callback will not be called when skipped,
            # removed or replaced.
            self.type_info.leave(node)
            if isinstance(result, _ast.Node):
                self.type_info.enter(result)
        return result

    def leave(self, node, key, parent, path, ancestors):
        result = _callback(self.visitor, "leave", node.kind)(
            node, key, parent, path, ancestors
        )
        self.type_info.leave(node)
        return result
