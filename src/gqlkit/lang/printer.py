# -*- coding: utf-8 -*-
"""
Convert AST nodes back to GraphQL source text.
"""

import json
from typing import Iterable, Optional, Union

from . import ast as _ast


def _join(parts: Iterable[Optional[str]], separator: str = "") -> str:
    return separator.join(part for part in parts if part)


def _wrap(start: str, value: Optional[str], end: str = "") -> str:
    return "%s%s%s" % (start, value, end) if value else ""


def _indent(value: str, indent: str) -> str:
    return indent + value.replace("\n", "\n" + indent) if value else value


def print_block_string(value: str) -> str:
    """
    Format a string as a block string literal which parses back to the same
    value.

    >>> print(print_block_string("foo"))
    \"\"\"foo\"\"\"
    >>> print(print_block_string("foo\\nbar"))
    \"\"\"
    foo
    bar
    \"\"\"
    """
    escaped = value.replace('"""', '\\"""')
    if "\n" in value and value[:1] not in (" ", "\t"):
        return '"""\n%s\n"""' % escaped
    if escaped.endswith('"') or escaped.endswith("\\"):
        return '"""%s\n"""' % escaped
    return '"""%s"""' % escaped


class Printer:
    """
    Callable converting any :class:`~gqlkit.lang.ast.Node` to text.

    Args:
        indent: Number of spaces (or indent string) used inside blocks
        include_descriptions: Print descriptions of type system definitions
    """

    __slots__ = ("indent", "include_descriptions")

    def __init__(
        self, indent: Union[int, str] = 2, include_descriptions: bool = True
    ):
        self.indent = " " * indent if isinstance(indent, int) else indent
        self.include_descriptions = include_descriptions

    def __call__(self, node: Optional[_ast.Node]) -> str:
        if node is None:
            return ""
        try:
            method = getattr(self, "print_%s" % node.kind)
        except AttributeError:
            raise TypeError("Cannot print %r" % (node,))
        return method(node)

    def _many(self, nodes: Optional[Iterable[_ast.Node]], sep: str) -> str:
        return _join((self(node) for node in (nodes or ())), sep)

    def _block(self, nodes: Optional[Iterable[_ast.Node]]) -> str:
        lines = [_indent(self(node), self.indent) for node in (nodes or ())]
        return "{\n%s\n}" % "\n".join(lines) if lines else ""

    def _directives(self, node: _ast.Node) -> str:
        return self._many(node.directives, " ")  # type: ignore

    def _arguments(self, node: _ast.Node) -> str:
        return _wrap("(", self._many(node.arguments, ", "), ")")  # type: ignore

    def _argument_definitions(self, node: _ast.Node) -> str:
        args = [self(arg) for arg in node.arguments]  # type: ignore
        if any("\n" in arg for arg in args):
            return "(\n%s\n)" % _indent("\n".join(args), self.indent)
        return _wrap("(", ", ".join(args), ")")

    def _described(self, node: _ast.Node, text: str) -> str:
        description = getattr(node, "description", None)
        if description is None or not self.include_descriptions:
            return text
        return "%s\n%s" % (print_block_string(description.value), text)

    def print_name(self, node: _ast.Name) -> str:
        return node.value

    def print_document(self, node: _ast.Document) -> str:
        return self._many(node.definitions, "\n\n") + "\n"

    def print_operation_definition(self, node: _ast.OperationDefinition) -> str:
        name = self(node.name)
        variables = _wrap("(", self._many(node.variable_definitions, ", "), ")")
        directives = self._directives(node)
        selection_set = self(node.selection_set)
        if node.operation == "query" and not (name or variables or directives):
            return selection_set
        return _join(
            [node.operation, name + variables, directives, selection_set], " "
        )

    def print_variable_definition(self, node: _ast.VariableDefinition) -> str:
        return _join(
            [
                "%s: %s" % (self(node.variable), self(node.type)),
                _wrap("= ", self(node.default_value)),
                self._directives(node),
            ],
            " ",
        )

    def print_variable(self, node: _ast.Variable) -> str:
        return "$" + node.name.value

    def print_selection_set(self, node: _ast.SelectionSet) -> str:
        return self._block(node.selections)

    def print_field(self, node: _ast.Field) -> str:
        return _join(
            [
                _wrap("", self(node.alias), ": ")
                + node.name.value
                + self._arguments(node),
                self._directives(node),
                self(node.selection_set),
            ],
            " ",
        )

    def print_argument(self, node: _ast.Argument) -> str:
        return "%s: %s" % (node.name.value, self(node.value))

    def print_fragment_spread(self, node: _ast.FragmentSpread) -> str:
        return _join(["..." + node.name.value, self._directives(node)], " ")

    def print_inline_fragment(self, node: _ast.InlineFragment) -> str:
        return _join(
            [
                "...",
                _wrap("on ", self(node.type_condition)),
                self._directives(node),
                self(node.selection_set),
            ],
            " ",
        )

    def print_fragment_definition(self, node: _ast.FragmentDefinition) -> str:
        return _join(
            [
                "fragment",
                node.name.value,
                "on",
                self(node.type_condition),
                self._directives(node),
                self(node.selection_set),
            ],
            " ",
        )

    def print_int_value(self, node: _ast.IntValue) -> str:
        return node.value

    print_float_value = print_int_value
    print_enum_value = print_int_value

    def print_string_value(self, node: _ast.StringValue) -> str:
        if node.block:
            return print_block_string(node.value)
        return json.dumps(node.value, ensure_ascii=False)

    def print_boolean_value(self, node: _ast.BooleanValue) -> str:
        return "true" if node.value else "false"

    def print_null_value(self, node: _ast.NullValue) -> str:
        return "null"

    def print_list_value(self, node: _ast.ListValue) -> str:
        return "[%s]" % self._many(node.values, ", ")

    def print_object_value(self, node: _ast.ObjectValue) -> str:
        return "{%s}" % self._many(node.fields, ", ")

    def print_object_field(self, node: _ast.ObjectField) -> str:
        return "%s: %s" % (node.name.value, self(node.value))

    def print_directive(self, node: _ast.Directive) -> str:
        return "@%s%s" % (node.name.value, self._arguments(node))

    def print_named_type(self, node: _ast.NamedType) -> str:
        return node.name.value

    def print_list_type(self, node: _ast.ListType) -> str:
        return "[%s]" % self(node.type)

    def print_non_null_type(self, node: _ast.NonNullType) -> str:
        return "%s!" % self(node.type)

    # Type system definitions double as extensions when prefixed with
    # "extend", extension nodes having no description.

    def print_schema_definition(self, node: _ast.SchemaDefinition) -> str:
        return self._described(
            node,
            _join(
                ["schema", self._directives(node), self._block(node.operation_types)],
                " ",
            ),
        )

    def print_operation_type_definition(
        self, node: _ast.OperationTypeDefinition
    ) -> str:
        return "%s: %s" % (node.operation, self(node.type))

    def print_scalar_type_definition(self, node: _ast.ScalarTypeDefinition) -> str:
        return self._described(
            node, _join(["scalar", node.name.value, self._directives(node)], " ")
        )

    def print_object_type_definition(self, node: _ast.ObjectTypeDefinition) -> str:
        return self._described(node, self._composite("type", node))

    def print_interface_type_definition(
        self, node: _ast.InterfaceTypeDefinition
    ) -> str:
        return self._described(node, self._composite("interface", node))

    def _composite(self, keyword: str, node: _ast.Node) -> str:
        return _join(
            [
                keyword,
                node.name.value,  # type: ignore
                _wrap("implements ", self._many(node.interfaces, " & ")),  # type: ignore
                self._directives(node),
                self._block(node.fields),  # type: ignore
            ],
            " ",
        )

    def print_field_definition(self, node: _ast.FieldDefinition) -> str:
        return self._described(
            node,
            _join(
                [
                    "%s%s: %s"
                    % (
                        node.name.value,
                        self._argument_definitions(node),
                        self(node.type),
                    ),
                    self._directives(node),
                ],
                " ",
            ),
        )

    def print_input_value_definition(
        self, node: _ast.InputValueDefinition
    ) -> str:
        return self._described(
            node,
            _join(
                [
                    "%s: %s" % (node.name.value, self(node.type)),
                    _wrap("= ", self(node.default_value)),
                    self._directives(node),
                ],
                " ",
            ),
        )

    def print_union_type_definition(self, node: _ast.UnionTypeDefinition) -> str:
        return self._described(
            node,
            _join(
                [
                    "union",
                    node.name.value,
                    self._directives(node),
                    _wrap("= ", self._many(node.types, " | ")),
                ],
                " ",
            ),
        )

    def print_enum_type_definition(self, node: _ast.EnumTypeDefinition) -> str:
        return self._described(
            node,
            _join(
                [
                    "enum",
                    node.name.value,
                    self._directives(node),
                    self._block(node.values),
                ],
                " ",
            ),
        )

    def print_enum_value_definition(self, node: _ast.EnumValueDefinition) -> str:
        return self._described(
            node, _join([node.name.value, self._directives(node)], " ")
        )

    def print_input_object_type_definition(
        self, node: _ast.InputObjectTypeDefinition
    ) -> str:
        return self._described(
            node,
            _join(
                [
                    "input",
                    node.name.value,
                    self._directives(node),
                    self._block(node.fields),
                ],
                " ",
            ),
        )

    def print_directive_definition(self, node: _ast.DirectiveDefinition) -> str:
        return self._described(
            node,
            "directive @%s%s%s on %s"
            % (
                node.name.value,
                self._argument_definitions(node),
                " repeatable" if node.repeatable else "",
                self._many(node.locations, " | "),
            ),
        )

    def print_schema_extension(self, node: _ast.SchemaExtension) -> str:
        return "extend " + self.print_schema_definition(node)  # type: ignore

    def print_scalar_type_extension(self, node: _ast.ScalarTypeExtension) -> str:
        return "extend " + self.print_scalar_type_definition(node)  # type: ignore

    def print_object_type_extension(self, node: _ast.ObjectTypeExtension) -> str:
        return "extend " + self._composite("type", node)

    def print_interface_type_extension(
        self, node: _ast.InterfaceTypeExtension
    ) -> str:
        return "extend " + self._composite("interface", node)

    def print_union_type_extension(self, node: _ast.UnionTypeExtension) -> str:
        return "extend " + self.print_union_type_definition(node)  # type: ignore

    def print_enum_type_extension(self, node: _ast.EnumTypeExtension) -> str:
        return "extend " + self.print_enum_type_definition(node)  # type: ignore

    def print_input_object_type_extension(
        self, node: _ast.InputObjectTypeExtension
    ) -> str:
        return "extend " + self.print_input_object_type_definition(
            node  # type: ignore
        )


def print_ast(
    node: _ast.Node, indent: Union[int, str] = 2, include_descriptions: bool = True
) -> str:
    """
    Convert an AST node into GraphQL source text.

    Printing a parsed document and parsing the result yields an equivalent
    document, formatting aside.

    Args:
        node: Node to print
        indent: Number of spaces (or indent string) used inside blocks
        include_descriptions: Print descriptions of type system definitions
    """
    return Printer(indent, include_descriptions)(node)
