# -*- coding: utf-8 -*-

from typing import Optional

from ..._string_utils import infer_suggestions, quoted_options_list
from ...exc import InvalidValue
from ...lang import ast as _ast
from ...lang.printer import print_ast
from ...schema import (
    EnumType,
    GraphQLType,
    InputObjectType,
    ListType,
    NonNullType,
    ScalarType,
    nullable_type,
    unwrap_type,
)
from ...schema.scalars import SPECIFIED_SCALAR_TYPES
from ..visitors import ValidationVisitor


class ValuesOfCorrectTypeChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all value literals are of the type
    expected at their position.
    """

    # Values whose expected type is unknown are ignored, other rules report
    # unknown arguments and fields.

    def _report_bad_value(
        self, input_type: GraphQLType, node: _ast.Node, extra: Optional[str] = None
    ) -> None:
        msg = "Expected type %s, found %s" % (input_type, print_ast(node))
        if extra:
            msg += " (%s)" % extra
        self.add_error(msg, [node])

    def _check_leaf(self, node: _ast.Value) -> None:
        input_type = self.type_info.input_type
        if input_type is None:
            return

        named_type = unwrap_type(input_type)
        if not isinstance(named_type, (ScalarType, EnumType)):
            self._report_bad_value(input_type, node)
            return

        try:
            named_type.parse_literal(node)
        except InvalidValue as err:
            # Keep the message of custom scalars which is usually more
            # helpful than the generic one.
            custom = (
                isinstance(named_type, ScalarType)
                and named_type not in SPECIFIED_SCALAR_TYPES
            )
            self._report_bad_value(
                input_type, node, extra=err.message if custom else None
            )

    def enter_int_value(self, node, *_):
        self._check_leaf(node)

    enter_float_value = enter_int_value
    enter_string_value = enter_int_value
    enter_boolean_value = enter_int_value
    enter_enum_value = enter_int_value

    def enter_null_value(self, node, *_):
        input_type = self.type_info.input_type
        if isinstance(input_type, NonNullType):
            self._report_bad_value(input_type, node)

    def enter_list_value(self, node, *_):
        # Type info already tracks the item type at this point.
        list_type = self.type_info.parent_input_type
        if list_type is not None and not isinstance(
            nullable_type(list_type), ListType
        ):
            self._report_bad_value(list_type, node)
            return False
        return None

    def enter_object_value(self, node, *_):
        input_type = self.type_info.input_type
        if input_type is None:
            return None

        named_type = unwrap_type(input_type)
        if not isinstance(named_type, InputObjectType):
            self._check_leaf(node)
            return False

        provided = set(f.name.value for f in node.fields)
        for field_def in named_type.fields:
            if field_def.required and field_def.name not in provided:
                self.add_error(
                    "Required field %s.%s of type %s was not provided"
                    % (named_type.name, field_def.name, field_def.type),
                    [node],
                )
        return None

    def enter_object_field(self, node, *_):
        parent_type = self.type_info.parent_input_type
        parent_type = unwrap_type(parent_type) if parent_type else None
        if self.type_info.input_type is not None:
            return
        if not isinstance(parent_type, InputObjectType):
            return

        name = node.name.value
        suggestions = infer_suggestions(name, [f.name for f in parent_type.fields])
        if suggestions:
            self.add_error(
                "Field %s is not defined by type %s. Did you mean %s?"
                % (name, parent_type, quoted_options_list(suggestions)),
                [node],
            )
        else:
            self.add_error(
                "Field %s is not defined by type %s" % (name, parent_type),
                [node],
            )
