# -*- coding: utf-8 -*-
"""
Helpers shared by validation and execution to work with values, selections
and type information of GraphQL documents.
"""

# flake8: noqa

from .coerce_value import (
    MAX_VARIABLE_ERRORS,
    coerce_argument_values,
    coerce_value,
    coerce_variable_values,
    directive_arguments,
)
from .collect_fields import collect_fields, fragment_applies, should_include
from .type_info import TypeInfo, TypeInfoVisitor
from .value_from_ast import value_from_ast
