# -*- coding: utf-8 -*-
"""
The :mod:`gqlkit.schema` package exposes the classes and functions used to
create, validate and inspect GraphQL schemas programmatically.
"""

# flake8: noqa

from .directives import (
    SPECIFIED_DIRECTIVES,
    DeprecatedDirective,
    IncludeDirective,
    SkipDirective,
)
from .scalars import ID, SPECIFIED_SCALAR_TYPES, Boolean, Float, Int, String
from .schema import Schema
from .types import (
    Argument,
    Directive,
    EnumType,
    EnumValue,
    Field,
    GraphQLType,
    InputField,
    InputObjectType,
    InputValue,
    InterfaceType,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    ScalarType,
    UnionType,
    WrappingType,
    is_abstract_type,
    is_composite_type,
    is_input_type,
    is_leaf_type,
    is_output_type,
    nullable_type,
    unwrap_type,
)
from .validation import validate_schema
