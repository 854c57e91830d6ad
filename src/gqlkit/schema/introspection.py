# -*- coding: utf-8 -*-
"""
Meta fields available on every composite type.

Only ``__typename`` is supported, the ``__schema`` and ``__type`` fields are
not exposed.
"""

from .scalars import String
from .types import Field, GraphQLType, NonNullType, is_composite_type

TYPE_NAME_INTROSPECTION_FIELD = Field(
    "__typename",
    NonNullType(String),
    description="The name of the current Object type at runtime.",
    resolver=lambda source, args, context, info: info.parent_type.name,
)


def get_meta_field(parent_type: GraphQLType, name: str):
    if name == TYPE_NAME_INTROSPECTION_FIELD.name and is_composite_type(
        parent_type
    ):
        return TYPE_NAME_INTROSPECTION_FIELD
    return None
