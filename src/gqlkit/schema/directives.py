# -*- coding: utf-8 -*-
""" Directives every schema supports. """

from .scalars import Boolean, String
from .types import Argument, Directive, NonNullType

_EXECUTABLE_LOCATIONS = ["FIELD", "FRAGMENT_SPREAD", "INLINE_FRAGMENT"]

IncludeDirective = Directive(
    "include",
    locations=_EXECUTABLE_LOCATIONS,
    args=[Argument("if", NonNullType(Boolean), description="Included when true.")],
    description=(
        "Directs the executor to include this field or fragment only when the "
        "`if` argument is true."
    ),
)

SkipDirective = Directive(
    "skip",
    locations=_EXECUTABLE_LOCATIONS,
    args=[Argument("if", NonNullType(Boolean), description="Skipped when true.")],
    description=(
        "Directs the executor to skip this field or fragment when the `if` "
        "argument is true."
    ),
)

DEFAULT_DEPRECATION_REASON = "No longer supported"

DeprecatedDirective = Directive(
    "deprecated",
    locations=["FIELD_DEFINITION", "ARGUMENT_DEFINITION", "ENUM_VALUE"],
    args=[
        Argument(
            "reason",
            String,
            default_value=DEFAULT_DEPRECATION_REASON,
            description="Explains why this element was deprecated.",
        )
    ],
    description="Marks an element of a GraphQL schema as no longer supported.",
)

SPECIFIED_DIRECTIVES = (IncludeDirective, SkipDirective, DeprecatedDirective)
