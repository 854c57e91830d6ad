# -*- coding: utf-8 -*-
"""
gqlkit
~~~~~~

gqlkit is a pure python implementation of the `GraphQL <https://graphql.org/>`_
query language: parsing, schema definition, validation and asyncio based
execution.

The main :mod:`gqlkit` package provides the minimum required to build GraphQL
schemas and execute queries against them while the relevant submodules expose
the lower level building blocks.
"""

# flake8: noqa

from .version import __version__  # isort:skip

from . import lang, schema, utilities, validation
from ._graphql import graphql, graphql_blocking
from .execution import GraphQLResult, ResolveInfo, execute
from .lang import parse
from .sdl import ResolverMap, build_schema, extend_schema
from .validation import validate

__all__ = (
    "__version__",
    "graphql",
    "graphql_blocking",
    "execute",
    "parse",
    "validate",
    "GraphQLResult",
    "ResolveInfo",
    "ResolverMap",
    "build_schema",
    "extend_schema",
)
