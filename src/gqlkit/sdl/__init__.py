# -*- coding: utf-8 -*-
"""
Build schemas from type system documents written in the GraphQL schema
definition language (SDL).
"""

# flake8: noqa

from .builder import TypesBuilder, build_schema, extend_schema
from .resolver_map import ResolverMap
