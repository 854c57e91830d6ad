# -*- coding: utf-8 -*-
"""
Package information.
"""

__title__ = "gqlkit"
__description__ = "GraphQL query language toolkit: parser, schema, validation and execution."
__version__ = "0.1.0"
__license__ = "MIT"
