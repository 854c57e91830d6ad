# -*- coding: utf-8 -*-
"""
The :mod:`gqlkit.lang` package turns GraphQL source text into an AST and
back: lexing, parsing, traversal and printing.
"""

# flake8: noqa

from .lexer import Lexer
from .parser import Parser, parse, parse_type, parse_value
from .printer import print_ast
from .source import Location, Source
from .token import Token, TokenKind
from .visitor import BREAK, REMOVE, ParallelVisitor, Visitor, visit

__all__ = (
    "parse",
    "parse_type",
    "parse_value",
    "print_ast",
    "visit",
    "Parser",
    "Lexer",
    "Source",
    "Location",
    "Token",
    "TokenKind",
    "Visitor",
    "ParallelVisitor",
    "BREAK",
    "REMOVE",
)
