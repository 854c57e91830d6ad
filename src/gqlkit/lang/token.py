# -*- coding: utf-8 -*-
"""
Tokens produced by :class:`gqlkit.lang.lexer.Lexer`.
"""

import enum
from typing import Optional


class TokenKind(enum.Enum):
    SOF = "<SOF>"
    EOF = "<EOF>"
    BANG = "!"
    DOLLAR = "$"
    AMP = "&"
    PAREN_L = "("
    PAREN_R = ")"
    SPREAD = "..."
    COLON = ":"
    EQUALS = "="
    AT = "@"
    BRACKET_L = "["
    BRACKET_R = "]"
    BRACE_L = "{"
    PIPE = "|"
    BRACE_R = "}"
    NAME = "Name"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    BLOCK_STRING = "BlockString"
    COMMENT = "Comment"

    def __str__(self) -> str:
        return self.value


PUNCTUATORS = frozenset(
    [
        TokenKind.BANG,
        TokenKind.DOLLAR,
        TokenKind.AMP,
        TokenKind.PAREN_L,
        TokenKind.PAREN_R,
        TokenKind.SPREAD,
        TokenKind.COLON,
        TokenKind.EQUALS,
        TokenKind.AT,
        TokenKind.BRACKET_L,
        TokenKind.BRACKET_R,
        TokenKind.BRACE_L,
        TokenKind.PIPE,
        TokenKind.BRACE_R,
    ]
)


class Token:
    """ Single lexical token.

    Tokens form a doubly linked list through ``prev`` and ``next`` which the
    lexer extends lazily.

    Attributes:
        kind (TokenKind): Token kind
        start (int): 0-indexed start offset
        end (int): 0-indexed end offset
        line (int): 1-indexed line of the first character
        column (int): 1-indexed column of the first character
        value (Optional[str]): Interpreted value for names, numbers,
            strings and comments
        prev (Optional[Token]): Previous token (comments included)
        next (Optional[Token]): Next token, set once known
    """

    __slots__ = ("kind", "start", "end", "line", "column", "value", "prev", "next")

    def __init__(
        self,
        kind: TokenKind,
        start: int,
        end: int,
        line: int,
        column: int,
        prev: "Optional[Token]" = None,
        value: Optional[str] = None,
    ):
        self.kind = kind
        self.start = start
        self.end = end
        self.line = line
        self.column = column
        self.value = value
        self.prev = prev
        self.next = None  # type: Optional[Token]

    def describe(self) -> str:
        """ Short description used in error messages. """
        if self.kind in PUNCTUATORS:
            return '"%s"' % self.kind.value
        if self.value is not None:
            return '%s "%s"' % (self.kind.value, self.value)
        return self.kind.value

    def __repr__(self) -> str:
        return "<Token %s at %d:%d>" % (self.describe(), self.line, self.column)

    def __eq__(self, rhs: object) -> bool:
        return (
            isinstance(rhs, Token)
            and self.kind is rhs.kind
            and self.start == rhs.start
            and self.end == rhs.end
            and self.value == rhs.value
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.start, self.end))
