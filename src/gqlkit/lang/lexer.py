# -*- coding: utf-8 -*-
"""
GraphQL language lexer.
"""

from typing import Dict, List, Union

from .._string_utils import parse_block_string
from ..exc import (
    InvalidCharacter,
    InvalidEscapeSequence,
    NonTerminatedString,
    UnexpectedCharacter,
    UnexpectedEOF,
)
from .source import Source
from .token import Token, TokenKind

SYMBOLS = {
    "!": TokenKind.BANG,
    "$": TokenKind.DOLLAR,
    "&": TokenKind.AMP,
    "(": TokenKind.PAREN_L,
    ")": TokenKind.PAREN_R,
    ":": TokenKind.COLON,
    "=": TokenKind.EQUALS,
    "@": TokenKind.AT,
    "[": TokenKind.BRACKET_L,
    "]": TokenKind.BRACKET_R,
    "{": TokenKind.BRACE_L,
    "|": TokenKind.PIPE,
    "}": TokenKind.BRACE_R,
}  # type: Dict[str, TokenKind]

QUOTED_CHARS = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _is_name_start(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_name_continue(char: str) -> bool:
    return _is_name_start(char) or ("0" <= char <= "9")


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_source_char(char: str) -> bool:
    return char >= " " or char in "\t\n\r"


def _printable(char: str) -> str:
    if char >= " " and char != "\x7f":
        return char
    return "\\u%04X" % ord(char)


class Lexer:
    """
    GraphQL lexer, converting source text into a linked list of
    :class:`~gqlkit.lang.token.Token`.

    The lexer starts on a ``<SOF>`` token. :meth:`advance` moves to the next
    significant token and :meth:`lookahead` peeks at it without moving.
    Comments are kept in the token list (reachable through ``prev`` /
    ``next``) but never returned by either method.

    Args:
        source: Document text or :class:`~gqlkit.lang.source.Source`

    Attributes:
        source (Source): Source being lexed
        token (Token): Current token
        last_token (Token): Token before the current one
    """

    __slots__ = ("source", "_body", "token", "last_token", "_line", "_line_start")

    def __init__(self, source: Union[str, bytes, Source]):
        self.source = source if isinstance(source, Source) else Source(source)
        self._body = self.source.body
        self._line = 1
        self._line_start = 0
        self.token = Token(TokenKind.SOF, 0, 0, 0, 0)
        self.last_token = self.token

    def advance(self) -> Token:
        """
        Move to the next significant token and return it.

        Raises:
            :class:`~gqlkit.exc.GraphQLSyntaxError`: on invalid source text.
        """
        self.last_token = self.token
        self.token = self.lookahead()
        return self.token

    def lookahead(self) -> Token:
        """
        Return the next significant token without consuming it.

        Tokens are only read once: the result is stored on the current token
        so repeated calls are cheap.
        """
        token = self.token
        if token.kind is TokenKind.EOF:
            return token

        while True:
            if token.next is None:
                token.next = self._read_token(token)
            token = token.next
            if token.kind is not TokenKind.COMMENT:
                return token

    def _token(
        self, kind: TokenKind, start: int, end: int, prev: Token, value=None
    ) -> Token:
        return Token(
            kind,
            start,
            end,
            self._line,
            start - self._line_start + 1,
            prev,
            value,
        )

    def _newline(self, position: int) -> int:
        """ Consume a line terminator at ``position``. """
        body = self._body
        if body[position] == "\r" and body[position + 1 : position + 2] == "\n":
            position += 2
        else:
            position += 1
        self._line += 1
        self._line_start = position
        return position

    def _skip_ignored(self, position: int) -> int:
        body = self._body
        size = len(body)
        while position < size:
            char = body[position]
            if char in " \t,\ufeff":
                position += 1
            elif char in "\n\r":
                position = self._newline(position)
            else:
                break
        return position

    def _read_token(self, prev: Token) -> Token:  # noqa: C901
        body = self._body
        position = self._skip_ignored(prev.end)

        if position >= len(body):
            return self._token(TokenKind.EOF, position, position, prev)

        char = body[position]

        if char in SYMBOLS:
            return self._token(SYMBOLS[char], position, position + 1, prev)
        elif char == "#":
            return self._read_comment(position, prev)
        elif char == ".":
            if body[position : position + 3] == "...":
                return self._token(TokenKind.SPREAD, position, position + 3, prev)
            raise UnexpectedCharacter(
                'Unexpected character "."', position, body
            )
        elif _is_name_start(char):
            return self._read_name(position, prev)
        elif char == "-" or _is_digit(char):
            return self._read_number(position, prev)
        elif body[position : position + 3] == '"""':
            return self._read_block_string(position, prev)
        elif char == '"':
            return self._read_string(position, prev)
        elif not _is_source_char(char):
            raise InvalidCharacter(
                'Invalid character "%s"' % _printable(char), position, body
            )

        raise UnexpectedCharacter(
            'Unexpected character "%s"' % _printable(char), position, body
        )

    def _read_comment(self, start: int, prev: Token) -> Token:
        body = self._body
        position = start + 1
        while position < len(body):
            char = body[position]
            if char in "\n\r" or not _is_source_char(char):
                break
            position += 1
        return self._token(
            TokenKind.COMMENT, start, position, prev, body[start + 1 : position]
        )

    def _read_name(self, start: int, prev: Token) -> Token:
        body = self._body
        position = start + 1
        while position < len(body) and _is_name_continue(body[position]):
            position += 1
        return self._token(
            TokenKind.NAME, start, position, prev, body[start:position]
        )

    def _read_digits(self, position: int) -> int:
        body = self._body
        if position >= len(body):
            raise UnexpectedEOF(position, body)
        if not _is_digit(body[position]):
            raise UnexpectedCharacter(
                'Invalid number, expected digit but got "%s"'
                % _printable(body[position]),
                position,
                body,
            )
        while position < len(body) and _is_digit(body[position]):
            position += 1
        return position

    def _read_number(self, start: int, prev: Token) -> Token:
        body = self._body
        position = start
        is_float = False

        if body[position] == "-":
            position += 1

        if body[position : position + 1] == "0":
            position += 1
            if position < len(body) and _is_digit(body[position]):
                raise UnexpectedCharacter(
                    'Invalid number, unexpected digit after 0: "%s"'
                    % body[position],
                    position,
                    body,
                )
        else:
            position = self._read_digits(position)

        if body[position : position + 1] == ".":
            is_float = True
            position = self._read_digits(position + 1)

        if body[position : position + 1] in ("e", "E"):
            is_float = True
            position += 1
            if body[position : position + 1] in ("+", "-"):
                position += 1
            position = self._read_digits(position)

        if position < len(body):
            char = body[position]
            if char == "." or _is_name_start(char):
                raise UnexpectedCharacter(
                    'Invalid number, expected digit but got "%s"' % char,
                    position,
                    body,
                )

        return self._token(
            TokenKind.FLOAT if is_float else TokenKind.INT,
            start,
            position,
            prev,
            body[start:position],
        )

    def _read_string(self, start: int, prev: Token) -> Token:
        body = self._body
        position = start + 1
        chunks = []  # type: List[str]

        while position < len(body):
            char = body[position]
            if char == '"':
                return self._token(
                    TokenKind.STRING, start, position + 1, prev, "".join(chunks)
                )
            elif char in "\n\r":
                break
            elif char == "\\":
                value, position = self._read_escape_sequence(position)
                chunks.append(value)
            elif not _is_source_char(char):
                raise InvalidCharacter(
                    "Invalid character within string: \"%s\"" % _printable(char),
                    position,
                    body,
                )
            else:
                chunks.append(char)
                position += 1

        raise NonTerminatedString("Unterminated string", position, body)

    def _read_escape_sequence(self, position: int):
        body = self._body
        code = body[position + 1 : position + 2]
        if code in QUOTED_CHARS:
            return QUOTED_CHARS[code], position + 2
        if code == "u":
            digits = body[position + 2 : position + 6]
            if len(digits) == 4 and all(c in HEX_DIGITS for c in digits):
                return chr(int(digits, 16)), position + 6
            raise InvalidEscapeSequence(
                'Invalid unicode escape sequence: "\\u%s"' % digits,
                position,
                body,
            )
        if not code:
            raise NonTerminatedString("Unterminated string", position + 1, body)
        raise InvalidEscapeSequence(
            'Invalid character escape sequence: "\\%s"' % _printable(code),
            position,
            body,
        )

    def _read_block_string(self, start: int, prev: Token) -> Token:
        body = self._body
        position = start + 3
        chunk_start = position
        chunks = []  # type: List[str]
        # Captured before consuming new lines as the token starts here.
        line, line_start = self._line, self._line_start

        while position < len(body):
            char = body[position]
            if body[position : position + 3] == '"""':
                chunks.append(body[chunk_start:position])
                return Token(
                    TokenKind.BLOCK_STRING,
                    start,
                    position + 3,
                    line,
                    start - line_start + 1,
                    prev,
                    parse_block_string("".join(chunks)),
                )
            elif body[position : position + 4] == '\\"""':
                chunks.append(body[chunk_start:position])
                chunks.append('"""')
                position += 4
                chunk_start = position
            elif char in "\n\r":
                position = self._newline(position)
            elif not _is_source_char(char):
                raise InvalidCharacter(
                    "Invalid character within string: \"%s\"" % _printable(char),
                    position,
                    body,
                )
            else:
                position += 1

        raise NonTerminatedString("Unterminated string", position, body)
