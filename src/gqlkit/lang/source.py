# -*- coding: utf-8 -*-

from typing import Union

from .._string_utils import ensure_unicode
from ..exc import InvalidCharacter


class Source:
    """ Wrap a document body so that locations can refer back to it.

    Args:
        body: Document text, bytestrings are decoded as UTF-8
        name: Optional name used in diagnostics

    Raises:
        :class:`~gqlkit.exc.InvalidCharacter`: if ``body`` is not valid
            UTF-8

    Attributes:
        body (str): Document text
        name (str): Name used in diagnostics
    """

    __slots__ = ("body", "name")

    def __init__(self, body: Union[str, bytes], name: str = "GraphQL request"):
        try:
            self.body = ensure_unicode(body)
        except UnicodeDecodeError as err:
            raise InvalidCharacter(
                "Invalid UTF-8 byte 0x%02x" % err.object[err.start],
                len(err.object[: err.start].decode("utf8")),
                err.object.decode("utf8", errors="replace"),
            ) from err
        self.name = name

    def __len__(self) -> int:
        return len(self.body)

    def __repr__(self) -> str:
        return "<Source %s (%d chars)>" % (self.name, len(self.body))


class Location:
    """ Span of source text covered by an AST node.

    Attributes:
        start (int): 0-indexed offset of the first character
        end (int): 0-indexed offset after the last character
        source (Source): Source the offsets refer to
    """

    __slots__ = ("start", "end", "source")

    def __init__(self, start: int, end: int, source: Source):
        self.start = start
        self.end = end
        self.source = source

    def __eq__(self, rhs: object) -> bool:
        if isinstance(rhs, tuple):
            return (self.start, self.end) == rhs
        return (
            isinstance(rhs, Location)
            and self.start == rhs.start
            and self.end == rhs.end
        )

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    def __iter__(self):
        return iter((self.start, self.end))

    def __repr__(self) -> str:
        return "<Location (%d, %d)>" % (self.start, self.end)
