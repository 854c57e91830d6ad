# -*- coding: utf-8 -*-
""" String helpers used for block strings, diagnostics and error messages. """

import re
import textwrap
from typing import Callable, Iterable, List, Sequence, Tuple, Union

LINE_SEPARATOR = re.compile(r"\r\n|[\n\r]")

PathEntry = Union[int, str]


def ensure_unicode(string: Union[str, bytes]) -> str:
    if isinstance(string, bytes):
        return string.decode("utf8")
    return string


def leading_whitespace(line: str) -> int:
    """
    >>> leading_whitespace("  \\tfoo")
    3

    >>> leading_whitespace("foo")
    0
    """
    count = 0
    for char in line:
        if char not in " \t":
            break
        count += 1
    return count


def is_blank(line: str) -> bool:
    return leading_whitespace(line) == len(line)


def parse_block_string(raw_value: str) -> str:
    """ Dedent the raw content of a block string.

    The common indentation is computed over every line after the first one,
    ignoring blank lines, and removed from these lines. Leading and trailing
    blank lines are then dropped.

    >>> parse_block_string("\\n    Hello,\\n      World!\\n\\n    Yours,\\n  ")
    'Hello,\\n  World!\\n\\nYours,'

    >>> parse_block_string("  first\\n    second")
    '  first\\nsecond'
    """
    lines = LINE_SEPARATOR.split(raw_value)

    common_indent = None
    for line in lines[1:]:
        indent = leading_whitespace(line)
        if indent < len(line) and (
            common_indent is None or indent < common_indent
        ):
            common_indent = indent

    if common_indent:
        lines = lines[:1] + [line[common_indent:] for line in lines[1:]]

    while lines and is_blank(lines[0]):
        lines.pop(0)

    while lines and is_blank(lines[-1]):
        lines.pop()

    return "\n".join(lines)


def dedent(raw_string: str) -> str:
    """ Mostly used in tests to keep inline documents readable. """
    return textwrap.dedent(raw_string).lstrip()


def index_to_loc(body: str, position: int) -> Tuple[int, int]:
    r""" Convert a 0-indexed offset into a 1-indexed (line, column) tuple.

    >>> index_to_loc("ab\ncd\ne", 0)
    (1, 1)

    >>> index_to_loc("ab\ncd\ne", 4)
    (2, 2)

    >>> index_to_loc("ab\r\ncd", 4)
    (2, 1)

    >>> index_to_loc("", 0)
    (1, 1)

    >>> index_to_loc("", 3)
    Traceback (most recent call last):
        ...
    IndexError: 3
    """
    if position < 0 or position > len(body):
        raise IndexError(position)

    line, line_start = 1, 0
    for match in LINE_SEPARATOR.finditer(body, 0, position):
        line += 1
        line_start = match.end()
    return line, position - line_start + 1


def highlight_location(body: str, position: int, context: int = 2) -> str:
    """ Render a few source lines around a position with a caret under
    the offending column.

    Args:
        body: Source string
        position: 0-indexed position of the character
        context: How many lines to show before and after

    Returns:
        Formatted view starting with ``(line:column):``
    """
    line, column = index_to_loc(body, position)
    lines = LINE_SEPARATOR.split(body)
    first = max(0, line - 1 - context)
    last = min(len(lines), line + context)
    width = len(str(last))

    output = ["(%d:%d):" % (line, column)]
    for index in range(first, last):
        output.append("  %s:%s" % (str(index + 1).rjust(width), lines[index]))
        if index == line - 1:
            output.append(" " * (width + 2 + column) + "^")
    return "\n".join(output) + "\n"


def levenshtein(s1: str, s2: str) -> int:
    """ Levenshtein edit distance between 2 strings.

    >>> levenshtein("kitten", "sitting")
    3
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current = [i + 1]
        for j, c2 in enumerate(s2):
            current.append(
                min(previous[j + 1] + 1, current[j] + 1, previous[j] + (c1 != c2))
            )
        previous = current
    return previous[-1]


def infer_suggestions(
    candidate: str,
    options: Iterable[str],
    distance: Callable[[str, str], int] = levenshtein,
) -> List[str]:
    """ Most similar options to ``candidate``, closest first.

    >>> infer_suggestions("nmae", ["name", "age", "nickname"])
    ['name']
    """
    scored = []
    for option in options:
        dist = distance(candidate.lower(), option.lower())
        if dist <= max(len(candidate) / 2, len(option) / 2, 1):
            scored.append((dist, option))
    return [option for _, option in sorted(scored, key=lambda s: s[0])]


def quoted_options_list(options: Sequence[str], max_items: int = 5) -> str:
    """
    >>> quoted_options_list([])
    ''

    >>> quoted_options_list(['foo'])
    '"foo"'

    >>> quoted_options_list(['foo', 'bar', 'baz'])
    '"foo", "bar" or "baz"'
    """
    quoted = ['"%s"' % option for option in options[:max_items]]
    if len(quoted) < 2:
        return "".join(quoted)
    return "%s or %s" % (", ".join(quoted[:-1]), quoted[-1])


def stringify_path(path: Iterable[PathEntry]) -> str:
    """ Render a response path.

    >>> stringify_path(['foo', 0, 'bar'])
    'foo[0].bar'

    >>> stringify_path([1, 'foo'])
    '[1].foo'

    >>> stringify_path([])
    ''
    """
    rendered = ""
    for entry in path:
        if isinstance(entry, int):
            rendered += "[%d]" % entry
        else:
            rendered += ".%s" % entry
    return rendered.lstrip(".")
