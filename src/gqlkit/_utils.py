# -*- coding: utf-8 -*-
""" Generic language level helpers for internal use. """

from typing import (
    Any,
    Callable,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    Set,
    TypeVar,
    Union,
)

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)

Lazy = Union[T, Callable[[], T]]


def lazy(maybe_callable: Lazy[T]) -> T:
    """ Call a thunk, or return a plain value as is.

    >>> lazy(42)
    42

    >>> lazy(lambda: 42)
    42
    """
    if callable(maybe_callable):
        return maybe_callable()
    return maybe_callable


def find_one(
    iterable: Iterable[T],
    predicate: Callable[[T], Any],
    default: Optional[T] = None,
) -> Optional[T]:
    """ First entry matching ``predicate``.

    >>> find_one([1, 2, 3, 4], lambda x: x % 2 == 0)
    2

    >>> find_one([1, 3], lambda x: x % 2 == 0) is None
    True
    """
    for entry in iterable:
        if predicate(entry):
            return entry
    return default


def deduplicate(
    iterable: Iterable[H], key: Optional[Callable[[H], Hashable]] = None
) -> Iterator[H]:
    """ Drop repeated entries, keeping the first occurrence.

    >>> list(deduplicate([1, 2, 1, 3, 3]))
    [1, 2, 3]

    >>> list(deduplicate(["a", "bb", "cc"], key=len))
    ['a', 'bb']
    """
    seen = set()  # type: Set[Hashable]
    for entry in iterable:
        marker = entry if key is None else key(entry)
        if marker not in seen:
            seen.add(marker)
            yield entry


def is_iterable(value: Any, strings: bool = True) -> bool:
    """ Check if a value is iterable, optionally excluding strings.

    >>> is_iterable([])
    True

    >>> is_iterable("foo", False)
    False

    >>> is_iterable(42)
    False
    """
    try:
        iter(value)
    except TypeError:
        return False
    return strings or not isinstance(value, (str, bytes))
