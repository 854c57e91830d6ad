# -*- coding: utf-8 -*-

from collections.abc import Mapping
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from ..schema import ObjectType, is_abstract_type, unwrap_type

if TYPE_CHECKING:
    from .wrappers import ResolveInfo  # noqa: F401


def default_resolver(
    source: Any, args: Dict[str, Any], context: Any, info: "ResolveInfo"
) -> Any:
    """ Resolver used for fields which do not define one.

    Look up the field name as a key when ``source`` is a mapping and as an
    attribute otherwise. Callable values are called without arguments, which
    supports methods and properties alike.
    """
    name = info.field_name
    if isinstance(source, Mapping):
        value = source.get(name, None)
    else:
        value = getattr(source, name, None)

    if callable(value):
        return value()
    return value


def _typename(value: Any) -> Optional[str]:
    if isinstance(value, Mapping):
        typename = value.get("__typename", None)
    else:
        typename = getattr(value, "__typename", None)
    return typename if isinstance(typename, str) else None


async def default_type_resolver(
    value: Any, context: Any, info: "ResolveInfo"
) -> Optional[Union[str, ObjectType]]:
    """ Type resolver used for abstract types which do not define one.

    Use the ``__typename`` key or attribute when present, otherwise return
    the first possible type whose ``is_type_of`` accepts the value.
    ``is_type_of`` can return an awaitable.
    """
    typename = _typename(value)
    if typename is not None:
        return typename

    abstract_type = unwrap_type(info.return_type)
    if not is_abstract_type(abstract_type):
        return None

    for possible_type in info.schema.get_possible_types(abstract_type):
        if possible_type.is_type_of is None:
            continue
        matches = possible_type.is_type_of(value, context, info)
        if isawaitable(matches):
            matches = await matches
        if matches:
            return possible_type

    return None
