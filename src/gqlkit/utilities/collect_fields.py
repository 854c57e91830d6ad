# -*- coding: utf-8 -*-

from typing import Any, Dict, List, Mapping, Sequence, Set, Union

from ..lang import ast as _ast
from ..schema import (
    IncludeDirective,
    ObjectType,
    Schema,
    SkipDirective,
    is_abstract_type,
)
from .coerce_value import directive_arguments

GroupedFields = Dict[str, List[_ast.Field]]


def collect_fields(
    schema: Schema,
    object_type: ObjectType,
    selections: Sequence[_ast.Selection],
    fragments: Mapping[str, _ast.FragmentDefinition],
    variables: Mapping[str, Any],
) -> GroupedFields:
    """
    Flatten a selection set into field nodes grouped by response name.

    Fragment spreads and inline fragments are inlined when their type
    condition applies to ``object_type`` (the runtime type); selections
    excluded by ``@skip`` / ``@include`` are dropped. Each fragment is
    only inlined once. Response names keep the order of their first
    occurrence.
    """
    grouped = {}  # type: GroupedFields
    visited_fragments = set()  # type: Set[str]

    def collect(selections: Sequence[_ast.Selection]) -> None:
        for selection in selections:
            if not should_include(selection, variables):
                continue

            if isinstance(selection, _ast.Field):
                grouped.setdefault(selection.response_name, []).append(selection)

            elif isinstance(selection, _ast.InlineFragment):
                if fragment_applies(schema, object_type, selection):
                    collect(selection.selection_set.selections)

            elif isinstance(selection, _ast.FragmentSpread):
                name = selection.name.value
                if name in visited_fragments:
                    continue
                visited_fragments.add(name)
                fragment = fragments.get(name)
                if fragment is not None and fragment_applies(
                    schema, object_type, fragment
                ):
                    collect(fragment.selection_set.selections)

    collect(selections)
    return grouped


def should_include(
    node: Union[_ast.Field, _ast.FragmentSpread, _ast.InlineFragment],
    variables: Mapping[str, Any],
) -> bool:
    """
    Apply ``@skip`` and ``@include`` to a selection.

    Raises:
        :class:`~gqlkit.exc.CoercionError`: if the directive arguments are
            invalid.
    """
    skip = directive_arguments(SkipDirective, node, variables)
    if skip is not None and skip["if"]:
        return False

    include = directive_arguments(IncludeDirective, node, variables)
    if include is not None and not include["if"]:
        return False

    return True


def fragment_applies(
    schema: Schema,
    object_type: ObjectType,
    fragment: Union[_ast.InlineFragment, _ast.FragmentDefinition],
) -> bool:
    type_condition = fragment.type_condition
    if type_condition is None:
        return True

    fragment_type = schema.types.get(type_condition.name.value)
    if fragment_type is None:
        return False
    if fragment_type is object_type:
        return True
    if is_abstract_type(fragment_type):
        return schema.is_possible_type(fragment_type, object_type)  # type: ignore
    return False
