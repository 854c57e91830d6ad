# -*- coding: utf-8 -*-
"""
Detection of fields which share a response name but cannot be merged.

Conflicts occur when two fields produce the same response name but would
produce differing values. To limit the number of comparisons, fields are
compared "within" a single selection set once, and then "between" sets of
fields: a selection set and the fragments it spreads, pairs of fragments
spread together, and the sub-selections of overlapping fields.

Fragment pairs are memoized to avoid comparing the same fragments more than
once, which is what keeps the check tractable for documents spreading
fragments many times.
"""

import itertools
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ...exc import UnknownType
from ...lang import ast as _ast
from ...lang.printer import print_ast
from ...schema import (
    Field,
    GraphQLType,
    InterfaceType,
    ListType,
    NonNullType,
    ObjectType,
    Schema,
    is_leaf_type,
    unwrap_type,
)
from ...schema.introspection import get_meta_field
from ..visitors import ValidationVisitor

FieldEntry = Tuple[Optional[GraphQLType], _ast.Field, Optional[Field]]
FieldMap = Dict[str, List[FieldEntry]]
Collected = Tuple[FieldMap, List[str]]
Conflict = Tuple[str, str, List[_ast.Node]]


class _PairSet:
    """
    Symmetric set of fragment name pairs.

    A pair compared while the parents were not mutually exclusive covers
    the mutually exclusive case as well, the opposite is not true.
    """

    def __init__(self):
        self._data = {}  # type: Dict[Tuple[str, str], bool]

    @staticmethod
    def _key(a: str, b: str) -> Tuple[str, str]:
        return (a, b) if a < b else (b, a)

    def has(self, a: str, b: str, mutually_exclusive: bool) -> bool:
        seen = self._data.get(self._key(a, b))
        if seen is None:
            return False
        return True if mutually_exclusive else not seen

    def add(self, a: str, b: str, mutually_exclusive: bool) -> None:
        self._data[self._key(a, b)] = mutually_exclusive


def _type_from_ast(schema: Schema, node: _ast.Type) -> Optional[GraphQLType]:
    try:
        return schema.get_type_from_literal(node)
    except UnknownType:
        return None


class ConflictFinder:
    """
    Stateful conflict detection for a single document.

    Collected fields per selection set and compared fragment pairs are
    cached for the lifetime of the instance.
    """

    def __init__(
        self, schema: Schema, fragments: Dict[str, _ast.FragmentDefinition]
    ):
        self.schema = schema
        self.fragments = fragments
        self._collected = {}  # type: Dict[int, Collected]
        self._compared_pairs = _PairSet()

    def find_within(
        self, selection_set: _ast.SelectionSet, parent_type: Optional[GraphQLType]
    ) -> List[Conflict]:
        """ Conflicts of a selection set, including spread fragments. """
        field_map, fragment_names = self._collect(parent_type, selection_set)

        conflicts = list(self._within(field_map))

        compared = set()  # type: Set[str]
        for name in fragment_names:
            conflicts.extend(
                self._between_fields_and_fragment(False, field_map, name, compared)
            )

        for name_1, name_2 in itertools.combinations(fragment_names, 2):
            conflicts.extend(self._between_fragments(False, name_1, name_2))

        return conflicts

    def _collect(
        self, parent_type: Optional[GraphQLType], selection_set: _ast.SelectionSet
    ) -> Collected:
        key = id(selection_set)
        try:
            return self._collected[key]
        except KeyError:
            pass

        field_map = {}  # type: FieldMap
        fragment_names = []  # type: List[str]
        self._collect_into(parent_type, selection_set, field_map, fragment_names)
        collected = (field_map, list(dict.fromkeys(fragment_names)))
        self._collected[key] = collected
        return collected

    def _collect_into(
        self,
        parent_type: Optional[GraphQLType],
        selection_set: _ast.SelectionSet,
        field_map: FieldMap,
        fragment_names: List[str],
    ) -> None:
        for selection in selection_set.selections:
            if isinstance(selection, _ast.Field):
                field_map.setdefault(selection.response_name, []).append(
                    (parent_type, selection, self._field_def(parent_type, selection))
                )
            elif isinstance(selection, _ast.FragmentSpread):
                fragment_names.append(selection.name.value)
            elif isinstance(selection, _ast.InlineFragment):
                condition = selection.type_condition
                self._collect_into(
                    _type_from_ast(self.schema, condition)
                    if condition is not None
                    else parent_type,
                    selection.selection_set,
                    field_map,
                    fragment_names,
                )

    def _field_def(
        self, parent_type: Optional[GraphQLType], node: _ast.Field
    ) -> Optional[Field]:
        if parent_type is None:
            return None
        meta = get_meta_field(parent_type, node.name.value)
        if meta is not None:
            return meta
        if isinstance(parent_type, (ObjectType, InterfaceType)):
            return parent_type.field_map.get(node.name.value)
        return None

    def _fragment_fields(self, name: str) -> Optional[Collected]:
        fragment = self.fragments.get(name)
        if fragment is None:
            return None
        return self._collect(
            _type_from_ast(self.schema, fragment.type_condition),
            fragment.selection_set,
        )

    def _within(self, field_map: FieldMap) -> Iterator[Conflict]:
        for response_name, fields in field_map.items():
            for field_1, field_2 in itertools.combinations(fields, 2):
                conflict = self._find_conflict(False, response_name, field_1, field_2)
                if conflict is not None:
                    yield conflict

    def _between(
        self, mutually_exclusive: bool, field_map_1: FieldMap, field_map_2: FieldMap
    ) -> Iterator[Conflict]:
        for response_name, fields_1 in field_map_1.items():
            fields_2 = field_map_2.get(response_name)
            if not fields_2:
                continue
            for field_1, field_2 in itertools.product(fields_1, fields_2):
                conflict = self._find_conflict(
                    mutually_exclusive, response_name, field_1, field_2
                )
                if conflict is not None:
                    yield conflict

    def _between_fields_and_fragment(
        self,
        mutually_exclusive: bool,
        field_map: FieldMap,
        fragment_name: str,
        compared: Set[str],
    ) -> Iterator[Conflict]:
        if fragment_name in compared:
            return
        compared.add(fragment_name)

        collected = self._fragment_fields(fragment_name)
        if collected is None:
            return

        fragment_field_map, nested = collected
        if fragment_field_map is field_map:
            return

        yield from self._between(mutually_exclusive, field_map, fragment_field_map)

        for name in nested:
            yield from self._between_fields_and_fragment(
                mutually_exclusive, field_map, name, compared
            )

    def _between_fragments(
        self, mutually_exclusive: bool, name_1: str, name_2: str
    ) -> Iterator[Conflict]:
        if name_1 == name_2:
            return
        if self._compared_pairs.has(name_1, name_2, mutually_exclusive):
            return
        self._compared_pairs.add(name_1, name_2, mutually_exclusive)

        collected_1 = self._fragment_fields(name_1)
        collected_2 = self._fragment_fields(name_2)
        if collected_1 is None or collected_2 is None:
            return

        field_map_1, nested_1 = collected_1
        field_map_2, nested_2 = collected_2

        yield from self._between(mutually_exclusive, field_map_1, field_map_2)

        for nested in nested_2:
            yield from self._between_fragments(mutually_exclusive, name_1, nested)

        for nested in nested_1:
            yield from self._between_fragments(mutually_exclusive, nested, name_2)

    def _between_subselections(
        self,
        mutually_exclusive: bool,
        parent_type_1: Optional[GraphQLType],
        selection_set_1: _ast.SelectionSet,
        parent_type_2: Optional[GraphQLType],
        selection_set_2: _ast.SelectionSet,
    ) -> Iterator[Conflict]:
        field_map_1, fragments_1 = self._collect(parent_type_1, selection_set_1)
        field_map_2, fragments_2 = self._collect(parent_type_2, selection_set_2)

        yield from self._between(mutually_exclusive, field_map_1, field_map_2)

        for name in fragments_2:
            yield from self._between_fields_and_fragment(
                mutually_exclusive, field_map_1, name, set()
            )

        for name in fragments_1:
            yield from self._between_fields_and_fragment(
                mutually_exclusive, field_map_2, name, set()
            )

        for name_1, name_2 in itertools.product(fragments_1, fragments_2):
            yield from self._between_fragments(mutually_exclusive, name_1, name_2)

    def _find_conflict(
        self,
        parents_mutually_exclusive: bool,
        response_name: str,
        field_1: FieldEntry,
        field_2: FieldEntry,
    ) -> Optional[Conflict]:
        parent_1, node_1, def_1 = field_1
        parent_2, node_2, def_2 = field_2

        # Fields on two different object types can never apply to the same
        # value so they are allowed to diverge in name and arguments.
        mutually_exclusive = parents_mutually_exclusive or (
            parent_1 is not parent_2
            and isinstance(parent_1, ObjectType)
            and isinstance(parent_2, ObjectType)
        )

        name_1, name_2 = node_1.name.value, node_2.name.value

        if not mutually_exclusive:
            if name_1 != name_2:
                return (
                    response_name,
                    '"%s" and "%s" are different fields' % (name_1, name_2),
                    [node_1, node_2],
                )

            if not _same_arguments(node_1.arguments, node_2.arguments):
                return (
                    response_name,
                    "they have differing arguments",
                    [node_1, node_2],
                )

        type_1 = def_1.type if def_1 is not None else None
        type_2 = def_2.type if def_2 is not None else None

        if (
            type_1 is not None
            and type_2 is not None
            and _types_conflict(type_1, type_2)
        ):
            return (
                response_name,
                'they return conflicting types "%s" and "%s"' % (type_1, type_2),
                [node_1, node_2],
            )

        if node_1.selection_set is not None and node_2.selection_set is not None:
            sub_conflicts = list(
                self._between_subselections(
                    mutually_exclusive,
                    unwrap_type(type_1) if type_1 is not None else None,
                    node_1.selection_set,
                    unwrap_type(type_2) if type_2 is not None else None,
                    node_2.selection_set,
                )
            )
            if sub_conflicts:
                reason = " and ".join(
                    'subfields "%s" conflict because %s' % (name, sub_reason)
                    for name, sub_reason, _ in sub_conflicts
                )
                nodes = [node_1]  # type: List[_ast.Node]
                for _, _, sub_nodes in sub_conflicts:
                    nodes.extend(sub_nodes[:1])
                nodes.append(node_2)
                for _, _, sub_nodes in sub_conflicts:
                    nodes.extend(sub_nodes[1:])
                return response_name, reason, nodes

        return None


def _same_arguments(
    args_1: Sequence[_ast.Argument], args_2: Sequence[_ast.Argument]
) -> bool:
    if len(args_1) != len(args_2):
        return False
    values_2 = {arg.name.value: arg.value for arg in args_2}
    for arg in args_1:
        other = values_2.get(arg.name.value)
        if other is None or print_ast(arg.value) != print_ast(other):
            return False
    return True


def _types_conflict(type_1: GraphQLType, type_2: GraphQLType) -> bool:
    """
    Two types conflict if they could not both apply to a single value.

    Composite types never conflict here as their fields are compared
    separately, list and non null wrappers must match.
    """
    for wrapper in (ListType, NonNullType):
        if isinstance(type_1, wrapper) or isinstance(type_2, wrapper):
            if not (isinstance(type_1, wrapper) and isinstance(type_2, wrapper)):
                return True
            return _types_conflict(type_1.type, type_2.type)  # type: ignore

    if is_leaf_type(type_1) or is_leaf_type(type_2):
        return type_1 is not type_2

    return False


class OverlappingFieldsCanBeMergedChecker(ValidationVisitor):
    """
    A selection set is only valid if all fields (including spreading any
    fragments) either correspond to distinct response names or can be merged
    without ambiguity.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._finder = None  # type: Optional[ConflictFinder]

    def enter_document(self, node, *_):
        self._finder = ConflictFinder(self.schema, node.fragments)

    def enter_selection_set(self, node, *_):
        assert self._finder is not None
        for response_name, reason, nodes in self._finder.find_within(
            node, self.type_info.parent_type
        ):
            self.add_error(
                'Fields "%s" conflict because %s. Use different aliases on '
                "the fields to fetch both if this was intentional."
                % (response_name, reason),
                nodes,
            )
