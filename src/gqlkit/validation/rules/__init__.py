# -*- coding: utf-8 -*-
"""
Validation rules for executable documents.

These rules are **all** used by default when calling
:func:`gqlkit.validation.validate` and are accessible together as
:data:`gqlkit.validation.SPECIFIED_RULES`.

Rules receive the usual visitor arguments ``(node, key, parent, path,
ancestors)``, most of them only need the node.
"""

from typing import Dict, List, Optional, Set

from ..._string_utils import infer_suggestions, quoted_options_list
from ...exc import UnknownType
from ...lang import ast as _ast
from ...lang.printer import print_ast
from ...schema import (
    GraphQLType,
    InterfaceType,
    NonNullType,
    ObjectType,
    UnionType,
    is_composite_type,
    is_input_type,
    is_leaf_type,
    unwrap_type,
)
from ..visitors import ValidationVisitor, VariablesCollector
from .overlapping_fields_can_be_merged import (  # noqa: F401
    OverlappingFieldsCanBeMergedChecker,
)
from .values_of_correct_type import ValuesOfCorrectTypeChecker  # noqa: F401

__all__ = (
    "ExecutableDefinitionsChecker",
    "UniqueOperationNameChecker",
    "LoneAnonymousOperationChecker",
    "SingleFieldSubscriptionsChecker",
    "KnownTypeNamesChecker",
    "FragmentsOnCompositeTypesChecker",
    "VariablesAreInputTypesChecker",
    "ScalarLeafsChecker",
    "FieldsOnCorrectTypeChecker",
    "UniqueFragmentNamesChecker",
    "KnownFragmentNamesChecker",
    "NoUnusedFragmentsChecker",
    "PossibleFragmentSpreadsChecker",
    "NoFragmentCyclesChecker",
    "UniqueVariableNamesChecker",
    "NoUndefinedVariablesChecker",
    "NoUnusedVariablesChecker",
    "KnownDirectivesChecker",
    "UniqueDirectivesPerLocationChecker",
    "KnownArgumentNamesChecker",
    "UniqueArgumentNamesChecker",
    "ValuesOfCorrectTypeChecker",
    "ProvidedRequiredArgumentsChecker",
    "VariablesInAllowedPositionChecker",
    "OverlappingFieldsCanBeMergedChecker",
    "UniqueInputFieldNamesChecker",
)


def _type_or_none(schema, node: _ast.Type) -> Optional[GraphQLType]:
    try:
        return schema.get_type_from_literal(node)
    except UnknownType:
        return None


class ExecutableDefinitionsChecker(ValidationVisitor):
    """
    A GraphQL document is only valid for execution if all definitions are
    either operation or fragment definitions.
    """

    def enter_document(self, node, *_):
        valid = True
        for definition in node.definitions:
            if isinstance(definition, _ast.ExecutableDefinition):
                continue
            name = (
                "schema"
                if isinstance(
                    definition, (_ast.SchemaDefinition, _ast.SchemaExtension)
                )
                else '"%s"' % definition.name.value
            )
            self.add_error(
                "The %s definition is not executable." % name, [definition]
            )
            valid = False

        if not valid:
            return False
        return None


class UniqueOperationNameChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all defined operations have unique
    names.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._names = {}  # type: Dict[str, _ast.Name]

    def enter_operation_definition(self, node, *_):
        if node.name is None:
            return False

        name = node.name.value
        if name in self._names:
            self.add_error(
                'There can only be one operation named "%s".' % name,
                [self._names[name], node.name],
            )
        else:
            self._names[name] = node.name
        return False

    def enter_fragment_definition(self, *_):
        return False


class LoneAnonymousOperationChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if when it contains an anonymous
    operation (the query short-hand) that it contains only that one
    operation definition.
    """

    def enter_document(self, node, *_):
        operations = [
            d for d in node.definitions if isinstance(d, _ast.OperationDefinition)
        ]
        if len(operations) < 2:
            return False

        for operation in operations:
            if operation.name is None:
                self.add_error(
                    "This anonymous operation must be the only defined "
                    "operation.",
                    [operation],
                )
        return False


class SingleFieldSubscriptionsChecker(ValidationVisitor):
    """
    A GraphQL subscription is valid only if it contains a single root field.
    """

    def enter_operation_definition(self, node, *_):
        if node.operation != "subscription":
            return False

        extra = node.selection_set.selections[1:]
        if extra:
            if node.name is not None:
                msg = (
                    'Subscription "%s" must select only one top level field.'
                    % node.name.value
                )
            else:
                msg = "Anonymous Subscription must select only one top level field."
            self.add_error(msg, extra)
        return False

    def enter_fragment_definition(self, *_):
        return False


class KnownTypeNamesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if referenced types (specifically
    variable definitions and fragment conditions) are defined by the type
    schema.
    """

    def enter(self, node, *_):
        # Type system definitions are not executable, another rule reports
        # them.
        if isinstance(node, _ast.TypeSystemDefinition):
            return False
        return None

    def enter_named_type(self, node, *_):
        name = node.name.value
        if self.schema.has_type(name):
            return

        suggestions = infer_suggestions(name, self.schema.types.keys())
        if suggestions:
            self.add_error(
                'Unknown type "%s". Did you mean %s?'
                % (name, quoted_options_list(suggestions)),
                [node],
            )
        else:
            self.add_error('Unknown type "%s".' % name, [node])


class FragmentsOnCompositeTypesChecker(ValidationVisitor):
    """
    Fragments use a type condition to determine if they apply, since
    fragments can only be spread into a composite type (object, interface,
    or union), the type condition must also be a composite type.
    """

    def enter_inline_fragment(self, node, *_):
        if node.type_condition is None:
            return
        type_ = _type_or_none(self.schema, node.type_condition)
        if type_ is not None and not is_composite_type(type_):
            self.add_error(
                'Fragment cannot condition on non composite type "%s".'
                % print_ast(node.type_condition),
                [node.type_condition],
            )

    def enter_fragment_definition(self, node, *_):
        type_ = _type_or_none(self.schema, node.type_condition)
        if type_ is not None and not is_composite_type(type_):
            self.add_error(
                'Fragment "%s" cannot condition on non composite type "%s".'
                % (node.name.value, print_ast(node.type_condition)),
                [node.type_condition],
            )


class VariablesAreInputTypesChecker(ValidationVisitor):
    """
    A GraphQL operation is only valid if all the variables it defines are of
    input types (scalar, enum, or input object).
    """

    def enter_variable_definition(self, node, *_):
        type_ = _type_or_none(self.schema, node.type)
        if type_ is not None and not is_input_type(type_):
            self.add_error(
                'Variable "$%s" cannot be non-input type "%s".'
                % (node.variable.name.value, print_ast(node.type)),
                [node.type],
            )


class ScalarLeafsChecker(ValidationVisitor):
    """
    A GraphQL document is valid only if all leaf fields (fields without sub
    selections) are of scalar or enum types.
    """

    def enter_field(self, node, *_):
        type_ = self.type_info.type
        if type_ is None:
            return

        named = unwrap_type(type_)
        name = node.name.value
        if is_leaf_type(named):
            if node.selection_set is not None:
                self.add_error(
                    'Field "%s" must not have a selection since type "%s" has '
                    "no subfields." % (name, type_),
                    [node.selection_set],
                )
        elif node.selection_set is None:
            self.add_error(
                'Field "%s" of type "%s" must have a selection of subfields. '
                'Did you mean "%s { ... }"?' % (name, type_, name),
                [node],
            )


class FieldsOnCorrectTypeChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all fields selected are defined by
    the parent type, or are an allowed meta field such as ``__typename``.
    """

    def enter_field(self, node, *_):
        parent_type = self.type_info.parent_type
        if parent_type is None or self.type_info.field is not None:
            return

        name = node.name.value
        msg = 'Cannot query field "%s" on type "%s".' % (name, parent_type)

        if isinstance(parent_type, (ObjectType, InterfaceType)):
            suggestions = infer_suggestions(
                name, [f.name for f in parent_type.fields]
            )
            if suggestions:
                msg = msg[:-1] + ". Did you mean %s?" % quoted_options_list(
                    suggestions
                )
        elif isinstance(parent_type, UnionType):
            msg = msg[:-1] + (
                ". Did you mean to use an inline fragment on %s?"
                % quoted_options_list([t.name for t in parent_type.types])
            )

        self.add_error(msg, [node])


class UniqueFragmentNamesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all defined fragments have unique
    names.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._names = {}  # type: Dict[str, _ast.Name]

    def enter_operation_definition(self, *_):
        return False

    def enter_fragment_definition(self, node, *_):
        name = node.name.value
        if name in self._names:
            self.add_error(
                'There can only be one fragment named "%s".' % name,
                [self._names[name], node.name],
            )
        else:
            self._names[name] = node.name
        return False


class KnownFragmentNamesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all ``...Fragment`` fragment spreads
    refer to fragments defined in the same document.
    """

    def enter_document(self, node, *_):
        self._known = set(node.fragments.keys())

    def enter_fragment_spread(self, node, *_):
        name = node.name.value
        if name not in self._known:
            self.add_error('Unknown fragment "%s".' % name, [node.name])


class NoUnusedFragmentsChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all fragment definitions are spread
    within operations, or spread within other fragments spread within
    operations.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._fragments = []  # type: List[_ast.FragmentDefinition]
        self._spreads = {}  # type: Dict[Optional[str], List[str]]
        self._operation_spreads = []  # type: List[str]
        self._current = None  # type: Optional[str]

    def enter_operation_definition(self, *_):
        self._current = None

    def enter_fragment_definition(self, node, *_):
        self._fragments.append(node)
        self._current = node.name.value
        self._spreads.setdefault(self._current, [])

    def enter_fragment_spread(self, node, *_):
        if self._current is None:
            self._operation_spreads.append(node.name.value)
        else:
            self._spreads[self._current].append(node.name.value)

    def leave_document(self, *_):
        used = set()  # type: Set[str]
        stack = list(self._operation_spreads)
        while stack:
            name = stack.pop()
            if name in used:
                continue
            used.add(name)
            stack.extend(self._spreads.get(name, []))

        for fragment in self._fragments:
            name = fragment.name.value
            if name not in used:
                self.add_error('Fragment "%s" is never used.' % name, [fragment])


class PossibleFragmentSpreadsChecker(ValidationVisitor):
    """
    A fragment spread is only valid if the type condition could ever
    possibly be true: if there is a non-empty intersection of the possible
    parent types, and possible types which pass the type condition.
    """

    def enter_document(self, node, *_):
        self._fragment_types = {
            name: _type_or_none(self.schema, fragment.type_condition)
            for name, fragment in node.fragments.items()
        }  # type: Dict[str, Optional[GraphQLType]]

    def enter_inline_fragment(self, node, *_):
        frag_type = self.type_info.type
        parent_type = self.type_info.parent_type
        if (
            is_composite_type(frag_type)
            and is_composite_type(parent_type)
            and not self.schema.types_overlap(frag_type, parent_type)
        ):
            self.add_error(
                'Fragment cannot be spread here as objects of type "%s" can '
                'never be of type "%s".' % (parent_type, frag_type),
                [node],
            )

    def enter_fragment_spread(self, node, *_):
        name = node.name.value
        frag_type = self._fragment_types.get(name)
        parent_type = self.type_info.parent_type
        if (
            is_composite_type(frag_type)
            and is_composite_type(parent_type)
            and not self.schema.types_overlap(frag_type, parent_type)
        ):
            self.add_error(
                'Fragment "%s" cannot be spread here as objects of type "%s" '
                'can never be of type "%s".' % (name, parent_type, frag_type),
                [node],
            )


class NoFragmentCyclesChecker(ValidationVisitor):
    """
    A GraphQL Document is only valid if fragment definitions are not cyclic.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._spreads = {}  # type: Dict[str, List[_ast.FragmentSpread]]
        self._current = None  # type: Optional[str]

    def enter_operation_definition(self, *_):
        return False

    def enter_fragment_definition(self, node, *_):
        self._current = node.name.value
        self._spreads[self._current] = []

    def leave_fragment_definition(self, *_):
        self._current = None

    def enter_fragment_spread(self, node, *_):
        if self._current is not None:
            self._spreads[self._current].append(node)

    def leave_document(self, *_):
        visited = set()  # type: Set[str]
        path = []  # type: List[_ast.FragmentSpread]
        path_index = {}  # type: Dict[str, int]

        def detect(name: str) -> None:
            if name in visited:
                return
            visited.add(name)

            spreads = self._spreads.get(name)
            if not spreads:
                return

            path_index[name] = len(path)
            for spread in spreads:
                target = spread.name.value
                cycle_index = path_index.get(target)
                path.append(spread)
                if cycle_index is None:
                    detect(target)
                else:
                    cycle = path[cycle_index:]
                    via = [s.name.value for s in cycle[:-1]]
                    self.add_error(
                        'Cannot spread fragment "%s" within itself%s.'
                        % (target, " via %s" % ", ".join(via) if via else ""),
                        cycle,
                    )
                path.pop()
            del path_index[name]

        for name in self._spreads:
            detect(name)


class UniqueVariableNamesChecker(ValidationVisitor):
    """
    A GraphQL operation is only valid if all its variables are uniquely
    named.
    """

    def enter_operation_definition(self, *_):
        self._names = {}  # type: Dict[str, _ast.Name]

    def enter_variable_definition(self, node, *_):
        name = node.variable.name
        if name.value in self._names:
            self.add_error(
                'There can only be one variable named "$%s".' % name.value,
                [self._names[name.value], name],
            )
        else:
            self._names[name.value] = name


def _operation_label(op: str) -> str:
    return ' by operation "%s"' % op if op else ""


class NoUndefinedVariablesChecker(VariablesCollector):
    """
    A GraphQL operation is only valid if all variables encountered, both
    directly and via fragment spreads, are defined by that operation.
    """

    def leave_document(self, *args):
        super().leave_document(*args)

        for op, defined in self.defined_variables.items():
            for node, _, _ in self.operation_usages(op):
                name = node.name.value
                if name in defined:
                    continue
                self.add_error(
                    'Variable "$%s" is not defined%s.'
                    % (name, _operation_label(op)),
                    [node, self.operations[op]],
                )


class NoUnusedVariablesChecker(VariablesCollector):
    """
    A GraphQL operation is only valid if all variables defined by an
    operation are used, either directly or within a spread fragment.
    """

    def leave_document(self, *args):
        super().leave_document(*args)

        for op, defined in self.defined_variables.items():
            used = set(node.name.value for node, _, _ in self.operation_usages(op))
            for name, definition in defined.items():
                if name not in used:
                    self.add_error(
                        'Variable "$%s" is never used%s.'
                        % (name, _operation_label(op)),
                        [definition],
                    )


_OPERATION_LOCATIONS = {
    "query": "QUERY",
    "mutation": "MUTATION",
    "subscription": "SUBSCRIPTION",
}

_NODE_LOCATIONS = {
    _ast.Field: "FIELD",
    _ast.FragmentSpread: "FRAGMENT_SPREAD",
    _ast.InlineFragment: "INLINE_FRAGMENT",
    _ast.FragmentDefinition: "FRAGMENT_DEFINITION",
    _ast.VariableDefinition: "VARIABLE_DEFINITION",
    _ast.SchemaDefinition: "SCHEMA",
    _ast.SchemaExtension: "SCHEMA",
    _ast.ScalarTypeDefinition: "SCALAR",
    _ast.ScalarTypeExtension: "SCALAR",
    _ast.ObjectTypeDefinition: "OBJECT",
    _ast.ObjectTypeExtension: "OBJECT",
    _ast.FieldDefinition: "FIELD_DEFINITION",
    _ast.InterfaceTypeDefinition: "INTERFACE",
    _ast.InterfaceTypeExtension: "INTERFACE",
    _ast.UnionTypeDefinition: "UNION",
    _ast.UnionTypeExtension: "UNION",
    _ast.EnumTypeDefinition: "ENUM",
    _ast.EnumTypeExtension: "ENUM",
    _ast.EnumValueDefinition: "ENUM_VALUE",
    _ast.InputObjectTypeDefinition: "INPUT_OBJECT",
    _ast.InputObjectTypeExtension: "INPUT_OBJECT",
}


def directive_location(
    parent: _ast.Node, grand_parent: Optional[_ast.Node]
) -> Optional[str]:
    """ Location name of a directive applied to ``parent``. """
    if isinstance(parent, _ast.OperationDefinition):
        return _OPERATION_LOCATIONS[parent.operation]
    if isinstance(parent, _ast.InputValueDefinition):
        if isinstance(
            grand_parent,
            (_ast.InputObjectTypeDefinition, _ast.InputObjectTypeExtension),
        ):
            return "INPUT_FIELD_DEFINITION"
        return "ARGUMENT_DEFINITION"
    return _NODE_LOCATIONS.get(type(parent))


class KnownDirectivesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all ``@directives`` are known by the
    schema and legally positioned.
    """

    def enter_directive(self, node, key, parent, path, ancestors):
        name = node.name.value
        definition = self.schema.directives.get(name)
        if definition is None:
            self.add_error('Unknown directive "@%s".' % name, [node])
            return

        grand_parent = ancestors[-2] if len(ancestors) > 1 else None
        location = directive_location(parent, grand_parent)
        if location is not None and location not in definition.locations:
            self.add_error(
                'Directive "@%s" may not be used on %s.' % (name, location),
                [node],
            )


class UniqueDirectivesPerLocationChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all non-repeatable directives at a
    given location are uniquely named.
    """

    def enter(self, node, *_):
        directives = getattr(node, "directives", None)
        if not directives:
            return

        seen = {}  # type: Dict[str, _ast.Directive]
        for directive in directives:
            name = directive.name.value
            definition = self.schema.directives.get(name)
            if definition is None or definition.repeatable:
                continue
            if name in seen:
                self.add_error(
                    'The directive "@%s" can only be used once at this '
                    "location." % name,
                    [seen[name], directive],
                )
            else:
                seen[name] = directive


class KnownArgumentNamesChecker(ValidationVisitor):
    """
    A GraphQL field / directive is only valid if all supplied arguments are
    defined by that field / directive.
    """

    def enter_argument(self, node, key, parent, path, ancestors):
        name = node.name.value
        if isinstance(parent, _ast.Directive):
            definition = self.type_info.directive
            if definition is None:
                return
            known = [a.name for a in definition.arguments]
            msg = 'Unknown argument "%s" on directive "@%s".' % (
                name,
                definition.name,
            )
        else:
            field_def = self.type_info.field
            parent_type = self.type_info.parent_type
            if field_def is None or parent_type is None:
                return
            known = [a.name for a in field_def.arguments]
            msg = 'Unknown argument "%s" on field "%s.%s".' % (
                name,
                parent_type,
                field_def.name,
            )

        if name in known:
            return

        suggestions = infer_suggestions(name, known)
        if suggestions:
            msg = msg[:-1] + ". Did you mean %s?" % quoted_options_list(suggestions)
        self.add_error(msg, [node])


class UniqueArgumentNamesChecker(ValidationVisitor):
    """
    A GraphQL field or directive is only valid if all supplied arguments are
    uniquely named.
    """

    def _check_duplicate_args(self, node, *_):
        seen = {}  # type: Dict[str, _ast.Name]
        for arg in node.arguments or []:
            name = arg.name.value
            if name in seen:
                self.add_error(
                    'There can be only one argument named "%s".' % name,
                    [seen[name], arg.name],
                )
            else:
                seen[name] = arg.name

    enter_field = _check_duplicate_args
    enter_directive = _check_duplicate_args


class ProvidedRequiredArgumentsChecker(ValidationVisitor):
    """
    A field or directive is only valid if all required (non-null without a
    default value) arguments have been provided.
    """

    def _missing(self, definitions, node):
        provided = set(arg.name.value for arg in node.arguments or [])
        for arg in definitions:
            if arg.required and arg.name not in provided:
                yield arg

    # Validate on leave to allow for deeper errors to appear first.
    def leave_field(self, node, *_):
        field_def = self.type_info.field
        if field_def is None:
            return
        for arg in self._missing(field_def.arguments, node):
            self.add_error(
                'Field "%s" argument "%s" of type "%s" is required, but it '
                "was not provided." % (field_def.name, arg.name, arg.type),
                [node],
            )

    def leave_directive(self, node, *_):
        definition = self.type_info.directive
        if definition is None:
            return
        for arg in self._missing(definition.arguments, node):
            self.add_error(
                'Directive "@%s" argument "%s" of type "%s" is required, but '
                "it was not provided." % (definition.name, arg.name, arg.type),
                [node],
            )


class VariablesInAllowedPositionChecker(VariablesCollector):
    """
    Variables passed to field arguments conform to the type expected at
    their position.

    A nullable variable can be used in a non-null position if it or the
    location provide a non-null default value.
    """

    def leave_document(self, *args):
        super().leave_document(*args)

        for op, defined in self.defined_variables.items():
            for node, location_type, input_value_def in self.operation_usages(op):
                definition = defined.get(node.name.value)
                if definition is None or location_type is None:
                    continue

                var_type = _type_or_none(self.schema, definition.type)
                if var_type is None:
                    continue

                if not self._allowed(
                    var_type, definition, location_type, input_value_def
                ):
                    self.add_error(
                        'Variable "$%s" of type "%s" used in position '
                        'expecting type "%s".'
                        % (node.name.value, var_type, location_type),
                        [definition, node],
                    )

    def _allowed(self, var_type, definition, location_type, input_value_def):
        if isinstance(location_type, NonNullType) and not isinstance(
            var_type, NonNullType
        ):
            has_non_null_default = definition.default_value is not None and not (
                isinstance(definition.default_value, _ast.NullValue)
            )
            has_location_default = (
                input_value_def is not None and input_value_def.has_default_value
            )
            if not (has_non_null_default or has_location_default):
                return False
            return self.schema.is_type_subtype_of(var_type, location_type.type)
        return self.schema.is_type_subtype_of(var_type, location_type)


class UniqueInputFieldNamesChecker(ValidationVisitor):
    """
    A GraphQL input object value is only valid if all supplied fields are
    uniquely named.
    """

    def enter_object_value(self, node, *_):
        seen = {}  # type: Dict[str, _ast.Name]
        for field in node.fields:
            name = field.name.value
            if name in seen:
                self.add_error(
                    'There can be only one input field named "%s".' % name,
                    [seen[name], field.name],
                )
            else:
                seen[name] = field.name
