# -*- coding: utf-8 -*-
""" Schema validation. """

import re
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Union

from ..exc import SchemaError
from .scalars import SPECIFIED_SCALAR_TYPES
from .types import (
    Argument,
    EnumType,
    Field,
    InputField,
    InputObjectType,
    InterfaceType,
    NonNullType,
    ObjectType,
    UnionType,
    is_input_type,
    is_output_type,
)

if TYPE_CHECKING:
    from .schema import Schema  # noqa: F401

VALID_NAME_RE = re.compile(r"^[_a-zA-Z][_a-zA-Z0-9]*$")

_SPECIFIED_TYPES = frozenset(t.name for t in SPECIFIED_SCALAR_TYPES)

Composite = Union[ObjectType, InterfaceType]


def is_valid_name(name: str) -> bool:
    """
    Names must match ``/^[_a-zA-Z][_a-zA-Z0-9]*$/`` and cannot start with
    ``__`` which is reserved for introspection.

    >>> is_valid_name("fooBar"), is_valid_name("_foo"), is_valid_name("Foo_1")
    (True, True, True)

    >>> is_valid_name("__foo"), is_valid_name("foo-bar"), is_valid_name("42")
    (False, False, False)
    """
    return bool(VALID_NAME_RE.match(name)) and not name.startswith("__")


def validate_schema(schema: "Schema") -> List[SchemaError]:
    """
    Check a schema for structural defects.

    Prefer :attr:`gqlkit.schema.Schema.validation_errors` or
    :meth:`gqlkit.schema.Schema.validate` which cache the result.

    Returns:
        List of errors, empty if the schema is valid.
    """
    validator = _SchemaValidator(schema)
    validator.validate()
    return validator.errors


class _SchemaValidator:
    def __init__(self, schema: "Schema"):
        self.schema = schema
        self.errors = []  # type: List[SchemaError]

    def report(self, message: str) -> None:
        self.errors.append(SchemaError(message))

    def check_name(self, name: str, what: str) -> None:
        if not is_valid_name(name):
            self.report('Invalid %s name "%s"' % (what, name))

    def validate(self) -> None:
        self.validate_root_types()
        self.validate_directives()

        for type_ in self.schema.types.values():
            if type_.name not in _SPECIFIED_TYPES:
                self.check_name(type_.name, "type")

            if isinstance(type_, ObjectType):
                self.validate_fields(type_)
                self.validate_interfaces(type_)
            elif isinstance(type_, InterfaceType):
                self.validate_fields(type_)
                self.validate_interfaces(type_)
            elif isinstance(type_, UnionType):
                self.validate_union_members(type_)
            elif isinstance(type_, EnumType):
                self.validate_enum_values(type_)
            elif isinstance(type_, InputObjectType):
                self.validate_input_fields(type_)

        _InputCycleFinder(self).run()

    def validate_root_types(self) -> None:
        query = self.schema.query_type
        if query is None:
            self.report("Query root type must be provided.")
        elif not isinstance(query, ObjectType):
            self.report(
                'Query root type must be Object type but got "%s".' % query
            )

        for operation in ("mutation", "subscription"):
            root = self.schema.root_type(operation)
            if root is not None and not isinstance(root, ObjectType):
                self.report(
                    '%s root type must be Object type if provided but got "%s".'
                    % (operation.capitalize(), root)
                )

    def validate_arguments(self, arguments: List[Argument], owner: str) -> None:
        seen = set()  # type: Set[str]
        for arg in arguments:
            self.check_name(arg.name, "argument")
            if arg.name in seen:
                self.report('Duplicate argument "%s" on %s' % (arg.name, owner))
                continue
            seen.add(arg.name)
            if not is_input_type(arg.type):
                self.report(
                    'Argument "%s" on %s must be an input type but got "%s"'
                    % (arg.name, owner, arg.type)
                )

    def validate_directives(self) -> None:
        for directive in self.schema.directives.values():
            self.check_name(directive.name, "directive")
            self.validate_arguments(
                directive.arguments, 'directive "@%s"' % directive.name
            )

    def validate_fields(self, type_: Composite) -> None:
        if not type_.fields:
            self.report('Type "%s" must define at least one field.' % type_)

        seen = set()  # type: Set[str]
        for field in type_.fields:
            self.check_name(field.name, "field")
            if field.name in seen:
                self.report('Duplicate field "%s.%s"' % (type_, field.name))
                continue
            seen.add(field.name)
            if not is_output_type(field.type):
                self.report(
                    'Field "%s.%s" must be an output type but got "%s"'
                    % (type_, field.name, field.type)
                )
            self.validate_arguments(
                list(field.arguments), 'field "%s.%s"' % (type_, field.name)
            )

    def validate_interfaces(self, type_: Composite) -> None:
        seen = set()  # type: Set[str]
        for iface in type_.interfaces:
            if not isinstance(iface, InterfaceType):
                self.report(
                    'Type "%s" must only implement Interface types, it cannot '
                    'implement "%s".' % (type_, iface)
                )
                continue
            if iface is type_:
                self.report(
                    'Type "%s" cannot implement itself because it would '
                    "create a circular reference." % type_
                )
                continue
            if iface.name in seen:
                self.report(
                    'Type "%s" can only implement "%s" once.' % (type_, iface)
                )
                continue
            seen.add(iface.name)
            self.validate_transitive_interfaces(type_, iface)
            self.validate_implementation(type_, iface)

    def validate_transitive_interfaces(
        self, type_: Composite, iface: InterfaceType
    ) -> None:
        implemented = type_.interfaces
        for transitive in iface.interfaces:
            if transitive not in implemented:
                self.report(
                    'Type "%s" must implement "%s" because it is implemented '
                    'by "%s".' % (type_, transitive, iface)
                )

    def validate_implementation(
        self, type_: Composite, iface: InterfaceType
    ) -> None:
        fields = type_.field_map
        for iface_field in iface.fields:
            iface_path = "%s.%s" % (iface, iface_field.name)
            field = fields.get(iface_field.name)
            if field is None:
                self.report(
                    'Interface field "%s" is not implemented by type "%s".'
                    % (iface_path, type_)
                )
                continue

            path = "%s.%s" % (type_, field.name)
            if not self.schema.is_type_subtype_of(field.type, iface_field.type):
                self.report(
                    'Interface field "%s" expects type "%s" but "%s" is type '
                    '"%s".' % (iface_path, iface_field.type, path, field.type)
                )

            self.validate_implementation_arguments(
                field, iface_field, path, iface_path
            )

    def validate_implementation_arguments(
        self, field: Field, iface_field: Field, path: str, iface_path: str
    ) -> None:
        args = field.argument_map
        for iface_arg in iface_field.arguments:
            arg = args.get(iface_arg.name)
            if arg is None:
                self.report(
                    'Interface field argument "%s(%s:)" expected but "%s" '
                    "does not provide it." % (iface_path, iface_arg.name, path)
                )
            elif arg.type != iface_arg.type:
                self.report(
                    'Interface field argument "%s(%s:)" expects type "%s" but '
                    '"%s(%s:)" is type "%s".'
                    % (
                        iface_path,
                        iface_arg.name,
                        iface_arg.type,
                        path,
                        arg.name,
                        arg.type,
                    )
                )

        iface_args = iface_field.argument_map
        for arg in field.arguments:
            if arg.name not in iface_args and arg.required:
                self.report(
                    'Object field "%s" includes required argument "%s" that '
                    'is missing from the Interface field "%s".'
                    % (path, arg.name, iface_path)
                )

    def validate_union_members(self, type_: UnionType) -> None:
        if not type_.types:
            self.report(
                'Union type "%s" must define one or more member types.' % type_
            )

        seen = set()  # type: Set[str]
        for member in type_.types:
            if not isinstance(member, ObjectType):
                self.report(
                    'Union type "%s" can only include Object types, it cannot '
                    'include "%s".' % (type_, member)
                )
                continue
            if member.name in seen:
                self.report(
                    'Union type "%s" can only include type "%s" once.'
                    % (type_, member)
                )
            seen.add(member.name)

    def validate_enum_values(self, type_: EnumType) -> None:
        if not type_.values:
            self.report('Enum type "%s" must define one or more values.' % type_)

        for value in type_.values:
            self.check_name(value.name, "enum value")
            if value.name in ("true", "false", "null"):
                self.report(
                    'Enum type "%s" cannot include value: %s.' % (type_, value)
                )

    def validate_input_fields(self, type_: InputObjectType) -> None:
        if not type_.fields:
            self.report(
                'Input Object type "%s" must define one or more fields.' % type_
            )

        seen = set()  # type: Set[str]
        for field in type_.fields:
            self.check_name(field.name, "input field")
            if field.name in seen:
                self.report('Duplicate input field "%s.%s"' % (type_, field.name))
                continue
            seen.add(field.name)
            if not is_input_type(field.type):
                self.report(
                    'Input field "%s.%s" must be an input type but got "%s"'
                    % (type_, field.name, field.type)
                )


class _InputCycleFinder:
    """
    Depth first search over non-null input object fields.

    A cycle made only of non-null input object fields can never be satisfied
    by a finite value. Lists and nullable fields break cycles.
    """

    def __init__(self, validator: _SchemaValidator):
        self.validator = validator
        self.visited = set()  # type: Set[str]
        self.path = []  # type: List[InputField]
        self.path_index = {}  # type: Dict[str, int]

    def run(self) -> None:
        for type_ in self.validator.schema.types.values():
            if isinstance(type_, InputObjectType):
                self.visit(type_)

    def visit(self, type_: InputObjectType) -> None:
        if type_.name in self.visited:
            return

        self.visited.add(type_.name)
        self.path_index[type_.name] = len(self.path)

        for field in type_.fields:
            target = _non_null_input_object(field)
            if target is None:
                continue

            self.path.append(field)
            cycle_index = self.path_index.get(target.name)
            if cycle_index is None:
                self.visit(target)
            else:
                cycle = self.path[cycle_index:]
                self.validator.report(
                    'Cannot reference Input Object "%s" within itself through '
                    'a series of non-null fields: "%s".'
                    % (target, ".".join(f.name for f in cycle))
                )
            self.path.pop()

        del self.path_index[type_.name]


def _non_null_input_object(field: InputField) -> Optional[InputObjectType]:
    type_ = field.type
    if isinstance(type_, NonNullType) and isinstance(type_.type, InputObjectType):
        return type_.type
    return None
