# -*- coding: utf-8 -*-
"""
Build :class:`~gqlkit.schema.Schema` instances from SDL documents.
"""

import collections
import logging
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    Union,
    cast,
)

from ..exc import ExtensionError, SDLError
from ..lang import ast as _ast, parse
from ..lang.source import Source
from ..schema import (
    SPECIFIED_DIRECTIVES,
    SPECIFIED_SCALAR_TYPES,
    Argument,
    DeprecatedDirective,
    Directive,
    EnumType,
    EnumValue,
    Field,
    GraphQLType,
    InputField,
    InputObjectType,
    InterfaceType,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    ScalarType,
    Schema,
    UnionType,
)
from ..schema.scalars import default_scalar
from ..utilities import directive_arguments, value_from_ast
from .resolver_map import ResolverMap, ResolversLike, as_resolver_map

logger = logging.getLogger(__name__)

DocumentLike = Union[_ast.Document, str, bytes, Source]

_SPECIFIED_TYPES = {t.name: t for t in SPECIFIED_SCALAR_TYPES}

_EXTENSION_NODES = {
    ObjectType: _ast.ObjectTypeExtension,
    InterfaceType: _ast.InterfaceTypeExtension,
    EnumType: _ast.EnumTypeExtension,
    UnionType: _ast.UnionTypeExtension,
    InputObjectType: _ast.InputObjectTypeExtension,
    ScalarType: _ast.ScalarTypeExtension,
}

_CONVENTIONAL_ROOTS = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}


def _desc(node: Any) -> Optional[str]:
    return node.description.value if node.description is not None else None


def _deprecation_reason(node: _ast.Node) -> Optional[str]:
    args = directive_arguments(DeprecatedDirective, node, {})
    return args.get("reason") if args is not None else None


def _document(document: DocumentLike) -> _ast.Document:
    if isinstance(document, _ast.Document):
        return document
    if isinstance(document, (str, bytes, Source)):
        return parse(document)
    raise TypeError("Expected Document but got %s" % type(document))


class TypesBuilder:
    """
    Build and extend named types and directives from type system nodes.

    Built types are cached by name so that every reference to a type
    resolves to the same instance. Type lists (fields, interfaces, union
    members) are provided lazily to support cyclic definitions.

    Warning:
        Specified scalars and directives are never built or extended.

    Args:
        type_defs: Type definitions by name
        directive_defs: Directive definitions by name
        extensions: Extension nodes by target type name
        known_types: Types which should be used as is when referenced
        resolvers: Resolvers assigned to the fields of object types
    """

    def __init__(
        self,
        type_defs: Mapping[str, _ast.TypeDefinition],
        directive_defs: Mapping[str, _ast.DirectiveDefinition],
        extensions: Optional[Mapping[str, List[_ast.TypeExtension]]] = None,
        known_types: Optional[Mapping[str, NamedType]] = None,
        resolvers: Optional[ResolverMap] = None,
    ):
        self._type_defs = type_defs
        self._directive_defs = directive_defs
        self._extensions = extensions or {}
        self._resolvers = resolvers or ResolverMap()

        self._cache = dict(_SPECIFIED_TYPES)  # type: Dict[str, NamedType]
        self._extended = {}  # type: Dict[str, NamedType]
        if known_types:
            self._cache.update(known_types)

    def build_type(self, type_node: Union[_ast.Type, _ast.TypeDefinition]) -> GraphQLType:
        """
        Raises:
            :class:`~gqlkit.exc.SDLError`: if a referenced type is not
                defined in the document.
        """
        if isinstance(type_node, _ast.NonNullType):
            return NonNullType(self.build_type(type_node.type))

        if isinstance(type_node, _ast.ListType):
            return ListType(self.build_type(type_node.type))

        name = type_node.name.value  # type: ignore
        try:
            return self._cache[name]
        except KeyError:
            if isinstance(type_node, _ast.NamedType):
                type_def = self._type_defs.get(name)
                if type_def is None:
                    raise SDLError(
                        "Type %s not found in document" % name, [type_node]
                    )
            else:
                type_def = type_node

            built = self._cache[name] = self._build_named_type(type_def)
            return built

    def build_directive(self, node: _ast.DirectiveDefinition) -> Directive:
        try:
            return Directive(
                node.name.value,
                [loc.value for loc in node.locations],
                args=[
                    self._build_input_value(arg, Argument)
                    for arg in node.arguments or []
                ],
                repeatable=bool(node.repeatable),
                description=_desc(node),
                node=node,
            )
        except ValueError as err:
            raise SDLError(str(err), [node]) from err

    def _build_named_type(self, type_def: _ast.TypeDefinition) -> NamedType:
        if isinstance(type_def, _ast.ObjectTypeDefinition):
            return self._build_object_type(type_def)
        if isinstance(type_def, _ast.InterfaceTypeDefinition):
            return self._build_interface_type(type_def)
        if isinstance(type_def, _ast.EnumTypeDefinition):
            return self._build_enum_type(type_def)
        if isinstance(type_def, _ast.UnionTypeDefinition):
            return self._build_union_type(type_def)
        if isinstance(type_def, _ast.ScalarTypeDefinition):
            return default_scalar(
                type_def.name.value, description=_desc(type_def), nodes=[type_def]
            )
        if isinstance(type_def, _ast.InputObjectTypeDefinition):
            return self._build_input_object_type(type_def)
        raise TypeError(type(type_def))

    def _build_object_type(self, type_def: _ast.ObjectTypeDefinition) -> ObjectType:
        name = type_def.name.value
        return ObjectType(
            name,
            fields=lambda: [
                self._build_field(name, field_def)
                for field_def in type_def.fields or []
            ],
            interfaces=lambda: [
                cast(InterfaceType, self.build_type(iface))
                for iface in type_def.interfaces or []
            ],
            description=_desc(type_def),
            nodes=[type_def],
        )

    def _build_interface_type(
        self, type_def: _ast.InterfaceTypeDefinition
    ) -> InterfaceType:
        name = type_def.name.value
        return InterfaceType(
            name,
            fields=lambda: [
                self._build_field(name, field_def)
                for field_def in type_def.fields or []
            ],
            interfaces=lambda: [
                cast(InterfaceType, self.build_type(iface))
                for iface in type_def.interfaces or []
            ],
            description=_desc(type_def),
            nodes=[type_def],
        )

    def _build_field(self, typename: str, field_def: _ast.FieldDefinition) -> Field:
        return Field(
            field_def.name.value,
            # Lazy to support cyclic references.
            lambda: self.build_type(field_def.type),
            args=[
                self._build_input_value(arg, Argument)
                for arg in field_def.arguments or []
            ],
            description=_desc(field_def),
            deprecation_reason=_deprecation_reason(field_def),
            resolver=self._resolvers.get(typename, field_def.name.value),
            node=field_def,
        )

    def _build_enum_type(self, type_def: _ast.EnumTypeDefinition) -> EnumType:
        return EnumType(
            type_def.name.value,
            [self._build_enum_value(value) for value in type_def.values or []],
            description=_desc(type_def),
            nodes=[type_def],
        )

    def _build_enum_value(self, node: _ast.EnumValueDefinition) -> EnumValue:
        return EnumValue(
            node.name.value,
            deprecation_reason=_deprecation_reason(node),
            description=_desc(node),
            node=node,
        )

    def _build_union_type(self, type_def: _ast.UnionTypeDefinition) -> UnionType:
        return UnionType(
            type_def.name.value,
            types=lambda: [
                cast(ObjectType, self.build_type(member))
                for member in type_def.types or []
            ],
            description=_desc(type_def),
            nodes=[type_def],
        )

    def _build_input_object_type(
        self, type_def: _ast.InputObjectTypeDefinition
    ) -> InputObjectType:
        return InputObjectType(
            type_def.name.value,
            fields=lambda: [
                self._build_input_value(field_def, InputField)
                for field_def in type_def.fields or []
            ],
            description=_desc(type_def),
            nodes=[type_def],
        )

    def _build_input_value(
        self,
        node: _ast.InputValueDefinition,
        cls: Type[Union[Argument, InputField]],
    ) -> Union[Argument, InputField]:
        type_ = self.build_type(node.type)
        kwargs = dict(description=_desc(node), node=node)  # type: Dict[str, Any]
        if node.default_value is not None:
            kwargs["default_value"] = value_from_ast(node.default_value, type_)
        return cls(node.name.value, type_, **kwargs)

    def extend_type(self, type_: GraphQLType) -> GraphQLType:
        """
        Rebuild a type with its extensions applied.

        All composite types are rebuilt so that they reference the extended
        version of their fields, arguments and members, leaf types are kept
        as is unless they are extended.

        Raises:
            :class:`~gqlkit.exc.ExtensionError`
        """
        if isinstance(type_, ListType):
            return ListType(self.extend_type(type_.type))

        if isinstance(type_, NonNullType):
            return NonNullType(self.extend_type(type_.type))

        named = cast(NamedType, type_)
        if _SPECIFIED_TYPES.get(named.name) is named:
            return named

        try:
            return self._extended[named.name]
        except KeyError:
            extensions = self._extensions.get(named.name, [])
            expected = next(
                node_cls
                for type_cls, node_cls in _EXTENSION_NODES.items()
                if isinstance(named, type_cls)
            )
            for ext in extensions:
                if not isinstance(ext, expected):
                    raise ExtensionError(
                        "Expected %s when extending %s but got %s"
                        % (
                            expected.__name__,
                            type(named).__name__,
                            type(ext).__name__,
                        ),
                        [ext],
                    )

            extended = self._extended[named.name] = self._extend_named_type(
                named, extensions
            )
            return extended

    def _extend_named_type(
        self, type_: NamedType, extensions: List[Any]
    ) -> NamedType:
        if isinstance(type_, ObjectType):
            return ObjectType(
                type_.name,
                fields=lambda: self._extend_fields(type_, extensions),
                interfaces=lambda: self._extend_interfaces(type_, extensions),
                is_type_of=type_.is_type_of,
                description=type_.description,
                nodes=type_.nodes + extensions,
            )

        if isinstance(type_, InterfaceType):
            return InterfaceType(
                type_.name,
                fields=lambda: self._extend_fields(type_, extensions),
                interfaces=lambda: self._extend_interfaces(type_, extensions),
                resolve_type=type_.resolve_type,
                description=type_.description,
                nodes=type_.nodes + extensions,
            )

        if isinstance(type_, UnionType):
            return UnionType(
                type_.name,
                types=lambda: self._extend_members(type_, extensions),
                resolve_type=type_.resolve_type,
                description=type_.description,
                nodes=type_.nodes + extensions,
            )

        if isinstance(type_, InputObjectType):
            return InputObjectType(
                type_.name,
                fields=lambda: self._extend_input_fields(type_, extensions),
                description=type_.description,
                nodes=type_.nodes + extensions,
            )

        if not extensions:
            return type_

        if isinstance(type_, EnumType):
            return self._extend_enum_type(type_, extensions)

        if isinstance(type_, ScalarType):
            return ScalarType(
                type_.name,
                serialize=type_._serialize,
                parse=type_._parse,
                parse_literal=type_._parse_literal,
                description=type_.description,
                nodes=type_.nodes + extensions,
            )

        raise TypeError(type(type_))

    def _extend_field(self, field: Field, typename: str) -> Field:
        return Field(
            field.name,
            self.extend_type(field.type),
            args=[self._extend_argument(arg) for arg in field.arguments],
            description=field.description,
            deprecation_reason=field.deprecation_reason,
            resolver=self._resolvers.get(typename, field.name) or field.resolver,
            node=field.node,
        )

    def _extend_fields(
        self,
        type_: Union[ObjectType, InterfaceType],
        extensions: List[Union[_ast.ObjectTypeExtension, _ast.InterfaceTypeExtension]],
    ) -> List[Field]:
        names = set(field.name for field in type_.fields)
        fields = [self._extend_field(field, type_.name) for field in type_.fields]

        for ext in extensions:
            for field_def in ext.fields or []:
                name = field_def.name.value
                if name in names:
                    raise ExtensionError(
                        'Found duplicate field "%s" when extending %s "%s"'
                        % (
                            name,
                            "type" if isinstance(type_, ObjectType) else "interface",
                            type_.name,
                        ),
                        [field_def],
                    )
                names.add(name)
                fields.append(
                    self._extend_field(
                        self._build_field(type_.name, field_def), type_.name
                    )
                )

        return fields

    def _extend_interfaces(
        self,
        type_: Union[ObjectType, InterfaceType],
        extensions: List[Union[_ast.ObjectTypeExtension, _ast.InterfaceTypeExtension]],
    ) -> List[InterfaceType]:
        names = set(iface.name for iface in type_.interfaces)
        interfaces = [
            cast(InterfaceType, self.extend_type(iface))
            for iface in type_.interfaces
        ]

        for ext in extensions:
            for iface in ext.interfaces or []:
                name = iface.name.value
                if name in names:
                    raise ExtensionError(
                        'Interface "%s" already implemented for type "%s"'
                        % (name, type_.name),
                        [iface],
                    )
                names.add(name)
                interfaces.append(
                    cast(InterfaceType, self.extend_type(self.build_type(iface)))
                )

        return interfaces

    def _extend_members(
        self, type_: UnionType, extensions: List[_ast.UnionTypeExtension]
    ) -> List[ObjectType]:
        names = set(member.name for member in type_.types)
        members = [cast(ObjectType, self.extend_type(t)) for t in type_.types]

        for ext in extensions:
            for member in ext.types or []:
                name = member.name.value
                if name in names:
                    raise ExtensionError(
                        'Found duplicate member type "%s" when extending '
                        'UnionType "%s"' % (name, type_.name),
                        [member],
                    )
                names.add(name)
                members.append(
                    cast(ObjectType, self.extend_type(self.build_type(member)))
                )

        return members

    def _extend_input_fields(
        self,
        type_: InputObjectType,
        extensions: List[_ast.InputObjectTypeExtension],
    ) -> List[InputField]:
        names = set(field.name for field in type_.fields)
        fields = [
            cast(InputField, self._extend_input_value(field, InputField))
            for field in type_.fields
        ]

        for ext in extensions:
            for field_def in ext.fields or []:
                name = field_def.name.value
                if name in names:
                    raise ExtensionError(
                        'Found duplicate field "%s" when extending input '
                        'object "%s"' % (name, type_.name),
                        [field_def],
                    )
                names.add(name)
                fields.append(
                    cast(
                        InputField,
                        self._extend_input_value(
                            self._build_input_value(field_def, InputField),
                            InputField,
                        ),
                    )
                )

        return fields

    def _extend_enum_type(
        self, type_: EnumType, extensions: List[_ast.EnumTypeExtension]
    ) -> EnumType:
        values = list(type_.values)
        names = set(value.name for value in values)

        for ext in extensions:
            for value_def in ext.values or []:
                name = value_def.name.value
                if name in names:
                    raise ExtensionError(
                        'Found duplicate enum value "%s" when extending '
                        'EnumType "%s"' % (name, type_.name),
                        [value_def],
                    )
                names.add(name)
                values.append(self._build_enum_value(value_def))

        return EnumType(
            type_.name,
            values,
            description=type_.description,
            nodes=type_.nodes + extensions,
        )

    def _extend_input_value(
        self, value: Union[Argument, InputField], cls: Type[Any]
    ) -> Union[Argument, InputField]:
        kwargs = dict(description=value.description, node=value.node)  # type: Dict[str, Any]
        if value.has_default_value:
            kwargs["default_value"] = value.default_value
        return cls(value.name, self.extend_type(value.type), **kwargs)

    def _extend_argument(self, argument: Argument) -> Argument:
        return cast(Argument, self._extend_input_value(argument, Argument))

    def extend_directive(self, directive: Directive) -> Directive:
        if directive in SPECIFIED_DIRECTIVES:
            return directive

        return Directive(
            directive.name,
            directive.locations,
            args=[self._extend_argument(arg) for arg in directive.arguments],
            repeatable=directive.repeatable,
            description=directive.description,
            node=directive.node,
        )


def _collect_definitions(
    document: _ast.Document,
) -> Tuple[
    Optional[_ast.SchemaDefinition],
    Dict[str, _ast.TypeDefinition],
    Dict[str, _ast.DirectiveDefinition],
]:
    schema_def = None  # type: Optional[_ast.SchemaDefinition]
    type_defs = {}  # type: Dict[str, _ast.TypeDefinition]
    directive_defs = {}  # type: Dict[str, _ast.DirectiveDefinition]

    for node in document.definitions:
        if isinstance(node, _ast.SchemaDefinition):
            if schema_def is not None:
                raise SDLError("More than one schema definition in document", [node])
            schema_def = node

        elif isinstance(node, _ast.TypeDefinition):
            name = node.name.value  # type: ignore
            if name in type_defs:
                raise SDLError("Duplicate type %s" % name, [node])
            type_defs[name] = node

        elif isinstance(node, _ast.DirectiveDefinition):
            name = node.name.value
            if name in directive_defs:
                raise SDLError("Duplicate directive @%s" % name, [node])
            directive_defs[name] = node

        elif isinstance(node, _ast.ExecutableDefinition):
            raise SDLError(
                "%s is not supported in type system documents"
                % type(node).__name__,
                [node],
            )

    return schema_def, type_defs, directive_defs


def _collect_extensions(
    schema: Schema, document: _ast.Document, strict: bool
) -> Tuple[
    List[_ast.SchemaExtension],
    Dict[str, _ast.TypeDefinition],
    Dict[str, _ast.DirectiveDefinition],
    Dict[str, List[_ast.TypeExtension]],
]:
    schema_exts = []  # type: List[_ast.SchemaExtension]
    type_defs = {}  # type: Dict[str, _ast.TypeDefinition]
    directive_defs = {}  # type: Dict[str, _ast.DirectiveDefinition]
    pending = []  # type: List[_ast.TypeExtension]

    for definition in document.definitions:
        if isinstance(definition, _ast.SchemaDefinition):
            if strict:
                raise ExtensionError(
                    "Cannot redefine schema in strict schema extension",
                    [definition],
                )

        elif isinstance(definition, _ast.SchemaExtension):
            schema_exts.append(definition)

        elif isinstance(definition, _ast.TypeDefinition):
            name = definition.name.value  # type: ignore
            if name not in schema.types:
                type_defs[name] = definition
            elif strict:
                raise ExtensionError(
                    'Type "%s" is already defined in the schema.' % name,
                    [definition],
                )

        elif isinstance(definition, _ast.DirectiveDefinition):
            name = definition.name.value
            if name not in schema.directives:
                directive_defs[name] = definition
            elif strict:
                raise ExtensionError(
                    'Directive "@%s" is already defined in the schema.' % name,
                    [definition],
                )

        elif isinstance(definition, _ast.TypeExtension):
            pending.append(definition)

    type_exts = collections.defaultdict(list)  # type: Dict[str, List[_ast.TypeExtension]]
    for ext in pending:
        target = ext.name.value  # type: ignore
        if target not in type_defs and not schema.has_type(target):
            raise ExtensionError('Cannot extend undefined type "%s".' % target, [ext])
        type_exts[target].append(ext)

    return schema_exts, type_defs, directive_defs, dict(type_exts)


def _known_types(
    additional_types: Optional[Sequence[NamedType]],
) -> Dict[str, NamedType]:
    return {t.name: t for t in additional_types or []}


def build_schema(
    document: DocumentLike,
    *,
    resolvers: Optional[ResolversLike] = None,
    additional_types: Optional[Sequence[NamedType]] = None,
    assume_valid: bool = False
) -> Schema:
    """
    Build an executable schema from an SDL document.

    Type extensions found in the document are applied to the definitions of
    the same document. Root types are taken from the schema definition when
    present, otherwise types named ``Query``, ``Mutation`` and
    ``Subscription`` are used.

    Args:
        document: SDL document or source

        resolvers: Field resolvers, either a :class:`ResolverMap` or a
            mapping of the form ``{"Type": {"field": resolver}}``

        additional_types: User supplied types used in place of the
            definitions of the same name. Use this to provide the
            implementation of custom scalars or the ``is_type_of`` /
            ``resolve_type`` callbacks of composite types.

        assume_valid: Skip schema validation

    Returns:
        Executable schema

    Raises:
        :class:`~gqlkit.exc.SDLError`: if the document cannot be turned into
            a schema
        :class:`~gqlkit.exc.SchemaValidationError`: if the resulting schema
            is invalid
    """
    ast = _document(document)
    resolver_map = as_resolver_map(resolvers)
    schema_def, type_defs, directive_defs = _collect_definitions(ast)

    builder = TypesBuilder(
        type_defs,
        directive_defs,
        known_types=_known_types(additional_types),
        resolvers=resolver_map,
    )

    directives = [builder.build_directive(d) for d in directive_defs.values()]
    types = [cast(NamedType, builder.build_type(t)) for t in type_defs.values()]

    operations = {}  # type: Dict[str, Optional[ObjectType]]
    if schema_def is None:
        for operation, name in _CONVENTIONAL_ROOTS.items():
            if name in type_defs:
                candidate = builder.build_type(type_defs[name])
                if isinstance(candidate, ObjectType):
                    operations[operation] = candidate
    else:
        for op_def in schema_def.operation_types or []:
            if operations.get(op_def.operation) is not None:
                raise SDLError(
                    "Schema must only define a single %s operation"
                    % op_def.operation,
                    [schema_def, op_def],
                )
            operations[op_def.operation] = cast(
                ObjectType, builder.build_type(op_def.type)
            )

    schema = Schema(
        query_type=operations.get("query"),
        mutation_type=operations.get("mutation"),
        subscription_type=operations.get("subscription"),
        types=types,
        directives=directives,
        nodes=[schema_def] if schema_def is not None else None,
    )

    schema = _extend_schema(
        schema, ast, resolver_map, additional_types, strict=False
    )

    if not assume_valid:
        schema.validate()

    logger.debug("Built schema with %d types", len(schema.types))
    return schema


def extend_schema(
    schema: Schema,
    document: DocumentLike,
    *,
    resolvers: Optional[ResolversLike] = None,
    additional_types: Optional[Sequence[NamedType]] = None,
    assume_valid: bool = False
) -> Schema:
    """
    Produce a new schema with the extensions and new definitions of an SDL
    document applied. The original schema is left untouched.

    Raises:
        :class:`~gqlkit.exc.ExtensionError`: if the document redefines
            existing types, directives or the schema, or extends undefined
            types.
        :class:`~gqlkit.exc.SchemaValidationError`: if the resulting schema
            is invalid
    """
    extended = _extend_schema(
        schema,
        _document(document),
        as_resolver_map(resolvers),
        additional_types,
        strict=True,
    )
    if not assume_valid and extended is not schema:
        extended.validate()
    return extended


def _extend_schema(
    schema: Schema,
    document: _ast.Document,
    resolvers: ResolverMap,
    additional_types: Optional[Sequence[NamedType]],
    strict: bool,
) -> Schema:
    schema_exts, type_defs, directive_defs, type_exts = _collect_extensions(
        schema, document, strict
    )

    if not (schema_exts or type_defs or directive_defs or type_exts):
        return schema

    known = dict(schema.types)
    known.update(_known_types(additional_types))

    builder = TypesBuilder(
        type_defs,
        directive_defs,
        extensions=type_exts,
        known_types=known,
        resolvers=resolvers,
    )

    directives = [builder.extend_directive(d) for d in schema.directives.values()]
    directives.extend(
        builder.extend_directive(builder.build_directive(d))
        for d in directive_defs.values()
    )

    types = [builder.extend_type(t) for t in schema.types.values()]
    types.extend(
        builder.extend_type(builder.build_type(t)) for t in type_defs.values()
    )

    def _extend_root(type_: Optional[ObjectType]) -> Optional[ObjectType]:
        return cast(ObjectType, builder.extend_type(type_)) if type_ else None

    operations = {
        "query": _extend_root(schema.query_type),
        "mutation": _extend_root(schema.mutation_type),
        "subscription": _extend_root(schema.subscription_type),
    }

    for ext in schema_exts:
        for op_def in ext.operation_types or []:
            if operations.get(op_def.operation) is not None:
                raise ExtensionError(
                    "Schema must only define a single %s operation"
                    % op_def.operation,
                    [ext, op_def],
                )
            operations[op_def.operation] = cast(
                ObjectType, builder.extend_type(builder.build_type(op_def.type))
            )

    return Schema(
        query_type=operations["query"],
        mutation_type=operations["mutation"],
        subscription_type=operations["subscription"],
        types=cast(List[NamedType], types),
        directives=directives,
        nodes=schema.nodes + cast(List[_ast.Node], schema_exts),
    )
