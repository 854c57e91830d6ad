# -*- coding: utf-8 -*-

import functools as ft
from typing import Any, Callable, List, Optional, TypeVar, Union

from ..exc import GraphQLSyntaxError, UnexpectedEOF, UnexpectedToken
from . import ast as _ast
from .lexer import Lexer
from .source import Location, Source
from .token import PUNCTUATORS, Token, TokenKind

DIRECTIVE_LOCATIONS = frozenset(
    [
        # Executable locations
        "QUERY",
        "MUTATION",
        "SUBSCRIPTION",
        "FIELD",
        "FRAGMENT_DEFINITION",
        "FRAGMENT_SPREAD",
        "INLINE_FRAGMENT",
        "VARIABLE_DEFINITION",
        # Type system locations
        "SCHEMA",
        "SCALAR",
        "OBJECT",
        "FIELD_DEFINITION",
        "ARGUMENT_DEFINITION",
        "INTERFACE",
        "UNION",
        "ENUM",
        "ENUM_VALUE",
        "INPUT_OBJECT",
        "INPUT_FIELD_DEFINITION",
    ]
)

OPERATION_TYPES = frozenset(["query", "mutation", "subscription"])

TYPE_SYSTEM_KEYWORDS = frozenset(
    [
        "schema",
        "scalar",
        "type",
        "interface",
        "union",
        "enum",
        "input",
        "directive",
    ]
)

N = TypeVar("N", bound=_ast.Node)

SourceLike = Union[str, bytes, Source]


def parse(source: SourceLike, **kwargs: Any) -> _ast.Document:
    """
    Parse a GraphQL document.

    Args:
        source: Source document
        **kwargs: Remaining keyword arguments passed to :class:`Parser`

    Raises:
        :class:`~gqlkit.exc.GraphQLSyntaxError`: on any syntax error.
    """
    return Parser(source, **kwargs).parse_document()


def parse_value(source: SourceLike, **kwargs: Any) -> _ast.Value:
    """
    Parse a single value literal such as ``[42, "foo"]``, variables
    included.
    """
    parser = Parser(source, **kwargs)
    parser.expect_token(TokenKind.SOF)
    value = parser.parse_value_literal(False)
    parser.expect_token(TokenKind.EOF)
    return value


def parse_type(source: SourceLike, **kwargs: Any) -> _ast.Type:
    """
    Parse a single type reference such as ``[Int!]!``.
    """
    parser = Parser(source, **kwargs)
    parser.expect_token(TokenKind.SOF)
    type_ = parser.parse_type_reference()
    parser.expect_token(TokenKind.EOF)
    return type_


def _describe_kind(kind: TokenKind) -> str:
    if kind in PUNCTUATORS:
        return '"%s"' % kind.value
    return kind.value


class Parser:
    """
    Recursive descent parser for GraphQL documents.

    Call :meth:`parse_document` to parse a full document. All ``parse_*``
    methods raise :class:`~gqlkit.exc.GraphQLSyntaxError` on malformed
    input, the parser never attempts to recover.

    Args:
        source: Source document

        no_location: Do not attach locations to the created nodes.
    """

    __slots__ = ("_lexer", "_source", "_no_location")

    def __init__(self, source: SourceLike, no_location: bool = False):
        self._lexer = Lexer(source)
        self._source = self._lexer.source
        self._no_location = no_location

    @property
    def token(self) -> Token:
        return self._lexer.token

    def loc(self, start: Token) -> Optional[Location]:
        if self._no_location:
            return None
        return Location(start.start, self._lexer.last_token.end, self._source)

    def unexpected(self, token: Optional[Token] = None) -> GraphQLSyntaxError:
        token = token or self._lexer.token
        if token.kind is TokenKind.EOF:
            return UnexpectedEOF(token.start, self._source.body)
        return UnexpectedToken(
            "Unexpected %s" % token.describe(), token.start, self._source.body
        )

    def peek(self, kind: TokenKind) -> bool:
        return self._lexer.token.kind is kind

    def peek_keyword(self, value: str) -> bool:
        token = self._lexer.token
        return token.kind is TokenKind.NAME and token.value == value

    def expect_token(self, kind: TokenKind) -> Token:
        """
        Consume the current token if it is of the given kind and raise a
        syntax error otherwise.
        """
        token = self._lexer.token
        if token.kind is kind:
            self._lexer.advance()
            return token
        raise UnexpectedToken(
            "Expected %s, found %s" % (_describe_kind(kind), token.describe()),
            token.start,
            self._source.body,
        )

    def expect_keyword(self, value: str) -> Token:
        token = self._lexer.token
        if token.kind is TokenKind.NAME and token.value == value:
            self._lexer.advance()
            return token
        raise UnexpectedToken(
            'Expected "%s", found %s' % (value, token.describe()),
            token.start,
            self._source.body,
        )

    def skip(self, kind: TokenKind) -> bool:
        """
        Consume the current token if it is of the given kind and report
        whether it was consumed.
        """
        if self._lexer.token.kind is kind:
            self._lexer.advance()
            return True
        return False

    def skip_keyword(self, value: str) -> bool:
        if self.peek_keyword(value):
            self._lexer.advance()
            return True
        return False

    def many(
        self, open_kind: TokenKind, parse_fn: Callable[[], N], close_kind: TokenKind
    ) -> List[N]:
        """
        Non-empty list of nodes surrounded by ``open_kind`` and
        ``close_kind``.
        """
        self.expect_token(open_kind)
        nodes = [parse_fn()]
        while not self.skip(close_kind):
            nodes.append(parse_fn())
        return nodes

    def optional_many(
        self, open_kind: TokenKind, parse_fn: Callable[[], N], close_kind: TokenKind
    ) -> List[N]:
        """
        Empty list when the current token is not ``open_kind``, otherwise
        behaves like :meth:`many`.
        """
        if self.peek(open_kind):
            return self.many(open_kind, parse_fn, close_kind)
        return []

    def any_(
        self, open_kind: TokenKind, parse_fn: Callable[[], N], close_kind: TokenKind
    ) -> List[N]:
        """
        Possibly empty list of nodes surrounded by ``open_kind`` and
        ``close_kind``.
        """
        self.expect_token(open_kind)
        nodes = []
        while not self.skip(close_kind):
            nodes.append(parse_fn())
        return nodes

    def parse_document(self) -> _ast.Document:
        """
        Document : Definition+
        """
        start = self.token
        self.expect_token(TokenKind.SOF)
        definitions = [self.parse_definition()]
        while not self.skip(TokenKind.EOF):
            definitions.append(self.parse_definition())
        return _ast.Document(definitions=definitions, loc=self.loc(start))

    def parse_definition(self) -> _ast.Definition:
        """
        Definition : ExecutableDefinition | TypeSystemDefinition
        | TypeSystemExtension
        """
        token = self.token
        if token.kind is TokenKind.BRACE_L:
            return self.parse_operation_definition()

        if token.kind in (TokenKind.STRING, TokenKind.BLOCK_STRING):
            keyword = self._lexer.lookahead()
            if (
                keyword.kind is TokenKind.NAME
                and keyword.value in TYPE_SYSTEM_KEYWORDS
            ):
                return self.parse_type_system_definition(keyword.value)
            raise self.unexpected(keyword)

        if token.kind is TokenKind.NAME:
            if token.value in OPERATION_TYPES:
                return self.parse_operation_definition()
            elif token.value == "fragment":
                return self.parse_fragment_definition()
            elif token.value in TYPE_SYSTEM_KEYWORDS:
                return self.parse_type_system_definition(token.value)
            elif token.value == "extend":
                return self.parse_type_system_extension()

        raise self.unexpected(token)

    def parse_name(self) -> _ast.Name:
        token = self.expect_token(TokenKind.NAME)
        return _ast.Name(value=token.value, loc=self.loc(token))

    # Executable definitions

    def parse_operation_definition(self) -> _ast.OperationDefinition:
        """
        OperationDefinition : SelectionSet
        | OperationType Name? VariableDefinitions? Directives? SelectionSet
        """
        start = self.token
        if start.kind is TokenKind.BRACE_L:
            return _ast.OperationDefinition(
                operation="query",
                name=None,
                variable_definitions=[],
                directives=[],
                selection_set=self.parse_selection_set(),
                loc=self.loc(start),
            )

        operation = self.parse_operation_type()
        name = self.parse_name() if self.peek(TokenKind.NAME) else None
        return _ast.OperationDefinition(
            operation=operation,
            name=name,
            variable_definitions=self.optional_many(
                TokenKind.PAREN_L,
                self.parse_variable_definition,
                TokenKind.PAREN_R,
            ),
            directives=self.parse_directives(False),
            selection_set=self.parse_selection_set(),
            loc=self.loc(start),
        )

    def parse_operation_type(self) -> str:
        """
        OperationType : one of "query" "mutation" "subscription"
        """
        token = self.expect_token(TokenKind.NAME)
        if token.value in OPERATION_TYPES:
            return token.value
        raise self.unexpected(token)

    def parse_variable_definition(self) -> _ast.VariableDefinition:
        """
        VariableDefinition : Variable : Type DefaultValue? Directives[Const]?
        """
        start = self.token
        variable = self.parse_variable()
        self.expect_token(TokenKind.COLON)
        type_ = self.parse_type_reference()
        default_value = (
            self.parse_value_literal(True)
            if self.skip(TokenKind.EQUALS)
            else None
        )
        return _ast.VariableDefinition(
            variable=variable,
            type=type_,
            default_value=default_value,
            directives=self.parse_directives(True),
            loc=self.loc(start),
        )

    def parse_variable(self) -> _ast.Variable:
        """
        Variable : $ Name
        """
        start = self.expect_token(TokenKind.DOLLAR)
        return _ast.Variable(name=self.parse_name(), loc=self.loc(start))

    def parse_selection_set(self) -> _ast.SelectionSet:
        """
        SelectionSet : { Selection+ }
        """
        start = self.token
        return _ast.SelectionSet(
            selections=self.many(
                TokenKind.BRACE_L, self.parse_selection, TokenKind.BRACE_R
            ),
            loc=self.loc(start),
        )

    def parse_selection(self) -> _ast.Selection:
        """
        Selection : Field | FragmentSpread | InlineFragment
        """
        if self.peek(TokenKind.SPREAD):
            return self.parse_fragment()
        return self.parse_field()

    def parse_field(self) -> _ast.Field:
        """
        Field : Alias? Name Arguments? Directives? SelectionSet?
        """
        start = self.token
        name_or_alias = self.parse_name()
        if self.skip(TokenKind.COLON):
            alias, name = name_or_alias, self.parse_name()  # type: ignore
        else:
            alias, name = None, name_or_alias

        return _ast.Field(
            alias=alias,
            name=name,
            arguments=self.parse_arguments(False),
            directives=self.parse_directives(False),
            selection_set=(
                self.parse_selection_set()
                if self.peek(TokenKind.BRACE_L)
                else None
            ),
            loc=self.loc(start),
        )

    def parse_arguments(self, const: bool) -> List[_ast.Argument]:
        """
        Arguments[Const] : ( Argument[?Const]+ )
        """
        return self.optional_many(
            TokenKind.PAREN_L,
            ft.partial(self.parse_argument, const),
            TokenKind.PAREN_R,
        )

    def parse_argument(self, const: bool) -> _ast.Argument:
        """
        Argument[Const] : Name : Value[?Const]
        """
        start = self.token
        name = self.parse_name()
        self.expect_token(TokenKind.COLON)
        return _ast.Argument(
            name=name, value=self.parse_value_literal(const), loc=self.loc(start)
        )

    def parse_fragment(self) -> _ast.Selection:
        """
        FragmentSpread : ... FragmentName Directives?

        InlineFragment : ... TypeCondition? Directives? SelectionSet
        """
        start = self.expect_token(TokenKind.SPREAD)

        has_type_condition = self.skip_keyword("on")
        if not has_type_condition and self.peek(TokenKind.NAME):
            return _ast.FragmentSpread(
                name=self.parse_fragment_name(),
                directives=self.parse_directives(False),
                loc=self.loc(start),
            )

        return _ast.InlineFragment(
            type_condition=self.parse_named_type() if has_type_condition else None,
            directives=self.parse_directives(False),
            selection_set=self.parse_selection_set(),
            loc=self.loc(start),
        )

    def parse_fragment_definition(self) -> _ast.FragmentDefinition:
        """
        FragmentDefinition :
        fragment FragmentName TypeCondition Directives? SelectionSet
        """
        start = self.token
        self.expect_keyword("fragment")
        name = self.parse_fragment_name()
        self.expect_keyword("on")
        return _ast.FragmentDefinition(
            name=name,
            type_condition=self.parse_named_type(),
            directives=self.parse_directives(False),
            selection_set=self.parse_selection_set(),
            loc=self.loc(start),
        )

    def parse_fragment_name(self) -> _ast.Name:
        """
        FragmentName : Name but not "on"
        """
        if self.peek_keyword("on"):
            raise self.unexpected()
        return self.parse_name()

    # Values

    def parse_value_literal(self, const: bool) -> _ast.Value:
        """
        Value[Const] : [~Const]Variable | IntValue | FloatValue | StringValue
        | BooleanValue | NullValue | EnumValue | ListValue[?Const]
        | ObjectValue[?Const]
        """
        token = self.token
        kind = token.kind

        if kind is TokenKind.BRACKET_L:
            return self.parse_list(const)
        elif kind is TokenKind.BRACE_L:
            return self.parse_object(const)
        elif kind is TokenKind.INT:
            self._lexer.advance()
            return _ast.IntValue(value=token.value, loc=self.loc(token))
        elif kind is TokenKind.FLOAT:
            self._lexer.advance()
            return _ast.FloatValue(value=token.value, loc=self.loc(token))
        elif kind in (TokenKind.STRING, TokenKind.BLOCK_STRING):
            return self.parse_string_literal()
        elif kind is TokenKind.NAME:
            self._lexer.advance()
            if token.value in ("true", "false"):
                return _ast.BooleanValue(
                    value=token.value == "true", loc=self.loc(token)
                )
            elif token.value == "null":
                return _ast.NullValue(loc=self.loc(token))
            return _ast.EnumValue(value=token.value, loc=self.loc(token))
        elif kind is TokenKind.DOLLAR and not const:
            return self.parse_variable()

        raise self.unexpected(token)

    def parse_string_literal(self) -> _ast.StringValue:
        token = self.token
        self._lexer.advance()
        return _ast.StringValue(
            value=token.value,
            block=token.kind is TokenKind.BLOCK_STRING,
            loc=self.loc(token),
        )

    def parse_list(self, const: bool) -> _ast.ListValue:
        """
        ListValue[Const] : [ ] | [ Value[?Const]+ ]
        """
        start = self.token
        return _ast.ListValue(
            values=self.any_(
                TokenKind.BRACKET_L,
                ft.partial(self.parse_value_literal, const),
                TokenKind.BRACKET_R,
            ),
            loc=self.loc(start),
        )

    def parse_object(self, const: bool) -> _ast.ObjectValue:
        """
        ObjectValue[Const] : { } | { ObjectField[?Const]+ }
        """
        start = self.token
        return _ast.ObjectValue(
            fields=self.any_(
                TokenKind.BRACE_L,
                ft.partial(self.parse_object_field, const),
                TokenKind.BRACE_R,
            ),
            loc=self.loc(start),
        )

    def parse_object_field(self, const: bool) -> _ast.ObjectField:
        """
        ObjectField[Const] : Name : Value[?Const]
        """
        start = self.token
        name = self.parse_name()
        self.expect_token(TokenKind.COLON)
        return _ast.ObjectField(
            name=name, value=self.parse_value_literal(const), loc=self.loc(start)
        )

    def parse_directives(self, const: bool) -> List[_ast.Directive]:
        """
        Directives[Const] : Directive[?Const]+
        """
        directives = []
        while self.peek(TokenKind.AT):
            directives.append(self.parse_directive(const))
        return directives

    def parse_directive(self, const: bool) -> _ast.Directive:
        """
        Directive[Const] : @ Name Arguments[?Const]?
        """
        start = self.expect_token(TokenKind.AT)
        return _ast.Directive(
            name=self.parse_name(),
            arguments=self.parse_arguments(const),
            loc=self.loc(start),
        )

    # Type references

    def parse_type_reference(self) -> _ast.Type:
        """
        Type : NamedType | ListType | NonNullType
        """
        start = self.token
        if self.skip(TokenKind.BRACKET_L):
            inner = self.parse_type_reference()
            self.expect_token(TokenKind.BRACKET_R)
            type_ = _ast.ListType(type=inner, loc=self.loc(start))  # type: _ast.Type
        else:
            type_ = self.parse_named_type()

        if self.skip(TokenKind.BANG):
            return _ast.NonNullType(type=type_, loc=self.loc(start))
        return type_

    def parse_named_type(self) -> _ast.NamedType:
        start = self.token
        return _ast.NamedType(name=self.parse_name(), loc=self.loc(start))

    # Type system definitions

    def parse_type_system_definition(
        self, keyword: str
    ) -> _ast.TypeSystemDefinition:
        """
        TypeSystemDefinition : SchemaDefinition | TypeDefinition
        | DirectiveDefinition
        """
        return getattr(self, "parse_%s_definition" % keyword)()

    def parse_description(self) -> Optional[_ast.StringValue]:
        if self.peek(TokenKind.STRING) or self.peek(TokenKind.BLOCK_STRING):
            return self.parse_string_literal()
        return None

    def parse_schema_definition(self) -> _ast.SchemaDefinition:
        """
        SchemaDefinition :
        Description? schema Directives[Const]? { OperationTypeDefinition+ }
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("schema")
        return _ast.SchemaDefinition(
            description=description,
            directives=self.parse_directives(True),
            operation_types=self.many(
                TokenKind.BRACE_L,
                self.parse_operation_type_definition,
                TokenKind.BRACE_R,
            ),
            loc=self.loc(start),
        )

    def parse_operation_type_definition(self) -> _ast.OperationTypeDefinition:
        """
        OperationTypeDefinition : OperationType : NamedType
        """
        start = self.token
        operation = self.parse_operation_type()
        self.expect_token(TokenKind.COLON)
        return _ast.OperationTypeDefinition(
            operation=operation,
            type=self.parse_named_type(),
            loc=self.loc(start),
        )

    def parse_scalar_definition(self) -> _ast.ScalarTypeDefinition:
        """
        ScalarTypeDefinition : Description? scalar Name Directives[Const]?
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("scalar")
        return _ast.ScalarTypeDefinition(
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            loc=self.loc(start),
        )

    def parse_type_definition(self) -> _ast.ObjectTypeDefinition:
        """
        ObjectTypeDefinition : Description? type Name ImplementsInterfaces?
        Directives[Const]? FieldsDefinition?
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("type")
        return _ast.ObjectTypeDefinition(
            description=description,
            name=self.parse_name(),
            interfaces=self.parse_implements_interfaces(),
            directives=self.parse_directives(True),
            fields=self.parse_fields_definition(),
            loc=self.loc(start),
        )

    def parse_implements_interfaces(self) -> List[_ast.NamedType]:
        """
        ImplementsInterfaces : implements &? NamedType
        | ImplementsInterfaces & NamedType
        """
        if not self.skip_keyword("implements"):
            return []
        self.skip(TokenKind.AMP)
        types = [self.parse_named_type()]
        while self.skip(TokenKind.AMP):
            types.append(self.parse_named_type())
        return types

    def parse_fields_definition(self) -> List[_ast.FieldDefinition]:
        """
        FieldsDefinition : { FieldDefinition+ }
        """
        return self.optional_many(
            TokenKind.BRACE_L, self.parse_field_definition, TokenKind.BRACE_R
        )

    def parse_field_definition(self) -> _ast.FieldDefinition:
        """
        FieldDefinition :
        Description? Name ArgumentsDefinition? : Type Directives[Const]?
        """
        start = self.token
        description = self.parse_description()
        name = self.parse_name()
        arguments = self.parse_argument_definitions()
        self.expect_token(TokenKind.COLON)
        return _ast.FieldDefinition(
            description=description,
            name=name,
            arguments=arguments,
            type=self.parse_type_reference(),
            directives=self.parse_directives(True),
            loc=self.loc(start),
        )

    def parse_argument_definitions(self) -> List[_ast.InputValueDefinition]:
        """
        ArgumentsDefinition : ( InputValueDefinition+ )
        """
        return self.optional_many(
            TokenKind.PAREN_L,
            self.parse_input_value_definition,
            TokenKind.PAREN_R,
        )

    def parse_input_value_definition(self) -> _ast.InputValueDefinition:
        """
        InputValueDefinition :
        Description? Name : Type DefaultValue? Directives[Const]?
        """
        start = self.token
        description = self.parse_description()
        name = self.parse_name()
        self.expect_token(TokenKind.COLON)
        type_ = self.parse_type_reference()
        default_value = (
            self.parse_value_literal(True)
            if self.skip(TokenKind.EQUALS)
            else None
        )
        return _ast.InputValueDefinition(
            description=description,
            name=name,
            type=type_,
            default_value=default_value,
            directives=self.parse_directives(True),
            loc=self.loc(start),
        )

    def parse_interface_definition(self) -> _ast.InterfaceTypeDefinition:
        """
        InterfaceTypeDefinition : Description? interface Name
        ImplementsInterfaces? Directives[Const]? FieldsDefinition?
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("interface")
        return _ast.InterfaceTypeDefinition(
            description=description,
            name=self.parse_name(),
            interfaces=self.parse_implements_interfaces(),
            directives=self.parse_directives(True),
            fields=self.parse_fields_definition(),
            loc=self.loc(start),
        )

    def parse_union_definition(self) -> _ast.UnionTypeDefinition:
        """
        UnionTypeDefinition :
        Description? union Name Directives[Const]? UnionMemberTypes?
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("union")
        return _ast.UnionTypeDefinition(
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            types=self.parse_union_member_types(),
            loc=self.loc(start),
        )

    def parse_union_member_types(self) -> List[_ast.NamedType]:
        """
        UnionMemberTypes : = |? NamedType | UnionMemberTypes | NamedType
        """
        if not self.skip(TokenKind.EQUALS):
            return []
        self.skip(TokenKind.PIPE)
        types = [self.parse_named_type()]
        while self.skip(TokenKind.PIPE):
            types.append(self.parse_named_type())
        return types

    def parse_enum_definition(self) -> _ast.EnumTypeDefinition:
        """
        EnumTypeDefinition :
        Description? enum Name Directives[Const]? EnumValuesDefinition?
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("enum")
        return _ast.EnumTypeDefinition(
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            values=self.parse_enum_values_definition(),
            loc=self.loc(start),
        )

    def parse_enum_values_definition(self) -> List[_ast.EnumValueDefinition]:
        return self.optional_many(
            TokenKind.BRACE_L,
            self.parse_enum_value_definition,
            TokenKind.BRACE_R,
        )

    def parse_enum_value_definition(self) -> _ast.EnumValueDefinition:
        """
        EnumValueDefinition : Description? EnumValue Directives[Const]?
        """
        start = self.token
        description = self.parse_description()
        if self.token.value in ("true", "false", "null"):
            raise UnexpectedToken(
                "%s is reserved and cannot be used for an enum value"
                % self.token.describe(),
                self.token.start,
                self._source.body,
            )
        return _ast.EnumValueDefinition(
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            loc=self.loc(start),
        )

    def parse_input_definition(self) -> _ast.InputObjectTypeDefinition:
        """
        InputObjectTypeDefinition :
        Description? input Name Directives[Const]? InputFieldsDefinition?
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("input")
        return _ast.InputObjectTypeDefinition(
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            fields=self.parse_input_fields_definition(),
            loc=self.loc(start),
        )

    def parse_input_fields_definition(self) -> List[_ast.InputValueDefinition]:
        return self.optional_many(
            TokenKind.BRACE_L,
            self.parse_input_value_definition,
            TokenKind.BRACE_R,
        )

    def parse_directive_definition(self) -> _ast.DirectiveDefinition:
        """
        DirectiveDefinition : Description? directive @ Name
        ArgumentsDefinition? repeatable? on DirectiveLocations
        """
        start = self.token
        description = self.parse_description()
        self.expect_keyword("directive")
        self.expect_token(TokenKind.AT)
        name = self.parse_name()
        arguments = self.parse_argument_definitions()
        repeatable = self.skip_keyword("repeatable")
        self.expect_keyword("on")
        return _ast.DirectiveDefinition(
            description=description,
            name=name,
            arguments=arguments,
            repeatable=repeatable,
            locations=self.parse_directive_locations(),
            loc=self.loc(start),
        )

    def parse_directive_locations(self) -> List[_ast.Name]:
        """
        DirectiveLocations : |? DirectiveLocation
        | DirectiveLocations | DirectiveLocation
        """
        self.skip(TokenKind.PIPE)
        locations = [self.parse_directive_location()]
        while self.skip(TokenKind.PIPE):
            locations.append(self.parse_directive_location())
        return locations

    def parse_directive_location(self) -> _ast.Name:
        token = self.token
        name = self.parse_name()
        if name.value not in DIRECTIVE_LOCATIONS:
            raise self.unexpected(token)
        return name

    # Type system extensions

    def parse_type_system_extension(self) -> _ast.TypeSystemExtension:
        """
        TypeSystemExtension : SchemaExtension | TypeExtension
        """
        keyword = self._lexer.lookahead()
        if keyword.kind is TokenKind.NAME:
            method = getattr(self, "parse_%s_extension" % keyword.value, None)
            if method is not None:
                return method()
        raise self.unexpected(keyword)

    def _ensure_extends(self, *parts: List[Any]) -> None:
        if not any(parts):
            raise self.unexpected()

    def parse_schema_extension(self) -> _ast.SchemaExtension:
        """
        SchemaExtension : extend schema Directives[Const]?
        { OperationTypeDefinition+ } | extend schema Directives[Const]
        """
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("schema")
        directives = self.parse_directives(True)
        operation_types = self.optional_many(
            TokenKind.BRACE_L,
            self.parse_operation_type_definition,
            TokenKind.BRACE_R,
        )
        self._ensure_extends(directives, operation_types)
        return _ast.SchemaExtension(
            directives=directives,
            operation_types=operation_types,
            loc=self.loc(start),
        )

    def parse_scalar_extension(self) -> _ast.ScalarTypeExtension:
        """
        ScalarTypeExtension : extend scalar Name Directives[Const]
        """
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("scalar")
        name = self.parse_name()
        directives = self.parse_directives(True)
        self._ensure_extends(directives)
        return _ast.ScalarTypeExtension(
            name=name, directives=directives, loc=self.loc(start)
        )

    def parse_type_extension(self) -> _ast.ObjectTypeExtension:
        """
        ObjectTypeExtension : extend type Name ImplementsInterfaces?
        Directives[Const]? FieldsDefinition (at least one part present)
        """
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("type")
        name = self.parse_name()
        interfaces = self.parse_implements_interfaces()
        directives = self.parse_directives(True)
        fields = self.parse_fields_definition()
        self._ensure_extends(interfaces, directives, fields)
        return _ast.ObjectTypeExtension(
            name=name,
            interfaces=interfaces,
            directives=directives,
            fields=fields,
            loc=self.loc(start),
        )

    def parse_interface_extension(self) -> _ast.InterfaceTypeExtension:
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("interface")
        name = self.parse_name()
        interfaces = self.parse_implements_interfaces()
        directives = self.parse_directives(True)
        fields = self.parse_fields_definition()
        self._ensure_extends(interfaces, directives, fields)
        return _ast.InterfaceTypeExtension(
            name=name,
            interfaces=interfaces,
            directives=directives,
            fields=fields,
            loc=self.loc(start),
        )

    def parse_union_extension(self) -> _ast.UnionTypeExtension:
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("union")
        name = self.parse_name()
        directives = self.parse_directives(True)
        types = self.parse_union_member_types()
        self._ensure_extends(directives, types)
        return _ast.UnionTypeExtension(
            name=name, directives=directives, types=types, loc=self.loc(start)
        )

    def parse_enum_extension(self) -> _ast.EnumTypeExtension:
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("enum")
        name = self.parse_name()
        directives = self.parse_directives(True)
        values = self.parse_enum_values_definition()
        self._ensure_extends(directives, values)
        return _ast.EnumTypeExtension(
            name=name, directives=directives, values=values, loc=self.loc(start)
        )

    def parse_input_extension(self) -> _ast.InputObjectTypeExtension:
        start = self.token
        self.expect_keyword("extend")
        self.expect_keyword("input")
        name = self.parse_name()
        directives = self.parse_directives(True)
        fields = self.parse_input_fields_definition()
        self._ensure_extends(directives, fields)
        return _ast.InputObjectTypeExtension(
            name=name, directives=directives, fields=fields, loc=self.loc(start)
        )
