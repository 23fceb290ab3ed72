# -*- coding: utf-8 -*-
"""
Recursive descent parser for GraphQL documents.

The parser works over the token stream produced by
:class:`gqlwire.lang.lexer.Lexer` and builds the nodes defined in
:mod:`gqlwire.lang.ast`. Executable definitions (operations and fragments)
are always accepted; type system definitions only when ``allow_type_system``
is set. Type extensions and directive definitions are not supported.
"""

import functools as ft
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar, Union

from ..exc import GraphQLSyntaxError, UnexpectedEOF, UnexpectedToken
from . import ast as _ast
from .lexer import Lexer
from .token import (
    EOF,
    SOF,
    Ampersand,
    At,
    BlockString,
    BracketClose,
    BracketOpen,
    Colon,
    CurlyClose,
    CurlyOpen,
    Dollar,
    Ellip,
    Equals,
    ExclamationMark,
    Float,
    Integer,
    Name,
    ParenClose,
    ParenOpen,
    Pipe,
    String,
    Token,
)

OPERATION_TYPES = frozenset(("query", "mutation", "subscription"))

TYPE_SYSTEM_KEYWORDS = frozenset(
    ("schema", "scalar", "type", "interface", "union", "enum", "input")
)

UNSUPPORTED_KEYWORDS = frozenset(("extend", "directive"))

Kind = Type[Token]
N = TypeVar("N", bound=_ast.Node)


def _unexpected(
    token: Token, source: str, message: Optional[str] = None
) -> GraphQLSyntaxError:
    if isinstance(token, EOF):
        return UnexpectedEOF(token.start, source)
    return UnexpectedToken(
        message or "Unexpected %s" % token.describe(), token.start, source
    )


def _is_string(token: Token) -> bool:
    return token.__class__ is String or token.__class__ is BlockString


def parse(source: Union[str, bytes], **kwargs: Any) -> _ast.Document:
    """
    Parse a string as a GraphQL Document.

    Args:
        source: Source document.
        **kwargs: Remaining keyword arguments passed to :class:`Parser`.

    Raises:
        :class:`~gqlwire.exc.GraphQLSyntaxError`: if a syntax error is
            encountered.
    """
    return Parser(source, **kwargs).parse_document()


def parse_value(source: Union[str, bytes], **kwargs: Any) -> _ast.Value:
    """
    Parse a string as a single GraphQL value (e.g. ``[42]`` or
    ``{a: $var}``).
    """
    parser = Parser(source, **kwargs)
    parser.expect(SOF)
    value = parser.parse_value_literal(False)
    parser.expect(EOF)
    return value


def parse_type(source: Union[str, bytes], **kwargs: Any) -> _ast.Type:
    """
    Parse a string as a single GraphQL type reference (e.g. ``[Int!]``).
    """
    parser = Parser(source, **kwargs)
    parser.expect(SOF)
    type_ = parser.parse_type_reference()
    parser.expect(EOF)
    return type_


class Parser:
    """
    GraphQL syntax parser.

    Instances are single use: call one of the ``parse_*`` entry points once.

    Args:
        source: Source document.
        no_location: Do not attach ``loc`` to the parsed nodes.
        allow_type_system: Accept type system definitions (``type``,
            ``interface``, ``schema``, etc.) in the document.
    """

    __slots__ = (
        "_lexer",
        "_source",
        "_no_location",
        "_allow_type_system",
        "_lookahead",
        "_last",
    )

    def __init__(
        self,
        source: Union[str, bytes],
        no_location: bool = False,
        allow_type_system: bool = False,
    ):
        self._lexer = Lexer(source)
        self._source = self._lexer.source
        self._no_location = no_location
        self._allow_type_system = allow_type_system
        # The lexer can only be consumed once, tokens read ahead for peeking
        # are kept in order here.
        self._lookahead = []  # type: List[Token]
        self._last = None  # type: Optional[Token]

    def _loc(self, start: Token) -> Optional[Tuple[int, int]]:
        if self._no_location or self._last is None:
            return None
        return (start.start, self._last.end)

    def _node(self, cls: Type[N], start: Token, **kwargs: Any) -> N:
        return cls(loc=self._loc(start), source=self._source, **kwargs)

    def peek(self, count: int = 1) -> Token:
        """
        Look ``count`` tokens ahead without advancing the parser.

        Raises:
            :class:`~gqlwire.exc.UnexpectedEOF`: if the lexer is exhausted.
        """
        while len(self._lookahead) < count:
            try:
                self._lookahead.append(next(self._lexer))
            except StopIteration:
                raise UnexpectedEOF(len(self._source), self._source)
        return self._lookahead[count - 1]

    def advance(self) -> Token:
        """
        Consume and return the next token.
        """
        self.peek()
        self._last = self._lookahead.pop(0)
        return self._last

    def expect(self, kind: Kind) -> Token:
        """
        Consume the next token, failing with
        :class:`~gqlwire.exc.UnexpectedToken` if it is not of type ``kind``.
        """
        token = self.peek()
        if token.__class__ is kind:
            return self.advance()
        raise _unexpected(
            token,
            self._source,
            "Expected %s but found %s" % (kind.kind(), token.describe()),
        )

    def expect_keyword(self, keyword: str) -> Token:
        """
        Consume the next token, failing unless it is the name ``keyword``.
        """
        token = self.peek()
        if token.__class__ is Name and token.value == keyword:
            return self.advance()
        raise _unexpected(
            token,
            self._source,
            'Expected "%s" but found %s' % (keyword, token.describe()),
        )

    def skip(self, kind: Kind) -> bool:
        """
        Consume the next token only if it is of type ``kind`` and report
        whether it was consumed.
        """
        if self.peek().__class__ is kind:
            self.advance()
            return True
        return False

    def many(
        self, open_kind: Kind, parse_fn: Callable[[], N], close_kind: Kind
    ) -> List[N]:
        """
        Non-empty list of nodes produced by ``parse_fn`` and surrounded by
        ``open_kind`` and ``close_kind``.
        """
        self.expect(open_kind)
        nodes = [parse_fn()]
        while not self.skip(close_kind):
            nodes.append(parse_fn())
        return nodes

    def any_(
        self, open_kind: Kind, parse_fn: Callable[[], N], close_kind: Kind
    ) -> List[N]:
        """
        Possibly empty list of nodes produced by ``parse_fn`` and surrounded
        by ``open_kind`` and ``close_kind``.
        """
        self.expect(open_kind)
        nodes = []  # type: List[N]
        while not self.skip(close_kind):
            nodes.append(parse_fn())
        return nodes

    def _optional(self, kind: Kind, parse_fn: Callable[[], List[N]]) -> List[N]:
        if self.peek().__class__ is kind:
            return parse_fn()
        return []

    # Documents

    def parse_document(self) -> _ast.Document:
        """
        Document : Definition+
        """
        start = self.expect(SOF)
        definitions = [self.parse_definition()]
        while not self.skip(EOF):
            definitions.append(self.parse_definition())
        return self._node(_ast.Document, start, definitions=definitions)

    def parse_definition(self) -> _ast.Definition:
        token = self.peek()
        if token.__class__ is CurlyOpen:
            return self.parse_operation_definition()

        if token.__class__ is Name:
            if token.value in OPERATION_TYPES:
                return self.parse_operation_definition()
            if token.value == "fragment":
                return self.parse_fragment_definition()

        if self._allow_type_system:
            keyword = self.peek(2) if _is_string(token) else token
            if keyword.__class__ is Name:
                if keyword.value in TYPE_SYSTEM_KEYWORDS:
                    return self.parse_type_system_definition()
                if keyword.value in UNSUPPORTED_KEYWORDS:
                    raise _unexpected(
                        keyword,
                        self._source,
                        '"%s" definitions are not supported' % keyword,
                    )

        raise _unexpected(token, self._source)

    def parse_name(self) -> _ast.Name:
        token = self.expect(Name)
        return self._node(_ast.Name, token, value=token.value)

    # Executable definitions

    def parse_operation_definition(self) -> _ast.OperationDefinition:
        """
        OperationDefinition : SelectionSet
        | OperationType Name? VariableDefinitions? Directives? SelectionSet
        """
        start = self.peek()
        if start.__class__ is CurlyOpen:
            return self._node(
                _ast.OperationDefinition,
                start,
                operation="query",
                selection_set=self.parse_selection_set(),
            )

        operation = self.parse_operation_type()
        name = self.parse_name() if self.peek().__class__ is Name else None
        return self._node(
            _ast.OperationDefinition,
            start,
            operation=operation,
            name=name,
            variable_definitions=self._optional(
                ParenOpen,
                ft.partial(
                    self.many,
                    ParenOpen,
                    self.parse_variable_definition,
                    ParenClose,
                ),
            ),
            directives=self.parse_directives(False),
            selection_set=self.parse_selection_set(),
        )

    def parse_operation_type(self) -> str:
        token = self.expect(Name)
        if token.value not in OPERATION_TYPES:
            raise _unexpected(token, self._source)
        return token.value

    def parse_variable_definition(self) -> _ast.VariableDefinition:
        """
        VariableDefinition : Variable : Type DefaultValue? Directives[Const]?
        """
        start = self.peek()
        variable = self.parse_variable()
        self.expect(Colon)
        type_ = self.parse_type_reference()
        default_value = (
            self.parse_value_literal(True) if self.skip(Equals) else None
        )
        return self._node(
            _ast.VariableDefinition,
            start,
            variable=variable,
            type=type_,
            default_value=default_value,
            directives=self.parse_directives(True),
        )

    def parse_variable(self) -> _ast.Variable:
        start = self.expect(Dollar)
        return self._node(_ast.Variable, start, name=self.parse_name())

    def parse_selection_set(self) -> _ast.SelectionSet:
        start = self.peek()
        selections = self.many(CurlyOpen, self.parse_selection, CurlyClose)
        return self._node(_ast.SelectionSet, start, selections=selections)

    def parse_selection(self) -> _ast.Selection:
        if self.peek().__class__ is Ellip:
            return self.parse_fragment()
        return self.parse_field()

    def parse_field(self) -> _ast.Field:
        """
        Field : Alias? Name Arguments? Directives? SelectionSet?
        """
        start = self.peek()
        alias = None  # type: Optional[_ast.Name]
        name = self.parse_name()
        if self.skip(Colon):
            alias, name = name, self.parse_name()

        arguments = self.parse_arguments(False)
        directives = self.parse_directives(False)
        selection_set = (
            self.parse_selection_set()
            if self.peek().__class__ is CurlyOpen
            else None
        )
        return self._node(
            _ast.Field,
            start,
            alias=alias,
            name=name,
            arguments=arguments,
            directives=directives,
            selection_set=selection_set,
        )

    def parse_arguments(self, const: bool) -> List[_ast.Argument]:
        return self._optional(
            ParenOpen,
            ft.partial(
                self.many,
                ParenOpen,
                ft.partial(self.parse_argument, const),
                ParenClose,
            ),
        )

    def parse_argument(self, const: bool) -> _ast.Argument:
        start = self.peek()
        name = self.parse_name()
        self.expect(Colon)
        return self._node(
            _ast.Argument,
            start,
            name=name,
            value=self.parse_value_literal(const),
        )

    def parse_fragment(self) -> _ast.Selection:
        """
        FragmentSpread : ... FragmentName Directives?
        InlineFragment : ... TypeCondition? Directives? SelectionSet
        """
        start = self.expect(Ellip)
        lead = self.peek()

        if lead.__class__ is Name and lead.value != "on":
            return self._node(
                _ast.FragmentSpread,
                start,
                name=self.parse_name(),
                directives=self.parse_directives(False),
            )

        type_condition = None  # type: Optional[_ast.NamedType]
        if lead.__class__ is Name:
            self.advance()
            type_condition = self.parse_named_type()

        return self._node(
            _ast.InlineFragment,
            start,
            type_condition=type_condition,
            directives=self.parse_directives(False),
            selection_set=self.parse_selection_set(),
        )

    def parse_fragment_definition(self) -> _ast.FragmentDefinition:
        """
        FragmentDefinition :
            fragment FragmentName on NamedType Directives? SelectionSet
        """
        start = self.expect_keyword("fragment")
        if self.peek().value == "on":
            raise _unexpected(self.peek(), self._source)
        name = self.parse_name()
        self.expect_keyword("on")
        return self._node(
            _ast.FragmentDefinition,
            start,
            name=name,
            type_condition=self.parse_named_type(),
            directives=self.parse_directives(False),
            selection_set=self.parse_selection_set(),
        )

    # Values

    def parse_value_literal(self, const: bool) -> _ast.Value:
        token = self.peek()
        kind = token.__class__

        if kind is BracketOpen:
            values = self.any_(
                BracketOpen,
                ft.partial(self.parse_value_literal, const),
                BracketClose,
            )
            return self._node(_ast.ListValue, token, values=values)

        if kind is CurlyOpen:
            self.advance()
            fields = []  # type: List[_ast.ObjectField]
            while not self.skip(CurlyClose):
                fields.append(self.parse_object_field(const))
            return self._node(_ast.ObjectValue, token, fields=fields)

        if kind is Dollar and not const:
            return self.parse_variable()

        if kind is String or kind is BlockString:
            return self.parse_string_literal()

        self.advance()
        if kind is Integer:
            return self._node(_ast.IntValue, token, value=token.value)
        if kind is Float:
            return self._node(_ast.FloatValue, token, value=token.value)
        if kind is Name:
            if token.value in ("true", "false"):
                return self._node(
                    _ast.BooleanValue, token, value=token.value == "true"
                )
            if token.value == "null":
                return self._node(_ast.NullValue, token)
            return self._node(_ast.EnumValue, token, value=token.value)

        raise _unexpected(token, self._source)

    def parse_string_literal(self) -> _ast.StringValue:
        token = self.advance()
        return self._node(
            _ast.StringValue,
            token,
            value=token.value,
            block=token.__class__ is BlockString,
        )

    def parse_object_field(self, const: bool) -> _ast.ObjectField:
        start = self.peek()
        name = self.parse_name()
        self.expect(Colon)
        return self._node(
            _ast.ObjectField,
            start,
            name=name,
            value=self.parse_value_literal(const),
        )

    def parse_directives(self, const: bool) -> List[_ast.Directive]:
        directives = []  # type: List[_ast.Directive]
        while self.peek().__class__ is At:
            start = self.advance()
            directives.append(
                self._node(
                    _ast.Directive,
                    start,
                    name=self.parse_name(),
                    arguments=self.parse_arguments(const),
                )
            )
        return directives

    # Types

    def parse_type_reference(self) -> _ast.Type:
        """
        Type : NamedType | ListType | NonNullType
        """
        start = self.peek()
        if self.skip(BracketOpen):
            inner = self.parse_type_reference()
            self.expect(BracketClose)
            type_ = self._node(
                _ast.ListType, start, type=inner
            )  # type: _ast.Type
        else:
            type_ = self.parse_named_type()

        if self.skip(ExclamationMark):
            return self._node(_ast.NonNullType, start, type=type_)
        return type_

    def parse_named_type(self) -> _ast.NamedType:
        start = self.peek()
        return self._node(_ast.NamedType, start, name=self.parse_name())

    # Type system definitions

    def parse_type_system_definition(self) -> _ast.TypeSystemDefinition:
        token = self.peek()
        keyword = self.peek(2) if _is_string(token) else token
        method = getattr(self, "parse_%s_definition" % keyword.value)
        return method()

    def parse_description(self) -> Optional[_ast.StringValue]:
        if _is_string(self.peek()):
            return self.parse_string_literal()
        return None

    def parse_schema_definition(self) -> _ast.SchemaDefinition:
        """
        SchemaDefinition : schema Directives[Const]? { OperationTypeDefinition+ }
        """
        start = self.peek()
        if self.parse_description() is not None:
            raise _unexpected(start, self._source)
        self.expect_keyword("schema")
        return self._node(
            _ast.SchemaDefinition,
            start,
            directives=self.parse_directives(True),
            operation_types=self.many(
                CurlyOpen, self.parse_operation_type_definition, CurlyClose
            ),
        )

    def parse_operation_type_definition(self) -> _ast.OperationTypeDefinition:
        start = self.peek()
        operation = self.parse_operation_type()
        self.expect(Colon)
        return self._node(
            _ast.OperationTypeDefinition,
            start,
            operation=operation,
            type=self.parse_named_type(),
        )

    def parse_scalar_definition(self) -> _ast.ScalarTypeDefinition:
        start = self.peek()
        description = self.parse_description()
        self.expect_keyword("scalar")
        return self._node(
            _ast.ScalarTypeDefinition,
            start,
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
        )

    def parse_type_definition(self) -> _ast.ObjectTypeDefinition:
        """
        ObjectTypeDefinition : Description? type Name ImplementsInterfaces?
        Directives[Const]? FieldsDefinition?
        """
        start = self.peek()
        description = self.parse_description()
        self.expect_keyword("type")
        return self._node(
            _ast.ObjectTypeDefinition,
            start,
            description=description,
            name=self.parse_name(),
            interfaces=self.parse_implements_interfaces(),
            directives=self.parse_directives(True),
            fields=self.parse_fields_definition(),
        )

    def parse_implements_interfaces(self) -> List[_ast.NamedType]:
        """
        ImplementsInterfaces : implements &? NamedType (& NamedType)*
        """
        token = self.peek()
        if token.__class__ is not Name or token.value != "implements":
            return []
        self.advance()
        self.skip(Ampersand)
        interfaces = [self.parse_named_type()]
        while self.skip(Ampersand):
            interfaces.append(self.parse_named_type())
        return interfaces

    def parse_fields_definition(self) -> List[_ast.FieldDefinition]:
        return self._optional(
            CurlyOpen,
            ft.partial(
                self.many, CurlyOpen, self.parse_field_definition, CurlyClose
            ),
        )

    def parse_field_definition(self) -> _ast.FieldDefinition:
        """
        FieldDefinition : Description? Name ArgumentsDefinition? : Type
        Directives[Const]?
        """
        start = self.peek()
        description = self.parse_description()
        name = self.parse_name()
        arguments = self._optional(
            ParenOpen,
            ft.partial(
                self.many,
                ParenOpen,
                self.parse_input_value_definition,
                ParenClose,
            ),
        )
        self.expect(Colon)
        return self._node(
            _ast.FieldDefinition,
            start,
            description=description,
            name=name,
            arguments=arguments,
            type=self.parse_type_reference(),
            directives=self.parse_directives(True),
        )

    def parse_input_value_definition(self) -> _ast.InputValueDefinition:
        """
        InputValueDefinition : Description? Name : Type DefaultValue?
        Directives[Const]?
        """
        start = self.peek()
        description = self.parse_description()
        name = self.parse_name()
        self.expect(Colon)
        type_ = self.parse_type_reference()
        default_value = (
            self.parse_value_literal(True) if self.skip(Equals) else None
        )
        return self._node(
            _ast.InputValueDefinition,
            start,
            description=description,
            name=name,
            type=type_,
            default_value=default_value,
            directives=self.parse_directives(True),
        )

    def parse_interface_definition(self) -> _ast.InterfaceTypeDefinition:
        start = self.peek()
        description = self.parse_description()
        self.expect_keyword("interface")
        return self._node(
            _ast.InterfaceTypeDefinition,
            start,
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            fields=self.parse_fields_definition(),
        )

    def parse_union_definition(self) -> _ast.UnionTypeDefinition:
        """
        UnionTypeDefinition : Description? union Name Directives[Const]?
        = |? NamedType (| NamedType)*
        """
        start = self.peek()
        description = self.parse_description()
        self.expect_keyword("union")
        name = self.parse_name()
        directives = self.parse_directives(True)
        types = []  # type: List[_ast.NamedType]
        if self.skip(Equals):
            self.skip(Pipe)
            types.append(self.parse_named_type())
            while self.skip(Pipe):
                types.append(self.parse_named_type())
        return self._node(
            _ast.UnionTypeDefinition,
            start,
            description=description,
            name=name,
            directives=directives,
            types=types,
        )

    def parse_enum_definition(self) -> _ast.EnumTypeDefinition:
        start = self.peek()
        description = self.parse_description()
        self.expect_keyword("enum")
        return self._node(
            _ast.EnumTypeDefinition,
            start,
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            values=self._optional(
                CurlyOpen,
                ft.partial(
                    self.many,
                    CurlyOpen,
                    self.parse_enum_value_definition,
                    CurlyClose,
                ),
            ),
        )

    def parse_enum_value_definition(self) -> _ast.EnumValueDefinition:
        start = self.peek()
        description = self.parse_description()
        token = self.peek()
        if token.__class__ is Name and token.value in ("true", "false", "null"):
            raise _unexpected(
                token,
                self._source,
                'Name "%s" is reserved and cannot be used as an enum value'
                % token,
            )
        return self._node(
            _ast.EnumValueDefinition,
            start,
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
        )

    def parse_input_definition(self) -> _ast.InputObjectTypeDefinition:
        start = self.peek()
        description = self.parse_description()
        self.expect_keyword("input")
        return self._node(
            _ast.InputObjectTypeDefinition,
            start,
            description=description,
            name=self.parse_name(),
            directives=self.parse_directives(True),
            fields=self._optional(
                CurlyOpen,
                ft.partial(
                    self.many,
                    CurlyOpen,
                    self.parse_input_value_definition,
                    CurlyClose,
                ),
            ),
        )
