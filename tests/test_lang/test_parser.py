# -*- coding: utf-8 -*-

import pytest

from gqlwire._string_utils import dedent
from gqlwire.exc import GraphQLSyntaxError, UnexpectedEOF, UnexpectedToken
from gqlwire.lang import ast as _ast, parse, parse_type, parse_value


def test_it_parses_the_query_shorthand():
    doc = parse("{ hero { name } }")
    (op,) = doc.definitions
    assert isinstance(op, _ast.OperationDefinition)
    assert op.operation == "query"
    assert op.name is None
    (hero,) = op.selection_set.selections
    assert hero.name.value == "hero"
    assert [s.name.value for s in hero.selection_set.selections] == ["name"]


def test_it_parses_named_operations_with_variables_and_directives():
    doc = parse(
        dedent(
            """
            query HeroName($episode: Episode = JEDI, $withName: Boolean!) {
                hero(episode: $episode) @include(if: $withName) {
                    alias: name
                }
            }
            """
        )
    )
    op = doc.operations["HeroName"]
    assert op.operation == "query"

    episode, with_name = op.variable_definitions
    assert episode.variable.name.value == "episode"
    assert isinstance(episode.type, _ast.NamedType)
    assert isinstance(episode.default_value, _ast.EnumValue)
    assert episode.default_value.value == "JEDI"
    assert isinstance(with_name.type, _ast.NonNullType)
    assert with_name.default_value is None

    (hero,) = op.selection_set.selections
    (arg,) = hero.arguments
    assert arg.name.value == "episode"
    assert isinstance(arg.value, _ast.Variable)
    (directive,) = hero.directives
    assert directive.name.value == "include"

    (name,) = hero.selection_set.selections
    assert name.alias.value == "alias"
    assert name.name.value == "name"
    assert name.response_name == "alias"


def test_it_parses_fragments():
    doc = parse(
        """
        query {
            hero {
                ...CharacterFields
                ... on Droid { primaryFunction }
                ... @skip(if: false) { id }
            }
        }

        fragment CharacterFields on Character {
            name
        }
        """
    )
    assert list(doc.fragments) == ["CharacterFields"]
    fragment = doc.fragments["CharacterFields"]
    assert fragment.type_condition.name.value == "Character"

    spread, on_droid, untyped = doc.definitions[0].selection_set.selections[
        0
    ].selection_set.selections
    assert isinstance(spread, _ast.FragmentSpread)
    assert spread.name.value == "CharacterFields"
    assert isinstance(on_droid, _ast.InlineFragment)
    assert on_droid.type_condition.name.value == "Droid"
    assert isinstance(untyped, _ast.InlineFragment)
    assert untyped.type_condition is None
    assert untyped.directives[0].name.value == "skip"


def test_it_parses_mutations():
    doc = parse('mutation { setName(name: "foo") }')
    assert doc.definitions[0].operation == "mutation"


def test_it_tracks_locations():
    doc = parse("{ hero }")
    hero = doc.definitions[0].selection_set.selections[0]
    assert hero.loc == (2, 6)
    assert hero.source == "{ hero }"


def test_no_location():
    doc = parse("{ hero }", no_location=True)
    assert doc.loc is None
    assert doc.definitions[0].selection_set.selections[0].loc is None


def test_nodes_compare_by_value():
    assert parse("{ a b }") == parse("{ a b }")
    assert parse("{ a b }") != parse("{ a c }")


@pytest.mark.parametrize(
    "source, cls, value",
    [
        ("42", _ast.IntValue, "42"),
        ("-4.2e3", _ast.FloatValue, "-4.2e3"),
        ('"foo"', _ast.StringValue, "foo"),
        ('"""foo"""', _ast.StringValue, "foo"),
        ("true", _ast.BooleanValue, True),
        ("false", _ast.BooleanValue, False),
        ("RED", _ast.EnumValue, "RED"),
    ],
)
def test_parse_value_scalars(source, cls, value):
    node = parse_value(source)
    assert isinstance(node, cls)
    assert node.value == value


def test_parse_value_null():
    assert isinstance(parse_value("null"), _ast.NullValue)


def test_parse_value_list_and_object():
    node = parse_value('[1, "two", {a: [], b: $var}]')
    assert isinstance(node, _ast.ListValue)
    one, two, obj = node.values
    assert one.value == "1"
    assert two.value == "two"
    assert isinstance(obj, _ast.ObjectValue)
    a, b = obj.fields
    assert a.name.value == "a"
    assert a.value.values == []
    assert isinstance(b.value, _ast.Variable)


def test_variables_are_not_allowed_in_default_values():
    with pytest.raises(UnexpectedToken):
        parse("query ($a: Int = $b) { field }")


def test_parse_type():
    node = parse_type("[Int!]!")
    assert isinstance(node, _ast.NonNullType)
    assert isinstance(node.type, _ast.ListType)
    assert isinstance(node.type.type, _ast.NonNullType)
    assert node.type.type.type.name.value == "Int"


@pytest.mark.parametrize(
    "source, position",
    [
        ("{", 1),
        ("{ field(arg: ) }", 13),
        ("query Foo", 9),
        ("fragment on on Foo { a }", 9),
        ("{ ...on }", 8),
        ("notanoperation { a }", 0),
    ],
)
def test_it_reports_syntax_errors(source, position):
    with pytest.raises(GraphQLSyntaxError) as exc_info:
        parse(source)
    assert exc_info.value.position == position


def test_empty_document_is_invalid():
    with pytest.raises(UnexpectedEOF):
        parse("")


def test_type_system_definitions_are_rejected_by_default():
    with pytest.raises(UnexpectedToken):
        parse("type Query { a: String }")


def test_it_parses_type_system_definitions():
    doc = parse(
        '''
        schema { query: Root }

        """The root type"""
        type Root implements Node & Named {
            "Field description"
            field(
                """Arg description"""
                arg: [String!] = ["a"]
            ): Int @deprecated(reason: "gone")
        }

        interface Node { id: ID! }
        union Result = Root | Other
        enum Color { RED GREEN @deprecated }
        input Point { x: Float = 0.0, y: Float }
        scalar Date
        ''',
        allow_type_system=True,
    )
    kinds = [type(d) for d in doc.definitions]
    assert kinds == [
        _ast.SchemaDefinition,
        _ast.ObjectTypeDefinition,
        _ast.InterfaceTypeDefinition,
        _ast.UnionTypeDefinition,
        _ast.EnumTypeDefinition,
        _ast.InputObjectTypeDefinition,
        _ast.ScalarTypeDefinition,
    ]

    root = doc.definitions[1]
    assert root.description.value == "The root type"
    assert [i.name.value for i in root.interfaces] == ["Node", "Named"]
    (field,) = root.fields
    assert field.description.value == "Field description"
    (arg,) = field.arguments
    assert arg.description.value == "Arg description"
    assert isinstance(arg.default_value, _ast.ListValue)
    assert field.directives[0].name.value == "deprecated"

    union = doc.definitions[3]
    assert [t.name.value for t in union.types] == ["Root", "Other"]


@pytest.mark.parametrize(
    "source",
    [
        "extend type Query { b: String }",
        "directive @foo on FIELD",
    ],
)
def test_unsupported_type_system_definitions(source):
    with pytest.raises(UnexpectedToken) as exc_info:
        parse(source, allow_type_system=True)
    assert "not supported" in exc_info.value.message


@pytest.mark.parametrize(
    "source, message, position",
    [
        ("{ a(: 1) }", 'Expected Name but found ":"', 4),
        ("{ a(b: 1 c) }", 'Expected ":" but found ")"', 10),
        ("query Foo bar { a }", 'Expected "{" but found Name "bar"', 10),
        ("fragment Foo in T { a }", 'Expected "on" but found Name "in"', 13),
        ("{ a } 1", 'Unexpected Integer "1"', 6),
    ],
)
def test_syntax_errors_describe_the_offending_token(source, message, position):
    with pytest.raises(UnexpectedToken) as exc_info:
        parse(source)
    assert exc_info.value.message == message
    assert exc_info.value.position == position
