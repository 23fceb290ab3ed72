# -*- coding: utf-8 -*-
""" Test the main entry point """

import pytest

from gqlwire import graphql, graphql_blocking, process_graphql_query
from gqlwire.exc import ExecutionError, GraphQLSyntaxError, ValidationError
from gqlwire.execution.runtime import AsyncIORuntime
from gqlwire.lang import parse
from gqlwire.validation import ValidationVisitor

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio


async def _execute_query_blocking(*args, **kwargs):
    return graphql_blocking(*args, **kwargs)


async def _execute_query_async(*args, **kwargs):
    return await graphql(*args, **kwargs)


async def _execute_query_runtime(*args, **kwargs):
    return await process_graphql_query(
        *args, runtime=AsyncIORuntime(), **kwargs
    )


_with_execution_strategies = pytest.mark.parametrize(
    "execute_query",
    [_execute_query_blocking, _execute_query_async, _execute_query_runtime],
)


@_with_execution_strategies
async def test_it_correctly_identifies_r2_d2_as_the_hero(
    starwars_schema, execute_query
):
    result = await execute_query(
        starwars_schema,
        """
        query HeroNameQuery {
            hero {
                name
            }
        }
        """,
    )
    assert result.response() == {
        "data": {"hero": {"name": "R2-D2"}},
        "errors": [],
    }


@_with_execution_strategies
async def test_variables_and_operation_name(starwars_schema, execute_query):
    result = await execute_query(
        starwars_schema,
        """
        query Luke { human(id: "1000") { name } }
        query Hero($episode: Episode) { hero(episode: $episode) { name } }
        """,
        variables={"episode": "EMPIRE"},
        operation_name="Hero",
    )
    assert result.data == {"hero": {"name": "Luke Skywalker"}}
    assert not result.errors


@_with_execution_strategies
async def test_correct_response_on_empty_document(
    execute_query, starwars_schema
):
    result = await execute_query(starwars_schema, "")
    assert result.data is None
    (error,) = result.errors
    assert isinstance(error, GraphQLSyntaxError)
    assert result.response()["errors"] == [
        {"message": "Unexpected <EOF>", "locations": [{"line": 1, "column": 1}]}
    ]


@_with_execution_strategies
async def test_correct_response_on_syntax_error(execute_query, starwars_schema):
    result = await execute_query(
        starwars_schema, "query HeroNameQuery {{ hero { name } }"
    )
    assert result.data is None
    (error,) = result.errors
    assert isinstance(error, GraphQLSyntaxError)
    assert error.to_dict()["locations"] == [{"line": 1, "column": 22}]


@_with_execution_strategies
async def test_invalid_utf8_document(execute_query, starwars_schema):
    result = await execute_query(
        starwars_schema, b"{ hero { name } } # caf\xe9"
    )
    assert result.response() == {
        "data": None,
        "errors": [
            {
                "message": "Invalid UTF-8 byte 0xe9",
                "locations": [{"line": 1, "column": 24}],
            }
        ],
    }


@_with_execution_strategies
async def test_correct_response_on_validation_errors(
    execute_query, starwars_schema
):
    result = await execute_query(
        starwars_schema,
        """
        query HeroNameAndFriendsQuery($hero: Droid) {
            hero {
                id
                foo
                friends {
                    name
                }
            }
        }

        fragment hero on Character {
            id
            friends { name }
        }
        """,
    )
    assert result.data is None
    assert all(isinstance(err, ValidationError) for err in result.errors)
    assert [err.message for err in result.errors] == [
        'Variable "$hero" must be input type but got "Droid".',
        'Cannot query field "foo" on type "Character".',
        'Unused fragment(s) "hero"',
        'Unused variable(s) "$hero" for operation "HeroNameAndFriendsQuery"',
    ]
    assert result.response()["errors"][1]["locations"] == [
        {"line": 5, "column": 17}
    ]


@_with_execution_strategies
async def test_correct_response_on_argument_validation_error(
    execute_query, starwars_schema
):
    result = await execute_query(starwars_schema, "{ droid { name } }")
    assert result.response() == {
        "data": None,
        "errors": [
            {
                "message": (
                    'Field "droid" argument "id" of type String! is required '
                    "but not provided."
                ),
                "locations": [{"line": 1, "column": 3}],
            }
        ],
    }


@_with_execution_strategies
async def test_correct_response_on_execution_error(
    execute_query, starwars_schema
):
    result = await execute_query(
        starwars_schema, "query A { hero { name } } query B { hero { id } }"
    )
    assert result.data is None
    (error,) = result.errors
    assert isinstance(error, ExecutionError)
    assert error.to_dict() == {
        "message": (
            "Operation name is required when document contains multiple "
            "operation definitions"
        )
    }


@_with_execution_strategies
async def test_correct_response_on_resolver_error(
    execute_query, starwars_schema
):
    result = await execute_query(
        starwars_schema, "{ hero { name secretBackstory } }"
    )
    assert result.response() == {
        "data": {"hero": {"name": "R2-D2", "secretBackstory": None}},
        "errors": [
            {
                "message": "secretBackstory is secret.",
                "locations": [{"line": 1, "column": 15}],
                "path": ["hero", "secretBackstory"],
                "extensions": {"code": 42},
            }
        ],
    }


@_with_execution_strategies
async def test_already_parsed_documents(execute_query, starwars_schema):
    result = await execute_query(starwars_schema, parse("{ hero { id } }"))
    assert result.data == {"hero": {"id": "2001"}}


@_with_execution_strategies
async def test_validation_can_be_skipped(execute_query, starwars_schema):
    # Unused variables do not prevent execution.
    result = await execute_query(
        starwars_schema,
        "query ($unused: Int) { hero { name } }",
        validate=False,
    )
    assert result.data == {"hero": {"name": "R2-D2"}}
    assert not result.errors


async def test_custom_validation_rules(starwars_schema):
    class NoHeroChecker(ValidationVisitor):
        def enter_field(self, node):
            if node.name.value == "hero":
                self.add_error("No heroes here.", [node])

    result = process_graphql_query(
        starwars_schema,
        "{ hero { name } }",
        validation_rules=[NoHeroChecker],
    )
    assert result.data is None
    assert [err.message for err in result.errors] == ["No heroes here."]

    result = process_graphql_query(
        starwars_schema,
        "{ human { name } }",
        validation_rules=[NoHeroChecker],
    )
    # Default rules are replaced, the missing argument is only caught when
    # coercing arguments.
    assert result.data == {"human": None}
    assert [err.message for err in result.errors] == [
        'Argument "id" of required type "String!" was not provided'
    ]


async def test_context_and_root_are_passed_to_resolvers(build_schema):
    def resolve(root, args, info):
        return "%s %s" % (root["greeting"], info.context["name"])

    schema = build_schema(
        "type Query { hello: String }", {"Query.hello": resolve}
    )
    result = graphql_blocking(
        schema,
        "{ hello }",
        root={"greeting": "Hello"},
        context={"name": "World"},
    )
    assert result.data == {"hello": "Hello World"}
