# -*- coding: utf-8 -*-

import pytest

from gqlwire.execution import execute
from gqlwire.lang import parse

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio


async def test_it_correctly_identifies_r2_d2_as_the_hero_of_the_star_wars_saga(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        """
        query HeroNameQuery {
            hero {
                name
                id
            }
        }
        """,
        expected_data={"hero": {"name": "R2-D2", "id": "2001"}},
    )


async def test_id_and_friends_of_r2_d2(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        """
        query HeroNameAndFriendsQuery {
            hero {
                id
                name
                friends {
                    name
                }
            }
        }
        """,
        expected_data={
            "hero": {
                "id": "2001",
                "name": "R2-D2",
                "friends": [
                    {"name": "Luke Skywalker"},
                    {"name": "Han Solo"},
                    {"name": "Leia Organa"},
                ],
            }
        },
    )


async def test_the_friends_of_friends_of_r2_d2(
    starwars_schema, assert_execution
):
    all_episodes = ["NEWHOPE", "EMPIRE", "JEDI"]
    await assert_execution(
        starwars_schema,
        """
        query NestedQuery {
            hero {
                name
                friends {
                    name
                    appearsIn
                    friends {
                        name
                    }
                }
            }
        }
        """,
        expected_data={
            "hero": {
                "name": "R2-D2",
                "friends": [
                    {
                        "name": "Luke Skywalker",
                        "appearsIn": all_episodes,
                        "friends": [
                            {"name": "Han Solo"},
                            {"name": "Leia Organa"},
                            {"name": "C-3PO"},
                            {"name": "R2-D2"},
                        ],
                    },
                    {
                        "name": "Han Solo",
                        "appearsIn": all_episodes,
                        "friends": [
                            {"name": "Luke Skywalker"},
                            {"name": "Leia Organa"},
                            {"name": "R2-D2"},
                        ],
                    },
                    {
                        "name": "Leia Organa",
                        "appearsIn": all_episodes,
                        "friends": [
                            {"name": "Luke Skywalker"},
                            {"name": "Han Solo"},
                            {"name": "C-3PO"},
                            {"name": "R2-D2"},
                        ],
                    },
                ],
            }
        },
    )


async def test_luke_skywalker_using_id(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        '{ human(id: "1000") { name homePlanet } }',
        expected_data={
            "human": {"name": "Luke Skywalker", "homePlanet": "Tatooine"}
        },
    )


async def test_generic_query_using_id_and_variable(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        "query FetchSomeIDQuery($someId: String!) "
        "{ human(id: $someId) { name } }",
        variables={"someId": "1002"},
        expected_data={"human": {"name": "Han Solo"}},
    )


async def test_invalid_id_returns_null(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        "query FetchSomeIDQuery($someId: String!) "
        "{ human(id: $someId) { name } }",
        variables={"someId": "not a valid id"},
        expected_data={"human": None},
    )


async def test_changing_key_with_alias(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        '{ luke: human(id: "1000") { name } leia: human(id: "1003") { name } }',
        expected_data={
            "luke": {"name": "Luke Skywalker"},
            "leia": {"name": "Leia Organa"},
        },
    )


async def test_use_of_fragment_to_avoid_duplicate_content(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        """
        query UseFragment {
            luke: human(id: "1000") {
                ...HumanFragment
            }
            leia: human(id: "1003") {
                ...HumanFragment
            }
        }

        fragment HumanFragment on Human {
            name
            homePlanet
        }
        """,
        expected_data={
            "luke": {"name": "Luke Skywalker", "homePlanet": "Tatooine"},
            "leia": {"name": "Leia Organa", "homePlanet": "Alderaan"},
        },
    )


async def test_typename_of_abstract_field(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        "{ r2: hero { __typename name } "
        "luke: hero(episode: EMPIRE) { __typename name } }",
        expected_data={
            "r2": {"__typename": "Droid", "name": "R2-D2"},
            "luke": {"__typename": "Human", "name": "Luke Skywalker"},
        },
    )


async def test_enum_argument_from_variable(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        "query ($episode: Episode) { hero(episode: $episode) { name } }",
        variables={"episode": "EMPIRE"},
        expected_data={"hero": {"name": "Luke Skywalker"}},
    )


async def test_inline_fragments_on_concrete_types(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        "{ hero { name ... on Droid { primaryFunction } "
        "... on Human { homePlanet } } }",
        expected_data={
            "hero": {"name": "R2-D2", "primaryFunction": "Astromech"}
        },
    )


async def test_error_on_accessing_secret_backstory(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        """
        query HeroNameQuery {
            hero {
                name
                secretBackstory
            }
        }
        """,
        expected_data={"hero": {"name": "R2-D2", "secretBackstory": None}},
        expected_errors=[
            ("secretBackstory is secret.", (54, 69), "hero.secretBackstory")
        ],
    )


async def test_error_on_accessing_secret_backstory_in_a_list(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        """
        query HeroNameQuery {
            hero {
                name
                friends {
                    name
                    secretBackstory
                }
            }
        }
        """,
        expected_data={
            "hero": {
                "name": "R2-D2",
                "friends": [
                    {"name": "Luke Skywalker", "secretBackstory": None},
                    {"name": "Han Solo", "secretBackstory": None},
                    {"name": "Leia Organa", "secretBackstory": None},
                ],
            }
        },
        expected_errors=[
            (
                "secretBackstory is secret.",
                (93, 108),
                "hero.friends[%d].secretBackstory" % i,
            )
            for i in range(3)
        ],
    )


async def test_error_on_accessing_secret_backstory_through_alias(
    starwars_schema, assert_execution
):
    await assert_execution(
        starwars_schema,
        "{ mainHero: hero { name story: secretBackstory } }",
        expected_data={"mainHero": {"name": "R2-D2", "story": None}},
        expected_errors=[
            ("secretBackstory is secret.", (24, 46), "mainHero.story")
        ],
    )


async def test_error_on_missing_argument(starwars_schema, assert_execution):
    await assert_execution(
        starwars_schema,
        "{ luke: human { name } }",
        expected_data={"luke": None},
        expected_errors=[
            (
                'Argument "id" of required type "String!" was not provided',
                (2, 22),
                "luke",
            )
        ],
    )


async def test_error_extensions_are_serialized(starwars_schema):
    result = execute(starwars_schema, parse("{ hero { secretBackstory } }"))
    assert result.response() == {
        "data": {"hero": {"secretBackstory": None}},
        "errors": [
            {
                "message": "secretBackstory is secret.",
                "locations": [{"line": 1, "column": 10}],
                "path": ["hero", "secretBackstory"],
                "extensions": {"code": 42},
            }
        ],
    }


async def test_execution_is_repeatable(starwars_schema):
    document = parse(
        "{ hero { name friends { name secretBackstory } } "
        'human(id: "1001") { name friends { name } } }'
    )
    first = execute(starwars_schema, document).response()
    second = execute(starwars_schema, document).response()
    assert first == second
    assert len(first["errors"]) == 3
