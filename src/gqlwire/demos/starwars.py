# -*- coding: utf-8 -*-
"""
Basic set of data and the Star Wars Schema used for testing and examples. It
describes the major characters in the original Star Wars trilogy.

NOTE: This may contain spoilers for the original Star Wars trilogy.

NOTE: The data is hard coded for the sake of the demo, but you could imagine
fetching this data from a backend service rather than from hardcoded
objects in a more complex demo.
"""

import enum
from typing import Any, Dict, List, Optional

from ..exc import ResolverError
from ..schema import (
    ExecutableSchema,
    ResolverBindingTable,
    build_executable_schema,
    load_schema_source,
    parse_schema_document,
)

DEFAULT_QUERY = "{ hero { name } }"


class Episode(enum.Enum):
    NEWHOPE = 4
    EMPIRE = 5
    JEDI = 6


_ALL_EPISODES = [Episode.NEWHOPE, Episode.EMPIRE, Episode.JEDI]

luke = {
    "type": "Human",
    "id": "1000",
    "name": "Luke Skywalker",
    "friends": ["1002", "1003", "2000", "2001"],
    "appearsIn": _ALL_EPISODES,
    "homePlanet": "Tatooine",
}

vader = {
    "type": "Human",
    "id": "1001",
    "name": "Darth Vader",
    "friends": ["1004"],
    "appearsIn": _ALL_EPISODES,
    "homePlanet": "Tatooine",
}

han = {
    "type": "Human",
    "id": "1002",
    "name": "Han Solo",
    "friends": ["1000", "1003", "2001"],
    "appearsIn": _ALL_EPISODES,
}

leia = {
    "type": "Human",
    "id": "1003",
    "name": "Leia Organa",
    "friends": ["1000", "1002", "2000", "2001"],
    "appearsIn": _ALL_EPISODES,
    "homePlanet": "Alderaan",
}

tarkin = {
    "type": "Human",
    "id": "1004",
    "name": "Wilhuff Tarkin",
    "friends": ["1001"],
    "appearsIn": [Episode.NEWHOPE],
}

human_data = {
    "1000": luke,
    "1001": vader,
    "1002": han,
    "1003": leia,
    "1004": tarkin,
}  # type: Dict[str, Dict[str, Any]]

threepio = {
    "type": "Droid",
    "id": "2000",
    "name": "C-3PO",
    "friends": ["1000", "1002", "1003", "2001"],
    "appearsIn": _ALL_EPISODES,
    "primaryFunction": "Protocol",
}

artoo = {
    "type": "Droid",
    "id": "2001",
    "name": "R2-D2",
    "friends": ["1000", "1002", "1003"],
    "appearsIn": _ALL_EPISODES,
    "primaryFunction": "Astromech",
}

droid_data = {
    "2000": threepio,
    "2001": artoo,
}  # type: Dict[str, Dict[str, Any]]


def get_character(id_: str) -> Optional[Dict[str, Any]]:
    return get_human(id_) or get_droid(id_)


def get_friends(character: Dict[str, Any]) -> List[Optional[Dict[str, Any]]]:
    return [get_character(f) for f in character["friends"]]


def get_hero(episode: Optional[str]) -> Dict[str, Any]:
    # Luke is the hero of Episode V, R2-D2 is the hero otherwise.
    if episode == "EMPIRE":
        return luke
    return artoo


def get_human(id_: str) -> Optional[Dict[str, Any]]:
    return human_data.get(id_)


def get_droid(id_: str) -> Optional[Dict[str, Any]]:
    return droid_data.get(id_)


bindings = ResolverBindingTable()


@bindings.resolver("Query.hero")
def resolve_hero(_root, args, _info):
    return get_hero(args.get("episode"))


@bindings.resolver("Query.human")
def resolve_human(_root, args, _info):
    return get_human(args["id"])


@bindings.resolver("Query.droid")
def resolve_droid(_root, args, _info):
    return get_droid(args["id"])


@bindings.resolver("Character.friends")
def resolve_friends(character, _args, _info):
    return get_friends(character)


@bindings.resolver("Character.secretBackstory")
def resolve_secret_backstory(*_):
    raise ResolverError("secretBackstory is secret.", extensions={"code": 42})


@bindings.type_resolver("Character")
def resolve_character_type(character, _info):
    return character["type"]


def build_schema() -> ExecutableSchema:
    """ Build the Star Wars executable schema from the packaged resource. """
    return build_executable_schema(
        parse_schema_document(
            load_schema_source("starwars.graphql", package=__package__)
        ),
        bindings,
    )
