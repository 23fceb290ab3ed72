# -*- coding: utf-8 -*-

import pytest

SDL = """
interface Being {
    name(surname: Boolean): String
}

interface Pet {
    name(surname: Boolean): String
}

enum DogCommand {
    SIT
    HEEL
    DOWN
}

enum FurColor {
    BROWN
    BLACK
    TAN
    SPOTTED
}

type Dog implements Being & Pet {
    name(surname: Boolean): String
    nickname: String
    barkVolume: Int
    barks: Boolean
    doesKnowCommand(dogCommand: DogCommand): Boolean
    isHousetrained(atOtherHomes: Boolean = true): Boolean
    isAtLocation(x: Int, y: Int): Boolean
}

type Cat implements Being & Pet {
    name(surname: Boolean): String
    nickname: String
    meows: Boolean
    meowVolume: Int
    furColor: FurColor
}

union CatOrDog = Cat | Dog

type Human implements Being {
    name(surname: Boolean): String
    pets: [Pet]
    relatives: [Human]
    iq: Int
}

union DogOrHuman = Dog | Human

input ComplexInput {
    requiredField: Boolean!
    intField: Int
    stringField: String
}

type ComplicatedArgs {
    intArgField(intArg: Int): String
    nonNullIntArgField(nonNullIntArg: Int!): String
    stringListArgField(stringListArg: [String]): String
    complexArgField(complexArg: ComplexInput): String
    multipleReqs(req1: Int!, req2: Int!): String
    multipleOpts(opt1: Int = 0, opt2: Int = 0): String
    multipleOptAndReq(req1: Int!, opt1: Int = 0): String
}

type Query {
    human(id: ID): Human
    dog: Dog
    cat: Cat
    pet: Pet
    being: Being
    catOrDog: CatOrDog
    dogOrHuman: DogOrHuman
    complicatedArgs: ComplicatedArgs
}

type Mutation {
    rename(name: String!): Being
}
"""


def _typename(value, info):
    return value["__typename"]


@pytest.fixture
def schema(build_schema):
    return build_schema(
        SDL,
        {
            "Being": _typename,
            "Pet": _typename,
            "CatOrDog": _typename,
            "DogOrHuman": _typename,
        },
    )
