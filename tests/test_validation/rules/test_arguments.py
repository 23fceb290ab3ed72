# -*- coding: utf-8 -*-
""" Test specified rules in isolation. """

import pytest

from gqlwire.validation.rules import (
    KnownArgumentNamesChecker,
    ProvidedRequiredArgumentsChecker,
    UniqueArgumentNamesChecker,
)

from .._test_utils import assert_checker_validation_result as run_test


class TestKnownArgumentNames:
    @pytest.mark.parametrize(
        "body",
        [
            "{ dog { doesKnowCommand(dogCommand: SIT) } }",
            "{ dog { isAtLocation(y: 1, x: 2) } }",
            "{ dog { unknownField(unknownArg: 1) } }",
            "fragment f on Pet { name(surname: true) }",
            "{ human(id: 4) { pets { name(surname: true) } } }",
            "{ dog { doesKnowCommand @skip(if: true) } }",
        ],
    )
    def test_valid(self, schema, body):
        run_test(KnownArgumentNamesChecker, schema, body)

    def test_unknown_argument(self, schema):
        run_test(
            KnownArgumentNamesChecker,
            schema,
            "{ dog { doesKnowCommand(unknown: true) } }",
            [
                'Unknown argument "unknown" on field "doesKnowCommand" of '
                'type "Dog".'
            ],
            [(24, 37)],
        )

    def test_unknown_arguments_on_nested_fields(self, schema):
        run_test(
            KnownArgumentNamesChecker,
            schema,
            """
            {
                dog {
                    doesKnowCommand(whoKnows: 1, dogCommand: SIT)
                }
                human(id: 4) {
                    pets {
                        name(surname: true, nickname: false)
                    }
                }
            }
            """,
            [
                'Unknown argument "whoKnows" on field "doesKnowCommand" of '
                'type "Dog".',
                'Unknown argument "nickname" on field "name" of type "Pet".',
            ],
        )


class TestUniqueArgumentNames:
    @pytest.mark.parametrize(
        "body",
        [
            "{ dog { name } }",
            "{ dog { isAtLocation(x: 1, y: 2) } }",
            "{ dog { isAtLocation(x: 1) other: isAtLocation(x: 2) } }",
            "{ dog @skip(if: true) { isAtLocation(x: 1) } }",
        ],
    )
    def test_valid(self, schema, body):
        run_test(UniqueArgumentNamesChecker, schema, body)

    def test_duplicate_field_arguments(self, schema):
        run_test(
            UniqueArgumentNamesChecker,
            schema,
            "{ dog { isAtLocation(x: 1, x: 2) } }",
            ['Duplicate argument "x".'],
            [(27, 31)],
        )

    def test_duplicate_directive_arguments(self, schema):
        run_test(
            UniqueArgumentNamesChecker,
            schema,
            "{ dog @skip(if: true, if: false) { name } }",
            ['Duplicate argument "if".'],
        )


class TestProvidedRequiredArguments:
    @pytest.mark.parametrize(
        "body",
        [
            "{ dog { isHousetrained } }",
            "{ complicatedArgs { multipleReqs(req1: 1, req2: 2) } }",
            "{ complicatedArgs { multipleReqs(req2: 2, req1: 1) } }",
            "{ complicatedArgs { multipleOpts } }",
            "{ complicatedArgs { multipleOptAndReq(req1: 1) } }",
            "{ complicatedArgs { unknownField } }",
        ],
    )
    def test_valid(self, schema, body):
        run_test(ProvidedRequiredArgumentsChecker, schema, body)

    def test_missing_one_required_argument(self, schema):
        run_test(
            ProvidedRequiredArgumentsChecker,
            schema,
            "{ complicatedArgs { multipleReqs(req1: 1) } }",
            [
                'Field "multipleReqs" argument "req2" of type Int! is '
                "required but not provided."
            ],
            [(20, 41)],
        )

    def test_missing_all_required_arguments(self, schema):
        run_test(
            ProvidedRequiredArgumentsChecker,
            schema,
            "{ complicatedArgs { multipleReqs } }",
            [
                'Field "multipleReqs" argument "req1" of type Int! is '
                "required but not provided.",
                'Field "multipleReqs" argument "req2" of type Int! is '
                "required but not provided.",
            ],
        )

    def test_mutation_arguments(self, schema):
        run_test(
            ProvidedRequiredArgumentsChecker,
            schema,
            "mutation { rename { name } }",
            [
                'Field "rename" argument "name" of type String! is '
                "required but not provided."
            ],
        )
