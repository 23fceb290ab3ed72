# -*- coding: utf-8 -*-
""" Test specified rule in isolation. """

from gqlwire.validation.rules import KnownDirectivesChecker

from .._test_utils import assert_checker_validation_result as run_test


def test_no_directives(schema):
    run_test(KnownDirectivesChecker, schema, "{ dog { name } }")


def test_known_directives(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        """
        query ($skip: Boolean!) {
            dog @include(if: true) {
                name
                ... on Dog @skip(if: $skip) {
                    barks
                }
                ...DogFields @include(if: false)
            }
        }
        fragment DogFields on Dog {
            nickname
        }
        """,
    )


def test_unknown_directive(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        "{ dog @unknown { name } }",
        ['Unknown directive "unknown".'],
        [(6, 14)],
    )


def test_many_unknown_directives(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        """
        {
            dog @unknown(directive: "value") {
                name
            }
            human @unknown(directive: "value") {
                name
                pets @unknown(directive: "value") {
                    name
                }
            }
        }
        """,
        [
            'Unknown directive "unknown".',
            'Unknown directive "unknown".',
            'Unknown directive "unknown".',
        ],
    )


def test_missing_if_argument(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        "{ dog @include { name } }",
        [
            'Directive "@include" argument "if" of type "Boolean!" is '
            "required but not provided."
        ],
        [(6, 14)],
    )


def test_unknown_directive_argument(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        "{ dog @skip(if: true, unless: false) { name } }",
        ['Unknown argument "unless" on directive "@skip".'],
    )
