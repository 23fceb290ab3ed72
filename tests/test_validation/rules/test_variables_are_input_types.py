# -*- coding: utf-8 -*-
""" Test specified rule in isolation. """

from gqlwire.validation.rules import VariablesAreInputTypesChecker

from .._test_utils import assert_checker_validation_result as run_test


def test_input_types_are_valid(schema):
    run_test(
        VariablesAreInputTypesChecker,
        schema,
        """
        query Foo($a: String, $b: [Boolean!]!, $c: ComplexInput) {
            dog { name }
        }
        """,
    )


def test_output_types_are_invalid(schema):
    run_test(
        VariablesAreInputTypesChecker,
        schema,
        """
        query Foo($a: Dog, $b: [[CatOrDog!]]!, $c: Pet) {
            dog { name }
        }
        """,
        [
            'Variable "$a" must be input type but got "Dog".',
            'Variable "$b" must be input type but got "[[CatOrDog!]]!".',
            'Variable "$c" must be input type but got "Pet".',
        ],
    )


def test_unknown_types_are_ignored(schema):
    run_test(
        VariablesAreInputTypesChecker,
        schema,
        "query Foo($a: Unknown) { dog { name } }",
    )
