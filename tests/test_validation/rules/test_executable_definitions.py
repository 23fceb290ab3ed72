# -*- coding: utf-8 -*-
""" Test specified rule in isolation. """

from gqlwire.validation.rules import ExecutableDefinitionsChecker

from .._test_utils import assert_checker_validation_result as run_test


def test_with_only_operation(schema):
    run_test(
        ExecutableDefinitionsChecker,
        schema,
        """
        query Foo {
            dog {
                name
            }
        }
        """,
    )


def test_with_operation_and_fragment(schema):
    run_test(
        ExecutableDefinitionsChecker,
        schema,
        """
        query Foo {
            dog {
                name
                ...Frag
            }
        }

        fragment Frag on Dog {
            name
        }
        """,
    )


def test_with_type_definition(schema):
    run_test(
        ExecutableDefinitionsChecker,
        schema,
        """
        query Foo {
            dog {
                name
            }
        }

        type Cow {
            name: String
        }

        schema {
            query: Foo
        }
        """,
        [
            "The Cow definition is not executable.",
            "The schema definition is not executable.",
        ],
    )
