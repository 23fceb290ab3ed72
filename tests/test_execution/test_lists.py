# -*- coding: utf-8 -*-

import pytest

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio

SDL = """
type Query {
    nullableList: [Int]
    nonNullItems: [Int!]
    nonNullList: [Int]!
    nonNullBoth: [Int!]!
    nested: Query
    items: [Query]
    value: Int
}
"""

_NOT_INT = "Int cannot represent non integer value: 1.5"


def _resolve(root, args, info):
    value = root.get(info.field_name) if root is not None else None
    if isinstance(value, Exception):
        raise value
    return value


@pytest.fixture
def schema(build_schema):
    return build_schema(SDL, {"Query.value": _resolve})


@pytest.mark.parametrize(
    "make_value",
    [
        lambda: [1, 2],
        lambda: (1, 2),
        lambda: iter([1, 2]),
        lambda: (x for x in (1, 2)),
    ],
    ids=["list", "tuple", "iterator", "generator"],
)
async def test_iterables_are_accepted(schema, assert_execution, make_value):
    await assert_execution(
        schema,
        "{ nullableList }",
        root={"nullableList": make_value()},
        expected_data={"nullableList": [1, 2]},
    )


async def test_null_items_in_nullable_list(schema, assert_execution):
    await assert_execution(
        schema,
        "{ nullableList }",
        root={"nullableList": [1, None, 2]},
        expected_data={"nullableList": [1, None, 2]},
    )


async def test_item_failure_in_nullable_list(schema, assert_execution):
    await assert_execution(
        schema,
        "{ nullableList }",
        root={"nullableList": [1, 1.5, 3]},
        expected_data={"nullableList": [1, None, 3]},
        expected_errors=[
            (
                'Field "nullableList[1]" cannot be serialized as "Int": %s'
                % _NOT_INT,
                (2, 14),
                "nullableList[1]",
            )
        ],
    )


async def test_item_failure_in_list_of_non_nullable_items(
    schema, assert_execution
):
    await assert_execution(
        schema,
        "{ nonNullItems }",
        root={"nonNullItems": [1, 1.5, 3]},
        expected_data={"nonNullItems": None},
        expected_errors=[
            (
                'Field "nonNullItems[1]" cannot be serialized as "Int": %s'
                % _NOT_INT,
                (2, 14),
                "nonNullItems[1]",
            )
        ],
    )


async def test_null_item_in_list_of_non_nullable_items(
    schema, assert_execution
):
    await assert_execution(
        schema,
        "{ nonNullItems }",
        root={"nonNullItems": [1, None]},
        expected_data={"nonNullItems": None},
        expected_errors=[
            (
                'Field "nonNullItems[1]" is not nullable',
                (2, 14),
                "nonNullItems[1]",
            )
        ],
    )


async def test_null_non_nullable_list(schema, assert_execution):
    await assert_execution(
        schema,
        "{ nonNullList }",
        root={"nonNullList": None},
        expected_data=None,
        expected_errors=[
            ('Field "nonNullList" is not nullable', (2, 13), "nonNullList")
        ],
    )


async def test_item_failure_propagates_through_non_null_list(
    schema, assert_execution
):
    await assert_execution(
        schema,
        "{ nested { nonNullBoth } }",
        root={"nested": {"nonNullBoth": [None, 2]}},
        expected_data={"nested": None},
        expected_errors=[
            (
                'Field "nested.nonNullBoth[0]" is not nullable',
                (11, 22),
                "nested.nonNullBoth[0]",
            )
        ],
    )


@pytest.mark.parametrize("value", [1, "abc", {"a": 1}])
async def test_non_iterable_value(schema, assert_execution, value):
    await assert_execution(
        schema,
        "{ nullableList }",
        root={"nullableList": value},
        expected_data={"nullableList": None},
        expected_errors=[
            (
                'Field "nullableList" is a list type and resolved value '
                "should be iterable",
                (2, 14),
                "nullableList",
            )
        ],
    )


async def test_nested_failure_in_list_of_objects(schema, assert_execution):
    await assert_execution(
        schema,
        "{ items { value } }",
        root={
            "items": [
                {"value": 1},
                {"value": ValueError("Cannot compute value")},
                {"value": 3},
            ]
        },
        expected_data={
            "items": [{"value": 1}, {"value": None}, {"value": 3}]
        },
        expected_errors=[
            ("Cannot compute value", (10, 15), "items[1].value")
        ],
    )
