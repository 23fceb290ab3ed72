# -*- coding: utf-8 -*-

import asyncio

import pytest

from gqlwire.execution import execute
from gqlwire.execution.runtime import AsyncIORuntime
from gqlwire.lang import parse

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio

SDL = """
type Query {
    counter: Int
}

type Mutation {
    increment(by: Int = 1): Int
    fail: Int
    failNonNull: Int!
}
"""


class Counter:
    def __init__(self):
        self.value = 0
        self.calls = []

    def increment(self, by):
        self.calls.append("increment")
        self.value += by
        return self.value


def _increment(root, args, info):
    return root.increment(args["by"])


def _fail(root, args, info):
    root.calls.append(info.field_name)
    raise ValueError("Cannot %s" % info.field_name)


@pytest.fixture
def schema(build_schema):
    return build_schema(
        SDL,
        {
            "Mutation.increment": _increment,
            "Mutation.fail": _fail,
            "Mutation.failNonNull": _fail,
        },
    )


async def test_mutation_fields_are_resolved_in_order(
    schema, assert_execution
):
    await assert_execution(
        schema,
        """
        mutation {
            first: increment
            second: increment(by: 2)
            third: increment(by: 3)
        }
        """,
        root=Counter(),
        expected_data={"first": 1, "second": 3, "third": 6},
    )


async def test_failing_mutation_field_does_not_stop_later_fields(
    schema, assert_execution
):
    root = Counter()
    await assert_execution(
        schema,
        "mutation { a: increment fail b: increment }",
        root=root,
        expected_data={"a": 1, "fail": None, "b": 2},
        expected_errors=[("Cannot fail", (24, 28), "fail")],
    )
    assert root.calls == ["increment", "fail", "increment"]


async def test_non_nullable_mutation_failure_nulls_data(
    schema, assert_execution
):
    root = Counter()
    await assert_execution(
        schema,
        "mutation { a: increment failNonNull b: increment }",
        root=root,
        expected_data=None,
        expected_errors=[("Cannot failNonNull", (24, 35), "failNonNull")],
    )
    assert root.calls == ["increment", "failNonNull", "increment"]
    assert root.value == 2


async def test_async_mutation_fields_do_not_overlap(build_schema):
    events = []

    async def resolve(root, args, info):
        name = info.path[-1]
        events.append("start %s" % name)
        # Later fields finish faster, only serial execution keeps the order.
        await asyncio.sleep(args["by"] / 1000)
        events.append("end %s" % name)
        return args["by"]

    schema = build_schema(SDL, {"Mutation.increment": resolve})
    result = await execute(
        schema,
        parse(
            "mutation { a: increment(by: 30) b: increment(by: 20) "
            "c: increment(by: 10) }"
        ),
        runtime=AsyncIORuntime(),
    )

    assert result.data == {"a": 30, "b": 20, "c": 10}
    assert events == [
        "start a",
        "end a",
        "start b",
        "end b",
        "start c",
        "end c",
    ]


async def test_async_query_fields_run_concurrently(build_schema):
    events = []

    async def resolve(root, args, info):
        name = info.path[-1]
        events.append("start %s" % name)
        await asyncio.sleep(0)
        events.append("end %s" % name)
        return 1

    schema = build_schema(
        "type Query { a: Int b: Int }", {"Query.a": resolve, "Query.b": resolve}
    )
    result = await execute(schema, parse("{ a b }"), runtime=AsyncIORuntime())

    assert result.data == {"a": 1, "b": 1}
    assert events == ["start a", "start b", "end a", "end b"]
