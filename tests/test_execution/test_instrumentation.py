# -*- coding: utf-8 -*-

import pytest

from gqlwire import process_graphql_query
from gqlwire._string_utils import stringify_path
from gqlwire.execution import (
    Instrumentation,
    MultiInstrumentation,
    execute,
)
from gqlwire.lang import parse

from ._test_utils import process_request

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio

SDL = """
type Query {
    a: String
    b: Query
    c: String!
}
"""


class Recorder(Instrumentation):
    def __init__(self, name=None):
        self.name = name
        self.events = []

    def _record(self, event):
        self.events.append(
            event if self.name is None else "%s:%s" % (self.name, event)
        )

    def on_query_start(self):
        self._record("query_start")

    def on_query_end(self):
        self._record("query_end")

    def on_parsing_start(self):
        self._record("parsing_start")

    def on_parsing_end(self):
        self._record("parsing_end")

    def on_validation_start(self):
        self._record("validation_start")

    def on_validation_end(self):
        self._record("validation_end")

    def on_execution_start(self):
        self._record("execution_start")

    def on_execution_end(self):
        self._record("execution_end")

    def on_field_start(self, root, context, info):
        self._record("field_start %s" % stringify_path(info.path))

    def on_field_end(self, root, context, info):
        self._record("field_end %s" % stringify_path(info.path))


@pytest.fixture
def schema(build_schema, raiser):
    return build_schema(SDL, {"Query.c": raiser(ValueError, "c failed")})


async def test_request_hooks_order(schema, runtime_cls):
    recorder = Recorder()
    result = await process_request(
        schema,
        "{ a b { a } }",
        root={"a": "A", "b": {"a": "BA"}},
        instrumentation=recorder,
        runtime=runtime_cls(),
    )
    assert result.data == {"a": "A", "b": {"a": "BA"}}
    assert recorder.events[:6] == [
        "query_start",
        "parsing_start",
        "parsing_end",
        "validation_start",
        "validation_end",
        "execution_start",
    ]
    assert recorder.events[-2:] == ["execution_end", "query_end"]

    field_events = recorder.events[6:-2]
    assert sorted(field_events) == sorted(
        [
            "field_start a",
            "field_end a",
            "field_start b",
            "field_end b",
            "field_start b.a",
            "field_end b.a",
        ]
    )
    # A field ends after all its sub-fields.
    assert field_events.index("field_end b") > field_events.index(
        "field_end b.a"
    )


async def test_blocking_field_hooks_order(schema):
    recorder = Recorder()
    execute(
        schema,
        parse("{ a b { a } }"),
        root={"a": "A", "b": {"a": "BA"}},
        instrumentation=recorder,
    )
    assert recorder.events == [
        "execution_start",
        "field_start a",
        "field_end a",
        "field_start b",
        "field_start b.a",
        "field_end b.a",
        "field_end b",
        "execution_end",
    ]


async def test_field_hooks_are_paired_when_fields_fail(schema, runtime_cls):
    recorder = Recorder()
    result = await process_request(
        schema,
        "{ b { c } a }",
        root={"a": "A", "b": {}},
        instrumentation=recorder,
        runtime=runtime_cls(),
    )
    assert result.data == {"b": None, "a": "A"}
    starts = [e[12:] for e in recorder.events if e.startswith("field_start")]
    ends = [e[10:] for e in recorder.events if e.startswith("field_end")]
    assert sorted(starts) == sorted(ends) == ["a", "b", "b.c"]


async def test_syntax_error_stops_after_parsing(schema):
    recorder = Recorder()
    result = process_graphql_query(schema, "{ a", instrumentation=recorder)
    assert result.data is None
    assert recorder.events == [
        "query_start",
        "parsing_start",
        "parsing_end",
        "query_end",
    ]


async def test_validation_error_stops_after_validation(schema):
    recorder = Recorder()
    result = process_graphql_query(
        schema, "{ unknown }", instrumentation=recorder
    )
    assert result.data is None
    assert recorder.events == [
        "query_start",
        "parsing_start",
        "parsing_end",
        "validation_start",
        "validation_end",
        "query_end",
    ]


async def test_parsed_documents_skip_parsing_hooks(schema):
    recorder = Recorder()
    process_graphql_query(
        schema, parse("{ a }"), validate=False, instrumentation=recorder
    )
    assert recorder.events == [
        "query_start",
        "execution_start",
        "field_start a",
        "field_end a",
        "execution_end",
        "query_end",
    ]


async def test_multi_instrumentation_stacks_hooks(schema):
    first, second = Recorder("1"), Recorder("2")
    events = []
    first.events = second.events = events

    process_graphql_query(
        schema,
        "{ a }",
        instrumentation=MultiInstrumentation(first, second),
    )

    assert events == [
        "1:query_start",
        "2:query_start",
        "1:parsing_start",
        "2:parsing_start",
        "2:parsing_end",
        "1:parsing_end",
        "1:validation_start",
        "2:validation_start",
        "2:validation_end",
        "1:validation_end",
        "1:execution_start",
        "2:execution_start",
        "1:field_start a",
        "2:field_start a",
        "2:field_end a",
        "1:field_end a",
        "2:execution_end",
        "1:execution_end",
        "2:query_end",
        "1:query_end",
    ]
