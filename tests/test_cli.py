# -*- coding: utf-8 -*-

import json

import pytest
from click.testing import CliRunner

from gqlwire.cli import cli
from gqlwire.version import __version__


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_query_runs_demo_default_query(runner):
    result = runner.invoke(cli, ["query", "starwars"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "data": {"hero": {"name": "R2-D2"}},
        "errors": [],
    }


def test_query_with_variables(runner):
    result = runner.invoke(
        cli,
        [
            "query",
            "books",
            "query ($id: ID) "
            "{ bookById(id: $id) { name author { lastName } } }",
            "--variables",
            '{"id": "book-2"}',
        ],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"] == {
        "bookById": {"name": "Moby Dick", "author": {"lastName": "Melville"}}
    }


def test_query_with_operation_name(runner):
    result = runner.invoke(
        cli,
        [
            "query",
            "starwars",
            'query A { hero { name } } query B { human(id: "1000") { name } }',
            "--operation-name",
            "B",
        ],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"] == {
        "human": {"name": "Luke Skywalker"}
    }


def test_query_with_asyncio_runtime(runner):
    result = runner.invoke(
        cli, ["query", "starwars", "{ hero { name } }", "--async"]
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"] == {"hero": {"name": "R2-D2"}}


def test_query_from_stdin(runner):
    result = runner.invoke(
        cli,
        ["query", "books", "--file", "-"],
        input='{ bookById(id: "book-3") { pageCount } }',
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"] == {
        "bookById": {"pageCount": 371}
    }


def test_query_file_with_invalid_utf8(runner, tmp_path):
    path = tmp_path / "query.graphql"
    path.write_bytes(b'{ bookById(id: "caf\xe9") { name } }')

    result = runner.invoke(cli, ["query", "books", "--file", str(path)])
    assert result.exit_code == 1
    assert json.loads(result.stdout) == {
        "data": None,
        "errors": [
            {
                "message": "Invalid UTF-8 byte 0xe9",
                "locations": [{"line": 1, "column": 20}],
            }
        ],
    }


def test_query_with_slow_query_log(runner):
    result = runner.invoke(
        cli, ["query", "starwars", "--slow-query-ms", "0"]
    )
    assert result.exit_code == 0


def test_query_errors_exit_with_status_1(runner):
    result = runner.invoke(cli, ["query", "starwars", "{ hero { foo } }"])
    assert result.exit_code == 1
    assert json.loads(result.stdout) == {
        "data": None,
        "errors": [
            {
                "message": 'Cannot query field "foo" on type "Character".',
                "locations": [{"line": 1, "column": 10}],
            }
        ],
    }


def test_unknown_demo(runner):
    result = runner.invoke(cli, ["query", "foo"])
    assert result.exit_code == 2
    assert 'Unknown demo "foo"' in result.output


@pytest.mark.parametrize(
    "variables, message",
    [
        ("{", "Invalid JSON"),
        ("[1, 2]", "Variables must be a JSON object"),
    ],
)
def test_invalid_variables(runner, variables, message):
    result = runner.invoke(
        cli, ["query", "starwars", "--variables", variables]
    )
    assert result.exit_code == 2
    assert message in result.output


def test_query_and_file_are_exclusive(runner):
    result = runner.invoke(
        cli,
        ["query", "books", "{ bookById { id } }", "--file", "-"],
        input="{ bookById { id } }",
    )
    assert result.exit_code == 2
    assert "Use either QUERY or --file, not both." in result.output


def test_schema_prints_demo_sdl(runner):
    result = runner.invoke(cli, ["schema", "books"])
    assert result.exit_code == 0
    assert "type Book {" in result.output
    assert "bookById(id: ID): Book" in result.output


def test_check_lists_types(runner, tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(
        "type Query { color: Color }\n\nenum Color { RED GREEN }\n"
    )

    result = runner.invoke(cli, ["check", str(path)])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "object Query",
        "enum Color",
        "OK: 2 type(s), query root Query, mutation root -",
    ]


def test_check_reports_invalid_schemas(runner, tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text("type Query { color: Color }\n")

    result = runner.invoke(cli, ["check", str(path)])
    assert result.exit_code == 1
    assert "Color" in result.output


def test_check_reports_undecodable_files(runner, tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_bytes(b"type Query { name: String } # caf\xe9\n")

    result = runner.invoke(cli, ["check", str(path)])
    assert result.exit_code == 1
    assert "Cannot read schema" in result.output


def test_check_requires_existing_file(runner, tmp_path):
    result = runner.invoke(cli, ["check", str(tmp_path / "missing.graphql")])
    assert result.exit_code == 2
