# -*- coding: utf-8 -*-
"""
Command line entry point: evaluate queries against the demo schemas and check
schema definition files.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

import click

from .exc import SchemaError
from .execution import ExecutionResult, Instrumentation
from .schema import load_schema_source, parse_schema_document, print_schema
from .utilities.tracers import SlowQueryLog
from .version import __version__

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error")


def _load_demo(name: str):
    from .demos import load_demo

    try:
        return load_demo(name)
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint="DEMO") from err
    except SchemaError as err:
        raise click.ClickException(str(err)) from err


def _parse_variables(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    try:
        variables = json.loads(raw)
    except ValueError as err:
        raise click.BadParameter(
            "Invalid JSON (%s)" % err, param_hint="--variables"
        ) from err
    if not isinstance(variables, dict):
        raise click.BadParameter(
            "Variables must be a JSON object", param_hint="--variables"
        )
    return variables


@click.group()
@click.version_option(version=__version__, prog_name="gqlwire")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(LOG_LEVELS),
    help="Log level (default: warning)",
)
def cli(log_level: str) -> None:
    """Execute GraphQL queries against schema-defined resolvers."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("demo")
@click.argument("query", required=False)
@click.option(
    "--file",
    "query_file",
    type=click.File("rb"),
    help="Read the query document from a file ('-' for stdin).",
)
@click.option("--variables", help="Variables as a JSON object.")
@click.option("--operation-name", help="Operation to execute.")
@click.option(
    "--async",
    "use_async",
    is_flag=True,
    default=False,
    help="Execute resolvers with the asyncio runtime.",
)
@click.option(
    "--slow-query-ms",
    type=float,
    default=None,
    help="Log queries slower than this threshold (in ms).",
)
def query(
    demo: str,
    query: Optional[str],
    query_file: Any,
    variables: Optional[str],
    operation_name: Optional[str],
    use_async: bool,
    slow_query_ms: Optional[float],
) -> None:
    """Execute QUERY (or the demo's default query) against DEMO and print
    the JSON response."""
    from ._graphql import graphql, graphql_blocking

    schema, default_query = _load_demo(demo)

    if query is not None and query_file is not None:
        raise click.UsageError("Use either QUERY or --file, not both.")
    document = (
        query_file.read()
        if query_file is not None
        else (query if query is not None else default_query)
    )
    parsed_variables = _parse_variables(variables)

    instrumentation = (
        SlowQueryLog(
            slow_query_ms,
            document=(
                document.decode("utf8", "replace")
                if isinstance(document, bytes)
                else document
            ),
            variables=parsed_variables,
            operation_name=operation_name,
        )
        if slow_query_ms is not None
        else Instrumentation()
    )

    logger.info("Executing query against demo %s", demo)
    if use_async:
        result = asyncio.run(
            graphql(
                schema,
                document,
                variables=parsed_variables,
                operation_name=operation_name,
                instrumentation=instrumentation,
            )
        )  # type: ExecutionResult
    else:
        result = graphql_blocking(
            schema,
            document,
            variables=parsed_variables,
            operation_name=operation_name,
            instrumentation=instrumentation,
        )

    click.echo(result.json(indent=2, sort_keys=False))
    if result.errors:
        sys.exit(1)


@cli.command()
@click.argument("demo")
def schema(demo: str) -> None:
    """Print the schema of DEMO as SDL."""
    executable_schema, _ = _load_demo(demo)
    click.echo(print_schema(executable_schema), nl=False)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def check(path: str) -> None:
    """Parse the schema definition file at PATH and list its types."""
    try:
        graph = parse_schema_document(load_schema_source(path))
    except SchemaError as err:
        click.echo(str(err), err=True)
        sys.exit(1)

    for definition in graph.definitions:
        click.echo("%s %s" % (definition.kind.name.lower(), definition.name))
    click.echo(
        "OK: %d type(s), query root %s, mutation root %s"
        % (
            len(graph.definitions),
            graph.query_type or "-",
            graph.mutation_type or "-",
        )
    )
