# -*- coding: utf-8 -*-
"""
gqlwire
~~~~~~~

gqlwire wires GraphQL schema definition text to plain Python resolver
functions and executes queries against the result.

The main :mod:`gqlwire` package provides the minimum required to build
executable schemas and run queries against them while the relevant
submodules allow you to implement custom behaviours and runtimes.
"""

# flake8: noqa

from .version import __version__  # isort:skip

from . import exc, lang, schema, utilities
from ._graphql import graphql, graphql_blocking, process_graphql_query
from .execution import ExecutionResult, ResolveInfo, execute
from .schema import (
    ExecutableSchema,
    ResolverBindingTable,
    build_executable_schema,
    load_schema_source,
    parse_schema,
    parse_schema_document,
)

__all__ = (
    "__version__",
    "graphql",
    "graphql_blocking",
    "process_graphql_query",
    "execute",
    "ExecutionResult",
    "ResolveInfo",
    "ExecutableSchema",
    "ResolverBindingTable",
    "build_executable_schema",
    "load_schema_source",
    "parse_schema",
    "parse_schema_document",
)
