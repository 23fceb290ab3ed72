# -*- coding: utf-8 -*-
"""
Hooks into the processing of a request, for observability purposes.
"""

from typing import Any

from .wrappers import ResolveInfo


class Instrumentation:
    """Base instrumentation, every hook is a no-op.

    Subclass it and override the hooks you care about. Instances are shared
    by every field of a request but the same instance can be used for
    concurrent requests, so keep per-request state out of it or create one
    instance per request.
    """

    def on_query_start(self) -> None:
        """Called at the very start of query processing."""

    def on_query_end(self) -> None:
        """Called once the execution result is ready."""

    def on_parsing_start(self) -> None:
        """Called just before the request document is parsed.

        Not called when the entry point is given an already parsed document.
        """

    def on_parsing_end(self) -> None:
        """Called after the request document has been parsed, even if parsing
        failed due to a syntax error."""

    def on_validation_start(self) -> None:
        """Called before document validation."""

    def on_validation_end(self) -> None:
        """Called after document validation."""

    def on_execution_start(self) -> None:
        """Called before operation execution starts."""

    def on_execution_end(self) -> None:
        """Called once operation execution is done and the result is
        ready."""

    def on_field_start(
        self, root: Any, context: Any, info: ResolveInfo
    ) -> None:
        """Called before a field's resolver is invoked."""

    def on_field_end(self, root: Any, context: Any, info: ResolveInfo) -> None:
        """Called once a field's value, sub-fields included, is complete."""


class MultiInstrumentation(Instrumentation):
    """Combine multiple :class:`Instrumentation` instances.

    Instrumentations are processed as a stack: ``on_*_start`` hooks are
    called in order while ``on_*_end`` hooks are called in reverse order.
    """

    def __init__(self, *instrumentations: Instrumentation) -> None:
        self.instrumentations = instrumentations

    def on_query_start(self) -> None:
        for i in self.instrumentations:
            i.on_query_start()

    def on_query_end(self) -> None:
        for i in reversed(self.instrumentations):
            i.on_query_end()

    def on_parsing_start(self) -> None:
        for i in self.instrumentations:
            i.on_parsing_start()

    def on_parsing_end(self) -> None:
        for i in reversed(self.instrumentations):
            i.on_parsing_end()

    def on_validation_start(self) -> None:
        for i in self.instrumentations:
            i.on_validation_start()

    def on_validation_end(self) -> None:
        for i in reversed(self.instrumentations):
            i.on_validation_end()

    def on_execution_start(self) -> None:
        for i in self.instrumentations:
            i.on_execution_start()

    def on_execution_end(self) -> None:
        for i in reversed(self.instrumentations):
            i.on_execution_end()

    def on_field_start(
        self, root: Any, context: Any, info: ResolveInfo
    ) -> None:
        for i in self.instrumentations:
            i.on_field_start(root, context, info)

    def on_field_end(self, root: Any, context: Any, info: ResolveInfo) -> None:
        for i in reversed(self.instrumentations):
            i.on_field_end(root, context, info)
