# -*- coding: utf-8 -*-
""" Useful tracer implementations. """

import datetime as dt
import json
import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..execution.instrumentation import Instrumentation
from ..execution.wrappers import ResolveInfo

__all__ = ("TimingTracer", "SlowQueryLog")


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _ms(start: Optional[dt.datetime], end: Optional[dt.datetime]) -> float:
    if start is None or end is None:
        return 0.0
    return (end - start).total_seconds() * 1000


class FieldTiming:
    __slots__ = ("info", "start", "end")

    def __init__(self, info: ResolveInfo):
        self.info = info
        self.start = _now()
        self.end = None  # type: Optional[dt.datetime]

    @property
    def duration(self) -> float:
        """ Field duration in ms, sub-fields included. """
        return _ms(self.start, self.end)


class TimingTracer(Instrumentation):
    """
    Collect the timing of every step of a request using the
    :py:mod:`datetime` module. All times are collected as UTC.

    Create one instance per request.
    """

    def __init__(self):
        self.fields = {}  # type: Dict[Tuple[Union[str, int], ...], FieldTiming]
        self.start = None  # type: Optional[dt.datetime]
        self.end = None  # type: Optional[dt.datetime]
        self.parse_start = None  # type: Optional[dt.datetime]
        self.parse_end = None  # type: Optional[dt.datetime]
        self.validation_start = None  # type: Optional[dt.datetime]
        self.validation_end = None  # type: Optional[dt.datetime]
        self.execution_start = None  # type: Optional[dt.datetime]
        self.execution_end = None  # type: Optional[dt.datetime]

    @property
    def duration(self) -> float:
        """ Total duration of the request in ms. """
        return _ms(self.start, self.end)

    def on_query_start(self) -> None:
        self.start = _now()

    def on_query_end(self) -> None:
        self.end = _now()

    def on_parsing_start(self) -> None:
        self.parse_start = _now()

    def on_parsing_end(self) -> None:
        self.parse_end = _now()

    def on_validation_start(self) -> None:
        self.validation_start = _now()

    def on_validation_end(self) -> None:
        self.validation_end = _now()

    def on_execution_start(self) -> None:
        self.execution_start = _now()

    def on_execution_end(self) -> None:
        self.execution_end = _now()

    def on_field_start(
        self, root: Any, context: Any, info: ResolveInfo
    ) -> None:
        self.fields[tuple(info.path)] = FieldTiming(info)

    def on_field_end(self, root: Any, context: Any, info: ResolveInfo) -> None:
        self.fields[tuple(info.path)].end = _now()


_SLOW_LOG_FORMAT_STR = """GraphQL query took too long (duration = %fms, \
threshold = %fms, operation = %s, document = '''
%s
''', variables = %s)"""

_DEFAULT_LOGGER = logging.getLogger("gqlwire.utilities.tracers.SlowQueryLog")


class SlowQueryLog(TimingTracer):
    """ Log slow queries through Python's logging utilities.

    As hooks do not receive the request, the document and variables are
    given to the constructor and a new instance should be used for every
    request.

    Note:
        By default this logs the entire query and variables, if this is not
        suitable (e.g. you need to redact the query and or variables) you can
        subclass and override :meth:`format_document` and
        :meth:`format_variables`.

    Args:
        threshold: Slow query threshold in ms

        document: Source of the request document

        variables: Raw variables of the request

        operation_name: Name of the executed operation, if any

        logger: Custom logger instance to use.
            Defaults to ``gqlwire.utilities.tracers.SlowQueryLog``.

        level: Log level. Defaults to ``WARNING``.

        format_str: Log format string.
            The log call will pass the following variables: (duration of the
            query in ms, threshold in ms, operation name if any, formatted
            document, formatted variables)
    """

    def __init__(
        self,
        threshold: float,
        document: str = "",
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        level: int = logging.WARNING,
        format_str: Optional[str] = None,
    ):
        super().__init__()
        self.threshold = threshold
        self.document = document
        self.variables = variables
        self.operation_name = operation_name
        self._logger = logger if logger is not None else _DEFAULT_LOGGER
        self._level = level
        self._format_str = format_str or _SLOW_LOG_FORMAT_STR

    def format_document(self, document: str) -> str:
        return document

    def format_variables(self, variables: Optional[Mapping[str, Any]]) -> str:
        return json.dumps(variables, indent=4, sort_keys=True)

    def on_query_end(self) -> None:
        super().on_query_end()
        duration = self.duration
        if duration > self.threshold:
            self._logger.log(
                self._level,
                self._format_str,
                duration,
                self.threshold,
                self.operation_name,
                self.format_document(self.document),
                self.format_variables(self.variables),
            )
