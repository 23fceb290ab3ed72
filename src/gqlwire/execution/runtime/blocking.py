# -*- coding: utf-8 -*-

from inspect import isawaitable
from typing import Any, Callable, Iterable, Optional, Tuple, Type, TypeVar

from .base import Runtime

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
AnyFn = Callable[..., Any]


class BlockingRuntime(Runtime):
    """Default runtime, resolving every field sequentially in the current
    thread.

    Resolvers must return plain values: an awaitable (e.g. the result of
    calling a coroutine function) cannot be waited on and fails the field.
    Use :class:`~gqlwire.execution.runtime.AsyncIORuntime` for coroutine
    resolvers.
    """

    def submit(self, fn: AnyFn, *args: Any, **kwargs: Any) -> Any:
        return fn(*args, **kwargs)

    def ensure_wrapped(self, value: Any) -> Any:
        return value

    def gather_values(self, values: Iterable[Any]) -> Any:
        return list(values)

    def map_value(
        self,
        value: Any,
        then: Callable[[Any], T],
        else_: Optional[Tuple[Type[E], Callable[[E], T]]] = None,
    ) -> Any:
        try:
            return then(value)
        except Exception as err:
            if else_ and isinstance(err, else_[0]):
                return else_[1](err)
            raise

    def unwrap_value(self, value: Any) -> Any:
        if isawaitable(value):
            close = getattr(value, "close", None)
            if close is not None:
                # Avoid "coroutine was never awaited" warnings.
                close()
            raise TypeError(
                "Received an awaitable (%s) which cannot be resolved by %s, "
                "use AsyncIORuntime for asynchronous resolvers"
                % (type(value).__name__, type(self).__name__)
            )
        return value

    def wrap_callable(self, func: AnyFn) -> AnyFn:
        return func
