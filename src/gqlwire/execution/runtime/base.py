# -*- coding: utf-8 -*-

import abc
from typing import Any, Callable, Iterable, Optional, Tuple, Type, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
AnyFn = Callable[..., Any]


class Runtime(abc.ABC):
    """Runtime base class.

    A runtime decides how resolver calls are scheduled and how their results
    are combined. The executor never inspects values itself: it only goes
    through these primitives, which lets the same execution code run
    synchronously or on top of an event loop.
    """

    @abc.abstractmethod
    def submit(self, fn: AnyFn, *args: Any, **kwargs: Any) -> Any:
        """Execute a function through the runtime."""
        raise NotImplementedError()

    @abc.abstractmethod
    def ensure_wrapped(self, value: Any) -> Any:
        """Ensure a value is wrapped in the runtime's container type.

        Used on the final execution result so that callers always receive the
        same kind of value (e.g. always an awaitable).
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def gather_values(self, values: Iterable[Any]) -> Any:
        """Combine multiple wrapped values into a single wrapped list.

        Equivalent to ``asyncio.gather``; the order of ``values`` is kept.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def map_value(
        self,
        value: Any,
        then: Callable[[Any], Any],
        else_: Optional[Tuple[Type[E], Callable[[E], Any]]] = None,
    ) -> Any:
        """Apply a callback to a wrapped value.

        ``else_`` is an ``(exception type, handler)`` pair: exceptions of that
        type raised while producing the value or running ``then`` are passed
        to the handler whose return value is used instead.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def unwrap_value(self, value: Any) -> Any:
        """Recursively resolve nested wrapped values.

        A resolved value can itself depend on wrapped values (e.g. a field
        whose sub-fields are still pending), this flattens them.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def wrap_callable(self, func: AnyFn) -> AnyFn:
        """Wrap a resolver so that calling it goes through the runtime."""
        raise NotImplementedError()
