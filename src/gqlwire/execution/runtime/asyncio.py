# -*- coding: utf-8 -*-
"""
Runtime implementation for the standard library :mod:`asyncio` event loop.
"""

import asyncio
import functools as ft
from inspect import isawaitable, iscoroutinefunction
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    cast,
)

from .base import Runtime

T = TypeVar("T")
G = TypeVar("G")
E = TypeVar("E", bound=Exception)
AnyFn = Callable[..., Any]
AnyFnGen = Callable[..., T]
MaybeAwaitable = Union[Awaitable[T], T]


class AsyncIORuntime(Runtime):
    """
    Runtime awaiting coroutine resolvers and resolving sibling fields and
    list items concurrently with :func:`asyncio.gather`.

    Args:
        loop: Event loop used to offload blocking resolvers, defaults to the
            loop running when a resolver is called.
        execute_blocking_functions_in_thread: If ``True``, regular (non
            coroutine) resolvers are called in the loop's default executor
            instead of blocking the event loop.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        execute_blocking_functions_in_thread: bool = False,
    ):
        self._loop = loop
        self._execute_blocking_functions_in_thread = (
            execute_blocking_functions_in_thread
        )

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def _offload(self, fn: AnyFn) -> bool:
        return (
            self._execute_blocking_functions_in_thread
            and not iscoroutinefunction(fn)
        )

    def submit(
        self, fn: AnyFnGen[T], *args: Any, **kwargs: Any
    ) -> MaybeAwaitable[T]:
        if self._offload(fn):
            return self.loop.run_in_executor(
                None, ft.partial(fn, *args, **kwargs)
            )

        return fn(*args, **kwargs)

    def ensure_wrapped(self, value: MaybeAwaitable[T]) -> Awaitable[T]:
        if _isawaitable_fast(value):
            return cast(Awaitable[T], value)

        async def _make_awaitable() -> T:
            return cast(T, value)

        return _make_awaitable()

    def gather_values(
        self, values: Iterable[MaybeAwaitable[T]]
    ) -> MaybeAwaitable[List[T]]:
        done = []  # type: List[Any]
        pending = []  # type: List[Awaitable[T]]
        pending_idx = []  # type: List[int]

        for index, value in enumerate(values):
            if _isawaitable_fast(value):
                pending.append(cast(Awaitable[T], value))
                pending_idx.append(index)
            done.append(value)

        if not pending:
            return done

        async def _await_values() -> List[T]:
            for i, awaited in zip(pending_idx, await asyncio.gather(*pending)):
                done[i] = awaited
            return done

        return _await_values()

    def map_value(
        self,
        value: MaybeAwaitable[T],
        then: Callable[[T], G],
        else_: Optional[Tuple[Type[E], Callable[[E], G]]] = None,
    ) -> MaybeAwaitable[G]:

        if _isawaitable_fast(value):

            async def _await_value() -> G:
                try:
                    return then(await cast(Awaitable[T], value))
                except Exception as err:
                    if else_ and isinstance(err, else_[0]):
                        return else_[1](err)
                    raise

            return _await_value()

        try:
            return then(cast(T, value))
        except Exception as err:
            if else_ and isinstance(err, else_[0]):
                return else_[1](err)
            raise

    def unwrap_value(self, value: Any) -> Any:
        if _isawaitable_fast(value):

            async def _await_value() -> Any:
                cur = await value
                while _isawaitable_fast(cur):
                    cur = await cur
                return cur

            return _await_value()

        return value

    def wrap_callable(self, func: AnyFn) -> AnyFn:
        if not self._offload(func):
            return func

        @ft.wraps(func)
        async def wrapped(*args: Any, **kwargs: Any) -> Any:
            return await self.loop.run_in_executor(
                None, ft.partial(func, *args, **kwargs)
            )

        return wrapped


def _isawaitable_fast(value, cache={}, __isawaitable=isawaitable):
    # Cached by type, isawaitable is comparatively slow and called on every
    # resolved value.
    t = type(value)
    try:
        return cache[t]
    except KeyError:
        res = cache[t] = __isawaitable(value)
        return res
