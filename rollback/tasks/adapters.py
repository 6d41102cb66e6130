"""Adapters between task calling conventions and awaitables.

Tasks come in three flavours: coroutine functions, callables returning an
awaitable, and plain synchronous callables. ``invoke`` awaits any of them. The
``from_callback`` helpers turn continuation-passing tasks, which report through
``cb(err, value)`` instead of returning, into coroutine functions.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable

from rollback.logging import get_logger
from rollback.types.base import Action, Compensation

logger = get_logger(__name__)

#: ``cb(err, value)`` continuation handed to callback-style tasks.
Continuation = Callable[..., None]


class CallbackError(Exception):
    """Failure reported by a callback-style task with a non-exception value.

    Attributes:
        error: The raw value passed as ``err`` to the continuation.
    """

    def __init__(self, error: Any) -> None:
        super().__init__(f"Task reported error: {error!r}")
        self.error = error


async def invoke(fn: Callable[..., Any], *args: Any, run_sync_in_thread: bool = False) -> Any:
    """Call ``fn(*args)`` in whatever convention it uses and return its value.

    Args:
        fn: Coroutine function, awaitable-returning callable, or sync callable.
        *args: Positional arguments forwarded to ``fn``.
        run_sync_in_thread: Run non-coroutine callables via ``asyncio.to_thread``.

    Returns:
        The value produced by ``fn``, awaited if it was awaitable.
    """
    if inspect.iscoroutinefunction(fn):
        return await fn(*args)
    if run_sync_in_thread:
        value = await asyncio.to_thread(fn, *args)
    else:
        value = fn(*args)
    if inspect.isawaitable(value):
        return await value
    return value


async def _await_continuation(call: Callable[[Continuation], None]) -> Any:
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def settle(err: Any, value: Any) -> None:
        if future.done():
            logger.debug("Ignoring repeated continuation call")
            return
        if err:
            exc = err if isinstance(err, BaseException) else CallbackError(err)
            future.set_exception(exc)
        else:
            future.set_result(value)

    def done(err: Any = None, value: Any = None) -> None:
        # The continuation may be called from any thread.
        loop.call_soon_threadsafe(settle, err, value)

    call(done)
    return await future


def from_callback(fn: Callable[[Continuation], None]) -> Action:
    """Wrap a ``fn(cb)`` task into a coroutine function.

    A truthy ``err`` passed to ``cb`` fails the task: exceptions are raised as
    is, any other value is wrapped in :class:`CallbackError`. Only the first
    ``cb`` call counts.
    """

    @functools.wraps(fn)
    async def action() -> Any:
        return await _await_continuation(fn)

    return action


def undo_from_callback(fn: Callable[[Any, Continuation], None]) -> Compensation:
    """Wrap a ``fn(result, cb)`` compensating action into a coroutine function."""

    @functools.wraps(fn)
    async def undo(result: Any) -> Any:
        return await _await_continuation(lambda done: fn(result, done))

    return undo
