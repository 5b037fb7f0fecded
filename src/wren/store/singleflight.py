"""Duplicate call suppression.

Concurrent callers asking for the same key share one execution of the
underlying function. Once it finishes the key is released, so later
callers start a fresh execution.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import anyio

logger = logging.getLogger("wren.store")


class _Call:
    __slots__ = ("completed", "done", "error", "result")

    def __init__(self) -> None:
        self.done = anyio.Event()
        self.completed = False
        self.result: Any = None
        self.error: Exception | None = None


class Singleflight:
    """Coalesce concurrent calls per key.

    Usage::

        flight = Singleflight()
        page = await flight.do("blog/a", regenerate)

    Not thread-safe: all callers must share one event loop.
    """

    __slots__ = ("_calls",)

    def __init__(self) -> None:
        self._calls: dict[str, _Call] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._calls

    async def do(self, key: str, fn: Callable[[], Awaitable[Any]]) -> Any:
        """Run *fn* for *key*, or wait for the run already in progress.

        Every waiter receives the same result, or the same exception. If
        the running call is cancelled, one of the waiters takes over.
        """
        while (call := self._calls.get(key)) is not None:
            logger.debug("Joining in-flight call for %s", key)
            await call.done.wait()
            if call.error is not None:
                raise call.error
            if call.completed:
                return call.result

        call = _Call()
        self._calls[key] = call
        try:
            call.result = await fn()
            call.completed = True
        except Exception as exc:
            call.error = exc
            raise
        finally:
            del self._calls[key]
            call.done.set()
        return call.result
