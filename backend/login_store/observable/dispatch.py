"""Foreground execution contexts used to deliver results to callers."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Protocol

from login_store.core.logging import get_logger

logger = get_logger(__name__)


class Dispatcher(Protocol):
    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        ...

    def close(self) -> None:
        ...


class SerialDispatcher:
    """Run posted calls one at a time, in posting order, on a dedicated thread."""

    def __init__(self, name: str = "login-foreground") -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(_log_failure)

    def close(self) -> None:
        self._executor.shutdown(wait=True)


class ImmediateDispatcher:
    """Run posted calls inline on the posting thread."""

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        fn(*args)

    def close(self) -> None:
        pass


class LoopDispatcher:
    """Hand posted calls to an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        if self.loop.is_closed():
            logger.warning("Dropping %s: event loop is closed", getattr(fn, "__name__", fn))
            return
        self.loop.call_soon_threadsafe(fn, *args)

    def close(self) -> None:
        pass


def _log_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Foreground call failed", exc_info=exc)


__all__ = ["Dispatcher", "SerialDispatcher", "ImmediateDispatcher", "LoopDispatcher"]
