"""
Stage timing helpers.

Usage:
    with Timer("stage_2", ctx.stage_timings) as t:
        matches = await retrieve_matches(...)
    # ctx.stage_timings["stage_2"] == t.elapsed_s

    @timed("ingestion_run")
    async def run(self, records): ...
"""

from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Awaitable, Callable, MutableMapping, TypeVar

from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.timing")

T = TypeVar("T")


class Timer:
    """
    Context-manager timer (sync + async).

    When ``sink`` is given, the elapsed seconds are stored under
    ``label`` on exit, including when the block raises.
    """

    def __init__(self, label: str = "", sink: MutableMapping[str, float] | None = None):
        self.label = label
        self.sink = sink
        self._start: float = 0.0
        self.elapsed_s: float = 0.0

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_s * 1000

    def _stop(self) -> None:
        self.elapsed_s = time.perf_counter() - self._start
        if self.sink is not None and self.label:
            self.sink[self.label] = self.elapsed_s
        if self.label:
            logger.debug("%s completed in %.1fms", self.label, self.elapsed_ms)

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: Any) -> None:
        self._stop()

    async def __aenter__(self) -> "Timer":
        return self.__enter__()

    async def __aexit__(self, *_: Any) -> None:
        self._stop()


def timed(label: str | None = None) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that logs the wall-clock time of a coroutine function."""

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"timed() expects a coroutine function, got {fn!r}")
        _label = label or fn.__qualname__

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            async with Timer(_label):
                return await fn(*args, **kwargs)

        return wrapper

    return decorator
