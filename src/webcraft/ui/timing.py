"""Debounce and throttle wrappers for UI callbacks.

Both work with plain and async callables. Debounced calls are scheduled as
asyncio tasks, so they must be triggered from inside the running event
loop (any NiceGUI event handler is).
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 0.3


class Debounced:
    """Callable that runs ``func`` once calls stop arriving for ``delay`` seconds.

    Each call cancels the pending one; only the last call's arguments are
    used.
    """

    def __init__(self, func: Callable[..., Any], delay: float) -> None:
        functools.update_wrapper(self, func)
        self._func = func
        self.delay = delay
        self._pending: asyncio.Task[None] | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()

        async def debounced_call() -> None:
            await asyncio.sleep(self.delay)
            try:
                result = self._func(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Debounced call to %s failed", self.__name__)

        self._pending = asyncio.create_task(debounced_call())

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        task, self._pending = self._pending, None
        if task and not task.done():
            task.cancel()


class Throttled:
    """Callable that runs ``func`` at most once per ``limit`` seconds.

    Calls arriving inside the window are dropped, not queued. Returns the
    wrapped function's result (an awaitable for async functions) or None
    when the call was dropped.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        limit: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        functools.update_wrapper(self, func)
        self._func = func
        self.limit = limit
        self._clock = clock
        self._last_call: float | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        now = self._clock()
        if self._last_call is not None and now - self._last_call < self.limit:
            return None
        self._last_call = now
        return self._func(*args, **kwargs)

    def reset(self) -> None:
        """Reopen the window so the next call runs immediately."""
        self._last_call = None


def debounce(
    func: Callable[..., Any] | None = None, *, delay: float = DEFAULT_DELAY_SECONDS
) -> Any:
    """Debounce ``func``; usable as ``@debounce`` or ``@debounce(delay=0.5)``."""
    if func is None:
        return functools.partial(debounce, delay=delay)
    return Debounced(func, delay)


def throttle(
    func: Callable[..., Any] | None = None, *, limit: float = DEFAULT_DELAY_SECONDS
) -> Any:
    """Throttle ``func``; usable as ``@throttle`` or ``@throttle(limit=1.0)``."""
    if func is None:
        return functools.partial(throttle, limit=limit)
    return Throttled(func, limit)
