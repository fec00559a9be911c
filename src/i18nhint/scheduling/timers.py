"""Timer factories for the annotation scheduler.

The scheduler never sleeps or spawns anything itself; it asks a TimerFactory
for a cancellable timer. Hosts pick the factory that matches their event
model.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol, TypeAlias

__all__ = ["Timer", "TimerFactory", "asyncio_timer_factory", "threading_timer"]


class Timer(Protocol):
    """A pending callback that can be cancelled.

    Cancelling a timer that already fired, or was already cancelled, is a
    no-op. ``threading.Timer`` and ``asyncio.TimerHandle`` both qualify.
    """

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started."""


TimerFactory: TypeAlias = Callable[[float, Callable[[], None]], Timer]
"""Starts a timer that calls callback after delay seconds."""


def threading_timer(delay: float, callback: Callable[[], None]) -> Timer:
    """Run callback on a daemon thread after delay seconds."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def asyncio_timer_factory(loop: asyncio.AbstractEventLoop) -> TimerFactory:
    """Build a factory that schedules callbacks on an event loop.

    The returned factory must be called from the loop's thread; callbacks run
    on the loop.

    Example:
        >>> scheduler = AnnotationScheduler(
        ...     scanner, buffers, sink, cache_snapshot,
        ...     timer_factory=asyncio_timer_factory(asyncio.get_running_loop()),
        ... )
    """

    def start(delay: float, callback: Callable[[], None]) -> Timer:
        return loop.call_later(delay, callback)

    return start
