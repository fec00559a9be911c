"""Debounced scan scheduling.

Python 3.13+. Zero external dependencies.
"""

from .scheduler import AnnotationScheduler, BufferSource, PresentationSink
from .timers import Timer, TimerFactory, asyncio_timer_factory, threading_timer

__all__ = [
    "AnnotationScheduler",
    "BufferSource",
    "PresentationSink",
    "Timer",
    "TimerFactory",
    "asyncio_timer_factory",
    "threading_timer",
]
