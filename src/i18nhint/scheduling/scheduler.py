"""Debounced scheduling of buffer scans.

AnnotationScheduler turns a stream of editor events into scans:

- Each buffer has at most one pending timer. A qualifying event cancels it
  and starts a new one, so a burst of edits yields a single scan.
- Every scheduling gives the buffer a new generation, drawn from one counter
  so values never repeat. A timer or a finished scan whose generation is no
  longer current is discarded (last scheduled wins). Generations are dropped
  once a buffer has nothing pending or running.
- The buffer text is fetched when the timer fires, never when the event
  arrives.
- Scans run one at a time. Each scan captures a single LocaleMap snapshot
  and hands that same snapshot to the presentation sink.

Exceptions raised by collaborators inside a scheduled scan are logged and
swallowed; a failing sink must never break editing.

Python 3.13+.
"""

from __future__ import annotations

import functools
import itertools
import logging
import threading
from collections.abc import Callable, Sequence
from typing import Protocol

from i18nhint.constants import DEFAULT_DEBOUNCE_DELAY, MAX_BUFFER_SIZE, MAX_EDIT_CHANGES
from i18nhint.localization.locale_map import LocaleMap
from i18nhint.localization.types import BufferId
from i18nhint.scanning.scanner import KeyOccurrence, KeyScanner

from .timers import Timer, TimerFactory, threading_timer

__all__ = ["AnnotationScheduler", "BufferSource", "PresentationSink"]

logger = logging.getLogger(__name__)


class BufferSource(Protocol):
    """Host access to open buffers."""

    def get_text(self, buffer_id: BufferId) -> str | None:
        """Current text of the buffer, or None if it is gone."""

    def get_path(self, buffer_id: BufferId) -> str | None:
        """File path of the buffer, or None if it has none."""


class PresentationSink(Protocol):
    """Receives scan results for display.

    ``publish`` replaces everything previously shown for the buffer; an empty
    sequence clears it.
    """

    def publish(
        self,
        buffer_id: BufferId,
        occurrences: Sequence[KeyOccurrence],
        locale_map: LocaleMap,
    ) -> None:
        """Show occurrences resolved against locale_map."""


class AnnotationScheduler:
    """Debounces editor events into serialized buffer scans.

    Example:
        >>> scheduler = AnnotationScheduler(KeyScanner(), buffers, sink, cache_snapshot)
        >>> scheduler.on_edit("file:///work/app/main.js")
        True
    """

    __slots__ = (
        "_active_buffer",
        "_buffers",
        "_counter",
        "_delay",
        "_enabled",
        "_generations",
        "_max_buffer_size",
        "_max_edit_changes",
        "_presenter",
        "_scan_lock",
        "_scanner",
        "_snapshot",
        "_state_lock",
        "_timer_factory",
        "_timers",
    )

    def __init__(
        self,
        scanner: KeyScanner,
        buffers: BufferSource,
        presenter: PresentationSink,
        snapshot: Callable[[], LocaleMap],
        *,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        max_buffer_size: int = MAX_BUFFER_SIZE,
        max_edit_changes: int = MAX_EDIT_CHANGES,
        timer_factory: TimerFactory = threading_timer,
        enabled: bool = True,
    ) -> None:
        """Initialize AnnotationScheduler.

        Args:
            scanner: Scanner applied to buffer text
            buffers: Source of buffer text and paths
            presenter: Sink receiving scan results
            snapshot: Returns the LocaleMap to scan against (read once per scan)
            delay: Quiet period in seconds before a scan runs
            max_buffer_size: Buffers longer than this (characters) are skipped
            max_edit_changes: Edits with this many changes or more are ignored
            timer_factory: Source of cancellable timers
            enabled: Initial enabled state

        Raises:
            ValueError: If delay is negative or a limit is not positive
        """
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        if max_buffer_size <= 0 or max_edit_changes <= 0:
            msg = "max_buffer_size and max_edit_changes must be positive"
            raise ValueError(msg)
        self._scanner = scanner
        self._buffers = buffers
        self._presenter = presenter
        self._snapshot = snapshot
        self._delay = delay
        self._max_buffer_size = max_buffer_size
        self._max_edit_changes = max_edit_changes
        self._timer_factory = timer_factory
        self._enabled = enabled
        self._state_lock = threading.Lock()
        self._scan_lock = threading.Lock()
        self._timers: dict[BufferId, Timer] = {}
        self._generations: dict[BufferId, int] = {}
        self._counter = itertools.count(1)
        self._active_buffer: BufferId | None = None

    @property
    def enabled(self) -> bool:
        """Whether events schedule scans."""
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
        if not value:
            self.cancel_all()

    @property
    def active_buffer(self) -> BufferId | None:
        """Buffer that last received focus."""
        return self._active_buffer

    @property
    def pending(self) -> frozenset[BufferId]:
        """Buffers with a pending timer."""
        with self._state_lock:
            return frozenset(self._timers)

    def on_edit(self, buffer_id: BufferId, change_count: int = 1) -> bool:
        """Schedule a scan after an edit.

        Args:
            buffer_id: Edited buffer
            change_count: Number of changed ranges in the edit

        Returns:
            True if a scan was scheduled
        """
        if not self._enabled:
            return False
        if change_count >= self._max_edit_changes:
            logger.debug("Ignoring bulk edit of %d changes in %s", change_count, buffer_id)
            return False
        self._schedule(buffer_id)
        return True

    def on_focus(self, buffer_id: BufferId) -> bool:
        """Record the active buffer and schedule a scan of it."""
        self._active_buffer = buffer_id
        if not self._enabled:
            return False
        self._schedule(buffer_id)
        return True

    def on_resource_reload(self) -> bool:
        """Schedule a rescan of the active buffer after the map changed."""
        buffer_id = self._active_buffer
        if buffer_id is None or not self._enabled:
            return False
        self._schedule(buffer_id)
        return True

    def scan_now(self, buffer_id: BufferId) -> list[KeyOccurrence] | None:
        """Scan a buffer immediately, superseding any pending timer.

        Returns:
            Published occurrences, or None if the scan was skipped
        """
        with self._state_lock:
            generation = self._bump(buffer_id)
        return self._run_scan(buffer_id, generation)

    def cancel(self, buffer_id: BufferId) -> bool:
        """Cancel the pending scan of one buffer.

        Returns:
            True if a timer was pending
        """
        with self._state_lock:
            timer = self._timers.pop(buffer_id, None)
            if timer is None:
                return False
            self._generations.pop(buffer_id, None)
        timer.cancel()
        return True

    def cancel_all(self) -> None:
        """Cancel every pending scan and discard scans still running."""
        with self._state_lock:
            timers = list(self._timers.items())
            self._timers.clear()
            self._generations.clear()
        for _, timer in timers:
            timer.cancel()
        if timers:
            logger.debug("Cancelled %d pending scans", len(timers))

    def close(self) -> None:
        """Cancel everything and stop reacting to events."""
        self.enabled = False
        self._active_buffer = None

    def _bump(self, buffer_id: BufferId) -> int:
        """Invalidate the pending work of a buffer. Caller holds the state lock."""
        previous = self._timers.pop(buffer_id, None)
        if previous is not None:
            previous.cancel()
        generation = next(self._counter)
        self._generations[buffer_id] = generation
        return generation

    def _schedule(self, buffer_id: BufferId) -> None:
        with self._state_lock:
            generation = self._bump(buffer_id)
            callback = functools.partial(self._fire, buffer_id, generation)
            self._timers[buffer_id] = self._timer_factory(self._delay, callback)

    def _is_current(self, buffer_id: BufferId, generation: int) -> bool:
        with self._state_lock:
            return self._generations.get(buffer_id) == generation

    def _fire(self, buffer_id: BufferId, generation: int) -> None:
        with self._state_lock:
            if self._generations.get(buffer_id) != generation:
                return
            self._timers.pop(buffer_id, None)
        self._run_scan(buffer_id, generation)

    def _retire(self, buffer_id: BufferId, generation: int) -> None:
        with self._state_lock:
            if self._generations.get(buffer_id) == generation:
                del self._generations[buffer_id]

    def _run_scan(self, buffer_id: BufferId, generation: int) -> list[KeyOccurrence] | None:
        try:
            return self._scan_and_publish(buffer_id, generation)
        finally:
            self._retire(buffer_id, generation)

    def _scan_and_publish(
        self, buffer_id: BufferId, generation: int
    ) -> list[KeyOccurrence] | None:
        with self._scan_lock:
            if not self._is_current(buffer_id, generation):
                return None
            try:
                text = self._buffers.get_text(buffer_id)
                if text is None:
                    return None
                if len(text) > self._max_buffer_size:
                    logger.debug(
                        "Skipping %s: %d characters exceeds %d",
                        buffer_id,
                        len(text),
                        self._max_buffer_size,
                    )
                    return None
                locale_map = self._snapshot()
                occurrences = self._scanner.scan_buffer(
                    text, locale_map, path=self._buffers.get_path(buffer_id)
                )
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning("Scan of %s failed: %s", buffer_id, exc)
                return None

            if not self._is_current(buffer_id, generation):
                logger.debug("Discarding superseded scan of %s", buffer_id)
                return None

            try:
                self._presenter.publish(buffer_id, occurrences, locale_map)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning("Publishing results for %s failed: %s", buffer_id, exc)
                return None
            logger.debug("Published %d occurrences for %s", len(occurrences), buffer_id)
            return occurrences
