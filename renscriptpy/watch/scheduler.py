"""Scheduler contracts used for debounced reparsing."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
import itertools
from typing import Protocol


class ScheduledHandle(Protocol):
    """Handle for one scheduled callback."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after `delay` seconds on the caller's own loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle: ...


@dataclass(slots=True)
class ManualHandle:
    due: float
    sequence: int
    callback: Callable[[], None] = field(repr=False)
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler; time only moves when `advance` is called.

    Used by tests and by hosts that drive the editor loop themselves.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[ManualHandle] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending_count(self) -> int:
        return sum(1 for handle in self._queue if not handle.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(due=self._now + max(0.0, delay), sequence=next(self._sequence), callback=callback)
        self._queue.append(handle)
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run everything that became due, in due order.

        Returns the number of callbacks run.
        """
        return self._run_until(self._now + max(0.0, seconds))

    def run_all(self) -> int:
        """Run every pending callback regardless of its due time."""
        fired = 0
        while True:
            live = [handle for handle in self._queue if not handle.cancelled]
            if not live:
                self._queue.clear()
                return fired
            fired += self._run_until(max(self._now, max(handle.due for handle in live)))

    def _run_until(self, target: float) -> int:
        fired = 0
        while True:
            handle = self._next_due(target)
            if handle is None:
                break
            self._queue.remove(handle)
            self._now = max(self._now, handle.due)
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def _next_due(self, target: float) -> ManualHandle | None:
        self._queue = [handle for handle in self._queue if not handle.cancelled]
        due = [handle for handle in self._queue if handle.due <= target]
        if not due:
            return None
        return min(due, key=lambda handle: (handle.due, handle.sequence))


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop's `call_later`."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay, callback)
