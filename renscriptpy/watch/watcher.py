"""Debounced, cancel-and-replace edit watcher."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import functools
import logging
from typing import TypeAlias

from renscriptpy.ast import ScriptSource
from renscriptpy.watch.scheduler import ScheduledHandle, Scheduler

logger = logging.getLogger("renscriptpy")

ReadyCallback: TypeAlias = Callable[[str, str], None]


@dataclass(frozen=True, slots=True)
class PendingRun:
    generation: int
    source: ScriptSource
    handle: ScheduledHandle


class SourceBufferWatcher:
    """Schedules one pipeline run per path after edits settle.

    Each path carries a generation counter; an edit bumps it and cancels the
    pending handle, and a callback whose generation is no longer current is
    ignored even if its handle fired anyway. Paths never affect each other.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_ready: ReadyCallback,
        *,
        debounce_seconds: float = 0.5,
        language: str = "renscript",
    ) -> None:
        if debounce_seconds < 0:
            raise ValueError("debounce_seconds cannot be negative")
        self._scheduler = scheduler
        self._on_ready = on_ready
        self._debounce_seconds = debounce_seconds
        self._language = language
        self._generations: dict[str, int] = {}
        self._pending: dict[str, PendingRun] = {}

    @property
    def debounce_seconds(self) -> float:
        return self._debounce_seconds

    def on_edit(self, path: str, text: str) -> None:
        generation = self._generations.get(path, 0) + 1
        self._generations[path] = generation

        previous = self._pending.pop(path, None)
        if previous is not None:
            previous.handle.cancel()
            logger.debug("Superseded pending parse of %s (generation %d)", path, previous.generation)

        handle = self._scheduler.call_later(
            self._debounce_seconds,
            functools.partial(self._fire, path, generation),
        )
        self._pending[path] = PendingRun(
            generation=generation,
            source=ScriptSource(path=path, text=text, language=self._language),
            handle=handle,
        )

    def cancel(self, path: str) -> bool:
        pending = self._pending.pop(path, None)
        if pending is None:
            return False
        pending.handle.cancel()
        self._generations[path] = self._generations.get(path, 0) + 1
        return True

    def flush(self, path: str | None = None) -> int:
        """Run pending work now instead of waiting for the debounce interval."""
        paths = [path] if path is not None else sorted(self._pending)
        ran = 0
        for candidate in paths:
            pending = self._pending.get(candidate)
            if pending is None:
                continue
            pending.handle.cancel()
            self._fire(candidate, pending.generation)
            ran += 1
        return ran

    def pending_paths(self) -> list[str]:
        return sorted(self._pending)

    def pending_source(self, path: str) -> ScriptSource | None:
        pending = self._pending.get(path)
        return pending.source if pending is not None else None

    def _fire(self, path: str, generation: int) -> None:
        pending = self._pending.get(path)
        if pending is None or pending.generation != generation or self._generations.get(path) != generation:
            logger.debug("Ignoring stale parse of %s (generation %d)", path, generation)
            return
        del self._pending[path]
        self._on_ready(path, pending.source.text)
