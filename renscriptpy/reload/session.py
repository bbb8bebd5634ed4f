"""Editor-facing entry point wiring the watcher to the coordinator."""

from __future__ import annotations

import logging

from renscriptpy.diagnostics import Diagnostic, DiagnosticsReporter
from renscriptpy.reload.coordinator import PassOutcome, ReloadCoordinator
from renscriptpy.reload.options import HotReloadOptions
from renscriptpy.reload.runtime import FileWriter, LiveRuntime
from renscriptpy.watch import Scheduler, SourceBufferWatcher

logger = logging.getLogger("renscriptpy")


class HotReloadSession:
    """Accepts raw edits and runs one debounced coordinator pass per path."""

    def __init__(
        self,
        runtime: LiveRuntime,
        writer: FileWriter,
        scheduler: Scheduler,
        *,
        options: HotReloadOptions | None = None,
        reporter: DiagnosticsReporter | None = None,
    ) -> None:
        self.options = options if options is not None else HotReloadOptions()
        self.coordinator = ReloadCoordinator(runtime, writer, reporter=reporter, options=self.options)
        self.watcher = SourceBufferWatcher(
            scheduler,
            self._run_pass,
            debounce_seconds=self.options.debounce_seconds,
            language=self.options.language,
        )
        self._last_outcomes: dict[str, PassOutcome] = {}

    def on_edit(self, path: str, text: str) -> None:
        self.watcher.on_edit(path, text)

    def flush(self, path: str | None = None) -> int:
        return self.watcher.flush(path)

    def get_diagnostics(self, path: str) -> list[Diagnostic]:
        return self.coordinator.get_diagnostics(path)

    def forget(self, path: str) -> None:
        self.watcher.cancel(path)
        self.coordinator.forget(path)
        self._last_outcomes.pop(path, None)

    def last_outcome(self, path: str) -> PassOutcome | None:
        return self._last_outcomes.get(path)

    def _run_pass(self, path: str, text: str) -> None:
        outcome = self.coordinator.process(path, text)
        self._last_outcomes[path] = outcome
        logger.debug("Pass for %s finished: %s", path, outcome.action.value)
