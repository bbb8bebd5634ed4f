"""Per-script reload/patch state machine.

One pass per edit: parse, publish diagnostics, then either patch the property
schema of running objects, fully reload the script, or detach it when the
source became empty. Runtime failures are logged and never abort a pass.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
import logging

from renscriptpy.ast import ScriptAst
from renscriptpy.classify import ChangeKind, classify_change
from renscriptpy.diagnostics import PARSER_INTERNAL_ERROR, Diagnostic, DiagnosticsReporter
from renscriptpy.parser import parse_script
from renscriptpy.reload.options import HotReloadOptions
from renscriptpy.reload.runtime import FileWriter, LiveRuntime, ObjectId, RuntimeResult
from renscriptpy.schema import ChangeSet, diff_properties

logger = logging.getLogger("renscriptpy")


class CoordinatorState(StrEnum):
    IDLE = "idle"
    PARSING = "parsing"
    CLASSIFYING = "classifying"
    PATCHING = "patching"
    RELOADING = "reloading"
    REMOVING = "removing"
    ERROR = "error"


class PassAction(StrEnum):
    PATCHED = "patched"
    RELOADED = "reloaded"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PassOutcome:
    """What one pipeline pass did for one path."""

    path: str
    action: PassAction
    ast: ScriptAst
    states: tuple[CoordinatorState, ...]
    change_kind: ChangeKind | None = None
    change_set: ChangeSet | None = None
    failures: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ScriptSnapshot:
    source: str
    ast: ScriptAst


class ReloadCoordinator:
    """Keeps the live runtime in sync with edited script sources.

    The runtime and writer are injected; bound objects are always queried
    right before acting, never cached between passes.
    """

    def __init__(
        self,
        runtime: LiveRuntime,
        writer: FileWriter,
        *,
        reporter: DiagnosticsReporter | None = None,
        options: HotReloadOptions | None = None,
    ) -> None:
        self._runtime = runtime
        self._writer = writer
        self._reporter = reporter if reporter is not None else DiagnosticsReporter()
        self._options = options if options is not None else HotReloadOptions()
        self._snapshots: dict[str, ScriptSnapshot] = {}
        self._states: dict[str, CoordinatorState] = {}

    @property
    def reporter(self) -> DiagnosticsReporter:
        return self._reporter

    @property
    def options(self) -> HotReloadOptions:
        return self._options

    def state(self, path: str) -> CoordinatorState:
        return self._states.get(path, CoordinatorState.IDLE)

    def snapshot(self, path: str) -> ScriptSnapshot | None:
        return self._snapshots.get(path)

    def get_diagnostics(self, path: str) -> list[Diagnostic]:
        return self._reporter.get_diagnostics(path)

    def forget(self, path: str) -> None:
        self._snapshots.pop(path, None)
        self._states.pop(path, None)
        self._reporter.clear(path)

    def process(self, path: str, text: str) -> PassOutcome:
        """Run one full pass for `path` with its latest source text."""
        visited: list[CoordinatorState] = []

        self._enter(path, CoordinatorState.PARSING, visited)
        ast = parse_script(text)
        self._reporter.publish(path, ast.diagnostics)

        if _is_unrecoverable(ast):
            self._enter(path, CoordinatorState.ERROR, visited)
            logger.warning("Parse of %s failed; runtime left untouched", path)
            return PassOutcome(path=path, action=PassAction.FAILED, ast=ast, states=tuple(visited))

        if ast.is_empty:
            self._enter(path, CoordinatorState.REMOVING, visited)
            failures = self._remove(path)
            return self._finish(path, text, ast, visited, action=PassAction.REMOVED, failures=failures)

        previous = self._snapshots.get(path)
        self._enter(path, CoordinatorState.CLASSIFYING, visited)
        try:
            change_kind = (
                ChangeKind.STRUCTURAL if previous is None else classify_change(previous.source, text)
            )
        except Exception:
            logger.exception("Classifying the edit of %s failed; runtime left untouched", path)
            self._enter(path, CoordinatorState.ERROR, visited)
            return PassOutcome(path=path, action=PassAction.FAILED, ast=ast, states=tuple(visited))

        if change_kind == ChangeKind.METADATA_ONLY and previous is not None:
            self._enter(path, CoordinatorState.PATCHING, visited)
            change_set = diff_properties(previous.ast.properties, ast.properties)
            # options/once edits leave the change set empty but still reach the runtime.
            unchanged = change_set.is_empty and previous.ast.properties == ast.properties
            if unchanged and not self._options.notify_on_empty_change:
                logger.debug("Edit of %s changed no property; nothing to patch", path)
                return self._finish(
                    path, text, ast, visited,
                    action=PassAction.UNCHANGED, change_kind=change_kind, change_set=change_set,
                )
            failures = self._patch(path, change_set)
            return self._finish(
                path, text, ast, visited,
                action=PassAction.PATCHED, change_kind=change_kind, change_set=change_set, failures=failures,
            )

        self._enter(path, CoordinatorState.RELOADING, visited)
        failures = self._reload(path, text)
        return self._finish(
            path, text, ast, visited,
            action=PassAction.RELOADED, change_kind=ChangeKind.STRUCTURAL, failures=failures,
        )

    def _remove(self, path: str) -> tuple[str, ...]:
        failures: list[str] = []
        objects = self._call(
            failures,
            f"query objects bound to {path}",
            lambda: self._runtime.get_bound_objects(path),
        )
        bound: list[ObjectId] = list(objects) if objects is not None else []
        try:
            bound.sort()
        except TypeError:
            logger.debug("Object ids bound to %s are not orderable; detaching in runtime order", path)
        logger.info("Script %s is empty; detaching it from %d object(s)", path, len(bound))
        for object_id in bound:
            self._call(
                failures,
                f"detach {path} from {object_id}",
                lambda object_id=object_id: self._runtime.detach_script(object_id, path),
            )
        self._call(
            failures,
            f"write empty marker to {path}",
            lambda: self._writer.write_file(path, self._options.empty_marker),
        )
        return tuple(failures)

    def _patch(self, path: str, change_set: ChangeSet) -> tuple[str, ...]:
        failures: list[str] = []
        logger.info(
            "Patching %s: %d added, %d removed, %d modified, %d renamed",
            path,
            len(change_set.added),
            len(change_set.removed),
            len(change_set.modified),
            len(change_set.renamed),
        )
        self._call(
            failures,
            f"notify property schema change of {path}",
            lambda: self._runtime.notify_property_schema_changed(path, change_set),
        )
        return tuple(failures)

    def _reload(self, path: str, text: str) -> tuple[str, ...]:
        failures: list[str] = []
        logger.info("Structural edit of %s; reloading script", path)
        if self._options.persist_on_reload:
            self._call(failures, f"persist {path}", lambda: self._writer.write_file(path, text))
        self._call(failures, f"reload {path}", lambda: self._runtime.reload_script(path))
        return tuple(failures)

    def _call(self, failures: list[str], action: str, call: Callable[[], object]) -> object:
        try:
            result = call()
        except Exception as exc:
            logger.warning("Failed to %s: %s", action, exc, exc_info=exc)
            failures.append(f"{action}: {exc}")
            return None
        if isinstance(result, RuntimeResult) and not result.ok:
            logger.warning("Failed to %s: %s", action, result.message or "runtime reported failure")
            failures.append(f"{action}: {result.message or 'runtime reported failure'}")
        return result

    def _finish(
        self,
        path: str,
        text: str,
        ast: ScriptAst,
        visited: list[CoordinatorState],
        *,
        action: PassAction,
        change_kind: ChangeKind | None = None,
        change_set: ChangeSet | None = None,
        failures: tuple[str, ...] = (),
    ) -> PassOutcome:
        self._snapshots[path] = ScriptSnapshot(source=text, ast=ast)
        self._enter(path, CoordinatorState.IDLE, visited)
        return PassOutcome(
            path=path,
            action=action,
            ast=ast,
            states=tuple(visited),
            change_kind=change_kind,
            change_set=change_set,
            failures=failures,
        )

    def _enter(self, path: str, state: CoordinatorState, visited: list[CoordinatorState]) -> None:
        logger.debug("%s: %s -> %s", path, self.state(path).value, state.value)
        self._states[path] = state
        visited.append(state)


def _is_unrecoverable(ast: ScriptAst) -> bool:
    return any(diagnostic.code == PARSER_INTERNAL_ERROR.code for diagnostic in ast.diagnostics)
