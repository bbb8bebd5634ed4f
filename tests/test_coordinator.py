import logging

import pytest

from renscriptpy.classify import ChangeKind
from renscriptpy.parser import script as script_module
from renscriptpy.reload import (
    CoordinatorState,
    HotReloadOptions,
    InMemoryFileWriter,
    InMemoryRuntime,
    ObjectId,
    PassAction,
    ReloadCoordinator,
    RuntimeResult,
)
from tests._shared_cases import ROTATOR_DEFAULT_EDIT, ROTATOR_LOGIC_EDIT, ROTATOR_SOURCE

PATH = "scripts/rotator.ren"


def _coordinator(
    bindings: dict[str, set[ObjectId]] | None = None,
    options: HotReloadOptions | None = None,
) -> tuple[ReloadCoordinator, InMemoryRuntime, InMemoryFileWriter]:
    runtime = InMemoryRuntime(bindings)
    writer = InMemoryFileWriter()
    return ReloadCoordinator(runtime, writer, options=options), runtime, writer


def _loaded(
    bindings: dict[str, set[ObjectId]] | None = None,
    options: HotReloadOptions | None = None,
) -> tuple[ReloadCoordinator, InMemoryRuntime, InMemoryFileWriter]:
    coordinator, runtime, writer = _coordinator(bindings, options)
    coordinator.process(PATH, ROTATOR_SOURCE)
    runtime.calls.clear()
    writer.writes.clear()
    return coordinator, runtime, writer


class _RaisingRuntime(InMemoryRuntime):
    def detach_script(self, object_id: ObjectId, path: str) -> RuntimeResult:
        if object_id == "explodes":
            self.calls.append(("detach_script", object_id, path))
            raise RuntimeError("scene object is locked")
        return super().detach_script(object_id, path)


class _FailingWriter(InMemoryFileWriter):
    def write_file(self, path: str, content: str) -> RuntimeResult:
        self.writes.append((path, content))
        return RuntimeResult.failure("disk is read-only")


def test_first_pass_is_a_full_reload() -> None:
    coordinator, runtime, writer = _coordinator()

    outcome = coordinator.process(PATH, ROTATOR_SOURCE)

    assert outcome.action == PassAction.RELOADED
    assert outcome.change_kind == ChangeKind.STRUCTURAL
    assert outcome.states == (
        CoordinatorState.PARSING,
        CoordinatorState.CLASSIFYING,
        CoordinatorState.RELOADING,
        CoordinatorState.IDLE,
    )
    assert runtime.reload_count == {PATH: 1}
    assert writer.files == {PATH: ROTATOR_SOURCE}
    assert coordinator.state(PATH) == CoordinatorState.IDLE
    snapshot = coordinator.snapshot(PATH)
    assert snapshot is not None
    assert snapshot.source == ROTATOR_SOURCE
    assert snapshot.ast.name == "Rotator"


def test_scenario_a_parse_result_is_published() -> None:
    coordinator, _, _ = _coordinator()

    outcome = coordinator.process(PATH, ROTATOR_SOURCE)

    assert outcome.ast.name == "Rotator"
    assert [prop.name for prop in outcome.ast.properties] == ["speed"]
    assert coordinator.get_diagnostics(PATH) == []


def test_scenario_b_metadata_edit_patches_without_reload() -> None:
    coordinator, runtime, writer = _loaded()

    outcome = coordinator.process(PATH, ROTATOR_DEFAULT_EDIT)

    assert outcome.action == PassAction.PATCHED
    assert outcome.change_kind == ChangeKind.METADATA_ONLY
    assert outcome.states == (
        CoordinatorState.PARSING,
        CoordinatorState.CLASSIFYING,
        CoordinatorState.PATCHING,
        CoordinatorState.IDLE,
    )
    assert runtime.called("notify_property_schema_changed")
    assert not runtime.called("reload_script")
    assert writer.writes == []

    assert len(runtime.notifications) == 1
    path, change_set = runtime.notifications[0]
    assert path == PATH
    assert change_set == outcome.change_set
    assert [modified.changed_fields for modified in change_set.modified] == [("default_value",)]


def test_scenario_c_logic_edit_reloads_without_patch() -> None:
    coordinator, runtime, writer = _loaded()

    outcome = coordinator.process(PATH, ROTATOR_LOGIC_EDIT)

    assert outcome.action == PassAction.RELOADED
    assert runtime.calls == [("reload_script", PATH)]
    assert not runtime.called("notify_property_schema_changed")
    assert writer.writes == [(PATH, ROTATOR_LOGIC_EDIT)]


def test_scenario_d_empty_source_detaches_every_bound_object() -> None:
    coordinator, runtime, writer = _loaded({PATH: {"obj-2", "obj-1"}, "other.ren": {"obj-3"}})

    outcome = coordinator.process(PATH, "  \n\t ")

    assert outcome.action == PassAction.REMOVED
    assert outcome.ast.is_empty
    assert outcome.failures == ()
    assert outcome.states == (
        CoordinatorState.PARSING,
        CoordinatorState.REMOVING,
        CoordinatorState.IDLE,
    )
    assert runtime.calls == [
        ("get_bound_objects", PATH),
        ("detach_script", "obj-1", PATH),
        ("detach_script", "obj-2", PATH),
    ]
    assert not runtime.called("reload_script")
    assert not runtime.called("notify_property_schema_changed")
    assert runtime.bindings == {PATH: set(), "other.ren": {"obj-3"}}
    assert writer.writes == [(PATH, "")]


def test_empty_marker_comes_from_options() -> None:
    coordinator, _, writer = _loaded(options=HotReloadOptions(empty_marker="\n"))

    coordinator.process(PATH, "")

    assert writer.files[PATH] == "\n"


def test_failed_detach_is_logged_and_does_not_abort(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="renscriptpy")
    coordinator, runtime, writer = _loaded({PATH: {"a", "b", "c"}})
    runtime.failing_objects.add("b")

    outcome = coordinator.process(PATH, "")

    assert outcome.action == PassAction.REMOVED
    assert len(outcome.failures) == 1
    assert "b" in outcome.failures[0]
    assert [call[1] for call in runtime.calls if call[0] == "detach_script"] == ["a", "b", "c"]
    assert runtime.bindings[PATH] == {"b"}
    assert writer.writes == [(PATH, "")]
    assert coordinator.state(PATH) == CoordinatorState.IDLE
    assert any("refused to detach" in record.getMessage() for record in caplog.records)


def test_raising_detach_is_caught_per_object(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="renscriptpy")
    runtime = _RaisingRuntime({PATH: {"explodes", "fine"}})
    writer = InMemoryFileWriter()
    coordinator = ReloadCoordinator(runtime, writer)
    coordinator.process(PATH, ROTATOR_SOURCE)

    outcome = coordinator.process(PATH, "")

    assert outcome.action == PassAction.REMOVED
    assert len(outcome.failures) == 1
    assert "scene object is locked" in outcome.failures[0]
    assert runtime.bindings[PATH] == {"explodes"}
    assert writer.files[PATH] == ""
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_failed_persist_still_reloads() -> None:
    runtime = InMemoryRuntime()
    coordinator = ReloadCoordinator(runtime, _FailingWriter())

    outcome = coordinator.process(PATH, ROTATOR_SOURCE)

    assert outcome.action == PassAction.RELOADED
    assert runtime.reload_count == {PATH: 1}
    assert len(outcome.failures) == 1
    assert "read-only" in outcome.failures[0]


def test_persist_on_reload_can_be_disabled() -> None:
    coordinator, runtime, writer = _loaded(options=HotReloadOptions(persist_on_reload=False))

    coordinator.process(PATH, ROTATOR_LOGIC_EDIT)

    assert runtime.calls == [("reload_script", PATH)]
    assert writer.writes == []


def test_reprocessing_identical_source_is_idempotent() -> None:
    coordinator, runtime, writer = _loaded()

    outcome = coordinator.process(PATH, ROTATOR_SOURCE)

    assert outcome.action == PassAction.UNCHANGED
    assert outcome.change_kind == ChangeKind.METADATA_ONLY
    assert outcome.change_set is not None and outcome.change_set.is_empty
    assert runtime.calls == []
    assert writer.writes == []
    assert coordinator.state(PATH) == CoordinatorState.IDLE


def test_options_only_edit_still_notifies_runtime() -> None:
    before = 'script Menu { props { mode: select { default: "a", options: ["a", "b"] } } }'
    after = 'script Menu { props { mode: select { default: "a", options: ["a", "b", "c"], once: true } } }'
    coordinator, runtime, writer = _coordinator()
    coordinator.process(PATH, before)
    runtime.calls.clear()
    writer.writes.clear()

    outcome = coordinator.process(PATH, after)

    assert outcome.action == PassAction.PATCHED
    assert outcome.change_kind == ChangeKind.METADATA_ONLY
    assert outcome.change_set is not None and outcome.change_set.is_empty
    assert runtime.calls == [("notify_property_schema_changed", PATH)]
    assert not runtime.called("reload_script")
    assert writer.writes == []
    mode = outcome.ast.property_named("mode")
    assert mode is not None
    assert mode.options == ("a", "b", "c")
    assert mode.once is True


def test_unorderable_object_ids_are_still_detached() -> None:
    coordinator, runtime, _ = _loaded({PATH: {"obj-1", 7}})  # type: ignore[arg-type]

    outcome = coordinator.process(PATH, "")

    assert outcome.action == PassAction.REMOVED
    assert outcome.failures == ()
    detached = {call[1] for call in runtime.calls if call[0] == "detach_script"}
    assert detached == {"obj-1", 7}
    assert runtime.bindings[PATH] == set()


def test_empty_change_set_can_still_be_notified() -> None:
    coordinator, runtime, _ = _loaded(options=HotReloadOptions(notify_on_empty_change=True))

    outcome = coordinator.process(PATH, ROTATOR_SOURCE)

    assert outcome.action == PassAction.PATCHED
    assert runtime.calls == [("notify_property_schema_changed", PATH)]


def test_diagnostics_are_replaced_on_every_pass() -> None:
    coordinator, _, _ = _coordinator()
    broken = "script Rotator { props { speed: nubmer } }"

    coordinator.process(PATH, broken)
    assert [diagnostic.code for diagnostic in coordinator.get_diagnostics(PATH)] == ["TYPE_UNKNOWN_PROPERTY_TYPE"]
    assert coordinator.reporter.has_errors(PATH) is False

    coordinator.process(PATH, ROTATOR_SOURCE)
    assert coordinator.get_diagnostics(PATH) == []


def test_bindings_are_queried_fresh_on_each_removal() -> None:
    coordinator, runtime, _ = _loaded({PATH: {"a"}})
    coordinator.process(PATH, "")
    runtime.bind(PATH, "late")

    coordinator.process(PATH, ROTATOR_SOURCE)
    runtime.calls.clear()
    coordinator.process(PATH, "")

    assert ("detach_script", "late", PATH) in runtime.calls


def test_parser_crash_goes_to_error_and_keeps_snapshot(monkeypatch: pytest.MonkeyPatch) -> None:
    coordinator, runtime, writer = _loaded()

    def _boom(*_args: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(script_module, "_parse_header", _boom)
    outcome = coordinator.process(PATH, ROTATOR_LOGIC_EDIT)

    assert outcome.action == PassAction.FAILED
    assert outcome.states == (CoordinatorState.PARSING, CoordinatorState.ERROR)
    assert coordinator.state(PATH) == CoordinatorState.ERROR
    assert runtime.calls == []
    assert writer.writes == []
    assert [diagnostic.code for diagnostic in coordinator.get_diagnostics(PATH)] == ["PARSER_INTERNAL_ERROR"]
    snapshot = coordinator.snapshot(PATH)
    assert snapshot is not None and snapshot.source == ROTATOR_SOURCE

    monkeypatch.undo()
    recovered = coordinator.process(PATH, ROTATOR_DEFAULT_EDIT)
    assert recovered.action == PassAction.PATCHED
    assert coordinator.state(PATH) == CoordinatorState.IDLE


def test_paths_keep_separate_snapshots() -> None:
    coordinator, runtime, _ = _loaded()

    first_other = coordinator.process("other.ren", ROTATOR_DEFAULT_EDIT)
    patched = coordinator.process(PATH, ROTATOR_DEFAULT_EDIT)

    assert first_other.action == PassAction.RELOADED
    assert patched.action == PassAction.PATCHED
    assert runtime.reload_count == {PATH: 1, "other.ren": 1}


def test_forget_drops_snapshot_and_diagnostics() -> None:
    coordinator, runtime, _ = _loaded()

    coordinator.forget(PATH)

    assert coordinator.snapshot(PATH) is None
    assert coordinator.get_diagnostics(PATH) == []
    assert coordinator.process(PATH, ROTATOR_DEFAULT_EDIT).action == PassAction.RELOADED
    assert runtime.called("reload_script")
