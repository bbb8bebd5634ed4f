"""Contracts for the live scene runtime and file persistence."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from renscriptpy.schema import ChangeSet

ObjectId: TypeAlias = str


@dataclass(frozen=True, slots=True)
class RuntimeResult:
    """Outcome of one call into the runtime or file writer."""

    ok: bool = True
    message: str | None = None

    @staticmethod
    def success() -> "RuntimeResult":
        return RuntimeResult()

    @staticmethod
    def failure(message: str) -> "RuntimeResult":
        return RuntimeResult(ok=False, message=message)


class LiveRuntime(Protocol):
    """Scene runtime that owns the path -> bound objects mapping."""

    def get_bound_objects(self, path: str) -> frozenset[ObjectId]: ...

    def detach_script(self, object_id: ObjectId, path: str) -> RuntimeResult: ...

    def reload_script(self, path: str) -> RuntimeResult: ...

    def notify_property_schema_changed(self, path: str, change_set: ChangeSet) -> None: ...


class FileWriter(Protocol):
    def write_file(self, path: str, content: str) -> RuntimeResult: ...


class InMemoryRuntime:
    """In-memory runtime for tests and local wiring.

    Records every call in `calls`; objects listed in `failing_objects` report a
    failed detach.
    """

    def __init__(self, bindings: Mapping[str, Iterable[ObjectId]] | None = None) -> None:
        self.bindings: dict[str, set[ObjectId]] = {
            path: set(objects) for path, objects in (bindings or {}).items()
        }
        self.failing_objects: set[ObjectId] = set()
        self.calls: list[tuple[str, ...]] = []
        self.notifications: list[tuple[str, ChangeSet]] = []
        self.reload_count: dict[str, int] = {}

    def bind(self, path: str, object_id: ObjectId) -> None:
        self.bindings.setdefault(path, set()).add(object_id)

    def get_bound_objects(self, path: str) -> frozenset[ObjectId]:
        self.calls.append(("get_bound_objects", path))
        return frozenset(self.bindings.get(path, ()))

    def detach_script(self, object_id: ObjectId, path: str) -> RuntimeResult:
        self.calls.append(("detach_script", object_id, path))
        if object_id in self.failing_objects:
            return RuntimeResult.failure(f"object {object_id} refused to detach")
        self.bindings.get(path, set()).discard(object_id)
        return RuntimeResult.success()

    def reload_script(self, path: str) -> RuntimeResult:
        self.calls.append(("reload_script", path))
        self.reload_count[path] = self.reload_count.get(path, 0) + 1
        return RuntimeResult.success()

    def notify_property_schema_changed(self, path: str, change_set: ChangeSet) -> None:
        self.calls.append(("notify_property_schema_changed", path))
        self.notifications.append((path, change_set))

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)


class InMemoryFileWriter:
    """Keeps written files in a dict instead of touching disk."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.writes: list[tuple[str, str]] = []

    def write_file(self, path: str, content: str) -> RuntimeResult:
        self.files[path] = content
        self.writes.append((path, content))
        return RuntimeResult.success()
