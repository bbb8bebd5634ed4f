"""Reload/patch coordination, runtime contracts and configuration."""

from renscriptpy.reload.coordinator import (
    CoordinatorState,
    PassAction,
    PassOutcome,
    ReloadCoordinator,
    ScriptSnapshot,
)
from renscriptpy.reload.options import DEFAULT_LOG_FORMAT, HotReloadOptions
from renscriptpy.reload.runtime import (
    FileWriter,
    InMemoryFileWriter,
    InMemoryRuntime,
    LiveRuntime,
    ObjectId,
    RuntimeResult,
)
from renscriptpy.reload.session import HotReloadSession

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "CoordinatorState",
    "FileWriter",
    "HotReloadOptions",
    "HotReloadSession",
    "InMemoryFileWriter",
    "InMemoryRuntime",
    "LiveRuntime",
    "ObjectId",
    "PassAction",
    "PassOutcome",
    "ReloadCoordinator",
    "RuntimeResult",
    "ScriptSnapshot",
]
