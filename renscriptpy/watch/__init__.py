"""Source buffer watcher and schedulers."""

from renscriptpy.watch.scheduler import (
    AsyncioScheduler,
    ManualHandle,
    ManualScheduler,
    ScheduledHandle,
    Scheduler,
)
from renscriptpy.watch.watcher import PendingRun, ReadyCallback, SourceBufferWatcher

__all__ = [
    "AsyncioScheduler",
    "ManualHandle",
    "ManualScheduler",
    "PendingRun",
    "ReadyCallback",
    "ScheduledHandle",
    "Scheduler",
    "SourceBufferWatcher",
]
