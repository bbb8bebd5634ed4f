"""Hot-reload configuration."""

from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True, slots=True)
class HotReloadOptions:
    """Settings shared by the source watcher and the reload coordinator."""

    # Seconds to wait after the last edit of a path before parsing it
    debounce_seconds: float = 0.5
    # Written back when a script's source becomes empty; must itself parse as empty
    empty_marker: str = ""
    language: str = "renscript"
    # Persist the new source before asking the runtime to reload it
    persist_on_reload: bool = True
    # Send schema notifications even when a metadata-only edit changed no property
    notify_on_empty_change: bool = False

    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self):
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds cannot be negative")
        if self.empty_marker.strip():
            raise ValueError("empty_marker must be blank so it re-parses as an empty script")
