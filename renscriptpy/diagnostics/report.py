"""Diagnostics helpers and the per-script diagnostics surface."""

from __future__ import annotations

from collections.abc import Iterable

from renscriptpy.diagnostics.diagnostic import Diagnostic


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    return sorted(
        diagnostics,
        key=lambda diagnostic: (
            diagnostic.range.start.value,
            diagnostic.range.end.value,
            diagnostic.code,
            diagnostic.message,
        ),
    )


class DiagnosticsReporter:
    """Holds the current diagnostic list for each script path.

    Every publish replaces the previous list for that path wholesale.
    """

    def __init__(self) -> None:
        self._by_path: dict[str, tuple[Diagnostic, ...]] = {}

    def publish(self, path: str, diagnostics: Iterable[Diagnostic]) -> None:
        self._by_path[path] = tuple(diagnostics)

    def get_diagnostics(self, path: str) -> list[Diagnostic]:
        return list(self._by_path.get(path, ()))

    def has_errors(self, path: str) -> bool:
        return has_errors(self._by_path.get(path, ()))

    def clear(self, path: str) -> None:
        self._by_path.pop(path, None)

    def paths(self) -> list[str]:
        return sorted(self._by_path)
