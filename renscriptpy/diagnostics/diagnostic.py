"""Diagnostics core types."""

from dataclasses import dataclass

from renscriptpy.diagnostics.codes import Severity
from renscriptpy.text import TextRange


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the script parser.

    `line` is 1-based, `column` is 0-based; both point at `range.start`.
    """

    code: str
    message: str
    range: TextRange
    line: int
    column: int
    severity: Severity = "error"
    suggestion: str | None = None
    hint: str | None = None
    category: str | None = None
