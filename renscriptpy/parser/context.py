"""Per-parse state shared by the script parser helpers."""

from __future__ import annotations

from renscriptpy.diagnostics import Diagnostic, DiagnosticSpec
from renscriptpy.lexer import Token, token_text
from renscriptpy.text import TextRange, line_column


class ParseContext:
    """Holds the source being parsed and collects diagnostics against it.

    A fresh context is created for every parse; nothing is carried between calls.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.diagnostics: list[Diagnostic] = []

    def text_of(self, token: Token) -> str:
        return token_text(self.source, token)

    def report(
        self,
        spec: DiagnosticSpec,
        start: int,
        end: int,
        *,
        message: str | None = None,
        suggestion: str | None = None,
        hint: str | None = None,
    ) -> Diagnostic:
        diagnostic = make_diagnostic(
            self.source,
            spec,
            start,
            end,
            message=message,
            suggestion=suggestion,
            hint=hint,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic


def make_diagnostic(
    source: str,
    spec: DiagnosticSpec,
    start: int,
    end: int,
    *,
    message: str | None = None,
    suggestion: str | None = None,
    hint: str | None = None,
) -> Diagnostic:
    line, column = line_column(source, start)
    return Diagnostic(
        code=spec.code,
        message=message if message is not None else spec.message,
        range=TextRange.from_offsets(start, max(start, end)),
        line=line,
        column=column,
        severity=spec.severity,
        suggestion=suggestion,
        hint=hint if hint is not None else spec.hint,
        category=spec.category,
    )
