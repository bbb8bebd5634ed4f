"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


PARSER_MISSING_DECLARATION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISSING_DECLARATION",
    message="Missing script declaration.",
    hint="Start the script with `<kind> <Name> {`, e.g. `script Rotator {`.",
    severity="error",
    category="syntax",
)

PARSER_INVALID_SCRIPT_NAME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_INVALID_SCRIPT_NAME",
    message="Invalid script name.",
    hint="Names start with a letter or `_` and contain only letters, digits and `_`.",
    severity="error",
    category="syntax",
)

PARSER_INVALID_SECTION_LABEL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_INVALID_SECTION_LABEL",
    message="Invalid props section label; using `General`.",
    hint="Section labels follow identifier rules, e.g. `props movement {`.",
    severity="warning",
    category="syntax",
)

PARSER_UNTERMINATED_SECTION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNTERMINATED_SECTION",
    message="Unterminated props section.",
    hint="Close the section with `}`. Sections support one level of nested braces.",
    severity="error",
    category="syntax",
)

PARSER_EXPECTED_DECLARATION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_DECLARATION",
    message="Expected a property declaration (`name: type { ... }`).",
    severity="error",
    category="syntax",
)

PARSER_INTERNAL_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_INTERNAL_ERROR",
    message="Script could not be parsed.",
    hint="This is a bug in the script parser; the previous schema is kept.",
    severity="error",
    category="parser",
)

SCHEMA_DUPLICATE_PROPERTY: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCHEMA_DUPLICATE_PROPERTY",
    message="Duplicate property.",
    hint="Keep only one declaration per property name; the first one is used.",
    severity="error",
    category="schema",
)

SCHEMA_MIN_GREATER_THAN_MAX: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCHEMA_MIN_GREATER_THAN_MAX",
    message="`min` is greater than `max`; the values were swapped.",
    severity="warning",
    category="schema",
)

SCHEMA_INVALID_BOUND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCHEMA_INVALID_BOUND",
    message="Bound is not a number and was ignored.",
    severity="warning",
    category="schema",
)

SCHEMA_INVALID_OPTIONS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCHEMA_INVALID_OPTIONS",
    message="`options` must be a list of strings and was ignored.",
    hint='Use `options: ["low", "high"]`.',
    severity="warning",
    category="schema",
)

SCHEMA_UNKNOWN_OPTION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCHEMA_UNKNOWN_OPTION",
    message="Unknown property option was ignored.",
    hint="Supported options: default, min, max, description, options, once.",
    severity="warning",
    category="schema",
)

TYPE_UNKNOWN_PROPERTY_TYPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="TYPE_UNKNOWN_PROPERTY_TYPE",
    message="Unknown property type.",
    hint="Valid property types: number, float, boolean, string, range, select.",
    severity="warning",
    category="type",
)

KEYWORD_MISSPELLED_SECTION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="KEYWORD_MISSPELLED_SECTION",
    message="Misspelled section keyword.",
    severity="error",
    category="keyword",
)
