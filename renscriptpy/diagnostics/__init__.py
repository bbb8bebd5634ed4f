"""Diagnostics."""

from renscriptpy.diagnostics.codes import (
    KEYWORD_MISSPELLED_SECTION,
    PARSER_EXPECTED_DECLARATION,
    PARSER_INTERNAL_ERROR,
    PARSER_INVALID_SCRIPT_NAME,
    PARSER_INVALID_SECTION_LABEL,
    PARSER_MISSING_DECLARATION,
    PARSER_UNTERMINATED_SECTION,
    SCHEMA_DUPLICATE_PROPERTY,
    SCHEMA_INVALID_BOUND,
    SCHEMA_INVALID_OPTIONS,
    SCHEMA_MIN_GREATER_THAN_MAX,
    SCHEMA_UNKNOWN_OPTION,
    TYPE_UNKNOWN_PROPERTY_TYPE,
    DiagnosticSpec,
    Severity,
)
from renscriptpy.diagnostics.diagnostic import Diagnostic
from renscriptpy.diagnostics.report import (
    DiagnosticsReporter,
    has_errors,
    sort_diagnostics,
)

__all__ = [
    "KEYWORD_MISSPELLED_SECTION",
    "PARSER_EXPECTED_DECLARATION",
    "PARSER_INTERNAL_ERROR",
    "PARSER_INVALID_SCRIPT_NAME",
    "PARSER_INVALID_SECTION_LABEL",
    "PARSER_MISSING_DECLARATION",
    "PARSER_UNTERMINATED_SECTION",
    "SCHEMA_DUPLICATE_PROPERTY",
    "SCHEMA_INVALID_BOUND",
    "SCHEMA_INVALID_OPTIONS",
    "SCHEMA_MIN_GREATER_THAN_MAX",
    "SCHEMA_UNKNOWN_OPTION",
    "TYPE_UNKNOWN_PROPERTY_TYPE",
    "Diagnostic",
    "DiagnosticSpec",
    "DiagnosticsReporter",
    "Severity",
    "has_errors",
    "sort_diagnostics",
]
