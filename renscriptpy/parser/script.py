"""Fault-tolerant RenScript parser.

Only the script header, the `props` sections and the lifecycle block names are
parsed; behaviour code is left to the runtime. Every problem becomes a
Diagnostic on the returned ScriptAst and `parse_script` never raises.
"""

from __future__ import annotations

from collections.abc import Iterator
import difflib
import logging
import re
from typing import Final

from renscriptpy.ast import (
    DEFAULT_SECTION,
    ObjectKind,
    PropertyDeclaration,
    PropKind,
    ScriptAst,
    UnknownPropType,
    prop_type_from_token,
)
from renscriptpy.diagnostics import (
    KEYWORD_MISSPELLED_SECTION,
    PARSER_EXPECTED_DECLARATION,
    PARSER_INTERNAL_ERROR,
    PARSER_INVALID_SCRIPT_NAME,
    PARSER_INVALID_SECTION_LABEL,
    PARSER_MISSING_DECLARATION,
    PARSER_UNTERMINATED_SECTION,
    SCHEMA_DUPLICATE_PROPERTY,
    TYPE_UNKNOWN_PROPERTY_TYPE,
    sort_diagnostics,
)
from renscriptpy.parser.context import ParseContext, make_diagnostic
from renscriptpy.parser.property_options import PropertyOptions, parse_property_options
from renscriptpy.parser.sections import SECTION_KEYWORD, PropsSection, SectionScan, scan_sections
from renscriptpy.text import TextRange, line_column

logger = logging.getLogger("renscriptpy")

IDENTIFIER_RE: Final = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

KEYWORD_TYPOS: Final[tuple[str, ...]] = (
    "pops",
    "porps",
    "prpos",
    "prosp",
    "rpops",
    "ppros",
    "prop",
    "prps",
    "pros",
)

_KINDS = "|".join(kind.value for kind in ObjectKind)
_HEADER_RE = re.compile(rf"(?P<kind>{_KINDS})(?!\w)[ \t]*(?P<name>[^\s{{]*)")
_DECLARATION_RE = re.compile(
    r"(?P<name>[A-Za-z_]\w*)[ \t]*:[ \t]*(?P<type>[^\s{}:,;]*)\s*(?P<options>\{[^{}]*\})?"
)
_LIFECYCLE_RE = re.compile(r"(?<![\w.])(?P<method>start|update|destroy|once)\s*(?:\([^()]*\))?\s*\{")
_KEYWORD_TYPO_RE = re.compile(
    rf"(?<![\w.])(?P<typo>{'|'.join(KEYWORD_TYPOS)})(?:[ \t]+[A-Za-z_][A-Za-z0-9_]*)?\s*\{{"
)
_SEPARATOR_CHARS = frozenset(" \t\r\n,;")
_SNIPPET_LIMIT = 40


def parse_script(text: str) -> ScriptAst:
    """Parse RenScript source into a fresh ScriptAst."""
    if not text.strip():
        return ScriptAst(is_empty=True)

    try:
        return _parse_script(text)
    except Exception:
        logger.exception("Script parser failed on %d characters of input", len(text))
        return ScriptAst(diagnostics=(make_diagnostic(text, PARSER_INTERNAL_ERROR, 0, min(len(text), 1)),))


def _parse_script(text: str) -> ScriptAst:
    ctx = ParseContext(text)
    scan = scan_sections(text)

    name, object_kind = _parse_header(ctx, scan)
    properties = _parse_sections(ctx, scan)

    for keyword_range in scan.unterminated:
        ctx.report(PARSER_UNTERMINATED_SECTION, keyword_range.start.value, keyword_range.end.value)

    _check_keyword_typos(ctx, scan)

    return ScriptAst(
        name=name,
        object_kind=object_kind,
        properties=tuple(properties),
        diagnostics=tuple(sort_diagnostics(ctx.diagnostics)),
        is_empty=False,
        methods=_lifecycle_methods(scan),
    )


def _parse_header(ctx: ParseContext, scan: SectionScan) -> tuple[str, ObjectKind]:
    masked = scan.masked_text
    pos = _skip_leading_sections(scan)
    match = _HEADER_RE.match(masked, pos)
    if match is None:
        ctx.report(
            PARSER_MISSING_DECLARATION,
            pos,
            _word_end(masked, pos),
            message=f"Missing script declaration; expected one of {', '.join(kind.value for kind in ObjectKind)} "
            "followed by a name.",
        )
        return "", ObjectKind.SCRIPT

    object_kind = ObjectKind(match.group("kind"))
    name_start, name_end = match.span("name")
    name = ctx.source[name_start:name_end]
    if not name:
        ctx.report(
            PARSER_INVALID_SCRIPT_NAME,
            match.start("kind"),
            match.end("kind"),
            message=f"Missing name after `{object_kind.value}`.",
        )
    elif IDENTIFIER_RE.fullmatch(name) is None:
        ctx.report(
            PARSER_INVALID_SCRIPT_NAME,
            name_start,
            name_end,
            message=f"Invalid script name `{name}`.",
        )
    return name, object_kind


def _skip_leading_sections(scan: SectionScan) -> int:
    # Property sections may precede the header (external props).
    masked = scan.masked_text
    starts = {section.range.start.value: section for section in scan.sections}
    pos = _skip_whitespace(masked, 0, len(masked))
    while pos in starts:
        pos = _skip_whitespace(masked, starts[pos].range.end.value, len(masked))
    return pos


def _parse_sections(ctx: ParseContext, scan: SectionScan) -> list[PropertyDeclaration]:
    properties: list[PropertyDeclaration] = []
    first_line_by_name: dict[str, int] = {}

    for section in scan.sections:
        label = _section_label(ctx, section)
        for prop, name_range in _parse_section_body(ctx, scan.masked_text, section, label):
            existing_line = first_line_by_name.get(prop.name)
            if existing_line is None:
                first_line_by_name[prop.name], _ = line_column(ctx.source, name_range.start.value)
                properties.append(prop)
                continue

            ctx.report(
                SCHEMA_DUPLICATE_PROPERTY,
                name_range.start.value,
                name_range.end.value,
                message=f"Duplicate property `{prop.name}`; the declaration on line {existing_line} is kept.",
            )

    return properties


def _section_label(ctx: ParseContext, section: PropsSection) -> str:
    if section.label_range is None:
        return DEFAULT_SECTION
    label = ctx.source[section.label_range.start.value : section.label_range.end.value]
    if IDENTIFIER_RE.fullmatch(label):
        return label
    ctx.report(
        PARSER_INVALID_SECTION_LABEL,
        section.label_range.start.value,
        section.label_range.end.value,
        message=f"Invalid props section label `{label}`; using `{DEFAULT_SECTION}`.",
    )
    return DEFAULT_SECTION


def _parse_section_body(
    ctx: ParseContext,
    masked: str,
    section: PropsSection,
    label: str,
) -> Iterator[tuple[PropertyDeclaration, TextRange]]:
    end = section.body_range.end.value
    pos = section.body_range.start.value
    while True:
        pos = _skip_separators(masked, pos, end)
        if pos >= end:
            return

        match = _DECLARATION_RE.match(masked, pos, end)
        if match is None:
            stop = _recover(masked, pos, end)
            snippet = ctx.source[pos:stop].strip()
            if len(snippet) > _SNIPPET_LIMIT:
                snippet = snippet[:_SNIPPET_LIMIT] + "..."
            ctx.report(
                PARSER_EXPECTED_DECLARATION,
                pos,
                pos + len(ctx.source[pos:stop].rstrip()),
                message=f"Expected a property declaration (`name: type {{ ... }}`), found `{snippet}`.",
            )
            pos = stop
            continue

        yield _declaration(ctx, match, label), TextRange.from_offsets(*match.span("name"))
        pos = match.end()


def _declaration(ctx: ParseContext, match: re.Match[str], section: str) -> PropertyDeclaration:
    name = match.group("name")
    type_start, type_end = match.span("type")
    type_raw = ctx.source[type_start:type_end]
    prop_type = prop_type_from_token(type_raw)

    if isinstance(prop_type, UnknownPropType):
        close = difflib.get_close_matches(type_raw.lower(), [kind.value for kind in PropKind], n=1)
        if type_raw:
            message = f"Unknown property type `{type_raw}` for `{name}`."
        else:
            message = f"Property `{name}` has no type."
        ctx.report(
            TYPE_UNKNOWN_PROPERTY_TYPE,
            type_start if type_raw else match.start("name"),
            type_end if type_raw else match.end("name"),
            message=message,
            suggestion=close[0] if close else None,
        )

    options = PropertyOptions()
    if match.group("options") is not None:
        options_start, options_end = match.span("options")
        options = parse_property_options(ctx, options_start + 1, options_end - 1)

    return PropertyDeclaration(
        name=name,
        prop_type=prop_type,
        section=section,
        default_value=options.default_value,
        min=options.min,
        max=options.max,
        description=options.description,
        options=options.options,
        once=options.once,
        range=TextRange.from_offsets(*match.span("name")),
    )


def _check_keyword_typos(ctx: ParseContext, scan: SectionScan) -> None:
    for match in _KEYWORD_TYPO_RE.finditer(scan.masked_text):
        if scan.covers(match.start()):
            continue
        typo = match.group("typo")
        ctx.report(
            KEYWORD_MISSPELLED_SECTION,
            match.start("typo"),
            match.end("typo"),
            message=f"Unknown keyword `{typo}`; did you mean `{SECTION_KEYWORD}`?",
            suggestion=SECTION_KEYWORD,
        )


def _lifecycle_methods(scan: SectionScan) -> tuple[str, ...]:
    return tuple(
        match.group("method")
        for match in _LIFECYCLE_RE.finditer(scan.masked_text)
        if not scan.covers(match.start())
    )


def _recover(masked: str, pos: int, end: int) -> int:
    """Skip to the end of the current line, or past the option block that starts on it."""
    depth = 0
    index = pos
    while index < end:
        ch = masked[index]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(0, depth - 1)
            if depth == 0:
                return index + 1
        elif ch == "\n" and depth == 0:
            return index + 1
        index += 1
    return end


def _skip_separators(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos] in _SEPARATOR_CHARS:
        pos += 1
    return pos


def _skip_whitespace(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos].isspace():
        pos += 1
    return pos


def _word_end(text: str, pos: int) -> int:
    end = pos
    while end < len(text) and not text[end].isspace() and text[end] != "{":
        end += 1
    return end
