"""Brace-balanced scanning of `props` sections.

The scanner is regex based and tolerates exactly one level of nested braces
inside a section body (the `{ options }` block of each declaration). Deeper
nesting makes the section unmatched and it is reported as unterminated.
Comments and string contents are masked before scanning so braces inside them
never count.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from renscriptpy.text import TextRange

SECTION_KEYWORD = "props"

_LABEL = r"[^\s{}:]+"

_SECTION_START_RE = re.compile(rf"(?<![\w.]){SECTION_KEYWORD}(?:[ \t]+(?P<label>{_LABEL}))?\s*\{{")
_SECTION_RE = re.compile(
    rf"(?<![\w.]){SECTION_KEYWORD}(?:[ \t]+(?P<label>{_LABEL}))?\s*\{{"
    r"(?P<body>(?:[^{}]|\{[^{}]*\})*)\}"
)


@dataclass(frozen=True, slots=True)
class PropsSection:
    """One `props [label] { body }` block located in script source."""

    range: TextRange
    keyword_range: TextRange
    body_range: TextRange
    label: str | None = None
    label_range: TextRange | None = None


@dataclass(frozen=True, slots=True)
class SectionScan:
    masked_text: str
    sections: tuple[PropsSection, ...]
    unterminated: tuple[TextRange, ...]

    def covers(self, offset: int) -> bool:
        return any(section.range.contains_offset(offset) for section in self.sections)


def mask_source(text: str) -> str:
    """Blank out comments and string contents, keeping offsets and newlines intact."""
    out = list(text)
    index = 0
    length = len(text)
    while index < length:
        ch = text[index]
        nxt = text[index + 1] if index + 1 < length else ""
        if ch == "/" and nxt == "/":
            while index < length and text[index] != "\n":
                out[index] = " "
                index += 1
            continue
        if ch == "/" and nxt == "*":
            end = text.find("*/", index + 2)
            end = length if end == -1 else end + 2
            for pos in range(index, end):
                if text[pos] != "\n":
                    out[pos] = " "
            index = end
            continue
        if ch == '"' or ch == "'":
            index += 1
            while index < length and text[index] not in {ch, "\n"}:
                if text[index] == "\\" and index + 1 < length and text[index + 1] != "\n":
                    out[index] = " "
                    index += 1
                out[index] = " "
                index += 1
            index += 1
            continue
        index += 1
    return "".join(out)


def scan_sections(text: str) -> SectionScan:
    masked = mask_source(text)
    sections: list[PropsSection] = []
    for match in _SECTION_RE.finditer(masked):
        keyword_start = match.start()
        label_range = None
        label = match.group("label")
        if label is not None:
            label_range = TextRange.from_offsets(match.start("label"), match.end("label"))
        sections.append(
            PropsSection(
                range=TextRange.from_offsets(match.start(), match.end()),
                keyword_range=TextRange.from_offsets(keyword_start, keyword_start + len(SECTION_KEYWORD)),
                body_range=TextRange.from_offsets(match.start("body"), match.end("body")),
                label=label,
                label_range=label_range,
            )
        )

    matched_starts = {section.range.start.value for section in sections}
    unterminated: list[TextRange] = []
    for start in _SECTION_START_RE.finditer(masked):
        offset = start.start()
        if offset in matched_starts:
            continue
        if any(section.range.contains_offset(offset) for section in sections):
            continue
        unterminated.append(TextRange.from_offsets(offset, offset + len(SECTION_KEYWORD)))

    return SectionScan(masked_text=masked, sections=tuple(sections), unterminated=tuple(unterminated))


def strip_section_bodies(text: str, placeholder: str = "") -> str:
    """Replace the body of every props section with `placeholder`, leaving all other text untouched."""
    scan = scan_sections(text)
    pieces: list[str] = []
    cursor = 0
    for section in scan.sections:
        body_start = section.body_range.start.value
        body_end = section.body_range.end.value
        pieces.append(text[cursor:body_start])
        pieces.append(placeholder)
        cursor = body_end
    pieces.append(text[cursor:])
    return "".join(pieces)
