"""RenScript parser (header, props sections, property declarations)."""

from renscriptpy.parser.context import ParseContext, make_diagnostic
from renscriptpy.parser.property_options import (
    KNOWN_OPTION_KEYS,
    PropertyOptions,
    parse_property_options,
)
from renscriptpy.parser.script import IDENTIFIER_RE, KEYWORD_TYPOS, parse_script
from renscriptpy.parser.sections import (
    SECTION_KEYWORD,
    PropsSection,
    SectionScan,
    mask_source,
    scan_sections,
    strip_section_bodies,
)

__all__ = [
    "IDENTIFIER_RE",
    "KEYWORD_TYPOS",
    "KNOWN_OPTION_KEYS",
    "SECTION_KEYWORD",
    "ParseContext",
    "PropertyOptions",
    "PropsSection",
    "SectionScan",
    "make_diagnostic",
    "mask_source",
    "parse_property_options",
    "parse_script",
    "scan_sections",
    "strip_section_bodies",
]
