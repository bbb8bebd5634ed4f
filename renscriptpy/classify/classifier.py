"""Metadata-only vs structural edit classification."""

from __future__ import annotations

from enum import StrEnum

from renscriptpy.parser import strip_section_bodies


class ChangeKind(StrEnum):
    METADATA_ONLY = "metadata_only"
    STRUCTURAL = "structural"


def classify_change(old_source: str, new_source: str) -> ChangeKind:
    """Classify an edit by comparing both sources with their props bodies blanked out.

    Any difference outside a props section body, whitespace included, is
    structural.
    """
    if strip_section_bodies(old_source) == strip_section_bodies(new_source):
        return ChangeKind.METADATA_ONLY
    return ChangeKind.STRUCTURAL
