"""Typed script AST produced by the script parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

from renscriptpy.diagnostics import Diagnostic
from renscriptpy.text import TextRange

DEFAULT_SECTION = "General"


class ObjectKind(StrEnum):
    """Script header kinds (`script Name`, `mesh Name`, ...)."""

    SCRIPT = "script"
    MESH = "mesh"
    CAMERA = "camera"
    LIGHT = "light"
    SCENE = "scene"
    TRANSFORM = "transform"


class PropKind(StrEnum):
    """Closed set of property types understood by property inspectors."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    FLOAT = "float"
    STRING = "string"
    RANGE = "range"
    SELECT = "select"


@dataclass(frozen=True, slots=True)
class UnknownPropType:
    """Fallback for a type token outside `PropKind`; keeps the raw token."""

    raw: str

    def __str__(self) -> str:
        return self.raw


PropType: TypeAlias = PropKind | UnknownPropType


def prop_type_from_token(raw: str) -> PropType:
    try:
        return PropKind(raw.lower())
    except ValueError:
        return UnknownPropType(raw)


Number: TypeAlias = int | float


@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    """One `name: type { options }` entry of a props section.

    `range` covers the declaration name and does not take part in equality.
    """

    name: str
    prop_type: PropType
    section: str = DEFAULT_SECTION
    default_value: str | None = None
    min: Number | None = None
    max: Number | None = None
    description: str | None = None
    options: tuple[str, ...] | None = None
    once: bool = False
    range: TextRange | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class ScriptAst:
    """Immutable result of one parse; compared, never mutated, by consumers."""

    name: str = ""
    object_kind: ObjectKind = ObjectKind.SCRIPT
    properties: tuple[PropertyDeclaration, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    is_empty: bool = False
    methods: tuple[str, ...] = ()

    def property_named(self, name: str) -> PropertyDeclaration | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    @property
    def sections(self) -> tuple[str, ...]:
        """Section labels in first-seen order."""
        seen: dict[str, None] = {}
        for prop in self.properties:
            seen.setdefault(prop.section, None)
        return tuple(seen)


@dataclass(frozen=True, slots=True)
class ScriptSource:
    """One edit's worth of script text."""

    path: str
    text: str
    language: str = "renscript"
