"""Property schema differ."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from renscriptpy.ast import PropertyDeclaration

COMPARED_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "prop_type",
    "section",
    "default_value",
    "min",
    "max",
    "description",
)


@dataclass(frozen=True, slots=True)
class ModifiedProperty:
    old: PropertyDeclaration
    new: PropertyDeclaration
    changed_fields: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RenamedProperty:
    old: PropertyDeclaration
    new: PropertyDeclaration

    @property
    def from_name(self) -> str:
        return self.old.name

    @property
    def to_name(self) -> str:
        return self.new.name


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Differences between two property schemas of one script."""

    added: tuple[PropertyDeclaration, ...] = ()
    removed: tuple[PropertyDeclaration, ...] = ()
    modified: tuple[ModifiedProperty, ...] = ()
    renamed: tuple[RenamedProperty, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified or self.renamed)


def changed_fields(old: PropertyDeclaration, new: PropertyDeclaration) -> tuple[str, ...]:
    return tuple(name for name in COMPARED_FIELDS if getattr(old, name) != getattr(new, name))


def diff_properties(
    old_props: Sequence[PropertyDeclaration],
    new_props: Sequence[PropertyDeclaration],
) -> ChangeSet:
    """Compute added/removed/modified/renamed properties, keyed by name.

    Rename detection is a heuristic: exactly one removed and one added
    declaration of the same `prop_type` are paired as a rename. With any other
    counts nothing is paired.
    """
    old_by_name = {prop.name: prop for prop in old_props}
    new_by_name = {prop.name: prop for prop in new_props}

    added = [prop for prop in new_props if prop.name not in old_by_name]
    removed = [prop for prop in old_props if prop.name not in new_by_name]

    modified: list[ModifiedProperty] = []
    for prop in new_props:
        old = old_by_name.get(prop.name)
        if old is None:
            continue
        fields = changed_fields(old, prop)
        if fields:
            modified.append(ModifiedProperty(old=old, new=prop, changed_fields=fields))

    renamed: list[RenamedProperty] = []
    if len(added) == 1 and len(removed) == 1 and added[0].prop_type == removed[0].prop_type:
        renamed.append(RenamedProperty(old=removed[0], new=added[0]))
        added.clear()
        removed.clear()

    return ChangeSet(
        added=tuple(added),
        removed=tuple(removed),
        modified=tuple(modified),
        renamed=tuple(renamed),
    )
