"""Property schema differ."""

from renscriptpy.schema.differ import (
    COMPARED_FIELDS,
    ChangeSet,
    ModifiedProperty,
    RenamedProperty,
    changed_fields,
    diff_properties,
)

__all__ = [
    "COMPARED_FIELDS",
    "ChangeSet",
    "ModifiedProperty",
    "RenamedProperty",
    "changed_fields",
    "diff_properties",
]
