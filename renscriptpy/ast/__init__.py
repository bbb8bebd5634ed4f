"""Script AST model and scalar helpers."""

from renscriptpy.ast.model import (
    DEFAULT_SECTION,
    Number,
    ObjectKind,
    PropertyDeclaration,
    PropKind,
    PropType,
    ScriptAst,
    ScriptSource,
    UnknownPropType,
    prop_type_from_token,
)
from renscriptpy.ast.scalar import parse_bool, parse_number, unquote

__all__ = [
    "DEFAULT_SECTION",
    "Number",
    "ObjectKind",
    "PropKind",
    "PropType",
    "PropertyDeclaration",
    "ScriptAst",
    "ScriptSource",
    "UnknownPropType",
    "parse_bool",
    "parse_number",
    "prop_type_from_token",
    "unquote",
]
