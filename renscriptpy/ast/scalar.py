"""Scalar interpretation helpers for property option values."""

from __future__ import annotations

import re

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d+|\d+\.\d*|\.\d+)$")
_SIGN_GAP_RE = re.compile(r"^([+-])\s+")


def parse_bool(text: str) -> bool | None:
    normalized = text.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def parse_number(text: str) -> int | float | None:
    normalized = _SIGN_GAP_RE.sub(r"\1", text.strip())
    if not normalized:
        return None

    if normalized.count(".") > 1:
        return None

    if _INTEGER_RE.fullmatch(normalized):
        return int(normalized)

    if _FLOAT_RE.fullmatch(normalized):
        return float(normalized)

    return None


def unquote(text: str) -> str | None:
    """Return the contents of a quoted string literal, or None if `text` is not one."""
    stripped = text.strip()
    if len(stripped) < 2:
        return None
    quote = stripped[0]
    if quote not in {'"', "'"} or stripped[-1] != quote:
        return None
    body = stripped[1:-1]
    return re.sub(r"\\(.)", r"\1", body)
