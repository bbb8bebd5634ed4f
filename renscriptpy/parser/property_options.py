"""Tolerant parsing of a declaration's `{ key: value, ... }` option block."""

from __future__ import annotations

from dataclasses import dataclass, field

from renscriptpy.ast import Number, parse_bool, parse_number, unquote
from renscriptpy.diagnostics import (
    SCHEMA_INVALID_BOUND,
    SCHEMA_INVALID_OPTIONS,
    SCHEMA_MIN_GREATER_THAN_MAX,
    SCHEMA_UNKNOWN_OPTION,
)
from renscriptpy.lexer import Lexer, Token, TokenFlags, TokenKind
from renscriptpy.parser.context import ParseContext

KNOWN_OPTION_KEYS: frozenset[str] = frozenset({"default", "min", "max", "description", "options", "once"})

_SEPARATORS = (TokenKind.COMMA, TokenKind.SEMICOLON, TokenKind.NEWLINE)


@dataclass(frozen=True, slots=True)
class OptionEntry:
    key: str
    key_token: Token
    value: tuple[Token, ...]


@dataclass(slots=True)
class PropertyOptions:
    default_value: str | None = None
    min: Number | None = None
    max: Number | None = None
    description: str | None = None
    options: tuple[str, ...] | None = None
    once: bool = False
    entries: list[OptionEntry] = field(default_factory=list)


def parse_property_options(ctx: ParseContext, start: int, end: int) -> PropertyOptions:
    """Parse the text between an option block's braces (`start`..`end` in script offsets)."""
    result = PropertyOptions()
    tokens = [
        token
        for token in Lexer(ctx.source[start:end], base_offset=start).lex()
        if token.kind != TokenKind.WHITESPACE
    ]

    index = 0
    while tokens[index].kind != TokenKind.EOF:
        token = tokens[index]
        if token.kind in _SEPARATORS:
            index += 1
            continue

        colon_index = _skip_newlines(tokens, index + 1)
        if token.kind != TokenKind.IDENTIFIER or tokens[colon_index].kind != TokenKind.COLON:
            stop = _value_end(tokens, index)
            last = tokens[max(index, stop - 1)]
            ctx.report(
                SCHEMA_UNKNOWN_OPTION,
                token.range.start.value,
                last.range.end.value,
                message=f"Expected `key: value` in property options, found `{ctx.text_of(token)}`.",
            )
            index = max(stop, index + 1)
            continue

        value_start = _skip_newlines(tokens, colon_index + 1)
        value_end = _value_end(tokens, value_start)
        result.entries.append(
            OptionEntry(
                key=ctx.text_of(token),
                key_token=token,
                value=tuple(tokens[value_start:value_end]),
            )
        )
        index = value_end

    for entry in result.entries:
        _apply_entry(ctx, result, entry)

    if result.min is not None and result.max is not None and result.min > result.max:
        low, high = result.max, result.min
        ctx.report(
            SCHEMA_MIN_GREATER_THAN_MAX,
            start,
            end,
            message=f"`min` ({_format_number(result.min)}) is greater than `max` ({_format_number(result.max)}); "
            f"using min={_format_number(low)}, max={_format_number(high)}.",
        )
        result.min, result.max = low, high

    return result


def _apply_entry(ctx: ParseContext, result: PropertyOptions, entry: OptionEntry) -> None:
    raw = _raw_value(ctx, entry.value)
    key_start = entry.key_token.range.start.value
    key_end = entry.value[-1].range.end.value if entry.value else entry.key_token.range.end.value

    match entry.key:
        case "default":
            if raw:
                result.default_value = _string_or_raw(entry.value, raw)
        case "min" | "max":
            number = parse_number(raw)
            if number is None:
                ctx.report(
                    SCHEMA_INVALID_BOUND,
                    key_start,
                    key_end,
                    message=f"`{entry.key}` value `{raw}` is not a number and was ignored.",
                )
            elif entry.key == "min":
                result.min = number
            else:
                result.max = number
        case "description":
            if raw:
                result.description = _string_or_raw(entry.value, raw)
        case "options":
            options = _string_list(ctx, entry.value)
            if options is None:
                ctx.report(SCHEMA_INVALID_OPTIONS, key_start, key_end)
            else:
                result.options = options
        case "once":
            result.once = parse_bool(raw) is True
        case _:
            ctx.report(
                SCHEMA_UNKNOWN_OPTION,
                key_start,
                entry.key_token.range.end.value,
                message=f"Unknown property option `{entry.key}` was ignored.",
                hint=f"Supported options: {', '.join(sorted(KNOWN_OPTION_KEYS))}.",
            )


def _skip_newlines(tokens: list[Token], index: int) -> int:
    while tokens[index].kind == TokenKind.NEWLINE:
        index += 1
    return index


def _value_end(tokens: list[Token], index: int) -> int:
    depth = 0
    while tokens[index].kind != TokenKind.EOF:
        kind = tokens[index].kind
        if kind.opens_group:
            depth += 1
        elif kind.closes_group:
            depth = max(0, depth - 1)
        elif depth == 0 and kind in _SEPARATORS:
            break
        index += 1
    return index


def _raw_value(ctx: ParseContext, value: tuple[Token, ...]) -> str:
    if not value:
        return ""
    return ctx.source[value[0].range.start.value : value[-1].range.end.value].strip()


def _string_or_raw(value: tuple[Token, ...], raw: str) -> str:
    if len(value) == 1 and value[0].kind == TokenKind.STRING:
        unquoted = unquote(raw)
        if unquoted is not None:
            return unquoted
    return raw


def _string_list(ctx: ParseContext, value: tuple[Token, ...]) -> tuple[str, ...] | None:
    items = [token for token in value if token.kind != TokenKind.NEWLINE]
    if len(items) < 2 or items[0].kind != TokenKind.LBRACKET or items[-1].kind != TokenKind.RBRACKET:
        return None

    strings: list[str] = []
    expect_item = True
    for token in items[1:-1]:
        if token.kind == TokenKind.COMMA:
            if expect_item:
                return None
            expect_item = True
            continue
        if not expect_item or token.kind != TokenKind.STRING or token.flags & TokenFlags.UNTERMINATED:
            return None
        unquoted = unquote(ctx.text_of(token))
        if unquoted is None:
            return None
        strings.append(unquoted)
        expect_item = False
    return tuple(strings)


def _format_number(value: Number) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)
