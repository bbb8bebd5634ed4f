"""Lexer tokens for property option blocks."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from renscriptpy.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    SKIPPED = 13  # bytes the option grammar has no use for

    # -------------------------
    # Identifiers / literals
    # -------------------------
    IDENTIFIER = 20
    STRING = 21  # single or double quoted
    INT = 22
    FLOAT = 23

    # -------------------------
    # Punctuation / separators
    # -------------------------
    COLON = 40  # :
    SEMICOLON = 41  # ;
    COMMA = 42  # ,
    DOT = 43  # .

    PLUS = 50  # +
    MINUS = 51  # -

    LBRACE = 60  # {
    RBRACE = 61  # }
    LBRACKET = 62  # [
    RBRACKET = 63  # ]
    LPAREN = 64  # (
    RPAREN = 65  # )

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
        )

    @property
    def opens_group(self) -> bool:
        return self in (TokenKind.LBRACE, TokenKind.LBRACKET, TokenKind.LPAREN)

    @property
    def closes_group(self) -> bool:
        return self in (TokenKind.RBRACE, TokenKind.RBRACKET, TokenKind.RPAREN)


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0
    WAS_QUOTED = 1 << 1
    HAS_ESCAPE = 1 << 2
    UNTERMINATED = 1 << 3


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)
