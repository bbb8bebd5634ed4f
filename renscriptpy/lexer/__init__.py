"""Lexer."""

from renscriptpy.lexer.lexer import Lexer, token_text
from renscriptpy.lexer.tokens import Token, TokenFlags, TokenKind

__all__ = [
    "Lexer",
    "Token",
    "TokenFlags",
    "TokenKind",
    "token_text",
]
