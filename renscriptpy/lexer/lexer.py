"""Lexer."""

from renscriptpy.lexer.tokens import Token, TokenFlags, TokenKind
from renscriptpy.text import TextRange, TextSize, slice_text_range

_SINGLE_CHAR_KINDS: dict[str, TokenKind] = {
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Lexer:
    """Lossless lexer for the inside of a property option block.

    `base_offset` is added to every token range so tokens can be reported
    against the whole script source.
    """

    def __init__(self, source: str, *, base_offset: int = 0) -> None:
        self._source = source
        self._base_offset = base_offset
        self._position = 0
        self._after_newline = False
        self._current_start = 0
        self._current_flags = TokenFlags.NONE

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def next_token(self) -> Token:
        self._current_start = self._position
        self._current_flags = TokenFlags.NONE

        if self.is_eof:
            return Token(TokenKind.EOF, self._range(), self._current_flags)

        kind = self._lex_token()
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK

        if not kind.is_trivia:
            self._after_newline = False

        return Token(kind, self._range(), self._current_flags)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _range(self) -> TextRange:
        return TextRange.new(
            TextSize.from_int(self._base_offset + self._current_start),
            TextSize.from_int(self._base_offset + self._position),
        )

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in {"\r", "\n", "\t", " "}:
            return self._consume_newline_or_whitespaces()

        if ch == '"' or ch == "'":
            return self._lex_string(ch)

        if ch.isdigit() or (ch == "." and self._peek_char().isdigit()):
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        kind = _SINGLE_CHAR_KINDS.get(ch)
        self._advance(1)
        if kind is None:
            return TokenKind.SKIPPED
        return kind

    def _lex_string(self, quote: str) -> TokenKind:
        self._advance(1)
        self._current_flags |= TokenFlags.WAS_QUOTED
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == quote:
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(1)
                if not self.is_eof:
                    self._advance(1)
                continue
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)

        if not closed:
            self._current_flags |= TokenFlags.UNTERMINATED
        return TokenKind.STRING

    def _lex_number(self) -> TokenKind:
        saw_dot = False
        while not self.is_eof:
            ch = self._current_char()
            if ch.isdigit():
                self._advance(1)
                continue
            if ch == "." and not saw_dot:
                saw_dot = True
                self._advance(1)
                continue
            break
        return TokenKind.FLOAT if saw_dot else TokenKind.INT

    def _lex_identifier(self) -> TokenKind:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_":
                self._advance(1)
                continue
            break
        return TokenKind.IDENTIFIER

    def _consume_newline_or_whitespaces(self) -> TokenKind:
        if self._consume_newline():
            self._after_newline = True
            return TokenKind.NEWLINE
        while not self.is_eof and self._current_char() in {" ", "\t"}:
            self._advance(1)
        return TokenKind.WHITESPACE

    def _consume_newline(self) -> bool:
        if self._current_char() == "\n":
            self._advance(1)
            return True
        if self._current_char() == "\r":
            if self._peek_char() == "\n":
                self._advance(2)
            else:
                self._advance(1)
            return True
        return False

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the script source based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)
