from renscriptpy.lexer import Lexer, Token, TokenFlags, TokenKind, token_text
from renscriptpy.text import TextRange


def _significant(tokens: list[Token]) -> list[Token]:
    return [token for token in tokens if not token.kind.is_trivia]


def test_option_block_token_kinds() -> None:
    source = 'default: "a b", min: -5, max: 2.5; options: [x]'
    tokens = _significant(Lexer(source).lex())

    assert [token.kind for token in tokens] == [
        TokenKind.IDENTIFIER,
        TokenKind.COLON,
        TokenKind.STRING,
        TokenKind.COMMA,
        TokenKind.IDENTIFIER,
        TokenKind.COLON,
        TokenKind.MINUS,
        TokenKind.INT,
        TokenKind.COMMA,
        TokenKind.IDENTIFIER,
        TokenKind.COLON,
        TokenKind.FLOAT,
        TokenKind.SEMICOLON,
        TokenKind.IDENTIFIER,
        TokenKind.COLON,
        TokenKind.LBRACKET,
        TokenKind.IDENTIFIER,
        TokenKind.RBRACKET,
        TokenKind.EOF,
    ]
    assert [token_text(source, token) for token in tokens[:3]] == ["default", ":", '"a b"']


def test_lexer_is_lossless() -> None:
    source = " a : 'x' ,\n\tb:{1} ; ? "
    tokens = Lexer(source).lex()

    assert "".join(token_text(source, token) for token in tokens) == source
    assert tokens[-1].kind == TokenKind.EOF
    assert any(token.kind == TokenKind.SKIPPED for token in tokens)


def test_base_offset_shifts_ranges() -> None:
    tokens = Lexer("min: 1", base_offset=10).lex()

    assert tokens[0].range == TextRange.from_offsets(10, 13)
    assert tokens[-1].range == TextRange.from_offsets(16, 16)


def test_string_flags() -> None:
    quoted, escaped, open_string = (
        _significant(Lexer(source).lex())[0] for source in ('"plain"', r"'it\'s'", '"never closed')
    )

    assert quoted.flags & TokenFlags.WAS_QUOTED
    assert not quoted.flags & TokenFlags.UNTERMINATED
    assert escaped.flags & TokenFlags.HAS_ESCAPE
    assert open_string.flags & TokenFlags.UNTERMINATED


def test_string_stops_at_newline() -> None:
    tokens = _significant(Lexer('"abc\nmax').lex())

    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].flags & TokenFlags.UNTERMINATED
    assert tokens[1].kind == TokenKind.IDENTIFIER
    assert tokens[1].has_preceding_line_break()


def test_leading_dot_number_is_float() -> None:
    tokens = _significant(Lexer(".5").lex())
    assert tokens[0].kind == TokenKind.FLOAT


def test_crlf_is_one_newline() -> None:
    tokens = Lexer("a\r\nb").lex()
    assert [token.kind for token in tokens] == [
        TokenKind.IDENTIFIER,
        TokenKind.NEWLINE,
        TokenKind.IDENTIFIER,
        TokenKind.EOF,
    ]
