import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_lexer import EOF_CHAR, Lexer, tokenize
from monkey.monkey_token import Token, TokenType

T = TokenType


def pairs(source: str) -> list[tuple[TokenType, str]]:
    return [(tok.type, tok.literal) for tok in tokenize(source)]


def test_let_statement_tokens() -> None:
    assert tokenize("let five = 5;") == [
        Token(T.LET, "let"),
        Token(T.IDENT, "five"),
        Token(T.ASSIGN, "="),
        Token(T.INT, "5"),
        Token(T.SEMICOLON, ";"),
        Token(T.EOF, ""),
    ]


def test_single_char_tokens() -> None:
    code = "=+-!*/<>,;(){}"
    expected = [
        T.ASSIGN,
        T.PLUS,
        T.MINUS,
        T.BANG,
        T.ASTERISK,
        T.SLASH,
        T.LT,
        T.GT,
        T.COMMA,
        T.SEMICOLON,
        T.LPAREN,
        T.RPAREN,
        T.LBRACE,
        T.RBRACE,
        T.EOF,
    ]
    assert [tok.type for tok in tokenize(code)] == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("==", [(T.EQ, "==")]),
        ("!=", [(T.NOT_EQ, "!=")]),
        ("= =", [(T.ASSIGN, "="), (T.ASSIGN, "=")]),
        ("!!", [(T.BANG, "!"), (T.BANG, "!")]),
        ("===", [(T.EQ, "=="), (T.ASSIGN, "=")]),
        ("!==", [(T.NOT_EQ, "!="), (T.ASSIGN, "=")]),
        ("10 == 10", [(T.INT, "10"), (T.EQ, "=="), (T.INT, "10")]),
    ],
)  # type: ignore[misc]
def test_longest_match_operators(
    source: str, expected: list[tuple[TokenType, str]]
) -> None:
    assert pairs(source) == expected + [(T.EOF, "")]


def test_full_program() -> None:
    source = """let add = fn(x, y) {
  x + y;
};
let result = add(five, ten);
if (5 < 10) {
\treturn true;
} else {
\treturn false;
}
"""
    assert pairs(source) == [
        (T.LET, "let"),
        (T.IDENT, "add"),
        (T.ASSIGN, "="),
        (T.FUNCTION, "fn"),
        (T.LPAREN, "("),
        (T.IDENT, "x"),
        (T.COMMA, ","),
        (T.IDENT, "y"),
        (T.RPAREN, ")"),
        (T.LBRACE, "{"),
        (T.IDENT, "x"),
        (T.PLUS, "+"),
        (T.IDENT, "y"),
        (T.SEMICOLON, ";"),
        (T.RBRACE, "}"),
        (T.SEMICOLON, ";"),
        (T.LET, "let"),
        (T.IDENT, "result"),
        (T.ASSIGN, "="),
        (T.IDENT, "add"),
        (T.LPAREN, "("),
        (T.IDENT, "five"),
        (T.COMMA, ","),
        (T.IDENT, "ten"),
        (T.RPAREN, ")"),
        (T.SEMICOLON, ";"),
        (T.IF, "if"),
        (T.LPAREN, "("),
        (T.INT, "5"),
        (T.LT, "<"),
        (T.INT, "10"),
        (T.RPAREN, ")"),
        (T.LBRACE, "{"),
        (T.RETURN, "return"),
        (T.TRUE, "true"),
        (T.SEMICOLON, ";"),
        (T.RBRACE, "}"),
        (T.ELSE, "else"),
        (T.LBRACE, "{"),
        (T.RETURN, "return"),
        (T.FALSE, "false"),
        (T.SEMICOLON, ";"),
        (T.RBRACE, "}"),
        (T.EOF, ""),
    ]


def test_identifier_with_underscore() -> None:
    assert pairs("_foo_bar") == [(T.IDENT, "_foo_bar"), (T.EOF, "")]


def test_identifier_stops_at_digit() -> None:
    assert pairs("x1") == [(T.IDENT, "x"), (T.INT, "1"), (T.EOF, "")]


def test_keywords_are_case_sensitive() -> None:
    assert pairs("Let") == [(T.IDENT, "Let"), (T.EOF, "")]


def test_negative_number_is_two_tokens() -> None:
    assert pairs("-5") == [(T.MINUS, "-"), (T.INT, "5"), (T.EOF, "")]


@pytest.mark.parametrize("ch", ["@", "#", "$", "?", '"', "é"])  # type: ignore[misc]
def test_unknown_character_is_illegal(ch: str) -> None:
    assert pairs(f"a {ch} b") == [
        (T.IDENT, "a"),
        (T.ILLEGAL, ch),
        (T.IDENT, "b"),
        (T.EOF, ""),
    ]


def test_eof_is_idempotent() -> None:
    lexer = Lexer("x")
    assert lexer.next_token() == Token(T.IDENT, "x")
    for _ in range(5):
        assert lexer.next_token() == Token(T.EOF, "")


def test_empty_input() -> None:
    assert tokenize("") == [Token(T.EOF, "")]


def test_read_position_invariant() -> None:
    lexer = Lexer("let x = 10;")
    assert lexer.read_position == lexer.position + 1
    while lexer.next_token().type != T.EOF:
        assert lexer.read_position == lexer.position + 1
    assert lexer.ch == EOF_CHAR


def test_peek_char_does_not_advance() -> None:
    lexer = Lexer("ab")
    assert lexer.ch == "a"
    assert lexer.peek_char() == "b"
    assert lexer.peek_char(1) == EOF_CHAR
    assert lexer.ch == "a"
    assert lexer.position == 0


def test_iteration_excludes_eof() -> None:
    assert [tok.type for tok in Lexer("1 + 2")] == [T.INT, T.PLUS, T.INT]


@given(st.text(alphabet=" \t\r\n"))  # type: ignore[misc]
def test_whitespace_only_yields_eof(source: str) -> None:
    assert tokenize(source) == [Token(T.EOF, "")]


@given(st.from_regex(r"[0-9]+", fullmatch=True))  # type: ignore[misc]
def test_digit_runs_are_single_int(digits: str) -> None:
    assert tokenize(digits) == [Token(T.INT, digits), Token(T.EOF, "")]


@given(st.text(max_size=50))  # type: ignore[misc]
def test_lexer_never_raises_and_terminates(source: str) -> None:
    tokens = tokenize(source)
    assert tokens[-1] == Token(T.EOF, "")
    assert all(tok.type != T.EOF for tok in tokens[:-1])
    assert all(tok.literal for tok in tokens[:-1])
