"""
Token model for the Monkey programming language.

Defines the closed set of lexical categories produced by the lexer together
with the tables used to classify source text.

Classes:
    TokenType: Enumeration of every token kind. Each member's value is its name,
        so diagnostics can print a kind directly (e.g. "ASSIGN", "INT").
    Token: An immutable (type, literal) pair.

Tables:
    keywords: Maps reserved words to their keyword token kinds.
    token_hashmap: Maps operator and punctuation text to token kinds, including
        the two-character operators `==` and `!=`.

Example:
    >>> lookup_ident("let")
    <TokenType.LET: 'LET'>
    >>> Token(TokenType.INT, "5")
    Token(INT, '5')
"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "ASSIGN"
    PLUS = "PLUS"
    MINUS = "MINUS"
    BANG = "BANG"
    ASTERISK = "ASTERISK"
    SLASH = "SLASH"
    LT = "LT"
    GT = "GT"
    EQ = "EQ"
    NOT_EQ = "NOT_EQ"

    # Delimiters
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type (TokenType): The token's kind.
        literal (str): The source text the token was read from. Empty for EOF.
    """

    type: TokenType
    literal: str

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal!r})"


keywords: dict[str, TokenType] = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

token_hashmap: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# Longest operator in token_hashmap; bounds the lexer's lookahead.
MAX_OPERATOR_LENGTH = max(len(op) for op in token_hashmap)


def lookup_ident(ident: str) -> TokenType:
    """Classifies an identifier as a keyword or a plain IDENT (case-sensitive)."""
    return keywords.get(ident, TokenType.IDENT)


__all__ = [
    "MAX_OPERATOR_LENGTH",
    "Token",
    "TokenType",
    "keywords",
    "lookup_ident",
    "token_hashmap",
]
