"""
Lexical analyzer for the Monkey programming language.

Converts raw source text into a demand-driven stream of tokens.

Classes:
    Lexer: Single-pass, non-backtracking scanner exposing one character of lookahead.

Features:
    - Skips whitespace (space, tab, newline, carriage return)
    - Longest-match recognition of operators (`==` over `=`, `!=` over `!`)
    - Recognizes:
        * Identifiers and keywords
        * Decimal integer literals (no sign; `-5` is a prefix expression)
        * Operators and punctuation
    - Any other character becomes an ILLEGAL token; the lexer never raises.
    - Once the input is exhausted, every call returns the same EOF token.

Example:
    >>> lexer = Lexer("let five = 5;")
    >>> lexer.next_token()
    Token(LET, 'let')

Exports:
    - Lexer
    - tokenize
"""

from collections.abc import Iterator

from monkey.monkey_token import (
    MAX_OPERATOR_LENGTH,
    Token,
    TokenType,
    lookup_ident,
    token_hashmap,
)

# End-of-input marker held in `Lexer.ch`; never a valid source character.
EOF_CHAR = ""


def is_letter(ch: str) -> bool:
    """Returns True for ASCII letters and underscore, the characters of an identifier."""
    return ch == "_" or "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_digit(ch: str) -> bool:
    """Returns True for ASCII decimal digits."""
    return "0" <= ch <= "9"


class Lexer:
    """Lexical analyzer for the Monkey language.

    Attributes:
        input (str): The source text being scanned.
        position (int): Index of the current character (`ch`).
        read_position (int): Index of the next character to read. Always
            `position + 1` once the lexer is constructed.
        ch (str): The current character, or `EOF_CHAR` past the end of input.
    """

    def __init__(self, source: str) -> None:
        self.input = source
        self.position = 0
        self.read_position = 0
        self.ch = EOF_CHAR
        self.read_char()

    def read_char(self) -> None:
        """Advances one character, setting `ch` to the end-marker past the input."""
        if self.read_position >= len(self.input):
            self.ch = EOF_CHAR
        else:
            self.ch = self.input[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self, offset: int = 0) -> str:
        """Returns the character `offset` places after `ch` without consuming it.

        Returns:
            str: The upcoming character, or `EOF_CHAR` if out of bounds.
        """
        index = self.read_position + offset
        if index >= len(self.input):
            return EOF_CHAR
        return self.input[index]

    def skip_whitespace(self) -> None:
        """Skips spaces, tabs, newlines and carriage returns."""
        while self.ch in (" ", "\t", "\n", "\r"):
            self.read_char()

    def match_operator(self) -> Token | None:
        """Matches the longest operator or delimiter starting at `ch`.

        Returns:
            Token | None: The matched token (input consumed), or None if `ch`
                does not start any operator.
        """
        match: str | None = None
        candidate = self.ch
        for i in range(MAX_OPERATOR_LENGTH):
            if i > 0:
                ch = self.peek_char(i - 1)
                if ch == EOF_CHAR:
                    break
                candidate += ch
            if candidate in token_hashmap:
                match = candidate

        if match is None:
            return None
        for _ in match:
            self.read_char()
        return Token(token_hashmap[match], match)

    def read_identifier(self) -> str:
        """Consumes a maximal run of identifier characters.

        Returns:
            str: The identifier or keyword text.
        """
        start = self.position
        while is_letter(self.ch):
            self.read_char()
        return self.input[start : self.position]

    def read_number(self) -> str:
        """Consumes a maximal run of decimal digits.

        Returns:
            str: The digits, unsigned and unconverted.
        """
        start = self.position
        while is_digit(self.ch):
            self.read_char()
        return self.input[start : self.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token.

        Returns:
            Token: The next token. After the end of input this is always
                `Token(EOF, "")`.
        """
        self.skip_whitespace()

        if self.ch == EOF_CHAR:
            return Token(TokenType.EOF, "")

        # 1. Identifier or keyword
        if is_letter(self.ch):
            ident = self.read_identifier()
            return Token(lookup_ident(ident), ident)

        # 2. Integer
        if is_digit(self.ch):
            return Token(TokenType.INT, self.read_number())

        # 3. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        ch = self.ch
        self.read_char()
        return Token(TokenType.ILLEGAL, ch)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to, but not including, EOF."""
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely, returning every token including the final EOF."""
    tokens = list(Lexer(source))
    tokens.append(Token(TokenType.EOF, ""))
    return tokens


__all__ = ["EOF_CHAR", "Lexer", "tokenize"]
