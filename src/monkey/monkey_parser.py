"""
Monkey Language Parser

Parses the Monkey token stream into an abstract syntax tree (AST).

Statements are parsed by recursive descent. Expressions are parsed by
operator-precedence (Pratt) parsing: every token kind that can start an
expression has a prefix parse function, every token kind that can continue
one has an infix parse function, and the `precedences` table decides when an
infix operator binds to the expression on its left.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * `<expr>;` (the trailing `;` is optional)
    * Blocks: `{ <stmt>* }`

- Expressions:
    * Identifiers, integer literals, `true` / `false`
    * Prefix operators: `-x`, `!x`
    * Infix operators: `+ - * / == != < >` (left-associative)
    * Grouping: `(a + b) * c`
    * Conditionals: `if (<cond>) { ... } else { ... }`
    * Function literals: `fn(x, y) { ... }`
    * Calls: `add(1, 2 * 3)`

Parser Behavior
---------------
- Reads tokens on demand from a `Lexer`, keeping exactly two tokens of lookahead
  (`cur_token` and `peek_token`).
- Never raises on bad or deeply nested input. Each problem is appended to `errors` and the
  parser continues with the next statement, so a single pass reports every
  error it can find.
- A construct that could not be built is left as None in the tree.

Entry Points
------------
- `Parser.parse_program()`: Parse the whole token stream into a `Program`.
- `parse()`: Lex and parse a source string; optionally raise `ParseError`.

Example
-------
>>> parser = Parser(Lexer("let x = 1 + 2 * 3;"))
>>> program = parser.parse_program()
>>> str(program), parser.errors
('let x = (1 + (2 * 3));', [])
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Optional

from monkey.monkey_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_errors import ParseError
from monkey.monkey_lexer import Lexer
from monkey.monkey_object import INT64_MAX, INT64_MIN
from monkey.monkey_token import Token, TokenType

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Optional[Expression]], Optional[Expression]]


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X)


precedences: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}

# Maximum number of nested `parse_expression` calls before an expression is rejected.
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Monkey Parser Class

    Builds a `Program` from the tokens of a single source unit. A parser is
    constructed once per source, primed with two tokens, and drained by one
    call to `parse_program()`. Calling `parse_program()` again once the input
    is exhausted returns an empty `Program`.

    Attributes
    ----------
    lexer : Lexer
        Token source, read one token at a time.
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token after `cur_token`.
    errors : list[str]
        Every diagnostic recorded so far, in order. Empty after a clean parse.
    depth : int
        Number of `parse_expression` calls currently active.
    prefix_parse_fns : dict[TokenType, PrefixParseFn]
        Handlers for tokens that start an expression.
    infix_parse_fns : dict[TokenType, InfixParseFn]
        Handlers for tokens that continue an expression given its left side.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []
        self.depth = 0

        self.cur_token = Token(TokenType.EOF, "")
        self.peek_token = Token(TokenType.EOF, "")

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)

        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {}
        for tok_type in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.SLASH,
            TokenType.ASTERISK,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        ):
            self.register_infix(tok_type, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)

        # Read two tokens so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    def register_prefix(self, token_type: TokenType, fn: PrefixParseFn) -> None:
        """Registers the handler used when `token_type` starts an expression.

        Args:
            token_type (TokenType): The token kind to dispatch on.
            fn (PrefixParseFn): Zero-argument handler called with `cur_token`
                on the token; replaces any existing handler.
        """
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type: TokenType, fn: InfixParseFn) -> None:
        """Registers the handler used when `token_type` follows an expression.

        Args:
            token_type (TokenType): The operator token kind to dispatch on.
            fn (InfixParseFn): Handler taking the left-hand expression. The
                token kind should also have an entry in `precedences`.
        """
        self.infix_parse_fns[token_type] = fn

    # Token window

    def next_token(self) -> None:
        """Shifts the window: `peek_token` becomes current and a new token is read."""
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TokenType) -> bool:
        """Returns True if the current token has the given type."""
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: TokenType) -> bool:
        """Returns True if the next token has the given type."""
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advances if the next token has the given type, else records an error.

        Returns:
            bool: True if the parser advanced onto a token of `token_type`.
        """
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        """Returns the binding power of the next token (LOWEST if it is not an operator)."""
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        """Returns the binding power of the current token (LOWEST if it is not an operator)."""
        return precedences.get(self.cur_token.type, Precedence.LOWEST)

    # Diagnostics

    def peek_error(self, token_type: TokenType) -> None:
        """Records that the next token was not the expected `token_type`."""
        self.errors.append(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: TokenType) -> None:
        """Records that no expression can start with a token of `token_type`."""
        self.errors.append(f"no prefix parse function for {token_type} found")

    # Statements

    def parse_program(self) -> Program:
        """Parse every remaining statement into a `Program`.

        Returns:
            Program: The parsed statements. Statements that failed to parse are
                omitted; their diagnostics are in `errors`.
        """
        program = Program()
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        """Dispatch on the current token: `let`, `return`, or an expression statement.

        Returns:
            Statement | None: The statement, or None if it could not be built.
        """
        if self.cur_token.type == TokenType.LET:
            return self.parse_let_statement()
        if self.cur_token.type == TokenType.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        """Parse `let <ident> = <expr>;`, leaving `cur_token` on the terminator."""
        let_tok = self.cur_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_to_statement_end()

        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        """Parse `return <expr>;`, leaving `cur_token` on the terminator.

        Returns:
            ReturnStatement: Always built; `value` is None if the expression failed.
        """
        return_tok = self.cur_token

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_to_statement_end()

        return ReturnStatement(return_tok, value)

    def skip_to_statement_end(self) -> None:
        """Discard trailing tokens up to and including the statement's `;`.

        Stops short of a `}` so a final unterminated statement inside a block
        does not swallow the block's closing brace.
        """
        while not (
            self.peek_token_is(TokenType.SEMICOLON)
            or self.peek_token_is(TokenType.RBRACE)
            or self.peek_token_is(TokenType.EOF)
        ):
            self.next_token()
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

    def parse_expression_statement(self) -> ExpressionStatement | None:
        """Parse a bare expression used as a statement; the trailing `;` is optional.

        Returns:
            ExpressionStatement | None: None if the expression could not be built.
        """
        stmt_tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if expression is None:
            return None
        return ExpressionStatement(stmt_tok, expression)

    def parse_block_statement(self) -> BlockStatement:
        """Parse `{ <stmt>* }` starting on the `{`; `cur_token` ends on the `}`."""
        block = BlockStatement(self.cur_token)
        self.next_token()

        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(
            TokenType.EOF
        ):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()

        if self.cur_token_is(TokenType.EOF):
            self.errors.append(
                f"unterminated block statement: expected {TokenType.RBRACE}, "
                f"got {TokenType.EOF} instead"
            )
        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        """Pratt loop: parse a prefix, then fold infix operators that bind tighter
        than `precedence` into the left-hand side.

        Args:
            precedence (Precedence): Binding power of the operator to the left;
                only operators binding strictly tighter are folded here.

        Returns:
            Expression | None: The expression, or None if no prefix handler
                exists for the current token or nesting exceeds `MAX_NESTING_DEPTH`.
        """
        if self.depth >= MAX_NESTING_DEPTH:
            self.errors.append(
                f"expression nested too deeply (limit {MAX_NESTING_DEPTH})"
            )
            return None

        self.depth += 1
        try:
            prefix = self.prefix_parse_fns.get(self.cur_token.type)
            if prefix is None:
                self.no_prefix_parse_fn_error(self.cur_token.type)
                return None
            left = prefix()

            while (
                not self.peek_token_is(TokenType.SEMICOLON)
                and precedence < self.peek_precedence()
            ):
                infix = self.infix_parse_fns.get(self.peek_token.type)
                if infix is None:
                    return left
                self.next_token()
                left = infix(left)

            return left
        finally:
            self.depth -= 1

    def parse_identifier(self) -> Expression:
        """Builds an `Identifier` from the current token."""
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression:
        """Integer literal; on failure records an error and keeps the value 0."""
        lit = IntegerLiteral(self.cur_token)
        try:
            value = int(self.cur_token.literal, 10)
        except ValueError:
            value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f"could not parse {self.cur_token.literal!r} as integer")
        else:
            lit.value = value
        return lit

    def parse_boolean(self) -> Expression:
        """Builds a `Boolean` from a `true` or `false` keyword token."""
        return Boolean(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Expression:
        """Parse `-<expr>` or `!<expr>`; the operand binds at PREFIX precedence.

        Returns:
            Expression: A `PrefixExpression`; `right` is None if the operand failed.
        """
        expression = PrefixExpression(self.cur_token, self.cur_token.literal)
        self.next_token()
        expression.right = self.parse_expression(Precedence.PREFIX)
        return expression

    def parse_infix_expression(self, left: Expression | None) -> Expression:
        """Parse the right operand of a binary operator at the operator's own precedence.

        Recursing with the operator's own precedence (not one lower) makes
        operators of equal precedence associate to the left.

        Args:
            left (Expression | None): The already-parsed left operand.

        Returns:
            Expression: An `InfixExpression` with `cur_token` as the operator.
        """
        expression = InfixExpression(self.cur_token, left, self.cur_token.literal)
        precedence = self.cur_precedence()
        self.next_token()
        expression.right = self.parse_expression(precedence)
        return expression

    def parse_grouped_expression(self) -> Expression | None:
        """Parse `( <expr> )`, returning the inner expression itself.

        Returns:
            Expression | None: None if the closing `)` is missing.
        """
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        """Parse `if (<cond>) { ... } [else { ... }]`."""
        expression = IfExpression(self.cur_token)

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        expression.condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        expression.consequence = self.parse_block_statement()

        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            expression.alternative = self.parse_block_statement()

        return expression

    def parse_function_literal(self) -> Expression | None:
        """Parse `fn(<params>) { ... }`."""
        lit_tok = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()

        return FunctionLiteral(lit_tok, parameters, body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        """Parse a comma-separated identifier list, starting on the `(`.

        Returns:
            list[Identifier] | None: The parameters (possibly empty), or None if
                a parameter is not an identifier or the `)` is missing.
        """
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression | None) -> Expression | None:
        """Parse a call whose `(` follows the callee expression.

        Args:
            function (Expression | None): The callee, already parsed.

        Returns:
            Expression | None: A `CallExpression`, or None if the argument list
                is unterminated.
        """
        call_tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(call_tok, function, arguments)

    def parse_call_arguments(self) -> list[Expression | None] | None:
        """Parse comma-separated argument expressions, each at LOWEST precedence.

        Returns:
            list[Expression | None] | None: The arguments (possibly empty), or
                None if the closing `)` is missing.
        """
        args: list[Expression | None] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return args

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return args


def parse(source: str, strict: bool = False) -> Program:
    """Lex and parse `source` into a `Program`.

    Args:
        source (str): Monkey source text.
        strict (bool): If True, raise instead of returning a program with errors.

    Raises:
        ParseError: If `strict` is True and the parser recorded any errors.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if strict and parser.errors:
        raise ParseError(parser.errors)
    return program


__all__ = ["MAX_NESTING_DEPTH", "Parser", "Precedence", "parse", "precedences"]
