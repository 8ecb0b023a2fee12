"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

Classes:
    Node:
        Base for every node. Provides `token_literal()`, a source-like `__str__`
        rendering (fully parenthesised expressions) and `to_dict()`.

    Statement, Expression:
        The two node families. Every variant below belongs to exactly one.

    Program:
        Root node; owns the ordered sequence of top-level statements.

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expressions:
    Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression

A child typed `Optional[...]` is None only when the parser recorded an error
while building it. Such children render as an empty string and serialize as None.

Example:
    >>> from monkey.monkey_parser import parse
    >>> str(parse("1 + 2 * 3"))
    '(1 + (2 * 3))'
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional, TypedDict

from monkey.monkey_token import Token


class NodeDict(TypedDict, total=False):
    """
    Dictionary form of a Node, as produced by `Node.to_dict()`.

    Fields:
        kind (str): The node's class name (e.g. "LetStatement").
        token (str): Literal of the token the node was built from.

    Every other key is one of the node's own fields, with child nodes
    converted recursively.
    """

    kind: str
    token: str


def _render(node: Optional["Node"]) -> str:
    return "" if node is None else str(node)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value


class Node:
    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> NodeDict:
        data: dict[str, Any] = {"kind": type(self).__name__}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            data[f.name] = value.literal if f.name == "token" else _to_plain(value)
        return data  # type: ignore[return-value]


class Statement(Node):
    pass


class Expression(Node):
    pass


@dataclass
class Program(Node):
    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# Expressions


@dataclass
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    """Integer literal; `value` is always within the signed 64-bit range."""

    token: Token
    value: int = 0

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class Boolean(Expression):
    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"


@dataclass
class InfixExpression(Expression):
    token: Token
    left: Optional[Expression]
    operator: str
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"


@dataclass
class IfExpression(Expression):
    token: Token
    condition: Optional[Expression] = None
    consequence: Optional["BlockStatement"] = None
    alternative: Optional["BlockStatement"] = None

    def __str__(self) -> str:
        out = f"if{_render(self.condition)} {_render(self.consequence)}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    token: Token
    parameters: list[Identifier] = field(default_factory=list)
    body: Optional["BlockStatement"] = None

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {_render(self.body)}"


@dataclass
class CallExpression(Expression):
    token: Token  # the '(' token
    function: Optional[Expression]
    arguments: list[Optional[Expression]] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(_render(a) for a in self.arguments)
        return f"{_render(self.function)}({args})"


# Statements


@dataclass
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Optional[Expression] = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_render(self.value)};"


@dataclass
class ReturnStatement(Statement):
    token: Token
    value: Optional[Expression] = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.value)};"


@dataclass
class ExpressionStatement(Statement):
    token: Token  # first token of the expression
    expression: Optional[Expression] = None

    def __str__(self) -> str:
        return _render(self.expression)


@dataclass
class BlockStatement(Statement):
    token: Token  # the '{' token
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


__all__ = [
    "BlockStatement",
    "Boolean",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "NodeDict",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
