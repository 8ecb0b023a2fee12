"""
Runtime value model for the Monkey programming language.

These are the values an evaluator produces from the AST. Nothing in the front
end creates them; they live here so the integer representation (signed 64-bit)
is shared between `IntegerLiteral` nodes and the values they evaluate to.

Classes:
    ObjectType: Category tag reported by every value.
    Object: Base class providing `type()` and `inspect()`.
    Integer, Boolean, Null, ReturnValue, Error: The value categories.

Singletons:
    TRUE, FALSE, NULL: Shared instances for the two booleans and null.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ObjectType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


class Object(ABC):
    """Base class for every runtime value."""

    @abstractmethod
    def type(self) -> ObjectType:
        """Returns the value's category tag."""

    @abstractmethod
    def inspect(self) -> str:
        """Returns the value rendered for display (e.g. in a REPL)."""


@dataclass(frozen=True)
class Integer(Object):
    """A signed 64-bit integer.

    Raises:
        ValueError: If `value` is outside `INT64_MIN..INT64_MAX`.
    """

    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Integer out of 64-bit range: {self.value}")

    def type(self) -> ObjectType:
        return ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    """A boolean; use the shared `TRUE` and `FALSE` instances."""

    value: bool

    def type(self) -> ObjectType:
        return ObjectType.BOOLEAN

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Null(Object):
    """The absence of a value; use the shared `NULL` instance."""

    def type(self) -> ObjectType:
        return ObjectType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a `return` so it can unwind enclosing blocks."""

    value: Object

    def type(self) -> ObjectType:
        return ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    """A runtime error raised by evaluation, carried as a value.

    `inspect()` renders as `ERROR: <message>`.
    """

    message: str

    def type(self) -> ObjectType:
        return ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


__all__ = [
    "FALSE",
    "INT64_MAX",
    "INT64_MIN",
    "NULL",
    "TRUE",
    "Boolean",
    "Error",
    "Integer",
    "Null",
    "Object",
    "ObjectType",
    "ReturnValue",
]
