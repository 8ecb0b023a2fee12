from collections.abc import Callable

import pytest

from monkey.monkey_ast import Program
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser


@pytest.fixture  # type: ignore[misc]
def parse_ok() -> Callable[[str], Program]:
    """Parse source and fail the test with every parser message if any were recorded."""

    def _parse(source: str) -> Program:
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        assert parser.errors == [], "parser errors:\n" + "\n".join(parser.errors)
        return program

    return _parse


@pytest.fixture  # type: ignore[misc]
def parse_errors() -> Callable[[str], list[str]]:
    def _errors(source: str) -> list[str]:
        parser = Parser(Lexer(source))
        parser.parse_program()
        return parser.errors

    return _errors
