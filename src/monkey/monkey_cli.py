"""
Monkey CLI Entrypoint.

This module provides the command-line interface for the Monkey front end.
It lexes and parses Monkey source and prints the result; evaluation is left
to downstream tools.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the parsed program, the raw token stream, or the AST as JSON.
    - Report every parser error on stderr and exit non-zero.

Example usage:
    monkey program.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "add(1, 2)" --tokens
    monkey program.monkey --json

Functions:
    run_monkey(source: str, is_string: bool = False, tokens: bool = False,
               as_json: bool = False) -> None:
        Runs the Monkey pipeline (lex → parse → output).

    main() -> None:
        Parses CLI arguments and invokes `run_monkey`.
"""

import argparse
import json
import sys

from monkey.monkey_errors import ParseError
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
) -> None:
    """
    Run the Monkey front end on a file or a source string and print the result.

    Args:
        source (str): Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, print the token stream instead of parsing.
        as_json (bool): If True, print the AST as indented JSON.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
        ParseError: If the parser recorded any errors.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing only
    if tokens:
        for tok in Lexer(source):
            print(f"{tok.type}\t{tok.literal}")
        return

    # 3. Parsing
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.errors:
        raise ParseError(parser.errors)

    # 4. Output result
    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        for stmt in program.statements:
            print(stmt)


def main() -> None:
    """
    Entry point for the Monkey CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream instead of the parsed program.
        - `--json`: Print the AST as JSON.

    Exits with status 1 after printing parser errors to stderr.
    """
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the AST"
    )
    output.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )

    args = parser.parse_args()

    try:
        run_monkey(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            as_json=args.as_json,
        )
    except ParseError as e:
        print("parser errors:", file=sys.stderr)
        for msg in e.errors:
            print(f"\t{msg}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
