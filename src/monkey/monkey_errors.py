"""
Error types for the Monkey front end.

The parser itself never raises: it records every diagnostic in `Parser.errors`
and keeps going. `ParseError` exists for callers that want a hard failure once
parsing has finished, such as `monkey_parser.parse(..., strict=True)` and the CLI.
"""


class ParseError(Exception):
    """Raised when a completed parse produced one or more diagnostics.

    Attributes:
        errors (list[str]): Every parser message, in the order it was recorded.

    Example:
        raise ParseError(["no prefix parse function for RPAREN found"])
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


__all__ = ["ParseError"]
