"""combjson exception hierarchy with structured diagnostics.

Parse failures are ordinary return values (ParseError); the exceptions here
are raised only by the convenience APIs that promise a value, by the
serializer, and for grammar defects that are programming errors.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from combjson.engine.location import ParseError

__all__ = [
    "CombJsonError",
    "GrammarError",
    "JsonSyntaxError",
    "SerializationDepthError",
    "SerializationValidationError",
]


class CombJsonError(Exception):
    """Base exception for all combjson errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CombJsonError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class JsonSyntaxError(CombJsonError, ValueError):
    """Document is not valid JSON.

    Raised by parse_json() and loads(); parse() returns the ParseError
    instead. Subclasses ValueError like json.JSONDecodeError does.

    Attributes:
        parse_error: The full diagnostic stack
        line: 1-indexed line of the deepest failure
        column: 1-indexed column of the deepest failure
    """

    def __init__(self, parse_error: "ParseError") -> None:
        """Initialize from a failed parse.

        Args:
            parse_error: Diagnostic stack returned by the parser
        """
        super().__init__(parse_error.to_diagnostic())
        self.parse_error = parse_error
        self.line, self.column = parse_error.location.line_col

    def __str__(self) -> str:
        """Return the single-line rendering of the parse error."""
        return self.parse_error.format_error()


class GrammarError(CombJsonError):
    """Defect in a combinator grammar (not in the parsed document).

    Raised when a repetition combinator wraps a parser that succeeded
    without consuming input, which would otherwise loop forever. Surfaces
    while exercising a grammar, never as a ParseError.
    """


class SerializationValidationError(CombJsonError, ValueError):
    """Raised when a value cannot be rendered as valid JSON.

    Common causes:
    - JsonNumber holding NaN or an infinity
    - An int too large to convert to a double
    - Foreign objects placed in a container by programmatic construction
    """


class SerializationDepthError(CombJsonError, ValueError):
    """Raised when an AST nests deeper than the serializer allows.

    Guards against stack exhaustion on adversarial, programmatically built
    ASTs. Parsed documents never trigger it at the default limits.
    """
