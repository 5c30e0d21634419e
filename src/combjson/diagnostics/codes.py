"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Syntax errors (parse failures returned as ParseError)
        2000-2999: Serialization errors (AST cannot be rendered)
        3000-3999: Grammar defects (programming errors in a combinator tree)
    """

    # Syntax errors (1000-1999)
    EXPECTED_TOKEN = 1001
    UNEXPECTED_EOF = 1002
    INVALID_ESCAPE = 1003
    INVALID_UNICODE_ESCAPE = 1004
    UNPAIRED_SURROGATE = 1005
    CONTROL_CHARACTER = 1006
    INVALID_NUMBER = 1007
    NUMBER_OUT_OF_RANGE = 1008
    TRAILING_DATA = 1009
    NESTING_DEPTH_EXCEEDED = 1010
    PARSE_FAILED = 1098  # fail() with a caller-supplied message
    CONTEXT = 1099  # Outer frame pushed by label()

    # Serialization errors (2000-2999)
    SERIALIZATION_DEPTH_EXCEEDED = 2001
    SERIALIZATION_INVALID_NUMBER = 2002
    SERIALIZATION_UNSUPPORTED_TYPE = 2003

    # Grammar defects (3000-3999)
    GRAMMAR_ZERO_CONSUMPTION = 3001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or
                line/column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Produced by ErrorTemplate for
    every failure message, and by ParseError.to_diagnostic() for a whole
    failed parse.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None until anchored to a position)
        hint: Suggestion for fixing the error
        context: Label chain, outermost first (e.g. ("object", 'value for key "a"'))
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    context: tuple[str, ...] = ()

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Example output:
            error[EXPECTED_TOKEN]: expected value
              --> line 1, column 7
              = context: object > value for key "a"

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
