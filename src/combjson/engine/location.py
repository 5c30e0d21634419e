"""Immutable location and diagnostic-stack values for the combinator engine.

Implements the immutable cursor pattern: a Location is a shared reference
to the whole input plus an offset, and every successful match produces a
NEW Location. The original stays valid, which is what makes backtracking
free: an alternative simply runs again from the Location it was given.

Design Philosophy:
    - Location is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Line:column computed on demand (O(n), only for errors)
    - ParseError is an ordered stack of frames, innermost first, extended
      by returning a new stack (never mutated in place)

Line Ending Support:
    \\n is the line delimiter. CRLF documents work because the \\n is still
    present; CR-only documents report every position on line 1.

Pattern Reference:
    - Haskell Parsec
    - Scala "Functional Programming in Scala" parser combinators
    - F# FParsec
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from combjson.diagnostics import Diagnostic, DiagnosticCode, ErrorTemplate, SourceSpan

__all__ = ["Frame", "Location", "ParseError", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Location:
    """Immutable position in an input text.

    Example:
        >>> loc = Location("hello", 0)
        >>> loc.current
        'h'
        >>> nxt = loc.advance()
        >>> nxt.current
        'e'
        >>> loc.current  # Original unchanged
        'h'
        >>> Location("hi", 2).is_eof
        True
    """

    text: str = field(repr=False)
    offset: int = 0

    @property
    def is_eof(self) -> bool:
        """True if no input remains."""
        return self.offset >= len(self.text)

    @property
    def current(self) -> str:
        """Character at the offset.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof("a character")
            raise EOFError(f"{diagnostic.message} at offset {self.offset}")
        return self.text[self.offset]

    def peek(self, distance: int = 0) -> str | None:
        """Character at offset + distance, or None beyond EOF."""
        target = self.offset + distance
        if target >= len(self.text):
            return None
        return self.text[target]

    def advance(self, count: int = 1) -> Location:
        """Return a new Location count characters further on.

        Bounds are not checked: callers only advance over input they have
        just matched.
        """
        return Location(self.text, self.offset + count)

    def startswith(self, prefix: str) -> bool:
        """True if the remaining input begins with prefix."""
        return self.text.startswith(prefix, self.offset)

    def slice_to(self, end: Location) -> str:
        """Text consumed between this Location and a later one."""
        return self.text[self.offset : end.offset]

    @property
    def line_col(self) -> tuple[int, int]:
        """(line, column) of the offset, both 1-indexed like text editors.

        O(n) in the offset. Only call for error reporting.

        Example:
            >>> Location("ab\\ncd", 4).line_col
            (2, 2)
        """
        line = self.text.count("\n", 0, self.offset) + 1
        last_newline = self.text.rfind("\n", 0, self.offset)
        column = self.offset - last_newline if last_newline >= 0 else self.offset + 1
        return (line, column)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Successful parse: the value plus the Location just past it.

    Every parser has signature:
        (Location) -> ParseResult[T] | ParseError
    """

    value: T
    location: Location


@dataclass(frozen=True, slots=True)
class Frame:
    """One diagnostic frame: where, what, and which kind of failure.

    Attributes:
        location: Where the failure (or labeled region) starts
        message: Human-readable description
        code: DiagnosticCode classifying the frame
        hint: Optional suggestion carried over from the template
    """

    location: Location
    message: str
    code: DiagnosticCode = DiagnosticCode.EXPECTED_TOKEN
    hint: str | None = None

    @classmethod
    def from_diagnostic(cls, location: Location, diagnostic: Diagnostic) -> Frame:
        """Anchor a template Diagnostic at a Location."""
        return cls(location, diagnostic.message, diagnostic.code, diagnostic.hint)


@dataclass(frozen=True, slots=True)
class ParseError:
    """Failed parse: an ordered, non-empty stack of frames.

    frames[0] is the innermost (most specific) failure; each later frame is
    outer context added by label(). ``committed`` records that a commit()
    boundary was crossed, which forbids alternation from backtracking past
    this failure.

    Example:
        >>> loc = Location('{"a": }', 6)
        >>> err = ParseError.at(loc, ErrorTemplate.expected("value"))
        >>> err = err.with_label(Location('{"a": }', 4), 'value for key "a"')
        >>> err.format_error()
        'expected value at line 1, column 7 (while parsing value for key "a")'
    """

    frames: tuple[Frame, ...]
    committed: bool = False

    def __post_init__(self) -> None:
        """Validate the stack is non-empty."""
        if not self.frames:
            msg = "ParseError requires at least one frame"
            raise ValueError(msg)

    @classmethod
    def at(
        cls, location: Location, diagnostic: Diagnostic, *, committed: bool = False
    ) -> ParseError:
        """Create a one-frame error anchored at location."""
        return cls((Frame.from_diagnostic(location, diagnostic),), committed)

    def push(self, frame: Frame) -> ParseError:
        """Return a new stack with frame added as the outermost context."""
        return replace(self, frames=(*self.frames, frame))

    def with_label(self, location: Location, description: str) -> ParseError:
        """Return a new stack with a CONTEXT frame for a labeled region."""
        return self.push(Frame(location, description, DiagnosticCode.CONTEXT))

    def commit(self) -> ParseError:
        """Return this error marked as committed (no backtracking past it)."""
        return self if self.committed else replace(self, committed=True)

    @property
    def deepest(self) -> Frame:
        """Innermost, most specific frame."""
        return self.frames[0]

    @property
    def location(self) -> Location:
        """Where the innermost failure is anchored."""
        return self.frames[0].location

    @property
    def offset(self) -> int:
        """Offset of the innermost failure (used by furthest-failure)."""
        return self.frames[0].location.offset

    @property
    def message(self) -> str:
        """Message of the innermost failure."""
        return self.frames[0].message

    @property
    def code(self) -> DiagnosticCode:
        """DiagnosticCode of the innermost failure."""
        return self.frames[0].code

    @property
    def context(self) -> tuple[str, ...]:
        """Label chain from outermost to innermost.

        Example:
            ("object", 'value for key "a"')
        """
        return tuple(frame.message for frame in reversed(self.frames[1:]))

    def format_error(self) -> str:
        """Single-line rendering with line:column and label context.

        Returns:
            e.g. 'expected \\':\\' at line 3, column 12 (while parsing value for key "a")'
        """
        line, column = self.location.line_col
        rendered = f"{self.message} at line {line}, column {column}"
        if len(self.frames) > 1:
            labels = " in ".join(frame.message for frame in self.frames[1:])
            rendered += f" (while parsing {labels})"
        return rendered

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and a caret pointer.

        Args:
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context

        Example:
            >>> source = '{\\n  "a": \\n}'
            >>> err = ParseError.at(Location(source, 10), ErrorTemplate.expected("value"))
            >>> print(err.format_with_context())
            expected value at line 3, column 1
            <BLANKLINE>
               1 | {
               2 |   "a":
               3 | }
                 | ^
        """
        line, column = self.location.line_col
        lines = self.location.text.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for number in range(start_line, end_line + 1):
            prefix = f"{number:4} | "
            result_lines.append((prefix + lines[number - 1]).rstrip())
            if number == line:
                result_lines.append("     | " + " " * (column - 1) + "^")

        return "\n".join(result_lines)

    def to_diagnostic(self) -> Diagnostic:
        """Convert the whole stack into one Diagnostic.

        The span covers the character at the failure (empty at EOF) and the
        context carries the label chain, outermost first.
        """
        location = self.location
        line, column = location.line_col
        end = location.offset if location.is_eof else location.offset + 1
        deepest = self.deepest
        return Diagnostic(
            code=deepest.code,
            message=deepest.message,
            span=SourceSpan(start=location.offset, end=end, line=line, column=column),
            hint=deepest.hint,
            context=self.context,
        )
