"""Tests for engine/location.py: Location, ParseResult, Frame and ParseError.

Validates the immutable location pattern and the diagnostic stack.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from combjson.diagnostics import DiagnosticCode, ErrorTemplate
from combjson.engine import Frame, Location, ParseError, ParseResult

# ============================================================================
# LOCATION BASICS
# ============================================================================


class TestLocationBasic:
    """Test basic Location functionality."""

    def test_default_offset_is_zero(self) -> None:
        """Location starts at offset 0 by default."""
        loc = Location("hello")

        assert loc.offset == 0
        assert not loc.is_eof

    def test_location_immutability(self) -> None:
        """Location is immutable (frozen dataclass)."""
        loc = Location("hello", 0)

        with pytest.raises(AttributeError):
            loc.offset = 5  # type: ignore[misc]

    def test_advance_returns_new_location(self) -> None:
        """advance() returns a new Location and leaves the original intact."""
        loc = Location("hello", 0)
        nxt = loc.advance(2)

        assert nxt.offset == 2
        assert nxt.current == "l"
        assert loc.offset == 0
        assert loc.current == "h"

    def test_repr_omits_text(self) -> None:
        """repr shows only the offset, never the whole input."""
        assert repr(Location("x" * 1000, 3)) == "Location(offset=3)"

    def test_equality_by_text_and_offset(self) -> None:
        """Locations over equal text at equal offsets compare equal."""
        assert Location("abc", 1) == Location("abc", 1)
        assert Location("abc", 1) != Location("abc", 2)


class TestLocationEOF:
    """Test EOF detection and character access."""

    def test_is_eof_for_empty_text(self) -> None:
        """Empty text is at EOF immediately."""
        assert Location("", 0).is_eof

    def test_is_eof_at_end(self) -> None:
        """Offset equal to length is EOF."""
        assert Location("ab", 2).is_eof

    def test_current_at_eof_raises(self) -> None:
        """current raises EOFError when no input remains."""
        with pytest.raises(EOFError, match="unexpected end of input"):
            _ = Location("ab", 2).current

    def test_peek(self) -> None:
        """peek looks ahead without moving; None past the end."""
        loc = Location("abc", 1)

        assert loc.peek() == "b"
        assert loc.peek(1) == "c"
        assert loc.peek(2) is None

    def test_startswith(self) -> None:
        """startswith checks the remaining input only."""
        loc = Location("[null]", 1)

        assert loc.startswith("null")
        assert not loc.startswith("[")

    def test_slice_to(self) -> None:
        """slice_to returns text between two locations."""
        start = Location("-12.5e3,", 0)

        assert start.slice_to(start.advance(7)) == "-12.5e3"


class TestLocationLineCol:
    """Test 1-indexed line:column computation."""

    def test_first_character(self) -> None:
        """Offset 0 is line 1, column 1."""
        assert Location("abc", 0).line_col == (1, 1)

    def test_after_newline(self) -> None:
        """Column restarts after each newline."""
        assert Location("ab\ncd", 4).line_col == (2, 2)

    def test_at_newline_character(self) -> None:
        """The newline itself belongs to the line it ends."""
        assert Location("ab\ncd", 2).line_col == (1, 3)

    def test_crlf_counts_one_line(self) -> None:
        """CRLF advances the line once."""
        assert Location("a\r\nb", 3).line_col == (2, 1)

    def test_eof_position(self) -> None:
        """EOF reports the position just past the last character."""
        assert Location("{\n", 2).line_col == (2, 1)

    @given(st.text(alphabet="ab\n", max_size=30), st.data())
    def test_line_col_matches_split(self, text: str, data: st.DataObject) -> None:
        """PROPERTY: line_col agrees with splitting the prefix on newlines."""
        offset = data.draw(st.integers(min_value=0, max_value=len(text)))
        prefix_lines = text[:offset].split("\n")

        assert Location(text, offset).line_col == (len(prefix_lines), len(prefix_lines[-1]) + 1)


# ============================================================================
# PARSE RESULT
# ============================================================================


class TestParseResult:
    """Test ParseResult container."""

    def test_holds_value_and_location(self) -> None:
        """ParseResult pairs a value with the location after it."""
        loc = Location("null", 4)
        result = ParseResult(None, loc)

        assert result.value is None
        assert result.location is loc


# ============================================================================
# PARSE ERROR STACK
# ============================================================================


def _object_error() -> ParseError:
    """The stack produced for '{"a": }' (innermost first)."""
    text = '{"a": }'
    err = ParseError.at(Location(text, 6), ErrorTemplate.expected("value"))
    err = err.with_label(Location(text, 4), 'value for key "a"')
    return err.with_label(Location(text, 0), "object")


class TestParseErrorConstruction:
    """Test building diagnostic stacks."""

    def test_empty_stack_rejected(self) -> None:
        """A ParseError always has at least one frame."""
        with pytest.raises(ValueError, match="at least one frame"):
            ParseError(())

    def test_at_creates_single_frame(self) -> None:
        """ParseError.at anchors a template diagnostic."""
        err = ParseError.at(Location("x", 0), ErrorTemplate.expected("'null'"))

        assert len(err.frames) == 1
        assert err.message == "expected 'null'"
        assert err.code == DiagnosticCode.EXPECTED_TOKEN
        assert not err.committed

    def test_with_label_pushes_outer_frame(self) -> None:
        """with_label adds a CONTEXT frame at the end of the stack."""
        err = _object_error()

        assert [f.message for f in err.frames] == [
            "expected value",
            'value for key "a"',
            "object",
        ]
        assert err.frames[-1].code == DiagnosticCode.CONTEXT

    def test_push_does_not_mutate(self) -> None:
        """push returns a new stack; the original keeps its frames."""
        base = ParseError.at(Location("x", 0), ErrorTemplate.expected("y"))
        pushed = base.push(Frame(Location("x", 0), "outer", DiagnosticCode.CONTEXT))

        assert len(base.frames) == 1
        assert len(pushed.frames) == 2

    def test_commit_is_idempotent(self) -> None:
        """commit marks the error committed and keeps the frames."""
        err = ParseError.at(Location("x", 0), ErrorTemplate.expected("y"))
        committed = err.commit()

        assert committed.committed
        assert committed.frames == err.frames
        assert committed.commit() is committed

    def test_labels_preserve_commitment(self) -> None:
        """Adding context to a committed error keeps it committed."""
        err = ParseError.at(Location("x", 0), ErrorTemplate.expected("y"), committed=True)

        assert err.with_label(Location("x", 0), "array").committed


class TestParseErrorAccessors:
    """Test deepest-frame accessors and the label chain."""

    def test_deepest_frame_position(self) -> None:
        """location/offset/line_col come from the innermost frame."""
        err = _object_error()

        assert err.offset == 6
        assert err.location.line_col == (1, 7)
        assert err.deepest.message == "expected value"

    def test_context_outermost_first(self) -> None:
        """context lists labels from outermost to innermost."""
        assert _object_error().context == ("object", 'value for key "a"')

    def test_context_empty_without_labels(self) -> None:
        """An unlabeled error has no context."""
        err = ParseError.at(Location("", 0), ErrorTemplate.unexpected_eof("value"))

        assert err.context == ()


class TestParseErrorRendering:
    """Test single-line and multi-line rendering."""

    def test_format_error_with_labels(self) -> None:
        """format_error names every label, innermost first."""
        assert _object_error().format_error() == (
            'expected value at line 1, column 7 (while parsing value for key "a" in object)'
        )

    def test_format_error_without_labels(self) -> None:
        """Unlabeled errors render message and position only."""
        err = ParseError.at(Location("ab\ncd", 4), ErrorTemplate.expected("':'"))

        assert err.format_error() == "expected ':' at line 2, column 2"

    def test_format_with_context_shows_caret(self) -> None:
        """format_with_context draws the source line and a caret."""
        source = '{\n  "a" 1\n}'
        err = ParseError.at(Location(source, 8), ErrorTemplate.expected("':'"))
        rendered = err.format_with_context()

        assert rendered.splitlines() == [
            "expected ':' at line 2, column 7",
            "",
            "   1 | {",
            '   2 |   "a" 1',
            "     |       ^",
            "   3 | }",
        ]

    def test_format_with_context_limits_lines(self) -> None:
        """Only context_lines lines are shown on each side."""
        source = "\n".join(str(n) for n in range(10))
        err = ParseError.at(Location(source, source.index("5")), ErrorTemplate.expected("x"))
        rendered = err.format_with_context(context_lines=1)

        assert "   5 | 4" in rendered
        assert "   7 | 6" in rendered
        assert "   4 | 3" not in rendered
        assert "   8 | 7" not in rendered

    def test_to_diagnostic(self) -> None:
        """to_diagnostic carries code, span and label chain."""
        diagnostic = _object_error().to_diagnostic()

        assert diagnostic.code == DiagnosticCode.EXPECTED_TOKEN
        assert diagnostic.message == "expected value"
        assert diagnostic.context == ("object", 'value for key "a"')
        assert diagnostic.span is not None
        assert (diagnostic.span.start, diagnostic.span.end) == (6, 7)
        assert (diagnostic.span.line, diagnostic.span.column) == (1, 7)

    def test_to_diagnostic_at_eof_has_empty_span(self) -> None:
        """At EOF the span is empty and the template hint is kept."""
        err = ParseError.at(Location("[", 1), ErrorTemplate.unexpected_eof("value"))
        diagnostic = err.to_diagnostic()

        assert diagnostic.span is not None
        assert diagnostic.span.start == diagnostic.span.end == 1
        assert diagnostic.hint == "The document appears to be truncated"
