"""Tests for JSON string literals: escapes, surrogates and control characters."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from combjson.diagnostics import DiagnosticCode
from combjson.engine import ParseError, ParseResult
from combjson.syntax import JsonParser, JsonString


def _string(source: str) -> str:
    result = JsonParser().parse(source)
    assert isinstance(result, ParseResult), result.format_error()
    assert isinstance(result.value, JsonString)
    return result.value.value


def _error(source: str) -> ParseError:
    result = JsonParser().parse(source)
    assert isinstance(result, ParseError), f"unexpectedly parsed {source!r}"
    return result


class TestPlainStrings:
    """Test unescaped content."""

    def test_empty_string(self) -> None:
        """'""' is the empty string."""
        assert _string('""') == ""

    def test_unicode_passthrough(self) -> None:
        """Non-ASCII characters need no escaping."""
        assert _string('"héllo wörld 😀"') == "héllo wörld 😀"

    def test_delete_character_allowed(self) -> None:
        """U+007F is not a control character in JSON."""
        assert _string('"\x7f"') == "\x7f"


class TestEscapes:
    """Test escape sequences."""

    @pytest.mark.parametrize(
        ("escape", "decoded"),
        [
            ('\\"', '"'),
            ("\\\\", "\\"),
            ("\\/", "/"),
            ("\\b", "\b"),
            ("\\f", "\f"),
            ("\\n", "\n"),
            ("\\r", "\r"),
            ("\\t", "\t"),
        ],
    )
    def test_simple_escapes(self, escape: str, decoded: str) -> None:
        """Each two-character escape decodes to its character."""
        assert _string(f'"a{escape}b"') == f"a{decoded}b"

    def test_unicode_escape(self) -> None:
        """\\uXXXX decodes, in either hex case."""
        assert _string('"\\u00e9\\u00C9"') == "éÉ"

    def test_surrogate_pair(self) -> None:
        """A high/low surrogate escape pair decodes to one astral character."""
        assert _string('"\\ud83d\\ude00"') == "\U0001f600"

    def test_invalid_escape(self) -> None:
        """'\\x' is reported at the character after the backslash."""
        err = _error('"a\\xb"')

        assert err.code == DiagnosticCode.INVALID_ESCAPE
        assert err.message == "invalid escape sequence \\x"
        assert err.offset == 3
        assert err.context == ("string",)

    def test_short_unicode_escape(self) -> None:
        """\\u needs exactly four hex digits."""
        err = _error('"\\u12G4"')

        assert err.code == DiagnosticCode.INVALID_UNICODE_ESCAPE
        assert err.offset == 3

    def test_truncated_unicode_escape(self) -> None:
        """\\u at end of input is an invalid escape, not a crash."""
        assert _error('"\\u12').code == DiagnosticCode.INVALID_UNICODE_ESCAPE

    def test_backslash_at_eof(self) -> None:
        """A lone trailing backslash reports truncation."""
        assert _error('"\\').code == DiagnosticCode.UNEXPECTED_EOF

    def test_lone_high_surrogate(self) -> None:
        """A high surrogate must be followed by a low surrogate escape."""
        err = _error('"\\ud800x"')

        assert err.code == DiagnosticCode.UNPAIRED_SURROGATE
        assert "high surrogate \\uD800" in err.message

    def test_high_surrogate_followed_by_non_surrogate(self) -> None:
        """The second escape must be in the low surrogate range."""
        assert _error('"\\ud800\\u0041"').code == DiagnosticCode.UNPAIRED_SURROGATE

    def test_lone_low_surrogate(self) -> None:
        """A low surrogate without a high one is rejected."""
        err = _error('"\\udc00"')

        assert err.code == DiagnosticCode.UNPAIRED_SURROGATE
        assert err.message == "unexpected low surrogate \\uDC00"


class TestStringErrors:
    """Test malformed strings."""

    def test_unterminated(self) -> None:
        """A missing closing quote is reported at end of input."""
        err = _error('"abc')

        assert err.code == DiagnosticCode.UNEXPECTED_EOF
        assert err.message == "unexpected end of input, expected '\"'"
        assert err.offset == 4
        assert err.context == ("string",)

    @pytest.mark.parametrize("control", ["\x00", "\n", "\t", "\x1f"])
    def test_raw_control_character(self, control: str) -> None:
        """Unescaped U+0000-U+001F are rejected at the character."""
        err = _error(f'"a{control}b"')

        assert err.code == DiagnosticCode.CONTROL_CHARACTER
        assert err.offset == 2
        assert f"U+{ord(control):04X}" in err.message

    def test_single_quotes_rejected(self) -> None:
        """JSON strings use double quotes only."""
        assert _error("'a'").message == "expected value"

    @given(st.text(max_size=30))
    def test_escaped_text_roundtrip_property(self, text: str) -> None:
        """PROPERTY: any text written with \\u escapes parses back to itself."""
        encoded = "".join(
            f"\\u{unit:04x}"
            for unit in _utf16_units(text)
        )

        assert _string(f'"{encoded}"') == text


def _utf16_units(text: str) -> list[int]:
    raw = text.encode("utf-16-be")
    return [int.from_bytes(raw[i : i + 2], "big") for i in range(0, len(raw), 2)]
