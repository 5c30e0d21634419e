"""Tests for syntax/serializer.py: rendering the AST as JSON text."""

from __future__ import annotations

import pytest

from combjson import diagnostics
from combjson.diagnostics import CombJsonError, DiagnosticCode
from combjson.syntax import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonSerializer,
    JsonString,
    JsonValue,
    SerializationDepthError,
    SerializationValidationError,
    serialize,
)
from combjson.syntax.escaping import quote_string


class TestScalars:
    """Test scalar rendering."""

    def test_literals(self) -> None:
        """null, true and false."""
        assert serialize(JsonNull()) == "null"
        assert serialize(JsonBool(True)) == "true"
        assert serialize(JsonBool(False)) == "false"

    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (0.0, "0"),
            (-0.0, "-0"),
            (42.0, "42"),
            (-7.0, "-7"),
            (1.5, "1.5"),
            (0.1, "0.1"),
            (1e16, "1e+16"),
            (1.5e-7, "1.5e-07"),
            (123456789012345.0, "123456789012345"),
        ],
    )
    def test_numbers(self, value: float, text: str) -> None:
        """Integral values print as integers; others use the shortest repr."""
        assert serialize(JsonNumber(value)) == text

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        """NaN and infinities have no JSON form."""
        with pytest.raises(SerializationValidationError) as exc_info:
            serialize(JsonNumber(value))

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.SERIALIZATION_INVALID_NUMBER

    def test_string_escapes(self) -> None:
        """Quote, backslash and control characters are escaped."""
        text = serialize(JsonString('a"b\\c\nd\te\x00f\x1fg'))

        assert text == '"a\\"b\\\\c\\nd\\te\\u0000f\\u001fg"'

    def test_non_ascii_kept(self) -> None:
        """Non-ASCII and '/' are written as-is."""
        assert serialize(JsonString("é/😀")) == '"é/😀"'

    def test_quote_string_matches_serializer(self) -> None:
        """Labels and the serializer share one escaper."""
        text = 'k"\n\x02'

        assert quote_string(text) == serialize(JsonString(text)) == '"k\\"\\n\\u0002"'


class TestContainers:
    """Test array and object rendering."""

    def test_compact_layout(self) -> None:
        """Default layout uses ', ' and ': ' separators on one line."""
        value = JsonObject({"a": JsonArray((JsonNumber(1.0), JsonNull())), "b": JsonObject({})})

        assert serialize(value) == '{"a": [1, null], "b": {}}'

    def test_empty_containers(self) -> None:
        """Empty containers stay on one line even when indenting."""
        assert serialize(JsonArray(()), indent=2) == "[]"
        assert serialize(JsonObject({}), indent=2) == "{}"

    def test_indent(self) -> None:
        """indent puts each item on its own line."""
        value = JsonObject({"a": JsonArray((JsonNumber(1.0), JsonNumber(2.0))), "b": JsonNull()})

        assert serialize(value, indent=2) == (
            '{\n  "a": [\n    1,\n    2\n  ],\n  "b": null\n}'
        )

    def test_sort_keys(self) -> None:
        """sort_keys orders members at every level."""
        value = JsonObject({"b": JsonObject({"y": JsonNull(), "x": JsonNull()}), "a": JsonNull()})

        assert serialize(value, sort_keys=True) == '{"a": null, "b": {"x": null, "y": null}}'

    def test_insertion_order_by_default(self) -> None:
        """Without sort_keys members keep their order."""
        value = JsonObject({"b": JsonNull(), "a": JsonNull()})

        assert serialize(value) == '{"b": null, "a": null}'


class TestValidation:
    """Test rejection of unrenderable ASTs."""

    def test_foreign_object_rejected(self) -> None:
        """Non-AST objects inside containers are reported."""
        bogus = JsonArray((JsonNull(), 3))  # type: ignore[arg-type]

        with pytest.raises(SerializationValidationError, match="'int'"):
            serialize(bogus)

    def test_depth_limit(self) -> None:
        """Nesting beyond max_depth raises SerializationDepthError."""
        value: JsonValue = JsonNull()
        for _ in range(5):
            value = JsonArray((value,))

        assert JsonSerializer(max_depth=5).serialize(value) == "[[[[[null]]]]]"
        with pytest.raises(SerializationDepthError) as exc_info:
            JsonSerializer(max_depth=4).serialize(value)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.SERIALIZATION_DEPTH_EXCEEDED

    def test_errors_are_value_errors(self) -> None:
        """Serializer errors are CombJsonError and ValueError subclasses."""
        assert issubclass(SerializationValidationError, CombJsonError)
        assert issubclass(SerializationValidationError, ValueError)
        assert issubclass(SerializationDepthError, ValueError)

    def test_errors_exported_from_diagnostics(self) -> None:
        """The syntax package re-exports the diagnostics exception classes."""
        assert SerializationValidationError is diagnostics.SerializationValidationError
        assert SerializationDepthError is diagnostics.SerializationDepthError

    def test_serializer_is_reusable(self) -> None:
        """Depth state does not leak between calls after a failure."""
        serializer = JsonSerializer(max_depth=1)
        deep = JsonArray((JsonArray(()),))

        with pytest.raises(SerializationDepthError):
            serializer.serialize(deep)

        assert serializer.serialize(JsonArray((JsonNull(),))) == "[null]"
