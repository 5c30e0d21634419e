"""Serialize the JSON AST back to JSON text.

Converts AST nodes to JSON source. Useful for:
- Formatters (indent, sort_keys)
- Code generators building documents programmatically
- Property-based testing (roundtrip: parse -> serialize -> parse)

Output parses back to an equal AST whenever the parser's max_nesting_depth
(MAX_DEPTH by default, the same limit the serializer enforces) covers the
value's nesting. Numbers that cannot be written as JSON (NaN, infinities)
are rejected instead of being emitted.

Python 3.13+.
"""

import math

from combjson.constants import MAX_DEPTH
from combjson.core import DepthGuard, DepthLimitExceededError
from combjson.diagnostics import (
    ErrorTemplate,
    SerializationDepthError,
    SerializationValidationError,
)

from .ast import JsonArray, JsonBool, JsonNull, JsonNumber, JsonObject, JsonString, JsonValue
from .escaping import quote_string

__all__ = [
    "JsonSerializer",
    "SerializationDepthError",
    "SerializationValidationError",
    "serialize",
]


# Integral doubles below this magnitude print exactly as integers.
_INTEGRAL_LIMIT: float = 1e16


def _serialize_number(value: float) -> str:
    if not math.isfinite(value):
        raise SerializationValidationError(ErrorTemplate.non_finite_number(value))
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        text = str(int(value))
        if text == "0" and math.copysign(1.0, value) < 0:
            return "-0"
        return text
    # repr() is the shortest string that reads back as the same double
    # and is valid JSON for every finite value (e.g. '1e+16', '1.5e-07').
    return repr(value)


class JsonSerializer:
    """Converts the AST back to JSON source.

    Thread-safe serializer with no mutable instance state.
    All serialization state is local to the serialize() call.

    Usage:
        >>> from combjson.syntax import parse, JsonSerializer
        >>> ast = parse('{"a": [1, 2.5, null]}').value
        >>> JsonSerializer().serialize(ast)
        '{"a": [1, 2.5, null]}'
    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize serializer.

        Args:
            max_depth: Maximum array/object nesting (default: MAX_DEPTH)
        """
        self._max_depth = max_depth

    def serialize(
        self,
        value: JsonValue,
        *,
        indent: int | None = None,
        sort_keys: bool = False,
    ) -> str:
        """Serialize a JSON value to a string.

        Args:
            value: Root AST node
            indent: Spaces per nesting level; None renders on one line
            sort_keys: Emit object members sorted by key

        Returns:
            JSON source text

        Raises:
            SerializationValidationError: If the AST holds a non-finite number
                or a non-AST object
            SerializationDepthError: If nesting exceeds max_depth
        """
        output: list[str] = []
        guard = DepthGuard(max_depth=self._max_depth)
        try:
            self._serialize_value(value, output, guard, indent, sort_keys)
        except DepthLimitExceededError as e:
            raise SerializationDepthError(
                ErrorTemplate.serialization_depth_exceeded(guard.max_depth)
            ) from e
        return "".join(output)

    def _serialize_value(
        self,
        value: JsonValue,
        output: list[str],
        guard: DepthGuard,
        indent: int | None,
        sort_keys: bool,
    ) -> None:
        """Serialize one node (recursively for containers) to output list."""
        match value:
            case JsonNull():
                output.append("null")
            case JsonBool(value=flag):
                output.append("true" if flag else "false")
            case JsonNumber(value=number):
                output.append(_serialize_number(number))
            case JsonString(value=text):
                output.append(quote_string(text))
            case JsonArray():
                with guard:
                    self._serialize_array(value, output, guard, indent, sort_keys)
            case JsonObject():
                with guard:
                    self._serialize_object(value, output, guard, indent, sort_keys)
            case _:
                raise SerializationValidationError(
                    ErrorTemplate.unsupported_type(type(value).__name__)
                )

    def _serialize_array(
        self,
        node: JsonArray,
        output: list[str],
        guard: DepthGuard,
        indent: int | None,
        sort_keys: bool,
    ) -> None:
        if not node.items:
            output.append("[]")
            return
        separator, inner, outer = self._layout(guard.depth, indent)
        output.append("[" + inner)
        for i, item in enumerate(node.items):
            if i > 0:
                output.append(separator)
            self._serialize_value(item, output, guard, indent, sort_keys)
        output.append(outer + "]")

    def _serialize_object(
        self,
        node: JsonObject,
        output: list[str],
        guard: DepthGuard,
        indent: int | None,
        sort_keys: bool,
    ) -> None:
        if not node.members:
            output.append("{}")
            return
        items = sorted(node.members.items()) if sort_keys else node.members.items()
        separator, inner, outer = self._layout(guard.depth, indent)
        output.append("{" + inner)
        for i, (key, member) in enumerate(items):
            if i > 0:
                output.append(separator)
            output.append(quote_string(key))
            output.append(": ")
            self._serialize_value(member, output, guard, indent, sort_keys)
        output.append(outer + "}")

    @staticmethod
    def _layout(depth: int, indent: int | None) -> tuple[str, str, str]:
        """(item separator, text after the opening bracket, text before the closing one)."""
        if indent is None:
            return ", ", "", ""
        inner = "\n" + " " * (indent * depth)
        outer = "\n" + " " * (indent * (depth - 1))
        return "," + inner, inner, outer


def serialize(
    value: JsonValue,
    *,
    indent: int | None = None,
    sort_keys: bool = False,
) -> str:
    """Serialize a JSON AST to JSON text.

    Convenience function for JsonSerializer.serialize().

    Args:
        value: Root AST node
        indent: Spaces per nesting level; None renders on one line
        sort_keys: Emit object members sorted by key

    Returns:
        JSON source text

    Raises:
        SerializationValidationError: If the AST holds a non-finite number
        SerializationDepthError: If nesting exceeds MAX_DEPTH

    Example:
        >>> from combjson.syntax import parse, serialize
        >>> ast = parse('{ "b" : 1 , "a" : [ ] }').value
        >>> serialize(ast, sort_keys=True)
        '{"a": [], "b": 1}'
        >>> print(serialize(ast, indent=2))
        {
          "b": 1,
          "a": []
        }
    """
    return JsonSerializer().serialize(value, indent=indent, sort_keys=sort_keys)
