"""JSON syntax package.

Provides the JSON AST, the combinator grammar and its driver, and
serialization back to JSON text.

Python 3.13+.
"""

from functools import cache

from combjson.engine import ParseError, ParseResult

from .ast import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    PythonJson,
    from_python,
)
from .parser import JsonGrammar, JsonParser
from .serializer import (
    JsonSerializer,
    SerializationDepthError,
    SerializationValidationError,
    serialize,
)

__all__ = [
    "JsonArray",
    "JsonBool",
    "JsonGrammar",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonParser",
    "JsonSerializer",
    "JsonString",
    "JsonValue",
    "ParseError",
    "ParseResult",
    "PythonJson",
    "SerializationDepthError",
    "SerializationValidationError",
    "from_python",
    "parse",
    "serialize",
]


def parse(source: str) -> ParseResult[JsonValue] | ParseError:
    """Parse a JSON document into the AST.

    Convenience function for JsonParser().parse(). Failures are returned,
    not raised.

    Args:
        source: JSON source text

    Returns:
        ParseResult holding the root value, or ParseError

    Example:
        >>> from combjson.syntax import parse
        >>> parse("[true, null]").value.to_python()
        [True, None]
        >>> parse('{"a": }').context
        ('object', 'value for key "a"')
    """
    return _default_parser().parse(source)


@cache
def _default_parser() -> JsonParser:
    """Shared parser with default limits (grammar levels built once)."""
    return JsonParser()
