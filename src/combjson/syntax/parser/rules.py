"""Recursive JSON grammar rules: values, arrays and objects.

Arrays and objects contain values, and values may be arrays or objects.
Building that cycle eagerly would never terminate, so containers refer to
their element rule through lazy(): a thunk invoked at parse time.

Nesting depth is part of the grammar rather than mutable parser state.
The rule for a value at depth d refers lazily to the rule for depth d + 1,
and at the configured maximum the container rules are replaced by a rule
that fails with NESTING_DEPTH_EXCEEDED at the opening bracket. Levels are
built on first use and cached on the grammar.

Error quality is shaped with commit():
    - after '[' or '{' the container is committed
    - after an object key the ':' and value are committed and labeled
      'value for key "<key>"', with the key quoted and escaped as a JSON
      string so the label stays on one line
    - after a ',' the next element is committed, so trailing commas are
      reported at the closing bracket
"""

from __future__ import annotations

import logging

from combjson.constants import MAX_DEPTH
from combjson.diagnostics import ErrorTemplate
from combjson.engine import (
    Parser,
    char_in,
    choice,
    fail,
    lazy,
    literal,
    lookahead,
    sep_by1,
)
from combjson.syntax.ast import JsonArray, JsonObject, JsonValue
from combjson.syntax.escaping import quote_string

from .primitives import json_false, json_null, json_number, json_string, json_true, string_literal
from .whitespace import padded, symbol, whitespace

__all__ = ["JsonGrammar"]

logger = logging.getLogger(__name__)

_comma = symbol(",")
_colon = literal(":")

_object_key: Parser[str] = string_literal.describe("object key").skip(whitespace)


def _array(element: Parser[JsonValue]) -> Parser[JsonArray]:
    """'[' ws ( value *( ',' value ) )? ']' with values padded by whitespace."""
    elements = sep_by1(element, _comma).skip(literal("]"))
    empty = literal("]").result([])
    body = whitespace.then(elements | empty).commit()
    return literal("[").then(body).map(JsonArray).label("array")


def _object(element: Parser[JsonValue]) -> Parser[JsonObject]:
    """'{' ws ( member *( ',' member ) )? '}' with last-write-wins keys."""

    def member_value(key: str) -> Parser[tuple[str, JsonValue]]:
        return (
            _colon.then(element)
            .map(lambda value: (key, value))
            .label(f"value for key {quote_string(key)}")
            .commit()
        )

    member = _object_key.flat_map(member_value)
    members = sep_by1(whitespace.then(member), _comma).skip(literal("}"))
    empty = literal("}").result([])
    body = whitespace.then(members | empty).commit()
    return literal("{").then(body).map(JsonObject.from_pairs).label("object")


class JsonGrammar:
    """The JSON grammar with a nesting limit.

    Immutable once built apart from the level cache, which is filled
    idempotently, so one grammar can be shared by threads parsing
    different documents.

    Attributes:
        max_depth: Number of nested arrays/objects allowed (top-level = 1)
    """

    __slots__ = ("_levels", "_max_depth")

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        if max_depth < 0:
            msg = f"max_depth must be >= 0, got {max_depth}"
            raise ValueError(msg)
        self._max_depth = max_depth
        self._levels: dict[int, Parser[JsonValue]] = {}

    @property
    def max_depth(self) -> int:
        """Maximum allowed container nesting."""
        return self._max_depth

    @property
    def document(self) -> Parser[JsonValue]:
        """Rule for a whole document: one value with surrounding whitespace."""
        return self.value(0)

    def value(self, depth: int = 0) -> Parser[JsonValue]:
        """Rule for a whitespace-padded value nested depth containers deep."""
        level = self._levels.get(depth)
        if level is None:
            level = self._levels.setdefault(depth, self._build_value(depth))
        return level

    def _build_value(self, depth: int) -> Parser[JsonValue]:
        logger.debug("Building JSON grammar level %d (max %d)", depth, self._max_depth)
        if depth >= self._max_depth:
            too_deep = lookahead(char_in("[{", "'[' or '{'")).then(
                fail(ErrorTemplate.nesting_depth_exceeded(self._max_depth)).commit()
            )
            containers: tuple[Parser[JsonValue], ...] = (too_deep,)
        else:
            nested = lazy(lambda: self.value(depth + 1), name="value")
            containers = (_array(nested), _object(nested))
        core = choice(json_null, json_true, json_false, json_number, json_string, *containers)
        return padded(core.describe("value"))
