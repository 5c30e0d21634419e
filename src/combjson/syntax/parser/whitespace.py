"""Whitespace handling for the JSON grammar.

JSON whitespace (RFC 8259 ``ws``) is space, horizontal tab, line feed and
carriage return. Nothing else is insignificant: form feed, vertical tab,
NBSP and other Unicode spaces are syntax errors between tokens.
"""

from combjson.constants import JSON_WHITESPACE
from combjson.engine import Parser, literal, take_while

__all__ = ["is_json_whitespace", "padded", "symbol", "whitespace"]


def is_json_whitespace(char: str) -> bool:
    """Return True for the four JSON whitespace characters."""
    return char in JSON_WHITESPACE


# Zero or more whitespace characters. Succeeds without consuming on
# non-whitespace, so it must never be wrapped in many().
whitespace: Parser[str] = take_while(is_json_whitespace, "whitespace")


def padded[T](parser: Parser[T]) -> Parser[T]:
    """Skip whitespace on both sides of parser."""
    return whitespace.then(parser).skip(whitespace)


def symbol(char: str) -> Parser[str]:
    """Structural character followed by optional whitespace."""
    return literal(char).skip(whitespace)
