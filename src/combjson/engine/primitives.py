"""Primitive parsers: the leaves every grammar is built from.

Each constructor returns a Parser whose failure is a one-frame ParseError
anchored at the Location the parser was given (never an advanced one).
When no input remains, mismatch frames use the UNEXPECTED_EOF template
instead of EXPECTED_TOKEN.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from combjson.diagnostics import Diagnostic, ErrorTemplate

from .core import Outcome, Parser
from .location import Location, ParseError, ParseResult

__all__ = [
    "any_char",
    "char_class",
    "char_in",
    "eof",
    "fail",
    "lazy",
    "literal",
    "position",
    "succeed",
    "take_while",
    "take_while1",
]


def _mismatch(location: Location, description: str) -> ParseError:
    """Leaf failure for a matcher that found the wrong input (or none)."""
    if location.is_eof:
        return ParseError.at(location, ErrorTemplate.unexpected_eof(description))
    return ParseError.at(location, ErrorTemplate.expected(description))


def literal(expected: str) -> Parser[str]:
    """Match the exact string expected.

    Example:
        >>> literal("null").parse("null")
        ParseResult(value='null', location=Location(offset=4))
        >>> literal("null").parse("nil").message
        "expected 'null'"
    """
    description = f"'{expected}'"
    length = len(expected)

    def parse_literal(location: Location) -> Outcome[str]:
        if location.text.startswith(expected, location.offset):
            return ParseResult(expected, location.advance(length))
        return _mismatch(location, description)

    return Parser(parse_literal, description)


def char_class(predicate: Callable[[str], bool], description: str) -> Parser[str]:
    """Match exactly one character satisfying predicate."""

    def parse_char_class(location: Location) -> Outcome[str]:
        text, offset = location.text, location.offset
        if offset < len(text) and predicate(text[offset]):
            return ParseResult(text[offset], location.advance())
        return _mismatch(location, description)

    return Parser(parse_char_class, description)


def char_in(chars: Iterable[str], description: str | None = None) -> Parser[str]:
    """Match one character from chars."""
    allowed = frozenset(chars)
    if description is None:
        description = "one of " + ", ".join(f"'{c}'" for c in sorted(allowed))
    return char_class(allowed.__contains__, description)


def any_char() -> Parser[str]:
    """Match any single character."""
    return char_class(lambda _: True, "any character")


def take_while(predicate: Callable[[str], bool], name: str = "take_while") -> Parser[str]:
    """Consume the longest run of characters satisfying predicate (maybe empty).

    Always succeeds. Do not repeat it with many(): it can consume nothing.
    """

    def parse_take_while(location: Location) -> Outcome[str]:
        text = location.text
        start = end = location.offset
        size = len(text)
        while end < size and predicate(text[end]):
            end += 1
        return ParseResult(text[start:end], location.advance(end - start))

    return Parser(parse_take_while, name)


def take_while1(predicate: Callable[[str], bool], description: str) -> Parser[str]:
    """Like take_while, but at least one character must match."""
    run = take_while(predicate, description).fn

    def parse_take_while1(location: Location) -> Outcome[str]:
        result = run(location)
        if isinstance(result, ParseResult) and not result.value:
            return _mismatch(location, description)
        return result

    return Parser(parse_take_while1, description)


def succeed[T](value: T) -> Parser[T]:
    """Always match, consuming nothing."""

    def parse_succeed(location: Location) -> Outcome[T]:
        return ParseResult(value, location)

    return Parser(parse_succeed, f"succeed({value!r})")


def fail(message: str | Diagnostic) -> Parser[object]:
    """Always fail with a one-frame error at the current Location.

    Args:
        message: Plain message (PARSE_FAILED) or a template Diagnostic
    """
    diagnostic = message if isinstance(message, Diagnostic) else ErrorTemplate.custom(message)

    def parse_fail(location: Location) -> Outcome[object]:
        return ParseError.at(location, diagnostic)

    return Parser(parse_fail, f"fail({diagnostic.message!r})")


def eof() -> Parser[None]:
    """Match only at end of input."""
    expected = ErrorTemplate.expected("end of input")

    def parse_eof(location: Location) -> Outcome[None]:
        if location.is_eof:
            return ParseResult(None, location)
        return ParseError.at(location, expected)

    return Parser(parse_eof, "eof")


def position() -> Parser[Location]:
    """Return the current Location without consuming anything."""

    def parse_position(location: Location) -> Outcome[Location]:
        return ParseResult(location, location)

    return Parser(parse_position, "position")


def lazy[T](thunk: Callable[[], Parser[T]], name: str = "lazy") -> Parser[T]:
    """Deferred reference to a parser built on demand.

    thunk is invoked each time the parser runs, not when the grammar is
    built, so recursive rules (array -> value -> array) can refer to each
    other without infinite construction.
    """

    def parse_lazy(location: Location) -> Outcome[T]:
        return thunk().fn(location)

    return Parser(parse_lazy, name)
