"""Parser type and the core combinators.

A Parser[T] wraps one function, ``Location -> ParseResult[T] | ParseError``.
Every primitive and combinator is a Parser built around such a closure, so
there is no class hierarchy: composition is function composition.

Architecture:
    - Parsers are immutable and hold no mutable state; the same Parser may
      be shared by many combinators and run from any Location, any number
      of times, with identical results for identical inputs.
    - The only state threaded through a parse is the immutable Location.
    - Failures are returned, never raised. The one exception is GrammarError,
      raised when repetition wraps a parser that consumes nothing (a defect
      in the grammar, not in the document).

Backtracking:
    Alternation is uncommitted by default: if the left branch fails, even
    after consuming input, the right branch runs from the original
    Location. commit() marks a parser's failures as committed, and
    alternation/repetition propagate committed failures instead of trying
    something else. When both branches of an alternation fail, the error
    anchored furthest into the input is reported (ties keep the left one).

Closures call ``other.fn`` directly rather than going through __call__ so
that each combinator costs one interpreter frame per nesting level.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from combjson.diagnostics import ErrorTemplate, GrammarError

from .location import Location, ParseError, ParseResult

__all__ = ["Outcome", "Parser", "attempt", "run"]

type Outcome[T] = ParseResult[T] | ParseError


@dataclass(frozen=True, slots=True)
class Parser[T]:
    """Composable parser producing a value of type T.

    Attributes:
        fn: The parse function, Location -> ParseResult[T] | ParseError
        name: Readable description used in reprs and GrammarError messages

    Operators:
        p | q   alternation (or_else)
        p >> q  sequence, keep q's value (then)
        p << q  sequence, keep p's value (skip)
        p & q   sequence, keep both as a tuple (product)
    """

    fn: Callable[[Location], Outcome[T]]
    name: str = "parser"

    def __call__(self, location: Location) -> Outcome[T]:
        """Attempt this parser at location."""
        return self.fn(location)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def parse(self, text: str) -> Outcome[T]:
        """Run against a whole document. See run()."""
        return run(self, text)

    # ------------------------------------------------------------------
    # Value transformation
    # ------------------------------------------------------------------

    def map[U](self, f: Callable[[T], U]) -> Parser[U]:
        """Apply f to the parsed value; failures pass through unmodified."""
        fn = self.fn

        def parse_map(location: Location) -> Outcome[U]:
            result = fn(location)
            if isinstance(result, ParseError):
                return result
            return ParseResult(f(result.value), result.location)

        return Parser(parse_map, self.name)

    def result[U](self, value: U) -> Parser[U]:
        """Replace the parsed value with a constant."""
        fn = self.fn

        def parse_result(location: Location) -> Outcome[U]:
            outcome = fn(location)
            if isinstance(outcome, ParseError):
                return outcome
            return ParseResult(value, outcome.location)

        return Parser(parse_result, self.name)

    def flat_map[U](self, f: Callable[[T], Parser[U]]) -> Parser[U]:
        """Run this parser, then the parser f(value) from where it stopped.

        The sole primitive for context-sensitive grammars: the second
        parser is chosen from the first one's value. Errors from either
        step propagate unchanged.
        """
        fn = self.fn

        def parse_flat_map(location: Location) -> Outcome[U]:
            result = fn(location)
            if isinstance(result, ParseError):
                return result
            return f(result.value).fn(result.location)

        return Parser(parse_flat_map, f"{self.name}.flat_map()")

    def slice(self) -> Parser[str]:
        """Discard the value; return the exact text consumed instead."""
        fn = self.fn

        def parse_slice(location: Location) -> Outcome[str]:
            result = fn(location)
            if isinstance(result, ParseError):
                return result
            return ParseResult(location.slice_to(result.location), result.location)

        return Parser(parse_slice, self.name)

    # ------------------------------------------------------------------
    # Sequencing (derivable from flat_map + map; written out directly)
    # ------------------------------------------------------------------

    def then[U](self, other: Parser[U]) -> Parser[U]:
        """Run self then other; keep other's value."""
        first, second = self.fn, other.fn

        def parse_then(location: Location) -> Outcome[U]:
            result = first(location)
            if isinstance(result, ParseError):
                return result
            return second(result.location)

        return Parser(parse_then, f"{self.name} >> {other.name}")

    def skip(self, other: Parser[object]) -> Parser[T]:
        """Run self then other; keep self's value."""
        first, second = self.fn, other.fn

        def parse_skip(location: Location) -> Outcome[T]:
            result = first(location)
            if isinstance(result, ParseError):
                return result
            after = second(result.location)
            if isinstance(after, ParseError):
                return after
            return ParseResult(result.value, after.location)

        return Parser(parse_skip, f"{self.name} << {other.name}")

    def product[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        """Run self then other; keep both values as a pair."""
        first, second = self.fn, other.fn

        def parse_product(location: Location) -> Outcome[tuple[T, U]]:
            left = first(location)
            if isinstance(left, ParseError):
                return left
            right = second(left.location)
            if isinstance(right, ParseError):
                return right
            return ParseResult((left.value, right.value), right.location)

        return Parser(parse_product, f"{self.name} & {other.name}")

    # ------------------------------------------------------------------
    # Alternation and commitment
    # ------------------------------------------------------------------

    def or_else[U](self, other: Parser[U]) -> Parser[T | U]:
        """Try self; if it fails uncommitted, try other from the same Location.

        Committed failures propagate without trying other. If both fail,
        the error anchored at the larger offset wins; ties keep self's.
        """
        first, second = self.fn, other.fn

        def parse_or(location: Location) -> Outcome[T | U]:
            left = first(location)
            if isinstance(left, ParseResult) or left.committed:
                return left
            right = second(location)
            if isinstance(right, ParseResult) or right.committed:
                return right
            return right if right.offset > left.offset else left

        return Parser(parse_or, f"({self.name} | {other.name})")

    def commit(self) -> Parser[T]:
        """Forbid backtracking past this parser's failures."""
        fn = self.fn

        def parse_commit(location: Location) -> Outcome[T]:
            result = fn(location)
            if isinstance(result, ParseError):
                return result.commit()
            return result

        return Parser(parse_commit, self.name)

    # ------------------------------------------------------------------
    # Repetition
    # ------------------------------------------------------------------

    def many(self) -> Parser[list[T]]:
        """Zero or more repetitions, stopping at the first uncommitted failure.

        The failed attempt leaves the Location where it started. Raises
        GrammarError if the repeated parser succeeds without consuming
        input, since the loop could never end.
        """
        fn, name = self.fn, self.name

        def parse_many(location: Location) -> Outcome[list[T]]:
            values: list[T] = []
            while True:
                result = fn(location)
                if isinstance(result, ParseError):
                    if result.committed:
                        return result
                    return ParseResult(values, location)
                if result.location.offset == location.offset:
                    raise GrammarError(ErrorTemplate.zero_consumption(name, location.offset))
                values.append(result.value)
                location = result.location

        return Parser(parse_many, f"{name}.many()")

    def many1(self) -> Parser[list[T]]:
        """One or more repetitions; fails with the inner failure if none."""
        fn = self.fn
        rest = self.many().fn

        def parse_many1(location: Location) -> Outcome[list[T]]:
            head = fn(location)
            if isinstance(head, ParseError):
                return head
            tail = rest(head.location)
            if isinstance(tail, ParseError):
                return tail
            return ParseResult([head.value, *tail.value], tail.location)

        return Parser(parse_many1, f"{self.name}.many1()")

    # ------------------------------------------------------------------
    # Error context
    # ------------------------------------------------------------------

    def label(self, description: str) -> Parser[T]:
        """On failure, push an outer frame naming the region being parsed."""
        fn = self.fn

        def parse_label(location: Location) -> Outcome[T]:
            result = fn(location)
            if isinstance(result, ParseError):
                return result.with_label(location, description)
            return result

        return Parser(parse_label, description)

    def describe(self, description: str) -> Parser[T]:
        """Replace a failure that made no progress with ``expected {description}``.

        Failures anchored past the starting Location, and committed
        failures, are kept as they are: they already pinpoint a more
        specific defect.
        """
        fn = self.fn
        expected = ErrorTemplate.expected(description)
        truncated = ErrorTemplate.unexpected_eof(description)

        def parse_describe(location: Location) -> Outcome[T]:
            result = fn(location)
            if (
                isinstance(result, ParseError)
                and not result.committed
                and result.offset <= location.offset
            ):
                diagnostic = truncated if location.is_eof else expected
                return ParseError.at(location, diagnostic)
            return result

        return Parser(parse_describe, description)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __or__[U](self, other: Parser[U]) -> Parser[T | U]:
        return self.or_else(other)

    def __rshift__[U](self, other: Parser[U]) -> Parser[U]:
        return self.then(other)

    def __lshift__(self, other: Parser[object]) -> Parser[T]:
        return self.skip(other)

    def __and__[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        return self.product(other)


def attempt[T](parser: Parser[T], location: Location) -> Outcome[T]:
    """Run parser from location without any end-of-input requirement."""
    return parser.fn(location)


def run[T](parser: Parser[T], text: str, *, consume_all: bool = True) -> Outcome[T]:
    """Run parser against a complete in-memory document.

    Args:
        parser: Grammar to run
        text: The whole document
        consume_all: Require the parser to consume the entire text;
            leftover input fails with a TRAILING_DATA frame at its start

    Returns:
        ParseResult with the value and final Location, or ParseError
    """
    result = parser.fn(Location(text, 0))
    if isinstance(result, ParseError) or not consume_all:
        return result
    end = result.location
    if not end.is_eof:
        return ParseError.at(end, ErrorTemplate.trailing_data(end.current))
    return result
