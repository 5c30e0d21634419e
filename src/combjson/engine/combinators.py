"""Derived combinators built on the Parser core.

Multi-parser combinators (seq, choice, sep_by) are written as loops inside a
single closure rather than as folds of binary combinators, so a long
sequence or choice still costs one interpreter frame.
"""

from __future__ import annotations

from combjson.diagnostics import Diagnostic, ErrorTemplate, GrammarError

from .core import Outcome, Parser
from .location import Location, ParseError, ParseResult

__all__ = [
    "between",
    "choice",
    "lookahead",
    "not_followed_by",
    "optional",
    "sep_by",
    "sep_by1",
    "seq",
    "times",
]


def seq(*parsers: Parser[object]) -> Parser[tuple[object, ...]]:
    """Run parsers in order; return their values as a tuple."""
    fns = tuple(p.fn for p in parsers)

    def parse_seq(location: Location) -> Outcome[tuple[object, ...]]:
        values: list[object] = []
        for fn in fns:
            result = fn(location)
            if isinstance(result, ParseError):
                return result
            values.append(result.value)
            location = result.location
        return ParseResult(tuple(values), location)

    return Parser(parse_seq, "seq(" + ", ".join(p.name for p in parsers) + ")")


def choice[T](*parsers: Parser[T]) -> Parser[T]:
    """Left-biased alternation over any number of parsers.

    Same policy as Parser.or_else: the first success wins, a committed
    failure stops the search, and otherwise the furthest failure (earliest
    on ties) is reported.
    """
    if not parsers:
        msg = "choice() requires at least one parser"
        raise ValueError(msg)
    fns = tuple(p.fn for p in parsers)

    def parse_choice(location: Location) -> Outcome[T]:
        furthest: ParseError | None = None
        for fn in fns:
            result = fn(location)
            if isinstance(result, ParseResult) or result.committed:
                return result
            if furthest is None or result.offset > furthest.offset:
                furthest = result
        assert furthest is not None  # parsers is non-empty
        return furthest

    return Parser(parse_choice, "(" + " | ".join(p.name for p in parsers) + ")")


def optional[T, D](parser: Parser[T], default: D = None) -> Parser[T | D]:
    """Run parser; on uncommitted failure succeed with default instead."""
    fn = parser.fn

    def parse_optional(location: Location) -> Outcome[T | D]:
        result = fn(location)
        if isinstance(result, ParseError) and not result.committed:
            return ParseResult(default, location)
        return result

    return Parser(parse_optional, f"{parser.name}?")


def between[T](
    opening: Parser[object], parser: Parser[T], closing: Parser[object]
) -> Parser[T]:
    """Parse opening, parser, closing; keep parser's value."""
    return opening.then(parser).skip(closing)


def times[T](parser: Parser[T], count: int) -> Parser[list[T]]:
    """Exactly count repetitions."""
    fn = parser.fn

    def parse_times(location: Location) -> Outcome[list[T]]:
        values: list[T] = []
        for _ in range(count):
            result = fn(location)
            if isinstance(result, ParseError):
                return result
            values.append(result.value)
            location = result.location
        return ParseResult(values, location)

    return Parser(parse_times, f"{parser.name}{{{count}}}")


def sep_by1[T](parser: Parser[T], separator: Parser[object]) -> Parser[list[T]]:
    """One or more items separated by separator.

    Once a separator has matched, the next item is committed: ``[1,]`` is
    reported as a missing item after the comma, not silently backtracked.
    Raises GrammarError if a separator+item round consumes nothing.
    """
    item, sep = parser.fn, separator.fn
    name = f"sep_by1({parser.name}, {separator.name})"

    def parse_sep_by1(location: Location) -> Outcome[list[T]]:
        first = item(location)
        if isinstance(first, ParseError):
            return first
        values = [first.value]
        location = first.location
        while True:
            after_sep = sep(location)
            if isinstance(after_sep, ParseError):
                if after_sep.committed:
                    return after_sep
                return ParseResult(values, location)
            following = item(after_sep.location)
            if isinstance(following, ParseError):
                return following.commit()
            if following.location.offset == location.offset:
                raise GrammarError(ErrorTemplate.zero_consumption(name, location.offset))
            values.append(following.value)
            location = following.location

    return Parser(parse_sep_by1, name)


def sep_by[T](parser: Parser[T], separator: Parser[object]) -> Parser[list[T]]:
    """Zero or more items separated by separator (see sep_by1).

    The list is empty only when the first item fails without getting past
    the starting Location; a first item that fails deeper is reported.
    """
    inner = sep_by1(parser, separator).fn

    def parse_sep_by(location: Location) -> Outcome[list[T]]:
        result = inner(location)
        if (
            isinstance(result, ParseError)
            and not result.committed
            and result.offset <= location.offset
        ):
            return ParseResult([], location)
        return result

    return Parser(parse_sep_by, f"sep_by({parser.name}, {separator.name})")


def lookahead[T](parser: Parser[T]) -> Parser[T]:
    """Run parser but consume nothing; failures pass through."""
    fn = parser.fn

    def parse_lookahead(location: Location) -> Outcome[T]:
        result = fn(location)
        if isinstance(result, ParseError):
            return result
        return ParseResult(result.value, location)

    return Parser(parse_lookahead, f"&{parser.name}")


def not_followed_by(parser: Parser[object], message: str | Diagnostic) -> Parser[None]:
    """Succeed without consuming iff parser fails here; otherwise fail with message."""
    fn = parser.fn
    diagnostic = message if isinstance(message, Diagnostic) else ErrorTemplate.custom(message)

    def parse_not_followed_by(location: Location) -> Outcome[None]:
        if isinstance(fn(location), ParseError):
            return ParseResult(None, location)
        return ParseError.at(location, diagnostic)

    return Parser(parse_not_followed_by, f"!{parser.name}")
