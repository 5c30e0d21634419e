"""Parser-combinator engine.

A small, grammar-agnostic engine: immutable Locations, diagnostic stacks,
primitive matchers and combinators. The JSON grammar in
:mod:`combjson.syntax.parser` is built entirely from these pieces.

Module Organization:
- location.py: Location, ParseResult, Frame, ParseError
- core.py: Parser type, core combinators, run() and attempt()
- primitives.py: literal, char_class, succeed, fail, lazy and friends
- combinators.py: seq, choice, optional, sep_by, lookahead and friends

Example:
    >>> from combjson.engine import literal, choice, run
    >>> yes_no = choice(literal("yes").result(True), literal("no").result(False))
    >>> run(yes_no, "no").value
    False
"""

from .combinators import (
    between,
    choice,
    lookahead,
    not_followed_by,
    optional,
    sep_by,
    sep_by1,
    seq,
    times,
)
from .core import Outcome, Parser, attempt, run
from .location import Frame, Location, ParseError, ParseResult
from .primitives import (
    any_char,
    char_class,
    char_in,
    eof,
    fail,
    lazy,
    literal,
    position,
    succeed,
    take_while,
    take_while1,
)

__all__ = [
    "Frame",
    "Location",
    "Outcome",
    "ParseError",
    "ParseResult",
    "Parser",
    "any_char",
    "attempt",
    "between",
    "char_class",
    "char_in",
    "choice",
    "eof",
    "fail",
    "lazy",
    "literal",
    "lookahead",
    "not_followed_by",
    "optional",
    "position",
    "run",
    "sep_by",
    "sep_by1",
    "seq",
    "succeed",
    "take_while",
    "take_while1",
    "times",
]
