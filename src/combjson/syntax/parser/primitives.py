"""Scalar JSON rules: literals, numbers and strings.

Built from the engine's primitives and combinators. These rules are not
recursive, so they are constructed once at import time and shared by every
grammar level and every JsonParser.

Number grammar (RFC 8259):
    number = [ "-" ] int [ frac ] [ exp ]
    int    = "0" / ( digit1-9 *DIGIT )
    frac   = "." 1*DIGIT
    exp    = ( "e" / "E" ) [ "-" / "+" ] 1*DIGIT

String grammar:
    string = quotation-mark *char quotation-mark
    char   = unescaped / "\\" ( '"' / "\\" / "/" / "b" / "f" / "n" / "r" / "t" / "u" 4HEXDIG )

A \\u escape in the high-surrogate range must be followed immediately by a
low-surrogate \\u escape; the pair decodes to one code point.
"""

import math

from combjson.constants import ASCII_DIGITS, HEX_DIGITS
from combjson.diagnostics import ErrorTemplate
from combjson.engine import (
    Location,
    Outcome,
    ParseError,
    ParseResult,
    Parser,
    any_char,
    char_class,
    char_in,
    choice,
    fail,
    literal,
    lookahead,
    not_followed_by,
    optional,
    seq,
    succeed,
    take_while,
    take_while1,
)
from combjson.syntax.ast import JsonBool, JsonNull, JsonNumber, JsonString

__all__ = [
    "json_false",
    "json_null",
    "json_number",
    "json_string",
    "json_true",
    "string_literal",
]

# Unicode escape sequence constants.
_UNICODE_ESCAPE_LEN: int = 4
_HIGH_SURROGATE_START: int = 0xD800
_HIGH_SURROGATE_END: int = 0xDBFF
_LOW_SURROGATE_START: int = 0xDC00
_LOW_SURROGATE_END: int = 0xDFFF

_CONTROL_LIMIT: str = "\x20"

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _is_digit(char: str) -> bool:
    return char in ASCII_DIGITS


# ============================================================================
# LITERALS
# ============================================================================

json_null: Parser[JsonNull] = literal("null").result(JsonNull())
json_true: Parser[JsonBool] = literal("true").result(JsonBool(True))
json_false: Parser[JsonBool] = literal("false").result(JsonBool(False))

# ============================================================================
# NUMBERS
# ============================================================================

_digits = take_while1(_is_digit, "digit")

_int_part = choice(
    literal("0").skip(
        not_followed_by(
            char_class(_is_digit, "digit"),
            ErrorTemplate.invalid_number("leading zeros are not allowed"),
        )
    ),
    seq(char_class(lambda c: "1" <= c <= "9", "digit"), take_while(_is_digit)),
).describe("digit")

_fraction = literal(".").then(_digits.describe("digit after decimal point").commit())

_exponent = char_in("eE", "exponent").then(
    seq(optional(char_in("+-", "sign")), _digits.describe("digit in exponent")).commit()
)

_number_literal: Parser[str] = seq(
    optional(literal("-")),
    _int_part,
    optional(_fraction),
    optional(_exponent),
).slice()


def _number_from_literal(literal_parser: Parser[str]) -> Parser[JsonNumber]:
    """Convert the matched literal to a double, rejecting overflow to infinity."""
    inner = literal_parser.fn

    def parse_number(location: Location) -> Outcome[JsonNumber]:
        result = inner(location)
        if isinstance(result, ParseError):
            return result
        value = float(result.value)
        if math.isinf(value):
            diagnostic = ErrorTemplate.number_out_of_range(result.value)
            return ParseError.at(location, diagnostic, committed=True)
        return ParseResult(JsonNumber(value), result.location)

    return Parser(parse_number, "number")


json_number: Parser[JsonNumber] = _number_from_literal(_number_literal).label("number")

# ============================================================================
# STRINGS
# ============================================================================


def _parse_hex4(location: Location) -> Outcome[int]:
    """Exactly four hexadecimal digits, as an integer code unit."""
    digits = location.text[location.offset : location.offset + _UNICODE_ESCAPE_LEN]
    if len(digits) == _UNICODE_ESCAPE_LEN and all(c in HEX_DIGITS for c in digits):
        return ParseResult(int(digits, 16), location.advance(_UNICODE_ESCAPE_LEN))
    return ParseError.at(location, ErrorTemplate.invalid_unicode_escape())


_hex4: Parser[int] = Parser(_parse_hex4, "hex4")

_low_surrogate_escape: Parser[int | None] = optional(literal("\\u").then(_hex4))


def _decode_unicode_escape(code_unit: int) -> Parser[str]:
    """Turn one \\u code unit into a character, pairing surrogates."""
    if _LOW_SURROGATE_START <= code_unit <= _LOW_SURROGATE_END:
        return fail(ErrorTemplate.unpaired_low_surrogate(code_unit))
    if not _HIGH_SURROGATE_START <= code_unit <= _HIGH_SURROGATE_END:
        return succeed(chr(code_unit))

    def combine(low: int | None) -> Parser[str]:
        if low is None or not _LOW_SURROGATE_START <= low <= _LOW_SURROGATE_END:
            return fail(ErrorTemplate.unpaired_high_surrogate(code_unit))
        code_point = 0x10000 + ((code_unit - _HIGH_SURROGATE_START) << 10) + (
            low - _LOW_SURROGATE_START
        )
        return succeed(chr(code_point))

    return _low_surrogate_escape.flat_map(combine)


_simple_escape = char_in(_SIMPLE_ESCAPES, "escape character").map(_SIMPLE_ESCAPES.__getitem__)

_unicode_escape = literal("u").then(_hex4.flat_map(_decode_unicode_escape).commit())

# Reports the offending character without consuming it, so the frame is
# anchored at the character after the backslash. Only reached once the
# valid escapes have failed, so the failure is committed.
_invalid_escape = lookahead(any_char()).flat_map(
    lambda char: fail(ErrorTemplate.invalid_escape(char)).commit()
)

_escape = literal("\\").then(choice(_simple_escape, _unicode_escape, _invalid_escape).commit())

# Run of ordinary characters: anything but quote, backslash and C0 controls.
_unescaped = take_while1(
    lambda c: c != '"' and c != "\\" and c >= _CONTROL_LIMIT, "string character"
)

_control_character = lookahead(
    char_class(lambda c: c < _CONTROL_LIMIT, "control character")
).flat_map(
    lambda char: fail(ErrorTemplate.control_character(char)).commit()
)

_string_body = choice(_unescaped, _escape, _control_character).many().map("".join)

string_literal: Parser[str] = (
    literal('"').then(_string_body.skip(literal('"')).commit()).label("string")
)

json_string: Parser[JsonString] = string_literal.map(JsonString)
