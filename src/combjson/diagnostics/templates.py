"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


def _describe_char(char: str) -> str:
    """Render a single character for a message, escaping invisible ones."""
    if char.isprintable() and char not in ("'", "\\"):
        return f"'{char}'"
    return f"U+{ord(char):04X}"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps every message:
        - Testable in one place
        - Consistently formatted
        - Documented alongside its DiagnosticCode
    """

    # ------------------------------------------------------------------
    # Leaf diagnostics (primitives)
    # ------------------------------------------------------------------

    @staticmethod
    def expected(description: str) -> Diagnostic:
        """Input at the current position did not match.

        Args:
            description: What the parser was looking for (already quoted if literal)

        Returns:
            Diagnostic for EXPECTED_TOKEN
        """
        return Diagnostic(code=DiagnosticCode.EXPECTED_TOKEN, message=f"expected {description}")

    @staticmethod
    def unexpected_eof(description: str) -> Diagnostic:
        """Input ended where more was required.

        Args:
            description: What the parser was looking for

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"unexpected end of input, expected {description}",
            hint="The document appears to be truncated",
        )

    @staticmethod
    def custom(message: str) -> Diagnostic:
        """Failure with a caller-supplied message (fail() primitive).

        Returns:
            Diagnostic for PARSE_FAILED
        """
        return Diagnostic(code=DiagnosticCode.PARSE_FAILED, message=message)

    @staticmethod
    def trailing_data(found: str) -> Diagnostic:
        """A complete value was parsed but input remains.

        Args:
            found: First unconsumed character

        Returns:
            Diagnostic for TRAILING_DATA
        """
        return Diagnostic(
            code=DiagnosticCode.TRAILING_DATA,
            message=f"unexpected trailing data starting with {_describe_char(found)}",
            hint="A document holds exactly one value; wrap several values in an array",
        )

    # ------------------------------------------------------------------
    # JSON lexical diagnostics
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_escape(char: str) -> Diagnostic:
        """Backslash followed by a character that is not a JSON escape.

        Returns:
            Diagnostic for INVALID_ESCAPE
        """
        if char.isprintable():
            msg = f"invalid escape sequence \\{char}"
        else:
            msg = f"invalid escape sequence before {_describe_char(char)}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ESCAPE,
            message=msg,
            hint='Valid escapes are \\" \\\\ \\/ \\b \\f \\n \\r \\t and \\uXXXX',
        )

    @staticmethod
    def invalid_unicode_escape() -> Diagnostic:
        """\\u not followed by exactly four hexadecimal digits.

        Returns:
            Diagnostic for INVALID_UNICODE_ESCAPE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_UNICODE_ESCAPE,
            message="expected 4 hexadecimal digits after \\u",
        )

    @staticmethod
    def unpaired_high_surrogate(code_point: int) -> Diagnostic:
        """High surrogate escape not followed by a low surrogate escape.

        Returns:
            Diagnostic for UNPAIRED_SURROGATE
        """
        return Diagnostic(
            code=DiagnosticCode.UNPAIRED_SURROGATE,
            message=(
                f"high surrogate \\u{code_point:04X} must be followed by a low surrogate escape"
            ),
            hint="Encode characters above U+FFFF as a \\uD800-\\uDBFF \\uDC00-\\uDFFF pair",
        )

    @staticmethod
    def unpaired_low_surrogate(code_point: int) -> Diagnostic:
        """Low surrogate escape without a preceding high surrogate.

        Returns:
            Diagnostic for UNPAIRED_SURROGATE
        """
        return Diagnostic(
            code=DiagnosticCode.UNPAIRED_SURROGATE,
            message=f"unexpected low surrogate \\u{code_point:04X}",
            hint="Encode characters above U+FFFF as a \\uD800-\\uDBFF \\uDC00-\\uDFFF pair",
        )

    @staticmethod
    def control_character(char: str) -> Diagnostic:
        """Unescaped control character inside a string literal.

        Returns:
            Diagnostic for CONTROL_CHARACTER
        """
        return Diagnostic(
            code=DiagnosticCode.CONTROL_CHARACTER,
            message=f"unescaped control character {_describe_char(char)} in string",
            hint="Control characters U+0000-U+001F must be written as escapes",
        )

    @staticmethod
    def invalid_number(detail: str) -> Diagnostic:
        """Malformed numeric literal.

        Args:
            detail: Which part of the number is malformed

        Returns:
            Diagnostic for INVALID_NUMBER
        """
        return Diagnostic(code=DiagnosticCode.INVALID_NUMBER, message=detail)

    @staticmethod
    def number_out_of_range(literal: str) -> Diagnostic:
        """Numeric literal that overflows a double.

        Returns:
            Diagnostic for NUMBER_OUT_OF_RANGE
        """
        shown = literal if len(literal) <= 32 else literal[:29] + "..."
        return Diagnostic(
            code=DiagnosticCode.NUMBER_OUT_OF_RANGE,
            message=f"number {shown} is out of range for a double",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Array/object nesting exceeded the configured limit.

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"maximum nesting depth ({max_depth}) exceeded",
            hint="Configure max_nesting_depth on JsonParser to allow deeper documents",
        )

    # ------------------------------------------------------------------
    # Serialization and grammar defects
    # ------------------------------------------------------------------

    @staticmethod
    def serialization_depth_exceeded(max_depth: int) -> Diagnostic:
        """AST nesting too deep to serialize.

        Returns:
            Diagnostic for SERIALIZATION_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.SERIALIZATION_DEPTH_EXCEEDED,
            message=f"maximum serialization depth ({max_depth}) exceeded",
        )

    @staticmethod
    def non_finite_number(value: float) -> Diagnostic:
        """NaN or infinity cannot be written as JSON.

        Returns:
            Diagnostic for SERIALIZATION_INVALID_NUMBER
        """
        return Diagnostic(
            code=DiagnosticCode.SERIALIZATION_INVALID_NUMBER,
            message=f"cannot serialize non-finite number {value!r}",
        )

    @staticmethod
    def integer_out_of_range(value: int) -> Diagnostic:
        """Python int beyond the range of a double.

        The message gives the bit length rather than the digits: str() of a
        huge int is slow and may exceed the interpreter's digit limit.

        Returns:
            Diagnostic for SERIALIZATION_INVALID_NUMBER
        """
        return Diagnostic(
            code=DiagnosticCode.SERIALIZATION_INVALID_NUMBER,
            message=f"integer of {value.bit_length()} bits is out of range for a JSON number",
            hint="JSON numbers are read as doubles; encode larger integers as strings",
        )

    @staticmethod
    def unsupported_type(type_name: str) -> Diagnostic:
        """Python value with no JSON counterpart.

        Returns:
            Diagnostic for SERIALIZATION_UNSUPPORTED_TYPE
        """
        return Diagnostic(
            code=DiagnosticCode.SERIALIZATION_UNSUPPORTED_TYPE,
            message=f"cannot convert value of type '{type_name}' to JSON",
        )

    @staticmethod
    def zero_consumption(parser_name: str, offset: int) -> Diagnostic:
        """Repetition over a parser that succeeded without consuming input.

        Returns:
            Diagnostic for GRAMMAR_ZERO_CONSUMPTION
        """
        return Diagnostic(
            code=DiagnosticCode.GRAMMAR_ZERO_CONSUMPTION,
            message=(
                f"repeated parser {parser_name} succeeded without consuming input "
                f"at offset {offset}; the repetition would never terminate"
            ),
            hint="Wrap only parsers that always consume input in many()/sep_by()",
        )
