"""JSON string escaping.

Shared by the serializer and by the grammar, which quotes object keys in
label text so a diagnostic always renders on a single line.

Python 3.13+.
"""

__all__ = ["escape_char", "quote_string"]

_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_char(char: str) -> str:
    """Escape one character for use inside a JSON string literal.

    Quote, backslash and the five short-escape controls use their short
    forms; other C0 controls become \\u00XX. Everything else is unchanged.
    """
    escaped = _ESCAPES.get(char)
    if escaped is not None:
        return escaped
    if char < "\x20":
        return f"\\u{ord(char):04x}"
    return char


def quote_string(value: str) -> str:
    """Render value as a JSON string literal, quotes included.

    Example:
        >>> print(quote_string('say "hi"\\n'))
        "say \\"hi\\"\\n"
    """
    return '"' + "".join(escape_char(char) for char in value) + '"'
