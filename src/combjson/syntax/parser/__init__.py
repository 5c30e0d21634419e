"""JSON parser module.

The JSON grammar and its driver, built on :mod:`combjson.engine`.

Module Organization:
- core.py: JsonParser driver (size/depth limits, run the grammar)
- rules.py: JsonGrammar (values, arrays, objects; recursive via lazy())
- primitives.py: Scalar rules (null, booleans, numbers, strings)
- whitespace.py: JSON whitespace and token helpers

Public API:
    JsonParser: Main parser class
    JsonGrammar: The grammar, for running rules directly (advanced usage)
"""

from combjson.syntax.parser.core import JsonParser
from combjson.syntax.parser.rules import JsonGrammar

__all__ = ["JsonGrammar", "JsonParser"]
