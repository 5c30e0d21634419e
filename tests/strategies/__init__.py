"""Hypothesis strategies for combjson property-based testing.

Strategies are organized by domain:

- json: JSON AST nodes and JSON source text (with arbitrary whitespace)

Usage:
    from tests.strategies import json_values, padded_sources
    from tests.strategies.json import json_strings, whitespace_runs
"""

from .json import (
    JSON_WHITESPACE_CHARS,
    TRICKY_STRING_CHARS,
    json_bool_nodes,
    json_documents,
    json_null_nodes,
    json_number_nodes,
    json_scalar_nodes,
    json_string_nodes,
    json_strings,
    json_values,
    padded_sources,
    whitespace_runs,
)

__all__ = [
    "JSON_WHITESPACE_CHARS",
    "TRICKY_STRING_CHARS",
    "json_bool_nodes",
    "json_documents",
    "json_null_nodes",
    "json_number_nodes",
    "json_scalar_nodes",
    "json_string_nodes",
    "json_strings",
    "json_values",
    "padded_sources",
    "whitespace_runs",
]
