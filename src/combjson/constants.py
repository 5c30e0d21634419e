"""Shared constants for combjson.

Centralized configuration constants used across the syntax, engine and
serializer packages. Placing constants here avoids circular imports.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing/serialization
- Input limits: DoS prevention via size constraints
- Character sets: JSON lexical classes

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "FRAMES_PER_NESTING_LEVEL",
    "RESERVED_STACK_FRAMES",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Character sets
    "JSON_WHITESPACE",
    "ASCII_DIGITS",
    "HEX_DIGITS",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# One limit is shared by the parser (array/object nesting) and the
# serializer (AST traversal). The parser is a recursive evaluator over the
# combinator tree, so each nesting level costs a fixed number of Python
# stack frames; the effective parser limit is clamped against
# sys.getrecursionlimit() by core.depth_guard.depth_clamp().

# Unified maximum nesting depth for parsing and serialization.
MAX_DEPTH: int = 32

# Python stack frames consumed by one array/object nesting level in the
# JSON grammar (value -> container -> elements -> value).
FRAMES_PER_NESTING_LEVEL: int = 20

# Frames kept free for the driver, logging and the caller's own stack.
RESERVED_STACK_FRAMES: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MiB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# CHARACTER SETS
# ============================================================================

# RFC 8259 insignificant whitespace: space, tab, line feed, carriage return.
JSON_WHITESPACE: frozenset[str] = frozenset(" \t\n\r")

# ASCII digits only. str.isdigit() accepts Unicode digits like '²'.
ASCII_DIGITS: frozenset[str] = frozenset("0123456789")

HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
