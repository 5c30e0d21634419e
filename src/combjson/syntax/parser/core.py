"""JSON parser driver.

JsonParser owns one JsonGrammar and runs it against complete in-memory
documents. It is the single entry point that turns a document into either
a JSON AST (wrapped in ParseResult) or a ParseError diagnostic stack.

Architecture:
    Driver -> JsonGrammar (built once, levels cached) -> combinators ->
    primitives -> Location/ParseError. The driver adds only two checks of
    its own: the input size limit (raised, before parsing) and trailing
    data after the value (returned as a TRAILING_DATA ParseError by run()).

Security:
    - max_source_size rejects huge inputs before any work is done
    - max_nesting_depth bounds array/object nesting; it is clamped so that
      a parse can never exhaust the interpreter recursion limit
"""

from __future__ import annotations

import logging

from combjson.constants import FRAMES_PER_NESTING_LEVEL, MAX_DEPTH, MAX_SOURCE_SIZE
from combjson.core import depth_clamp
from combjson.engine import Outcome, ParseError, run
from combjson.syntax.ast import JsonValue

from .rules import JsonGrammar

__all__ = ["JsonParser"]

logger = logging.getLogger(__name__)


class JsonParser:
    """JSON parser built from parser combinators.

    Design:
    - Parsing is a pure function of the document; one JsonParser can be
      reused for any number of documents and shared between threads
    - Failures are returned as ParseError values, never raised
    - Containers nest at most max_nesting_depth deep (default MAX_DEPTH = 32).
      serialize() output parses back to an equal AST for any value within
      that depth; deeper documents need a larger max_nesting_depth, which is
      clamped to what the interpreter recursion limit supports

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MiB)
        max_nesting_depth: Maximum allowed array/object nesting (default: 32)

    Example:
        >>> parser = JsonParser()
        >>> parser.parse("[1, 2]").value
        JsonArray(items=(JsonNumber(value=1.0), JsonNumber(value=2.0)))
        >>> parser.parse("[1,]").format_error()
        'expected value at line 1, column 4 (while parsing array)'
    """

    __slots__ = ("_grammar", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MiB).
                            Set to 0 to disable the size limit (not recommended).
            max_nesting_depth: Maximum array/object nesting (default: MAX_DEPTH).
                              Clamped against sys.getrecursionlimit().
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        requested_depth = max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        self._grammar = JsonGrammar(
            depth_clamp(requested_depth, frames_per_level=FRAMES_PER_NESTING_LEVEL)
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed array/object nesting (after clamping)."""
        return self._grammar.max_depth

    @property
    def grammar(self) -> JsonGrammar:
        """The grammar this parser runs."""
        return self._grammar

    def parse(self, source: str) -> Outcome[JsonValue]:
        """Parse a complete JSON document.

        Args:
            source: The whole document

        Returns:
            ParseResult whose value is the JSON AST, or ParseError

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in JsonParser constructor to increase limit."
            )
            raise ValueError(msg)

        logger.debug("Parsing JSON document (%d characters)", len(source))
        result = run(self._grammar.document, source)
        if isinstance(result, ParseError) and logger.isEnabledFor(logging.DEBUG):
            logger.debug("JSON parse failed: %s", result.format_error())
        return result
