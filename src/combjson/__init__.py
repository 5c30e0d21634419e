"""combjson - JSON parsing with a parser-combinator engine.

A small, general parser-combinator engine (immutable locations, composable
parsers, diagnostics as data) and a complete RFC 8259 JSON grammar built
from it. Failures carry a stack of labeled frames, so errors read like
``expected ':' at line 3, column 12 (while parsing value for key "a")``.

Public API:
    parse_json - Parse JSON text to the AST (raises JsonSyntaxError)
    loads - Parse JSON text to plain Python values (raises JsonSyntaxError)
    serialize_json - Serialize the AST to JSON text
    dumps - Serialize plain Python values to JSON text
    JsonParser - Configurable parser returning ParseResult | ParseError

Exceptions:
    CombJsonError - Base exception class
    JsonSyntaxError - Document is not valid JSON
    GrammarError - Defective combinator grammar

Submodules:
    combjson.engine - Parser combinator engine (Location, Parser, combinators)
    combjson.syntax - JSON AST, grammar, parser driver and serializer
    combjson.diagnostics - Diagnostic codes, templates and formatter
"""

from .diagnostics import CombJsonError, GrammarError, JsonSyntaxError
from .engine import ParseError, ParseResult
from .syntax import JsonParser, JsonValue, PythonJson, from_python
from .syntax import parse as _parse
from .syntax import serialize as serialize_json

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("combjson")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# JSON standard conformance
__json_spec_version__ = "RFC 8259"
__spec_url__ = "https://www.rfc-editor.org/rfc/rfc8259"

__all__ = [
    "CombJsonError",
    "GrammarError",
    "JsonParser",
    "JsonSyntaxError",
    "JsonValue",
    "ParseError",
    "ParseResult",
    "PythonJson",
    "__json_spec_version__",
    "__spec_url__",
    "__version__",
    "dumps",
    "loads",
    "parse_json",
    "serialize_json",
]


def parse_json(source: str) -> JsonValue:
    """Parse JSON source into the AST.

    Args:
        source: JSON source text

    Returns:
        The root JSON value

    Raises:
        JsonSyntaxError: If source is not a valid JSON document
        ValueError: If source exceeds the default size limit

    Example:
        >>> from combjson import parse_json
        >>> parse_json("[1, 2, 3]")
        JsonArray(items=(JsonNumber(value=1.0), JsonNumber(value=2.0), JsonNumber(value=3.0)))
    """
    result = _parse(source)
    if isinstance(result, ParseError):
        raise JsonSyntaxError(result)
    return result.value


def loads(source: str) -> PythonJson:
    """Parse JSON source into plain Python values.

    Objects become dicts, arrays become lists and every number becomes a
    float.

    Raises:
        JsonSyntaxError: If source is not a valid JSON document

    Example:
        >>> from combjson import loads
        >>> loads('{"a": [true, null], "a": "x"}')
        {'a': 'x'}
    """
    return parse_json(source).to_python()


def dumps(obj: object, *, indent: int | None = None, sort_keys: bool = False) -> str:
    """Serialize plain Python values to JSON text.

    Raises:
        TypeError: For values with no JSON counterpart
        SerializationValidationError: For NaN, infinities and ints beyond
            the range of a double
        DepthLimitExceededError: If containers nest deeper than MAX_DEPTH
    """
    return serialize_json(from_python(obj), indent=indent, sort_keys=sort_keys)
