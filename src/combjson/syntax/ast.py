"""JSON AST node definitions.

A closed variant: JsonNull | JsonBool | JsonNumber | JsonString |
JsonArray | JsonObject. Nodes are frozen; JsonObject exposes a read-only
mapping. Every node converts to plain Python with to_python(), and
from_python() builds the AST from plain Python values.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from combjson.core import DepthGuard
from combjson.diagnostics import ErrorTemplate, SerializationValidationError

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Nodes
    "JsonNull",
    "JsonBool",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    # Type aliases
    "JsonValue",
    "PythonJson",
    # Conversion
    "from_python",
]


@dataclass(frozen=True, slots=True)
class JsonNull:
    """The JSON literal null."""

    def to_python(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class JsonBool:
    """The JSON literals true and false."""

    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """A JSON number, held as a double.

    Integers and decimals share one representation: ``1`` and ``1.0``
    parse to equal nodes.
    """

    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonString:
    """A JSON string with escapes already decoded."""

    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonArray:
    """An ordered sequence of values."""

    items: tuple[JsonValue, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[PythonJson]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class JsonObject:
    """A mapping from keys to values.

    Keys are unique; when built from pairs with duplicate keys the last
    pair wins. Equality ignores key order.

    Example:
        >>> obj = JsonObject.from_pairs([("a", JsonNumber(1.0)), ("a", JsonNumber(2.0))])
        >>> dict(obj.members)
        {'a': JsonNumber(value=2.0)}
    """

    members: Mapping[str, JsonValue]

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))

    def __hash__(self) -> int:
        return hash(frozenset(self.members.items()))

    def __len__(self) -> int:
        return len(self.members)

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, JsonValue]]) -> JsonObject:
        """Build from (key, value) pairs in document order; last write wins."""
        return cls(dict(pairs))

    def to_python(self) -> dict[str, PythonJson]:
        return {key: value.to_python() for key, value in self.members.items()}


type JsonValue = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject

type PythonJson = (
    None | bool | float | int | str | list[PythonJson] | tuple[PythonJson, ...]
    | dict[str, PythonJson]
)


def from_python(obj: object, *, max_depth: int | None = None) -> JsonValue:
    """Convert plain Python data to the JSON AST.

    bool is checked before int (bool subclasses int); int and float become
    JsonNumber; lists and tuples become JsonArray; mappings with str keys
    become JsonObject.

    Args:
        obj: None, bool, int, float, str, list, tuple or str-keyed mapping
        max_depth: Maximum container nesting (default: MAX_DEPTH)

    Raises:
        TypeError: For values with no JSON counterpart (including non-str keys)
        SerializationValidationError: For ints too large to convert to a double
        DepthLimitExceededError: If containers nest deeper than max_depth
    """
    guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)
    return _from_python(obj, guard)


def _from_python(obj: object, guard: DepthGuard) -> JsonValue:
    match obj:
        case None:
            return JsonNull()
        case bool():
            return JsonBool(obj)
        case int():
            try:
                return JsonNumber(float(obj))
            except OverflowError as e:
                raise SerializationValidationError(ErrorTemplate.integer_out_of_range(obj)) from e
        case float():
            return JsonNumber(float(obj))
        case str():
            return JsonString(obj)
        case list() | tuple():
            with guard:
                return JsonArray(tuple(_from_python(item, guard) for item in obj))
        case Mapping():
            with guard:
                members: dict[str, JsonValue] = {}
                for key, value in obj.items():
                    if not isinstance(key, str):
                        raise TypeError(ErrorTemplate.unsupported_type(type(key).__name__).message)
                    members[key] = _from_python(value, guard)
                return JsonObject(members)
        case _:
            raise TypeError(ErrorTemplate.unsupported_type(type(obj).__name__).message)
