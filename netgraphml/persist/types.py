"""Value kinds understood by the GraphML readers and writers.

Every attribute value crossing the GraphML boundary belongs to one of the
:class:`ValueKind` members.  Translation between Python types, ``attr.type``
strings and text goes through the lookup tables below; nothing outside this
module inspects runtime types.
"""
from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, List, Mapping

import numpy as np

from ..errors import UnsupportedTypeKind, ValueParseError


class ValueKind(str, Enum):
    """Closed set of value kinds; the member value is the emitted ``attr.type``."""

    INT = "int"
    BOOL = "boolean"
    DOUBLE = "double"
    STRING = "string"
    VECTOR_DOUBLE = "vector_double"


VECTOR_SIGNIFICANT_DIGITS = 10

# Keyed by exact type so that ``bool`` never resolves as ``int``.
_TYPE_KINDS: Mapping[type, ValueKind] = MappingProxyType(
    {
        int: ValueKind.INT,
        np.int32: ValueKind.INT,
        np.int64: ValueKind.INT,
        bool: ValueKind.BOOL,
        np.bool_: ValueKind.BOOL,
        float: ValueKind.DOUBLE,
        np.float32: ValueKind.DOUBLE,
        np.float64: ValueKind.DOUBLE,
        str: ValueKind.STRING,
        list: ValueKind.VECTOR_DOUBLE,
        tuple: ValueKind.VECTOR_DOUBLE,
        np.ndarray: ValueKind.VECTOR_DOUBLE,
    }
)

_ATTR_TYPE_KINDS: Mapping[str, ValueKind] = MappingProxyType(
    {
        "int": ValueKind.INT,
        "long": ValueKind.INT,
        "boolean": ValueKind.BOOL,
        "float": ValueKind.DOUBLE,
        "double": ValueKind.DOUBLE,
        "string": ValueKind.STRING,
        "vector_float": ValueKind.VECTOR_DOUBLE,
        "vector_double": ValueKind.VECTOR_DOUBLE,
    }
)

_VECTOR_DTYPES = frozenset({np.dtype(np.float32), np.dtype(np.float64)})

_BOOL_TEXT: Mapping[str, bool] = MappingProxyType(
    {"true": True, "false": False, "1": True, "0": False}
)

# ASCII digits only, no digit separators.
_INT_TEXT = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DOUBLE_TEXT = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def resolve_kind(value_type: Any) -> ValueKind:
    """Return the :class:`ValueKind` for a declared ``value_type``.

    ``value_type`` may already be a :class:`ValueKind` or one of the Python
    and numpy types listed in the lookup table.
    """

    if isinstance(value_type, ValueKind):
        return value_type
    try:
        return _TYPE_KINDS[value_type]
    except (KeyError, TypeError):
        raise UnsupportedTypeKind(f"No GraphML type for {value_type!r}") from None


def to_attr_type(value_type: Any) -> str:
    """Return the ``attr.type`` string written for ``value_type``."""

    return resolve_kind(value_type).value


def from_attr_type(attr_type: str) -> ValueKind:
    """Return the :class:`ValueKind` declared by an ``attr.type`` string."""

    try:
        return _ATTR_TYPE_KINDS[attr_type]
    except (KeyError, TypeError):
        raise UnsupportedTypeKind(f"Unsupported attr.type: {attr_type!r}") from None


def kind_of(value: Any) -> ValueKind:
    """Return the kind of a runtime ``value``.

    Vectors must be one-dimensional and hold only float32/float64 elements.
    """

    kind = resolve_kind(type(value))
    if kind is not ValueKind.VECTOR_DOUBLE:
        return kind
    if isinstance(value, np.ndarray):
        if value.ndim != 1 or value.dtype not in _VECTOR_DTYPES:
            raise UnsupportedTypeKind(
                f"Unsupported array: ndim={value.ndim}, dtype={value.dtype}"
            )
        return kind
    for element in value:
        if _TYPE_KINDS.get(type(element)) is not ValueKind.DOUBLE:
            raise UnsupportedTypeKind(
                f"Vector elements must be floating point, got {type(element).__name__}"
            )
    return kind


def _parse_int(text: str) -> int:
    text = text.strip()
    if not _INT_TEXT.fullmatch(text):
        raise ValueError(f"invalid integer literal: {text!r}")
    return int(text)


def _parse_bool(text: str) -> bool:
    try:
        return _BOOL_TEXT[text.strip().lower()]
    except KeyError:
        raise ValueError(f"invalid boolean literal: {text!r}") from None


def _parse_double(text: str) -> float:
    text = text.strip()
    if not _DOUBLE_TEXT.fullmatch(text):
        raise ValueError(f"invalid floating point literal: {text!r}")
    return float(text)


def _parse_string(text: str) -> str:
    return text


def _parse_vector(text: str) -> List[float]:
    if not text.strip():
        return []
    return [_parse_double(part) for part in text.split(",")]


_PARSERS: Mapping[ValueKind, Callable[[str], Any]] = MappingProxyType(
    {
        ValueKind.INT: _parse_int,
        ValueKind.BOOL: _parse_bool,
        ValueKind.DOUBLE: _parse_double,
        ValueKind.STRING: _parse_string,
        ValueKind.VECTOR_DOUBLE: _parse_vector,
    }
)


def parse_value(kind: ValueKind, text: str | None) -> Any:
    """Parse ``text`` as a value of ``kind``."""

    text = text or ""
    try:
        return _PARSERS[kind](text)
    except ValueError as exc:
        raise ValueParseError(f"Cannot parse {text!r} as {kind.value}: {exc}") from exc


def _format_int(value: Any) -> str:
    return str(int(value))


def _format_bool(value: Any) -> str:
    return "true" if value else "false"


def _format_double(value: Any) -> str:
    return repr(float(value))


def _format_string(value: Any) -> str:
    return value


def _format_vector(value: Any) -> str:
    return ", ".join(f"{float(x):.{VECTOR_SIGNIFICANT_DIGITS}g}" for x in value)


_FORMATTERS: Mapping[ValueKind, Callable[[Any], str]] = MappingProxyType(
    {
        ValueKind.INT: _format_int,
        ValueKind.BOOL: _format_bool,
        ValueKind.DOUBLE: _format_double,
        ValueKind.STRING: _format_string,
        ValueKind.VECTOR_DOUBLE: _format_vector,
    }
)


def format_value(value: Any) -> str:
    """Render ``value`` as GraphML text.

    Vector elements keep :data:`VECTOR_SIGNIFICANT_DIGITS` significant
    digits; scalar doubles are written in shortest round-trip form.
    """

    return _FORMATTERS[kind_of(value)](value)


def format_as(kind: ValueKind, value: Any) -> str:
    """Render ``value`` for a key declared with ``kind``.

    Integers widen to doubles; any other mismatch raises
    :class:`UnsupportedTypeKind`.
    """

    actual = kind_of(value)
    if actual is not kind and not (kind is ValueKind.DOUBLE and actual is ValueKind.INT):
        raise UnsupportedTypeKind(f"Cannot write a {actual.value} value under a {kind.value} key")
    return _FORMATTERS[kind](value)


__all__ = [
    "VECTOR_SIGNIFICANT_DIGITS",
    "ValueKind",
    "format_as",
    "format_value",
    "from_attr_type",
    "kind_of",
    "parse_value",
    "resolve_kind",
    "to_attr_type",
]
