"""Coercion rules — arbitrary values to the kind a schema expects.

Each rule is a pure function of the value. Failure is the ``NO_VALUE``
sentinel, never an exception, so the engine can record a ``type`` error
and keep walking.

Form submissions arrive as lists of strings, so the rules are lenient
in one direction: a bare scalar satisfies an array field, and a
one-element list satisfies a scalar field.
"""

import math
import re
from typing import Any, Final, Literal

from wren._internal.values import is_array, is_object
from wren.http.forms import UploadFile
from wren.schema import Kind

type Expected = Kind | Literal["array", "object"]


class _NoValue:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_VALUE"


NO_VALUE: Final = _NoValue()

_TRUE: Final = ("true", "1")
_FALSE: Final = ("false", "0")

# Numeric text grammar: ASCII digits only, no "_" separators, no "inf"/"nan"
_DECIMAL_RE: Final = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE: Final = re.compile(r"[+-]?[0-9]+")
_RADIX_RE: Final = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY_RE: Final = re.compile(r"([+-]?)Infinity")


def coerce(value: Any, expected: Expected) -> Any:
    """Convert *value* to *expected*, or return ``NO_VALUE``."""
    if expected == "object":
        return value if is_object(value) else NO_VALUE

    if expected == "array":
        return value if is_array(value) else [value]

    # Scalar fields submitted through a multi-valued source
    if is_array(value) and len(value) == 1:
        value = value[0]

    match expected:
        case Kind.STRING:
            return to_string(value)
        case Kind.BOOLEAN:
            return to_boolean(value)
        case Kind.NUMBER:
            return to_number(value)
        case Kind.BIGINT:
            return to_bigint(value)
        case Kind.FILE:
            return value if isinstance(value, UploadFile) else NO_VALUE
    return NO_VALUE


def to_string(value: Any) -> Any:
    if value is None:
        return NO_VALUE
    return _text(value)


def _text(value: Any) -> str:
    # Sequences join their items with commas; holes render empty
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if is_array(value):
        return ",".join(_text(item) for item in value)
    return str(value)


def to_boolean(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        return NO_VALUE
    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
    return NO_VALUE


def to_number(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None or is_array(value) or is_object(value):
        return NO_VALUE
    text = (value if isinstance(value, str) else str(value)).strip()
    if not text:
        return 0
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    if _RADIX_RE.fullmatch(text):
        return float(int(text, 0))
    if match := _INFINITY_RE.fullmatch(text):
        return -math.inf if match[1] == "-" else math.inf
    return NO_VALUE


def to_bigint(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else NO_VALUE
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INTEGER_RE.fullmatch(text):
            return int(text)
        if _RADIX_RE.fullmatch(text):
            return int(text, 0)
    return NO_VALUE
