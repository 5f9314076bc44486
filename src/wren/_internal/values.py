"""Shape predicates and display helpers shared across wren modules."""

from collections.abc import Mapping, Sequence
from typing import Any, Final


class _Missing:
    """Marker for a key absent from its source (as opposed to ``None``)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def is_object(value: object) -> bool:
    """True for plain key/value structures."""
    return isinstance(value, Mapping)


def is_array(value: object) -> bool:
    """True for sequences that are not text or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def stringify(value: Any) -> str:
    """Primitives to string; ``None``, containers and other objects to ``""``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def type_name(value: Any) -> str:
    """A short, language-neutral name for the runtime type of *value*."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    return type(value).__name__
