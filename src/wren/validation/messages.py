"""Error descriptors and default messages.

Every error has a ``code``. The caller's ``error_message`` hook sees the
index-free key and the descriptor before the default message is built::

    def error_message(key: str, error: FieldError) -> str | None:
        if error.code == "required":
            return translate(f"{key}.required")
        return None  # keep the default
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Literal

from wren._internal.values import stringify, type_name
from wren.config import ErrorMessageOverride

# foo[1].bar -> foo.bar
_INDEX_RE = re.compile(r"\[\s*\d+\s*\]")
_CAMEL_RE = re.compile(r"([a-z])([A-Z])")


@dataclass(frozen=True, slots=True)
class RequiredError:
    received: str
    code: Literal["required"] = field(default="required", init=False)


@dataclass(frozen=True, slots=True)
class TypeMismatch:
    expected: str
    received: str
    code: Literal["type"] = field(default="type", init=False)


@dataclass(frozen=True, slots=True)
class ArrayLimitExceeded:
    limit: int
    length: int
    code: Literal["array"] = field(default="array", init=False)


@dataclass(frozen=True, slots=True)
class ExceptionRaised:
    error: BaseException
    code: Literal["exception"] = field(default="exception", init=False)


type FieldError = RequiredError | TypeMismatch | ArrayLimitExceeded | ExceptionRaised


def get_key(path: str) -> str:
    """Key for overrides and translations: ``foo[1].bar`` -> ``foo.bar``."""
    return _INDEX_RE.sub("", path)


def display_name(key: str) -> str:
    """Human-readable field name from the last key segment.

    camelCase is split into words, underscores become spaces, and the
    first letter is capitalized: ``items[0].unitPrice`` -> ``Unit Price``,
    ``first_name`` -> ``First name``.
    """
    name = key.rsplit(".", 1)[-1]
    rest = _CAMEL_RE.sub(lambda m: f"{m[1]} {m[2]}", name[1:]).replace("_", " ")
    return f"{name[:1].upper()}{rest}"


def received_name(value: Any) -> str:
    """The value itself when it has a text form, else its type name."""
    return stringify(value) or type_name(value)


def default_message(key: str, error: FieldError) -> str:
    match error:
        case RequiredError():
            return f"{display_name(key)} is required"
        case TypeMismatch(expected=expected, received=received):
            return f"Expected '{expected}', received '{received}'"
        case ArrayLimitExceeded(limit=limit, length=length):
            return f"Array length {length} is greater than limit {limit}"
        case ExceptionRaised(error=exc):
            return f"Exception: {exc}"
    msg = f"Unknown error descriptor: {error!r}"
    raise TypeError(msg)


def compose(path: str, error: FieldError, override: ErrorMessageOverride | None = None) -> str:
    """Build the message for *error* at *path*, consulting *override* first."""
    key = get_key(path)
    if override is not None:
        message = override(key, error)
        if message is not None:
            return message
    return default_message(key, error)
