"""Validator options.

ValidatorOptions is a frozen dataclass — immutable after creation, built
once per validation call from the caller's runtime context.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from wren.validation.messages import FieldError

DEFAULT_ARRAY_LIMIT = 50

# (key, error) -> replacement message, or None to keep the default
type ErrorMessageOverride = Callable[[str, FieldError], str | None]


@dataclass(frozen=True, slots=True)
class ValidatorOptions:
    """Options recognized in the validation context.

    Both fields have sensible defaults. Override what you need::

        validate(data, {"array_limit": 20})
        validate(data, error_message=lambda key, error: translate(key, error.code))
    """

    # Max elements per array field before an ``array`` error replaces
    # per-element validation
    array_limit: int = DEFAULT_ARRAY_LIMIT

    # Consulted before every default message
    error_message: ErrorMessageOverride | None = None

    @classmethod
    def from_context(cls, context: Mapping[str, Any]) -> ValidatorOptions:
        """Pick the recognized options out of a runtime context mapping.

        Unknown keys are left for the caller's callback.

        Raises:
            ConfigurationError: If ``array_limit`` is not a non-negative
                integer or ``error_message`` is not callable.
        """
        array_limit = context.get("array_limit")
        if array_limit is None:
            array_limit = DEFAULT_ARRAY_LIMIT
        elif isinstance(array_limit, bool) or not isinstance(array_limit, int) or array_limit < 0:
            msg = f"array_limit must be a non-negative integer, got {array_limit!r}"
            raise ConfigurationError(msg)

        error_message = context.get("error_message")
        if error_message is not None and not callable(error_message):
            msg = f"error_message must be callable, got {type(error_message).__name__}"
            raise ConfigurationError(msg)

        return cls(array_limit=array_limit, error_message=error_message)
