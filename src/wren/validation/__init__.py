"""Schema validation — coerce untyped input, collect path-keyed errors.

Usage::

    from wren.validation import for_schema

    validate_signup = for_schema(
        {
            "name": "string",
            "age": "number",
            "email?": "string",
            "tags": ["string"],
            "address": {"street": "string", "city": "string"},
        },
        lambda data, issues, ctx: (
            issues.age.push("Must be 18 or older") if data["age"] < 18 else None
        ),
    )

    result = validate_signup(await request.form())
    if not result:
        # result.errors == {"age": FieldErrors(value="12", errors=["Must be 18 or older"])}
        ...

With runtime context::

    def check_city(data, issues, ctx):
        if data["address"]["city"] not in ctx["cities"]:
            issues.address.city.push("Unknown city")

    validate_address = for_schema(address_schema, using_context(), check_city)
    result = validate_address(form, {"cities": cities}, array_limit=20)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from wren._internal.values import is_array, is_object
from wren.config import ValidatorOptions
from wren.schema import ObjectOf, parse_schema
from wren.validation.engine import Walker
from wren.validation.inputs import normalize_input
from wren.validation.messages import ExceptionRaised, TypeMismatch, compose
from wren.validation.navigation import FormHelper, Issues, form_helper
from wren.validation.result import Errors, FieldErrors, ValidationResult, add_error

__all__ = [
    "ContextMarker",
    "FieldErrors",
    "FormHelper",
    "Issues",
    "SchemaValidator",
    "ValidationResult",
    "ValidatorCallback",
    "for_schema",
    "form_helper",
    "using_context",
    "validate",
]

logger = logging.getLogger("wren.validation")

# (safe_data, issues, context) -> None
type ValidatorCallback = Callable[[dict[str, Any], Issues, Mapping[str, Any]], object]


@dataclass(frozen=True, slots=True)
class ContextMarker:
    """Marks a validator whose callback reads runtime context.

    The context itself is passed per call.
    """


def using_context() -> ContextMarker:
    """Declare that the callback expects a runtime context.

    ``for_schema(schema, using_context(), callback)`` reads better than
    passing the callback positionally when the callback uses ``ctx``.
    """
    return ContextMarker()


class SchemaValidator:
    """A callable validator bound to one normalized schema.

    The property tree is built once and never mutated, so a single
    validator can be shared across threads and concurrent requests.
    """

    __slots__ = ("_callback", "_root")

    def __init__(self, schema: Mapping[str, Any], callback: ValidatorCallback | None = None) -> None:
        self._root: ObjectOf = parse_schema(schema)
        self._callback = callback

    @property
    def root(self) -> ObjectOf:
        """The normalized property tree."""
        return self._root

    def __call__(
        self,
        input: Any,  # noqa: A002
        context: Mapping[str, Any] | None = None,
        /,
        **options: Any,
    ) -> ValidationResult:
        """Validate *input*.

        Args:
            input: A mapping, or a multi-valued source (``FormData``,
                ``QueryParams``, or any multidict with ``getlist``).
            context: Runtime context for the callback. May carry the
                options ``array_limit`` and ``error_message``.
            **options: Options merged over *context*.

        Returns:
            A ``ValidationResult``. Never raises for bad input.

        Raises:
            ConfigurationError: If the options are invalid.
        """
        ctx: dict[str, Any] = {**(context or {}), **options}
        opts = ValidatorOptions.from_context(ctx)
        errors: Errors = {}
        data: dict[str, Any] = {}

        source = normalize_input(input)
        try:
            if _check_shape(source, errors, opts):
                data, safe_data = Walker(opts, errors).walk(self._root, source)
                if self._callback is not None:
                    self._callback(safe_data, Issues(source, errors), ctx)
        except Exception as exc:
            logger.debug("Validation raised; reporting as a root error", exc_info=True)
            add_error(errors, "", compose("", ExceptionRaised(error=exc), opts.error_message))

        return ValidationResult(success=not errors, data=data, errors=errors)


def _check_shape(source: Any, errors: Errors, opts: ValidatorOptions) -> bool:
    """Only mappings can be validated; anything else is one root error."""
    if is_object(source):
        return True
    if is_array(source):
        received = "array"
    elif source is None:
        received = "null"
    else:
        received = type(source).__name__
    add_error(errors, "", compose("", TypeMismatch(expected="object", received=received), opts.error_message))
    return False


def for_schema(
    schema: Mapping[str, Any],
    context_or_callback: ContextMarker | ValidatorCallback | None = None,
    callback: ValidatorCallback | None = None,
) -> SchemaValidator:
    """Build a validator for *schema*.

    Accepts ``for_schema(schema)``, ``for_schema(schema, callback)`` and
    ``for_schema(schema, using_context(), callback)``.

    The callback receives ``(safe_data, issues, context)``. ``safe_data``
    always has the full schema shape with defaults in place of missing
    or invalid values. Errors pushed through ``issues`` count toward the
    result; an exception raised by the callback becomes a single error
    at the root path ``""``.

    Raises:
        SchemaError: If the schema cannot be normalized.
    """
    if callable(context_or_callback) and not isinstance(context_or_callback, ContextMarker):
        callback = context_or_callback
    return SchemaValidator(schema, callback)


def validate(
    data: Any,
    schema: Mapping[str, Any],
    context: Mapping[str, Any] | None = None,
    /,
    **options: Any,
) -> ValidationResult:
    """Validate *data* against *schema* in one call.

    Normalizes the schema every time; build a validator with
    ``for_schema()`` when validating repeatedly.
    """
    return SchemaValidator(schema)(data, context, **options)
