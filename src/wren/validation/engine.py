"""The recursive validator.

Walks a normalized property tree against a (normalized) input tree and
builds three things in one pass:

- render data: the input's shape with holes (``None``) where a field was
  missing or invalid, for re-displaying a partially valid form;
- safe data: the schema's exact shape with type defaults filling every
  hole, handed to custom validation callbacks;
- the flat, path-keyed error map.

No field's failure stops the walk; every error is recorded and the
walk always completes.
"""

from collections.abc import Mapping
from typing import Any

from wren._internal.values import MISSING, type_name
from wren.config import ValidatorOptions
from wren.schema import ArrayOf, ObjectOf, Primitive, Property, PropertyType, default_value
from wren.validation.coerce import NO_VALUE, Expected, coerce
from wren.validation.messages import (
    ArrayLimitExceeded,
    FieldError,
    RequiredError,
    TypeMismatch,
    compose,
    received_name,
)
from wren.validation.result import Errors, add_error


class Walker:
    """One validation pass. Not reusable across calls."""

    __slots__ = ("errors", "options")

    def __init__(self, options: ValidatorOptions, errors: Errors) -> None:
        self.options = options
        self.errors = errors

    def walk(self, root: ObjectOf, source: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        """Validate *source* against *root*; returns ``(render_data, safe_data)``."""
        return self._object("", root, source)

    def _field(self, path: str, prop: Property, raw: Any) -> tuple[Any, Any]:
        if raw is None or raw is MISSING:
            if not prop.optional:
                self._error(path, RequiredError(received=type_name(raw)), raw)
            # An empty list lets form rendering iterate a missing array
            render = [] if isinstance(prop.type, ArrayOf) else None
            return render, default_value(prop.type)

        expected = _expected(prop.type)
        value = coerce(raw, expected)
        if value is NO_VALUE:
            self._error(path, TypeMismatch(expected=str(expected), received=received_name(raw)), raw)
            return None, default_value(prop.type)

        match prop.type:
            case Primitive():
                return value, value
            case ArrayOf(item=item):
                return self._array(path, item, value)
            case ObjectOf() as obj:
                return self._object(path, obj, value)
        msg = f"Unknown property type: {prop.type!r}"
        raise TypeError(msg)

    def _array(self, path: str, item: PropertyType, values: Any) -> tuple[list[Any], list[Any]]:
        limit = self.options.array_limit
        if len(values) > limit:
            self._error(path, ArrayLimitExceeded(limit=limit, length=len(values)))
            return [], []

        render: list[Any] = []
        safe: list[Any] = []
        for i, raw in enumerate(values):
            element = Property(key=str(i), type=item)
            r, s = self._field(f"{path}[{i}]", element, raw)
            render.append(r)
            safe.append(s)
        return render, safe

    def _object(self, path: str, obj: ObjectOf, source: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        render: dict[str, Any] = {}
        safe: dict[str, Any] = {}
        for key, prop in obj.properties.items():
            child_path = f"{path}.{key}" if path else key
            render[key], safe[key] = self._field(child_path, prop, source.get(prop.source_key, MISSING))
        return render, safe

    def _error(self, path: str, error: FieldError, raw: Any = None) -> None:
        message = compose(path, error, self.options.error_message)
        add_error(self.errors, path, message, raw)


def _expected(property_type: PropertyType) -> Expected:
    match property_type:
        case ArrayOf():
            return "array"
        case ObjectOf():
            return "object"
        case Primitive(kind=kind):
            return kind
    msg = f"Unknown property type: {property_type!r}"
    raise TypeError(msg)
