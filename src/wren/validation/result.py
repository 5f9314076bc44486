"""Validation result — best-effort data plus a flat, path-keyed error map."""

from dataclasses import dataclass, field
from typing import Any

from wren._internal.values import stringify


@dataclass(slots=True)
class FieldErrors:
    """Errors recorded at one path.

    ``value`` is the stringified input last seen at the path, kept so a
    form can be re-rendered with what the user typed even when the field
    did not survive validation.
    """

    value: str = ""
    errors: list[str] = field(default_factory=list)


# path -> FieldErrors
type Errors = dict[str, FieldErrors]


def add_error(errors: Errors, path: str, message: str, value: Any = None) -> None:
    """Append *message* at *path*; the first error at a path records *value*."""
    entry = errors.get(path)
    if entry is None:
        errors[path] = FieldErrors(value=stringify(value), errors=[message])
    else:
        entry.errors.append(message)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating input against a schema.

    ``success`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate_signup(form)
        if not result:
            return Template("signup.html", form=form_helper(result))

    ``data`` mirrors the input shape: fields that were missing or could
    not be coerced are ``None`` (missing arrays are ``[]``).

    ``errors`` maps paths to ``FieldErrors``::

        {"age": FieldErrors(value="20x", errors=["Expected 'number', received '20x'"]),
         "items[1].name": FieldErrors(value="", errors=["Name is required"])}
    """

    success: bool
    data: dict[str, Any]
    errors: Errors

    @property
    def is_valid(self) -> bool:
        """Alias for ``success``."""
        return self.success

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.success

    def messages(self) -> dict[str, list[str]]:
        """Error messages by path, without the recorded values.

        Convenient for JSON error responses.
        """
        return {path: list(entry.errors) for path, entry in self.errors.items()}
