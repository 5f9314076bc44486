"""Lazy path navigation over a value and its error map.

One mechanism, two views:

- ``Issues`` — handed to custom validation callbacks to attach errors
  anywhere in the tree::

      def check(data, issues, ctx):
          if data["password"] != data["confirm"]:
              issues.confirm.push("Passwords do not match")
          issues.items[1].name.push(lambda key: translate(key))  # key: "items.name"

- ``FormHelper`` — built from a finished result, read by templates to
  render each field's name, last submitted value, and messages::

      f = form_helper(result)
      f.address.city.path    # "address.city"
      f.address.city.value   # "Paris"
      f.address.city.errors  # ["City is required"]

Children are created on access; nothing is enumerated up front. Field
names that collide with a terminal (``path``, ``value``, ``errors``,
``push``, ``field``, ``index``) are reached with ``field(name)`` or
``nav["name"]``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Self

from wren._internal.values import is_array, is_object, stringify
from wren.validation.messages import get_key
from wren.validation.result import Errors, ValidationResult, add_error


class Navigator:
    """A position in a value tree: a path, the raw value there, the error map."""

    __slots__ = ("_errors", "_path", "_raw")

    def __init__(self, raw: Any, errors: Errors, path: str = "") -> None:
        self._raw = raw
        self._errors = errors
        self._path = path

    @property
    def path(self) -> str:
        """Dotted/bracketed path of this position (``""`` at the root)."""
        return self._path

    def field(self, name: str) -> Self:
        """Navigator for the object field *name*."""
        raw = self._raw.get(name) if is_object(self._raw) else None
        path = f"{self._path}.{name}" if self._path else name
        return type(self)(raw, self._errors, path)

    def index(self, i: int) -> Self:
        """Navigator for array element *i*."""
        if i < 0:
            msg = f"Array index must be non-negative, got {i}"
            raise IndexError(msg)
        raw = self._raw[i] if is_array(self._raw) and i < len(self._raw) else None
        return type(self)(raw, self._errors, f"{self._path}[{i}]")

    def __getitem__(self, key: int | str) -> Self:
        if isinstance(key, int):
            return self.index(key)
        return self.field(key)

    def __getattr__(self, name: str) -> Self:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.field(name)

    def __len__(self) -> int:
        return len(self._raw) if is_array(self._raw) else 0

    def __iter__(self) -> Iterator[Self]:
        for i in range(len(self)):
            yield self.index(i)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"


class Issues(Navigator):
    """Write view: attach errors at any path during custom validation."""

    __slots__ = ()

    def push(self, error: str | Callable[[str], str]) -> None:
        """Append an error at this path.

        A callable receives the index-free key (``items[1].name`` ->
        ``items.name``) and returns the message — the localization hook.
        """
        message = error(get_key(self._path)) if callable(error) else error
        add_error(self._errors, self._path, message, self._raw)


class FormHelper(Navigator):
    """Read view: path, last submitted value, and errors per field."""

    __slots__ = ()

    @property
    def value(self) -> str:
        """The current value as text.

        Falls back to the value recorded with this path's errors, which
        covers fields that did not survive into the render data.
        """
        raw = self._raw
        if raw is None:
            entry = self._errors.get(self._path)
            raw = entry.value if entry is not None else None
        return stringify(raw)

    @property
    def errors(self) -> list[str]:
        """Messages recorded at exactly this path."""
        entry = self._errors.get(self._path)
        return list(entry.errors) if entry is not None else []


def form_helper(result: ValidationResult) -> FormHelper:
    """Build the read-only navigator over a result's data and errors."""
    return FormHelper(result.data, result.errors)
