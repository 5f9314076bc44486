"""Schema normalization — user-facing schema description to property tree.

A schema is a plain mapping. Keys carry modifiers, values carry types::

    signup = define_schema({
        "name": "string",
        "age": "number",
        "email?": "string",          # optional
        "username:un": "string",     # read from input key "un"
        "tags": ["string"],          # array of strings
        "address": {                 # nested object
            "street": "string",
            "city": "string",
        },
        "avatar?": "file",
    })

``parse_schema()`` turns that into a tree of immutable ``Property``
objects once; the tree is shared read-only by every validation call.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from wren.errors import SchemaError
from wren.http.forms import UploadFile

logger = logging.getLogger("wren.schema")


class Kind(StrEnum):
    """The closed set of primitive field kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    BIGINT = "bigint"
    FILE = "file"


# Python type shorthands accepted in place of a kind tag
_TYPE_KINDS: dict[type, Kind] = {
    str: Kind.STRING,
    float: Kind.NUMBER,
    bool: Kind.BOOLEAN,
    int: Kind.BIGINT,
    UploadFile: Kind.FILE,
}


@dataclass(frozen=True, slots=True)
class Primitive:
    kind: Kind


@dataclass(frozen=True, slots=True)
class ArrayOf:
    item: Primitive | ObjectOf


@dataclass(frozen=True, slots=True)
class ObjectOf:
    properties: Mapping[str, Property]


type PropertyType = Primitive | ArrayOf | ObjectOf


@dataclass(frozen=True, slots=True)
class Property:
    """One normalized schema field.

    ``key`` is the output name, ``alias`` the input key to read from
    (``None`` means read ``key``).
    """

    key: str
    type: PropertyType
    optional: bool = False
    alias: str | None = None

    @property
    def source_key(self) -> str:
        return self.alias or self.key


def define_schema[S: Mapping[str, Any]](description: S) -> S:
    """Declare a schema. Returns *description* unchanged.

    A marker for module-level schema constants; validators normalize it
    with ``parse_schema()`` when they are built.
    """
    return description


def parse_schema(description: Mapping[str, Any]) -> ObjectOf:
    """Normalize a schema description into an ``ObjectOf`` property tree.

    Raises:
        SchemaError: If a key is not a string, a type tag is unknown, or an
            array descriptor is empty or nests another array.
    """
    tree = _parse_object(description, "")
    logger.debug("Parsed schema with %d top-level fields", len(tree.properties))
    return tree


def _parse_object(description: Mapping[str, Any], prefix: str) -> ObjectOf:
    properties: dict[str, Property] = {}
    for raw_key, descriptor in description.items():
        if not isinstance(raw_key, str):
            raise SchemaError(repr(raw_key), "schema keys must be strings")
        optional = raw_key.endswith("?")
        name, _, alias = raw_key.removesuffix("?").partition(":")
        path = f"{prefix}.{name}" if prefix else name
        properties[name] = Property(
            key=name,
            type=_parse_type(descriptor, path),
            optional=optional,
            alias=alias or None,
        )
    return ObjectOf(MappingProxyType(properties))


def _parse_type(descriptor: Any, path: str) -> PropertyType:
    if isinstance(descriptor, Mapping):
        return _parse_object(descriptor, path)
    if isinstance(descriptor, Sequence) and not isinstance(descriptor, str):
        if not descriptor:
            raise SchemaError(path, "array type must wrap exactly one element type")
        item = _parse_type(descriptor[0], path)
        if isinstance(item, ArrayOf):
            raise SchemaError(path, "arrays of arrays are not supported")
        return ArrayOf(item)
    return Primitive(_parse_kind(descriptor, path))


def _parse_kind(descriptor: Any, path: str) -> Kind:
    if isinstance(descriptor, type) and descriptor in _TYPE_KINDS:
        return _TYPE_KINDS[descriptor]
    try:
        return Kind(descriptor)
    except ValueError:
        options = ", ".join(kind.value for kind in Kind)
        raise SchemaError(path, f"unknown type {descriptor!r} (expected one of: {options})") from None


def default_value(property_type: PropertyType) -> Any:
    """The safe-data default for a property type.

    Pure and recursive: nested objects get every field defaulted.
    """
    match property_type:
        case Primitive(kind=Kind.STRING):
            return ""
        case Primitive(kind=Kind.NUMBER):
            return 0
        case Primitive(kind=Kind.BOOLEAN):
            return False
        case Primitive(kind=Kind.BIGINT):
            return 0
        case Primitive(kind=Kind.FILE):
            return UploadFile.empty()
        case ArrayOf():
            return []
        case ObjectOf(properties=properties):
            return {key: default_value(prop.type) for key, prop in properties.items()}
    msg = f"Unknown property type: {property_type!r}"
    raise TypeError(msg)
