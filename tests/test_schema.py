"""Tests for wren.schema — key modifiers, type descriptors, defaults."""

from types import MappingProxyType

import pytest

from wren.errors import SchemaError
from wren.http.forms import UploadFile
from wren.schema import (
    ArrayOf,
    Kind,
    ObjectOf,
    Primitive,
    Property,
    default_value,
    define_schema,
    parse_schema,
)


class TestKeyModifiers:
    def test_plain_key(self) -> None:
        prop = parse_schema({"name": "string"}).properties["name"]
        assert prop == Property(key="name", type=Primitive(Kind.STRING))

    def test_optional(self) -> None:
        prop = parse_schema({"email?": "string"}).properties["email"]
        assert prop.optional
        assert prop.alias is None

    def test_alias(self) -> None:
        prop = parse_schema({"username:un": "string"}).properties["username"]
        assert prop.alias == "un"
        assert prop.source_key == "un"
        assert not prop.optional

    def test_optional_alias(self) -> None:
        prop = parse_schema({"username:un?": "string"}).properties["username"]
        assert prop.optional
        assert prop.alias == "un"

    def test_key_order_preserved(self) -> None:
        tree = parse_schema({"b": "string", "a?": "number", "c:x": "boolean"})
        assert list(tree.properties) == ["b", "a", "c"]


class TestTypeDescriptors:
    @pytest.mark.parametrize("tag", ["string", "number", "boolean", "bigint", "file"])
    def test_kind_tags(self, tag: str) -> None:
        assert parse_schema({"f": tag}).properties["f"].type == Primitive(Kind(tag))

    @pytest.mark.parametrize(
        ("python_type", "kind"),
        [
            (str, Kind.STRING),
            (float, Kind.NUMBER),
            (bool, Kind.BOOLEAN),
            (int, Kind.BIGINT),
            (UploadFile, Kind.FILE),
        ],
    )
    def test_python_type_shorthand(self, python_type: type, kind: Kind) -> None:
        assert parse_schema({"f": python_type}).properties["f"].type == Primitive(kind)

    def test_array_of_primitive(self) -> None:
        assert parse_schema({"tags": ["string"]}).properties["tags"].type == ArrayOf(Primitive(Kind.STRING))

    def test_array_of_objects(self) -> None:
        prop_type = parse_schema({"items": [{"name": "string"}]}).properties["items"].type
        assert isinstance(prop_type, ArrayOf)
        assert isinstance(prop_type.item, ObjectOf)
        assert prop_type.item.properties["name"].type == Primitive(Kind.STRING)

    def test_nested_object(self) -> None:
        tree = parse_schema({"address": {"city": "string", "zip?": "string"}})
        address = tree.properties["address"].type
        assert isinstance(address, ObjectOf)
        assert address.properties["zip"].optional

    def test_tree_is_read_only(self) -> None:
        tree = parse_schema({"name": "string"})
        assert isinstance(tree.properties, MappingProxyType)
        with pytest.raises(TypeError):
            tree.properties["other"] = tree.properties["name"]  # type: ignore[index]


class TestSchemaErrors:
    def test_unknown_tag(self) -> None:
        with pytest.raises(SchemaError, match="unknown type 'date'") as exc_info:
            parse_schema({"address": {"moved": "date"}})
        assert exc_info.value.key == "address.moved"

    def test_empty_array(self) -> None:
        with pytest.raises(SchemaError, match="exactly one element type"):
            parse_schema({"tags": []})

    def test_nested_array(self) -> None:
        with pytest.raises(SchemaError, match="arrays of arrays"):
            parse_schema({"grid": [["number"]]})

    def test_non_string_key(self) -> None:
        with pytest.raises(SchemaError, match="keys must be strings"):
            parse_schema({1: "string"})


class TestDefaultValue:
    def test_primitives(self) -> None:
        assert default_value(Primitive(Kind.STRING)) == ""
        assert default_value(Primitive(Kind.NUMBER)) == 0
        assert default_value(Primitive(Kind.BOOLEAN)) is False
        assert default_value(Primitive(Kind.BIGINT)) == 0

    def test_file(self) -> None:
        value = default_value(Primitive(Kind.FILE))
        assert isinstance(value, UploadFile)
        assert value.size == 0

    def test_array(self) -> None:
        assert default_value(ArrayOf(Primitive(Kind.STRING))) == []

    def test_nested_object(self) -> None:
        tree = parse_schema({"a": "number", "b": {"c": "string", "d": [{"e": "string"}]}})
        assert default_value(tree) == {"a": 0, "b": {"c": "", "d": []}}

    def test_fresh_containers(self) -> None:
        tree = parse_schema({"tags": ["string"]})
        first = default_value(tree)
        first["tags"].append("x")
        assert default_value(tree) == {"tags": []}


def test_define_schema_is_identity() -> None:
    description = {"name": "string"}
    assert define_schema(description) is description
