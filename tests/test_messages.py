"""Tests for wren.validation.messages — keys, display names, defaults, overrides."""

import pytest

from wren.validation.messages import (
    ArrayLimitExceeded,
    ExceptionRaised,
    RequiredError,
    TypeMismatch,
    compose,
    default_message,
    display_name,
    get_key,
    received_name,
)


class TestGetKey:
    def test_strips_indices(self) -> None:
        assert get_key("object.list[1].field") == "object.list.field"

    def test_strips_nested_indices(self) -> None:
        assert get_key("a[0].b[12].c") == "a.b.c"

    def test_root(self) -> None:
        assert get_key("") == ""


class TestDisplayName:
    def test_simple(self) -> None:
        assert display_name("string") == "String"

    def test_last_segment(self) -> None:
        assert display_name("object.b.c") == "C"

    def test_camel_case(self) -> None:
        assert display_name("user.firstName") == "First Name"

    def test_snake_case(self) -> None:
        assert display_name("first_name") == "First name"

    def test_empty(self) -> None:
        assert display_name("") == ""


class TestReceivedName:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("20x", "20x"), (3, "3"), (True, "true"), ({}, "object"), ([], "array"), (None, "null")],
    )
    def test_values(self, value: object, expected: str) -> None:
        assert received_name(value) == expected

    def test_empty_string_falls_back_to_type(self) -> None:
        assert received_name("") == "string"


class TestDefaultMessage:
    def test_required(self) -> None:
        assert default_message("address.city", RequiredError(received="null")) == "City is required"

    def test_type(self) -> None:
        error = TypeMismatch(expected="number", received="20x")
        assert default_message("age", error) == "Expected 'number', received '20x'"

    def test_array(self) -> None:
        error = ArrayLimitExceeded(limit=50, length=51)
        assert default_message("tags", error) == "Array length 51 is greater than limit 50"

    def test_exception(self) -> None:
        error = ExceptionRaised(error=ValueError("boom"))
        assert default_message("", error) == "Exception: boom"


class TestCompose:
    def test_override_receives_stripped_key_and_descriptor(self) -> None:
        calls = []

        def override(key, error):
            calls.append((key, error))
            return f"{key}: {error.code} error"

        error = RequiredError(received="undefined")
        assert compose("items[3].name", error, override) == "items.name: required error"
        assert calls == [("items.name", error)]

    def test_none_from_override_keeps_default(self) -> None:
        message = compose("age", TypeMismatch(expected="number", received="x"), lambda key, error: None)
        assert message == "Expected 'number', received 'x'"

    def test_empty_string_from_override_is_used(self) -> None:
        assert compose("age", RequiredError(received="null"), lambda key, error: "") == ""

    def test_codes(self) -> None:
        assert RequiredError(received="null").code == "required"
        assert TypeMismatch(expected="a", received="b").code == "type"
        assert ArrayLimitExceeded(limit=1, length=2).code == "array"
        assert ExceptionRaised(error=RuntimeError()).code == "exception"
