"""Tests for wren.errors — exception hierarchy and error messages."""

import pytest

from wren.errors import ConfigurationError, SchemaError, WrenError
from wren.http.forms import _parse_multipart


class TestHierarchy:
    def test_configuration_error_is_wren_error(self) -> None:
        assert issubclass(ConfigurationError, WrenError)

    def test_schema_error_is_configuration_error(self) -> None:
        assert issubclass(SchemaError, ConfigurationError)


class TestSchemaError:
    def test_message_names_the_key(self) -> None:
        err = SchemaError("address.zip", "unknown type 'zip'")
        assert str(err) == "Invalid schema for 'address.zip': unknown type 'zip'"
        assert err.key == "address.zip"
        assert err.reason == "unknown type 'zip'"


@pytest.mark.anyio
async def test_missing_multipart_dependency(monkeypatch: pytest.MonkeyPatch) -> None:
    import builtins

    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name.startswith(("multipart", "python_multipart")):
            raise ImportError(name)
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    with pytest.raises(ConfigurationError, match="python-multipart"):
        await _parse_multipart(b"", "multipart/form-data; boundary=x")
