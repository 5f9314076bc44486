"""Tests for wren.http.query — immutable QueryParams."""

import pytest

from wren._internal.multimap import MultiValueMapping
from wren.http.query import QueryParams


class TestQueryParams:
    def test_getitem(self) -> None:
        q = QueryParams(b"q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        q = QueryParams(b"q=hello")
        with pytest.raises(KeyError):
            q["missing"]

    def test_contains(self) -> None:
        q = QueryParams(b"q=hello")
        assert "q" in q
        assert "missing" not in q

    def test_len(self) -> None:
        assert len(QueryParams(b"a=1&b=2&c=3")) == 3

    def test_iter(self) -> None:
        assert set(QueryParams(b"a=1&b=2")) == {"a", "b"}

    def test_get_with_default(self) -> None:
        q = QueryParams(b"q=hello")
        assert q.get("q") == "hello"
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        q = QueryParams(b"tag=python&tag=rust&q=hello")
        assert q.get_list("tag") == ["python", "rust"]
        assert q.get_list("missing") == []

    def test_blank_values_kept(self) -> None:
        q = QueryParams(b"q=&page=1")
        assert q["q"] == ""

    def test_accepts_str(self) -> None:
        q = QueryParams("city=S%C3%A3o+Paulo")
        assert q["city"] == "São Paulo"
        assert q.raw == b"city=S%C3%A3o+Paulo"

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert q.raw == b""

    def test_repr(self) -> None:
        assert "QueryParams" in repr(QueryParams(b"a=1"))

    def test_is_multi_value_mapping(self) -> None:
        assert isinstance(QueryParams(b""), MultiValueMapping)
