"""Tests for the FIFO response cache and key derivation."""

from __future__ import annotations

import pytest

from cqtool.shared.cache import CacheEntry, ResponseCache, make_cache_key
from cqtool.shared.groq_client import ModelResponse


def _resp(text: str) -> ModelResponse:
    return ModelResponse(text=text, model="m")


class TestMakeCacheKey:
    def test_deterministic(self) -> None:
        a = make_cache_key("m", "syntax", "python", "print(1)")
        b = make_cache_key("m", "syntax", "python", "print(1)")
        assert a == b

    def test_language_case_insensitive(self) -> None:
        assert make_cache_key("m", "syntax", "Python", "x") == make_cache_key("m", "syntax", "python", "x")

    @pytest.mark.parametrize(
        "other",
        [
            ("m2", "syntax", "python", "print(1)", ""),
            ("m", "complexity", "python", "print(1)", ""),
            ("m", "syntax", "java", "print(1)", ""),
            ("m", "syntax", "python", "print(2)", ""),
            ("m", "syntax", "python", "print(1)", "stdin"),
        ],
    )
    def test_each_component_matters(self, other: tuple[str, ...]) -> None:
        base = make_cache_key("m", "syntax", "python", "print(1)")
        assert make_cache_key(*other[:4], extra=other[4]) != base

    def test_key_does_not_embed_source(self) -> None:
        key = make_cache_key("m", "syntax", "python", "secret_token = 'abc'")
        assert "secret_token" not in key


class TestResponseCache:
    def test_miss_then_hit(self, cache: ResponseCache) -> None:
        assert cache.get("k") is None
        cache.put("k", _resp("v"))
        assert cache.get("k") == _resp("v")
        assert "k" in cache
        assert len(cache) == 1

    def test_fifo_eviction_at_capacity(self) -> None:
        cache = ResponseCache(capacity=50)
        for i in range(51):
            cache.put(f"k{i}", _resp(str(i)))
        assert len(cache) == 50
        assert cache.get("k0") is None
        assert cache.get("k1") == _resp("1")
        assert cache.get("k50") == _resp("50")

    def test_get_does_not_refresh_position(self) -> None:
        cache = ResponseCache(capacity=2)
        cache.put("a", _resp("a"))
        cache.put("b", _resp("b"))
        cache.get("a")
        cache.put("c", _resp("c"))
        assert cache.keys() == ["b", "c"]

    def test_reput_keeps_position_and_replaces_value(self) -> None:
        cache = ResponseCache(capacity=2)
        cache.put("a", _resp("old"))
        cache.put("b", _resp("b"))
        cache.put("a", _resp("new"))
        assert len(cache) == 2
        assert cache.get("a") == _resp("new")
        cache.put("c", _resp("c"))
        assert cache.keys() == ["b", "c"]

    def test_malformed_entry_is_a_miss(self, cache: ResponseCache, caplog: pytest.LogCaptureFixture) -> None:
        cache.put("k", _resp("v"))
        cache._entries["k"] = CacheEntry("k", "not a response", 0)  # type: ignore[arg-type]
        with caplog.at_level("WARNING"):
            assert cache.get("k") is None
        assert "k" not in cache
        assert "malformed" in caplog.text

    def test_non_entry_value_is_a_miss(self, cache: ResponseCache) -> None:
        cache._entries["k"] = {"text": "raw dict"}  # type: ignore[assignment]
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_clear(self, cache: ResponseCache) -> None:
        cache.put("a", _resp("a"))
        cache.clear()
        assert len(cache) == 0

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            ResponseCache(capacity=0)
