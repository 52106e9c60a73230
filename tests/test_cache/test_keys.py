"""Tests for cache key memoization."""

import pytest

from zyracss.cache.keys import KeyMemoizer, short_hash


class TestShortHash:
    def test_length_and_stability(self):
        digest = short_hash("p-[1px]")
        assert len(digest) == 16
        assert digest == short_hash("p-[1px]")
        assert digest != short_hash("p-[2px]")


class TestKeyFormats:
    def test_parse_key(self):
        assert KeyMemoizer().parse_key("p-[1px]") == "parse:p-[1px]"

    def test_generation_key_is_order_insensitive(self):
        keys = KeyMemoizer()
        first = keys.generation_key(["a", "b"], {"minify": False})
        second = keys.generation_key(["b", "a"], {"minify": False})
        assert first == second
        assert first.startswith("gen:")

    def test_separator_in_token_does_not_collide(self):
        keys = KeyMemoizer()
        assert keys.generation_key(["a|b"], {}) != keys.generation_key(["a", "b"], {})
        assert keys.generation_key(["a,b"], {}) != keys.generation_key(["a", "b"], {})

    def test_tagged_token_differs_from_string(self):
        keys = KeyMemoizer()
        tagged = {"type": "int", "repr": "1"}
        assert keys.generation_key([tagged], {}) != keys.generation_key(["1"], {})

    def test_key_hashes_go_through_memoizer(self):
        keys = KeyMemoizer()
        keys.generation_key(["a"], {"minify": False})
        keys.rule_key(".a", {"x": "1"})
        assert keys.size("hash") == 3

    def test_generation_key_depends_on_options(self):
        keys = KeyMemoizer()
        assert keys.generation_key(["a"], {"minify": False}) != keys.generation_key(
            ["a"], {"minify": True}
        )

    def test_rule_key_ignores_declaration_order(self):
        keys = KeyMemoizer()
        first = keys.rule_key(".a", {"x": "1", "y": "2"})
        second = keys.rule_key(".a", {"y": "2", "x": "1"})
        assert first == second
        assert first.startswith("rule:.a:")

    def test_hash_memoized(self):
        keys = KeyMemoizer()
        assert keys.hash("abc") == short_hash("abc")
        keys.hash("abc")
        assert keys.frequency("hash", "abc") == 2


class TestMemoization:
    def test_hits_and_misses(self):
        keys = KeyMemoizer()
        keys.parse_key("a")
        keys.parse_key("a")
        keys.parse_key("b")
        stats = keys.stats()["kinds"]["parse"]
        assert stats["hits"] == 1
        assert stats["misses"] == 2
        assert stats["size"] == 2

    def test_least_frequently_used_evicted(self):
        keys = KeyMemoizer(max_size=4, eviction_fraction=0.5)
        for name in ("a", "b", "c", "d"):
            keys.parse_key(name)
        for _ in range(3):
            keys.parse_key("a")
            keys.parse_key("b")
        keys.parse_key("e")
        assert keys.size("parse") == 3
        assert keys.frequency("parse", "a") == 4
        assert keys.frequency("parse", "c") == 0
        assert keys.stats()["evictions"] == 2

    def test_optimize_drops_cold_keys(self):
        keys = KeyMemoizer()
        keys.parse_key("cold")
        for _ in range(50):
            keys.parse_key("hot")
        assert keys.optimize() == 1
        assert keys.frequency("parse", "hot") == 50

    def test_optimize_empty(self):
        assert KeyMemoizer().optimize() == 0

    def test_clear(self):
        keys = KeyMemoizer()
        keys.parse_key("a")
        keys.clear()
        assert keys.size() == 0

    @pytest.mark.parametrize("kwargs", [{"max_size": 0}, {"eviction_fraction": 0}])
    def test_bad_settings(self, kwargs):
        with pytest.raises(ValueError):
            KeyMemoizer(**kwargs)
