"""Tests for the LRU/TTL cache tier."""

import pytest

from zyracss.cache.tier import CacheTier


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tier(clock):
    return CacheTier("test", max_size=3, ttl=10.0, clock=clock)


class TestConstruction:
    def test_rejects_zero_size(self):
        with pytest.raises(ValueError):
            CacheTier("x", max_size=0, ttl=1.0)

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            CacheTier("x", max_size=1, ttl=0)


class TestGetSet:
    def test_round_trip(self, tier):
        tier.set("a", 1)
        assert tier.get("a") == 1
        assert "a" in tier

    def test_miss_returns_default(self, tier):
        assert tier.get("missing") is None
        assert tier.get("missing", "fallback") == "fallback"

    def test_overwrite(self, tier):
        tier.set("a", 1)
        tier.set("a", 2)
        assert tier.get("a") == 2
        assert len(tier) == 1

    def test_delete(self, tier):
        tier.set("a", 1)
        assert tier.delete("a")
        assert not tier.delete("a")

    def test_clear(self, tier):
        tier.set("a", 1)
        tier.clear()
        assert len(tier) == 0


# ---------------------------------------------------------------------------
# Expiry
# ---------------------------------------------------------------------------


class TestExpiry:
    def test_live_at_ttl(self, tier, clock):
        tier.set("a", 1)
        clock.advance(10.0)
        assert tier.get("a") == 1

    def test_expired_just_after_ttl(self, tier, clock):
        tier.set("a", 1)
        clock.advance(10.001)
        assert tier.get("a") is None
        assert tier.stats()["expirations"] == 1

    def test_reads_do_not_extend_ttl(self, tier, clock):
        tier.set("a", 1)
        clock.advance(6)
        assert tier.get("a") == 1
        clock.advance(6)
        assert tier.get("a") is None

    def test_has_drops_expired(self, tier, clock):
        tier.set("a", 1)
        clock.advance(11)
        assert not tier.has("a")
        assert len(tier) == 0

    def test_optimize_removes_old_entries(self, tier, clock):
        tier.set("old", 1)
        clock.advance(5)
        tier.set("new", 2)
        assert tier.optimize(max_age=3) == 1
        assert list(tier.keys()) == ["new"]


# ---------------------------------------------------------------------------
# Eviction
# ---------------------------------------------------------------------------


class TestEviction:
    def test_size_never_exceeds_max(self, tier):
        for i in range(10):
            tier.set(str(i), i)
            assert len(tier) <= 3
        assert tier.stats()["evictions"] == 7

    def test_least_recently_used_goes_first(self, tier):
        tier.set("a", 1)
        tier.set("b", 2)
        tier.set("c", 3)
        tier.get("a")
        tier.set("d", 4)
        assert "b" not in tier
        assert list(tier.keys()) == ["c", "a", "d"]


class TestStats:
    def test_counts(self, tier):
        tier.set("a", 1)
        tier.get("a")
        tier.get("b")
        stats = tier.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["size"] == 1
        assert stats["utilization"] == pytest.approx(1 / 3)
