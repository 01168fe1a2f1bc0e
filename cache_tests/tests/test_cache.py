import pytest

import lrucache.clock as clock_mod
from lrucache import InvalidCapacityError, InvalidTTLError, LRUCache

MISSING = object()


def test_cache_set_get_and_expire_with_monotonic(monkeypatch):
    t = {"now": 0.0}

    def fake_monotonic():
        return t["now"]

    monkeypatch.setattr(clock_mod.time, "monotonic", fake_monotonic)

    c = LRUCache(10, default_ttl=10.0, cleanup_interval=0)

    c.set("k", "v")
    assert c.get("k") == "v"

    t["now"] = 10.0
    assert c.get("k") is None


def test_cache_evicts_least_recently_used(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1)
    c.set("b", 2)
    assert c.get("a") == 1

    c.set("c", 3)

    assert c.get("b", MISSING) is MISSING
    assert c.get("a") == 1
    assert c.get("c") == 3


def test_cache_capacity_one_keeps_latest(clock):
    c = LRUCache(1, clock=clock)

    c.set("a", 1)
    c.set("b", 2)

    assert c.get("a", MISSING) is MISSING
    assert c.get("b") == 2
    assert len(c) == 1


def test_cache_expires_entry_with_ttl(clock):
    c = LRUCache(4, clock=clock)

    c.set("x", 9, ttl=0.010)
    clock.advance(0.020)

    assert c.get("x", MISSING) is MISSING


def test_cache_expiry_boundary_is_inclusive(clock):
    c = LRUCache(4, clock=clock)

    c.set("x", 1, ttl=5.0)
    clock.now = 4.999
    assert c.peek("x") == 1

    clock.now = 5.0
    assert c.peek("x", MISSING) is MISSING


def test_cache_lazy_expiry_removes_entry(clock):
    c = LRUCache(4, clock=clock)

    c.set("x", 1, ttl=1.0)
    clock.advance(2.0)

    assert c.get("x") is None
    assert "x" not in c._store


def test_cache_update_resets_ttl(clock):
    c = LRUCache(4, clock=clock)

    c.set("a", 1, ttl=0.010)
    clock.advance(0.005)
    c.set("a", 2, ttl=0.020)
    clock.advance(0.012)

    assert c.get("a") == 2


def test_cache_update_keeps_count_and_promotes(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1)
    c.set("b", 2)
    c.set("a", 10)

    assert len(c) == 2
    assert c.keys() == ["a", "b"]

    c.set("c", 3)
    assert c.get("b", MISSING) is MISSING
    assert c.get("a") == 10


def test_cache_update_replaces_expiry_with_none(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1, ttl=1.0)
    c.set("a", 2, ttl=0)
    clock.advance(100.0)

    assert c.get("a") == 2


def test_cache_default_ttl_and_explicit_override(clock):
    c = LRUCache(4, default_ttl=1.0, cleanup_interval=0, clock=clock)

    c.set("default", 1)
    c.set("longer", 2, ttl=10.0)
    c.set("forever", 3, ttl=0)
    clock.advance(5.0)

    assert c.get("default", MISSING) is MISSING
    assert c.get("longer") == 2
    assert c.get("forever") == 3


def test_cache_set_with_ttl_alias(clock):
    c = LRUCache(2, clock=clock)

    c.set_with_ttl("a", 1, 1.0)
    clock.advance(1.0)

    assert c.get("a", MISSING) is MISSING


def test_cache_peek_does_not_promote(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1)
    c.set("b", 2)
    assert c.peek("a") == 1
    assert c.peek("a") == 1

    c.set("c", 3)

    assert c.get("a", MISSING) is MISSING
    assert c.get("b") == 2


def test_cache_peek_removes_expired_entry(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1, ttl=1.0)
    clock.advance(1.0)

    assert c.peek("a") is None
    assert len(c._store) == 0


def test_cache_get_distinguishes_stored_none(clock):
    c = LRUCache(2, clock=clock)

    c.set("n", None)

    assert c.get("n", MISSING) is None
    assert c.get("other", MISSING) is MISSING


def test_cache_delete(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1)

    assert c.delete("a") is True
    assert c.get("a", MISSING) is MISSING
    assert c.delete("a") is False


def test_cache_delete_missing_on_empty_cache(clock):
    c = LRUCache(2, clock=clock)

    assert c.delete("missing") is False
    assert len(c) == 0


def test_cache_len_excludes_expired(clock):
    c = LRUCache(5, clock=clock)

    c.set("short", 1, ttl=1.0)
    c.set("long", 2, ttl=10.0)
    c.set("keep", 3)
    assert len(c) == 3

    clock.advance(1.0)
    assert len(c) == 2
    assert c.len() == 2

    clock.advance(9.0)
    assert len(c) == 1


def test_cache_contains_is_recency_neutral(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1, ttl=1.0)
    c.set("b", 2)
    assert "a" in c
    assert c.contains("b")

    c.set("c", 3)
    assert "a" not in c

    clock.advance(1.0)
    assert not c.contains("a")


def test_cache_keys_skip_expired(clock):
    c = LRUCache(3, clock=clock)

    c.set("a", 1, ttl=1.0)
    c.set("b", 2)
    c.set("c", 3)
    clock.advance(1.0)

    assert c.keys() == ["c", "b"]


def test_cache_clear(clock):
    c = LRUCache(3, clock=clock)

    c.set("a", 1)
    c.set("b", 2)
    c.clear()

    assert len(c) == 0
    assert c.get("a", MISSING) is MISSING

    c.set("c", 3)
    assert c.keys() == ["c"]


def test_cache_prefers_expired_tail_over_live_entry(clock):
    c = LRUCache(2, clock=clock)

    c.set("old", 1, ttl=1.0)
    c.set("live", 2)
    clock.advance(1.0)
    c.set("new", 3)

    assert c.keys() == ["new", "live"]


def test_cache_purge_expired_counts_removed(clock):
    c = LRUCache(4, clock=clock)

    c.set("a", 1, ttl=1.0)
    c.set("b", 2, ttl=5.0)
    c.set("c", 3, ttl=1.0)
    clock.advance(2.0)

    assert c.purge_expired() == 2
    assert c.keys() == ["b"]


@pytest.mark.parametrize("capacity", [0, -1, 1.5, "3", True])
def test_cache_rejects_invalid_capacity(capacity):
    with pytest.raises(InvalidCapacityError):
        LRUCache(capacity)


def test_cache_rejects_negative_default_ttl():
    with pytest.raises(InvalidTTLError):
        LRUCache(2, default_ttl=-1.0)


def test_cache_negative_ttl_leaves_state_unchanged(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1, ttl=5.0)
    with pytest.raises(InvalidTTLError):
        c.set("a", 2, ttl=-1.0)
    with pytest.raises(InvalidTTLError):
        c.set("b", 3, ttl=-0.5)

    assert c.get("a") == 1
    assert c.get("b", MISSING) is MISSING
    clock.advance(5.0)
    assert c.get("a", MISSING) is MISSING


def test_cache_capacity_property(clock):
    c = LRUCache(7, default_ttl=3.0, cleanup_interval=0, clock=clock)

    assert c.capacity == 7
    assert c.default_ttl == 3.0


def test_cache_rejects_nan_ttl(clock):
    c = LRUCache(2, clock=clock)

    with pytest.raises(InvalidTTLError):
        c.set("a", 1, ttl=float("nan"))

    assert c.get("a", MISSING) is MISSING


def test_cache_infinite_ttl_never_expires(clock):
    c = LRUCache(2, clock=clock)

    c.set("a", 1, ttl=float("inf"))
    clock.advance(1e12)

    assert c.get("a") == 1
