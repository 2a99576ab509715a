import pytest

from geecache.lru import Cache


def test_get_hit_and_miss():
    lru = Cache(0, None)
    lru.add("key1", "1234")
    assert lru.get("key1") == "1234"
    assert lru.get("key2") is None


def test_old_evicted():
    keys = []

    def callback(key, value):
        keys.append(key)

    lru = Cache(10, callback)
    lru.add("key1", "123456")
    lru.add("k2", "k2")
    lru.add("k3", "k3")
    lru.add("k4", "k4")

    assert keys == ["key1", "k2"]
    assert len(lru) == 2
    assert lru.get("key1") is None
    assert lru.get("k4") == "k4"


def test_remove_oldest_evicts_least_recently_used():
    evicted = []
    lru = Cache(0, lambda k, v: evicted.append((k, v)))
    lru.add("a", "1")
    lru.add("b", "2")
    lru.add("c", "3")
    lru.get("a")
    lru.remove_oldest()
    assert evicted == [("b", "2")]
    assert lru.get("b") is None
    assert len(lru) == 2


def test_remove_oldest_on_empty_cache_does_nothing():
    evicted = []
    lru = Cache(0, lambda k, v: evicted.append(k))
    lru.remove_oldest()
    assert evicted == []
    assert len(lru) == 0


def test_zero_max_bytes_never_evicts():
    lru = Cache(0)
    for i in range(100):
        lru.add(f"key{i}", "x" * 50)
    assert len(lru) == 100


def test_entry_larger_than_capacity_is_evicted_immediately():
    evicted = []
    lru = Cache(4, lambda k, v: evicted.append(k))
    lru.add("big", "too large")
    assert evicted == ["big"]
    assert len(lru) == 0


@pytest.mark.parametrize("count", [1, 5, 20])
def test_size_stays_within_bound(count):
    lru = Cache(12)
    for i in range(count):
        lru.add(f"k{i:02d}", "abc")
    # Each entry costs 3 + 3 bytes, so at most two fit.
    assert len(lru) == min(count, 2)