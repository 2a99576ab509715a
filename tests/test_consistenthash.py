import pytest

from geecache.consistenthash import HashRing


def _numeric_hash(data):
    return int(data.decode())


def test_hashing():
    ring = HashRing(3, _numeric_hash)
    # Virtual node hashes: 2, 4, 6, 12, 14, 16, 22, 24, 26
    ring.add("6", "4", "2")

    cases = {"2": "2", "11": "2", "23": "4", "27": "2"}
    for key, node in cases.items():
        assert ring.get(key) == node

    # Adds 8, 18, 28
    ring.add("8")
    cases["27"] = "8"
    for key, node in cases.items():
        assert ring.get(key) == node


def test_empty_ring_returns_none():
    ring = HashRing(3)
    assert ring.get("Tom") is None


@pytest.mark.parametrize("key", ["Tom", "Jack", "Sam", "unknown"])
def test_single_node_owns_every_key(key):
    ring = HashRing(50)
    ring.add("http://localhost:8001")
    assert ring.get(key) == "http://localhost:8001"


def test_default_hash_is_deterministic_and_uses_known_nodes():
    nodes = ["http://localhost:8001", "http://localhost:8002", "http://localhost:8003"]
    first = HashRing(50)
    first.add(*nodes)
    second = HashRing(50)
    second.add(*reversed(nodes))
    for key in ["Tom", "Jack", "Sam", "a", "b", "c"]:
        assert first.get(key) in nodes
        assert first.get(key) == second.get(key)