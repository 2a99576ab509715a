"""Consistent hashing ring with virtual nodes."""

from __future__ import annotations

import zlib
from bisect import bisect_left
from collections.abc import Callable
from typing import Optional

HashFunction = Callable[[bytes], int]


class HashRing:
    """Maps keys onto nodes, placing ``replicas`` virtual nodes per real node.

    The default hash is CRC-32 (IEEE).
    """

    def __init__(self, replicas: int, hash_fn: Optional[HashFunction] = None) -> None:
        self.replicas = replicas
        self._hash: HashFunction = hash_fn if hash_fn is not None else zlib.crc32
        self._ring: list[int] = []
        self._nodes: dict[int, str] = {}

    def add(self, *args: str) -> None:
        """Add real nodes to the ring."""
        for node in args:
            for i in range(self.replicas):
                point = int(self._hash(f"{i}{node}".encode("utf-8")))
                self._ring.append(point)
                self._nodes[point] = node
        self._ring.sort()

    def get(self, key: str) -> Optional[str]:
        """Return the node responsible for ``key``, or None if the ring is empty."""
        if not self._ring:
            return None
        point = int(self._hash(key.encode("utf-8")))
        idx = bisect_left(self._ring, point) % len(self._ring)
        return self._nodes[self._ring[idx]]