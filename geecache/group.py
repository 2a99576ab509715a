"""Cache groups: named namespaces that load values on a cache miss."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Optional, Protocol, Union

from .byteview import ByteView
from .lru import Cache
from .singleflight import SingleFlight

logger = logging.getLogger(__name__)

Getter = Callable[[str], Union[bytes, bytearray, str]]


class PeerGetter(Protocol):
    """A client able to fetch a value from a remote peer."""

    def get(self, group: str, key: str) -> bytes:
        """Fetch the value of ``key`` in ``group`` from the peer."""
        ...


class PeerPicker(Protocol):
    """Chooses which peer owns a key."""

    def pick_peer(self, key: str) -> Optional[PeerGetter]:
        """Return the peer owning ``key``, or None when it is owned locally."""
        ...


class _LockedCache:
    """Thread-safe wrapper around an LRU cache, created on first write."""

    def __init__(self, cache_bytes: int) -> None:
        self._lock = threading.Lock()
        self._cache_bytes = cache_bytes
        self._lru: Optional[Cache] = None

    def add(self, key: str, value: ByteView) -> None:
        with self._lock:
            if self._lru is None:
                self._lru = Cache(self._cache_bytes)
            self._lru.add(key, value)

    def get(self, key: str) -> Optional[ByteView]:
        with self._lock:
            if self._lru is None:
                return None
            value = self._lru.get(key)
        if value is None:
            logger.debug("local cache miss for %s", key)
        return value


class Group:
    """A cache namespace with a loader called when a key is not cached."""

    def __init__(self, name: str, cache_bytes: int, getter: Getter) -> None:
        if getter is None:
            raise TypeError("nil getter")
        self.name = name
        self._getter = getter
        self._main_cache = _LockedCache(cache_bytes)
        self._peers: Optional[PeerPicker] = None
        self._loader = SingleFlight()

    def get(self, key: str) -> ByteView:
        """Return the value for ``key``, loading it on a miss.

        Raises ValueError for an empty key; errors from the getter propagate.
        """
        if not key:
            raise ValueError("key is required")
        cached = self._main_cache.get(key)
        if cached is not None:
            return cached
        return self._load(key)

    def set(self, key: str, value: Union[bytes, bytearray, str]) -> None:
        """Store ``value`` under ``key`` in the local cache; empty keys are ignored."""
        if not key:
            return
        self._main_cache.add(key, ByteView(value))

    def register_peers(self, peers: PeerPicker) -> None:
        """Attach the peer picker used to locate remote owners of keys."""
        if self._peers is not None:
            raise RuntimeError("register_peers called more than once")
        self._peers = peers

    def _load(self, key: str) -> ByteView:
        # Concurrent callers for the same key share one fetch.
        return self._loader.do(key, lambda: self._fetch(key))

    def _fetch(self, key: str) -> ByteView:
        if self._peers is not None:
            peer = self._peers.pick_peer(key)
            if peer is not None:
                return self._get_from_peer(peer, key)
        return self._get_locally(key)

    def _get_from_peer(self, peer: PeerGetter, key: str) -> ByteView:
        try:
            data = peer.get(self.name, key)
        except Exception as exc:
            # A failed peer fetch yields an empty value rather than an error.
            logger.warning("fetching %s from peer failed: %s", key, exc)
            return ByteView()
        return ByteView(data)

    def _get_locally(self, key: str) -> ByteView:
        value = ByteView(self._getter(key))
        self._main_cache.add(key, value)
        return value


_registry_lock = threading.Lock()
_groups: dict[str, Group] = {}


def new_group(name: str, cache_bytes: int, getter: Getter) -> Group:
    """Create a group and register it under ``name``, replacing any previous one."""
    group = Group(name, cache_bytes, getter)
    with _registry_lock:
        _groups[name] = group
    return group


def get_group(name: str) -> Optional[Group]:
    """Return the group registered under ``name``, or None."""
    with _registry_lock:
        return _groups.get(name)