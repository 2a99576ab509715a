"""In-memory distributed cache: LRU groups, consistent hashing, request coalescing and HTTP peers."""

__version__ = "0.1.0"
__all__ = ["byteview", "consistenthash", "group", "httppool", "lru", "server", "singleflight"]