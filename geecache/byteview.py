"""Immutable view over cached bytes."""

from __future__ import annotations


class ByteView:
    """An immutable holder of a cached value."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview | str = b"") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ByteView) and self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def byte_slice(self) -> bytearray:
        """Return a mutable copy of the stored bytes."""
        return bytearray(self._data)

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")