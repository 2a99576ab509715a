"""Collapse concurrent calls for the same key into a single execution."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Optional


class _Call:
    """An in-flight or finished call whose result is shared by waiters."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: Optional[BaseException] = None

    def result(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class SingleFlight:
    """Ensures ``fn`` runs once per key among concurrent callers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], Any]) -> Any:
        """Run ``fn`` for ``key`` unless a call is already in flight, then share its result.

        If ``fn`` raises, every caller waiting on that call gets the same exception.
        """
        with self._lock:
            call = self._calls.get(key)
            if call is not None:
                leader = False
            else:
                call = _Call()
                self._calls[key] = call
                leader = True

        if not leader:
            call.done.wait()
            return call.result()

        try:
            call.value = fn()
        except BaseException as exc:
            call.error = exc
        finally:
            call.done.set()
            with self._lock:
                del self._calls[key]

        return call.result()