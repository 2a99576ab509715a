"""HTTP transport between cache peers: a WSGI server side and a client."""

from __future__ import annotations

import logging
import threading
from http import HTTPStatus
from typing import Any, Callable
from urllib.error import HTTPError
from urllib.parse import quote
from urllib.request import urlopen

from .consistenthash import HashRing
from .group import get_group

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/_geecache/"
DEFAULT_REPLICAS = 50


class PeerError(Exception):
    """Raised when a value cannot be fetched from a remote peer."""


def _respond(
    start_response: Callable[..., Any], status: HTTPStatus, body: bytes, content_type: str
) -> list[bytes]:
    start_response(
        f"{status.value} {status.phrase}",
        [("Content-Type", content_type), ("Content-Length", str(len(body)))],
    )
    return [body]


def _error(start_response: Callable[..., Any], status: HTTPStatus, message: str) -> list[bytes]:
    return _respond(
        start_response, status, (message + "\n").encode("utf-8"), "text/plain; charset=utf-8"
    )


class HTTPGetter:
    """Client fetching values from one remote peer."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    def get(self, group: str, key: str) -> bytes:
        """Fetch ``key`` from ``group`` on the peer; raise PeerError on failure."""
        url = f"{self.base_url}{quote(group, safe='')}/{quote(key, safe='')}"
        try:
            with urlopen(url) as response:
                return response.read()
        except HTTPError as exc:
            raise PeerError(f"server returned: {exc.code} {exc.reason}") from exc
        except OSError as exc:
            raise PeerError(f"requesting {url}: {exc}") from exc


class HTTPPool:
    """Serves cached groups over HTTP and picks peers by consistent hashing."""

    def __init__(self, self_addr: str) -> None:
        self.self_addr = self_addr
        self.base_path = DEFAULT_BASE_PATH
        self._lock = threading.Lock()
        self._ring: HashRing | None = None
        self._getters: dict[str, HTTPGetter] = {}

    def log(self, message: str) -> None:
        """Log ``message`` tagged with this server's address."""
        logger.info("[Server %s] %s", self.self_addr, message)

    def set(self, *args: str) -> None:
        """Replace the set of peers with the given base addresses."""
        ring = HashRing(DEFAULT_REPLICAS)
        ring.add(*args)
        with self._lock:
            self._ring = ring
            self._getters = {peer: HTTPGetter(peer + self.base_path) for peer in args}

    def pick_peer(self, key: str) -> HTTPGetter | None:
        """Return the client for the peer owning ``key``, or None if it is this node."""
        with self._lock:
            peer = self._ring.get(key) if self._ring else ""
            if not peer or peer == self.self_addr:
                return None
            self.log(f"Pick peer {peer}")
            return self._getters[peer]

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> list[bytes]:
        path = environ.get("PATH_INFO", "").encode("latin-1").decode("utf-8", errors="replace")
        if not path.startswith(self.base_path):
            raise ValueError(f"HTTPPool serving unexpected path: {path}")
        self.log(f"Serving request {path}")

        parts = path[len(self.base_path):].split("/", 1)
        if len(parts) != 2:
            return _error(start_response, HTTPStatus.BAD_REQUEST, "bad request")
        group_name, key = parts

        group = get_group(group_name)
        if group is None:
            return _error(start_response, HTTPStatus.NOT_FOUND, f"no such group: {group_name}")
        try:
            view = group.get(key)
        except Exception as exc:
            return _error(start_response, HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return _respond(
            start_response, HTTPStatus.OK, bytes(view.byte_slice()), "application/octet-stream"
        )