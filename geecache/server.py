"""Command-line entry point running a cache node and an optional API server."""

from __future__ import annotations

import argparse
import logging
import threading
from http import HTTPStatus
from socketserver import ThreadingMixIn
from typing import Any, Callable
from urllib.parse import parse_qs, urlsplit
from wsgiref.simple_server import WSGIServer, make_server

from .group import Group, new_group
from .httppool import HTTPPool, _error, _respond

logger = logging.getLogger(__name__)

DB = {"Tom": "630", "Jack": "589", "Sam": "567"}

API_ADDR = "http://localhost:9999"
ADDR_MAP = {
    8001: "http://localhost:8001",
    8002: "http://localhost:8002",
    8003: "http://localhost:8003",
}


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def _serve(addr: str, app: Callable[..., Any]) -> None:
    parts = urlsplit(addr)
    with make_server(parts.hostname or "", parts.port, app, server_class=_ThreadingWSGIServer) as httpd:
        httpd.serve_forever()


def _slow_db_get(key: str) -> bytes:
    logger.info("[SlowDB] search key %s", key)
    if key not in DB:
        raise LookupError(f"{key} not exist")
    return DB[key].encode("utf-8")


def create_group() -> Group:
    """Create and register the "scores" group backed by the sample database."""
    return new_group("scores", 2 << 10, _slow_db_get)


def make_api_app(group: Group) -> Callable[..., Any]:
    """Return a WSGI app answering ``/api?key=...`` from ``group``."""

    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> list[bytes]:
        if environ.get("PATH_INFO", "") != "/api":
            return _error(start_response, HTTPStatus.NOT_FOUND, "404 page not found")
        key = parse_qs(environ.get("QUERY_STRING", "")).get("key", [""])[0]
        try:
            view = group.get(key)
        except Exception as exc:
            return _error(start_response, HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return _respond(
            start_response, HTTPStatus.OK, bytes(view.byte_slice()), "application/octet-stream"
        )

    return app


def start_cache_server(addr: str, addrs: list[str], group: Group) -> None:
    """Register the peers on ``group`` and serve peer requests at ``addr`` forever."""
    peers = HTTPPool(addr)
    peers.set(*addrs)
    group.register_peers(peers)
    logger.info("geecache is running at %s", addr)
    _serve(addr, peers)


def start_api_server(api_addr: str, group: Group) -> None:
    """Serve the client-facing API at ``api_addr`` forever."""
    logger.info("frontend server is running at %s", api_addr)
    _serve(api_addr, make_api_app(group))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="geecache")
    parser.add_argument("-port", "--port", type=int, default=8001, choices=list(ADDR_MAP),
                        help="Geecache server port")
    parser.add_argument("-api", "--api", action="store_true", help="Start a api server?")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    group = create_group()
    if args.api:
        threading.Thread(target=start_api_server, args=(API_ADDR, group), daemon=True).start()
    start_cache_server(ADDR_MAP[args.port], list(ADDR_MAP.values()), group)


if __name__ == "__main__":
    main()