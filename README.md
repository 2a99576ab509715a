# geecache

A small distributed cache held in memory. Values live in named groups. Each
group keeps a byte-bounded LRU cache in front of a loader function. Peers are
placed on a consistent-hash ring, and a key that belongs to another peer is
fetched from that peer over HTTP. Loads of the same key that happen at the
same time are merged into one call.

The package uses only the standard library.

## Install

```
pip install .
```

To run the tests, use `pip install .[test]` and then `pytest`.

## Using it as a library

```python
from geecache.group import new_group

db = {"Tom": "630", "Jack": "589", "Sam": "567"}

def load(key):
    if key in db:
        return db[key].encode()
    raise KeyError(f"{key} not exist")

scores = new_group("scores", 2 << 10, load)
view = scores.get("Tom")       # calls load once, then serves it from the cache
print(str(view))               # 630
print(bytes(view.byte_slice()))  # b'630'
```

- `new_group(name, cache_bytes, getter)` creates a `Group` and registers it
  under `name`. If a group already has that name, the new one replaces it.
  `get_group(name)` returns the registered group, or `None`.
- `Group.get(key)` returns a `ByteView`. An empty key raises `ValueError`. If
  the loader raises, the exception reaches the caller and nothing is cached.
- `Group.set(key, value)` puts a value (bytes or str) straight into the local
  cache. Empty keys are ignored.
- `Group.register_peers(picker)` attaches a peer picker. Calling it a second
  time raises `RuntimeError`.

When a peer picker gives a remote peer for a key, the value is fetched from
that peer. If the fetch fails, a warning is logged and an empty `ByteView` is
returned. In that case the local loader is not called. Values fetched from
peers are not stored in the local cache.

The building blocks can also be used on their own:

- `geecache.lru.Cache(max_bytes, on_evicted=None)`: an LRU cache. Each entry
  costs the UTF-8 length of its key plus `len(value)`. A `max_bytes` of 0
  means no limit. `on_evicted(key, value)` is called for each evicted entry.
  It provides `get`, `add`, `remove_oldest` and `len()`, and it does not lock
  itself.
- `geecache.consistenthash.HashRing(replicas, hash_fn=None)`: a consistent-hash
  ring that places `replicas` virtual nodes for each real node. It uses CRC-32
  by default. `add(*nodes)` puts nodes on the ring. `get(key)` returns the
  owning node, or `None` when the ring is empty.
- `geecache.singleflight.SingleFlight`: `do(key, fn)` runs `fn` once for
  concurrent callers that pass the same key. All of them get the same result,
  or the same exception.
- `geecache.byteview.ByteView`: an immutable value. `len()` gives its size,
  `str()` decodes it as UTF-8, and `byte_slice()` returns a mutable
  `bytearray` copy.

## Peers over HTTP

`geecache.httppool.HTTPPool(self_addr)` is a WSGI application. It answers
`GET /_geecache/<group>/<key>` with the value as `application/octet-stream`.
The error statuses are:

- 400 when the path has no key part.
- 404 for an unknown group.
- 500 when the lookup fails.

A request path outside `/_geecache/` raises `ValueError`.

`HTTPPool` is also a peer picker:

```python
from geecache.httppool import HTTPPool

pool = HTTPPool("http://localhost:8001")
pool.set("http://localhost:8001", "http://localhost:8002", "http://localhost:8003")
scores.register_peers(pool)
```

`set` replaces the whole peer list and builds a ring with 50 replicas for each
peer. `pick_peer(key)` returns an `HTTPGetter` for the owning peer, or `None`
when the key belongs to `self_addr`. `HTTPGetter.get(group, key)` raises
`geecache.httppool.PeerError` when the request fails.

## Running the demo cluster

The `geecache` command starts one cache node. The node serves a `scores`
group backed by a small built-in table: Tom, Jack and Sam. Start three nodes,
each in its own terminal:

```
geecache --port 8001
geecache --port 8002
geecache --port 8003 --api
```

`--port` must be 8001, 8002 or 8003, and the default is 8001. The node started
with `--api` also serves a front end at `http://localhost:9999`:

```
curl "http://localhost:9999/api?key=Tom"
```

It replies `630`. A key that is not in the table gets a 500 response that
carries the error message.

The same servers can be started from code with
`geecache.server.start_cache_server(addr, addrs, group)` and
`start_api_server(api_addr, group)`. Both block. `make_api_app(group)`
returns the front-end WSGI application on its own.

## What it does not do

- Values are kept only in memory. Nothing is persisted, and a restarted node
  starts empty.
- The `geecache` command always uses the three fixed localhost addresses shown
  above and the built-in `scores` table. It has no option for other peers or
  data sources.
- There is no invalidation or expiry. Entries leave the cache only through LRU
  eviction, and `set` changes only the local node.