# cacheproxy

Components for a multi-threaded caching HTTP/1.0 proxy:

- `cacheproxy.cache` – a thread-safe in-memory object cache with LRU or
  LFU replacement;
- `cacheproxy.sbuf` – a bounded, blocking FIFO buffer for handing work
  from a producer thread to a pool of workers;
- `cacheproxy.rio` – buffered line and block reading from sockets, and
  complete writes;
- `cacheproxy.adder` – a small CGI program that adds two numbers.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The object cache

```python
from cacheproxy.cache import CachePolicy, ObjectCache

cache = ObjectCache(CachePolicy.LFU, 1049000)
cache.insert("example.com", "/", 80, b"HTTP/1.0 200 OK\r\n\r\nhello")
entry = cache.find("example.com", "/", 80)   # CacheEntry or None
print(entry.size, entry.freq)
print(cache.describe())
```

- Entries (`CacheEntry`) are keyed by host name, path and port. `insert`
  puts a new entry at the front and adds its size to `total_size`; while
  the total is larger than `max_size` (default 1049000 bytes), `evict`
  removes one entry.
- `find` counts a hit in the entry's `freq`. Under `CachePolicy.LRU` it
  also moves the entry to the front, and eviction drops the entry at the
  back (least recently used). Under `CachePolicy.LFU` eviction drops the
  entry with the fewest hits.
- `evict` returns the removed entry, or `None` when the cache is empty.
- `entries()` returns a snapshot, front to back; `len(cache)` counts
  entries; `describe()` gives one summary line per entry.
- `CachePolicy.from_name("lfu")` gives `LFU`; any other name gives `LRU`.
- The module also defines `MAX_OBJECT_SIZE` (102400), the size limit for
  objects a proxy would cache; `insert` itself does not enforce it.

All methods take the cache's lock, so one cache can be shared by threads.

## The shared buffer

```python
from cacheproxy.sbuf import SharedBuffer

queue = SharedBuffer(32)
queue.insert(5)          # blocks while the buffer holds 32 items
assert queue.remove() == 5   # blocks while the buffer is empty
```

A capacity below 1 raises `ValueError`. Items come out in the order they
went in.

## Socket I/O

```python
from cacheproxy.rio import RioReader, write_all

reader = RioReader(sock)
request_line = reader.read_line()   # at most maxlen - 1 bytes, newline kept
body = reader.read_n(1024)          # fewer bytes only at end of stream
for line in reader:                 # remaining lines until end of stream
    ...
write_all(sock, b"HTTP/1.0 200 OK\r\n")
```

`RioReader` works with any object that has a `recv` method and buffers up
to 8192 bytes at a time; `read_line` returns `b""` at end of stream.
`write_all` accepts bytes or text (encoded as UTF-8) and returns the number
of bytes sent. Interrupted calls are retried; other socket errors are
raised as `NetError`, a subclass of `OSError`.

## The adder CGI program

```
QUERY_STRING='15000&213' cacheproxy-adder
```

Writes a complete CGI response (`Connection`, `Content-length` and
`Content-type` headers, then an HTML body) reporting the sum of the two
numbers. Each number is read like C's `atoi`: leading digits with an
optional sign, 0 if there are none. With no `QUERY_STRING` both numbers
are 0. A query without `&` is an error: the message goes to standard error
and the exit status is 1.

From Python, `parse_query("1&2")` returns `(1, 2)` and `render(query)`
returns the full response text.

## What this package does not do

The package does not include a runnable proxy server or web server: there
is no command that listens on a port, accepts connections, parses proxy
request URIs or forwards requests to origin servers, and nothing that
serves static files or launches CGI programs. The cache, buffer and socket
I/O pieces above are what such a server would be built from.