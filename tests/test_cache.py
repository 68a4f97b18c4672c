import threading

import pytest

from cacheproxy.cache import CacheEntry, CachePolicy, ObjectCache


def keys(cache):
    return [e.path for e in cache.entries()]


def test_miss_returns_none():
    cache = ObjectCache(CachePolicy.LRU, 100)
    cache.insert("example.com", "/a", 80, b"abc")
    assert cache.find("example.com", "/a", 81) is None
    assert cache.find("example.com", "/b", 80) is None
    assert cache.find("other.example.com", "/a", 80) is None


def test_hit_returns_content_and_counts():
    cache = ObjectCache(CachePolicy.LRU, 100)
    cache.insert("example.com", "/a", 80, b"hello")
    entry = cache.find("example.com", "/a", 80)
    assert entry.content == b"hello"
    assert entry.size == len(b"hello")
    assert entry.freq == 1
    assert cache.find("example.com", "/a", 80).freq == 2


def test_insert_puts_newest_first():
    cache = ObjectCache(CachePolicy.LRU, 100)
    for p in ["/a", "/b", "/c"]:
        cache.insert("h", p, 80, b"x")
    assert keys(cache) == ["/c", "/b", "/a"]
    assert len(cache) == 3
    assert cache.total_size == 3


def test_lru_find_moves_to_front():
    cache = ObjectCache(CachePolicy.LRU, 100)
    for p in ["/a", "/b", "/c"]:
        cache.insert("h", p, 80, b"x")
    cache.find("h", "/a", 80)
    assert keys(cache) == ["/a", "/c", "/b"]


def test_lfu_find_keeps_order():
    cache = ObjectCache(CachePolicy.LFU, 100)
    for p in ["/a", "/b", "/c"]:
        cache.insert("h", p, 80, b"x")
    cache.find("h", "/a", 80)
    assert keys(cache) == ["/c", "/b", "/a"]


def test_lru_evicts_least_recent():
    cache = ObjectCache(CachePolicy.LRU, 10)
    cache.insert("h", "/a", 80, b"12345")
    cache.insert("h", "/b", 80, b"12345")
    cache.find("h", "/a", 80)
    cache.insert("h", "/c", 80, b"12345")
    assert keys(cache) == ["/c", "/a"]
    assert cache.total_size <= cache.max_size


def test_lfu_evicts_least_frequent():
    cache = ObjectCache(CachePolicy.LFU, 10)
    cache.insert("h", "/a", 80, b"12345")
    cache.insert("h", "/b", 80, b"12345")
    cache.find("h", "/b", 80)
    cache.find("h", "/a", 80)
    cache.find("h", "/a", 80)
    cache.insert("h", "/c", 80, b"12345")
    # new entry has freq 0 and is the only minimum
    assert keys(cache) == ["/b", "/a"]


def test_lfu_tie_removes_frontmost_minimum():
    cache = ObjectCache(CachePolicy.LFU, 100)
    for p in ["/a", "/b", "/c"]:
        cache.insert("h", p, 80, b"x")
    victim = cache.evict()
    assert victim.path == "/c"
    assert keys(cache) == ["/b", "/a"]


def test_evict_empty_is_noop():
    for policy in CachePolicy:
        cache = ObjectCache(policy, 10)
        assert cache.evict() is None
        assert len(cache) == 0


def test_oversized_object_is_not_kept():
    cache = ObjectCache(CachePolicy.LRU, 4)
    cache.insert("h", "/big", 80, b"123456")
    assert len(cache) == 0
    assert cache.total_size == 0


def test_total_size_tracks_evictions():
    cache = ObjectCache(CachePolicy.LRU, 100)
    cache.insert("h", "/a", 80, b"aaa")
    cache.insert("h", "/b", 80, b"bb")
    cache.evict()
    assert cache.total_size == len(b"bb")


def test_describe_format():
    cache = ObjectCache(CachePolicy.LRU, 100)
    cache.insert("example.com", "/index.html", 8080, b"abc")
    assert cache.describe() == (
        "! hostname: example.com, path: /index.html, port: 8080, size: 3, freq: 0"
    )


def test_policy_from_name():
    assert CachePolicy.from_name("lfu") is CachePolicy.LFU
    assert CachePolicy.from_name("LRU") is CachePolicy.LRU
    assert CachePolicy.from_name("anything") is CachePolicy.LRU


def test_entry_matches():
    entry = CacheEntry("h", "/p", 80, b"")
    assert entry.matches("h", "/p", 80)
    assert not entry.matches("h", "/p", 81)


def test_concurrent_inserts_respect_limit():
    cache = ObjectCache(CachePolicy.LRU, 50)

    def worker(n):
        for i in range(50):
            cache.insert("h", f"/{n}/{i}", 80, b"0123456789")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert cache.total_size <= 50
    assert cache.total_size == sum(e.size for e in cache.entries())


@pytest.mark.parametrize("policy", list(CachePolicy))
def test_insert_returns_entry_findable(policy):
    cache = ObjectCache(policy, 100)
    entry = cache.insert("h", "/p", 80, bytearray(b"data"))
    assert cache.find("h", "/p", 80) is entry
    assert entry.content == b"data"