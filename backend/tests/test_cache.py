import re
import threading
from reptrack.cache import TTLCache

class Tick:
    def __init__(self): self.t = 0.0
    def __call__(self): return self.t

def test_get_set_and_expiry():
    tick = Tick()
    cache = TTLCache(ttl=10, clock=tick)
    cache.set("a", [1, 2])
    assert cache.get("a") == [1, 2]
    tick.t = 10
    assert cache.get("a") == [1, 2]
    tick.t = 10.5
    assert cache.get("a") is None
    assert len(cache) == 0  # evicted on read

def test_per_entry_ttl_and_default():
    tick = Tick()
    cache = TTLCache(ttl=10, clock=tick)
    cache.set("short", "x", ttl=1)
    cache.set("empty", [])
    tick.t = 2
    assert cache.get("short", "miss") == "miss"
    assert cache.get("empty", "miss") == []

def test_invalidate_exact_and_pattern():
    cache = TTLCache()
    cache.set("/routines/u1:{}", 1)
    cache.set("/routines/u1/monday:{}", 2)
    cache.set("/users/u1/sets:{}", 3)
    assert cache.invalidate("nope") == 0
    assert cache.invalidate("/users/u1/sets:{}") == 1
    assert cache.invalidate(re.compile(r"^/routines/u1")) == 2
    assert cache.stats() == {"size": 0, "entries": []}

def test_make_key_ignores_param_order():
    assert TTLCache.make_key("/x", {"b": 1, "a": 2}) == TTLCache.make_key("/x", {"a": 2, "b": 1})
    assert TTLCache.make_key("/x") == "/x:{}"

def test_instances_do_not_share_entries():
    one, two = TTLCache(), TTLCache()
    one.set("k", 1)
    assert two.get("k") is None
    one.clear()
    assert one.get("k") is None

def test_set_sweeps_expired_entries():
    tick = Tick()
    cache = TTLCache(ttl=5, clock=tick)
    for q in ("squat", "bench", "row"):
        cache.set(f"search:{q}", [q])
    tick.t = 6
    # never read again, but the next write drops them
    cache.set("search:curl", ["curl"])
    assert cache.stats() == {"size": 1, "entries": ["search:curl"]}

def test_expired_key_read_twice_is_a_plain_miss():
    tick = Tick()
    cache = TTLCache(ttl=1, clock=tick)
    cache.set("k", 1)
    tick.t = 2
    assert cache.get("k") is None
    assert cache.get("k", "miss") == "miss"
    assert cache.invalidate("k") == 0

def test_concurrent_readers_and_writers():
    tick = Tick()
    cache = TTLCache(ttl=1, clock=tick)
    errors = []

    def reader():
        try:
            for i in range(2000):
                cache.get(f"k{i % 50}")
                cache.invalidate(re.compile(r"^k1"))
        except Exception as e:  # surfaced below
            errors.append(e)

    def writer():
        try:
            for i in range(2000):
                cache.set(f"k{i % 50}", i)
                tick.t += 0.01
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=f) for f in (reader, writer, reader, writer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
