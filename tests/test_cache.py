from app.services.cache import CacheService, question_cache_key, session_question_cache_key


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_set_get_delete():
    cache = CacheService()
    cache.set("k", {"a": 1})
    assert cache.get("k") == {"a": 1}
    cache.delete("k")
    assert cache.get("k") is None


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = CacheService(ttl=60, timer=clock)
    cache.set("k", 1)

    clock.now += 59
    assert cache.get("k") == 1

    clock.now += 2
    assert cache.get("k") is None
    assert len(cache) == 0


def test_least_recently_used_is_evicted():
    cache = CacheService(max_entries=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_flush():
    cache = CacheService()
    cache.set("a", 1)
    cache.flush()
    assert len(cache) == 0


def test_keys():
    assert session_question_cache_key(1, 101) == "session:1:question:101:lookup"
    assert question_cache_key(1379) == "question:1379"
