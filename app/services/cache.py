import threading
import time
from typing import Any, Callable, Optional

from cachetools import TTLCache


class CacheService:
    """
    Cache mémoire local (LRU + TTL) au-dessus de cachetools, un par usage.
    TTLCache n'est pas thread-safe : tous les accès passent par le verrou.
    """

    def __init__(self, ttl: int = 3600, max_entries: int = 500,
                 timer: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._items: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def flush(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            self._items.expire()
            return len(self._items)


def session_question_cache_key(session_id: int, question_id: int) -> str:
    return f"session:{session_id}:question:{question_id}:lookup"


def question_cache_key(question_id: int) -> str:
    return f"question:{question_id}"
