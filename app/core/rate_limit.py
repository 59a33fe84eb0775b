import math
import time

from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter


class RateLimitExceeded(Exception):
    def __init__(self, retry_after: int):
        super().__init__(f"Rate limit exceeded, retry in {retry_after}s")
        self.retry_after = retry_after


class RateLimiter:
    """
    Limiteur à fenêtre glissante en mémoire (par process), ex: "10/minute".
    """

    def __init__(self, rate: str):
        self.item = parse(rate)
        self._limiter = MovingWindowRateLimiter(MemoryStorage())

    def check(self, namespace: str, key: str) -> None:
        """Consomme un jeton ou lève RateLimitExceeded avec le délai d'attente."""
        if self._limiter.hit(self.item, namespace, key):
            return
        stats = self._limiter.get_window_stats(self.item, namespace, key)
        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        raise RateLimitExceeded(retry_after)
