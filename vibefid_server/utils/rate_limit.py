import time
from typing import Callable

from vibefid_server.utils import db_access


class RateLimiter:
    """
    One request per key per window, checked against the shared RateLimits
    table rather than process memory, so every worker sees the same state.

    Keys are case-insensitive (wallet addresses arrive in mixed case).
    """

    def __init__(self, scope: str, window_ms: int, clock: Callable[[], float] = time.time):
        self.scope = scope
        self.window_ms = window_ms
        self._clock = clock

    def _key(self, key: str) -> str:
        return f"{self.scope}:{str(key).strip().lower()}"

    def check(self, key: str) -> int:
        """Record a hit for `key`. Returns 0 if allowed, else ms until it is."""
        now_ms = int(self._clock() * 1000)
        return db_access.hit_rate_limit(self._key(key), self.window_ms, now_ms)

    def allow(self, key: str) -> bool:
        return self.check(key) == 0

    def reset(self) -> int:
        return db_access.clear_rate_limits(f"{self.scope}:")
