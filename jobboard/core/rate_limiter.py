import math
import threading
import time
from typing import NamedTuple


class _Window(NamedTuple):
    hits: int
    expires_at: float


class InMemoryRateLimiter:
    """
    Fixed-window hit counter for the auth endpoints, keyed by client IP and path.

    Counts live in process memory, so every worker enforces its own limit.
    Once more than ``max_keys`` windows are tracked, expired ones are dropped.
    """

    def __init__(self, clock=time.monotonic, max_keys: int = 10_000) -> None:
        self._clock = clock
        self._max_keys = max_keys
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """Count one hit for key. Returns (allowed, seconds until the window reopens)."""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now >= window.expires_at:
                window = _Window(0, now + window_seconds)
            if window.hits >= limit:
                return False, max(1, math.ceil(window.expires_at - now))
            self._windows[key] = window._replace(hits=window.hits + 1)
            if len(self._windows) > self._max_keys:
                self._drop_expired(now)
            return True, 0

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._windows)

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    def _drop_expired(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now >= w.expires_at]
        for k in expired:
            del self._windows[k]


rate_limiter = InMemoryRateLimiter()
