# autodiag/services/rate_limiter.py

import time
from typing import Callable, Dict, Optional, Tuple

from autodiag.errors import RateLimitExceeded

# Sweep every expired window once this many keys are tracked
PRUNE_THRESHOLD = 1024


class RateLimiter:
    """
    Fixed-window request counter per key.

    State is {key: (count, window_start)}. The clock is injected so tests
    can drive time and so the store can be swapped for a shared one.
    Expired windows are dropped when their key is looked up again, and all
    of them are swept once the map reaches PRUNE_THRESHOLD keys.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, Tuple[int, float]] = {}

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    def _expired(self, window: Tuple[int, float], now: float) -> bool:
        return now - window[1] >= self.window_seconds

    def _active_window(self, key: str, now: float) -> Optional[Tuple[int, float]]:
        window = self._windows.get(key)
        if window is None:
            return None
        if self._expired(window, now):
            del self._windows[key]
            return None
        return window

    def prune(self) -> int:
        """
        Drop every expired window. Returns how many were removed.
        """
        now = self.clock()
        stale = [key for key, window in self._windows.items() if self._expired(window, now)]
        for key in stale:
            del self._windows[key]
        return len(stale)

    def check(self, key: str) -> bool:
        """
        Count one request. False when the key is over its limit.
        """
        now = self.clock()
        window = self._active_window(key, now)

        if window is None:
            if len(self._windows) >= PRUNE_THRESHOLD:
                self.prune()
            self._windows[key] = (1, now)
            return True

        count, started = window
        if count >= self.max_requests:
            return False

        self._windows[key] = (count + 1, started)
        return True

    def acquire(self, key: str) -> None:
        if not self.check(key):
            raise RateLimitExceeded(key, self.reset_time(key))

    def remaining(self, key: str) -> int:
        window = self._active_window(key, self.clock())
        if window is None:
            return self.max_requests
        return max(0, self.max_requests - window[0])

    def reset_time(self, key: str) -> Optional[float]:
        window = self._active_window(key, self.clock())
        if window is None:
            return None
        return window[1] + self.window_seconds

    def reset(self, key: str) -> None:
        self._windows.pop(key, None)
