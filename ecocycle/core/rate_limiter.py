"""
In-memory sliding-window rate limiter.

Keeps recent request timestamps per action and denies once the window is
full. Process-local; the persistent per-user quota lives in
RateLimitService.

Dependencies: None (stdlib only)
System role: Upload throttling and client-side rate-limit hints
"""

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    Per-action sliding-window counter.

    Keys whose timestamps have all left the window are swept at most once
    per ``sweep_interval`` seconds, so per-user keys do not accumulate.

    Args:
        clock: Returns the current time in seconds (defaults to time.monotonic)
        sweep_interval: Minimum seconds between sweeps of idle keys
    """

    def __init__(self, clock: Callable[[], float] | None = None, sweep_interval: float = 60.0) -> None:
        self._clock = clock or time.monotonic
        self._requests: dict[str, list[float]] = {}
        self._lock = threading.Lock()
        self.sweep_interval = sweep_interval
        self._longest_window = 0.0
        self._last_sweep = self._clock()

    @property
    def tracked_actions(self) -> int:
        with self._lock:
            return len(self._requests)

    def _sweep(self, now: float) -> None:
        # caller holds the lock
        if now - self._last_sweep < self.sweep_interval:
            return
        self._last_sweep = now
        idle = [key for key, stamps in self._requests.items() if not stamps or now - stamps[-1] >= self._longest_window]
        for key in idle:
            del self._requests[key]

    def is_allowed(self, action: str, max_requests: int, window_seconds: float) -> bool:
        """
        Record a request for ``action`` if the window has room.

        Args:
            action: Bucket key, e.g. "upload:<user_id>"
            max_requests: Requests allowed per window
            window_seconds: Window length

        Returns:
            bool: True when recorded, False when the window is full
        """
        now = self._clock()
        with self._lock:
            self._longest_window = max(self._longest_window, window_seconds)
            self._sweep(now)
            recent = [ts for ts in self._requests.get(action, []) if now - ts < window_seconds]
            if len(recent) >= max_requests:
                if recent:
                    self._requests[action] = recent
                else:
                    self._requests.pop(action, None)
                logger.warning(
                    "Rate limit exceeded",
                    extra={"action": action, "max_requests": max_requests, "window_seconds": window_seconds},
                )
                return False
            recent.append(now)
            self._requests[action] = recent
            return True

    def remaining(self, action: str, max_requests: int, window_seconds: float) -> int:
        now = self._clock()
        with self._lock:
            recent = [ts for ts in self._requests.get(action, []) if now - ts < window_seconds]
        return max(0, max_requests - len(recent))

    def reset(self, action: str) -> None:
        with self._lock:
            self._requests.pop(action, None)

    def clear_all(self) -> None:
        with self._lock:
            self._requests.clear()
