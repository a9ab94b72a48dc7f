"""
ThaumPath Repository
Introductory remarks: This module is part of the ThaumPath codebase.

Token-bucket limiter guarding snapshot downloads.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Optional


class RateLimiter:
    """Allow at most ``max_calls`` operations per ``period_seconds``.

    Each :meth:`acquire` consumes one token; tokens refill continuously.
    Game servers tend to throttle or ban clients that log in repeatedly, so
    every snapshot client passes through one of these.
    """

    def __init__(
        self,
        max_calls: int,
        period_seconds: float,
        *,
        time_fn: Optional[Callable[[], float]] = None,
        sleep_fn: Optional[Callable[[float], None]] = None,
    ) -> None:
        if max_calls <= 0:
            raise ValueError("max_calls must be positive.")
        if period_seconds <= 0:
            raise ValueError("period_seconds must be positive.")

        self._capacity = float(max_calls)
        self._seconds_per_token = float(period_seconds) / self._capacity
        self._time_fn = time_fn or time.monotonic
        self._sleep_fn = sleep_fn or time.sleep

        self._lock = threading.Lock()
        self._tokens = self._capacity
        self._updated_at = self._time_fn()

    def wait_time(self) -> float:
        """Seconds until the next :meth:`acquire` would return."""
        with self._lock:
            self._refill(self._time_fn())
            if self._tokens >= 1.0:
                return 0.0
            return (1.0 - self._tokens) * self._seconds_per_token

    def acquire(self) -> None:
        """Block until a token is available, then consume it."""
        while True:
            with self._lock:
                self._refill(self._time_fn())
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return
                delay = (1.0 - self._tokens) * self._seconds_per_token

            self._sleep_fn(delay)

    def _refill(self, now: float) -> None:
        elapsed = now - self._updated_at
        if elapsed <= 0:
            return
        self._tokens = min(
            self._capacity, self._tokens + elapsed / self._seconds_per_token
        )
        self._updated_at = now
