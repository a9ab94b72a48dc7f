"""Base class for rate-limited snapshot clients."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from thaumpath.errors import SnapshotError
from thaumpath.net.rate_limiter import RateLimiter

DEFAULT_MAX_CALLS = 1
DEFAULT_PERIOD_SECONDS = 10.0


class BaseClient(ABC):
    """Fetch raw snapshot bytes, one rate-limited transfer at a time."""

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._rate_limiter = rate_limiter or RateLimiter(
            max_calls=DEFAULT_MAX_CALLS,
            period_seconds=DEFAULT_PERIOD_SECONDS,
        )
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location of the snapshot, without credentials."""

    @abstractmethod
    def _download(self) -> bytes:
        """Perform the transfer; transport errors may escape."""

    def fetch(self) -> bytes:
        """Download the snapshot, wrapping transport failures."""
        location = self.describe()
        try:
            data = self._execute_with_rate_limit(
                self._download, name=f"fetch({location})"
            )
        except SnapshotError:
            raise
        except Exception as error:
            self._logger.exception(
                "Snapshot download from %s failed", location
            )
            raise SnapshotError(
                f"Could not download research data from {location}: {error}"
            ) from error

        self._logger.info("Downloaded %d bytes from %s", len(data), location)
        return data

    def _execute_with_rate_limit(
        self,
        operation: Callable[[], bytes],
        *,
        name: Optional[str] = None,
    ) -> bytes:
        """Run ``operation`` after waiting for rate-limiter availability."""
        label = name or getattr(operation, "__name__", "<anonymous>")
        delay = self._rate_limiter.wait_time()
        if delay > 0:
            self._logger.info("Waiting %.1f s before %s", delay, label)
        self._rate_limiter.acquire()

        started_at = time.perf_counter()
        try:
            return operation()
        finally:
            elapsed_ms = (time.perf_counter() - started_at) * 1000.0
            if self._logger.isEnabledFor(logging.DEBUG):
                self._logger.debug(
                    "Operation %s completed in %.2f ms",
                    label,
                    elapsed_ms,
                )
