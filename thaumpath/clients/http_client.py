"""Download research data published over HTTP(S)."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, cast
from urllib.parse import urlparse, urlunparse

import requests

from thaumpath.clients.base_client import BaseClient
from thaumpath.config import SNAPSHOT_TIMEOUT_SECONDS
from thaumpath.errors import SnapshotError
from thaumpath.net.rate_limiter import RateLimiter


class _SessionWithGet(Protocol):
    def get(self, url: str, timeout: int) -> Any: ...


class HttpSnapshotClient(BaseClient):
    """GET a gzip-compressed research file, e.g. from a hosting panel."""

    def __init__(
        self,
        url: str,
        *,
        rate_limiter: Optional[RateLimiter] = None,
        logger: Optional[logging.Logger] = None,
        session: Optional[_SessionWithGet] = None,
    ) -> None:
        super().__init__(rate_limiter, logger=logger)
        parsed = urlparse(url.strip())
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise SnapshotError(f"Unsupported snapshot URL: {url}")
        self._url = url.strip()
        self._session: _SessionWithGet = cast(
            _SessionWithGet, session or requests.Session()
        )

    def describe(self) -> str:
        parsed = urlparse(self._url)
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc = f"{netloc}:{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc, query=""))

    def _download(self) -> bytes:
        try:
            response = self._session.get(
                self._url, timeout=SNAPSHOT_TIMEOUT_SECONDS
            )
        except requests.RequestException as error:
            raise SnapshotError(
                f"Request to {self.describe()} failed: {error}"
            ) from error

        if response.status_code != 200:
            raise SnapshotError(
                f"Failed to retrieve research data: {response.status_code}"
            )
        return response.content
