"""Download research data from the game server over FTP."""

from __future__ import annotations

import ftplib
import io
import logging
from typing import Any, Callable, Optional, Protocol, Tuple

from thaumpath.clients.base_client import BaseClient
from thaumpath.config import (
    SNAPSHOT_EXTENSION,
    SNAPSHOT_PATH_TEMPLATE,
    SNAPSHOT_TIMEOUT_SECONDS,
)
from thaumpath.errors import SnapshotError
from thaumpath.net.rate_limiter import RateLimiter

DEFAULT_FTP_PORT = 21


class _FtpConnection(Protocol):
    def connect(self, host: str, port: int, timeout: float) -> Any: ...

    def login(self, user: str, passwd: str) -> Any: ...

    def retrbinary(
        self, cmd: str, callback: Callable[[bytes], Any]
    ) -> Any: ...

    def quit(self) -> Any: ...

    def close(self) -> None: ...


def snapshot_path(username: str) -> str:
    """Remote path of ``username``'s research file."""
    return SNAPSHOT_PATH_TEMPLATE.format(
        username=username, extension=SNAPSHOT_EXTENSION
    )


def split_address(address: str) -> Tuple[str, int]:
    """Split ``host[:port]``, defaulting to the standard FTP port."""
    host, separator, port = address.strip().rpartition(":")
    if not separator:
        return address.strip(), DEFAULT_FTP_PORT
    try:
        return host, int(port)
    except ValueError as error:
        raise SnapshotError(
            f"Invalid FTP port in address '{address}'"
        ) from error


class FtpSnapshotClient(BaseClient):
    """Log in to the server's FTP and retrieve ``<player>.thaum``."""

    def __init__(
        self,
        address: str,
        username: str,
        password: str,
        player: str,
        *,
        rate_limiter: Optional[RateLimiter] = None,
        logger: Optional[logging.Logger] = None,
        connection_factory: Optional[Callable[[], _FtpConnection]] = None,
    ) -> None:
        super().__init__(rate_limiter, logger=logger)
        self._host, self._port = split_address(address)
        self._username = username
        self._password = password
        self._path = snapshot_path(player)
        self._connection_factory: Callable[[], _FtpConnection] = (
            connection_factory or ftplib.FTP
        )

    def describe(self) -> str:
        return f"ftp://{self._host}:{self._port}{self._path}"

    def _download(self) -> bytes:
        connection = self._connection_factory()
        buffer = io.BytesIO()
        try:
            connection.connect(
                self._host, self._port, timeout=SNAPSHOT_TIMEOUT_SECONDS
            )
            connection.login(self._username, self._password)
            self._logger.debug(
                "Logged in to %s as %s", self._host, self._username
            )
            connection.retrbinary(f"RETR {self._path}", buffer.write)
        except ftplib.all_errors as error:
            connection.close()
            raise SnapshotError(
                f"FTP transfer of {self._path} from {self._host} failed: "
                f"{error}"
            ) from error

        try:
            connection.quit()
        except ftplib.all_errors:
            # The file is already in memory; a noisy goodbye is harmless.
            connection.close()
        return buffer.getvalue()
