"""Decode research snapshots and turn them into aspect inventories."""

from __future__ import annotations

import gzip
import io
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol, Union

import nbtlib

from thaumpath.aspects import Aspect
from thaumpath.errors import SnapshotError
from thaumpath.inventory import AspectInventory

_LOGGER = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    """Where the raw, gzip-compressed research file comes from."""

    def describe(self) -> str: ...

    def fetch(self) -> bytes: ...


class FileSnapshotSource:
    """Read a research file copied to the local disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    def describe(self) -> str:
        return str(self._path)

    def fetch(self) -> bytes:
        try:
            return self._path.read_bytes()
        except OSError as error:
            raise SnapshotError(
                f"Could not read research data from {self._path}: {error}"
            ) from error


def decode_snapshot(data: bytes) -> Mapping[str, Any]:
    """Gunzip ``data`` and parse the NBT compound inside it."""
    try:
        payload = gzip.decompress(data)
    except (OSError, EOFError) as error:
        raise SnapshotError(
            f"Research data is not gzip-compressed: {error}"
        ) from error
    if not payload:
        raise SnapshotError("Research data is empty.")

    try:
        root = nbtlib.File.from_fileobj(io.BytesIO(payload))
    except Exception as error:
        # nbtlib surfaces truncated input as assorted low-level errors.
        raise SnapshotError(
            f"Research data is not a valid NBT file: {error}"
        ) from error

    _LOGGER.debug("Decoded NBT root with keys %s", sorted(root))
    return root


def load_inventory(source: SnapshotSource) -> AspectInventory[Aspect]:
    """Fetch, decode and validate a snapshot in one step.

    Raises :class:`~thaumpath.errors.SnapshotError` for transport or decoding
    problems and a :class:`~thaumpath.errors.MalformedInventory` subclass
    when the decoded data has the wrong shape.
    """
    _LOGGER.info("Loading research data from %s", source.describe())
    return AspectInventory.from_nbt(decode_snapshot(source.fetch()))
