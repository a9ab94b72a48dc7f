"""Error types raised while loading inventories and resolving aspects."""

from __future__ import annotations


class ThaumPathError(RuntimeError):
    """Base class for failures the solver cannot recover from locally."""


class MalformedInventory(ThaumPathError):
    """Raised when the aspect inventory snapshot is structurally invalid."""


class MissingAspectList(MalformedInventory):
    """Raised when the snapshot lacks a list of aspect records."""


class MalformedAspectRecord(MalformedInventory):
    """Raised when an entry of the aspect list is not a record."""


class MissingAspectField(MalformedInventory):
    """Raised when a record lacks its key or amount, or has the wrong type."""


class InvalidAspectAmount(MalformedInventory):
    """Raised when an amount does not fit a signed 16-bit integer."""


class NegativeAspectAmount(MalformedInventory):
    """Raised when a record stores a negative amount."""


class UnknownAspectKey(MalformedInventory):
    """Raised when a record names an aspect missing from the catalog."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Aspect inventory contains unknown aspect '{key}'")
        self.key = key


class SnapshotError(ThaumPathError):
    """Raised when a snapshot cannot be retrieved or decoded."""
