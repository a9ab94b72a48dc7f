"""Aspect inventory snapshot and the prices derived from it."""

from __future__ import annotations

import logging
from typing import (
    Any,
    Dict,
    Generic,
    Hashable,
    Mapping,
    Sequence,
    Tuple,
    TypeVar,
)

from thaumpath.aspects import Aspect
from thaumpath.config import ASPECT_LIST_TAG, UNAFFORDABLE_PRICE
from thaumpath.errors import (
    InvalidAspectAmount,
    MalformedAspectRecord,
    MissingAspectField,
    MissingAspectList,
    NegativeAspectAmount,
    UnknownAspectKey,
)

_LOGGER = logging.getLogger(__name__)

SHORT_MIN = -(2**15)
SHORT_MAX = 2**15 - 1

T = TypeVar("T", bound=Hashable)


class AspectInventory(Generic[T]):
    """Immutable amounts of each aspect held by one player.

    Prices fall as amounts grow: the most-held aspect costs ``1``, each unit
    less costs one more, and an aspect that is not held at all costs
    :data:`~thaumpath.config.UNAFFORDABLE_PRICE`.
    """

    def __init__(self, amounts: Mapping[T, int]) -> None:
        for node, amount in amounts.items():
            if amount < 0:
                raise NegativeAspectAmount(
                    f"Aspect amount for '{node}' is negative"
                )
        self._amounts: Dict[T, int] = {
            node: amount for node, amount in amounts.items() if amount > 0
        }
        self._max_amount = max(self._amounts.values(), default=0)

    @classmethod
    def from_nbt(cls, nbt: Mapping[str, Any]) -> "AspectInventory[Aspect]":
        """Build an inventory from a decoded research save structure.

        Any structural problem raises a
        :class:`~thaumpath.errors.MalformedInventory` subclass naming the
        offending record; nothing is skipped.
        """
        records = None
        if isinstance(nbt, Mapping):
            records = nbt.get(ASPECT_LIST_TAG)
        if not _is_record_list(records):
            raise MissingAspectList(
                "The NBT structure does not contain a valid list of "
                "Thaumcraft aspects"
            )

        amounts: Dict[Aspect, int] = {}
        for record in records:
            aspect, amount = _parse_record(record)
            amounts[aspect] = amount

        _LOGGER.info(
            "Loaded %d aspect records (%d distinct aspects)",
            len(records),
            len(amounts),
        )
        return AspectInventory(amounts)

    @property
    def max_amount(self) -> int:
        return self._max_amount

    def amount_of(self, node: T) -> int:
        return self._amounts.get(node, 0)

    def price_of(self, node: T) -> int:
        amount = self.amount_of(node)
        if amount == 0:
            return UNAFFORDABLE_PRICE
        return self._max_amount + 1 - amount

    def owned(self) -> Tuple[T, ...]:
        """Held aspects, most plentiful first."""
        return tuple(
            sorted(self._amounts, key=lambda node: -self._amounts[node])
        )

    def __len__(self) -> int:
        return len(self._amounts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}"
            f"(owned={len(self)}, max_amount={self._max_amount})"
        )


def _is_record_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _parse_record(record: Any) -> Tuple[Aspect, int]:
    if not isinstance(record, Mapping):
        raise MalformedAspectRecord(
            "Aspect inventory contains unexpected NBT element"
        )

    key = record.get("key")
    if not isinstance(key, str):
        raise MissingAspectField("Aspect key is missing or not a string")

    amount = record.get("amount")
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise MissingAspectField(
            f"Aspect amount for '{key}' is missing or not a short"
        )
    if not SHORT_MIN <= amount <= SHORT_MAX:
        raise InvalidAspectAmount(
            f"Aspect amount for '{key}' does not fit in a short: {amount}"
        )
    if amount < 0:
        raise NegativeAspectAmount(f"Aspect amount for '{key}' is negative")

    aspect = Aspect.by_key(key)
    if aspect is None:
        raise UnknownAspectKey(key)
    return aspect, int(amount)
