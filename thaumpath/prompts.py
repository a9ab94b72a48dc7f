"""Input validation for the interactive loop.

Validators are pure: they take the raw text and return a
:class:`Validation`. :func:`prompt_until_valid` is the single place that
re-prompts, so the validators can be tested without a console.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Collection, Generic, Optional, TypeVar, Union

from thaumpath.aspects import Aspect

V = TypeVar("V")

ReadFn = Callable[[str], str]
WriteFn = Callable[[str], None]

YES_ANSWERS = frozenset({"yes", "y"})
COMMANDS = frozenset({"quit", "exit", "refresh"})


@dataclass(frozen=True)
class Validation(Generic[V]):
    """Outcome of validating one line of input.

    A success carries ``value``. A failure carries ``reason``. A tentative
    success also carries ``confirm``, a question the user must answer with
    yes before the value is accepted.
    """

    value: Optional[V] = None
    reason: Optional[str] = None
    confirm: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(
        cls, value: V, confirm: Optional[str] = None
    ) -> "Validation[V]":
        return cls(value=value, confirm=confirm)

    @classmethod
    def failure(cls, reason: str) -> "Validation[V]":
        return cls(reason=reason)


def validate_aspect_name(text: str) -> Validation[Aspect]:
    """Resolve ``text`` to an aspect, asking to confirm inexact matches."""
    stripped = text.strip()
    exact = Aspect.by_key(stripped)
    if exact is not None:
        return Validation.success(exact)

    match = Aspect.fuzzy_match(stripped)
    if match is None:
        return Validation.failure("Aspect does not exist!")
    if match.exact:
        return Validation.success(match.aspect)
    return Validation.success(
        match.aspect,
        confirm=f"Did you mean '{match.aspect.label}'? y/n",
    )


def validate_aspect_or_command(
    text: str, commands: Collection[str] = COMMANDS
) -> Validation[Union[Aspect, str]]:
    """Like :func:`validate_aspect_name`, but let session commands through."""
    normalized = text.strip().lower()
    if normalized in commands:
        return Validation.success(normalized)
    result = validate_aspect_name(text)
    return Validation(
        value=result.value, reason=result.reason, confirm=result.confirm
    )


def validate_distance(text: str) -> Validation[int]:
    """Accept a non-negative count of intermediate aspects."""
    try:
        distance = int(text.strip())
    except ValueError:
        return Validation.failure("Please enter a valid number")
    if distance < 0:
        return Validation.failure("The distance cannot be negative")
    return Validation.success(distance)


def is_yes(text: str) -> bool:
    return text.strip().lower() in YES_ANSWERS


def prompt_until_valid(
    message: str,
    validate: Callable[[str], Validation[V]],
    *,
    read: ReadFn = input,
    write: WriteFn = print,
) -> V:
    """Keep asking ``message`` until ``validate`` accepts the answer.

    ``EOFError`` from ``read`` propagates so callers can end the session.
    """
    while True:
        result = validate(read(message))
        if not result.ok:
            write(result.reason or "Invalid input")
            continue
        if result.confirm is not None:
            write(result.confirm)
            if not is_yes(read("")):
                continue
        return result.value  # type: ignore[return-value]
