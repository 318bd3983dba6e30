"""Monotonic counter shared by all blueprints of a registry."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

V = TypeVar("V")


class Sequence:
    """Strictly increasing counter; only `reset` brings it back to zero."""

    def __init__(self) -> None:
        self._value = 0

    def next(self, produce: Callable[[int], V]) -> V:
        """Advance the counter and pass the new value to `produce`."""
        self._value += 1
        return produce(self._value)

    def reset(self) -> None:
        self._value = 0

    def __repr__(self) -> str:
        return "Sequence()"
