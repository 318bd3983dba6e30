"""Attribute specs: literal values and zero-argument producers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

V = TypeVar("V")


class AttributeSpec(ABC, Generic[V]):
    """Describes how a single attribute value is produced for each build."""

    @abstractmethod
    def resolve(self) -> V:
        """Return the value for one build."""


def _copy_containers(value: Any) -> Any:
    """Copy builtin containers recursively; every other value is shared."""
    if type(value) is dict:
        return {k: _copy_containers(v) for k, v in value.items()}
    if type(value) is list:
        return [_copy_containers(v) for v in value]
    if type(value) is set:
        return set(value)
    return value


class Static(AttributeSpec[V]):
    """A literal value, copied on every build."""

    def __init__(self, value: V) -> None:
        self.value = value

    def resolve(self) -> V:
        return _copy_containers(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Static) and other.value == self.value

    def __repr__(self) -> str:
        return f"Static({self.value!r})"


class Producer(AttributeSpec[V]):
    """A zero-argument callable, invoked on every build."""

    def __init__(self, func: Callable[[], V]) -> None:
        self.func = func

    def resolve(self) -> V:
        return self.func()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Producer) and other.func is self.func

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", type(self.func).__name__)
        return f"Producer({name})"


def attribute(value: Any) -> AttributeSpec[Any]:
    """Coerce a raw attribute value into an AttributeSpec.

    Callables become producers; classes are kept as literal values so a type
    can itself be an attribute value.
    """
    if isinstance(value, AttributeSpec):
        return value
    if callable(value) and not isinstance(value, type):
        return Producer(value)
    return Static(value)
