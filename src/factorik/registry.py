"""Registry: a mutable collection of blueprints and the build entry points."""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, TypeVar

from .blueprints import Blueprint
from .errors import DuplicateTraitDefinition, EmptyEnumeration, UndefinedBlueprint
from .resolve import Resolver
from .sequence import Sequence

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _merge(attributes: Mapping[str, Any] | None, extra: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(attributes or {})
    merged.update(extra)
    return merged


def _distinct_values(enumeration: Any) -> list[Any]:
    """Return the distinct values of an enum class, mapping, or iterable."""
    if isinstance(enumeration, type) and issubclass(enumeration, enum.Enum):
        return list(enumeration)
    if isinstance(enumeration, Mapping):
        enumeration = enumeration.values()

    values: list[Any] = []
    for value in enumeration:
        if value not in values:
            values.append(value)
    return values


class Registry(Mapping[str, Blueprint]):
    """Named blueprints plus the sequence shared between them."""

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._blueprints: dict[str, Blueprint] = {}
        self._sequence = Sequence()
        self._resolver = Resolver()
        self._rng = rng or random.Random()

    @property
    def blueprints(self) -> dict[str, Blueprint]:
        """Return the blueprint registry."""
        return self._blueprints

    def define(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        target: type | None = None,
        /,
        **kwargs: Any,
    ) -> Blueprint:
        """Store a blueprint under `name`, replacing any previous definition."""
        if name in self._blueprints:
            logger.debug("Redefining blueprint '%s'", name)
        bp = Blueprint(name=name, target=target, attributes=_merge(attributes, kwargs))
        logger.debug("Defined blueprint '%s' with %d attribute(s)", name, len(bp))
        self._blueprints[name] = bp
        return bp

    def extend(
        self,
        name: str,
        trait: str,
        attributes: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> Blueprint:
        """Define `trait` as a copy of `name` with extra or replaced attributes.

        Raises UndefinedBlueprint if `name` is missing and
        DuplicateTraitDefinition if `trait` is already taken.
        """
        if name not in self._blueprints:
            raise UndefinedBlueprint(name)
        if trait in self._blueprints:
            raise DuplicateTraitDefinition(name, trait)
        bp = self._blueprints[name].extend(trait, _merge(attributes, kwargs))
        self._blueprints[trait] = bp
        return bp

    def register(self, blueprints: Iterable[Blueprint]) -> None:
        """Store already-built blueprints under their own names, replacing any previous ones."""
        incoming = {bp.name: bp for bp in blueprints}
        logger.debug("Registering blueprint(s): %s", ", ".join(incoming) or "none")
        self._blueprints.update(incoming)

    def blueprint(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ):
        """Define a blueprint targeting the decorated class."""

        def decorator(cls):
            self.define(name, attributes, cls, **kwargs)
            return cls

        return decorator

    def has(self, name: str) -> bool:
        return name in self._blueprints

    def count(self) -> int:
        return len(self._blueprints)

    def clear(self) -> None:
        """Remove all blueprints and reset the sequence."""
        logger.debug("Clearing %d blueprint(s)", len(self._blueprints))
        self._blueprints.clear()
        self._sequence.reset()

    def _lookup(self, name: str) -> Blueprint:
        try:
            return self._blueprints[name]
        except KeyError:
            raise UndefinedBlueprint(name) from None

    def build(
        self,
        name: str,
        /,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Build one instance of the named blueprint."""
        bp = self._lookup(name)
        logger.debug("Building blueprint '%s'", name)
        return self._resolver.resolve(bp, _merge(overrides, kwargs))

    def build_list(
        self,
        name: str,
        length: int = 1,
        /,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> list[Any]:
        """Build `length` independent instances of the named blueprint."""
        if length < 0:
            raise ValueError(f"Invalid list length: {length}")
        bp = self._lookup(name)
        merged = _merge(overrides, kwargs)
        logger.debug("Building %d instance(s) of blueprint '%s'", length, name)
        return [self._resolver.resolve(bp, merged) for _ in range(length)]

    def attributes_for(
        self,
        name: str,
        /,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Resolve the named blueprint's attributes without instantiating it."""
        return self._resolver.attributes(self._lookup(name), _merge(overrides, kwargs))

    def seq(self, produce: Callable[[int], V]) -> V:
        """Advance the shared sequence and pass its new value to `produce`."""
        return self._sequence.next(produce)

    def rand(self, enumeration: type[enum.Enum] | Mapping[Any, Any] | Iterable[Any]) -> Any:
        """Pick one distinct value of `enumeration` uniformly at random."""
        values = _distinct_values(enumeration)
        if not values:
            raise EmptyEnumeration(enumeration)
        return self._rng.choice(values)

    def __getitem__(self, name: str) -> Blueprint:
        return self._lookup(name)

    def __contains__(self, name: object) -> bool:
        return name in self._blueprints

    def __iter__(self) -> Iterator[str]:
        return iter(self._blueprints)

    def __len__(self) -> int:
        return len(self._blueprints)

    def get(self, name: str, default: Blueprint | None = None) -> Blueprint | None:  # type: ignore[override]
        return self._blueprints.get(name, default)

    def __repr__(self) -> str:
        return f"Registry(blueprints={len(self._blueprints)})"
