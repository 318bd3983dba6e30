"""Resolver: turn a blueprint and optional overrides into a built instance."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from .blueprints import Blueprint

logger = logging.getLogger(__name__)


class Resolver:
    """Evaluate blueprint attributes and assign them onto a fresh instance."""

    def instantiate(self, blueprint: Blueprint) -> Any:
        """Create the bare instance; a plain dict when no target is set."""
        if blueprint.target is None:
            return {}
        return blueprint.target()

    def _assign(self, instance: Any, name: str, value: Any) -> None:
        if isinstance(instance, MutableMapping):
            instance[name] = value
        else:
            setattr(instance, name, value)

    def attributes(
        self,
        blueprint: Blueprint,
        overrides: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Resolve every attribute spec, in declaration order, into a dict."""
        values = {name: spec.resolve() for name, spec in blueprint}
        if overrides:
            values.update(overrides)
        return values

    def resolve(
        self,
        blueprint: Blueprint,
        overrides: Mapping[str, Any] | None = None,
    ) -> Any:
        """Build one instance of the blueprint.

        Producers are invoked for every call. Overrides are assigned after all
        blueprint attributes and may introduce keys the blueprint does not
        declare.
        """
        logger.debug("Resolving blueprint '%s'", blueprint.name)
        instance = self.instantiate(blueprint)

        for name, spec in blueprint:
            self._assign(instance, name, spec.resolve())

        for name, value in (overrides or {}).items():
            self._assign(instance, name, value)

        return instance
