"""Blueprint model: a named target type and its attribute specs."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .attributes import AttributeSpec, attribute

logger = logging.getLogger(__name__)


class Blueprint(BaseModel):
    """A named template for building one kind of test object."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    target: type[Any] | None = None
    attributes: dict[str, AttributeSpec[Any]] = Field(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): attribute(v) for k, v in value.items()}
        return value

    def __iter__(self) -> Iterator[tuple[str, AttributeSpec[Any]]]:  # type: ignore[override]
        return iter(self.attributes.items())

    def __len__(self) -> int:
        return len(self.attributes)

    def extend(self, name: str, attributes: Mapping[str, Any]) -> Blueprint:
        """Return a new blueprint with the same target and merged attributes.

        Entries in `attributes` replace same-named base attributes; this
        blueprint is left untouched.
        """
        logger.debug("Extending blueprint '%s' as '%s'", self.name, name)
        merged: dict[str, Any] = dict(self.attributes)
        merged.update(attributes)
        return Blueprint(name=name, target=self.target, attributes=merged)
