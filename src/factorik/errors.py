"""Error types raised by the factory registry."""

from __future__ import annotations

from typing import Any


class FactoryError(ValueError):
    """Base class for all factory errors."""


class UndefinedBlueprint(FactoryError, KeyError):
    """A referenced blueprint name has no stored blueprint."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Blueprint '{name}' has not been defined")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return str(self.args[0])


class DuplicateTraitDefinition(FactoryError):
    """A trait would replace an existing blueprint."""

    def __init__(self, name: str, trait: str) -> None:
        super().__init__(f"Blueprint '{name}' trait '{trait}' has already been defined")
        self.name = name
        self.trait = trait


class EmptyEnumeration(FactoryError):
    """Random selection from an enumeration with no values."""

    def __init__(self, enumeration: Any) -> None:
        label = getattr(enumeration, "__name__", None) or type(enumeration).__name__
        super().__init__(f"Cannot pick a value from empty enumeration '{label}'")
        self.enumeration = enumeration
