"""HCL loading engine: parse .hcl files into registry blueprints."""

from __future__ import annotations

import importlib
import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import hcl2
import jinja2
from lark.exceptions import LarkError

from .blueprints import Blueprint
from .errors import DuplicateTraitDefinition, UndefinedBlueprint
from .interpolate import Template
from .registry import Registry

logger = logging.getLogger(__name__)

_RESERVED_KEYS = {"target", "extends"}


class _Environment(Mapping[str, str]):
    """Read-only view of os.environ that warns on unset variables."""

    def __getitem__(self, name: str) -> str:
        if name not in os.environ:
            logger.warning("Environment variable '%s' is not set", name)
        return os.environ.get(name, "")

    def __iter__(self) -> Iterator[str]:
        return iter(os.environ)

    def __len__(self) -> int:
        return len(os.environ)


def scan(
    path: str | Path,
    registry: Registry | None = None,
    *,
    recurse: bool = True,
    context: dict[str, Any] | None = None,
) -> Registry:
    """Load every .hcl file under path into a registry and return it.

    Nothing is registered unless every file loads and every blueprint in
    them resolves.
    """
    if registry is None:
        registry = Registry()
    path = Path(path)

    if path.is_file():
        files = [path]
    else:
        pattern = "**/*.hcl" if recurse else "*.hcl"
        files = sorted(path.glob(pattern))

    loader = HclLoader(registry, context=context)
    for file in files:
        logger.debug("Loading blueprints from %s", file)
        loader.add(load(file, context=context))
    loader.commit()
    return registry


def _render(file: Path, context: dict[str, Any] | None) -> str:
    """Render a blueprint file as a Jinja2 template; undefined names are errors."""
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    try:
        return env.from_string(file.read_text()).render(context or {})
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Render and parse one blueprint file.

    Template and syntax errors are raised as ValueError naming the file.
    """
    text = _render(file, context)
    try:
        return hcl2.loads(text)
    except LarkError as exc:
        raise ValueError(f"{file}: invalid HCL: {exc}") from exc


def import_target(path: str) -> type:
    """Import a 'module:qualname' reference to a target type."""
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Invalid target '{path}'; expected 'module:qualname'")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        raise ValueError(f"Cannot import target '{path}': {exc}") from exc
    if not isinstance(obj, type):
        raise ValueError(f"Target '{path}' is not a class")
    return obj


class HclLoader:
    """Collects parsed blueprint blocks and registers them on commit."""

    def __init__(
        self,
        registry: Registry,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._registry = registry
        self._pending: dict[str, dict[str, Any]] = {}
        self._context: dict[str, Any] = {
            "env": _Environment(),
            "seq": lambda: registry.seq(lambda n: n),
            **(context or {}),
        }

    def add(self, data: dict[str, Any]) -> None:
        """Extract blueprint blocks from a parsed data dict.

        Raises ValueError if any blueprint name is already pending.
        """
        for bp_block in data.get("blueprint", []):
            for bp_name, bp_data in bp_block.items():
                if bp_name in self._pending:
                    raise ValueError(f"Duplicate blueprint: '{bp_name}'")
                logger.debug("Found blueprint '%s'", bp_name)
                self._pending[bp_name] = bp_data

    def _attributes(self, data: dict[str, Any]) -> dict[str, Any]:
        attrs: dict[str, Any] = {}
        for key, value in data.items():
            if key in _RESERVED_KEYS:
                continue
            if Template.is_template(value):
                attrs[key] = Template(value, self._context)
            else:
                attrs[key] = value
        return attrs

    def _stage(
        self,
        name: str,
        staged: dict[str, Blueprint],
        resolving: set[str],
    ) -> Blueprint:
        """Build a single pending blueprint without touching the registry, bases first."""
        if name in staged:
            return staged[name]
        if name in resolving:
            raise ValueError(f"Circular extends detected: '{name}'")
        resolving.add(name)

        data = self._pending[name]
        base_name = data.get("extends")

        if base_name is None:
            target = data.get("target")
            bp = Blueprint(
                name=name,
                target=import_target(target) if target else None,
                attributes=self._attributes(data),
            )
        else:
            if base_name in self._pending:
                base = self._stage(base_name, staged, resolving)
            elif base_name in self._registry:
                base = self._registry[base_name]
            else:
                raise UndefinedBlueprint(base_name)
            if name in self._registry:
                raise DuplicateTraitDefinition(base_name, name)
            logger.debug("Blueprint '%s' extends '%s'", name, base_name)
            bp = base.extend(name, self._attributes(data))

        resolving.discard(name)
        staged[name] = bp
        return bp

    def commit(self) -> None:
        """Register all pending blueprints with the registry.

        Every blueprint is built before any is registered, so a failure leaves
        the registry unchanged. Pending blocks are discarded either way.
        """
        logger.debug("Registering %d blueprint(s)", len(self._pending))
        try:
            staged: dict[str, Blueprint] = {}
            for name in self._pending:
                self._stage(name, staged, set())
            self._registry.register(staged.values())
        finally:
            self._pending.clear()
