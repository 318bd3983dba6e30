"""Attribute templates with ${...} references, evaluated on every build."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

_INTERP_PATTERN = re.compile(r"\$\$\{|(\$\{([^{}]+)\})")
_FULL_PATTERN = re.compile(r"\$\{([^{}]+)\}")

_MISSING = object()


def _step(current: Any, part: str) -> Any:
    """Descend one level: by key for mappings, then by attribute."""
    if isinstance(current, Mapping):
        try:
            return current[part]
        except KeyError:
            pass
    return getattr(current, part, _MISSING)


class Template:
    """Resolve ${...} references in an attribute value against a context.

    The value may be a string or a list/dict nesting strings. Instances are
    zero-argument callables so they can be used directly as attribute
    producers.
    """

    def __init__(self, value: Any, context: Mapping[str, Any] | None = None) -> None:
        self.value = value
        self._context = context or {}

    @staticmethod
    def is_template(value: Any) -> bool:
        """True if `value` holds at least one ${...} reference at any depth."""
        if isinstance(value, str):
            return any(m.group(1) for m in _INTERP_PATTERN.finditer(value))
        if isinstance(value, dict):
            return any(Template.is_template(v) for v in value.values())
        if isinstance(value, list):
            return any(Template.is_template(v) for v in value)
        return False

    def _resolve_ref(self, ref: str) -> Any:
        """Look up a dotted reference such as 'env.HOME' in the context.

        A callable found at the end of the path is invoked; callables met
        along the way are not.
        """
        current: Any = self._context
        for part in ref.split("."):
            current = _step(current, part)
            if current is _MISSING:
                raise ValueError(f"undefined variable '{ref}'")

        if callable(current) and not isinstance(current, type):
            return current()
        return current

    def _render_text(self, text: str) -> Any:
        if "${" not in text:
            return text

        # a lone reference keeps the type of the resolved object
        match = _FULL_PATTERN.fullmatch(text)
        if match:
            return self._resolve_ref(match.group(1).strip())

        def _replace(m: re.Match) -> str:  # type: ignore[type-arg]
            if m.group(0) == "$${":
                return "${"
            return str(self._resolve_ref(m.group(2).strip()))

        return _INTERP_PATTERN.sub(_replace, text)

    def _walk(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._walk(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self._walk(item) for item in obj]
        if isinstance(obj, str):
            return self._render_text(obj)
        return obj

    def render(self) -> Any:
        """Evaluate the template once, building fresh lists and dicts.

        Use $${...} for a literal ${...}.
        """
        return self._walk(self.value)

    def __call__(self) -> Any:
        return self.render()

    def __repr__(self) -> str:
        return f"Template({self.value!r})"
