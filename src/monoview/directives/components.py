"""Component expansion for the directive pipeline.

Provides mixin for ``@component('name', {...})``.

Parameter Syntax:
    ```
    @component('card', {'title': 'Welcome', 'tags': ['new', 'featured']})
    ```
    Keys are quoted words; values are quoted strings or ``[...]`` lists of
    quoted strings. Any other value yields ``""`` for that key. The stage
    runs after variable substitution, so ``{'title': '{{ title }}'}`` passes
    the parent's value down.

Sandboxing:
    A component sees only its parsed parameters, never the parent context.
    It is rendered through the full pipeline, so components nest.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from monoview.environment.exceptions import MalformedDirectiveError

if TYPE_CHECKING:
    from monoview.environment.core import Environment
    from monoview.render_context import RenderContext

logger = logging.getLogger(__name__)

COMPONENT_RE = re.compile(
    r"""@component\(\s*(['"])([\w./-]+)\1\s*(?:,\s*(\{[^{}]*\}|[^)]*?))?\s*\)"""
)
PARAM_ENTRY_RE = re.compile(
    r"""['"](\w+)['"]\s*:\s*(\[[^\]]*\]|'[^']*'|"[^"]*"|[^,}]*)"""
)
LIST_ITEM_RE = re.compile(r"'([^']*)'|\"([^\"]*)\"")


def parse_params(raw: str) -> dict[str, str | list[str]]:
    """Parse the ``{...}`` argument of ``@component`` into a parameter dict.

    Lenient: unparseable values become ``""`` and an argument that is not a
    ``{...}`` object yields no parameters. Never raises.

    Example:
        >>> parse_params("{'title': 'Hi', 'tags': ['a', 'b'], 'n': 5}")
        {'title': 'Hi', 'tags': ['a', 'b'], 'n': ''}
    """
    text = raw.strip()
    if not text:
        return {}
    if not (text.startswith("{") and text.endswith("}")):
        _log_malformed(f"Component parameters must be an object literal, got {text!r}")
        return {}

    params: dict[str, str | list[str]] = {}
    for match in PARAM_ENTRY_RE.finditer(text):
        key, value = match.group(1), match.group(2).strip()
        if value.startswith("["):
            params[key] = _parse_list(value)
        elif len(value) >= 2 and value[0] in "'\"" and value[-1] == value[0]:
            params[key] = value[1:-1]
        else:
            _log_malformed(f"Unsupported value for component parameter '{key}': {value!r}")
            params[key] = ""
    return params


def _parse_list(value: str) -> list[str]:
    inner = value[1:-1]
    quoted = LIST_ITEM_RE.findall(inner)
    if quoted:
        return [single or double for single, double in quoted]
    return [item.strip() for item in inner.split(",") if item.strip()]


def _log_malformed(message: str) -> None:
    error = MalformedDirectiveError(message, directive="component")
    logger.warning(error.format_compact())


class ComponentDirectivesMixin:
    """Mixin for the ``@component`` stage."""

    if TYPE_CHECKING:
        _env: Environment

    def _process_components(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        """Replace each ``@component`` with its rendered template.

        Missing components render an inline error fragment. Exceeding the
        depth limit raises ``RecursionLimitExceededError`` out of the render.
        """
        component = self._env.component_renderer

        def replace(match: re.Match[str]) -> str:
            params = parse_params(match.group(3)) if match.group(3) else {}
            return component.render(match.group(2), params, parent=ctx)

        return COMPONENT_RE.sub(replace, content)
