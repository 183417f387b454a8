"""Component rendering.

A component is a template fragment from the component library, rendered
through the full directive pipeline with its ``@component`` parameters as
its only context.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from monoview.environment.exceptions import (
    ComponentNotFoundError,
    RecursionLimitExceededError,
    TemplateNotFoundError,
)
from monoview.render_context import RenderContext, render_context

if TYPE_CHECKING:
    from monoview.environment.core import Environment

logger = logging.getLogger(__name__)


class Component:
    """Render named components from an Environment's component library.

    Memory Safety:
        Holds a weak reference to the Environment, which owns this object.

    Example:
            >>> env = Environment(loader=DictLoader({
            ...     "components/badge": "<span>{{ label }}</span>",
            ... }))
            >>> env.component("badge", {"label": "New"})
            '<span>New</span>'

    """

    __slots__ = ("_env_ref",)

    def __init__(self, env: Environment):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)

    def render(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        parent: RenderContext | None = None,
    ) -> str:
        """Render component ``name`` with ``params`` as its context.

        Args:
            name: Component name (without the components namespace)
            params: Parsed ``@component`` parameters
            parent: RenderContext of the template containing the directive

        Returns:
            Rendered component, or an inline error fragment if the
            component does not exist

        Raises:
            RecursionLimitExceededError: If nesting exceeds ``max_depth``
        """
        env = self._env_ref()
        if env is None:
            raise RuntimeError("Environment has been garbage collected")

        if parent is None:
            parent = RenderContext(max_depth=env.max_depth)
        try:
            parent.check_depth(name)
        except RecursionLimitExceededError as exc:
            logger.error(exc.format_compact())
            raise

        ctx = parent.child_context(env.component_template_name(name))
        try:
            source = env.get_component_source(name)
        except TemplateNotFoundError as exc:
            error = ComponentNotFoundError(name, str(exc), template_stack=parent.trace())
            logger.warning(error.format_compact())
            return error.render_fragment(env.debug)

        with render_context(ctx):
            return env.processor.process(source, dict(params or {}), ctx)
