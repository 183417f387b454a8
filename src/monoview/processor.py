"""Monoview DirectiveProcessor — the fixed-order rewrite pipeline.

A render pass runs every stage over the full template text, in this order:

    message → variables → components → loops → conditionals →
    switch → assets → images → errors → csrf

Ordering matters and is part of the template language:

- Flash blocks expand first, so ``{{ message }}`` is never seen by the
  variable stage.
- Variables substitute before components, so component parameters can
  carry parent values (``{'title': '{{ title }}'}``).
- Components are fully rendered (recursively, through this same pipeline)
  before loops and conditionals of the parent run.
- Loops expand before conditionals, so ``@if`` inside a loop body sees the
  per-item substitutions.

Thread-Safety:
The processor holds no per-render state; all of it lives in the
RenderContext passed to ``process``.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from monoview.directives import DirectiveMixin

if TYPE_CHECKING:
    from monoview.environment.core import Environment
    from monoview.render_context import RenderContext

logger = logging.getLogger(__name__)

Stage = Callable[[str, Mapping[str, Any], "RenderContext"], str]

PIPELINE: tuple[str, ...] = (
    "message",
    "variables",
    "components",
    "loops",
    "conditionals",
    "switch",
    "assets",
    "images",
    "errors",
    "csrf",
)


class DirectiveProcessor(DirectiveMixin):
    """Run the directive pipeline over template text.

    Stage Dispatch:
        Stage methods are bound once at construction:
            ```python
            self._stages = (
                ("message", self._process_message),
                ("variables", self._process_variables),
                ...
            )
            ```

    Example:
            >>> from monoview import Environment
            >>> from monoview.render_context import RenderContext
            >>> processor = Environment().processor
            >>> processor.process("Hi {{ name }}", {"name": "Ana"}, RenderContext())
            'Hi Ana'

    """

    __slots__ = ("_env", "_stages")

    def __init__(self, env: Environment):
        self._env = env
        self._stages: tuple[tuple[str, Stage], ...] = tuple(
            (name, getattr(self, f"_process_{name}")) for name in PIPELINE
        )

    def process(self, content: str, data: Mapping[str, Any], ctx: RenderContext) -> str:
        """Run one render pass over ``content``.

        Args:
            content: Raw template text
            data: Read-only render context (variables)
            ctx: Render state for error messages and depth tracking

        Returns:
            Rendered text

        Raises:
            RecursionLimitExceededError: If component nesting exceeds the
                environment's ``max_depth``
        """
        debug_enabled = logger.isEnabledFor(logging.DEBUG)
        for name, stage in self._stages:
            content = stage(content, data, ctx)
            if debug_enabled:
                logger.debug(
                    "Stage %s on '%s' -> %d chars",
                    name,
                    ctx.template_name or "<string>",
                    len(content),
                )
        return content
