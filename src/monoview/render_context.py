"""Monoview RenderContext — per-render state kept out of the user context.

The user's render context is a read-only mapping of template variables.
Everything the engine itself tracks during a render pass lives here:

    - which template is being processed (for error messages)
    - the component nesting depth (bounded by ``max_depth``)
    - the stack of templates entered so far (for error traces)

The current RenderContext is also published through a ContextVar so that
collaborators (CSRF providers, custom loaders) can see which template is
rendering without it being threaded through their interfaces.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

# 50 is deep enough for any real component tree while catching a component
# that includes itself long before the interpreter stack runs out.
DEFAULT_MAX_DEPTH = 50


@dataclass
class RenderContext:
    """Per-render state isolated from user context.

    Attributes:
        template_name: Template currently being processed
        depth: Component nesting depth (0 for the top-level view)
        max_depth: Maximum allowed component depth
        template_stack: Names of the templates entered to reach this one
    """

    template_name: str | None = None
    depth: int = 0
    max_depth: int = DEFAULT_MAX_DEPTH
    template_stack: list[str] = field(default_factory=list)

    def check_depth(self, component_name: str) -> None:
        """Raise if entering ``component_name`` would exceed ``max_depth``.

        Raises:
            RecursionLimitExceededError: If depth >= max_depth
        """
        if self.depth >= self.max_depth:
            from monoview.environment.exceptions import RecursionLimitExceededError

            raise RecursionLimitExceededError(
                component_name,
                depth=self.depth + 1,
                limit=self.max_depth,
                template_stack=self.trace(),
            )

    def child_context(self, template_name: str) -> RenderContext:
        """Create the context for a nested component render."""
        return RenderContext(
            template_name=template_name,
            depth=self.depth + 1,
            max_depth=self.max_depth,
            template_stack=self.trace(),
        )

    def trace(self) -> list[str]:
        """Template stack including the current template."""
        stack = self.template_stack.copy()
        if self.template_name:
            stack.append(self.template_name)
        return stack


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "monoview_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in a render)."""
    return _render_context.get()


@contextmanager
def render_context(ctx: RenderContext) -> Iterator[RenderContext]:
    """Publish ``ctx`` as the current render context for the with block.

    Example:
        with render_context(RenderContext(template_name="pages/home")) as ctx:
            html = processor.process(source, data, ctx)
    """
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
