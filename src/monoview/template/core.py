"""Monoview View — render a template, then optionally wrap it in a layout.

State machine:

    UNRENDERED --render()--> RENDERED --layout()--> LAYOUT_WRAPPED

``render(name, context)`` loads the template, runs the directive pipeline
and stores the result. ``layout(name)`` loads a layout, splices the stored
content into its ``{{slot}}`` marker and runs the pipeline again over the
combined text with the same context, so directives in the layout (a
``@csrf()`` in a header form, ``{{ title }}`` in ``<title>``) resolve too.

The layout pass scans the spliced page output as well. Directive text that
reached the page through a context value (``name="{{ title }}"``) is
therefore expanded when the view is wrapped, though a single pass never
expands it. Keep untrusted values free of directive syntax when the view
goes through a layout.

Error Containment:
A missing template or layout, or a layout without a slot marker, renders an
inline error fragment in place of the output instead of raising. Only
``RecursionLimitExceededError`` escapes.

Example:
    >>> view = env.render("pages/home", {"title": "Home"}).layout("layouts/app")
    >>> html = str(view)

"""

from __future__ import annotations

import logging
import re
import weakref
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from monoview.environment.exceptions import (
    LayoutNotFoundError,
    MalformedDirectiveError,
    TemplateNotFoundError,
)
from monoview.render_context import RenderContext, render_context

if TYPE_CHECKING:
    from monoview.environment.core import Environment

logger = logging.getLogger(__name__)

SLOT_RE = re.compile(r"\{\{\s*slot\s*\}\}")


class ViewState(Enum):
    UNRENDERED = "unrendered"
    RENDERED = "rendered"
    LAYOUT_WRAPPED = "layout_wrapped"


class View:
    """A rendered view, chainable into a layout.

    Attributes:
        state: Current ViewState
        content: Rendered output so far ("" before render())

    Example:
            >>> view = env.view(layout="layouts/app")
            >>> view.render("pages/home", {"title": "Hi"}).state
            <ViewState.LAYOUT_WRAPPED: 'layout_wrapped'>

    """

    __slots__ = ("_content", "_data", "_env_ref", "_layout", "_name", "_state")

    def __init__(self, env: Environment, layout: str | None = None):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._layout = layout
        self._name: str | None = None
        self._data: dict[str, Any] = {}
        self._content = ""
        self._state = ViewState.UNRENDERED

    @property
    def _env(self) -> Environment:
        env = self._env_ref()
        if env is None:
            raise RuntimeError("Environment has been garbage collected")
        return env

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def content(self) -> str:
        return self._content

    def render(
        self, name: str, context: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> View:
        """Render template ``name`` with ``context`` and return self for chaining.

        If the view was created with a layout, the layout is applied
        immediately.
        """
        env = self._env
        self._name = name
        self._data = {**(context or {}), **kwargs}

        ctx = RenderContext(template_name=name, max_depth=env.max_depth)
        try:
            source = env.get_source(name)
        except TemplateNotFoundError as exc:
            exc.template_stack = ctx.trace()
            logger.warning(exc.format_compact())
            self._content = exc.render_fragment(env.debug)
        else:
            with render_context(ctx):
                self._content = env.processor.process(source, self._data, ctx)
        self._state = ViewState.RENDERED

        if self._layout:
            self._wrap(self._layout)
        return self

    def layout(self, name: str) -> View:
        """Wrap the rendered content in layout ``name`` and return self."""
        self._layout = name
        self._wrap(name)
        return self

    def _wrap(self, name: str) -> None:
        env = self._env
        try:
            source = env.get_source(name)
        except TemplateNotFoundError as exc:
            error = LayoutNotFoundError(name, str(exc), template_stack=[self._name or name])
            logger.warning(error.format_compact())
            self._content = error.render_fragment(env.debug)
            self._state = ViewState.LAYOUT_WRAPPED
            return

        if SLOT_RE.search(source) is None:
            error = MalformedDirectiveError(
                f"Layout '{name}' has no {{{{slot}}}} marker",
                directive="slot",
                template_stack=[name],
            )
            logger.warning(error.format_compact())
            self._content = error.render_fragment(env.debug)
            self._state = ViewState.LAYOUT_WRAPPED
            return

        content = self._content
        combined = SLOT_RE.sub(lambda _: content, source)
        ctx = RenderContext(template_name=name, max_depth=env.max_depth)
        with render_context(ctx):
            self._content = env.processor.process(combined, self._data, ctx)
        self._state = ViewState.LAYOUT_WRAPPED

    def __str__(self) -> str:
        return self._content

    def __html__(self) -> str:
        """Markup protocol: the content is already HTML."""
        return self._content

    def __repr__(self) -> str:
        return f"<View {self._name!r} {self._state.value}>"
