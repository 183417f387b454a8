"""Monoview Environment — loaders, collaborators and render entry points.

The Environment owns everything a render pass reads besides the template
context: where templates come from, the configuration used for URLs and
debug output, and the session-scoped stores behind ``@message``,
``@errors`` and ``@csrf()``.

Example:
    >>> from monoview import EnvConfig, Environment, FileSystemLoader, FlashStore
    >>> env = Environment(
    ...     loader=FileSystemLoader("src/view/resources/views"),
    ...     config=EnvConfig(".env"),
    ...     flash=FlashStore(),
    ... )
    >>> html = str(env.render("pages/home", {"title": "Home"}).layout("layouts/app"))

Thread-Safety:
An Environment is read-only after construction. The stores it holds do
their own locking, so one Environment per session can be shared across
threads serving that session.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from monoview.environment.config import (
    DEFAULT_IMAGES_PATH,
    DEFAULT_PUBLIC_PATH,
    ConfigProvider,
    DictConfig,
    base_url,
    is_truthy,
)
from monoview.environment.exceptions import TemplateNotFoundError
from monoview.environment.loaders import Loader
from monoview.environment.session import CsrfTokenProvider, OneShotStore
from monoview.processor import DirectiveProcessor
from monoview.render_context import DEFAULT_MAX_DEPTH, RenderContext, render_context
from monoview.template import Component, View


class Environment:
    """Central configuration for rendering views and components.

    Attributes:
        loader: Loader for views and layouts (and components, by default)
        components_loader: Optional separate loader for components
        components_prefix: Namespace of components within ``loader``
        config: ConfigProvider for APP_URL, APP_PORT, static paths, APP_DEBUG
        flash: One-shot store read by ``@message``
        errors: One-shot store read by ``@errors``
        csrf: Token provider read by ``@csrf()``
        debug: Detailed inline error fragments (vs. bare HTML comments)
        max_depth: Maximum component nesting depth

    """

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        components_loader: Loader | None = None,
        components_prefix: str = "components",
        config: ConfigProvider | None = None,
        flash: OneShotStore | None = None,
        errors: OneShotStore | None = None,
        csrf: CsrfTokenProvider | None = None,
        debug: bool | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.loader = loader
        self.components_loader = components_loader
        self.components_prefix = components_prefix.strip("/")
        self.config: ConfigProvider = config if config is not None else DictConfig()
        self.flash = flash
        self.errors = errors
        self.csrf = csrf
        self.debug = is_truthy(self.config.get("APP_DEBUG", True)) if debug is None else debug
        self.max_depth = max_depth
        self.processor = DirectiveProcessor(self)
        self.component_renderer = Component(self)

    # ── template sources ────────────────────────────────────────────────────

    def get_source(self, name: str) -> str:
        """Text of view or layout ``name``.

        Raises:
            TemplateNotFoundError: If no loader is configured or it has no such template
        """
        if self.loader is None:
            raise TemplateNotFoundError(f"Template '{name}' not found: no loader configured")
        source, _ = self.loader.get_source(name)
        return source

    def component_template_name(self, name: str) -> str:
        """Logical name a component is loaded under."""
        if self.components_loader is not None or not self.components_prefix:
            return name
        return f"{self.components_prefix}/{name}"

    def get_component_source(self, name: str) -> str:
        """Text of component ``name``.

        Raises:
            TemplateNotFoundError: If the component library has no such template
        """
        if self.components_loader is not None:
            source, _ = self.components_loader.get_source(name)
            return source
        return self.get_source(self.component_template_name(name))

    def list_templates(self) -> list[str]:
        return self.loader.list_templates() if self.loader is not None else []

    # ── rendering ───────────────────────────────────────────────────────────

    def view(self, layout: str | None = None) -> View:
        """Create an unrendered View, optionally with a preset layout."""
        return View(self, layout=layout)

    def render(self, name: str, context: Mapping[str, Any] | None = None, **kwargs: Any) -> View:
        """Render view ``name``; chain ``.layout(...)`` to wrap it."""
        return self.view().render(name, context, **kwargs)

    def component(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Render component ``name`` with ``params`` as its only context."""
        return self.component_renderer.render(name, params)

    def render_string(
        self, source: str, context: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> str:
        """Run the directive pipeline over ad-hoc template text."""
        data = {**(context or {}), **kwargs}
        ctx = RenderContext(template_name="<string>", max_depth=self.max_depth)
        with render_context(ctx):
            return self.processor.process(source, data, ctx)

    # ── URLs ────────────────────────────────────────────────────────────────

    def base_url(self) -> str:
        return base_url(self.config)

    def asset_url(self, path: str) -> str:
        """Absolute URL of ``path`` under the public directory."""
        subpath = self.config.get("VIEW_PUBLIC_PATH", DEFAULT_PUBLIC_PATH)
        return self._static_url(subpath, path)

    def image_url(self, path: str) -> str:
        """Absolute URL of ``path`` under the images directory."""
        subpath = self.config.get("VIEW_IMAGES_PATH", DEFAULT_IMAGES_PATH)
        return self._static_url(subpath, path)

    def _static_url(self, subpath: str, path: str) -> str:
        parts = [self.base_url()]
        if subpath.strip("/"):
            parts.append(subpath.strip("/"))
        parts.append(path.lstrip("/"))
        return "/".join(parts)
