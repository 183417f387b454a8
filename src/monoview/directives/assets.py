"""Static URL directives for the directive pipeline.

Provides mixin for ``@assets('path')`` and ``@images('path')``, which
rewrite a relative path into an absolute URL:

    @assets('css/app.css')  ->  http://localhost:8000/src/view/public/css/app.css
    @images('logo.png')     ->  http://localhost:8000/src/view/public/images/logo.png

Pure string transforms: no check that the file exists.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from monoview.environment.core import Environment
    from monoview.render_context import RenderContext

ASSETS_RE = re.compile(r"""@assets\(\s*["'](.+?)["']\s*\)""")
IMAGES_RE = re.compile(r"""@images\(\s*["'](.+?)["']\s*\)""")


class AssetDirectivesMixin:
    """Mixin for the ``@assets`` and ``@images`` stages."""

    if TYPE_CHECKING:
        _env: Environment

    def _process_assets(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        return ASSETS_RE.sub(lambda m: self._env.asset_url(m.group(1)), content)

    def _process_images(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        return IMAGES_RE.sub(lambda m: self._env.image_url(m.group(1)), content)
