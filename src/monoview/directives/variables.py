"""Variable substitution for the directive pipeline.

Provides mixin for the ``{{ name }}`` stage.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from monoview.template.helpers import to_text

if TYPE_CHECKING:
    from monoview.render_context import RenderContext

# Word characters only: {{ item.name }} is left for the loop stage
VARIABLE_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class VariableDirectivesMixin:
    """Mixin for the variable substitution stage."""

    def _process_variables(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        """Replace ``{{ name }}`` with the text of ``data[name]`` (empty if absent).

        Output is not HTML-escaped, and substituted values are never
        re-scanned: a value that itself looks like ``{{ other }}`` is
        emitted as-is.
        """
        return VARIABLE_RE.sub(lambda m: to_text(data.get(m.group(1))), content)
