"""Session-backed directives for the directive pipeline.

Provides mixin for the stages that read request/session collaborators:

- ``@message('name') ... {{ message }} ... @endmessage`` (flash store)
- ``@errors('field')`` (validation error bag)
- ``@csrf()`` (CSRF token provider)

Flash messages and validation errors are one-shot: reading them consumes
them, so each is displayed by exactly one directive occurrence.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from monoview.environment.core import Environment
    from monoview.render_context import RenderContext

logger = logging.getLogger(__name__)

MESSAGE_RE = re.compile(r"""@message\(\s*["'](.+?)["']\s*\)(.*?)@endmessage""", re.S)
MESSAGE_PLACEHOLDER_RE = re.compile(r"\{\{\s*message\s*\}\}")
ERRORS_RE = re.compile(r"""@errors\(\s*["'](.+?)["']\s*\)""")
CSRF_RE = re.compile(r"@csrf\(\s*\)")

CSRF_FIELD_NAME = "csrf_token"


class SessionDirectivesMixin:
    """Mixin for flash message, validation error and CSRF stages."""

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _env: Environment

    def _process_message(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        """Expand ``@message`` blocks whose flash message exists.

        The message is consumed and spliced into every ``{{ message }}``
        inside the block. Without a message the whole block is dropped.
        """
        flash = self._env.flash

        def replace(match: re.Match[str]) -> str:
            message = flash.consume(match.group(1)) if flash is not None else None
            if message is None:
                return ""
            return MESSAGE_PLACEHOLDER_RE.sub(lambda _: message, match.group(2))

        return MESSAGE_RE.sub(replace, content)

    def _process_errors(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        """Replace ``@errors('field')`` with the field's first error, consuming it."""
        errors = self._env.errors

        def replace(match: re.Match[str]) -> str:
            if errors is None:
                return ""
            return errors.consume(match.group(1)) or ""

        return ERRORS_RE.sub(replace, content)

    def _process_csrf(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        """Replace ``@csrf()`` with a hidden input carrying the current token."""
        if CSRF_RE.search(content) is None:
            return content

        provider = self._env.csrf
        if provider is None:
            logger.warning(
                "@csrf() used in '%s' but no CSRF provider is configured; "
                "form submissions will fail CSRF validation",
                ctx.template_name or "<string>",
            )
            return CSRF_RE.sub("", content)

        token = html.escape(provider.current(), quote=True)
        field = f'<input type="hidden" name="{CSRF_FIELD_NAME}" value="{token}" />'
        return CSRF_RE.sub(lambda _: field, content)
