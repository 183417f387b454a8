"""Switch/case expansion for the directive pipeline.

Provides mixin for:

    @switch($role)
        @case('admin') <a href="/admin">Admin</a> @break
        @case('editor') <a href="/posts">Posts</a> @break
        @default <span>Guest</span>
    @endswitch

The switch subject and each case value get ``$name`` substitution as plain
text, then surrounding whitespace and quote characters are stripped before
an exact string comparison. The first matching case wins and its body is
emitted alone (no fallthrough). With no match the ``@default`` body, if
any, is emitted.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from monoview.template.helpers import normalize_case_value, substitute_sigils_text

if TYPE_CHECKING:
    from monoview.render_context import RenderContext

SWITCH_RE = re.compile(r"@switch\((.*?)\)(.*?)@endswitch", re.S)
CASE_RE = re.compile(r"@case\((.*?)\)(.*?)@break", re.S)
DEFAULT_RE = re.compile(r"@default(.*?)(?:@break|\Z)", re.S)


class PatternMatchingMixin:
    """Mixin for the ``@switch`` stage."""

    def _process_switch(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        def replace(match: re.Match[str]) -> str:
            subject = normalize_case_value(substitute_sigils_text(match.group(1), data))
            body = match.group(2)

            for case in CASE_RE.finditer(body):
                value = normalize_case_value(substitute_sigils_text(case.group(1), data))
                if value == subject:
                    return case.group(2)

            default = DEFAULT_RE.search(body)
            return default.group(1) if default else ""

        return SWITCH_RE.sub(replace, content)
