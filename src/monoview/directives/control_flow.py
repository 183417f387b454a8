"""Control flow for the directive pipeline.

Provides mixin for loops and conditionals:

- ``@foreach collection as item ... @endforeach``
- ``@if(condition) ... [@else ...] @endif``

Loops:
    The body is repeated once per element of ``data[collection]``. Inside the
    body only the exact tokens ``{{ item.field }}`` are replaced; a scalar
    element is exposed as ``{{ item.value }}``. A missing, empty or
    non-iterable collection expands to nothing.

Conditionals:
    ``$name`` references are substituted as literals, then the condition is
    evaluated by the restricted grammar in ``monoview.expression``. A
    condition that fails to parse or evaluate counts as false. ``@if``
    blocks nest; the chosen branch is scanned again for inner blocks. An
    ``@if(`` with an unbalanced condition or no ``@endif`` is kept as plain
    text and scanning resumes right after it.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from monoview.environment.exceptions import ExpressionEvaluationError, MalformedDirectiveError
from monoview.expression import evaluate_condition
from monoview.template.helpers import item_fields, iter_collection, substitute_sigils, to_text

if TYPE_CHECKING:
    from monoview.render_context import RenderContext

logger = logging.getLogger(__name__)

LOOP_RE = re.compile(r"@foreach\s+(\w+)\s+as\s+(\w+)(.*?)@endforeach", re.S)
IF_OPEN_RE = re.compile(r"@if\(")
IF_TOKEN_RE = re.compile(r"@if\(|@else\b|@endif\b")


def find_closing_paren(text: str, start: int) -> int | None:
    """Index of the ``)`` closing a parenthesis opened just before ``start``.

    Parentheses inside quoted strings are ignored. Returns None if unbalanced.
    """
    depth = 1
    quote: str | None = None
    pos = start
    while pos < len(text):
        char = text[pos]
        if quote is not None:
            if char == "\\":
                pos += 2
                continue
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return None


def split_if_block(text: str, start: int) -> tuple[str, str | None, int] | None:
    """Split the body of an ``@if`` whose condition ends at ``start``.

    Returns ``(then_body, else_body, end)`` where ``end`` is the offset just
    past the matching ``@endif``, or None when the block is never closed.
    """
    depth = 0
    else_span: tuple[int, int] | None = None
    pos = start
    while True:
        match = IF_TOKEN_RE.search(text, pos)
        if match is None:
            return None
        token = match.group()
        if token == "@if(":
            close = find_closing_paren(text, match.end())
            if close is None:
                return None
            depth += 1
            pos = close + 1
        elif token == "@else":
            if depth == 0 and else_span is None:
                else_span = (match.start(), match.end())
            pos = match.end()
        elif depth == 0:
            if else_span is None:
                return text[start : match.start()], None, match.end()
            then_body = text[start : else_span[0]]
            return then_body, text[else_span[1] : match.start()], match.end()
        else:
            depth -= 1
            pos = match.end()


class ControlFlowMixin:
    """Mixin for the ``@foreach`` and ``@if`` stages."""

    def _process_loops(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        def replace(match: re.Match[str]) -> str:
            collection, item_name, body = match.groups()
            parts: list[str] = []
            for item in iter_collection(data.get(collection)):
                rendered = body
                for key, value in item_fields(item).items():
                    rendered = rendered.replace(f"{{{{ {item_name}.{key} }}}}", to_text(value))
                parts.append(rendered)
            return "".join(parts)

        return LOOP_RE.sub(replace, content)

    def _process_conditionals(
        self, content: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> str:
        out: list[str] = []
        pos = 0
        while True:
            match = IF_OPEN_RE.search(content, pos)
            if match is None:
                out.append(content[pos:])
                break
            out.append(content[pos : match.start()])

            close = find_closing_paren(content, match.end())
            block = split_if_block(content, close + 1) if close is not None else None
            if block is None:
                error = MalformedDirectiveError(
                    "Unterminated @if block", directive="if", template_stack=ctx.trace()
                )
                logger.warning(error.format_compact())
                # Keep the opener as text; later blocks are still evaluated
                out.append(match.group())
                pos = match.end()
                continue

            then_body, else_body, pos = block
            condition = content[match.end() : close]
            chosen = then_body if self._evaluate_condition(condition, data, ctx) else else_body
            if chosen:
                out.append(self._process_conditionals(chosen, data, ctx))
        return "".join(out)

    def _evaluate_condition(
        self, condition: str, data: Mapping[str, Any], ctx: RenderContext
    ) -> bool:
        expression = substitute_sigils(condition, data)
        try:
            return evaluate_condition(expression)
        except ExpressionEvaluationError as exc:
            exc.template_stack = ctx.trace()
            logger.warning(exc.format_compact())
            return False
