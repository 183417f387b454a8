"""Pure helpers shared by the directive stages.

None of these close over Environment state; they take the render context
mapping as an argument and return new strings.

Thread-Safety:
All functions are stateless and safe for concurrent use.

"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

SIGIL_RE = re.compile(r"\$(\w+)")

_QUOTES = "'\""


def to_text(value: Any) -> str:
    """String form of a context value as it appears in rendered output.

    ``None`` renders empty, booleans as ``true``/``false``, other scalars
    via ``str()``. Collections have no text form and render empty.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""

def to_literal(value: Any) -> str:
    """Render a context value as a literal of the condition grammar."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        text = repr(value)
        return format(value, "f") if "e" in text else text
    if isinstance(value, str):
        return "'" + escape_quoted(value) + "'"
    return "null"

def escape_quoted(text: str) -> str:
    """Escape backslashes and quotes so ``text`` stays inside a string literal."""
    return text.replace("\\", "\\\\").replace("'", "\\'").replace('"', '\\"')

def substitute_sigils(expression: str, data: Mapping[str, Any]) -> str:
    """Replace ``$name`` references in an ``@if`` condition.

    Outside quotes a reference becomes a literal (``null`` when absent).
    Inside a quoted string it becomes the value's text with quotes escaped,
    so ``'$role' == 'admin'`` keeps working and no value can close the
    string it is spliced into.
    """
    out: list[str] = []
    quote: str | None = None
    pos = 0
    length = len(expression)
    while pos < length:
        char = expression[pos]
        if quote is not None:
            if char == "\\" and pos + 1 < length:
                out.append(expression[pos : pos + 2])
                pos += 2
                continue
            if char == quote:
                quote = None
                out.append(char)
                pos += 1
                continue
        elif char in _QUOTES:
            quote = char
            out.append(char)
            pos += 1
            continue

        match = SIGIL_RE.match(expression, pos) if char == "$" else None
        if match is None:
            out.append(char)
            pos += 1
            continue

        name = match.group(1)
        if quote is not None:
            out.append(escape_quoted(to_text(data[name])) if name in data else "null")
        else:
            out.append(to_literal(data[name]) if name in data else "null")
        pos = match.end()
    return "".join(out)

def substitute_sigils_text(expression: str, data: Mapping[str, Any]) -> str:
    """Replace ``$name`` with the value's plain text (``null`` when absent).

    Used by ``@switch``/``@case``, which compare strings rather than
    evaluating an expression.
    """
    return SIGIL_RE.sub(
        lambda m: to_text(data[m.group(1)]) if m.group(1) in data else "null",
        expression,
    )

def normalize_case_value(value: str) -> str:
    """Strip whitespace, then surrounding quote characters, then whitespace."""
    return value.strip().strip(_QUOTES).strip()

def iter_collection(value: Any) -> Iterable[Any]:
    """Items of a loop collection; empty for missing, scalar or string values."""
    if value is None or isinstance(value, (str, bytes)):
        return ()
    if isinstance(value, Mapping):
        return value.values()
    if isinstance(value, Iterable):
        return value
    return ()

def item_fields(item: Any) -> Mapping[str, Any]:
    """Fields a loop item exposes: scalars become ``{"value": item}``."""
    if isinstance(item, Mapping):
        return item
    return {"value": item}
