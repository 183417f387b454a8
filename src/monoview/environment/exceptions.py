"""Exceptions for the Monoview directive engine.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError         # View template not found by loader
│   ├── ComponentNotFoundError    # @component('x') with no backing template
│   └── LayoutNotFoundError       # View.layout('x') with no backing template
├── MalformedDirectiveError       # Unparseable directive arguments / slot marker
├── ExpressionEvaluationError     # @if condition failed to lex, parse or evaluate
└── RecursionLimitExceededError   # Component nesting deeper than max_depth

Containment:
Every error except ``RecursionLimitExceededError`` is caught where it occurs
and replaced by an inline fragment (see ``TemplateError.render_fragment``) or
by an empty substitution. A broken directive never aborts the page.

Example:
    ```
    MV-TPL-002: Component 'navbar' not found. Available: card, footer
      Stack: pages/home
    ```

"""

from __future__ import annotations

import html
from enum import Enum

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for Monoview template errors.

    Format: MV-{CATEGORY}-{NUMBER}
    Categories: TPL (template loading), DIR (directive syntax),
    EXP (condition expressions), RUN (runtime)

    Example:
        >>> ErrorCode.COMPONENT_NOT_FOUND.value
        'MV-TPL-002'
        >>> ErrorCode.COMPONENT_NOT_FOUND.category
        'template'
    """

    # Template loading errors (MV-TPL-xxx)
    TEMPLATE_NOT_FOUND = "MV-TPL-001"
    COMPONENT_NOT_FOUND = "MV-TPL-002"
    LAYOUT_NOT_FOUND = "MV-TPL-003"

    # Directive errors (MV-DIR-xxx)
    MALFORMED_DIRECTIVE = "MV-DIR-001"

    # Expression errors (MV-EXP-xxx)
    EXPRESSION_ERROR = "MV-EXP-001"

    # Runtime errors (MV-RUN-xxx)
    RECURSION_LIMIT = "MV-RUN-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'template', 'directive', 'expression')."""
        prefix = self.value.split("-")[1]
        return {
            "TPL": "template",
            "DIR": "directive",
            "EXP": "expression",
            "RUN": "runtime",
        }.get(prefix, "unknown")


class TemplateError(Exception):
    """Base exception for all Monoview template errors.

    All template-related exceptions inherit from this class, enabling
    broad exception handling:

        >>> try:
        ...     env.render("pages/home").layout("app")
        ... except TemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode for searchable error identification.
        status: HTTP-style status used in the inline fragment header.
    """

    code: ErrorCode | None = None
    status: int = 500

    def __init__(self, message: str, *, template_stack: list[str] | None = None):
        self.message = message
        self.template_stack = template_stack or []
        super().__init__(message)

    def format_compact(self) -> str:
        """Format error as a single diagnostic block for logs and terminals.

        Format::

            MV-TPL-001: Template 'pages/missing' not found
              Stack: pages/home -> components/card

        """
        header = self.message
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        parts = [header]
        if self.template_stack:
            parts.append(f"  Stack: {' -> '.join(self.template_stack)}")
        return "\n".join(parts)

    def render_fragment(self, debug: bool = True) -> str:
        """Render this error as visible inline HTML.

        Debug fragments show status, code and message. Production fragments
        are an HTML comment carrying only the error code, so page markup is
        unaffected while the failure stays discoverable in page source.
        """
        code = self.code.value if self.code else "MV-ERR"
        if not debug:
            return f"<!-- monoview error {code} -->"
        message = html.escape(self.message, quote=True)
        return (
            f'<div class="monoview-error" data-code="{code}">'
            f"<strong>Error {self.status}</strong> "
            f"<code>{code}</code> {message}"
            "</div>"
        )


class TemplateNotFoundError(TemplateError):
    """Template not found by the configured loader.

    Raised by loaders when a logical name has no backing text:

            >>> env.get_source("pages/nonexistent")
        TemplateNotFoundError: Template 'pages/nonexistent' not found in: views/

    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND
    status: int = 404


class ComponentNotFoundError(TemplateNotFoundError):
    """``@component('name')`` referenced a component with no template."""

    code: ErrorCode | None = ErrorCode.COMPONENT_NOT_FOUND

    def __init__(
        self, name: str, reason: str | None = None, *, template_stack: list[str] | None = None
    ):
        self.name = name
        msg = f"Component '{name}' not found"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, template_stack=template_stack)


class LayoutNotFoundError(TemplateNotFoundError):
    """``View.layout('name')`` referenced a layout with no template."""

    code: ErrorCode | None = ErrorCode.LAYOUT_NOT_FOUND

    def __init__(
        self, name: str, reason: str | None = None, *, template_stack: list[str] | None = None
    ):
        self.name = name
        msg = f"Layout '{name}' not found"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, template_stack=template_stack)


class MalformedDirectiveError(TemplateError):
    """A directive's argument list (or a layout's slot marker) cannot be used.

    Contained at the directive: the directive degrades to an empty
    substitution, or, for a layout without a slot marker, to an inline
    fragment in place of the layout output.
    """

    code: ErrorCode | None = ErrorCode.MALFORMED_DIRECTIVE

    def __init__(
        self,
        message: str,
        *,
        directive: str | None = None,
        template_stack: list[str] | None = None,
    ):
        self.directive = directive
        super().__init__(message, template_stack=template_stack)


class ExpressionEvaluationError(TemplateError):
    """An ``@if`` condition failed to lex, parse or evaluate.

    The condition is treated as false.

    Attributes:
        expression: The condition text after ``$name`` substitution.
        position: Character offset of the failure, when known.
    """

    code: ErrorCode | None = ErrorCode.EXPRESSION_ERROR

    def __init__(self, message: str, expression: str = "", position: int | None = None):
        self.expression = expression
        self.position = position
        super().__init__(message)

    def format_compact(self) -> str:
        parts = [super().format_compact()]
        if self.expression:
            parts.append(f"  Expression: {self.expression}")
            if self.position is not None:
                parts.append(f"              {' ' * self.position}^")
        return "\n".join(parts)


class RecursionLimitExceededError(TemplateError):
    """Component nesting exceeded the environment's ``max_depth``.

    The one fatal render error: it aborts the current render call and
    propagates to the caller, since it indicates unbounded work (typically
    a component that includes itself).
    """

    code: ErrorCode | None = ErrorCode.RECURSION_LIMIT

    def __init__(self, name: str, depth: int, limit: int, template_stack: list[str] | None = None):
        self.name = name
        self.depth = depth
        self.limit = limit
        super().__init__(
            f"Maximum component depth exceeded ({limit}) when rendering '{name}'",
            template_stack=template_stack,
        )
