"""Monoview — directive template engine for server-rendered HTML views.

Templates are plain HTML with ``@directives`` and ``{{ variables }}``. A
render pass rewrites the text in a fixed sequence of stages, recursing into
components, and an optional layout wraps the result through a slot marker.

Quickstart:
    >>> from monoview import DictLoader, Environment
    >>> env = Environment(loader=DictLoader({
    ...     "layouts/app": "<body>{{slot}}</body>",
    ...     "pages/home": "<h1>{{ title }}</h1>",
    ... }))
    >>> str(env.render("pages/home", {"title": "Hi"}).layout("layouts/app"))
    '<body><h1>Hi</h1></body>'

File-based templates:
    >>> from monoview import EnvConfig, Environment, FileSystemLoader
    >>> env = Environment(
    ...     loader=FileSystemLoader("src/view/resources/views"),
    ...     config=EnvConfig(".env"),
    ... )
    >>> html = str(env.render("pages/home", {"user": "Ana"}).layout("layouts/app"))

Directives:
    {{ name }}                                  variable (not escaped)
    @component('card', {'title': 'Hi'})         component with parameters
    @foreach items as item ... @endforeach      loop, {{ item.field }} inside
    @if($count > 0) ... @else ... @endif        conditional
    @switch($role) @case('a') ... @break @default ... @endswitch
    @assets('css/app.css') / @images('logo.png')
    @message('success') {{ message }} @endmessage
    @errors('email')
    @csrf()

Pipeline stages:
    message → variables → components → loops → conditionals →
    switch → assets → images → errors → csrf

Safety:
Conditions are evaluated by a closed expression grammar (literals and
operators only); template text can never run host code. Variable output is
NOT HTML-escaped: escape untrusted values before putting them in the
context.

"""

from monoview.environment import (
    ChoiceLoader,
    ComponentNotFoundError,
    ConfigProvider,
    CsrfTokenProvider,
    DictConfig,
    DictLoader,
    EnvConfig,
    Environment,
    ErrorBag,
    ErrorCode,
    ExpressionEvaluationError,
    FileSystemLoader,
    FlashStore,
    FunctionLoader,
    LayoutNotFoundError,
    Loader,
    MalformedDirectiveError,
    OneShotStore,
    PrefixLoader,
    RecursionLimitExceededError,
    RotatingCsrfToken,
    StaticCsrfToken,
    TemplateError,
    TemplateNotFoundError,
)
from monoview.processor import PIPELINE, DirectiveProcessor
from monoview.render_context import RenderContext, get_render_context
from monoview.template import Component, RenderedView, View, ViewState

__version__ = "0.1.0"

__all__ = [
    "PIPELINE",
    "ChoiceLoader",
    "Component",
    "ComponentNotFoundError",
    "ConfigProvider",
    "CsrfTokenProvider",
    "DictConfig",
    "DictLoader",
    "DirectiveProcessor",
    "EnvConfig",
    "Environment",
    "ErrorBag",
    "ErrorCode",
    "ExpressionEvaluationError",
    "FileSystemLoader",
    "FlashStore",
    "FunctionLoader",
    "LayoutNotFoundError",
    "Loader",
    "MalformedDirectiveError",
    "OneShotStore",
    "PrefixLoader",
    "RecursionLimitExceededError",
    "RenderContext",
    "RenderedView",
    "RotatingCsrfToken",
    "StaticCsrfToken",
    "TemplateError",
    "TemplateNotFoundError",
    "View",
    "ViewState",
    "__version__",
    "get_render_context",
]
