"""Monoview environment: loaders, configuration, session collaborators, errors."""

from monoview.environment.exceptions import (
    ComponentNotFoundError,
    ErrorCode,
    ExpressionEvaluationError,
    LayoutNotFoundError,
    MalformedDirectiveError,
    RecursionLimitExceededError,
    TemplateError,
    TemplateNotFoundError,
)
from monoview.environment.config import ConfigProvider, DictConfig, EnvConfig
from monoview.environment.loaders import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
    FunctionLoader,
    Loader,
    PrefixLoader,
)
from monoview.environment.session import (
    CsrfTokenProvider,
    ErrorBag,
    FlashStore,
    OneShotStore,
    RotatingCsrfToken,
    StaticCsrfToken,
)
from monoview.environment.core import Environment

__all__ = [
    "ChoiceLoader",
    "ComponentNotFoundError",
    "ConfigProvider",
    "CsrfTokenProvider",
    "DictConfig",
    "DictLoader",
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
    "RotatingCsrfToken",
    "StaticCsrfToken",
    "TemplateError",
    "TemplateNotFoundError",
]
