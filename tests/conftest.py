"""Pytest configuration and fixtures for Monoview tests."""

import pytest

from monoview import (
    DictConfig,
    DictLoader,
    Environment,
    ErrorBag,
    FlashStore,
    StaticCsrfToken,
)

CSRF_TOKEN = "tok123"


@pytest.fixture
def config():
    """Configuration with a fixed base URL and the default static paths."""
    return DictConfig({"APP_URL": "http://x", "APP_PORT": "8000"})


@pytest.fixture
def flash():
    return FlashStore()


@pytest.fixture
def errors():
    return ErrorBag()


@pytest.fixture
def csrf():
    return StaticCsrfToken(CSRF_TOKEN)


@pytest.fixture
def templates():
    """A small view set: pages, layouts and components."""
    return {
        "pages/home": "<h1>Hi</h1>",
        "pages/greet": "<p>Hello {{ name }}</p>",
        "pages/form": "<form>@csrf()<input name=\"email\">@errors('email')</form>",
        "pages/flash": "@message('success')<div class=\"ok\">{{ message }}</div>@endmessage",
        "layouts/app": "<html><head>@csrf()</head><body>{{slot}}</body></html>",
        "layouts/titled": "<title>{{ title }}</title><main>{{ slot }}</main>",
        "layouts/plain": "<body>{{slot}}</body>",
        "layouts/noslot": "<body>nothing here</body>",
        "layouts/twoslots": "<a>{{slot}}</a><b>{{slot}}</b>",
        "components/card": "<div class=\"card\"><h2>{{ title }}</h2>{{ body }}</div>",
        "components/badge": "<span>{{ label }}</span>",
        "components/tags": "@foreach tags as tag<i>{{ tag.value }}</i>@endforeach",
        "components/leaky": "<p>{{ secret }}</p>",
        "components/self": "@component('self')",
        "components/outer": "<outer>@component('inner', {'text': '{{ text }}'})</outer>",
        "components/inner": "<inner>{{ text }}</inner>",
    }


@pytest.fixture
def env(templates, config, flash, errors, csrf):
    """Environment wired with in-memory views and session collaborators."""
    return Environment(
        loader=DictLoader(templates),
        config=config,
        flash=flash,
        errors=errors,
        csrf=csrf,
    )


@pytest.fixture
def render(env):
    """Render ad-hoc template text through the full pipeline."""

    def _render(source: str, **context) -> str:
        return env.render_string(source, context)

    return _render


def assert_contains(result: str, *expected_parts: str) -> None:
    """Assert rendered output contains all expected parts.

    Args:
        result: The actual rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in result, (
            f"Rendered output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {result!r}"
        )
