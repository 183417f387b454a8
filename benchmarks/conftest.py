from __future__ import annotations

import pytest

from monoview import DictConfig, DictLoader, Environment, ErrorBag, FlashStore, StaticCsrfToken

TEMPLATES = {
    "pages/minimal": "Hello {{ name }}",
    "pages/small": (
        "<h1>{{ title }}</h1>"
        "@foreach items as item<li>{{ item.value }}</li>@endforeach"
        "@if($count > 3)<p>many</p>@else<p>few</p>@endif"
    ),
    "pages/components": (
        "@component('card', {'title': '{{ title }}', 'tags': ['a', 'b', 'c']})" * 10
    ),
    "pages/large": "<table>@foreach rows as row<tr><td>{{ row.id }}</td><td>{{ row.name }}</td></tr>@endforeach</table>",
    "pages/form": "<form>@csrf()@errors('email')@switch($role)@case('admin')A@break@defaultU@endswitch</form>",
    "components/card": "<div><h2>{{ title }}</h2>@foreach tags as tag<i>{{ tag.value }}</i>@endforeach</div>",
    "layouts/app": "<html><head><link href=\"@assets('app.css')\"></head><body>@csrf(){{slot}}</body></html>",
}


@pytest.fixture(scope="session")
def monoview_env() -> Environment:
    return Environment(
        loader=DictLoader(TEMPLATES),
        config=DictConfig({"APP_URL": "http://bench", "APP_PORT": "8000"}),
        flash=FlashStore(),
        errors=ErrorBag(),
        csrf=StaticCsrfToken("benchmark"),
    )


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return {"title": "Small", "items": ["one", "two", "three", "four", "five"], "count": 5}


@pytest.fixture(scope="session")
def large_context() -> dict[str, object]:
    return {"rows": [{"id": i, "name": f"row-{i}"} for i in range(1000)]}
