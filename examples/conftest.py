"""Pytest fixtures for the monoview example apps.

Each example directory holds an ``app.py`` that builds an Environment and
renders at import time. ``example_app`` runs that file afresh for every
test, so flash messages and validation errors consumed by one test never
leak into the next.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Run the sibling app.py and expose its globals as attributes."""
    app_path = Path(request.path).parent / "app.py"
    namespace = runpy.run_path(str(app_path), run_name=f"example_{app_path.parent.name}")
    return SimpleNamespace(**namespace)
