"""Smoke tests for the components example."""


class TestComponentsExample:
    """Parameterized components rendered from disk."""

    def test_three_cards(self, example_app) -> None:
        html = example_app.output
        assert html.count('<div class="card-header">') == 3
        for title in ("Directives", "Safety", "Sessions"):
            assert f'<div class="card-header">{title}</div>' in html

    def test_list_parameters_looped(self, example_app) -> None:
        assert "<li>Variables</li><li>Loops</li><li>Conditionals</li>" in example_app.output
        assert "<li>Closed condition grammar</li>" in example_app.output

    def test_alert_receives_parent_value(self, example_app) -> None:
        expected = '<div class="alert alert-warning">This is an alpha release. API may change.</div>'
        assert expected in example_app.output

    def test_heading(self, example_app) -> None:
        assert example_app.output.startswith("<h1>Component Demo</h1>")

    def test_components_sandboxed(self, example_app) -> None:
        assert "do not show" not in example_app.output
