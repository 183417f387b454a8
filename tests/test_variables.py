"""Test the {{ name }} variable stage.

Substitution is raw (no HTML escaping) and single-pass: substituted values
are never re-scanned for further tokens.
"""

from hypothesis import given, settings

from monoview import Environment
from monoview.directives.variables import VARIABLE_RE
from monoview.template.helpers import to_text

from .strategies import directive_shaped_text, identifier, plain_text, variable_template


class TestVariableSubstitution:
    """Basic {{ name }} behaviour."""

    def test_simple(self, render):
        assert render("Hello {{ name }}!", name="Ana") == "Hello Ana!"

    def test_whitespace_variants(self, render):
        assert render("{{name}}|{{ name }}|{{   name   }}", name="x") == "x|x|x"

    def test_missing_is_empty(self, render):
        assert render("[{{ missing }}]") == "[]"

    def test_none_is_empty(self, render):
        assert render("[{{ value }}]", value=None) == "[]"

    def test_booleans(self, render):
        assert render("{{ a }}/{{ b }}", a=True, b=False) == "true/false"

    def test_numbers(self, render):
        assert render("{{ n }} {{ f }}", n=42, f=1.5) == "42 1.5"

    def test_collection_renders_empty(self, render):
        assert render("[{{ items }}]", items=["a", "b"]) == "[]"

    def test_no_html_escaping(self, render):
        assert render("{{ html }}", html="<b>bold</b>") == "<b>bold</b>"

    def test_dotted_tokens_untouched(self, render):
        """{{ item.field }} belongs to the loop stage."""
        assert render("{{ user.name }}", user={"name": "x"}) == "{{ user.name }}"

    def test_multiple_occurrences(self, render):
        assert render("{{ a }}{{ a }}{{ b }}", a="1", b="2") == "112"

    def test_env_render(self, env):
        assert str(env.render("pages/greet", {"name": "Ana"})) == "<p>Hello Ana</p>"

    def test_kwargs_override_context(self, env):
        assert str(env.render("pages/greet", {"name": "Ana"}, name="Bo")) == "<p>Hello Bo</p>"


class TestNoRescan:
    """Substituted values are emitted verbatim."""

    def test_value_with_token_not_reprocessed(self, render):
        assert render("{{ a }}", a="{{ b }}", b="nope") == "{{ b }}"

    def test_self_reference(self, render):
        assert render("{{ a }}", a="{{ a }}") == "{{ a }}"


class TestToText:
    def test_table(self):
        assert to_text(None) == ""
        assert to_text(True) == "true"
        assert to_text(False) == "false"
        assert to_text(0) == "0"
        assert to_text("s") == "s"
        assert to_text({"a": 1}) == ""
        assert to_text(object()) == ""


class TestVariableProperties:
    """Property-based invariants of the variable stage."""

    @given(source=plain_text)
    @settings(max_examples=200)
    def test_plain_text_unchanged(self, source):
        assert Environment().render_string(source) == source

    @given(source=variable_template)
    @settings(max_examples=200)
    def test_no_tokens_remain_with_empty_context(self, source):
        assert VARIABLE_RE.search(Environment().render_string(source)) is None

    @given(name=identifier, value=directive_shaped_text)
    @settings(max_examples=100)
    def test_directive_shaped_values_pass_through(self, name, value):
        assert Environment().render_string(f"{{{{ {name} }}}}", {name: value}) == value
