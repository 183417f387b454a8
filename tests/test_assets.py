"""Test @assets and @images URL rewriting."""

import pytest

from monoview import DictConfig, Environment


def _env(**values) -> Environment:
    return Environment(config=DictConfig(values))


class TestAssets:
    def test_assets(self, render):
        assert render("@assets('css/a.css')") == "http://x:8000/src/view/public/css/a.css"

    def test_images(self, render):
        assert render("@images('logo.png')") == "http://x:8000/src/view/public/images/logo.png"

    def test_double_quotes(self, render):
        assert render('<script src="@assets("js/app.js")">') == (
            '<script src="http://x:8000/src/view/public/js/app.js">'
        )

    def test_leading_slash_stripped(self, render):
        assert render("@assets('/css/a.css')") == "http://x:8000/src/view/public/css/a.css"

    def test_inside_attribute(self, render):
        result = render("<img src=\"@images('a.png')\" alt=\"\">")
        assert result == '<img src="http://x:8000/src/view/public/images/a.png" alt="">'

    def test_multiple(self, render):
        result = render("@assets('a.css') @assets('b.css')")
        assert result == (
            "http://x:8000/src/view/public/a.css http://x:8000/src/view/public/b.css"
        )

    def test_defaults(self):
        env = _env()
        assert env.render_string("@assets('app.js')") == "http://localhost:8000/src/view/public/app.js"

    @pytest.mark.parametrize("url", ["http://x", "http://x/", "http://x//"])
    def test_trailing_slash_stripped(self, url):
        env = _env(APP_URL=url, APP_PORT="8000")
        assert env.asset_url("a.css") == "http://x:8000/src/view/public/a.css"

    def test_empty_port_omitted(self):
        env = _env(APP_URL="https://example.com", APP_PORT="")
        assert env.base_url() == "https://example.com"
        assert env.image_url("a.png") == "https://example.com/src/view/public/images/a.png"

    def test_custom_paths(self):
        env = _env(
            APP_URL="http://x",
            APP_PORT="8000",
            VIEW_PUBLIC_PATH="/static/",
            VIEW_IMAGES_PATH="media/img",
        )
        assert env.asset_url("css/a.css") == "http://x:8000/static/css/a.css"
        assert env.image_url("/a.png") == "http://x:8000/media/img/a.png"

    def test_empty_public_path(self):
        env = _env(APP_URL="http://x", APP_PORT="", VIEW_PUBLIC_PATH="")
        assert env.asset_url("a.css") == "http://x/a.css"

    def test_no_existence_check(self, render):
        assert render("@assets('does/not/exist.css')").endswith("/does/not/exist.css")

    def test_variable_in_path(self, render):
        assert render("@images('{{ file }}')", file="me.png") == (
            "http://x:8000/src/view/public/images/me.png"
        )
