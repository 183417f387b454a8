"""Test template loaders."""

import pytest

from monoview import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    FunctionLoader,
    PrefixLoader,
    TemplateNotFoundError,
)


@pytest.fixture
def views(tmp_path):
    """A view tree on disk: pages, layouts and components."""
    root = tmp_path / "views"
    (root / "pages").mkdir(parents=True)
    (root / "layouts").mkdir()
    (root / "components").mkdir()
    (root / "pages" / "home.html").write_text("<h1>{{ title }}</h1>", encoding="utf-8")
    (root / "layouts" / "app.html").write_text("<body>{{slot}}</body>", encoding="utf-8")
    (root / "components" / "card.html").write_text("<div>{{ text }}</div>", encoding="utf-8")
    (tmp_path / "secret.html").write_text("top secret", encoding="utf-8")
    return root


class TestFileSystemLoader:
    def test_get_source(self, views):
        source, filename = FileSystemLoader(views).get_source("pages/home")
        assert source == "<h1>{{ title }}</h1>"
        assert filename.endswith("home.html")

    def test_missing(self, views):
        with pytest.raises(TemplateNotFoundError, match="pages/nope"):
            FileSystemLoader(views).get_source("pages/nope")

    def test_escape_root_rejected(self, views):
        with pytest.raises(TemplateNotFoundError):
            FileSystemLoader(views).get_source("../secret")

    def test_search_path_order(self, views, tmp_path):
        override = tmp_path / "override"
        (override / "pages").mkdir(parents=True)
        (override / "pages" / "home.html").write_text("override", encoding="utf-8")
        loader = FileSystemLoader([override, str(views)])
        assert loader.get_source("pages/home")[0] == "override"
        assert loader.get_source("layouts/app")[0] == "<body>{{slot}}</body>"

    def test_undecodable_file(self, views):
        (views / "pages" / "latin.html").write_bytes(b"caf\xe9")
        with pytest.raises(TemplateNotFoundError, match="not valid utf-8"):
            FileSystemLoader(views).get_source("pages/latin")
        html = str(Environment(loader=FileSystemLoader(views)).render("pages/latin"))
        assert "MV-TPL-001" in html

    def test_list_templates(self, views):
        assert FileSystemLoader(views).list_templates() == [
            "components/card",
            "layouts/app",
            "pages/home",
        ]

    def test_custom_suffix(self, tmp_path):
        (tmp_path / "mail.txt").write_text("plain", encoding="utf-8")
        assert FileSystemLoader(tmp_path, suffix=".txt").get_source("mail")[0] == "plain"

    def test_full_render(self, views):
        env = Environment(loader=FileSystemLoader(views))
        html = str(env.render("pages/home", title="Hi").layout("layouts/app"))
        assert html == "<body><h1>Hi</h1></body>"
        assert env.component("card", {"text": "x"}) == "<div>x</div>"
        assert "pages/home" in env.list_templates()


class TestDictLoader:
    def test_get_source(self):
        assert DictLoader({"a": "A"}).get_source("a") == ("A", None)

    def test_did_you_mean(self):
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'pages/home'"):
            DictLoader({"pages/home": ""}).get_source("pages/hom")

    def test_available_listed(self):
        with pytest.raises(TemplateNotFoundError, match="Available: a, b"):
            DictLoader({"a": "", "b": ""}).get_source("zzzzzz")

    def test_list_templates(self):
        assert DictLoader({"b": "", "a": ""}).list_templates() == ["a", "b"]


class TestChoiceLoader:
    def test_first_match_wins(self):
        loader = ChoiceLoader([DictLoader({"x": "first"}), DictLoader({"x": "second", "y": "Y"})])
        assert loader.get_source("x")[0] == "first"
        assert loader.get_source("y")[0] == "Y"
        assert loader.list_templates() == ["x", "y"]

    def test_none_match(self):
        with pytest.raises(TemplateNotFoundError, match="2 loaders"):
            ChoiceLoader([DictLoader({}), DictLoader({})]).get_source("x")


class TestPrefixLoader:
    def test_delegates(self):
        loader = PrefixLoader({"components": DictLoader({"card": "C"}), "pages": DictLoader({"a": "A"})})
        assert loader.get_source("components/card")[0] == "C"
        assert loader.list_templates() == ["components/card", "pages/a"]

    def test_unknown_prefix(self):
        with pytest.raises(TemplateNotFoundError, match="no loader for prefix 'nope'"):
            PrefixLoader({"pages": DictLoader({})}).get_source("nope/x")

    def test_as_environment_loader(self):
        loader = PrefixLoader(
            {
                "pages": DictLoader({"home": "@component('badge')"}),
                "components": DictLoader({"badge": "<b>ok</b>"}),
            }
        )
        assert str(Environment(loader=loader).render("pages/home")) == "<b>ok</b>"


class TestFunctionLoader:
    def test_string_result(self):
        loader = FunctionLoader(lambda name: "src" if name == "a" else None)
        assert loader.get_source("a") == ("src", "<function>")

    def test_tuple_result(self):
        loader = FunctionLoader(lambda name: ("src", "file.html"))
        assert loader.get_source("a") == ("src", "file.html")

    def test_none_is_not_found(self):
        with pytest.raises(TemplateNotFoundError):
            FunctionLoader(lambda name: None).get_source("a")

    def test_cannot_list(self):
        assert FunctionLoader(lambda name: None).list_templates() == []
