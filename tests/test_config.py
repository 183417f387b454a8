"""Test configuration providers and URL helpers."""

import pytest

from monoview import DictConfig, EnvConfig, Environment
from monoview.environment.config import base_url, is_truthy


class TestDictConfig:
    def test_get(self):
        config = DictConfig({"APP_URL": "http://x"})
        assert config.get("APP_URL") == "http://x"
        assert config.get("MISSING", "d") == "d"
        assert config.get("MISSING") is None

    def test_copy_of_mapping(self):
        values = {"A": "1"}
        config = DictConfig(values)
        values["A"] = "2"
        assert config.get("A") == "1"


class TestEnvConfig:
    def test_reads_dotenv_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text(
            '# app settings\nAPP_URL="https://site.test"\nAPP_PORT=\nVIEW_PUBLIC_PATH=assets # inline\n',
            encoding="utf-8",
        )
        config = EnvConfig(path, use_os_environ=False)
        assert config.get("APP_URL") == "https://site.test"
        assert config.get("APP_PORT") == ""
        assert config.get("VIEW_PUBLIC_PATH") == "assets"
        assert base_url(config) == "https://site.test"

    def test_missing_file_is_not_an_error(self, tmp_path):
        config = EnvConfig(tmp_path / "absent.env", use_os_environ=False)
        assert config.get("APP_URL", "fallback") == "fallback"

    def test_process_environment_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MONOVIEW_TEST_SETTING", "from-env")
        config = EnvConfig(tmp_path / "absent.env")
        assert config.get("MONOVIEW_TEST_SETTING") == "from-env"

    def test_file_wins_over_process_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APP_URL", "http://env")
        path = tmp_path / ".env"
        path.write_text("APP_URL=http://file\n", encoding="utf-8")
        assert EnvConfig(path).get("APP_URL") == "http://file"

    def test_environment_urls(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("APP_URL=http://shop.test/\nAPP_PORT=8080\n", encoding="utf-8")
        env = Environment(config=EnvConfig(path, use_os_environ=False))
        assert env.render_string("@assets('a.css')") == "http://shop.test:8080/src/view/public/a.css"


class TestBaseUrl:
    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            ({}, "http://localhost:8000"),
            ({"APP_URL": "http://x", "APP_PORT": "8000"}, "http://x:8000"),
            ({"APP_URL": "http://x/", "APP_PORT": "8000"}, "http://x:8000"),
            ({"APP_URL": "http://x", "APP_PORT": ""}, "http://x"),
            ({"APP_URL": "http://x", "APP_PORT": 9000}, "http://x:9000"),
            ({"APP_URL": "", "APP_PORT": ""}, "http://localhost"),
        ],
    )
    def test_base_url(self, values, expected):
        assert base_url(DictConfig(values)) == expected


class TestIsTruthy:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on", True])
    def test_true(self, value):
        assert is_truthy(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "", None, False])
    def test_false(self, value):
        assert is_truthy(value) is False
