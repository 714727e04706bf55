"""Tests for configuration loading"""
from pathlib import Path

import pytest
from pydantic import ValidationError

from md_press.config import (
    DEFAULT_BROWSER_ARGS,
    DEFAULT_CSS_URL,
    AppConfig,
    LogFormat,
    WatchConfig,
    load_config,
)


class TestDefaults:
    """Defaults reproduce the fixed layout"""

    def test_paths(self):
        config = AppConfig()

        assert config.paths.input_dir == Path("md")
        assert config.paths.pdf_dir == Path("pdf")
        assert config.paths.html_dir == Path("html")
        assert config.paths.local_css == Path("style.css")

    def test_style_and_browser(self):
        config = AppConfig()

        assert config.style.css_url == DEFAULT_CSS_URL
        assert config.browser.args == DEFAULT_BROWSER_ARGS
        assert config.browser.page_format == "A4"
        assert config.browser.wait_until == "networkidle"
        assert config.watch.debounce_seconds == 0.5

    def test_browser_args_not_shared(self):
        config = AppConfig()
        config.browser.args.append("--extra")

        assert "--extra" not in AppConfig().browser.args


class TestEnvironment:
    """Environment variable overrides"""

    def test_path_overrides(self, monkeypatch):
        monkeypatch.setenv("MD_PRESS_INPUT_DIR", "docs")
        monkeypatch.setenv("MD_PRESS_PDF_DIR", "out/pdf")

        config = load_config()

        assert config.paths.input_dir == Path("docs")
        assert config.paths.pdf_dir == Path("out/pdf")

    def test_watch_and_log_overrides(self, monkeypatch):
        monkeypatch.setenv("MD_PRESS_WATCH_DEBOUNCE_SECONDS", "1.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "json")

        config = load_config()

        assert config.watch.debounce_seconds == 1.5
        assert config.log.level == "DEBUG"
        assert config.log.format == LogFormat.JSON

    def test_env_file(self, tmp_path, monkeypatch):
        # Registered so the value load_dotenv exports is removed afterwards
        monkeypatch.setenv("MD_PRESS_STYLE_CSS_URL", "unset")
        monkeypatch.delenv("MD_PRESS_STYLE_CSS_URL")
        env_file = tmp_path / "press.env"
        env_file.write_text("MD_PRESS_STYLE_CSS_URL=https://css.test/x.css\n", encoding="utf-8")

        config = load_config(str(env_file))

        assert config.style.css_url == "https://css.test/x.css"


def test_debounce_must_be_positive():
    with pytest.raises(ValidationError):
        WatchConfig(debounce_seconds=0)


def test_browser_args_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("MD_PRESS_BROWSER_ARGS", "--no-sandbox, --disable-gpu")

    config = load_config()

    assert config.browser.args == ["--no-sandbox", "--disable-gpu"]


def test_dotenv_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.delenv("MD_PRESS_STYLE_CSS_URL", raising=False)
    monkeypatch.delenv("MD_PRESS_WATCH_DEBOUNCE_SECONDS", raising=False)
    (tmp_path / ".env").write_text(
        "MD_PRESS_STYLE_CSS_URL=https://css.test/local.css\n"
        "MD_PRESS_WATCH_DEBOUNCE_SECONDS=2\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    config = load_config()

    assert config.style.css_url == "https://css.test/local.css"
    assert config.watch.debounce_seconds == 2.0
