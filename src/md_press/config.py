"""
md-press - Configuration Module

Centralized configuration management with Pydantic settings.
Defaults reproduce the fixed layout: md/ in, pdf/ and html/ out,
style.css as the local override.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_CSS_URL = "https://style.roxcelic.love/styles.css"
DEFAULT_FONT_URL = "https://fonts.googleapis.com/css2?family=Pixelify+Sans&display=swap"
DEFAULT_FONT_FAMILY = "'Pixelify Sans', sans-serif"

DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
    "--disable-software-rasterizer",
    "--disable-dev-shm-usage",
    "--window-position=-1000,-1000",
    "--disable-background-timer-throttling",
    "--disable-renderer-backgrounding",
    "--disable-backgrounding-occluded-windows",
]


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    CONSOLE = "console"


class PathsConfig(BaseSettings):
    """Input and output locations."""

    model_config = SettingsConfigDict(
        env_prefix="MD_PRESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    input_dir: Path = Field(default=Path("md"))
    pdf_dir: Path = Field(default=Path("pdf"))
    html_dir: Path = Field(default=Path("html"))
    local_css: Path = Field(default=Path("style.css"))


class StyleConfig(BaseSettings):
    """Remote stylesheet and web font."""

    model_config = SettingsConfigDict(
        env_prefix="MD_PRESS_STYLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    css_url: str = Field(default=DEFAULT_CSS_URL)
    font_url: str = Field(default=DEFAULT_FONT_URL)
    font_family: str = Field(default=DEFAULT_FONT_FAMILY)
    fetch_timeout: float = Field(default=30.0, gt=0)


class BrowserConfig(BaseSettings):
    """Headless Chromium settings for PDF rasterization."""

    model_config = SettingsConfigDict(
        env_prefix="MD_PRESS_BROWSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    headless: bool = Field(default=True)
    args: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    page_format: str = Field(default="A4")
    wait_until: str = Field(default="networkidle")

    @field_validator("args", mode="before")
    @classmethod
    def parse_args(cls, v):
        if isinstance(v, str):
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v


class WatchConfig(BaseSettings):
    """File watcher settings."""

    model_config = SettingsConfigDict(
        env_prefix="MD_PRESS_WATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debounce_seconds: float = Field(default=0.5, gt=0)
    polling: bool = Field(default=False)


class LogConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(default="INFO")
    format: LogFormat = Field(default=LogFormat.CONSOLE)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return str(v).upper()


class AppConfig(BaseSettings):
    """Main application configuration."""

    # Prefixed so generic variables such as BROWSER are not read as sections
    model_config = SettingsConfigDict(
        env_prefix="MD_PRESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AppConfig":
        """Load configuration from environment file."""
        if env_file and Path(env_file).exists():
            from dotenv import load_dotenv
            load_dotenv(env_file)

        return cls(
            paths=PathsConfig(),
            style=StyleConfig(),
            browser=BrowserConfig(),
            watch=WatchConfig(),
            log=LogConfig(),
        )


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """Load application configuration."""
    return AppConfig.from_env(env_file)
