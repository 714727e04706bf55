"""
Pytest configuration and shared fixtures.
"""
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import structlog
import pytest

from md_press.config import AppConfig, PathsConfig, WatchConfig
from md_press.exporters import PdfExporter
from md_press.styles import StyleBundle


REMOTE_CSS = "body { color: #222; }"


@pytest.fixture
def md_tree(tmp_path):
    """Input tree with two Markdown files and one non-Markdown file."""
    root = tmp_path / "md"
    (root / "sub").mkdir(parents=True)
    (root / "a.md").write_text("# A\n\nFirst document.\n", encoding="utf-8")
    (root / "sub" / "b.md").write_text("# B\n\nSecond document.\n", encoding="utf-8")
    (root / "notes.txt").write_text("not markdown", encoding="utf-8")
    return root


@pytest.fixture
def app_config(tmp_path, md_tree):
    """Configuration rooted in the temporary directory."""
    return AppConfig(
        paths=PathsConfig(
            input_dir=md_tree,
            pdf_dir=tmp_path / "pdf",
            html_dir=tmp_path / "html",
            local_css=tmp_path / "style.css",
        ),
        watch=WatchConfig(debounce_seconds=0.1),
    )


@pytest.fixture
def stylesheet():
    return StyleBundle(css=f"{REMOTE_CSS}\n", source_url="https://example.test/styles.css")


def make_css_client(status_code: int = 200, body: str = REMOTE_CSS) -> httpx.AsyncClient:
    """HTTP client answering every request with a fixed response."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, text=body)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client.requests = requests
    return client


@pytest.fixture
def css_client():
    return make_css_client()


@pytest.fixture
def fake_page():
    """Browser page whose pdf() writes a stub file."""
    page = MagicMock()
    page.set_content = AsyncMock()
    page.emulate_media = AsyncMock()
    page.close = AsyncMock()

    async def write_pdf(path, **kwargs):
        Path(path).write_bytes(b"%PDF-1.4 stub")

    page.pdf = AsyncMock(side_effect=write_pdf)
    return page


@pytest.fixture
def fake_browser(fake_page):
    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=fake_page)
    browser.close = AsyncMock()
    browser.is_connected.return_value = True
    return browser


@pytest.fixture
def pdf_exporter(fake_browser):
    """PDF exporter driving the fake browser."""
    return PdfExporter(browser=fake_browser)


@pytest.fixture
def css_client_factory():
    """Build HTTP clients with a given status code and body."""
    return make_css_client


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo structlog configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
