"""
Stylesheet loading.

The remote stylesheet is downloaded once per process and combined with
the optional local override. The resulting bundle is passed explicitly
to every render.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
import structlog

from .config import AppConfig
from .exceptions import StylesheetFetchError

logger = structlog.get_logger()


@dataclass(frozen=True)
class StyleBundle:
    """Combined stylesheet used for every page"""
    css: str
    source_url: str
    local_path: Optional[Path] = None

    @property
    def has_local_override(self) -> bool:
        return self.local_path is not None


async def fetch_remote_css(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 30.0,
) -> str:
    """
    Download the remote stylesheet.

    Args:
        url: Stylesheet URL
        client: Optional client to reuse (tests pass a mock transport)
        timeout: Request timeout in seconds

    Returns:
        Stylesheet text

    Raises:
        StylesheetFetchError: On transport error or non-success status
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(url, follow_redirects=True)
        else:
            response = await client.get(url, follow_redirects=True)
    except httpx.HTTPError as e:
        raise StylesheetFetchError(url, str(e)) from e

    if not response.is_success:
        raise StylesheetFetchError(url, f"HTTP {response.status_code}")

    return response.text


def read_local_css(path: Path) -> str:
    """Read the local override; a missing file counts as empty"""
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8")


def combine_css(remote: str, local: str) -> str:
    """Remote rules first, then local ones, separated by one newline"""
    return f"{remote}\n{local}"


async def load_stylesheet(
    config: AppConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> StyleBundle:
    """
    Build the stylesheet bundle for this process.

    Args:
        config: Application configuration
        client: Optional HTTP client

    Returns:
        StyleBundle with remote and local CSS combined
    """
    url = config.style.css_url
    remote = await fetch_remote_css(url, client=client, timeout=config.style.fetch_timeout)

    local_path = config.paths.local_css
    local = read_local_css(local_path)
    has_local = local_path.is_file()

    logger.info(
        "stylesheet_loaded",
        url=url,
        remote_length=len(remote),
        local_override=str(local_path) if has_local else None,
    )

    return StyleBundle(
        css=combine_css(remote, local),
        source_url=url,
        local_path=local_path if has_local else None,
    )
