"""
PDF exporter backed by headless Chromium (Playwright).

One browser is kept for the exporter's lifetime and every export gets
its own page, closed whether or not rasterization succeeds.
"""
from pathlib import Path
from typing import Any, Optional, Union

import structlog
from playwright.async_api import Error as PlaywrightError, async_playwright

from ..config import BrowserConfig
from ..exceptions import ExportError

logger = structlog.get_logger()


class PdfExporter:
    """
    Rasterizes wrapped pages to paginated PDF.

    Use as an async context manager:

        async with PdfExporter(config.browser) as exporter:
            await exporter.export(page_html, "pdf/a.pdf")
    """

    suffix = ".pdf"

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        browser: Optional[Any] = None,
    ):
        """
        Initialize PDF exporter.

        Args:
            config: Browser launch and page settings
            browser: Already running browser to use instead of launching one;
                it is not closed by this exporter
        """
        self.config = config or BrowserConfig()
        self._browser = browser
        self._owns_browser = browser is None
        self._playwright = None

    @property
    def is_started(self) -> bool:
        return self._browser is not None

    async def start(self) -> "PdfExporter":
        """Launch the browser if not already running"""
        if self._browser is not None:
            return self

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=self.config.args,
            )
        except PlaywrightError as e:
            await self._playwright.stop()
            self._playwright = None
            raise ExportError(f"Failed to launch headless browser: {e}") from e

        self._owns_browser = True
        logger.info("browser_launched", headless=self.config.headless)
        return self

    async def close(self) -> None:
        """Close the browser and stop the Playwright driver"""
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        try:
            if browser is not None and self._owns_browser:
                await browser.close()
                logger.info("browser_closed")
        finally:
            if playwright is not None:
                await playwright.stop()

    async def __aenter__(self) -> "PdfExporter":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _ensure_browser(self) -> None:
        if self._browser is None:
            raise ExportError("PDF exporter is not started")
        if self._owns_browser and not self._browser.is_connected():
            logger.warning("browser_disconnected_restarting")
            await self.close()
            await self.start()

    async def export(self, page_html: str, destination: Union[str, Path]) -> Path:
        """
        Render a page to an A4 PDF file.

        Args:
            page_html: Complete HTML document
            destination: Output file path

        Returns:
            Path to created PDF

        Raises:
            ExportError: If the page fails to load or print
        """
        await self._ensure_browser()

        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)

        try:
            page = await self._browser.new_page()
        except PlaywrightError as e:
            raise ExportError(f"Could not open a browser page for {destination}: {e}") from e

        try:
            await page.set_content(page_html, wait_until=self.config.wait_until)
            # Screen styles, not print styles
            await page.emulate_media(media="screen")
            await page.pdf(
                path=str(destination),
                format=self.config.page_format,
                print_background=True,
                prefer_css_page_size=True,
            )
        except PlaywrightError as e:
            raise ExportError(f"PDF export failed for {destination}: {e}") from e
        finally:
            await self._close_page(page)

        logger.info("pdf_exported", path=str(destination))
        return destination

    async def _close_page(self, page) -> None:
        # A page whose browser already went away cannot be closed
        try:
            await page.close()
        except PlaywrightError as e:
            logger.warning("page_close_failed", error=str(e))
