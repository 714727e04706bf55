"""
HTML exporter.
"""
from pathlib import Path
from typing import Union

import structlog

logger = structlog.get_logger()


class HtmlExporter:
    """Writes a wrapped page as a static HTML file"""

    suffix = ".html"

    def export(self, page_html: str, destination: Union[str, Path]) -> Path:
        """
        Write page to file, creating parent directories.

        Args:
            page_html: Complete HTML document
            destination: Output file path

        Returns:
            Path to written file
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(page_html, encoding="utf-8")
        logger.info("html_exported", path=str(destination), size=len(page_html))
        return destination
