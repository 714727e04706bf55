"""
Per-file conversion pipeline: read, render, wrap, export PDF, export HTML.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from .config import AppConfig
from .document import wrap_page
from .exporters import HtmlExporter, PdfExporter
from .files import find_markdown_files, output_path_for
from .renderer import MarkdownRenderer
from .styles import StyleBundle

logger = structlog.get_logger()


@dataclass
class ConversionResult:
    """Outputs written for one source file"""
    source: Path
    pdf_path: Path
    html_path: Path


class Converter:
    """
    Converts Markdown files to PDF and HTML.

    The stylesheet bundle is fixed for the converter's lifetime; the
    source file is read fresh on every conversion.
    """

    def __init__(
        self,
        config: AppConfig,
        stylesheet: StyleBundle,
        pdf_exporter: PdfExporter,
        html_exporter: Optional[HtmlExporter] = None,
        renderer: Optional[MarkdownRenderer] = None,
    ):
        self.config = config
        self.stylesheet = stylesheet
        self.pdf_exporter = pdf_exporter
        self.html_exporter = html_exporter or HtmlExporter()
        self.renderer = renderer or MarkdownRenderer()

    def output_paths(self, source: Path) -> tuple[Path, Path]:
        """PDF and HTML destinations for a source file"""
        paths = self.config.paths
        return (
            output_path_for(source, paths.input_dir, paths.pdf_dir, PdfExporter.suffix),
            output_path_for(source, paths.input_dir, paths.html_dir, HtmlExporter.suffix),
        )

    def render_page(self, md_content: str, title: Optional[str] = None) -> str:
        """Render Markdown text into a complete page"""
        fragment = self.renderer.render(md_content)
        return wrap_page(
            fragment,
            self.stylesheet.css,
            font_url=self.config.style.font_url,
            font_family=self.config.style.font_family,
            title=title,
        )

    async def convert_file(self, source: Union[str, Path]) -> ConversionResult:
        """
        Convert one Markdown file to PDF, then HTML.

        Args:
            source: Markdown file under the input directory

        Returns:
            ConversionResult with both output paths
        """
        source = Path(source)
        md_content = source.read_text(encoding="utf-8", errors="replace")
        page_html = self.render_page(md_content, title=source.stem)
        pdf_path, html_path = self.output_paths(source)

        await self.pdf_exporter.export(page_html, pdf_path)
        self.html_exporter.export(page_html, html_path)

        logger.info("file_converted", source=str(source))
        return ConversionResult(source=source, pdf_path=pdf_path, html_path=html_path)

    async def convert_all(
        self,
        sources: Optional[Iterable[Path]] = None,
    ) -> list[ConversionResult]:
        """
        Convert files one after another.

        A failure aborts the remaining batch.

        Args:
            sources: Files to convert; defaults to every Markdown file
                under the input directory

        Returns:
            Results in conversion order
        """
        if sources is None:
            sources = find_markdown_files(self.config.paths.input_dir)
        sources = list(sources)

        logger.info("batch_started", files=len(sources))
        results = []
        for source in sources:
            results.append(await self.convert_file(source))
        logger.info("batch_completed", files=len(results))
        return results
