"""
md-press - Markdown to PDF and HTML publishing with a file watcher.

Provides:
- MarkdownRenderer: Markdown to HTML fragment with attributes, footnotes
  and warning containers
- wrap_page: standalone page with inlined stylesheet
- PdfExporter / HtmlExporter: write rendered pages to disk
- Converter: per-file render and export pipeline
- Watcher: debounced re-rendering on file change
"""

from .config import AppConfig, load_config
from .document import wrap_page
from .exceptions import MdPressError, StylesheetFetchError, ExportError
from .exporters import PdfExporter, HtmlExporter
from .files import find_markdown_files, is_markdown_file, output_path_for
from .pipeline import Converter, ConversionResult
from .renderer import MarkdownRenderer
from .styles import StyleBundle, combine_css, load_stylesheet
from .watcher import Watcher

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "load_config",
    "wrap_page",
    "MdPressError",
    "StylesheetFetchError",
    "ExportError",
    "PdfExporter",
    "HtmlExporter",
    "find_markdown_files",
    "is_markdown_file",
    "output_path_for",
    "Converter",
    "ConversionResult",
    "MarkdownRenderer",
    "StyleBundle",
    "combine_css",
    "load_stylesheet",
    "Watcher",
]
