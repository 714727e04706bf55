"""
Exporters writing wrapped pages to disk.
"""
from .html import HtmlExporter
from .pdf import PdfExporter

__all__ = ["HtmlExporter", "PdfExporter"]
