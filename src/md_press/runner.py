"""
Process orchestration: load styles, convert everything, then watch.
"""
import asyncio
import signal
from typing import Optional

import httpx
import structlog

from .config import AppConfig
from .exporters import PdfExporter
from .pipeline import ConversionResult, Converter
from .styles import load_stylesheet
from .watcher import Watcher

logger = structlog.get_logger()


def install_stop_signals(stop_event: asyncio.Event) -> None:
    """Set stop_event on SIGINT/SIGTERM where the loop supports it"""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no signal handler support
            logger.debug("signal_handler_unavailable", signal=sig.name)


async def run(
    config: AppConfig,
    watch: bool = True,
    stop_event: Optional[asyncio.Event] = None,
    client: Optional[httpx.AsyncClient] = None,
    pdf_exporter: Optional[PdfExporter] = None,
    observer=None,
) -> list[ConversionResult]:
    """
    Convert every Markdown file, then optionally keep watching.

    The stylesheet is fetched before anything else; a fetch failure
    raises StylesheetFetchError before any output is written.

    Args:
        config: Application configuration
        watch: Keep watching after the initial batch
        stop_event: Event that ends watch mode; SIGINT/SIGTERM set it
            when not supplied
        client: Optional HTTP client for the stylesheet fetch
        pdf_exporter: Optional exporter (defaults to one built from config)
        observer: Optional watchdog observer

    Returns:
        Results of the initial batch
    """
    stylesheet = await load_stylesheet(config, client=client)

    exporter = pdf_exporter or PdfExporter(config.browser)
    async with exporter:
        converter = Converter(config, stylesheet, exporter)
        results = await converter.convert_all()

        if not watch:
            return results

        if stop_event is None:
            stop_event = asyncio.Event()
            install_stop_signals(stop_event)

        watcher = Watcher(
            config.paths.input_dir,
            converter.convert_file,
            debounce_seconds=config.watch.debounce_seconds,
            polling=config.watch.polling,
            observer=observer,
        )
        await watcher.run(stop_event)

    return results


async def build(
    config: AppConfig,
    client: Optional[httpx.AsyncClient] = None,
    pdf_exporter: Optional[PdfExporter] = None,
) -> list[ConversionResult]:
    """Convert every Markdown file once and return"""
    return await run(config, watch=False, client=client, pdf_exporter=pdf_exporter)
