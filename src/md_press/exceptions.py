"""
Errors raised by the md-press pipeline.
"""


class MdPressError(Exception):
    """Base class for md-press errors"""


class StylesheetFetchError(MdPressError):
    """Remote stylesheet could not be downloaded; fatal at startup"""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download CSS from {url}: {reason}")


class ExportError(MdPressError):
    """Headless browser failed to produce a PDF"""
