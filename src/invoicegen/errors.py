"""Exception types raised by the invoicegen core."""


class InvoicegenError(Exception):
    """Base class for all invoicegen errors."""


class ImageFetchError(InvoicegenError):
    """An image could not be fetched or converted to a data URI."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch image {url}: {reason}")
        self.url = url
        self.reason = reason


class ExportError(InvoicegenError):
    """The rendered document could not be turned into a PDF."""
