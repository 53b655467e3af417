"""
Export of the rendered document surface to a one-page PDF.

The pipeline reads a rendered HTML surface, the same one the preview shows.
Callers render it on the server from the Document; markup sent by a client
is never exported:

1. Clone the ``#invoice-preview`` element out of the surface.
2. Inline every remote ``http``/``https`` image as a ``data:`` URI so the PDF
   is self-contained and rendering never depends on live network fetches.
   Any other scheme, and any URL that does not parse, counts as a failed
   image. Fetches run concurrently and the pipeline waits for all of them to
   settle; an image that fails is logged and keeps its original URL.
3. Wrap the clone in an isolated print document carrying the surface's
   stylesheet rules and fixed A4 page rules.
4. Hand it to the document renderer and check that a PDF came back.

Every failure surfaces as ``ExportError``; the caller reports it once and
never presents partial output as a successful export.
"""

import base64
import mimetypes
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable
from urllib.parse import urljoin, urlsplit

import requests
from bs4 import BeautifulSoup

from invoicegen.errors import ExportError, ImageFetchError
from invoicegen.lib import logs
from invoicegen.lib.caches import ImageCache
from invoicegen.rendering import SURFACE_ID, render_print_document
from invoicegen.utils import safe_filename_part

LOG = logs.logger(__file__)

Renderer = Callable[[str, str | None], bytes]

PDF_MAGIC = b"%PDF"
DEFAULT_TIMEOUT = 10.0
DEFAULT_WORKERS = 4
FETCHABLE_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ExportResult:
    """A finished export ready to be offered as a download."""

    filename: str
    content: bytes


def export_filename(invoice_no: str, date: str) -> str:
    """
    Derive the PDF file name from the invoice number and date.

    Whitespace and path-unsafe characters such as '/' are replaced with
    hyphens, so ``CE/00/25-26`` and ``17 October 2026`` give
    ``Invoice-CE-00-25-26-17-October-2026.pdf``.

    Args:
        invoice_no: Invoice number as entered.
        date: Display date as entered.

    Returns:
        The file name, always ending in ``.pdf``.
    """
    parts = [safe_filename_part(invoice_no), safe_filename_part(date)]
    return "-".join(["Invoice", *[part for part in parts if part]]) + ".pdf"


class ImageInliner:
    """
    Converts image URLs to ``data:`` URIs, backed by the session image cache.

    Attributes:
        cache: Append-only cache shared by all exports of the session.
        timeout: Seconds allowed per image fetch.
        max_workers: Upper bound on concurrent fetches.
    """

    def __init__(
        self,
        cache: ImageCache,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = DEFAULT_WORKERS,
    ) -> None:
        self.cache = cache
        self.timeout = timeout
        self.max_workers = max(max_workers, 1)
        self._session = session or requests.Session()

    def fetch_data_uri(self, url: str) -> str:
        """
        Download an image and encode it as a data URI.

        Args:
            url: Absolute image URL.

        Returns:
            ``data:<mime>;base64,<payload>`` string.

        Raises:
            ImageFetchError: On a non-HTTP URL or any network, HTTP or
                            content-type failure.
        """
        try:
            scheme = urlsplit(url).scheme.lower()
        except ValueError as exc:
            raise ImageFetchError(url, str(exc)) from exc
        if scheme not in FETCHABLE_SCHEMES:
            raise ImageFetchError(url, f"unsupported scheme {scheme or 'none'!r}")

        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ImageFetchError(url, str(exc)) from exc

        mime = response.headers.get("Content-Type", "").split(";", 1)[0].strip()
        if not mime:
            mime = mimetypes.guess_type(url)[0] or ""
        if not mime.startswith("image/"):
            raise ImageFetchError(url, f"unexpected content type {mime or 'unknown'!r}")

        payload = base64.b64encode(response.content).decode("ascii")
        return f"data:{mime};base64,{payload}"

    def inline(self, url: str) -> str:
        """Return the data URI for an image, fetching only on a cache miss."""
        if url.startswith("data:"):
            return url
        return self.cache.get_or_load(url, lambda: self.fetch_data_uri(url)).value

    def inline_all(self, urls: Iterable[str]) -> dict[str, str]:
        """
        Inline a set of images concurrently.

        Waits until every fetch has either succeeded or failed. Failures are
        logged and left out of the result so the caller keeps the original
        reference.

        Args:
            urls: Absolute image URLs; duplicates are fetched once.

        Returns:
            Mapping of URL to data URI for the images that were inlined.
        """
        pending = list(dict.fromkeys(urls))
        if not pending:
            return {}

        inlined: dict[str, str] = {}
        workers = min(self.max_workers, len(pending))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.inline, url): url for url in pending}
            for future in as_completed(futures):
                url = futures[future]
                try:
                    inlined[url] = future.result()
                except Exception as exc:
                    LOG.warning("Failed to convert image to base64: %s (%s)", url, exc)
        return inlined


class ExportPipeline:
    """
    Turns the rendered document surface into a single-page PDF.

    Attributes:
        inliner: Image inliner holding the session image cache.
    """

    def __init__(self, inliner: ImageInliner, renderer: Renderer | None = None) -> None:
        """
        Initialize the pipeline.

        Args:
            inliner: Image inliner used before rendering.
            renderer: Callable turning print HTML (and a base URL) into PDF
                      bytes. Defaults to the WeasyPrint renderer.
        """
        self.inliner = inliner
        if renderer is None:
            from invoicegen.services.pdf_renderer import render_pdf

            renderer = render_pdf
        self._renderer = renderer

    def prepare(self, surface: str, title: str, base_url: str | None = None) -> str:
        """
        Build the self-contained print document for a rendered surface.

        Args:
            surface: Complete HTML of the rendered document.
            title: Title of the print document.
            base_url: Page URL used to resolve relative image references.

        Returns:
            Print-ready HTML with images inlined where possible.

        Raises:
            ExportError: If the surface has no document element.
        """
        clone = BeautifulSoup(surface, "html.parser")
        root = clone.find(id=SURFACE_ID)
        if root is None:
            raise ExportError(f"Element with id {SURFACE_ID} not found")

        images = [img for img in root.find_all("img") if img.get("src")]
        sources: dict[str, str] = {}
        for img in images:
            resolved = self._resolve(img["src"], base_url)
            if resolved is not None:
                sources[img["src"]] = resolved
        inlined = self.inliner.inline_all(
            url for url in sources.values() if not url.startswith("data:")
        )
        for img in images:
            data_uri = inlined.get(sources.get(img["src"], ""))
            if data_uri:
                img["src"] = data_uri

        styles = "\n".join(
            style.string for style in clone.find_all("style") if style.string
        )
        return render_print_document(title=title, styles=styles, body=str(root))

    def export(
        self,
        surface: str,
        *,
        invoice_no: str,
        date: str,
        base_url: str | None = None,
    ) -> ExportResult:
        """
        Export the rendered surface as a PDF.

        Args:
            surface: Complete HTML of the rendered document.
            invoice_no: Invoice number used for the file name.
            date: Document date used for the file name.
            base_url: Page URL used to resolve relative references.

        Returns:
            ExportResult with the file name and PDF bytes.

        Raises:
            ExportError: If any stage fails or the renderer returns no PDF.
        """
        filename = export_filename(invoice_no, date)
        LOG.info("Exporting %s", filename)
        try:
            html = self.prepare(surface, filename.removesuffix(".pdf"), base_url)
            content = self._renderer(html, base_url)
        except ExportError:
            raise
        except Exception as exc:
            raise ExportError(f"Failed to generate {filename}: {exc}") from exc

        if not content or not content.startswith(PDF_MAGIC):
            raise ExportError(f"Renderer returned no PDF data for {filename}")
        LOG.info("Exported %s (%d bytes)", filename, len(content))
        return ExportResult(filename=filename, content=content)

    @staticmethod
    def _resolve(src: str, base_url: str | None) -> str | None:
        """Return the absolute URL of an image, or None when it cannot be parsed."""
        if src.startswith("data:") or not base_url:
            return src
        try:
            return urljoin(base_url, src)
        except ValueError as exc:
            LOG.warning("Failed to convert image to base64: %s (%s)", src, exc)
            return None
