"""
PDF rendering of print-ready HTML through WeasyPrint.

This is the document renderer the export pipeline hands its isolated print
document to. Page size and margins come from the document's own ``@page``
rules; the stylesheet below pins them again so a surface that forgets them
still comes out as a single A4 portrait page.

Images have already been inlined by the pipeline. WeasyPrint itself only
resolves ``data:`` URIs; any other reference (``http``, ``file``, attachment
links) is refused and left out of the PDF.
"""

from weasyprint import CSS, HTML, default_url_fetcher

from invoicegen.lib import logs
from invoicegen.rendering import PAGE_HEIGHT, PAGE_WIDTH

LOG = logs.logger(__file__)

_PAGE_RULES = f"@page {{ size: {PAGE_WIDTH} {PAGE_HEIGHT}; margin: 0; }}"


def data_only_fetcher(url: str, *args, **kwargs) -> dict:
    """
    WeasyPrint URL fetcher that resolves ``data:`` URIs only.

    Raises:
        ValueError: For every other URL; WeasyPrint logs it and skips the resource.
    """
    if not url.startswith("data:"):
        LOG.warning("Refusing to fetch %s while rendering PDF", url)
        raise ValueError(f"Refusing to fetch {url}")
    return default_url_fetcher(url, *args, **kwargs)


def render_pdf(html: str, base_url: str | None = None) -> bytes:
    """
    Render an HTML document to PDF bytes.

    Args:
        html: Complete print document.
        base_url: Base for resolving any relative references left in the markup.

    Returns:
        The PDF file contents.
    """
    document = HTML(
        string=html, base_url=base_url, url_fetcher=data_only_fetcher
    ).render(stylesheets=[CSS(string=_PAGE_RULES)])
    # Only the first page is kept: the artifact is a single fixed-size page.
    return document.copy(document.pages[:1]).write_pdf()
