"""
HTML rendering of a billing document.

Turns a Document and its computed totals into the A4 HTML surface that the
live preview displays and the export pipeline prints. The output is a
complete HTML document whose root element is ``#invoice-preview``; its styles
are inlined so the surface is self-describing.
"""

import functools

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from invoicegen.lib import paths
from invoicegen.models.document import Document
from invoicegen.services.tax_engine import DocumentTotals, compute_totals
from invoicegen.utils import format_amount, format_rate

TEMPLATE_NAME = "document.html.j2"
PRINT_TEMPLATE_NAME = "print.html.j2"
SURFACE_ID = "invoice-preview"

# A4 portrait
PAGE_WIDTH = "210mm"
PAGE_HEIGHT = "297mm"


@functools.cache
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(paths.templates_dir())),
        undefined=StrictUndefined,
        autoescape=select_autoescape(enabled_extensions=("html", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["amount"] = format_amount
    env.filters["rate"] = format_rate
    return env


def render_document(document: Document, totals: DocumentTotals | None = None) -> str:
    """
    Render a document to its printable HTML surface.

    Args:
        document: The document to render.
        totals: Precomputed totals; computed from the document when omitted.

    Returns:
        A complete HTML document string.
    """
    totals = totals or compute_totals(document)
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(
        document=document,
        totals=totals,
        rows=list(zip(document.items, totals.per_item)),
        parties=[
            ("Billed to:", document.billed_to, document.visibility.billed_to),
            ("From:", document.sender, document.visibility.sender),
        ],
    )


def render_print_document(title: str, styles: str, body: str) -> str:
    """
    Wrap a cloned surface in an isolated, print-styled HTML document.

    The page is fixed to A4 portrait with no margins, overflowing content is
    clipped, and colors are printed exactly as styled.

    Args:
        title: Document title, also used by print dialogs as the file name.
        styles: Stylesheet rules carried over from the surface.
        body: Serialized markup of the cloned surface element.

    Returns:
        A complete HTML document string.
    """
    template = _environment().get_template(PRINT_TEMPLATE_NAME)
    return template.render(
        title=title,
        styles=Markup(styles),
        body=Markup(body),
        page_width=PAGE_WIDTH,
        page_height=PAGE_HEIGHT,
    )
