"""Rendering of documents into their printable HTML surface."""

from invoicegen.rendering.document import (
    PAGE_HEIGHT,
    PAGE_WIDTH,
    SURFACE_ID,
    render_document,
    render_print_document,
)

__all__ = [
    "PAGE_HEIGHT",
    "PAGE_WIDTH",
    "SURFACE_ID",
    "render_document",
    "render_print_document",
]
