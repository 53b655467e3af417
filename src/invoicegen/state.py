"""
Editor state transitions for the invoicegen application.

The Dash callbacks in ``invoicegen.callbacks`` are thin: they unpack the
store, call one of the functions here, and pack the result. Keeping the
transitions here makes them testable without a running app.

The URL is synchronised in one direction only. ``initial_state`` decodes the
query string once at startup; afterwards ``url_search`` turns each new state
into the query string to write, and nothing reads the address bar again.
"""

import functools
import os
from typing import Any, Callable

from invoicegen.lib import logs, paths
from invoicegen.lib.caches import ImageCache
from invoicegen.models import edits
from invoicegen.models.common import EditorState, Origin
from invoicegen.models.document import (
    Document,
    DocumentType,
    PricingMode,
    TaxSplit,
)
from invoicegen.services import state_codec
from invoicegen.services.export import (
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
    ExportPipeline,
    ImageInliner,
)

LOG = logs.logger(__file__)

APP_TITLE = os.getenv("INVOICEGEN_TITLE", "Invoice Generator")
SHARE_LABEL = "Share"
SHARE_COPIED_LABEL = "Link copied!"
EXPORT_FAILED_MESSAGE = "Failed to generate PDF. Please try again."
RESET_CONFIRM_MESSAGE = "Are you sure you want to reset all fields to default?"

_IMAGE_CACHE_DIR = os.getenv(
    "INVOICEGEN_IMAGE_CACHE_DIR", str(paths.temp_dir() / "invoicegen_images")
)
_FETCH_TIMEOUT = float(os.getenv("INVOICEGEN_FETCH_TIMEOUT", str(DEFAULT_TIMEOUT)))
_FETCH_WORKERS = int(os.getenv("INVOICEGEN_FETCH_WORKERS", str(DEFAULT_WORKERS)))


@functools.cache
def get_export_pipeline() -> ExportPipeline:
    """Return the export pipeline for this application session (lazy loaded)."""
    LOG.info(
        "get_export_pipeline - cache_dir:%s timeout:%s workers:%s",
        _IMAGE_CACHE_DIR,
        _FETCH_TIMEOUT,
        _FETCH_WORKERS,
    )
    inliner = ImageInliner(
        ImageCache(_IMAGE_CACHE_DIR),
        timeout=_FETCH_TIMEOUT,
        max_workers=_FETCH_WORKERS,
    )
    return ExportPipeline(inliner)


def initial_state(search: str | None) -> EditorState:
    """
    Decode the startup query string into the initial editor state.

    A query string without ``invoiceNo`` is a fresh visit and yields the
    default document.
    """
    document = state_codec.from_query_string(search)
    if document is None:
        return EditorState(origin=Origin.DEFAULT)
    LOG.info("Loaded shared document %s", document.invoice_no)
    return EditorState(document=document, origin=Origin.LINK)


def url_search(state: EditorState) -> str:
    """Return the ``location.search`` value that mirrors the given state."""
    if state.origin is Origin.RESET:
        return ""
    return f"?{state_codec.to_query_string(state.document)}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _number(value: Any) -> float:
    # Empty or invalid numeric inputs arrive as None and count as zero.
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


FieldSetter = Callable[[Document, Any], Document]

FIELD_SETTERS: dict[str, FieldSetter] = {
    "logo_url": lambda d, v: edits.update_header(d, logo_url=_text(v)),
    "title": lambda d, v: edits.update_header(d, title=_text(v)),
    "date": lambda d, v: edits.update_header(d, date=_text(v)),
    "invoice_no": lambda d, v: edits.update_header(d, invoice_no=_text(v)),
    "registration_id": lambda d, v: edits.update_header(d, registration_id=_text(v)),
    "payment_note": lambda d, v: edits.update_header(d, payment_note=_text(v)),
    "pricing_mode": lambda d, v: edits.set_pricing_mode(d, PricingMode(v)),
    "tax_split": lambda d, v: edits.set_tax_split(d, TaxSplit(v)),
    "visibility": lambda d, v: edits.set_visible_blocks(d, v),
    "billed_to.name": lambda d, v: edits.update_billed_to(d, name=_text(v)),
    "billed_to.address": lambda d, v: edits.update_billed_to(d, address=_text(v)),
    "billed_to.tax_id": lambda d, v: edits.update_billed_to(d, tax_id=_text(v)),
    "sender.name": lambda d, v: edits.update_sender(d, name=_text(v)),
    "sender.address": lambda d, v: edits.update_sender(d, address=_text(v)),
    "sender.tax_id": lambda d, v: edits.update_sender(d, tax_id=_text(v)),
    "bank.account_name": lambda d, v: edits.update_bank(d, account_name=_text(v)),
    "bank.bank_name": lambda d, v: edits.update_bank(d, bank_name=_text(v)),
    "bank.account_no": lambda d, v: edits.update_bank(d, account_no=_text(v)),
    "bank.ifsc": lambda d, v: edits.update_bank(d, ifsc=_text(v)),
    "bank.account_type": lambda d, v: edits.update_bank(d, account_type=_text(v)),
}

ItemSetter = Callable[[Document, str, Any], Document]

ITEM_SETTERS: dict[str, ItemSetter] = {
    "description": lambda d, i, v: edits.update_item(d, i, description=_text(v)),
    "value": lambda d, i, v: edits.update_item(d, i, value=_number(v)),
    "hsn_code": lambda d, i, v: edits.update_item(d, i, hsn_code=_text(v)),
    "tax_rate_percent": lambda d, i, v: edits.update_item(
        d, i, tax_rate_percent=_number(v)
    ),
}


def _edited(state: EditorState, document: Document) -> EditorState | None:
    if document == state.document:
        return None
    return EditorState(document=document, origin=Origin.EDIT)


def apply_field_edit(state: EditorState, field: str, value: Any) -> EditorState | None:
    """
    Apply a form field change.

    Args:
        state: Current editor state.
        field: Field key, e.g. ``"title"`` or ``"bank.ifsc"``.
        value: New value from the form control.

    Returns:
        The new state, or None when the change is a no-op.

    Raises:
        KeyError: For an unknown field key.
    """
    return _edited(state, FIELD_SETTERS[field](state.document, value))


def apply_item_edit(
    state: EditorState, item_id: str, field: str, value: Any
) -> EditorState | None:
    """Apply a change to one line item's field; None when nothing changed."""
    return _edited(state, ITEM_SETTERS[field](state.document, item_id, value))


def add_item(state: EditorState) -> EditorState:
    return EditorState(document=edits.add_item(state.document), origin=Origin.EDIT)


def remove_item(state: EditorState, item_id: str) -> EditorState | None:
    return _edited(state, edits.remove_item(state.document, item_id))


def select_document_type(state: EditorState, value: str) -> EditorState | None:
    """Switch the document type, applying the title and invoice number rules."""
    document_type = DocumentType(value)
    if document_type is state.document.document_type:
        return None
    return _edited(state, edits.set_document_type(state.document, document_type))


def select_logo(state: EditorState, logo_url: str | None) -> EditorState | None:
    """Pick a bundled logo; an empty value means no logo."""
    return _edited(state, edits.update_header(state.document, logo_url=logo_url or ""))


def reset_state() -> EditorState:
    """Return the state after a confirmed reset."""
    return EditorState(document=edits.reset(), origin=Origin.RESET)


def share_link(state: EditorState, page_url: str) -> str:
    """Return the shareable link for the current document."""
    return state_codec.share_url(page_url, state.document)
