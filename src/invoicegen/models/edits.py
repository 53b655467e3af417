"""
Typed edit operations on a Document.

Every function takes a Document and returns a new one; nothing is mutated in
place. Each sub-structure has its own setter with explicit keyword fields, so
callers never index into a record by a field name string. Keyword arguments
left as ``None`` keep their current value.
"""

from dataclasses import replace

from invoicegen.models.document import (
    TITLES,
    BankDetails,
    Document,
    DocumentType,
    Party,
    PricingMode,
    TaxSplit,
    Visibility,
    default_document,
    new_line_item,
)


def _changes(**values: object) -> dict:
    return {name: value for name, value in values.items() if value is not None}


def update_header(
    document: Document,
    *,
    logo_url: str | None = None,
    title: str | None = None,
    date: str | None = None,
    invoice_no: str | None = None,
    registration_id: str | None = None,
    payment_note: str | None = None,
) -> Document:
    """Return a copy with the given top-level text fields replaced."""
    return replace(
        document,
        **_changes(
            logo_url=logo_url,
            title=title,
            date=date,
            invoice_no=invoice_no,
            registration_id=registration_id,
            payment_note=payment_note,
        ),
    )


def set_pricing_mode(document: Document, mode: PricingMode) -> Document:
    return replace(document, pricing_mode=PricingMode(mode))


def set_tax_split(document: Document, split: TaxSplit) -> Document:
    return replace(document, tax_split=TaxSplit(split))


def set_document_type(document: Document, document_type: DocumentType) -> Document:
    """
    Switch between proforma and tax documents.

    A proforma always hides the invoice number and carries the proforma
    title; switching to a tax document shows the number and the tax title.
    """
    document_type = DocumentType(document_type)
    return replace(
        document,
        document_type=document_type,
        title=TITLES[document_type],
        visibility=replace(
            document.visibility,
            invoice_no=document_type is DocumentType.TAX,
        ),
    )


def _update_party(
    party: Party,
    name: str | None,
    address: str | None,
    tax_id: str | None,
) -> Party:
    return replace(party, **_changes(name=name, address=address, tax_id=tax_id))


def update_billed_to(
    document: Document,
    *,
    name: str | None = None,
    address: str | None = None,
    tax_id: str | None = None,
) -> Document:
    return replace(
        document, billed_to=_update_party(document.billed_to, name, address, tax_id)
    )


def update_sender(
    document: Document,
    *,
    name: str | None = None,
    address: str | None = None,
    tax_id: str | None = None,
) -> Document:
    return replace(
        document, sender=_update_party(document.sender, name, address, tax_id)
    )


def update_bank(
    document: Document,
    *,
    account_name: str | None = None,
    bank_name: str | None = None,
    account_no: str | None = None,
    ifsc: str | None = None,
    account_type: str | None = None,
) -> Document:
    bank: BankDetails = replace(
        document.bank,
        **_changes(
            account_name=account_name,
            bank_name=bank_name,
            account_no=account_no,
            ifsc=ifsc,
            account_type=account_type,
        ),
    )
    return replace(document, bank=bank)


def toggle_visibility(document: Document, block: str) -> Document:
    """Flip a single display flag."""
    if block not in Visibility.names():
        raise ValueError(f"Unknown display block: {block}")
    current = getattr(document.visibility, block)
    return replace(document, visibility=replace(document.visibility, **{block: not current}))


def set_visible_blocks(document: Document, blocks: list[str] | None) -> Document:
    """Show exactly the given blocks; unknown names are ignored."""
    visible = set(blocks or [])
    return replace(
        document,
        visibility=Visibility(**{name: name in visible for name in Visibility.names()}),
    )


def add_item(document: Document) -> Document:
    """Append a blank line item with a fresh id."""
    return replace(document, items=document.items + (new_line_item(),))


def remove_item(document: Document, item_id: str) -> Document:
    """Drop the line item with the given id; removing the last one is allowed."""
    return replace(
        document, items=tuple(item for item in document.items if item.id != item_id)
    )


def update_item(
    document: Document,
    item_id: str,
    *,
    description: str | None = None,
    value: float | None = None,
    hsn_code: str | None = None,
    tax_rate_percent: float | None = None,
) -> Document:
    """Return a copy with one line item's fields replaced."""
    changes = _changes(
        description=description,
        value=None if value is None else float(value),
        hsn_code=hsn_code,
        tax_rate_percent=None if tax_rate_percent is None else float(tax_rate_percent),
    )
    return replace(
        document,
        items=tuple(
            replace(item, **changes) if item.id == item_id else item
            for item in document.items
        ),
    )


def reset() -> Document:
    """Return the default document."""
    return default_document()
