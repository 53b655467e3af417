"""
Document editor form.

Every control carries a pattern-matching id so the callbacks can route a
change to the matching typed setter:

- ``{"type": "doc-field", "field": <key>}`` for document fields
- ``{"type": "item-field", "item": <id>, "field": <key>}`` for line items
- ``{"type": "remove-item", "item": <id>}`` for the per-item remove buttons

The form is rebuilt from the document whenever its structure changes (load,
reset, item added or removed, document type or logo picked). Plain field
edits never rebuild it, so typing keeps focus.
"""

from dash import dcc, html
from dash_iconify import DashIconify

from invoicegen.models.document import (
    LOGO_ASSETS,
    Document,
    DocumentType,
    LineItem,
    Party,
    PricingMode,
    TaxSplit,
)

_VISIBILITY_LABELS = {
    "logo": "Logo",
    "title": "Title",
    "date": "Date",
    "invoice_no": "Invoice number",
    "billed_to": "Billed to",
    "sender": "From",
    "bank": "Bank details",
    "registration_id": "UDYAM number",
    "payment_note": "Payment method",
}


def doc_field_id(field: str) -> dict:
    return {"type": "doc-field", "field": field}


def item_field_id(item_id: str, field: str) -> dict:
    return {"type": "item-field", "item": item_id, "field": field}


def build_editor(document: Document) -> html.Div:
    """
    Build the editor form for a document.

    Args:
        document: The document whose values populate the controls.

    Returns:
        Div containing all editor sections.
    """
    return html.Div(
        className="editor",
        children=[
            html.Div(
                className="editor-header",
                children=[html.H2("Invoice Editor")],
            ),
            html.Div(
                className="editor-body",
                children=[
                    _build_branding(document),
                    _build_tax_settings(document),
                    _build_details(document),
                    _party_section("Billed to", "billed_to", document.billed_to),
                    _party_section("From", "sender", document.sender),
                    _build_items(document.items),
                    _build_bank(document),
                    _build_display(document),
                ],
            ),
        ],
    )


def _build_branding(document: Document) -> html.Section:
    """Return the document type, logo and title controls."""
    known_logo = document.logo_url in {asset.path for asset in LOGO_ASSETS}
    return _section(
        "Branding & Header",
        [
            _labelled(
                "Invoice Type",
                dcc.RadioItems(
                    id="document-type",
                    options=[
                        {"label": "Proforma", "value": DocumentType.PROFORMA.value},
                        {"label": "Tax Invoice", "value": DocumentType.TAX.value},
                    ],
                    value=document.document_type.value,
                    className="segmented",
                    inline=True,
                ),
            ),
            _labelled(
                "Logo",
                dcc.Dropdown(
                    id="logo-choice",
                    options=[
                        {"label": asset.label, "value": asset.path}
                        for asset in LOGO_ASSETS
                    ]
                    + [{"label": "No logo", "value": ""}],
                    value=document.logo_url if known_logo or not document.logo_url else None,
                    placeholder="Custom URL",
                    clearable=False,
                ),
            ),
            _text_input("Custom logo URL", "logo_url", document.logo_url),
            _text_input("Title", "title", document.title),
        ],
    )


def _build_tax_settings(document: Document) -> html.Section:
    """Return the pricing mode and tax split toggles."""
    return _section(
        "GST",
        [
            _labelled(
                "Entered values are",
                dcc.RadioItems(
                    id=doc_field_id("pricing_mode"),
                    options=[
                        {"label": "Exclusive of GST", "value": PricingMode.EXCLUSIVE.value},
                        {"label": "Inclusive of GST", "value": PricingMode.INCLUSIVE.value},
                    ],
                    value=document.pricing_mode.value,
                    className="segmented",
                    inline=True,
                ),
            ),
            _labelled(
                "Show tax as",
                dcc.RadioItems(
                    id=doc_field_id("tax_split"),
                    options=[
                        {"label": "CGST + SGST", "value": TaxSplit.SPLIT.value},
                        {"label": "IGST", "value": TaxSplit.SINGLE.value},
                    ],
                    value=document.tax_split.value,
                    className="segmented",
                    inline=True,
                ),
            ),
        ],
    )


def _build_details(document: Document) -> html.Section:
    """Return the date, invoice number, UDYAM and payment fields."""
    return _section(
        "Details",
        [
            _text_input("Date", "date", document.date),
            _text_input(
                "Invoice no",
                "invoice_no",
                document.invoice_no,
                disabled=document.document_type is DocumentType.PROFORMA,
            ),
            _text_input("UDYAM number", "registration_id", document.registration_id),
            _text_input("Payment method", "payment_note", document.payment_note),
        ],
    )


def _party_section(title: str, prefix: str, party: Party) -> html.Section:
    return _section(
        title,
        [
            _text_input("Name", f"{prefix}.name", party.name),
            _labelled(
                "Address",
                dcc.Textarea(
                    id=doc_field_id(f"{prefix}.address"),
                    value=party.address,
                    className="textarea",
                    rows=3,
                ),
            ),
            _text_input("GSTIN", f"{prefix}.tax_id", party.tax_id),
        ],
    )


def _build_items(items: tuple[LineItem, ...]) -> html.Section:
    """Return the line item cards with the add button."""
    cards = [_item_card(index, item) for index, item in enumerate(items)]
    if not cards:
        cards = [html.Div("No items added yet.", className="empty-items")]
    return _section(
        "Items",
        [
            html.Div(className="stack", children=cards),
            html.Button(
                id="add-item",
                className="button ghost gap",
                children=[
                    DashIconify(icon="lucide:plus", className="button-icon"),
                    "Add Item",
                ],
            ),
        ],
    )


def _item_card(index: int, item: LineItem) -> html.Div:
    """Return the controls for one line item."""
    return html.Div(
        className="item-card",
        children=[
            html.Div(
                className="item-card-header",
                children=[
                    html.Span(f"#{index + 1}", className="muted"),
                    html.Button(
                        id={"type": "remove-item", "item": item.id},
                        className="icon-button danger",
                        title="Remove Item",
                        children=DashIconify(icon="lucide:trash-2"),
                    ),
                ],
            ),
            dcc.Input(
                id=item_field_id(item.id, "description"),
                value=item.description,
                placeholder="Item Description",
                className="input",
            ),
            html.Div(
                className="item-grid",
                children=[
                    _labelled(
                        "Value (₹)",
                        dcc.Input(
                            id=item_field_id(item.id, "value"),
                            type="number",
                            min=0,
                            value=item.value,
                            className="input",
                        ),
                    ),
                    _labelled(
                        "HSN Code",
                        dcc.Input(
                            id=item_field_id(item.id, "hsn_code"),
                            value=item.hsn_code,
                            className="input",
                        ),
                    ),
                    _labelled(
                        "GST Rate (%)",
                        dcc.Input(
                            id=item_field_id(item.id, "tax_rate_percent"),
                            type="number",
                            min=0,
                            value=item.tax_rate_percent,
                            className="input",
                        ),
                    ),
                ],
            ),
        ],
    )


def _build_bank(document: Document) -> html.Section:
    bank = document.bank
    return _section(
        "Bank Details",
        [
            _text_input("Account name", "bank.account_name", bank.account_name),
            _text_input("Bank", "bank.bank_name", bank.bank_name),
            _text_input("A/c no.", "bank.account_no", bank.account_no),
            _text_input("IFSC", "bank.ifsc", bank.ifsc),
            _text_input("A/c type", "bank.account_type", bank.account_type),
        ],
    )


def _build_display(document: Document) -> html.Section:
    """Return the checklist of optional blocks shown on the document."""
    return _section(
        "Show on document",
        [
            dcc.Checklist(
                id=doc_field_id("visibility"),
                options=[
                    {"label": label, "value": name}
                    for name, label in _VISIBILITY_LABELS.items()
                ],
                value=document.visibility.visible_blocks(),
                className="checklist",
            )
        ],
    )


def _section(title: str, children: list) -> html.Section:
    return html.Section(
        className="card editor-section",
        children=[html.H3(title, className="section-title"), *children],
    )


def _labelled(label: str, control) -> html.Div:
    return html.Div(
        className="field",
        children=[html.Label(label, className="label"), control],
    )


def _text_input(label: str, field: str, value: str, disabled: bool = False) -> html.Div:
    return _labelled(
        label,
        dcc.Input(
            id=doc_field_id(field),
            type="text",
            value=value,
            disabled=disabled,
            className="input",
        ),
    )
