"""
Billing document domain models and serialization helpers.

The Document is the single source of truth for everything the editor, the
preview and the share link show. The hierarchy is:

    Document
    ├── Party (billed_to, sender)
    ├── LineItem[] (description, value, HSN code, tax rate)
    ├── BankDetails
    └── Visibility (one flag per optional display block)

All models are frozen dataclasses: an edit always produces a new Document
(see ``invoicegen.models.edits``) and nested values are never mutated in
place. ``to_dict``/``from_dict`` convert to the JSON-compatible shape kept in
``dcc.Store``.
"""

import uuid
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Mapping


class PricingMode(str, Enum):
    """Whether a line value is entered before or including tax."""

    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"


class TaxSplit(str, Enum):
    """How the tax amount is presented: two halves or one combined figure."""

    SPLIT = "cgst_sgst"
    SINGLE = "igst"


class DocumentType(str, Enum):
    """Document subtype; only the title and invoice number display differ."""

    PROFORMA = "PROFORMA"
    TAX = "TAX"


PROFORMA_TITLE = "PROFORMA INVOICE"
TAX_TITLE = "TAX INVOICE"

TITLES: dict[DocumentType, str] = {
    DocumentType.PROFORMA: PROFORMA_TITLE,
    DocumentType.TAX: TAX_TITLE,
}


@dataclass(frozen=True, slots=True)
class LogoAsset:
    """A logo bundled with the application."""

    alias: str
    label: str
    path: str


# Order is the order of the logo picker in the editor.
LOGO_ASSETS: tuple[LogoAsset, ...] = (
    LogoAsset("creo", "Creo Elements", "/assets/logos/creo-logo.svg"),
    LogoAsset("little", "Little Things", "/assets/logos/little-things-cute.svg"),
    LogoAsset("artangle90", "ArtAngle90", "/assets/logos/artangle90.svg"),
    LogoAsset("storeeva", "StoreEva", "/assets/logos/storeeva.svg"),
)

DEFAULT_LOGO_URL = LOGO_ASSETS[0].path

NEW_ITEM_DESCRIPTION = "New Service"
NEW_ITEM_TAX_RATE = 18.0


@dataclass(frozen=True, slots=True)
class Party:
    """An entity on the document: who is billed, or who is billing."""

    name: str = ""
    address: str = ""
    tax_id: str = ""

    @property
    def address_lines(self) -> list[str]:
        """Return the multi-line address split for display."""
        return self.address.splitlines()


@dataclass(frozen=True, slots=True)
class LineItem:
    """A single billed line; ``value`` is pre-tax or tax-inclusive per pricing mode."""

    id: str
    description: str = ""
    value: float = 0.0
    hsn_code: str = ""
    tax_rate_percent: float = 0.0


@dataclass(frozen=True, slots=True)
class BankDetails:
    """Payee bank account printed in the payment section."""

    account_name: str = ""
    bank_name: str = ""
    account_no: str = ""
    ifsc: str = ""
    account_type: str = ""


@dataclass(frozen=True, slots=True)
class Visibility:
    """
    Display flags for the optional blocks of the rendered document.

    Flags only control rendering, never computation.
    """

    logo: bool = True
    title: bool = True
    date: bool = True
    invoice_no: bool = True
    billed_to: bool = True
    sender: bool = True
    bank: bool = True
    registration_id: bool = True
    payment_note: bool = True

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the flag names in declaration order."""
        return tuple(f.name for f in fields(cls))

    def visible_blocks(self) -> list[str]:
        """Return the names of the blocks that are switched on."""
        return [name for name in self.names() if getattr(self, name)]


@dataclass(frozen=True, slots=True)
class Document:
    """The complete, serializable state of one billing document."""

    logo_url: str
    title: str
    date: str
    invoice_no: str
    pricing_mode: PricingMode
    tax_split: TaxSplit
    billed_to: Party
    sender: Party
    items: tuple[LineItem, ...]
    bank: BankDetails
    registration_id: str
    payment_note: str
    document_type: DocumentType
    visibility: Visibility = field(default_factory=Visibility)

    @property
    def shows_invoice_no(self) -> bool:
        """Return True when the invoice number is rendered."""
        return self.visibility.invoice_no and self.document_type is DocumentType.TAX

    def item(self, item_id: str) -> LineItem | None:
        """Return the line item with the given id, if present."""
        return next((item for item in self.items if item.id == item_id), None)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        data = asdict(self)
        data["pricing_mode"] = self.pricing_mode.value
        data["tax_split"] = self.tax_split.value
        data["document_type"] = self.document_type.value
        data["items"] = [asdict(item) for item in self.items]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Document":
        """Deserialize from a dictionary produced by ``to_dict``."""
        if not data:
            return default_document()
        return cls(
            logo_url=data["logo_url"],
            title=data["title"],
            date=data["date"],
            invoice_no=data["invoice_no"],
            pricing_mode=PricingMode(data["pricing_mode"]),
            tax_split=TaxSplit(data["tax_split"]),
            billed_to=Party(**data["billed_to"]),
            sender=Party(**data["sender"]),
            items=tuple(
                LineItem(
                    id=item["id"],
                    description=item["description"],
                    value=float(item["value"]),
                    hsn_code=item["hsn_code"],
                    tax_rate_percent=float(item["tax_rate_percent"]),
                )
                for item in data["items"]
            ),
            bank=BankDetails(**data["bank"]),
            registration_id=data["registration_id"],
            payment_note=data["payment_note"],
            document_type=DocumentType(data["document_type"]),
            visibility=Visibility(**data["visibility"]),
        )


def new_item_id() -> str:
    """Return a fresh identifier for a line item."""
    return uuid.uuid4().hex


def new_line_item() -> LineItem:
    """Return the blank line item appended by the editor's add button."""
    return LineItem(
        id=new_item_id(),
        description=NEW_ITEM_DESCRIPTION,
        value=0.0,
        hsn_code="",
        tax_rate_percent=NEW_ITEM_TAX_RATE,
    )


def today_label(now: datetime | None = None) -> str:
    """Return a date in the display format used by new documents, e.g. 05 March 2026."""
    return (now or datetime.now()).strftime("%d %B %Y")


def default_document() -> Document:
    """Return the document shown on a fresh visit and after a reset."""
    return Document(
        logo_url=DEFAULT_LOGO_URL,
        title=PROFORMA_TITLE,
        date=today_label(),
        invoice_no="CE/00/25-26",
        pricing_mode=PricingMode.EXCLUSIVE,
        tax_split=TaxSplit.SPLIT,
        billed_to=Party(
            name="Trupsel",
            address="93. D.Dalamal Park,\nCuffe Parade,\nMumbai 400005",
            tax_id="27AKIPB8270H1Z3",
        ),
        sender=Party(
            name="CREO Elements LLP",
            address=(
                "Office no 10, Mulchand Mansion,\n"
                "Old Hanuman Lane, Princess\n"
                "Street, Mumbai - 400002"
            ),
            tax_id="27AARFC8016B1ZJ",
        ),
        items=(
            LineItem(
                id="1",
                description="Website maintenance charges",
                value=10000.0,
                hsn_code="998315",
                tax_rate_percent=18.0,
            ),
        ),
        bank=BankDetails(
            account_name="CREO ELEMENTS LLP",
            bank_name="HDFC Bank Ltd.",
            account_no="50200071934304",
            ifsc="HDFC0000080",
            account_type="Current Account",
        ),
        registration_id="UDYAM-MH-19-0215995",
        payment_note="100% advance",
        document_type=DocumentType.PROFORMA,
        visibility=Visibility(),
    )
