import pytest

from invoicegen.models import edits
from invoicegen.models.document import (
    PROFORMA_TITLE,
    TAX_TITLE,
    Document,
    DocumentType,
    PricingMode,
    TaxSplit,
    Visibility,
)


def test_proforma_hides_invoice_no_and_forces_title(document):
    tax = edits.set_document_type(document, DocumentType.TAX)
    assert tax.visibility.invoice_no is True
    assert tax.title == TAX_TITLE

    proforma = edits.set_document_type(tax, DocumentType.PROFORMA)
    assert proforma.visibility.invoice_no is False
    assert proforma.title == PROFORMA_TITLE
    assert proforma.shows_invoice_no is False


def test_proforma_never_shows_invoice_no_even_when_flag_set(document):
    assert document.document_type is DocumentType.PROFORMA
    assert document.visibility.invoice_no is True
    assert document.shows_invoice_no is False


def test_edits_return_new_documents(document):
    before = document.to_dict()
    edited = edits.update_header(document, title="Quote", invoice_no="Q-1")

    assert edited is not document
    assert edited.title == "Quote"
    assert edited.invoice_no == "Q-1"
    assert document.to_dict() == before


def test_none_keeps_current_value(document):
    edited = edits.update_billed_to(document, name="Acme")
    assert edited.billed_to.name == "Acme"
    assert edited.billed_to.address == document.billed_to.address
    assert edited.billed_to.tax_id == document.billed_to.tax_id


def test_update_sender_and_bank(document):
    edited = edits.update_sender(document, tax_id="27ABCDE1234F1Z5")
    edited = edits.update_bank(edited, ifsc="SBIN0000001")
    assert edited.sender.tax_id == "27ABCDE1234F1Z5"
    assert edited.bank.ifsc == "SBIN0000001"
    assert edited.bank.bank_name == document.bank.bank_name


def test_pricing_mode_and_split_are_independent(document):
    edited = edits.set_pricing_mode(document, PricingMode.INCLUSIVE)
    assert edited.tax_split is document.tax_split
    edited = edits.set_tax_split(edited, TaxSplit.SINGLE)
    assert edited.pricing_mode is PricingMode.INCLUSIVE


def test_add_item_appends_fresh_item(document):
    first = edits.add_item(document)
    second = edits.add_item(first)
    new_items = second.items[len(document.items):]

    assert len(new_items) == 2
    assert new_items[0].id != new_items[1].id
    assert new_items[0].description == "New Service"
    assert new_items[0].value == 0
    assert new_items[0].hsn_code == ""
    assert new_items[0].tax_rate_percent == 18


def test_remove_last_item_is_allowed(document):
    (item,) = document.items
    emptied = edits.remove_item(document, item.id)
    assert emptied.items == ()


def test_update_item_targets_one_item(document):
    doc = edits.add_item(document)
    target = doc.items[-1]
    edited = edits.update_item(doc, target.id, value="2500", tax_rate_percent=12)

    assert edited.item(target.id).value == 2500.0
    assert edited.item(target.id).tax_rate_percent == 12.0
    assert edited.items[0] == doc.items[0]


def test_toggle_visibility(document):
    edited = edits.toggle_visibility(document, "bank")
    assert edited.visibility.bank is False
    assert edits.toggle_visibility(edited, "bank").visibility.bank is True


def test_toggle_unknown_block_raises(document):
    with pytest.raises(ValueError):
        edits.toggle_visibility(document, "signature")


def test_set_visible_blocks(document):
    edited = edits.set_visible_blocks(document, ["logo", "title", "unknown"])
    assert edited.visibility.visible_blocks() == ["logo", "title"]
    assert edits.set_visible_blocks(document, None).visibility.visible_blocks() == []


def test_document_dict_round_trip(document):
    doc = edits.set_document_type(edits.add_item(document), DocumentType.TAX)
    assert Document.from_dict(doc.to_dict()) == doc


def test_from_empty_dict_is_default():
    doc = Document.from_dict(None)
    assert doc.visibility == Visibility()
    assert doc.invoice_no == "CE/00/25-26"


def test_reset_returns_default(document):
    edited = edits.update_header(document, title="Changed")
    assert edits.reset().title == document.title
    assert edited.title == "Changed"
