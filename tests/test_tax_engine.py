from dataclasses import replace

import pytest

from invoicegen.models.document import LineItem, PricingMode, TaxSplit
from invoicegen.services.tax_engine import (
    compute_totals,
    line_breakdown,
    split_line,
    tax_components,
)

ALL_MODES = [
    (mode, split) for mode in PricingMode for split in TaxSplit
]


def _with_items(document, *items, mode=PricingMode.EXCLUSIVE, split=TaxSplit.SPLIT):
    return replace(document, items=tuple(items), pricing_mode=mode, tax_split=split)


def _item(item_id, value, rate):
    return LineItem(id=item_id, description=item_id, value=value, tax_rate_percent=rate)


def test_exclusive_line_adds_tax_on_top():
    assert split_line(10000, 18, PricingMode.EXCLUSIVE) == pytest.approx((10000, 1800, 11800))


def test_inclusive_line_extracts_tax():
    base, tax, total = split_line(11800, 18, PricingMode.INCLUSIVE)
    assert base == pytest.approx(10000)
    assert tax == pytest.approx(1800)
    assert total == 11800


def test_modes_agree_on_equivalent_values(document):
    exclusive = compute_totals(
        _with_items(document, _item("a", 10000, 18), mode=PricingMode.EXCLUSIVE)
    )
    inclusive = compute_totals(
        _with_items(document, _item("a", 11800, 18), mode=PricingMode.INCLUSIVE)
    )

    assert exclusive.subtotal == pytest.approx(10000)
    assert exclusive.total_tax == pytest.approx(1800)
    assert exclusive.total_amount == pytest.approx(11800)
    assert inclusive.subtotal == pytest.approx(exclusive.subtotal)
    assert inclusive.total_tax == pytest.approx(exclusive.total_tax)
    assert inclusive.total_amount == pytest.approx(exclusive.total_amount)


@pytest.mark.parametrize("mode,split", ALL_MODES)
def test_total_is_subtotal_plus_tax(document, mode, split):
    doc = _with_items(
        document,
        _item("a", 1234.56, 18),
        _item("b", 999.99, 5),
        _item("c", 50, 0),
        _item("d", -200, 12),
        mode=mode,
        split=split,
    )
    totals = compute_totals(doc)
    assert totals.total_amount == pytest.approx(totals.subtotal + totals.total_tax)


@pytest.mark.parametrize("mode", list(PricingMode))
def test_split_presentation_does_not_change_tax(document, mode):
    items = (_item("a", 10000, 18), _item("b", 2500, 12))
    split = compute_totals(_with_items(document, *items, mode=mode, split=TaxSplit.SPLIT))
    single = compute_totals(_with_items(document, *items, mode=mode, split=TaxSplit.SINGLE))

    assert split.total_tax == pytest.approx(single.total_tax)
    assert sum(c.amount for c in split.components) == pytest.approx(single.total_tax)
    assert single.components[0].amount == pytest.approx(single.total_tax)


def test_split_components_halve_rate_and_amount():
    cgst, sgst = tax_components(1800, 18, TaxSplit.SPLIT)
    assert (cgst.label, cgst.rate, cgst.amount) == ("CGST", 9, 900)
    assert (sgst.label, sgst.rate, sgst.amount) == ("SGST", 9, 900)


def test_single_component_carries_full_rate():
    (igst,) = tax_components(1800, 18, TaxSplit.SINGLE)
    assert (igst.label, igst.rate, igst.amount) == ("IGST", 18, 1800)


@pytest.mark.parametrize("mode", list(PricingMode))
def test_zero_rate_has_no_tax(mode):
    line = line_breakdown(_item("a", 500, 0), mode, TaxSplit.SPLIT)
    assert line.base == 500
    assert line.tax == 0
    assert line.line_total == 500


@pytest.mark.parametrize("mode,split", ALL_MODES)
def test_empty_document_totals_to_zero(document, mode, split):
    totals = compute_totals(_with_items(document, mode=mode, split=split))
    assert totals.subtotal == 0
    assert totals.total_tax == 0
    assert totals.total_amount == 0
    assert totals.per_item == ()


def test_negative_values_propagate_linearly():
    base, tax, total = split_line(-1000, 18, PricingMode.EXCLUSIVE)
    assert (base, tax, total) == pytest.approx((-1000, -180, -1180))


def test_component_labels_follow_split(document):
    assert compute_totals(document).component_labels == ("CGST", "SGST")
    single = replace(document, tax_split=TaxSplit.SINGLE)
    assert compute_totals(single).component_labels == ("IGST",)


def test_per_item_breakdown_keeps_item_order(document):
    doc = _with_items(document, _item("x", 100, 18), _item("y", 200, 5))
    assert [line.item_id for line in compute_totals(doc).per_item] == ["x", "y"]


def test_compute_totals_does_not_touch_document(document):
    before = document.to_dict()
    compute_totals(document)
    assert document.to_dict() == before
