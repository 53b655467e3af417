import pytest

from invoicegen.services.export import export_filename
from invoicegen.utils import format_amount, format_currency, format_rate


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0"),
        (999, "999"),
        (1000, "1,000"),
        (11800, "11,800"),
        (123456, "1,23,456"),
        (1234567.89, "12,34,567"),
        (100000000, "10,00,00,000"),
        (8474.99, "8,474"),
        (-8474.99, "-8,474"),
        (-0.5, "0"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


def test_format_currency():
    assert format_currency(11800) == "₹ 11,800"


@pytest.mark.parametrize("rate,expected", [(18, "18%"), (9.0, "9%"), (2.5, "2.5%"), (0, "0%")])
def test_format_rate(rate, expected):
    assert format_rate(rate) == expected


@pytest.mark.parametrize(
    "invoice_no,date,expected",
    [
        ("CE/00/25-26", "17 October 2026", "Invoice-CE-00-25-26-17-October-2026.pdf"),
        ("INV 1", "", "Invoice-INV-1.pdf"),
        ("", "2026-10-17", "Invoice-2026-10-17.pdf"),
        ("", "", "Invoice.pdf"),
        ('a:b*c?"d"<e>|f\\g', "x", "Invoice-a-b-c-d-e-f-g-x.pdf"),
    ],
)
def test_export_filename(invoice_no, date, expected):
    assert export_filename(invoice_no, date) == expected
