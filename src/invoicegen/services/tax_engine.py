"""
Tax computation for billing documents.

Derives per-line and document-level tax breakdowns from a Document. The
engine is pure: it reads the document and returns new values, never touching
the document itself.

Two independent switches drive the output:

- ``PricingMode`` decides how a line value is split into base and tax.
- ``TaxSplit`` decides how the tax is presented: CGST + SGST halves at
  half the rate each, or a single IGST figure at the full rate.

No rounding happens here. Amounts are rounded only when formatted for
display (see ``invoicegen.utils.format_amount``).
"""

from dataclasses import dataclass

from invoicegen.models.document import Document, LineItem, PricingMode, TaxSplit

SPLIT_LABELS = ("CGST", "SGST")
SINGLE_LABEL = "IGST"


@dataclass(frozen=True, slots=True)
class TaxComponent:
    """One presented tax figure, e.g. ``CGST 9% = 900``."""

    label: str
    rate: float
    amount: float


@dataclass(frozen=True, slots=True)
class LineBreakdown:
    """Computed figures for a single line item."""

    item_id: str
    rate: float
    base: float
    tax: float
    line_total: float
    components: tuple[TaxComponent, ...]


@dataclass(frozen=True, slots=True)
class DocumentTotals:
    """Aggregated figures for a whole document."""

    subtotal: float
    total_tax: float
    total_amount: float
    per_item: tuple[LineBreakdown, ...]
    components: tuple[TaxComponent, ...]

    @property
    def component_labels(self) -> tuple[str, ...]:
        """Return the column headings for the tax table."""
        return tuple(component.label for component in self.components)


def split_line(value: float, rate: float, mode: PricingMode) -> tuple[float, float, float]:
    """
    Split a line value into ``(base, tax, line_total)``.

    Args:
        value: Entered line value.
        rate: Tax rate in percent.
        mode: Whether ``value`` excludes or includes tax.

    Returns:
        Tuple of base amount, tax amount and line total.
    """
    if mode is PricingMode.EXCLUSIVE:
        tax = value * (rate / 100)
        return value, tax, value + tax
    base = value / (1 + rate / 100)
    return base, value - base, value


def tax_components(tax: float, rate: float, split: TaxSplit) -> tuple[TaxComponent, ...]:
    """Present a tax amount as CGST/SGST halves or as a single IGST figure."""
    if split is TaxSplit.SPLIT:
        return tuple(TaxComponent(label, rate / 2, tax / 2) for label in SPLIT_LABELS)
    return (TaxComponent(SINGLE_LABEL, rate, tax),)


def line_breakdown(item: LineItem, mode: PricingMode, split: TaxSplit) -> LineBreakdown:
    base, tax, line_total = split_line(item.value, item.tax_rate_percent, mode)
    return LineBreakdown(
        item_id=item.id,
        rate=item.tax_rate_percent,
        base=base,
        tax=tax,
        line_total=line_total,
        components=tax_components(tax, item.tax_rate_percent, split),
    )


def compute_totals(document: Document) -> DocumentTotals:
    """
    Compute the subtotal, tax and grand total of a document.

    Exclusive pricing sums the bases and the taxes and adds them up;
    inclusive pricing sums the entered totals and the derived bases and takes
    the difference as tax. Either way ``total_amount == subtotal + total_tax``
    and an empty item list totals to zero.

    Args:
        document: The document to compute.

    Returns:
        DocumentTotals with per-item breakdowns and aggregate tax components.
    """
    mode, split = document.pricing_mode, document.tax_split
    per_item = tuple(line_breakdown(item, mode, split) for item in document.items)

    if mode is PricingMode.EXCLUSIVE:
        subtotal = sum(line.base for line in per_item)
        total_tax = sum(line.tax for line in per_item)
        total_amount = subtotal + total_tax
    else:
        total_amount = sum(line.line_total for line in per_item)
        subtotal = sum(line.base for line in per_item)
        total_tax = total_amount - subtotal

    # Aggregate components carry no single rate; the label is what matters.
    return DocumentTotals(
        subtotal=subtotal,
        total_tax=total_tax,
        total_amount=total_amount,
        per_item=per_item,
        components=tax_components(total_tax, 0.0, split),
    )
