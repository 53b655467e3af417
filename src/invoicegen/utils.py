"""
Display formatting helpers for the rendered document.

Provides helpers for:
- Currency amounts with Indian digit grouping (12,34,567)
- Tax rates as compact percentages
- Filesystem-safe names for exported files
"""

import math
import re

CURRENCY_SYMBOL = "₹"

_UNSAFE_FILENAME_CHARS = re.compile(r'[\s/\\:*?"<>|]+')


def format_amount(value: float) -> str:
    """
    Format an amount in whole rupees with Indian digit grouping.

    Fractions are truncated, never rounded, and only here at display time;
    the underlying document keeps full precision.

    Args:
        value: Amount to format.

    Returns:
        Formatted string like '1,23,456' or '-8,474'.
    """
    whole = math.trunc(value)
    digits = str(abs(whole))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"-{digits}" if whole < 0 else digits


def format_currency(value: float) -> str:
    """Format an amount with the rupee symbol, e.g. '₹ 11,800'."""
    return f"{CURRENCY_SYMBOL} {format_amount(value)}"


def format_rate(rate: float) -> str:
    """
    Format a tax rate without trailing zeros.

    Args:
        rate: Rate in percent.

    Returns:
        String like '18%', '9%' or '2.5%'.
    """
    return f"{rate:g}%"


def safe_filename_part(text: str) -> str:
    """Replace whitespace and path-unsafe characters with hyphens."""
    return _UNSAFE_FILENAME_CHARS.sub("-", text.strip()).strip("-")
