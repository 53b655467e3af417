"""
Data models for invoicegen.

This package provides:
- The Document model and its parts (Party, LineItem, BankDetails, Visibility)
- The enums that drive computation and presentation
- Typed edit operations producing new Document values
- The editor state persisted in dcc.Store

All models are frozen dataclasses with to_dict/from_dict helpers for
dcc.Store persistence.
"""

from invoicegen.models.common import EditorState, Origin
from invoicegen.models.document import (
    DEFAULT_LOGO_URL,
    LOGO_ASSETS,
    BankDetails,
    Document,
    DocumentType,
    LineItem,
    LogoAsset,
    Party,
    PricingMode,
    TaxSplit,
    Visibility,
    default_document,
    new_line_item,
)

__all__ = [
    "DEFAULT_LOGO_URL",
    "LOGO_ASSETS",
    "BankDetails",
    "Document",
    "DocumentType",
    "EditorState",
    "LineItem",
    "LogoAsset",
    "Origin",
    "Party",
    "PricingMode",
    "TaxSplit",
    "Visibility",
    "default_document",
    "new_line_item",
]
