"""
Document <-> URL query string codec.

A document is shared by putting its entire state into the query string of a
link, so no server-side storage is needed. ``encode`` turns a Document into a
flat mapping of parameter name to string; ``decode`` turns such a mapping back
into a Document.

Parameter names are a stable contract: links shared earlier must keep
decoding, so names are never changed, only added.

Decoding is best effort and never raises. Every field is decoded on its own
and falls back to the default document's value when its parameter is missing
or malformed. The one hard requirement is ``invoiceNo``: without it the
parameters do not describe a shared document at all and ``decode`` returns
None, telling the caller to keep the default.
"""

import json
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import parse_qsl, urlencode

from invoicegen.lib import logs
from invoicegen.models.document import (
    LOGO_ASSETS,
    BankDetails,
    Document,
    DocumentType,
    LineItem,
    Party,
    PricingMode,
    TaxSplit,
    Visibility,
    default_document,
)

LOG = logs.logger(__file__)

E = TypeVar("E", PricingMode, TaxSplit, DocumentType)

ParamSet = dict[str, str]

# Logo alias -> canonical asset path, and the reverse for encoding.
LOGO_BY_ALIAS: dict[str, str] = {asset.alias: asset.path for asset in LOGO_ASSETS}
ALIAS_BY_LOGO: dict[str, str] = {asset.path: asset.alias for asset in LOGO_ASSETS}

REQUIRED_PARAM = "invoiceNo"

# Document flag name -> key inside the ``visibility`` parameter.
VISIBILITY_KEYS: dict[str, str] = {
    "logo": "logo",
    "title": "title",
    "date": "date",
    "invoice_no": "invoiceNo",
    "billed_to": "billedTo",
    "sender": "from",
    "bank": "bankDetails",
    "registration_id": "udyam",
    "payment_note": "paymentMethod",
}


def _party_params(prefix: str, party: Party) -> ParamSet:
    return {
        f"{prefix}Name": party.name,
        f"{prefix}Addr": party.address,
        f"{prefix}Gst": party.tax_id,
    }


def _item_record(item: LineItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "description": item.description,
        "value": item.value,
        "hsn": item.hsn_code,
        "gstRate": item.tax_rate_percent,
    }


def encode_logo(logo_url: str) -> str:
    """Return the short alias for a bundled logo, or the URL itself."""
    return ALIAS_BY_LOGO.get(logo_url, logo_url)


def encode(document: Document) -> ParamSet:
    """
    Encode a document as a flat parameter set.

    Args:
        document: Document to encode.

    Returns:
        Mapping of parameter name to string value, in a stable order.
    """
    params: ParamSet = {
        "logo": encode_logo(document.logo_url),
        "title": document.title,
        "date": document.date,
        "invoiceNo": document.invoice_no,
        "gstMode": document.pricing_mode.value,
        "gstSplit": document.tax_split.value,
    }
    params.update(_party_params("bt", document.billed_to))
    params.update(_party_params("f", document.sender))
    params["items"] = json.dumps(
        [_item_record(item) for item in document.items], separators=(",", ":")
    )
    params.update(
        {
            "bAccName": document.bank.account_name,
            "bBank": document.bank.bank_name,
            "bAccNo": document.bank.account_no,
            "bIfsc": document.bank.ifsc,
            "bAccType": document.bank.account_type,
            "udyam": document.registration_id,
            "payment": document.payment_note,
            "type": document.document_type.value,
        }
    )
    params["visibility"] = json.dumps(
        {
            key: getattr(document.visibility, name)
            for name, key in VISIBILITY_KEYS.items()
        },
        separators=(",", ":"),
    )
    return params


def to_query_string(document: Document) -> str:
    """Encode a document as a URL query string (without the leading '?')."""
    return urlencode(encode(document))


def share_url(base_url: str, document: Document) -> str:
    """
    Build the shareable link for a document.

    Args:
        base_url: Origin and path of the app, any existing query is dropped.
        document: Document to share.

    Returns:
        Absolute link that restores the document when opened.
    """
    return f"{base_url.split('?', 1)[0].split('#', 1)[0]}?{to_query_string(document)}"


def from_query_string(search: str | None) -> Document | None:
    """Decode a ``location.search`` string such as ``?invoiceNo=...``."""
    params = dict(parse_qsl((search or "").lstrip("?"), keep_blank_values=True))
    return decode(params)


def decode_logo(value: str | None, default: str) -> str:
    """Resolve a logo alias, else take the value as a literal URL."""
    if value is None:
        return default
    return LOGO_BY_ALIAS.get(value, value)


def decode(params: Mapping[str, str]) -> Document | None:
    """
    Decode a parameter set into a Document.

    Args:
        params: Flat parameter mapping, e.g. the parsed query string.

    Returns:
        The decoded document, or None when ``invoiceNo`` is absent.
    """
    if REQUIRED_PARAM not in params:
        return None

    default = default_document()

    def text(name: str, fallback: str) -> str:
        value = params.get(name)
        return value if isinstance(value, str) else fallback

    return Document(
        logo_url=decode_logo(params.get("logo"), default.logo_url),
        title=text("title", default.title),
        date=text("date", default.date),
        invoice_no=text("invoiceNo", default.invoice_no),
        pricing_mode=_decode_enum(params, "gstMode", PricingMode, default.pricing_mode),
        tax_split=_decode_enum(params, "gstSplit", TaxSplit, default.tax_split),
        billed_to=Party(
            name=text("btName", default.billed_to.name),
            address=text("btAddr", default.billed_to.address),
            tax_id=text("btGst", default.billed_to.tax_id),
        ),
        sender=Party(
            name=text("fName", default.sender.name),
            address=text("fAddr", default.sender.address),
            tax_id=text("fGst", default.sender.tax_id),
        ),
        items=_decode_items(params.get("items"), default.items),
        bank=BankDetails(
            account_name=text("bAccName", default.bank.account_name),
            bank_name=text("bBank", default.bank.bank_name),
            account_no=text("bAccNo", default.bank.account_no),
            ifsc=text("bIfsc", default.bank.ifsc),
            account_type=text("bAccType", default.bank.account_type),
        ),
        registration_id=text("udyam", default.registration_id),
        payment_note=text("payment", default.payment_note),
        document_type=_decode_enum(params, "type", DocumentType, default.document_type),
        visibility=_decode_visibility(params.get("visibility"), default.visibility),
    )


def _decode_enum(
    params: Mapping[str, str], name: str, enum: Callable[[str], E], default: E
) -> E:
    value = params.get(name)
    if value is None:
        return default
    try:
        return enum(value)
    except ValueError:
        LOG.warning("Ignoring unknown %s value: %r", name, value)
        return default


def _parse_json(name: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        LOG.warning("Failed to parse %s parameter: %s", name, exc)
        return None


def _number(value: Any) -> float:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"not a number: {value!r}")
    return float(value)


def _decode_item(record: Any) -> LineItem:
    if not isinstance(record, dict):
        raise ValueError(f"not an item record: {record!r}")
    item_id = record.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise ValueError(f"missing item id: {record!r}")
    description = record.get("description", "")
    hsn_code = record.get("hsn", "")
    if not isinstance(description, str) or not isinstance(hsn_code, str):
        raise ValueError(f"malformed item text: {record!r}")
    return LineItem(
        id=item_id,
        description=description,
        value=_number(record.get("value", 0)),
        hsn_code=hsn_code,
        tax_rate_percent=_number(record.get("gstRate", 0)),
    )


def _decode_items(
    raw: str | None, default: tuple[LineItem, ...]
) -> tuple[LineItem, ...]:
    """
    Decode the items list as a whole; any defect falls back to the default list.

    An explicit empty list is kept: a document whose last item was removed
    must survive a share link.
    """
    if raw is None:
        return default
    parsed = _parse_json("items", raw)
    if not isinstance(parsed, list):
        LOG.warning("Items parameter is not a list, using defaults")
        return default
    try:
        items = tuple(_decode_item(record) for record in parsed)
    except ValueError as exc:
        LOG.warning("Malformed item in items parameter, using defaults: %s", exc)
        return default
    if len({item.id for item in items}) != len(items):
        LOG.warning("Duplicate item ids in items parameter, using defaults")
        return default
    return items


def _decode_visibility(raw: str | None, default: Visibility) -> Visibility:
    """Merge decoded flags over the defaults one by one."""
    if raw is None:
        return default
    parsed = _parse_json("visibility", raw)
    if not isinstance(parsed, dict):
        return default
    flags = {}
    for name, key in VISIBILITY_KEYS.items():
        value = parsed.get(key)
        flags[name] = value if isinstance(value, bool) else getattr(default, name)
    return Visibility(**flags)
