"""Receipt validation: schema shape first, then field grammars in a fixed order."""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path

import jsonschema

from src.grammar import (
    DESCRIPTION_PATTERN,
    MONEY_PATTERN,
    RETAILER_PATTERN,
    matches,
    parse_date,
    parse_time,
)
from src.models import Item, Receipt

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

REQUIRED_FIELDS = ("retailer", "purchaseDate", "purchaseTime", "total")


class ViolationKind(str, Enum):
    MALFORMED_INPUT = "MALFORMED_INPUT"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_RETAILER = "INVALID_RETAILER"
    INVALID_TOTAL = "INVALID_TOTAL"
    INVALID_ITEM_DESCRIPTION = "INVALID_ITEM_DESCRIPTION"
    INVALID_ITEM_PRICE = "INVALID_ITEM_PRICE"
    INVALID_TIME = "INVALID_TIME"
    INVALID_DATE = "INVALID_DATE"


MESSAGES = {
    ViolationKind.MALFORMED_INPUT: "The receipt is invalid.",
    ViolationKind.MISSING_FIELD: "The receipt is invalid.",
    ViolationKind.INVALID_RETAILER: "The retailer name is invalid",
    ViolationKind.INVALID_TOTAL: "The total is invalid",
    ViolationKind.INVALID_ITEM_DESCRIPTION: "The short description for an item is invalid",
    ViolationKind.INVALID_ITEM_PRICE: "The price for an item is invalid",
    ViolationKind.INVALID_TIME: "The purchase time is invalid",
    ViolationKind.INVALID_DATE: "The purchase date is invalid",
}


class ReceiptValidationError(ValueError):
    """Raised with the first violated rule. Not retryable; the document must be corrected."""

    def __init__(self, kind: ViolationKind, detail: str | None = None):
        self.kind = kind
        self.detail = detail
        super().__init__(MESSAGES[kind])

    @property
    def message(self) -> str:
        return MESSAGES[self.kind]


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def _check_shape(document) -> None:
    try:
        jsonschema.validate(document, _load_schema("receipt"))
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "document"
        raise ReceiptValidationError(ViolationKind.MALFORMED_INPUT, where) from e


def validate_receipt(document) -> Receipt:
    """
    Validate a decoded JSON document and return an immutable Receipt.
    Raises ReceiptValidationError for the first violation, checked in order:
    shape, missing fields, retailer, total, items (description then price each), time, date.
    """
    _check_shape(document)

    items = document.get("items") or []
    for field in REQUIRED_FIELDS:
        if not document.get(field):
            raise ReceiptValidationError(ViolationKind.MISSING_FIELD, field)
    if not items:
        raise ReceiptValidationError(ViolationKind.MISSING_FIELD, "items")

    retailer = document["retailer"]
    if not matches(RETAILER_PATTERN, retailer):
        raise ReceiptValidationError(ViolationKind.INVALID_RETAILER, "retailer")

    total = document["total"]
    if not matches(MONEY_PATTERN, total):
        raise ReceiptValidationError(ViolationKind.INVALID_TOTAL, "total")

    parsed_items = []
    for index, raw in enumerate(items):
        raw = raw or {}
        description = raw.get("shortDescription") or ""
        price = raw.get("price") or ""
        if not matches(DESCRIPTION_PATTERN, description):
            raise ReceiptValidationError(ViolationKind.INVALID_ITEM_DESCRIPTION, f"items[{index}]")
        if not matches(MONEY_PATTERN, price):
            raise ReceiptValidationError(ViolationKind.INVALID_ITEM_PRICE, f"items[{index}]")
        parsed_items.append(Item(short_description=description, price=price))

    purchase_time = document["purchaseTime"]
    try:
        parse_time(purchase_time)
    except ValueError as e:
        raise ReceiptValidationError(ViolationKind.INVALID_TIME, "purchaseTime") from e

    purchase_date = document["purchaseDate"]
    try:
        parse_date(purchase_date)
    except ValueError as e:
        raise ReceiptValidationError(ViolationKind.INVALID_DATE, "purchaseDate") from e

    return Receipt(
        retailer=retailer,
        purchase_date=purchase_date,
        purchase_time=purchase_time,
        items=tuple(parsed_items),
        total=total,
    )


def check_receipt(document) -> ViolationKind | None:
    """Non-raising form of validate_receipt: None if valid, else the first violation kind."""
    try:
        validate_receipt(document)
    except ReceiptValidationError as e:
        return e.kind
    return None
