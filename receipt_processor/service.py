"""Orchestrates validate -> score -> store for the HTTP app and the CLI."""

from receipt_processor.store import ReceiptStore, ScoredReceipt
from src.scoring import compute_points
from src.validation import validate_receipt


def process_receipt(store: ReceiptStore, document) -> ScoredReceipt:
    """
    Validate, score and store a decoded receipt document.
    Raises ReceiptValidationError before anything is stored; rejected receipts get no id.
    """
    receipt = validate_receipt(document)
    points = compute_points(receipt)
    receipt_id = store.put(receipt, points)
    return ScoredReceipt(receipt_id, receipt, points)


def get_points(store: ReceiptStore, receipt_id: str) -> int:
    """Points for a stored receipt. Raises ReceiptNotFoundError for unknown or malformed ids."""
    return store.get(receipt_id).points
