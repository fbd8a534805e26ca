"""Receipt Processor - validate receipts, award points, serve them by id."""

from receipt_processor.service import get_points, process_receipt
from receipt_processor.store import ReceiptNotFoundError, ReceiptStore, ScoredReceipt

__all__ = ["get_points", "process_receipt", "ReceiptNotFoundError", "ReceiptStore", "ScoredReceipt"]
