"""In-memory store mapping generated receipt ids to scored receipts."""

import itertools
import threading
from dataclasses import dataclass

from src.grammar import RECEIPT_ID_PATTERN, matches
from src.models import Receipt


class ReceiptNotFoundError(KeyError):
    """Raised when an id is unknown or not a well-formed receipt id."""


@dataclass(frozen=True)
class ScoredReceipt:
    receipt_id: str
    receipt: Receipt
    points: int


class ReceiptStore:
    """
    Thread-safe id -> ScoredReceipt map. Ids are decimal strings from a monotonic
    counter starting at "0"; they are never reused and entries are never removed.
    Not persisted: contents are lost on restart.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._counter = itertools.count()
        self._entries: dict[str, ScoredReceipt] = {}

    def put(self, receipt: Receipt, points: int) -> str:
        # Counter step and insertion happen under one lock.
        with self._lock:
            receipt_id = str(next(self._counter))
            self._entries[receipt_id] = ScoredReceipt(receipt_id, receipt, points)
        return receipt_id

    def get(self, receipt_id: str) -> ScoredReceipt:
        if not matches(RECEIPT_ID_PATTERN, receipt_id):
            raise ReceiptNotFoundError(f"Invalid receipt id: {receipt_id!r}")
        with self._lock:
            entry = self._entries.get(receipt_id)
        if entry is None:
            raise ReceiptNotFoundError(f"Receipt not found for id: {receipt_id}")
        return entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
