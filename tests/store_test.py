"""Receipt store: monotonic ids, not-found handling, concurrent inserts."""

import threading

import pytest

from sample_receipts import SCENARIO_A, SCENARIO_B

from receipt_processor import ReceiptNotFoundError, ReceiptStore, get_points, process_receipt
from src.validation import ReceiptValidationError, validate_receipt


def test_ids_are_monotonic_and_start_at_zero():
    store = ReceiptStore()
    receipt = validate_receipt(SCENARIO_A)
    ids = [store.put(receipt, 109) for _ in range(3)]
    assert ids == ["0", "1", "2"]
    assert store.get("1").points == 109
    assert store.get("1").receipt == receipt


@pytest.mark.parametrize("receipt_id", ["99", "invalid-id", "", " ", "0 "])
def test_unknown_or_malformed_id_raises(receipt_id):
    store = ReceiptStore()
    store.put(validate_receipt(SCENARIO_A), 109)
    with pytest.raises(ReceiptNotFoundError):
        store.get(receipt_id)


def test_concurrent_puts_never_share_an_id():
    store = ReceiptStore()
    receipt = validate_receipt(SCENARIO_B)
    ids: list[str] = []
    ids_lock = threading.Lock()

    def worker():
        local = [store.put(receipt, 28) for _ in range(50)]
        with ids_lock:
            ids.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 400
    assert sorted(ids, key=int) == [str(i) for i in range(400)]


def test_process_receipt_stores_and_scores():
    store = ReceiptStore()
    scored = process_receipt(store, SCENARIO_A)
    assert scored.receipt_id == "0"
    assert scored.points == 109
    assert get_points(store, "0") == 109


def test_rejected_receipt_gets_no_id():
    store = ReceiptStore()
    with pytest.raises(ReceiptValidationError):
        process_receipt(store, {})
    assert len(store) == 0
    assert process_receipt(store, SCENARIO_B).receipt_id == "0"
