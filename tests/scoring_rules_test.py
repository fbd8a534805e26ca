"""Points rules: end-to-end scenarios and the boundary of every rule."""

import pytest

from sample_receipts import ALL_RULES, BASELINE, SCENARIO_A, SCENARIO_B, receipt_doc

from src.scoring import RULES, compute_points, score_breakdown
from src.validation import validate_receipt


def _breakdown(**overrides) -> dict:
    return score_breakdown(validate_receipt(receipt_doc(**overrides)))


def test_scenario_a():
    assert compute_points(validate_receipt(SCENARIO_A)) == 109


def test_scenario_b():
    assert compute_points(validate_receipt(SCENARIO_B)) == 28


def test_all_rules_fire():
    breakdown = score_breakdown(validate_receipt(ALL_RULES))
    assert breakdown == {
        "retailer_alphanumeric": 7,
        "round_dollar_total": 50,
        "quarter_multiple_total": 25,
        "item_pairs": 5,
        "item_descriptions": 2,
        "odd_purchase_day": 6,
        "afternoon_purchase": 10,
    }
    assert sum(breakdown.values()) == 105


def test_baseline_earns_only_retailer_points():
    breakdown = score_breakdown(validate_receipt(BASELINE))
    assert list(breakdown) == [name for name, _ in RULES]
    assert breakdown["retailer_alphanumeric"] == 5
    assert sum(breakdown.values()) == 5


def test_retailer_punctuation_only_earns_nothing():
    assert _breakdown(retailer="& - &")["retailer_alphanumeric"] == 0
    assert _breakdown(retailer="   ")["retailer_alphanumeric"] == 0


def test_retailer_counts_unicode_letters_and_digits():
    assert _breakdown(retailer="Café 7")["retailer_alphanumeric"] == 5
    assert _breakdown(retailer="東京ストア")["retailer_alphanumeric"] == 5


@pytest.mark.parametrize(
    "total, expected",
    [("10.00", 75), ("10.50", 25), ("10.25", 25), ("10.49", 0), ("0.00", 75)],
)
def test_total_round_dollar_and_quarter(total, expected):
    breakdown = _breakdown(total=total)
    assert breakdown["round_dollar_total"] + breakdown["quarter_multiple_total"] == expected


def test_large_total_is_exact():
    breakdown = _breakdown(total="123456789012345678901234567890.00")
    assert breakdown["round_dollar_total"] == 50
    assert breakdown["quarter_multiple_total"] == 25


@pytest.mark.parametrize("count, expected", [(1, 0), (2, 5), (3, 5), (4, 10), (7, 15)])
def test_item_pairs(count, expected):
    items = [{"shortDescription": "Item", "price": "1.00"}] * count
    assert _breakdown(items=items)["item_pairs"] == expected


def test_description_multiple_of_three_uses_trimmed_length():
    items = [{"shortDescription": "  ABC  ", "price": "3.00"}]
    assert _breakdown(items=items)["item_descriptions"] == 1


def test_description_price_rounds_up():
    items = [
        {"shortDescription": "ABCDEF", "price": "12.25"},  # 2.45 -> 3
        {"shortDescription": "ABCDEF", "price": "15.00"},  # exactly 3
        {"shortDescription": "ABCDEF", "price": "0.01"},  # 0.002 -> 1
        {"shortDescription": "ABCDEF", "price": "0.00"},  # 0
        {"shortDescription": "ABCD", "price": "100.00"},  # length 4 -> skipped
    ]
    assert _breakdown(items=items)["item_descriptions"] == 3 + 3 + 1 + 0


@pytest.mark.parametrize("purchase_date, expected", [("2022-01-01", 6), ("2022-01-02", 0), ("2022-01-31", 6)])
def test_odd_purchase_day(purchase_date, expected):
    assert _breakdown(purchaseDate=purchase_date)["odd_purchase_day"] == expected


@pytest.mark.parametrize(
    "purchase_time, expected",
    [("13:59", 0), ("14:00", 0), ("14:01", 10), ("15:00", 10), ("15:59", 10), ("16:00", 0)],
)
def test_afternoon_purchase_window(purchase_time, expected):
    assert _breakdown(purchaseTime=purchase_time)["afternoon_purchase"] == expected


def test_retailer_marks_earn_nothing():
    assert _breakdown(retailer="Cafe\u0301")["retailer_alphanumeric"] == 4
    # Three consonants; the vowel signs are marks.
    assert _breakdown(retailer="\u0915\u093f\u0930\u093e\u0928\u093e")["retailer_alphanumeric"] == 3
