"""Deterministic points engine. Pure code, no I/O, never mutates the receipt."""

from src.models import Receipt

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10

# Money is compared in integer cents so no rounding mode is involved.
CENTS_PER_DOLLAR = 100
CENTS_PER_QUARTER = 25
# ceil(0.2 * price) == ceil(cents / 500)
DESCRIPTION_CENTS_PER_POINT = 500


def _retailer_alphanumeric(receipt: Receipt) -> int:
    return sum(1 for ch in receipt.retailer if ch.isalnum())


def _round_dollar_total(receipt: Receipt) -> int:
    return ROUND_DOLLAR_POINTS if receipt.total_cents % CENTS_PER_DOLLAR == 0 else 0


def _quarter_multiple_total(receipt: Receipt) -> int:
    # Also fires for round-dollar totals; the two bonuses stack.
    return QUARTER_MULTIPLE_POINTS if receipt.total_cents % CENTS_PER_QUARTER == 0 else 0


def _item_pairs(receipt: Receipt) -> int:
    return ITEM_PAIR_POINTS * (len(receipt.items) // 2)


def _item_descriptions(receipt: Receipt) -> int:
    points = 0
    for item in receipt.items:
        if len(item.short_description.strip()) % 3 == 0:
            points += -(-item.price_cents // DESCRIPTION_CENTS_PER_POINT)
    return points


def _odd_purchase_day(receipt: Receipt) -> int:
    return ODD_DAY_POINTS if receipt.purchased_on.day % 2 == 1 else 0


def _afternoon_purchase(receipt: Receipt) -> int:
    # Strictly after 14:00 and strictly before 16:00.
    t = receipt.purchased_at
    if (t.hour == 14 and t.minute > 0) or t.hour == 15:
        return AFTERNOON_POINTS
    return 0


RULES = (
    ("retailer_alphanumeric", _retailer_alphanumeric),
    ("round_dollar_total", _round_dollar_total),
    ("quarter_multiple_total", _quarter_multiple_total),
    ("item_pairs", _item_pairs),
    ("item_descriptions", _item_descriptions),
    ("odd_purchase_day", _odd_purchase_day),
    ("afternoon_purchase", _afternoon_purchase),
)


def score_breakdown(receipt: Receipt) -> dict[str, int]:
    """
    Per-rule contributions for a validated receipt, in rule order.
    A ValueError from here means the receipt bypassed validation.
    """
    return {name: rule(receipt) for name, rule in RULES}


def compute_points(receipt: Receipt) -> int:
    """Total points for a validated receipt. Always >= 0."""
    return sum(score_breakdown(receipt).values())
