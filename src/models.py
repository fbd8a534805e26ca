"""Immutable receipt values produced by validation."""

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal

from src.grammar import parse_cents, parse_date, parse_money, parse_time


@dataclass(frozen=True)
class Item:
    """A single purchased line entry."""

    short_description: str
    price: str

    @property
    def price_cents(self) -> int:
        return parse_cents(self.price)

    def to_dict(self) -> dict:
        return {"shortDescription": self.short_description, "price": self.price}


@dataclass(frozen=True)
class Receipt:
    """A validated receipt. Fields keep the submitted strings; parsed views are properties."""

    retailer: str
    purchase_date: str
    purchase_time: str
    items: tuple[Item, ...]
    total: str

    @property
    def purchased_on(self) -> date:
        return parse_date(self.purchase_date)

    @property
    def purchased_at(self) -> time:
        return parse_time(self.purchase_time)

    @property
    def total_amount(self) -> Decimal:
        return parse_money(self.total)

    @property
    def total_cents(self) -> int:
        return parse_cents(self.total)

    def to_dict(self) -> dict:
        return {
            "retailer": self.retailer,
            "purchaseDate": self.purchase_date,
            "purchaseTime": self.purchase_time,
            "items": [i.to_dict() for i in self.items],
            "total": self.total,
        }
