"""Fixed field grammars shared by validation and scoring."""

import re
from datetime import date, datetime, time
from decimal import Decimal

import regex

# Word classes take Unicode letters, marks (Mn/Mc/Me), numbers and underscore.
# All patterns are used with fullmatch.
RETAILER_PATTERN = regex.compile(r"[\p{L}\p{M}\p{N}_\s\-&]+")
DESCRIPTION_PATTERN = regex.compile(r"[\p{L}\p{M}\p{N}_\s\-]+")
MONEY_PATTERN = re.compile(r"\d+\.\d{2}", re.ASCII)
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)
RECEIPT_ID_PATTERN = re.compile(r"\S+")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def matches(pattern, value: str) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def parse_date(value: str) -> date:
    """Parse YYYY-MM-DD into a date. Raises ValueError if not a real calendar date."""
    if not matches(DATE_PATTERN, value):
        raise ValueError(f"date does not match YYYY-MM-DD: {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time(value: str) -> time:
    """Parse 24-hour HH:MM into a time. Raises ValueError if out of 00:00-23:59."""
    if not matches(TIME_PATTERN, value):
        raise ValueError(f"time does not match HH:MM: {value!r}")
    return datetime.strptime(value, TIME_FORMAT).time()


def parse_money(value: str) -> Decimal:
    """Parse a two-decimal currency string exactly."""
    if not matches(MONEY_PATTERN, value):
        raise ValueError(f"amount does not match digits.dd: {value!r}")
    return Decimal(value)


def parse_cents(value: str) -> int:
    """Parse a two-decimal currency string into integer cents."""
    if not matches(MONEY_PATTERN, value):
        raise ValueError(f"amount does not match digits.dd: {value!r}")
    return int(value.replace(".", ""))
