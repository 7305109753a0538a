# expensepro/utils/helpers.py
import time
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def utcnow() -> datetime:
    """Naive UTC timestamp (what the DateTime columns store)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_id(prefix: str = "txn") -> str:
    """<prefix>-<epoch millis>-<9 random hex chars>"""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def to_money(value) -> Decimal:
    """Normalize int/float/str/Decimal to a 2-decimal Decimal."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def naive_utc(value: datetime) -> datetime:
    """Aware datetimes converted to naive UTC; naive ones are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
