from __future__ import annotations

from decimal import Decimal, InvalidOperation

CENTS = Decimal("0.01")


def to_decimal(value, name: str = "value") -> Decimal:
    """Convert a JSON/ORM number into a Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{name} must be a number")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{name} must be a number") from None


def require_non_negative(value, name: str = "price") -> Decimal:
    amount = to_decimal(value, name)
    if amount < 0:
        raise ValueError(f"{name} must be >= 0")
    return amount


def money(value, symbol: str = "$") -> str:
    return f"{symbol}{to_decimal(value).quantize(CENTS)}"
