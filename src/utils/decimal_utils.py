"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_EVEN, Decimal

MONEY_QUANTUM = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON payloads or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    """Normalize a value to a two-digit fixed-point amount.

    Args:
        value: Raw numeric value.

    Returns:
        Decimal: Amount quantized to cents.
    """
    return coerce_decimal(value).quantize(
        MONEY_QUANTUM,
        rounding=ROUND_HALF_EVEN,
    )


__all__ = ["MONEY_QUANTUM", "coerce_decimal", "to_money"]
