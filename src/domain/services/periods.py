"""Monthly period keys."""

from datetime import date

from src.domain.constants import PERIOD_PATTERN
from src.domain.errors import MalformedPeriod


def derive_period(value: date) -> str:
    """Return the YYYY-MM bucket key for a calendar date.

    Args:
        value: Any date or datetime.

    Returns:
        str: Zero-padded year and month, e.g. ``2026-02``.
    """
    return f"{value.year:04d}-{value.month:02d}"


def validate_period(value) -> str:
    """Check a caller-supplied period string.

    Args:
        value: Raw period value.

    Returns:
        str: The period, unchanged.

    Raises:
        MalformedPeriod: If the value is not a valid YYYY-MM month key.
    """
    if not isinstance(value, str) or not PERIOD_PATTERN.fullmatch(value):
        raise MalformedPeriod(value)
    return value


__all__ = ["derive_period", "validate_period"]
