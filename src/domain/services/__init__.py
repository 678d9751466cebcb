"""Domain services package."""

from .aggregation import (
    accumulate,
    new_report,
    rebalance,
    summarize_reports,
)
from .periods import derive_period, validate_period

__all__ = [
    "accumulate",
    "new_report",
    "rebalance",
    "summarize_reports",
    "derive_period",
    "validate_period",
]
