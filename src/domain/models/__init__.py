"""Domain models package."""

from .reports import (
    MonthlyReport,
    PageRequest,
    PeriodRangeSummary,
    ReportPage,
)
from .transactions import TransactionEvent, TransactionType

__all__ = [
    "MonthlyReport",
    "PageRequest",
    "PeriodRangeSummary",
    "ReportPage",
    "TransactionEvent",
    "TransactionType",
]
