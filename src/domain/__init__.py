"""Domain package for business rules and core models."""

from .constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MONEY_QUANTUM
from .errors import (
    InvalidEvent,
    MalformedPeriod,
    ReportNotFound,
    ReportsError,
    StaleReport,
    StorageFailure,
)
from .models import (
    MonthlyReport,
    PageRequest,
    PeriodRangeSummary,
    ReportPage,
    TransactionEvent,
    TransactionType,
)
from .policies import validate_event
from .services import (
    accumulate,
    derive_period,
    new_report,
    rebalance,
    summarize_reports,
    validate_period,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MONEY_QUANTUM",
    "InvalidEvent",
    "MalformedPeriod",
    "ReportNotFound",
    "ReportsError",
    "StaleReport",
    "StorageFailure",
    "MonthlyReport",
    "PageRequest",
    "PeriodRangeSummary",
    "ReportPage",
    "TransactionEvent",
    "TransactionType",
    "validate_event",
    "accumulate",
    "derive_period",
    "new_report",
    "rebalance",
    "summarize_reports",
    "validate_period",
]
