"""Domain models for monthly report aggregates."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.constants import DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class MonthlyReport:
    """Income and expense totals of one user for one calendar month.

    Attributes:
        report_id: Surrogate identifier, None until first persisted.
        user_id: Owner of the report.
        period: Month key in YYYY-MM format.
        total_income: Sum of income amounts.
        total_expense: Sum of expense amounts.
        balance: total_income minus total_expense.
        version: Store revision the report was read at, 0 until persisted.
        created_at: Insertion timestamp set by the store.
        updated_at: Last update timestamp set by the store.
    """

    report_id: int | None
    user_id: str
    period: str
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PeriodRangeSummary:
    """Totals of a user's reports over an inclusive period range."""

    user_id: str
    start_period: str
    end_period: str
    reports: list[MonthlyReport]
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page request; reports are listed newest period first."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ReportPage:
    """One page of a user's reports."""

    items: list[MonthlyReport]
    page: int
    size: int
    total_elements: int
    total_pages: int
    is_last: bool


__all__ = [
    "MonthlyReport",
    "PeriodRangeSummary",
    "PageRequest",
    "ReportPage",
]
