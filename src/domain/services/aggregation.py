"""Domain services for monthly report aggregation.

Each step is a pure function over immutable ``MonthlyReport`` values. The
application layer chains them as get-or-create, accumulate, rebalance.
"""

from collections.abc import Sequence
from dataclasses import replace
from decimal import Decimal
from logging import Logger

from src.domain.models.reports import MonthlyReport, PeriodRangeSummary
from src.domain.models.transactions import TransactionEvent, TransactionType
from src.utils.decimal_utils import to_money

ZERO = to_money(0)


def new_report(user_id: str, period: str) -> MonthlyReport:
    """Return an unsaved report with all totals at zero."""
    return MonthlyReport(
        report_id=None,
        user_id=user_id,
        period=period,
        total_income=ZERO,
        total_expense=ZERO,
        balance=ZERO,
    )


def rebalance(report: MonthlyReport) -> MonthlyReport:
    """Recompute the balance from the report totals."""
    return replace(
        report,
        balance=report.total_income - report.total_expense,
    )


def accumulate(
    report: MonthlyReport,
    event: TransactionEvent,
    logger: Logger,
) -> MonthlyReport:
    """Add a transaction amount to the matching total and rebalance.

    Args:
        report: Current aggregate for the event's bucket.
        event: Transaction to accumulate.
        logger: Logger used for anomalies.

    Returns:
        MonthlyReport: Updated report with a recomputed balance.
    """
    amount = to_money(event.amount)
    if amount <= 0:
        logger.warning(
            f"Non-positive amount {amount} in transaction "
            f"{event.transaction_id} for user={event.user_id}"
        )
    match event.type:
        case TransactionType.INCOME:
            report = replace(report, total_income=report.total_income + amount)
        case TransactionType.EXPENSE:
            report = replace(
                report,
                total_expense=report.total_expense + amount,
            )
        case _:
            logger.warning(
                f"Unknown transaction type {event.type!r} in transaction "
                f"{event.transaction_id}; totals left unchanged"
            )
    return rebalance(report)


def summarize_reports(
    user_id: str,
    start_period: str,
    end_period: str,
    reports: Sequence[MonthlyReport],
) -> PeriodRangeSummary:
    """Fold monthly reports into range totals.

    Args:
        user_id: Owner of the reports.
        start_period: Inclusive lower period bound.
        end_period: Inclusive upper period bound.
        reports: Reports ordered by period.

    Returns:
        PeriodRangeSummary: Totals alongside the per-period breakdown.
    """
    total_income = sum(
        (report.total_income for report in reports),
        start=ZERO,
    )
    total_expense = sum(
        (report.total_expense for report in reports),
        start=ZERO,
    )
    return PeriodRangeSummary(
        user_id=user_id,
        start_period=start_period,
        end_period=end_period,
        reports=list(reports),
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
    )


__all__ = [
    "ZERO",
    "new_report",
    "rebalance",
    "accumulate",
    "summarize_reports",
]
