"""Use case to summarize monthly reports over a period range."""

from src.application.ports.report_store import ReportStorePort
from src.domain.models.reports import PeriodRangeSummary
from src.domain.services.aggregation import summarize_reports
from src.domain.services.periods import validate_period
from src.infrastructure.logging.logger import get_usage_logger


class SummarizeRangeUseCase:
    """Fold a user's monthly reports into range totals."""

    def __init__(self, report_store: ReportStorePort, logger=None) -> None:
        self._report_store = report_store
        self._logger = logger or get_usage_logger()

    def execute(
        self,
        user_id: str,
        start_period: str,
        end_period: str,
    ) -> PeriodRangeSummary:
        """Return totals and the per-month breakdown for the range.

        Args:
            user_id: Owner of the reports.
            start_period: Inclusive lower bound in YYYY-MM format.
            end_period: Inclusive upper bound in YYYY-MM format.

        Returns:
            PeriodRangeSummary: Zero totals when no report falls in range.

        Raises:
            MalformedPeriod: If either bound is not YYYY-MM.
        """
        validate_period(start_period)
        validate_period(end_period)
        reports = self._report_store.find_range_ordered(
            user_id,
            start_period,
            end_period,
        )
        summary = summarize_reports(user_id, start_period, end_period, reports)
        self._logger.info(
            f"Summarized {len(reports)} reports for user={user_id} "
            f"{start_period}..{end_period}: income={summary.total_income}, "
            f"expense={summary.total_expense}, balance={summary.balance}"
        )
        return summary


__all__ = ["SummarizeRangeUseCase"]
