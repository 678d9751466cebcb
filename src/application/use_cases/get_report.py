"""Use case to read one monthly report."""

from src.application.ports.report_store import ReportStorePort
from src.domain.errors import ReportNotFound
from src.domain.models.reports import MonthlyReport
from src.domain.services.periods import validate_period
from src.infrastructure.logging.logger import get_usage_logger


class GetReportUseCase:
    """Fetch the report of a user for a single period."""

    def __init__(self, report_store: ReportStorePort, logger=None) -> None:
        self._report_store = report_store
        self._logger = logger or get_usage_logger()

    def execute(self, user_id: str, period: str) -> MonthlyReport:
        """Return the report for ``(user_id, period)``.

        Raises:
            MalformedPeriod: If the period is not YYYY-MM; no lookup happens.
            ReportNotFound: If the bucket has no report.
        """
        validate_period(period)
        report = self._report_store.find_by_user_and_period(user_id, period)
        if report is None:
            raise ReportNotFound(user_id, period)
        self._logger.info(f"Served report user={user_id} period={period}")
        return report


__all__ = ["GetReportUseCase"]
