"""Use case to delete one monthly report."""

from src.application.ports.report_store import ReportStorePort
from src.domain.errors import ReportNotFound
from src.domain.services.periods import validate_period
from src.infrastructure.logging.logger import get_app_logger


class DeleteReportUseCase:
    """Administrative removal of a user's report for a period."""

    def __init__(self, report_store: ReportStorePort, logger=None) -> None:
        self._report_store = report_store
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, period: str) -> None:
        """Delete the report for ``(user_id, period)``.

        Raises:
            MalformedPeriod: If the period is not YYYY-MM.
            ReportNotFound: If the bucket has no report.
        """
        validate_period(period)
        with self._report_store.lock_bucket(user_id, period):
            report = self._report_store.find_by_user_and_period(
                user_id,
                period,
            )
            if report is None:
                raise ReportNotFound(user_id, period)
            self._report_store.delete(report)
        self._logger.info(
            f"Deleted report {report.report_id} for user={user_id} "
            f"period={period}"
        )


__all__ = ["DeleteReportUseCase"]
