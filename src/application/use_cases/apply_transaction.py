"""Use case applying a transaction event to its monthly report.

The bucket is resolved from the event date, then, while holding the store's
per-bucket lock:

* the report is fetched, or created with zero totals and saved at once so it
  has an identity;
* the amount is added to the income or expense total and the balance is
  recomputed;
* the updated report is saved.

If another worker changed the report in between (``StaleReport``), the whole
sequence is retried from a fresh read. Applying the same event twice
accumulates it twice.
"""

from src.application.ports.report_store import ReportStorePort
from src.domain.errors import StaleReport
from src.domain.models.reports import MonthlyReport
from src.domain.models.transactions import TransactionEvent
from src.domain.policies.event_validation import validate_event
from src.domain.services.aggregation import accumulate, new_report
from src.domain.services.periods import derive_period
from src.infrastructure.logging.logger import get_app_logger


class ApplyTransactionUseCase:
    """Accumulate transaction events into monthly reports."""

    def __init__(
        self,
        report_store: ReportStorePort,
        logger=None,
        max_attempts: int = 3,
    ) -> None:
        """Initialize the use case.

        Args:
            report_store: Port providing monthly report storage.
            logger: Optional logger compatible with logging.Logger-like API.
            max_attempts: Read-modify-write attempts before a conflict is
                raised.
        """
        self._report_store = report_store
        self._logger = logger or get_app_logger()
        self._max_attempts = max(max_attempts, 1)

    def execute(self, event: TransactionEvent) -> MonthlyReport:
        """Apply one transaction event.

        Args:
            event: Transaction notification to accumulate.

        Returns:
            MonthlyReport: The report as saved after accumulation.

        Raises:
            InvalidEvent: If the event lacks required fields.
            StaleReport: If the report kept changing concurrently.
            StorageFailure: If the store fails.
        """
        validate_event(event)
        period = derive_period(event.date)
        for attempt in range(1, self._max_attempts + 1):
            try:
                with self._report_store.lock_bucket(event.user_id, period):
                    report = self.get_or_create(event.user_id, period)
                    updated = accumulate(report, event, self._logger)
                    saved = self._report_store.save(updated)
                break
            except StaleReport as exc:
                if attempt == self._max_attempts:
                    raise
                self._logger.warning(
                    f"Retrying transaction {event.transaction_id} "
                    f"(attempt {attempt} of {self._max_attempts}): {exc}"
                )
        self._logger.info(
            f"Applied {event.type} transaction {event.transaction_id} to "
            f"user={event.user_id} period={period}: "
            f"income={saved.total_income}, expense={saved.total_expense}, "
            f"balance={saved.balance}"
        )
        return saved

    def get_or_create(self, user_id: str, period: str) -> MonthlyReport:
        """Return the bucket's report, persisting a zeroed one if absent.

        Args:
            user_id: Owner of the bucket.
            period: Month key in YYYY-MM format.

        Returns:
            MonthlyReport: A stored report with an assigned identity.
        """
        report = self._report_store.find_by_user_and_period(user_id, period)
        if report is not None:
            return report
        created = self._report_store.save(new_report(user_id, period))
        self._logger.info(
            f"Created report {created.report_id} for user={user_id} "
            f"period={period}"
        )
        return created


__all__ = ["ApplyTransactionUseCase"]
