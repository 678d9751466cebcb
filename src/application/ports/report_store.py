"""Port for monthly report persistence."""

from contextlib import AbstractContextManager
from typing import Protocol

from src.domain.models.reports import MonthlyReport, PageRequest, ReportPage


class ReportStorePort(Protocol):
    """Port exposing keyed storage of monthly reports.

    Implementations keep at most one report per (user_id, period) and raise
    ``StorageFailure`` when the backend fails.
    """

    def prepare_storage(self) -> None:
        """Ensure the storage backend can hold reports."""

    def lock_bucket(
        self,
        user_id: str,
        period: str,
    ) -> AbstractContextManager[None]:
        """Serialize access to one (user_id, period) bucket.

        Read-modify-write sequences run inside this context are strictly
        ordered against any other holder of the same bucket.
        """

    def find_by_user_and_period(
        self,
        user_id: str,
        period: str,
    ) -> MonthlyReport | None:
        """Return the report for a bucket, or None."""

    def save(self, report: MonthlyReport) -> MonthlyReport:
        """Insert a report without id, else update it by id and version.

        Raises:
            StaleReport: If the stored report changed since it was read.
        """

    def find_range_ordered(
        self,
        user_id: str,
        start_period: str,
        end_period: str,
    ) -> list[MonthlyReport]:
        """Return reports within the inclusive range, ascending by period."""

    def find_all_for_user(
        self,
        user_id: str,
        page: PageRequest,
    ) -> ReportPage:
        """Return one page of a user's reports, newest period first."""

    def delete(self, report: MonthlyReport) -> None:
        """Remove a stored report."""


__all__ = ["ReportStorePort"]
