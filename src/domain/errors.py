"""Domain errors raised by the reports core."""


class ReportsError(Exception):
    """Base class for reports service errors."""


class InvalidEvent(ReportsError):
    """Raised when a transaction event lacks required fields."""


class MalformedPeriod(ReportsError):
    """Raised when a period string is not in YYYY-MM format."""

    def __init__(self, value) -> None:
        super().__init__(f"Malformed period {value!r}; expected YYYY-MM")
        self.value = value


class ReportNotFound(ReportsError):
    """Raised when no report exists for a user and period."""

    def __init__(self, user_id: str, period: str) -> None:
        super().__init__(
            f"Report not found for user '{user_id}' and period '{period}'"
        )
        self.user_id = user_id
        self.period = period


class StorageFailure(ReportsError):
    """Raised when the report store cannot complete an operation."""


class StaleReport(StorageFailure):
    """Raised when a report changed between being read and being saved."""


__all__ = [
    "ReportsError",
    "InvalidEvent",
    "MalformedPeriod",
    "ReportNotFound",
    "StorageFailure",
    "StaleReport",
]
