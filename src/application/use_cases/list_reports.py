"""Use case to page through a user's monthly reports."""

from src.application.ports.report_store import ReportStorePort
from src.application.use_cases.pagination import ensure_safe_page
from src.domain.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.domain.models.reports import PageRequest, ReportPage
from src.infrastructure.logging.logger import get_usage_logger


class ListReportsUseCase:
    """List the reports of a user, newest period first."""

    def __init__(
        self,
        report_store: ReportStorePort,
        logger=None,
        max_page_size: int = MAX_PAGE_SIZE,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize the use case.

        Args:
            report_store: Port providing monthly report storage.
            logger: Optional logger compatible with logging.Logger-like API.
            max_page_size: Cap applied to requested page sizes.
            default_page_size: Size used when none is requested.
        """
        self._report_store = report_store
        self._logger = logger or get_usage_logger()
        self._max_page_size = max_page_size
        self._default_page_size = default_page_size

    def execute(
        self,
        user_id: str,
        page: PageRequest | None = None,
    ) -> ReportPage:
        """Return one page of reports for ``user_id``."""
        safe_page = ensure_safe_page(
            page,
            max_size=self._max_page_size,
            default_size=self._default_page_size,
        )
        result = self._report_store.find_all_for_user(user_id, safe_page)
        self._logger.info(
            f"Served {len(result.items)} reports for user={user_id} "
            f"page={safe_page.page} size={safe_page.size}"
        )
        return result


__all__ = ["ListReportsUseCase"]
