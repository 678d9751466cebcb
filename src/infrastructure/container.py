"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.report_store import ReportStorePort
from src.application.use_cases.apply_transaction import ApplyTransactionUseCase
from src.application.use_cases.delete_report import DeleteReportUseCase
from src.application.use_cases.get_report import GetReportUseCase
from src.application.use_cases.list_reports import ListReportsUseCase
from src.application.use_cases.summarize_range import SummarizeRangeUseCase
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.report_store import SqlAlchemyReportStore
from src.infrastructure.settings import ReportsSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_report_store(
    db_port: DatabaseEnginePort | None = None,
) -> ReportStorePort:
    """Return the SQL-backed report store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyReportStore(resolved_db, logger=get_app_logger())


def build_apply_transaction_use_case(
    report_store: ReportStorePort | None = None,
) -> ApplyTransactionUseCase:
    """Return the aggregation use case bound to the report store."""
    return ApplyTransactionUseCase(
        report_store or build_report_store(),
        logger=get_app_logger(),
    )


def build_get_report_use_case(
    report_store: ReportStorePort | None = None,
) -> GetReportUseCase:
    """Return the single report query."""
    return GetReportUseCase(report_store or build_report_store())


def build_list_reports_use_case(
    report_store: ReportStorePort | None = None,
    settings: ReportsSettings | None = None,
) -> ListReportsUseCase:
    """Return the paginated listing query with configured page sizes."""
    resolved_settings = settings or ReportsSettings.from_env()
    return ListReportsUseCase(
        report_store or build_report_store(),
        max_page_size=resolved_settings.max_page_size,
        default_page_size=resolved_settings.default_page_size,
    )


def build_summarize_range_use_case(
    report_store: ReportStorePort | None = None,
) -> SummarizeRangeUseCase:
    """Return the range summary query."""
    return SummarizeRangeUseCase(report_store or build_report_store())


def build_delete_report_use_case(
    report_store: ReportStorePort | None = None,
) -> DeleteReportUseCase:
    """Return the administrative delete operation."""
    return DeleteReportUseCase(
        report_store or build_report_store(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_report_store",
    "build_apply_transaction_use_case",
    "build_get_report_use_case",
    "build_list_reports_use_case",
    "build_summarize_range_use_case",
    "build_delete_report_use_case",
]
