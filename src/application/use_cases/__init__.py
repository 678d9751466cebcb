"""Application use cases package."""

from .apply_transaction import ApplyTransactionUseCase
from .delete_report import DeleteReportUseCase
from .get_report import GetReportUseCase
from .list_reports import ListReportsUseCase
from .pagination import ensure_safe_page
from .summarize_range import SummarizeRangeUseCase

__all__ = [
    "ApplyTransactionUseCase",
    "DeleteReportUseCase",
    "GetReportUseCase",
    "ListReportsUseCase",
    "SummarizeRangeUseCase",
    "ensure_safe_page",
]
