"""Application ports package."""

from .database import DatabaseEnginePort
from .report_store import ReportStorePort

__all__ = [
    "DatabaseEnginePort",
    "ReportStorePort",
]
