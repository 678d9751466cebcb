"""SQLAlchemy-backed store for monthly reports."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
import hashlib
import math
import threading

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    UniqueConstraint,
    delete,
    func,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.report_store import ReportStorePort
from src.domain.errors import StaleReport, StorageFailure
from src.domain.models.reports import MonthlyReport, PageRequest, ReportPage
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import to_money


metadata = MetaData()

monthly_reports = Table(
    "monthly_reports",
    metadata,
    Column("report_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(128), nullable=False),
    Column("period", String(7), nullable=False),
    Column("total_income", Numeric(19, 2), nullable=False),
    Column("total_expense", Numeric(19, 2), nullable=False),
    Column("balance", Numeric(19, 2), nullable=False),
    Column("version", Integer, nullable=False, default=1),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("user_id", "period", name="uq_monthly_reports_bucket"),
)

ADVISORY_LOCK_SQL = text("SELECT pg_advisory_lock(:key)")
ADVISORY_UNLOCK_SQL = text("SELECT pg_advisory_unlock(:key)")

# Shared by every store in the process, keyed by (user_id, period).
_bucket_locks: dict[tuple[str, str], list] = {}
_bucket_locks_guard = threading.Lock()


def _advisory_key(user_id: str, period: str) -> int:
    """Return a stable signed 64-bit key for a bucket."""
    digest = hashlib.blake2b(
        f"{user_id}|{period}".encode("utf-8"),
        digest_size=8,
    ).digest()
    return int.from_bytes(digest, "big", signed=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyReportStore(ReportStorePort):
    """Report store backed by a SQL database through SQLAlchemy Core.

    Buckets are serialized with a process-wide lock per (user_id, period)
    that all store instances share. On PostgreSQL a session advisory lock on
    the same key is also held, so consumers in separate processes are
    ordered too. Every update is additionally guarded by the row's
    ``version``: a write based on a stale read raises ``StaleReport``
    instead of overwriting a concurrent change, which covers backends
    without advisory locks such as SQLite.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the reports engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._logger.error(f"Report store failed to {action}: {exc}")
            raise StorageFailure(f"Failed to {action}: {exc}") from exc

    def prepare_storage(self) -> None:
        """Create the monthly_reports table if it does not exist."""
        engine = self._db_port.get_reports_engine()
        with self._storage_errors("create the monthly_reports table"):
            metadata.create_all(engine, tables=[monthly_reports])

    @staticmethod
    def _acquire_bucket_lock(key: tuple[str, str]) -> None:
        with _bucket_locks_guard:
            entry = _bucket_locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                _bucket_locks[key] = entry
            entry[1] += 1
        entry[0].acquire()

    @staticmethod
    def _release_bucket_lock(key: tuple[str, str]) -> None:
        with _bucket_locks_guard:
            entry = _bucket_locks[key]
            entry[0].release()
            entry[1] -= 1
            if entry[1] == 0:
                del _bucket_locks[key]

    @contextmanager
    def lock_bucket(self, user_id: str, period: str) -> Iterator[None]:
        """Hold the per-bucket lock for the duration of the block."""
        key = (user_id, period)
        self._acquire_bucket_lock(key)
        try:
            engine = self._db_port.get_reports_engine()
            if engine.dialect.name != "postgresql":
                yield
                return
            params = {"key": _advisory_key(user_id, period)}
            with self._storage_errors("lock report bucket"):
                conn = engine.connect()
                try:
                    conn.execute(ADVISORY_LOCK_SQL, params)
                except SQLAlchemyError:
                    conn.close()
                    raise
            try:
                yield
            finally:
                with self._storage_errors("unlock report bucket"):
                    try:
                        conn.execute(ADVISORY_UNLOCK_SQL, params)
                    finally:
                        conn.close()
        finally:
            self._release_bucket_lock(key)

    def find_by_user_and_period(
        self,
        user_id: str,
        period: str,
    ) -> MonthlyReport | None:
        """Return the report for a bucket, or None."""
        query = select(monthly_reports).where(
            monthly_reports.c.user_id == user_id,
            monthly_reports.c.period == period,
        )
        engine = self._db_port.get_reports_engine()
        with self._storage_errors("read report"):
            with engine.connect() as conn:
                row = conn.execute(query).first()
        return self._to_report(row) if row is not None else None

    def save(self, report: MonthlyReport) -> MonthlyReport:
        """Insert a new report or update an existing one by id.

        Updates only apply when the stored version still matches
        ``report.version``.

        Returns:
            MonthlyReport: Stored report carrying id, version and timestamps.

        Raises:
            StaleReport: If the bucket was created, or the report changed,
            since it was read.
            StorageFailure: On database errors or an update of a report
            that no longer exists.
        """
        now = _utcnow()
        values = {
            "user_id": report.user_id,
            "period": report.period,
            "total_income": to_money(report.total_income),
            "total_expense": to_money(report.total_expense),
            "balance": to_money(report.balance),
            "updated_at": now,
        }
        engine = self._db_port.get_reports_engine()
        if report.report_id is None:
            created_at = report.created_at or now
            with self._storage_errors("insert report"):
                try:
                    with engine.begin() as conn:
                        result = conn.execute(
                            insert(monthly_reports).values(
                                created_at=created_at,
                                version=1,
                                **values,
                            )
                        )
                        report_id = result.inserted_primary_key[0]
                except IntegrityError as exc:
                    self._logger.warning(
                        f"Report for user={report.user_id} "
                        f"period={report.period} already exists"
                    )
                    raise StaleReport(
                        f"Report for user '{report.user_id}' and period "
                        f"'{report.period}' was created concurrently"
                    ) from exc
            return self._stored_copy(report, values, report_id, 1, created_at)

        version = report.version + 1
        current = None
        with self._storage_errors("update report"):
            with engine.begin() as conn:
                result = conn.execute(
                    update(monthly_reports)
                    .where(
                        monthly_reports.c.report_id == report.report_id,
                        monthly_reports.c.version == report.version,
                    )
                    .values(version=version, **values)
                )
                if result.rowcount == 0:
                    current = conn.execute(
                        select(monthly_reports.c.version).where(
                            monthly_reports.c.report_id == report.report_id
                        )
                    ).first()
        if result.rowcount == 0:
            if current is not None:
                message = (
                    f"Report {report.report_id} is at version "
                    f"{current.version}, not {report.version}"
                )
                self._logger.warning(message)
                raise StaleReport(message)
            raise StorageFailure(
                f"Report {report.report_id} no longer exists"
            )
        return self._stored_copy(
            report,
            values,
            report.report_id,
            version,
            report.created_at,
        )

    def find_range_ordered(
        self,
        user_id: str,
        start_period: str,
        end_period: str,
    ) -> list[MonthlyReport]:
        """Return reports within the inclusive range, ascending by period."""
        query = (
            select(monthly_reports)
            .where(
                monthly_reports.c.user_id == user_id,
                monthly_reports.c.period >= start_period,
                monthly_reports.c.period <= end_period,
            )
            .order_by(monthly_reports.c.period.asc())
        )
        engine = self._db_port.get_reports_engine()
        with self._storage_errors("read report range"):
            with engine.connect() as conn:
                rows = conn.execute(query).all()
        return [self._to_report(row) for row in rows]

    def find_all_for_user(
        self,
        user_id: str,
        page: PageRequest,
    ) -> ReportPage:
        """Return one page of a user's reports, newest period first."""
        count_query = (
            select(func.count())
            .select_from(monthly_reports)
            .where(monthly_reports.c.user_id == user_id)
        )
        page_query = (
            select(monthly_reports)
            .where(monthly_reports.c.user_id == user_id)
            .order_by(monthly_reports.c.period.desc())
            .limit(page.size)
            .offset(page.page * page.size)
        )
        engine = self._db_port.get_reports_engine()
        with self._storage_errors("list reports"):
            with engine.connect() as conn:
                total = conn.execute(count_query).scalar_one()
                rows = conn.execute(page_query).all()
        total_pages = math.ceil(total / page.size) if page.size else 0
        return ReportPage(
            items=[self._to_report(row) for row in rows],
            page=page.page,
            size=page.size,
            total_elements=total,
            total_pages=total_pages,
            is_last=page.page >= total_pages - 1,
        )

    def delete(self, report: MonthlyReport) -> None:
        """Remove a stored report by id."""
        engine = self._db_port.get_reports_engine()
        with self._storage_errors("delete report"):
            with engine.begin() as conn:
                conn.execute(
                    delete(monthly_reports).where(
                        monthly_reports.c.report_id == report.report_id
                    )
                )

    @staticmethod
    def _stored_copy(
        report: MonthlyReport,
        values: dict,
        report_id: int,
        version: int,
        created_at: datetime | None,
    ) -> MonthlyReport:
        return MonthlyReport(
            report_id=report_id,
            user_id=report.user_id,
            period=report.period,
            total_income=values["total_income"],
            total_expense=values["total_expense"],
            balance=values["balance"],
            version=version,
            created_at=created_at,
            updated_at=values["updated_at"],
        )

    @staticmethod
    def _to_report(row) -> MonthlyReport:
        return MonthlyReport(
            report_id=row.report_id,
            user_id=row.user_id,
            period=row.period,
            total_income=to_money(row.total_income),
            total_expense=to_money(row.total_expense),
            balance=to_money(row.balance),
            version=row.version,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


__all__ = [
    "SqlAlchemyReportStore",
    "monthly_reports",
    "metadata",
]
