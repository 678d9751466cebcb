"""Tests for the ApplyTransactionUseCase."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.apply_transaction import ApplyTransactionUseCase
from src.domain.errors import InvalidEvent, StaleReport, StorageFailure
from src.domain.models.transactions import TransactionEvent, TransactionType
from tests.fakes import InMemoryReportStore, make_report


def _event(
    kind=TransactionType.INCOME,
    amount: str = "1000.00",
    on: date = date(2024, 1, 15),
    user_id: str | None = "u1",
    transaction_id: int = 1,
) -> TransactionEvent:
    return TransactionEvent(
        transaction_id=transaction_id,
        user_id=user_id,
        type=kind,
        amount=Decimal(amount),
        date=on,
        category="General",
    )


def test_creates_report_for_first_event_of_a_bucket() -> None:
    """A new bucket is created with zero totals, then accumulated."""
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    result = use_case.execute(_event())

    stored = store.get("u1", "2024-01")
    assert stored == result
    assert stored.report_id == 1
    assert stored.total_income == Decimal("1000.00")
    assert stored.total_expense == Decimal("0.00")
    assert stored.balance == Decimal("1000.00")


def test_zero_report_is_saved_before_accumulation() -> None:
    """The created report gets an identity before it is mutated."""
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    use_case.execute(_event())

    assert store.call_names() == [
        "lock_bucket",
        "find_by_user_and_period",
        "save",
        "save",
    ]
    first_save = store.calls[2][1]
    second_save = store.calls[3][1]
    assert first_save.report_id is None
    assert first_save.total_income == Decimal("0.00")
    assert second_save.report_id == 1
    assert second_save.total_income == Decimal("1000.00")


def test_expense_updates_existing_report() -> None:
    store = InMemoryReportStore([make_report("2024-01", "5000.00", "3000.00")])
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    use_case.execute(
        _event(TransactionType.EXPENSE, "500.00", date(2024, 1, 20))
    )

    stored = store.get("u1", "2024-01")
    assert stored.report_id == 1
    assert stored.total_income == Decimal("5000.00")
    assert stored.total_expense == Decimal("3500.00")
    assert stored.balance == Decimal("1500.00")
    assert store.call_names().count("save") == 1


def test_replaying_an_event_accumulates_twice() -> None:
    """Events are not deduplicated by transaction id."""
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())
    event = _event(amount="250.00")

    use_case.execute(event)
    use_case.execute(event)

    assert store.get("u1", "2024-01").total_income == Decimal("500.00")


def test_events_are_bucketed_by_user_and_month() -> None:
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    use_case.execute(_event(amount="1.00", on=date(2024, 1, 31)))
    use_case.execute(_event(amount="2.00", on=date(2024, 2, 1)))
    use_case.execute(_event(amount="4.00", on=date(2024, 2, 1), user_id="u2"))

    assert store.get("u1", "2024-01").total_income == Decimal("1.00")
    assert store.get("u1", "2024-02").total_income == Decimal("2.00")
    assert store.get("u2", "2024-02").total_income == Decimal("4.00")


def test_balance_invariant_holds_after_every_event() -> None:
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())
    kinds = [TransactionType.INCOME, TransactionType.EXPENSE]

    for index in range(40):
        report = use_case.execute(
            _event(kinds[index % 2], f"{index}.{index % 10}5")
        )
        assert report.balance == report.total_income - report.total_expense


def test_unknown_type_creates_bucket_without_changing_totals() -> None:
    logger = MagicMock()
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=logger)

    use_case.execute(_event(kind="TRANSFER"))

    stored = store.get("u1", "2024-01")
    assert stored.total_income == Decimal("0.00")
    assert stored.total_expense == Decimal("0.00")
    logger.warning.assert_called_once()


def test_invalid_event_is_rejected_before_touching_the_store() -> None:
    store = InMemoryReportStore()
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    with pytest.raises(InvalidEvent):
        use_case.execute(_event(user_id=" "))

    assert store.calls == []


def test_storage_failures_propagate_and_release_the_lock() -> None:
    store = InMemoryReportStore()
    store.save = MagicMock(side_effect=StorageFailure("db down"))
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    with pytest.raises(StorageFailure):
        use_case.execute(_event())

    assert store.locked == []


def test_get_or_create_returns_existing_report_without_saving() -> None:
    store = InMemoryReportStore([make_report("2024-05", "1.00", "0.00")])
    use_case = ApplyTransactionUseCase(store, logger=MagicMock())

    report = use_case.get_or_create("u1", "2024-05")

    assert report.report_id == 1
    assert store.call_names() == ["find_by_user_and_period"]


class _ConflictingStore(InMemoryReportStore):
    """Store whose next updates fail as if another worker saved first."""

    def __init__(self, reports, conflicts: int) -> None:
        super().__init__(reports)
        self._conflicts = conflicts

    def save(self, report):
        if report.report_id is not None and self._conflicts:
            self._conflicts -= 1
            current = self.get(report.user_id, report.period)
            super().save(
                replace(
                    current,
                    total_income=current.total_income + Decimal("5.00"),
                    balance=current.balance + Decimal("5.00"),
                )
            )
            raise StaleReport("changed concurrently")
        return super().save(report)


def test_stale_report_is_retried_from_a_fresh_read() -> None:
    store = _ConflictingStore([make_report("2024-01", "0.00", "0.00")], 1)
    logger = MagicMock()
    use_case = ApplyTransactionUseCase(store, logger=logger)

    result = use_case.execute(_event(amount="10.00"))

    assert result.total_income == Decimal("15.00")
    assert result.balance == Decimal("15.00")
    assert store.call_names().count("lock_bucket") == 2
    assert store.locked == []
    assert "Retrying transaction 1" in logger.warning.call_args.args[0]


def test_stale_report_is_raised_after_max_attempts() -> None:
    store = _ConflictingStore([make_report("2024-01", "0.00", "0.00")], 5)
    use_case = ApplyTransactionUseCase(
        store,
        logger=MagicMock(),
        max_attempts=2,
    )

    with pytest.raises(StaleReport):
        use_case.execute(_event(amount="10.00"))

    assert store.call_names().count("lock_bucket") == 2
    assert store.get("u1", "2024-01").total_income == Decimal("10.00")
