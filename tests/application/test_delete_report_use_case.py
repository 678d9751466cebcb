"""Tests for the DeleteReportUseCase."""

from unittest.mock import MagicMock

import pytest

from src.application.use_cases.delete_report import DeleteReportUseCase
from src.domain.errors import MalformedPeriod, ReportNotFound
from tests.fakes import InMemoryReportStore, make_report


def test_execute_deletes_existing_report() -> None:
    store = InMemoryReportStore([make_report("2024-01", "1.00", "0.00")])
    use_case = DeleteReportUseCase(store, logger=MagicMock())

    use_case.execute("u1", "2024-01")

    assert store.get("u1", "2024-01") is None
    assert store.call_names() == [
        "lock_bucket",
        "find_by_user_and_period",
        "delete",
    ]


def test_execute_raises_not_found_for_missing_report() -> None:
    store = InMemoryReportStore([make_report("2024-01", "1.00", "0.00")])
    use_case = DeleteReportUseCase(store, logger=MagicMock())

    with pytest.raises(ReportNotFound):
        use_case.execute("u1", "2024-02")

    assert "delete" not in store.call_names()
    assert store.locked == []


def test_execute_rejects_malformed_period() -> None:
    store = InMemoryReportStore()
    use_case = DeleteReportUseCase(store, logger=MagicMock())

    with pytest.raises(MalformedPeriod):
        use_case.execute("u1", "January")

    assert store.calls == []
