"""Tests for the GetReportUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.get_report import GetReportUseCase
from src.domain.errors import MalformedPeriod, ReportNotFound
from tests.fakes import InMemoryReportStore, make_report


def test_execute_returns_stored_report() -> None:
    store = InMemoryReportStore([make_report("2024-01", "10.00", "2.50")])
    use_case = GetReportUseCase(store, logger=MagicMock())

    report = use_case.execute("u1", "2024-01")

    assert report.balance == Decimal("7.50")


def test_execute_raises_not_found_for_missing_bucket() -> None:
    use_case = GetReportUseCase(InMemoryReportStore(), logger=MagicMock())

    with pytest.raises(ReportNotFound) as exc_info:
        use_case.execute("u1", "2024-01")

    assert str(exc_info.value) == (
        "Report not found for user 'u1' and period '2024-01'"
    )


def test_execute_rejects_malformed_period_without_lookup() -> None:
    store = MagicMock()
    use_case = GetReportUseCase(store, logger=MagicMock())

    with pytest.raises(MalformedPeriod):
        use_case.execute("u1", "2099-99")

    store.find_by_user_and_period.assert_not_called()
