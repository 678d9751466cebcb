"""Tests for period key derivation and validation."""

from datetime import date, datetime

import pytest

from src.domain.errors import MalformedPeriod
from src.domain.services.periods import derive_period, validate_period


def test_derive_period_zero_pads_year_and_month() -> None:
    assert derive_period(date(2026, 2, 14)) == "2026-02"
    assert derive_period(date(987, 7, 1)) == "0987-07"


def test_derive_period_is_constant_within_a_month() -> None:
    """Every day of a month maps to the same key."""
    keys = {derive_period(date(2024, 2, day)) for day in range(1, 30)}
    assert keys == {"2024-02"}


def test_derive_period_differs_for_adjacent_months() -> None:
    assert derive_period(date(2024, 1, 31)) == "2024-01"
    assert derive_period(date(2024, 2, 1)) == "2024-02"
    assert derive_period(date(2023, 12, 31)) != derive_period(date(2024, 1, 1))


def test_derive_period_accepts_datetimes() -> None:
    assert derive_period(datetime(2024, 11, 30, 23, 59)) == "2024-11"


@pytest.mark.parametrize("value", ["2024-01", "1999-12", "2099-10"])
def test_validate_period_accepts_month_keys(value: str) -> None:
    assert validate_period(value) == value


@pytest.mark.parametrize(
    "value",
    [
        "2099-99",
        "2024-00",
        "2024-13",
        "2024-1",
        "24-01",
        "2024/01",
        "2024-01\n",
        "",
        None,
    ],
)
def test_validate_period_rejects_malformed_values(value) -> None:
    with pytest.raises(MalformedPeriod):
        validate_period(value)
