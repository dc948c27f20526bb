from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.utilities.dates import add_months, resolve_period, resolve_range, to_naive_utc
from app.utilities.money import percentage, ratio, to_decimal, to_money


def test_decimal_strings_parse_losslessly():
    assert to_decimal("0.10") + to_decimal("0.20") == Decimal("0.30")
    assert to_decimal("123456789012.34") == Decimal("123456789012.34")


def test_floats_go_through_their_shortest_repr():
    assert to_decimal(0.1) == Decimal("0.1")


@pytest.mark.parametrize("value", ["abc", "", None, True, "NaN", "Infinity"])
def test_invalid_amounts_are_rejected(value):
    with pytest.raises(ValidationError):
        to_decimal(value)


def test_to_money_rounds_half_up():
    assert to_money("10.005") == Decimal("10.01")
    assert to_money(7) == Decimal("7.00")


def test_ratio_and_percentage_are_zero_for_zero_denominator():
    assert ratio(Decimal("5"), Decimal("0")) == Decimal("0")
    assert percentage(Decimal("5"), Decimal("0")) == Decimal("0")
    assert percentage(Decimal("1"), Decimal("3")) == Decimal("33.33")


def test_add_months_crosses_year_boundaries():
    assert add_months(date(2026, 1, 1), -1) == date(2025, 12, 1)
    assert add_months(date(2025, 11, 1), 3) == date(2026, 2, 1)


@pytest.mark.parametrize("period,start,end", [
    ("current-month", datetime(2026, 1, 1), datetime(2026, 2, 1)),
    ("last-month", datetime(2025, 12, 1), datetime(2026, 1, 1)),
    ("last-3-months", datetime(2025, 11, 1), datetime(2026, 2, 1)),
    ("current-year", datetime(2026, 1, 1), datetime(2027, 1, 1)),
])
def test_named_periods(period, start, end):
    assert resolve_period(period, date(2026, 1, 15)) == (start, end)


def test_unknown_period_is_rejected():
    with pytest.raises(ValidationError):
        resolve_period("all-time", date(2026, 1, 15))


def test_a_range_is_always_required():
    with pytest.raises(ValidationError):
        resolve_range(None, None)
    with pytest.raises(ValidationError):
        resolve_range(datetime(2026, 1, 1), None)


def test_range_end_before_start_is_rejected():
    with pytest.raises(ValidationError):
        resolve_range(datetime(2026, 2, 1), datetime(2026, 1, 1))


def test_period_and_explicit_range_are_exclusive():
    with pytest.raises(ValidationError):
        resolve_range(datetime(2026, 1, 1), datetime(2026, 2, 1), period="current-month")


def test_aware_datetimes_are_normalised_to_naive_utc():
    wib = timezone(timedelta(hours=7))
    assert to_naive_utc(datetime(2026, 3, 1, 7, 0, tzinfo=wib)) == datetime(2026, 3, 1, 0, 0)
