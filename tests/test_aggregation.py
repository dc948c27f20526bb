from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.models.transaction import TransactionKind
from app.utilities.aggregation import count_by_kind, monthly_trend, summarize_transactions


def tx(kind, amount, occurred_at=datetime(2026, 3, 10), category_id=None):
    return SimpleNamespace(
        kind=TransactionKind(kind),
        amount=amount,
        occurred_at=occurred_at,
        category_id=category_id,
    )


def test_summary_scenario():
    summary = summarize_transactions([
        tx("income", Decimal("100000")),
        tx("expense", Decimal("40000")),
        tx("income", Decimal("25000")),
    ])
    assert summary["total_income"] == Decimal("125000")
    assert summary["total_expense"] == Decimal("40000")
    assert summary["net_profit"] == Decimal("85000")
    assert summary["transaction_count"] == 3


def test_empty_set_gives_zeros():
    summary = summarize_transactions([])
    assert summary == {
        "total_income": Decimal("0"),
        "total_expense": Decimal("0"),
        "net_profit": Decimal("0"),
        "transaction_count": 0,
    }


def test_string_amounts_do_not_drift():
    rows = [tx("income", "0.10") for _ in range(10)] + [tx("expense", "0.30")]
    summary = summarize_transactions(rows)
    assert summary["total_income"] == Decimal("1.00")
    assert summary["net_profit"] == Decimal("0.70")


@pytest.mark.parametrize("amounts", [
    [("income", "19.99"), ("expense", "0.01"), ("expense", "5.55")],
    [("expense", "1000000.00")],
    [("income", "0.01")] * 7,
])
def test_net_profit_is_income_minus_expense(amounts):
    summary = summarize_transactions([tx(kind, amount) for kind, amount in amounts])
    assert summary["total_income"] - summary["total_expense"] == summary["net_profit"]
    assert summary["transaction_count"] == len(amounts)


def test_count_by_kind():
    rows = [tx("income", 1), tx("expense", 1), tx("income", 1)]
    assert count_by_kind(rows, TransactionKind.income) == 2


def test_monthly_trend_fills_empty_months_oldest_first():
    rows = [
        tx("income", "500", datetime(2026, 1, 5)),
        tx("expense", "200", datetime(2026, 1, 31, 23, 59)),
        tx("income", "300", datetime(2026, 3, 1)),
        tx("income", "999", datetime(2025, 12, 31)),  # before the window
        tx("income", "999", datetime(2026, 4, 1)),  # after the window
    ]
    trend = monthly_trend(rows, date(2026, 3, 20), months=3)

    assert [m["month"] for m in trend] == ["2026-01", "2026-02", "2026-03"]
    assert trend[0]["income"] == Decimal("500")
    assert trend[0]["expense"] == Decimal("200")
    assert trend[0]["net"] == Decimal("300")
    assert trend[1]["transaction_count"] == 0
    assert trend[1]["net"] == Decimal("0")
    assert trend[2]["income"] == Decimal("300")
