from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from app.models.transaction import TransactionKind
from app.utilities.category_distribution import UNCATEGORIZED, category_distribution


def tx(kind, amount, category_id=None):
    return SimpleNamespace(
        kind=TransactionKind(kind),
        amount=Decimal(amount),
        occurred_at=datetime(2026, 3, 1),
        category_id=category_id,
    )


CATEGORIES = [
    SimpleNamespace(id=1, name="Operational", color="#EF4444"),
    SimpleNamespace(id=2, name="Marketing", color="#F97316"),
    SimpleNamespace(id=3, name="Sales", color="#10B981"),
]


def test_buckets_by_category_with_uncategorized_fallback():
    rows = [
        tx("expense", "45000", 1),
        tx("expense", "30000", 2),
        tx("expense", "15000", None),
        tx("expense", "10000", 99),  # category was deleted
        tx("income", "500000", 3),
    ]
    result = category_distribution(rows, CATEGORIES, kind=TransactionKind.expense)

    assert result["kind"] == "expense"
    assert result["total"] == Decimal("100000")
    assert [(b["name"], b["value"], b["percentage"]) for b in result["buckets"]] == [
        ("Operational", Decimal("45000"), Decimal("45.00")),
        ("Marketing", Decimal("30000"), Decimal("30.00")),
        (UNCATEGORIZED, Decimal("25000"), Decimal("25.00")),
    ]


def test_bucket_values_sum_to_total_and_percentages_to_100():
    rows = [tx("income", "100", 3), tx("income", "100", None), tx("income", "100", 1)]
    result = category_distribution(rows, CATEGORIES, kind=TransactionKind.income)

    assert sum(b["value"] for b in result["buckets"]) == result["total"]
    assert abs(sum(b["percentage"] for b in result["buckets"]) - Decimal("100")) <= Decimal("0.05")


def test_zero_total_reports_zero_percentages():
    rows = [tx("expense", "0", 1), tx("expense", "0", 2)]
    result = category_distribution(rows, CATEGORIES, kind=TransactionKind.expense)

    assert result["total"] == Decimal("0")
    assert all(b["percentage"] == Decimal("0") for b in result["buckets"])


def test_no_transactions():
    result = category_distribution([], CATEGORIES, kind=TransactionKind.income)
    assert result["buckets"] == []
    assert result["total"] == Decimal("0")
