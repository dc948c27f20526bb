"""
Financial aggregation: period totals and monthly trends over transaction rows.

Rows only need `kind`, `amount` and `occurred_at` attributes, so ORM objects
and plain test doubles both work.
"""

from datetime import date
from typing import Any, Dict, Iterable, List

from app.models.transaction import TransactionKind
from app.utilities.dates import add_months, at_midnight, in_range, month_start, to_naive_utc
from app.utilities.money import ZERO, quantize_money, to_decimal


def summarize_transactions(transactions: Iterable[Any]) -> Dict[str, Any]:
    """
    Totals for an already filtered set of transactions.
    An empty set gives zeros; net_profit is always total_income - total_expense.
    """
    total_income = ZERO
    total_expense = ZERO
    count = 0
    for tx in transactions:
        amount = to_decimal(tx.amount)
        if tx.kind == TransactionKind.income:
            total_income += amount
        elif tx.kind == TransactionKind.expense:
            total_expense += amount
        count += 1

    total_income = quantize_money(total_income)
    total_expense = quantize_money(total_expense)
    return {
        "total_income": total_income,
        "total_expense": total_expense,
        "net_profit": total_income - total_expense,
        "transaction_count": count,
    }


def monthly_trend(transactions: Iterable[Any], reference: date, months: int = 6) -> List[Dict[str, Any]]:
    """Income, expense and net per calendar month, oldest first, ending with the reference month."""
    last = month_start(reference)
    first = add_months(last, -(months - 1))
    buckets: Dict[date, List[Any]] = {add_months(first, i): [] for i in range(months)}

    start, end = at_midnight(first), at_midnight(add_months(last, 1))
    for tx in transactions:
        if not in_range(tx.occurred_at, start, end):
            continue
        buckets[month_start(to_naive_utc(tx.occurred_at).date())].append(tx)

    trend = []
    for month, rows in buckets.items():
        totals = summarize_transactions(rows)
        trend.append({
            "month": month.strftime("%Y-%m"),
            "income": totals["total_income"],
            "expense": totals["total_expense"],
            "net": totals["net_profit"],
            "transaction_count": totals["transaction_count"],
        })
    return trend


def count_by_kind(transactions: Iterable[Any], kind: TransactionKind) -> int:
    return sum(1 for tx in transactions if tx.kind == kind)

