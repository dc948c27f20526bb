"""
Category distribution: per-category totals and shares for charting.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, Iterable

from app.models.transaction import TransactionKind
from app.utilities.money import ZERO, percentage, quantize_money, to_decimal

UNCATEGORIZED = "Uncategorized"
UNCATEGORIZED_COLOR = "#9CA3AF"


def category_distribution(
    transactions: Iterable[Any],
    categories: Iterable[Any],
    kind: TransactionKind,
) -> Dict[str, Any]:
    """
    Bucket transactions of one kind by category name and sum their amounts.

    Transactions without a category, or whose category no longer exists, land in
    the "Uncategorized" bucket. Each bucket carries its percentage of the total;
    with a zero total every percentage is zero. Buckets are ordered by value
    (largest first), then by name.
    """
    lookup = {category.id: category for category in categories}

    values: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    colors: Dict[str, str] = {}
    for tx in transactions:
        if tx.kind != kind:
            continue
        category = lookup.get(tx.category_id) if tx.category_id is not None else None
        if category is None:
            name, color = UNCATEGORIZED, UNCATEGORIZED_COLOR
        else:
            name, color = category.name, category.color
        values[name] += to_decimal(tx.amount)
        colors.setdefault(name, color)

    total = quantize_money(sum(values.values(), ZERO))
    buckets = [
        {
            "name": name,
            "color": colors[name],
            "value": quantize_money(value),
            "percentage": percentage(value, total),
        }
        for name, value in sorted(values.items(), key=lambda item: (-item[1], item[0]))
    ]
    return {
        "kind": kind.value,
        "total": total,
        "buckets": buckets,
    }
