"""
Break-even analysis and the financial ratios shown next to it.
"""

from decimal import ROUND_CEILING, Decimal
from typing import Any, Dict, Optional

from app.utilities.money import ZERO, non_negative_money, percentage, quantize_money, ratio, to_decimal


def _ceil_units(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def derive_variable_cost_per_unit(total_expense: Any, unit_count: int) -> Decimal:
    """Spread the period's expenses over the unit count; no units means no variable cost."""
    expense = non_negative_money(total_expense, "total_expense")
    if unit_count <= 0:
        return ZERO
    return quantize_money(expense / Decimal(unit_count))


def calculate_bep(
    fixed_costs: Any,
    variable_cost_per_unit: Any,
    selling_price_per_unit: Any,
    target_profit: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Break-even units and revenue.

    With a contribution margin of zero or less the break-even point can never be
    reached: units and revenue are reported as 0 and `unreachable` is True.
    """
    fixed = non_negative_money(fixed_costs, "fixed_costs")
    variable = non_negative_money(variable_cost_per_unit, "variable_cost_per_unit")
    price = non_negative_money(selling_price_per_unit, "selling_price_per_unit")
    target = non_negative_money(target_profit, "target_profit") if target_profit is not None else None

    margin = price - variable
    result: Dict[str, Any] = {
        "fixed_costs": fixed,
        "variable_cost_per_unit": variable,
        "selling_price_per_unit": price,
        "contribution_margin": margin,
        "unreachable": margin <= 0,
        "break_even_units": 0,
        "break_even_revenue": ZERO,
    }
    if target is not None:
        result.update({
            "target_profit": target,
            "target_profit_units": 0,
            "target_profit_revenue": ZERO,
        })

    if margin <= 0:
        return result

    units = _ceil_units(fixed / margin)
    result["break_even_units"] = units
    result["break_even_revenue"] = quantize_money(units * price)

    if target is not None:
        target_units = _ceil_units((fixed + target) / margin)
        result["target_profit_units"] = target_units
        result["target_profit_revenue"] = quantize_money(target_units * price)

    return result


def financial_ratios(
    total_income: Any,
    total_expense: Any,
    net_profit: Any,
    transaction_count: int,
    break_even_revenue: Any = ZERO,
    selling_price_per_unit: Any = ZERO,
) -> Dict[str, Any]:
    """Profit margin, cost ratio, ROI and progress towards break-even; a zero denominator gives 0."""
    income = to_decimal(total_income, "total_income")
    expense = to_decimal(total_expense, "total_expense")
    net = to_decimal(net_profit, "net_profit")
    bep_revenue = to_decimal(break_even_revenue, "break_even_revenue")
    price = to_decimal(selling_price_per_unit, "selling_price_per_unit")

    remaining_revenue = max(bep_revenue - income, ZERO)
    remaining_units = _ceil_units(remaining_revenue / price) if price > 0 else 0

    return {
        "profit_margin": percentage(net, income),
        "cost_ratio": percentage(expense, income),
        "roi": percentage(net, expense),
        "bep_progress": percentage(income, bep_revenue),
        "average_transaction_value": ratio(income, Decimal(transaction_count)),
        "remaining_revenue_to_bep": quantize_money(remaining_revenue),
        "remaining_units_to_bep": remaining_units,
    }
