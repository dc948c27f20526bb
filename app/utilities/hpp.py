"""
HPP (Harga Pokok Produksi): cost of goods produced, in total and per unit.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from app.core.exceptions import ValidationError
from app.utilities.money import HUNDRED, MAX_MONEY, ZERO, non_negative_money, quantize_money


def calculate_hpp(
    raw_material_cost: Any,
    labor_cost: Any,
    overhead_cost: Any,
    total_units: int,
    selling_price: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    total_hpp = raw material + labor + overhead; hpp_per_unit = total_hpp / total_units.

    Inputs are validated before any arithmetic: costs must be non-negative and
    total_units a whole number of at least 1; the total must fit a Numeric(15, 2)
    column. When a selling price per unit is given, per-unit profit, profit
    margin (on price) and markup (on cost) are added; each ratio is zero when
    its denominator is zero.
    """
    if isinstance(total_units, bool) or not isinstance(total_units, int):
        raise ValidationError("total_units must be a whole number")
    if total_units < 1:
        raise ValidationError("total_units must be at least 1")

    raw = non_negative_money(raw_material_cost, "raw_material_cost")
    labor = non_negative_money(labor_cost, "labor_cost")
    overhead = non_negative_money(overhead_cost, "overhead_cost")

    total_hpp = raw + labor + overhead
    if total_hpp > MAX_MONEY:
        raise ValidationError(f"total cost must not exceed {MAX_MONEY}")
    hpp_per_unit = quantize_money(total_hpp / Decimal(total_units))

    result: Dict[str, Any] = {
        "raw_material_cost": raw,
        "labor_cost": labor,
        "overhead_cost": overhead,
        "total_units": total_units,
        "total_hpp": total_hpp,
        "hpp_per_unit": hpp_per_unit,
    }

    if selling_price is not None:
        price = non_negative_money(selling_price, "selling_price")
        profit = price - hpp_per_unit
        result.update({
            "selling_price": price,
            "profit_per_unit": profit,
            "profit_margin": quantize_money(profit / price * HUNDRED) if price != 0 else ZERO,
            "markup": quantize_money(profit / hpp_per_unit * HUNDRED) if hpp_per_unit != 0 else ZERO,
        })

    return result
