"""
Reports: reads the owner's records for a period and hands them to the
aggregation, category, break-even and ratio calculations.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.logger_config import logger
from app.models.transaction import TransactionKind
from app.services.business_settings_service import get_business_settings
from app.services.category_service import get_categories
from app.services.transaction_service import get_transactions
from app.utilities.aggregation import count_by_kind, monthly_trend, summarize_transactions
from app.utilities.bep import calculate_bep, derive_variable_cost_per_unit, financial_ratios
from app.utilities.category_distribution import category_distribution
from app.utilities.dates import add_months, at_midnight, month_start


class FinancialReportService:
    """
    Period reports for one owner.
    Every method takes an explicit [start, end) range; callers resolve named periods first.
    """

    def __init__(self, db: Session):
        self.db = db

    # ================= SUMMARY ===================

    def financial_summary(self, owner_id: int, start: datetime, end: datetime) -> Dict[str, Any]:
        transactions = get_transactions(self.db, owner_id, start=start, end=end)
        summary = summarize_transactions(transactions)
        logger.debug(f"Summary for user {owner_id} [{start} - {end}): {summary}")
        return {"start": start, "end": end, **summary}

    # ================= CATEGORIES ===================

    def category_distribution(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
        kind: TransactionKind,
    ) -> Dict[str, Any]:
        transactions = get_transactions(self.db, owner_id, start=start, end=end)
        categories = get_categories(self.db, owner_id)
        distribution = category_distribution(transactions, categories, kind=kind)
        return {"start": start, "end": end, **distribution}

    # ================= MONTHLY TREND ===================

    def monthly_trend(self, owner_id: int, months: int = 6, reference: Optional[date] = None) -> Dict[str, Any]:
        if not 1 <= months <= settings.MONTHLY_TREND_MAX_MONTHS:
            raise ValidationError(f"months must be between 1 and {settings.MONTHLY_TREND_MAX_MONTHS}")

        reference = reference or date.today()
        last = month_start(reference)
        start = at_midnight(add_months(last, -(months - 1)))
        end = at_midnight(add_months(last, 1))

        transactions = get_transactions(self.db, owner_id, start=start, end=end)
        return {"months": monthly_trend(transactions, reference, months)}

    # ================= BREAK EVEN ===================

    def break_even(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
        units: Optional[int] = None,
        variable_cost_per_unit: Optional[Decimal] = None,
    ) -> Dict[str, Any]:
        """
        Break-even point from the owner's business settings and the period's expenses.

        The variable cost per unit is, in order of preference: the value passed by
        the caller, the period's total expense spread over `units`, or the total
        expense spread over the number of income transactions. `unit_basis` in the
        result says which one was used.
        """
        if units is not None and units < 0:
            raise ValidationError("units must not be negative")

        business = get_business_settings(self.db, owner_id)
        transactions = get_transactions(self.db, owner_id, start=start, end=end)
        summary = summarize_transactions(transactions)

        unit_count: Optional[int]
        if variable_cost_per_unit is not None:
            unit_basis, unit_count = "variable_cost_override", None
            variable = variable_cost_per_unit
        else:
            if units is not None:
                unit_basis, unit_count = "explicit", units
            else:
                unit_basis = "income_transactions"
                unit_count = count_by_kind(transactions, TransactionKind.income)
            variable = derive_variable_cost_per_unit(summary["total_expense"], unit_count)

        result = calculate_bep(
            business.fixed_costs,
            variable,
            business.average_selling_price,
            target_profit=business.target_profit,
        )
        if result["unreachable"]:
            logger.debug(f"Break-even unreachable for user {owner_id}: margin {result['contribution_margin']}")

        return {
            "start": start,
            "end": end,
            **result,
            "unit_basis": unit_basis,
            "unit_count": unit_count,
        }

    # ================= RATIOS ===================

    def ratios(self, owner_id: int, start: datetime, end: datetime) -> Dict[str, Any]:
        summary = self.financial_summary(owner_id, start, end)
        bep = self.break_even(owner_id, start, end)
        ratios = financial_ratios(
            summary["total_income"],
            summary["total_expense"],
            summary["net_profit"],
            summary["transaction_count"],
            break_even_revenue=bep["break_even_revenue"],
            selling_price_per_unit=bep["selling_price_per_unit"],
        )
        return {**summary, **ratios}
