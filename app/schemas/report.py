from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.models.transaction import TransactionKind
from app.schemas.common import Money


class ReportRange(BaseModel):
    start: datetime
    end: datetime


class FinancialSummaryResponse(ReportRange):
    total_income: Money
    total_expense: Money
    net_profit: Money
    transaction_count: int


class CategoryBucket(BaseModel):
    name: str
    color: str
    value: Money
    percentage: Money


class CategoryDistributionResponse(ReportRange):
    kind: TransactionKind
    total: Money
    buckets: List[CategoryBucket]


class MonthlyTotals(BaseModel):
    month: str
    income: Money
    expense: Money
    net: Money
    transaction_count: int


class MonthlyTrendResponse(BaseModel):
    months: List[MonthlyTotals]


class BreakEvenResponse(ReportRange):
    fixed_costs: Money
    variable_cost_per_unit: Money
    selling_price_per_unit: Money
    contribution_margin: Money
    unreachable: bool
    break_even_units: int
    break_even_revenue: Money
    target_profit: Optional[Money] = None
    target_profit_units: Optional[int] = None
    target_profit_revenue: Optional[Money] = None
    unit_basis: str
    unit_count: Optional[int] = None


class FinancialRatiosResponse(ReportRange):
    total_income: Money
    total_expense: Money
    net_profit: Money
    transaction_count: int
    profit_margin: Money
    cost_ratio: Money
    roi: Money
    bep_progress: Money
    average_transaction_value: Money
    remaining_revenue_to_bep: Money
    remaining_units_to_bep: int
