from datetime import date, datetime
from decimal import Decimal
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, Tuple

from app.core.dependencies import get_db, get_current_user
from app.models.transaction import TransactionKind
from app.models.user import User
from app.schemas.report import (
    BreakEvenResponse,
    CategoryDistributionResponse,
    FinancialRatiosResponse,
    FinancialSummaryResponse,
    MonthlyTrendResponse,
)
from app.services.report_service import FinancialReportService
from app.utilities.dates import REPORT_PERIODS, resolve_range

router = APIRouter()


def get_report_range(
    start: Optional[datetime] = Query(None, description="Inclusive start of the period"),
    end: Optional[datetime] = Query(None, description="Exclusive end of the period"),
    period: Optional[str] = Query(None, description=f"One of: {', '.join(REPORT_PERIODS)}"),
    reference_date: Optional[date] = Query(None, description="Anchor date for period, defaults to today"),
) -> Tuple[datetime, datetime]:
    return resolve_range(start, end, period=period, reference=reference_date)


@router.get("/financial-summary", response_model=FinancialSummaryResponse)
def financial_summary(
    report_range: Tuple[datetime, datetime] = Depends(get_report_range),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Total income, total expense, net profit and transaction count for the period."""
    start, end = report_range
    return FinancialReportService(db).financial_summary(current_user.id, start, end)


@router.get("/category-distribution", response_model=CategoryDistributionResponse)
def category_distribution(
    kind: TransactionKind = Query(..., description="income or expense; the two kinds are never mixed"),
    report_range: Tuple[datetime, datetime] = Depends(get_report_range),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    start, end = report_range
    return FinancialReportService(db).category_distribution(current_user.id, start, end, kind=kind)


@router.get("/monthly-trend", response_model=MonthlyTrendResponse)
def monthly_trend(
    months: int = Query(6, ge=1),
    reference_date: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Income and expense per month for the last `months` months, oldest first."""
    return FinancialReportService(db).monthly_trend(current_user.id, months=months, reference=reference_date)


@router.get("/break-even", response_model=BreakEvenResponse)
def break_even(
    units: Optional[int] = Query(None, ge=0, description="Units produced or sold in the period"),
    variable_cost_per_unit: Optional[Decimal] = Query(None, ge=0),
    report_range: Tuple[datetime, datetime] = Depends(get_report_range),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    start, end = report_range
    return FinancialReportService(db).break_even(
        current_user.id,
        start,
        end,
        units=units,
        variable_cost_per_unit=variable_cost_per_unit,
    )


@router.get("/ratios", response_model=FinancialRatiosResponse)
def ratios(
    report_range: Tuple[datetime, datetime] = Depends(get_report_range),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Profit margin, cost ratio, ROI and progress towards break-even for the period."""
    start, end = report_range
    return FinancialReportService(db).ratios(current_user.id, start, end)
