from decimal import Decimal
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.schemas.common import Money, NonNegativeMoney


class BusinessSettingsUpdate(BaseModel):
    fixed_costs: NonNegativeMoney = Decimal("0")
    target_profit: NonNegativeMoney = Decimal("0")
    average_selling_price: NonNegativeMoney = Decimal("0")


class BusinessSettingsResponse(BaseModel):
    user_id: int
    fixed_costs: Money
    target_profit: Money
    average_selling_price: Money
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
