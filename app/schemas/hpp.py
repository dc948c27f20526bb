from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.schemas.common import Money, NonNegativeMoney


class HppInput(BaseModel):
    raw_material_cost: NonNegativeMoney
    labor_cost: NonNegativeMoney
    overhead_cost: NonNegativeMoney
    total_units: int = Field(..., ge=1)


class HppCalculationCreate(HppInput):
    product_name: str = Field(..., min_length=1, max_length=255)


class HppCalculationUpdate(BaseModel):
    product_name: Optional[str] = Field(None, min_length=1, max_length=255)
    raw_material_cost: Optional[NonNegativeMoney] = None
    labor_cost: Optional[NonNegativeMoney] = None
    overhead_cost: Optional[NonNegativeMoney] = None
    total_units: Optional[int] = Field(None, ge=1)


class HppPreviewRequest(HppInput):
    """Calculate without storing; selling_price adds margin and markup."""
    selling_price: Optional[NonNegativeMoney] = None


class HppPreviewResponse(BaseModel):
    raw_material_cost: Money
    labor_cost: Money
    overhead_cost: Money
    total_units: int
    total_hpp: Money
    hpp_per_unit: Money
    selling_price: Optional[Money] = None
    profit_per_unit: Optional[Money] = None
    profit_margin: Optional[Money] = None
    markup: Optional[Money] = None


class HppCalculationResponse(BaseModel):
    id: int
    user_id: int
    product_name: str
    raw_material_cost: Money
    labor_cost: Money
    overhead_cost: Money
    total_units: int
    total_hpp: Money
    hpp_per_unit: Money
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HppCalculationListResponse(BaseModel):
    total: int
    calculations: List[HppCalculationResponse]
