from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from app.schemas.common import Money


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class CustomerResponse(CustomerBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    # Over every transaction linked to the customer
    total_spent: Money = Money("0")
    transaction_count: int = 0
    last_transaction_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerListResponse(BaseModel):
    total: int
    active_customers: int = 0
    total_spent: Money = Money("0")
    customers: list[CustomerResponse]
