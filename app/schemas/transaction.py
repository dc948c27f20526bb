from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.models.transaction import TransactionKind
from app.schemas.common import BusinessDateTime, Money, PositiveMoney


class TransactionCreate(BaseModel):
    kind: TransactionKind
    amount: PositiveMoney
    description: str = Field(..., min_length=1)
    occurred_at: BusinessDateTime
    category_id: Optional[int] = None
    customer_id: Optional[int] = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value.strip()


class TransactionUpdate(BaseModel):
    kind: Optional[TransactionKind] = None
    amount: Optional[PositiveMoney] = None
    description: Optional[str] = Field(None, min_length=1)
    occurred_at: Optional[BusinessDateTime] = None
    category_id: Optional[int] = None
    customer_id: Optional[int] = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("description must not be blank")
        return value.strip() if value is not None else value


class TransactionCategoryRef(BaseModel):
    id: int
    name: str
    color: str

    class Config:
        from_attributes = True


class TransactionCustomerRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class TransactionResponse(BaseModel):
    id: int
    user_id: int
    kind: TransactionKind
    amount: Money
    description: str
    occurred_at: datetime
    created_at: Optional[datetime] = None
    category_id: Optional[int] = None
    customer_id: Optional[int] = None
    category: Optional[TransactionCategoryRef] = None
    customer: Optional[TransactionCustomerRef] = None

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    total: int
    transactions: List[TransactionResponse]
