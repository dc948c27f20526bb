from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.transaction import TransactionKind
from app.schemas.common import HexColor


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    kind: TransactionKind
    color: HexColor = "#059669"


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    kind: Optional[TransactionKind] = None
    color: Optional[HexColor] = None


class CategoryResponse(BaseModel):
    id: int
    user_id: int
    name: str
    kind: TransactionKind
    color: str

    class Config:
        from_attributes = True


class CategoryListResponse(BaseModel):
    total: int
    categories: List[CategoryResponse]
