from decimal import Decimal
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field

from app.utilities.dates import to_naive_utc

# Numeric(15, 2) columns: decimal strings or numbers in, decimal strings out (Pydantic
# serializes Decimal as a JSON string)
Money = Decimal
PositiveMoney = Annotated[Decimal, Field(gt=0, max_digits=15, decimal_places=2)]
NonNegativeMoney = Annotated[Decimal, Field(ge=0, max_digits=15, decimal_places=2)]

# Stored as naive UTC
BusinessDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]

HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


class DeleteResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
