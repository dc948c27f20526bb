from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, get_current_user
from app.models.user import User
from app.schemas.business_settings import BusinessSettingsResponse, BusinessSettingsUpdate
from app.services.business_settings_service import get_business_settings, upsert_business_settings

router = APIRouter()


@router.get("", response_model=BusinessSettingsResponse)
def get_settings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Business settings; all zeros until the user saves them."""
    return BusinessSettingsResponse.model_validate(get_business_settings(db, current_user.id))


@router.put("", response_model=BusinessSettingsResponse)
def save_settings(
    data: BusinessSettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create or replace the business settings."""
    settings = upsert_business_settings(
        db,
        current_user.id,
        fixed_costs=data.fixed_costs,
        target_profit=data.target_profit,
        average_selling_price=data.average_selling_price,
    )
    return BusinessSettingsResponse.model_validate(settings)
