from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.dependencies import get_db, get_current_user
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.services.user_service import update_user_profile
from app.schemas.user import UserResponse, UserUpdate
from app.logger_config import logger

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Profile of the requesting user."""
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
def update_me(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update name and business name; identity and email are fixed at registration."""
    user = update_user_profile(
        db,
        current_user.id,
        name=user_data.name,
        business_name=user_data.business_name,
    )
    if not user:
        raise NotFoundError("User not found")

    logger.info(f"User {user.id} updated profile")
    return UserResponse.model_validate(user)
