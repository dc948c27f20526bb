from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.core.dependencies import get_db
from app.core.exceptions import NotFoundError
from app.services.user_service import get_user_by_external_auth_id, register_user
from app.schemas.auth import RegisterRequest
from app.schemas.user import UserResponse
from app.logger_config import logger

router = APIRouter()


@router.post("/register", response_model=UserResponse)
def register(
    register_data: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Register the user behind an external authentication identity.
    Idempotent: an identity that is already registered returns the stored user (200);
    a new one is created together with its default categories (201).
    """
    user, created = register_user(
        db=db,
        external_auth_id=register_data.external_auth_id,
        email=register_data.email,
        name=register_data.name,
        business_name=register_data.business_name,
    )

    if created:
        response.status_code = status.HTTP_201_CREATED
        logger.info(f"User {user.email} registered successfully")

    return UserResponse.model_validate(user)


@router.get("/user/{external_auth_id}", response_model=UserResponse)
def get_user_by_auth_id(
    external_auth_id: str,
    db: Session = Depends(get_db)
):
    """Fetch a registered user by external authentication identity."""
    user = get_user_by_external_auth_id(db, external_auth_id)
    if not user:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)
