from fastapi import Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from app.core.database import SessionLocal
from app.core.exceptions import NotFoundError, ValidationError
from app.models.user import User


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    user_id: Optional[int] = Query(None, description="ID of the user the request acts for"),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the owner every request is scoped to.
    Token handling lives with the authentication provider; here the caller
    passes the user id it was given at registration.
    """
    if user_id is None:
        raise ValidationError("User ID is required")
    if user_id < 1:
        raise ValidationError("User ID must be a positive integer")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")

    return user
