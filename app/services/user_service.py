from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Iterable, List, Optional, Tuple
from app.core.config import DefaultCategory, settings
from app.core.exceptions import StoreError, ValidationError
from app.models.user import User
from app.models.transaction import TransactionCategory, TransactionKind
from app.logger_config import logger


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    """Get user by database ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_external_auth_id(db: Session, external_auth_id: str) -> Optional[User]:
    """Get user by the identifier issued by the authentication provider."""
    return db.query(User).filter(User.external_auth_id == external_auth_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email."""
    return db.query(User).filter(User.email == email).first()


def build_default_categories(user_id: int, defaults: Iterable[DefaultCategory]) -> List[TransactionCategory]:
    """One category per (name, kind); later duplicates in the configured set are skipped."""
    seen = set()
    categories = []
    for category in defaults:
        key = (category.name, category.kind)
        if key in seen:
            continue
        seen.add(key)
        categories.append(TransactionCategory(
            user_id=user_id,
            name=category.name,
            kind=TransactionKind(category.kind),
            color=category.color,
        ))
    return categories


def register_user(
    db: Session,
    external_auth_id: str,
    email: str,
    name: str,
    business_name: Optional[str] = None,
    default_categories: Optional[Iterable[DefaultCategory]] = None,
) -> Tuple[User, bool]:
    """
    Get or create the user for an external auth identity.

    The user and its default categories are written in one commit. Returns
    (user, created); registering the same identity again returns the stored user.
    """
    existing = get_user_by_external_auth_id(db, external_auth_id)
    if existing:
        return existing, False

    if get_user_by_email(db, email):
        raise ValidationError("Email is already registered to another account")

    if default_categories is None:
        default_categories = settings.DEFAULT_CATEGORIES

    user = User(
        external_auth_id=external_auth_id,
        email=email,
        name=name,
        business_name=business_name,
    )
    db.add(user)

    try:
        db.flush()  # Flush to get user.id
        db.add_all(build_default_categories(user.id, default_categories))
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        # A concurrent registration for the same identity won the insert
        existing = get_user_by_external_auth_id(db, external_auth_id)
        if existing:
            return existing, False
        logger.exception("Error registering user")
        raise StoreError("Failed to register user. Email may already exist.")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error registering user")
        raise StoreError("Failed to register user.")

    logger.info(f"User {user.id} registered with {len(user.categories)} default categories")
    return user, True


def update_user_profile(
    db: Session,
    user_id: int,
    name: Optional[str] = None,
    business_name: Optional[str] = None,
) -> Optional[User]:
    """Update the editable profile fields; identity and email stay as registered."""
    user = get_user_by_id(db, user_id)
    if not user:
        return None

    if name is not None:
        user.name = name
    if business_name is not None:
        user.business_name = business_name

    try:
        db.commit()
        db.refresh(user)
        return user
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating user profile")
        raise StoreError("Failed to update user.")
