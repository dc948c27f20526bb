from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, List, Optional

from app.core.exceptions import StoreError, ValidationError
from app.models.transaction import Transaction, TransactionCategory, TransactionKind
from app.logger_config import logger


def get_categories(
    db: Session,
    owner_id: int,
    kind: Optional[TransactionKind] = None,
) -> List[TransactionCategory]:
    """List the owner's categories, optionally of one kind."""
    query = db.query(TransactionCategory).filter(TransactionCategory.user_id == owner_id)
    if kind is not None:
        query = query.filter(TransactionCategory.kind == kind)
    return query.order_by(TransactionCategory.kind, TransactionCategory.name, TransactionCategory.id).all()


def get_category(db: Session, category_id: int, owner_id: int) -> Optional[TransactionCategory]:
    """Get category by ID; a category of another user is reported as missing."""
    return (
        db.query(TransactionCategory)
        .filter(TransactionCategory.id == category_id, TransactionCategory.user_id == owner_id)
        .first()
    )


def create_category(
    db: Session,
    owner_id: int,
    name: str,
    kind: TransactionKind,
    color: str = "#059669",
) -> TransactionCategory:
    category = TransactionCategory(user_id=owner_id, name=name, kind=kind, color=color)
    db.add(category)
    try:
        db.commit()
        db.refresh(category)
        logger.info(f"Category {category.id} created for user {owner_id}")
        return category
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating category")
        raise StoreError("Failed to create category.")


def update_category(db: Session, category_id: int, owner_id: int, **fields: Any) -> Optional[TransactionCategory]:
    """
    Update name, kind or color.
    The kind can only change while no transaction of the old kind uses the category.
    """
    category = get_category(db, category_id, owner_id)
    if not category:
        return None

    new_kind = fields.get("kind")
    if new_kind is not None and new_kind != category.kind:
        in_use = (
            db.query(Transaction.id)
            .filter(Transaction.category_id == category.id, Transaction.kind != new_kind)
            .first()
        )
        if in_use:
            raise ValidationError("Category kind cannot change while transactions of the other kind use it")

    for field in ("name", "kind", "color"):
        if fields.get(field) is not None:
            setattr(category, field, fields[field])

    try:
        db.commit()
        db.refresh(category)
        return category
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating category")
        raise StoreError("Failed to update category.")


def delete_category(db: Session, category_id: int, owner_id: int) -> bool:
    """Delete a category; its transactions become uncategorized."""
    category = get_category(db, category_id, owner_id)
    if not category:
        return False

    db.query(Transaction).filter(Transaction.category_id == category.id).update(
        {Transaction.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    try:
        db.commit()
        logger.info(f"Category {category_id} deleted by user {owner_id}")
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting category")
        raise StoreError("Failed to delete category.")
