from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.exceptions import StoreError, ValidationError
from app.logger_config import logger
from app.models.transaction import Transaction, TransactionKind
from app.services.category_service import get_category
from app.services.customer_service import get_customer
from app.utilities.dates import to_naive_utc
from app.utilities.money import to_money


def _validated_amount(amount: Any) -> Decimal:
    value = to_money(amount)
    if value <= 0:
        raise ValidationError("amount must be greater than 0")
    return value


def _validated_description(description: Optional[str]) -> str:
    if description is None or not description.strip():
        raise ValidationError("description must not be empty")
    return description.strip()


def _check_references(
    db: Session,
    owner_id: int,
    kind: TransactionKind,
    category_id: Optional[int],
    customer_id: Optional[int],
) -> None:
    """Category and customer must belong to the owner; the category kind must match the transaction."""
    if category_id is not None:
        category = get_category(db, category_id, owner_id)
        if category is None:
            raise ValidationError(f"Unknown category {category_id}")
        if category.kind != kind:
            raise ValidationError(
                f"Category '{category.name}' is for {category.kind.value} transactions, not {TransactionKind(kind).value}"
            )
    if customer_id is not None and get_customer(db, customer_id, owner_id) is None:
        raise ValidationError(f"Unknown customer {customer_id}")


def get_transactions(
    db: Session,
    owner_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> List[Transaction]:
    """
    The owner's transactions, most recent business date first.
    start/end bound occurred_at as a half-open range [start, end).
    """
    if limit is not None and not 1 <= limit <= settings.TRANSACTION_LIST_MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {settings.TRANSACTION_LIST_MAX_LIMIT}")

    start = to_naive_utc(start) if start is not None else None
    end = to_naive_utc(end) if end is not None else None
    if start is not None and end is not None and end < start:
        raise ValidationError("end must not be before start")

    query = (
        db.query(Transaction)
        .options(joinedload(Transaction.category), joinedload(Transaction.customer))
        .filter(Transaction.user_id == owner_id)
    )
    if start is not None:
        query = query.filter(Transaction.occurred_at >= start)
    if end is not None:
        query = query.filter(Transaction.occurred_at < end)

    query = query.order_by(Transaction.occurred_at.desc(), Transaction.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_transaction(db: Session, transaction_id: int, owner_id: int) -> Optional[Transaction]:
    """Get transaction by ID; a transaction of another user is reported as missing."""
    return (
        db.query(Transaction)
        .filter(Transaction.id == transaction_id, Transaction.user_id == owner_id)
        .first()
    )


def create_transaction(
    db: Session,
    owner_id: int,
    kind: TransactionKind,
    amount: Any,
    description: str,
    occurred_at: datetime,
    category_id: Optional[int] = None,
    customer_id: Optional[int] = None,
) -> Transaction:
    """Record an income or expense."""
    kind = TransactionKind(kind)
    transaction = Transaction(
        user_id=owner_id,
        kind=kind,
        amount=_validated_amount(amount),
        description=_validated_description(description),
        occurred_at=to_naive_utc(occurred_at),
        category_id=category_id,
        customer_id=customer_id,
    )
    _check_references(db, owner_id, kind, category_id, customer_id)

    db.add(transaction)
    try:
        db.commit()
        db.refresh(transaction)
        logger.info(f"Transaction {transaction.id} ({kind.value} {transaction.amount}) created for user {owner_id}")
        return transaction
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating transaction")
        raise StoreError("Failed to create transaction.")


def update_transaction(db: Session, transaction_id: int, owner_id: int, **fields: Any) -> Optional[Transaction]:
    """
    Partial update. Only the keys present in fields change; category_id or
    customer_id set to None detach the reference.
    """
    transaction = get_transaction(db, transaction_id, owner_id)
    if not transaction:
        return None

    kind = TransactionKind(fields["kind"]) if fields.get("kind") is not None else transaction.kind
    category_id = fields["category_id"] if "category_id" in fields else transaction.category_id
    customer_id = fields["customer_id"] if "customer_id" in fields else transaction.customer_id
    _check_references(db, owner_id, kind, category_id, customer_id)

    transaction.kind = kind
    transaction.category_id = category_id
    transaction.customer_id = customer_id
    if fields.get("amount") is not None:
        transaction.amount = _validated_amount(fields["amount"])
    if fields.get("description") is not None:
        transaction.description = _validated_description(fields["description"])
    if fields.get("occurred_at") is not None:
        transaction.occurred_at = to_naive_utc(fields["occurred_at"])

    try:
        db.commit()
        db.refresh(transaction)
        return transaction
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating transaction")
        raise StoreError("Failed to update transaction.")


def delete_transaction(db: Session, transaction_id: int, owner_id: int) -> bool:
    transaction = get_transaction(db, transaction_id, owner_id)
    if not transaction:
        return False

    db.delete(transaction)
    try:
        db.commit()
        logger.info(f"Transaction {transaction_id} deleted by user {owner_id}")
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting transaction")
        raise StoreError("Failed to delete transaction.")
