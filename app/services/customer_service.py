from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, Iterable, List, Optional
from app.core.exceptions import StoreError
from app.models.customer import Customer
from app.models.transaction import Transaction
from app.utilities.money import ZERO, quantize_money, to_decimal
from app.logger_config import logger


def get_customer(db: Session, customer_id: int, owner_id: int) -> Optional[Customer]:
    """Get customer by ID; a customer of another user is reported as missing."""
    return db.query(Customer).filter(Customer.id == customer_id, Customer.user_id == owner_id).first()


def get_customers(db: Session, owner_id: int) -> List[Customer]:
    """All customers of the owner, newest first."""
    return (
        db.query(Customer)
        .filter(Customer.user_id == owner_id)
        .order_by(Customer.created_at.desc(), Customer.id.desc())
        .all()
    )


def empty_customer_stats() -> Dict[str, Any]:
    return {"total_spent": ZERO, "transaction_count": 0, "last_transaction_at": None}


def get_customer_stats(
    db: Session,
    owner_id: int,
    customer_ids: Optional[Iterable[int]] = None,
) -> Dict[int, Dict[str, Any]]:
    """
    Per-customer total, transaction count and latest business date over the owner's
    transactions of both kinds. Customers without transactions are absent from the result.
    """
    query = (
        db.query(
            Transaction.customer_id,
            func.sum(Transaction.amount),
            func.count(Transaction.id),
            func.max(Transaction.occurred_at),
        )
        .filter(Transaction.user_id == owner_id, Transaction.customer_id.isnot(None))
    )
    if customer_ids is not None:
        query = query.filter(Transaction.customer_id.in_(list(customer_ids)))

    stats = {}
    for customer_id, total, count, last_at in query.group_by(Transaction.customer_id).all():
        stats[customer_id] = {
            "total_spent": quantize_money(to_decimal(total if total is not None else ZERO)),
            "transaction_count": count,
            "last_transaction_at": last_at,
        }
    return stats


def create_customer(
    db: Session,
    owner_id: int,
    name: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> Customer:
    """Create a new customer."""
    customer = Customer(
        user_id=owner_id,
        name=name,
        email=email,
        phone=phone,
        address=address,
    )
    db.add(customer)

    try:
        db.commit()
        db.refresh(customer)
        logger.info(f"Customer {customer.id} created for user {owner_id}")
        return customer
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating customer")
        raise StoreError("Failed to create customer.")


def update_customer(db: Session, customer_id: int, owner_id: int, **fields: Any) -> Optional[Customer]:
    """Update customer information."""
    customer = get_customer(db, customer_id, owner_id)
    if not customer:
        return None

    for field in ("name", "email", "phone", "address"):
        if field not in fields:
            continue
        # name is required; the optional contact fields can be cleared with None
        if field == "name" and fields[field] is None:
            continue
        setattr(customer, field, fields[field])

    try:
        db.commit()
        db.refresh(customer)
        return customer
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating customer")
        raise StoreError("Failed to update customer.")


def delete_customer(db: Session, customer_id: int, owner_id: int) -> bool:
    """Delete a customer; its transactions are kept without a customer."""
    customer = get_customer(db, customer_id, owner_id)
    if not customer:
        return False

    db.query(Transaction).filter(Transaction.customer_id == customer.id).update(
        {Transaction.customer_id: None}, synchronize_session=False
    )
    db.delete(customer)
    try:
        db.commit()
        logger.info(f"Customer {customer_id} deleted by user {owner_id}")
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting customer")
        raise StoreError("Failed to delete customer.")
