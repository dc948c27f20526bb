from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.core.dependencies import get_db, get_current_user
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.schemas.common import DeleteResponse
from app.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from app.services.transaction_service import (
    get_transaction,
    get_transactions,
    create_transaction,
    update_transaction,
    delete_transaction,
)

router = APIRouter()


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    limit: Optional[int] = Query(None, ge=1),
    start: Optional[datetime] = Query(None, description="Inclusive lower bound on the business date"),
    end: Optional[datetime] = Query(None, description="Exclusive upper bound on the business date"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Transactions of the requesting user, most recent business date first."""
    rows = get_transactions(db, current_user.id, start=start, end=end, limit=limit)
    return TransactionListResponse(
        total=len(rows),
        transactions=[TransactionResponse.model_validate(r) for r in rows],
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction_route(
    transaction_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    transaction = get_transaction(db, transaction_id, current_user.id)
    if not transaction:
        raise NotFoundError("Transaction not found")
    return TransactionResponse.model_validate(transaction)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction_route(
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record an income or expense. The category, when given, must be of the same kind."""
    transaction = create_transaction(
        db,
        owner_id=current_user.id,
        kind=data.kind,
        amount=data.amount,
        description=data.description,
        occurred_at=data.occurred_at,
        category_id=data.category_id,
        customer_id=data.customer_id,
    )
    return TransactionResponse.model_validate(transaction)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction_route(
    transaction_id: int,
    data: TransactionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    transaction = update_transaction(
        db,
        transaction_id,
        current_user.id,
        **data.model_dump(exclude_unset=True),
    )
    if not transaction:
        raise NotFoundError("Transaction not found")
    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", response_model=DeleteResponse)
def delete_transaction_route(
    transaction_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not delete_transaction(db, transaction_id, current_user.id):
        raise NotFoundError("Transaction not found")
    return DeleteResponse(message="Transaction deleted")
