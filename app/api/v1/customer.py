from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.core.dependencies import get_db, get_current_user
from app.core.exceptions import NotFoundError
from app.models.customer import Customer
from app.models.user import User
from app.services.customer_service import (
    get_customer,
    get_customers,
    get_customer_stats,
    empty_customer_stats,
    create_customer,
    update_customer,
    delete_customer
)
from app.schemas.common import DeleteResponse
from app.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse
)
from app.utilities.money import ZERO

router = APIRouter()


def _with_stats(customer: Customer, stats: dict) -> CustomerResponse:
    response = CustomerResponse.model_validate(customer)
    return response.model_copy(update=stats.get(customer.id, empty_customer_stats()))


@router.get("", response_model=CustomerListResponse)
def list_customers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All customers of the requesting user, newest first, with their transaction totals."""
    customers = get_customers(db, current_user.id)
    stats = get_customer_stats(db, current_user.id)
    listed = [_with_stats(c, stats) for c in customers]
    return CustomerListResponse(
        total=len(listed),
        active_customers=sum(1 for c in listed if c.transaction_count > 0),
        total_spent=sum((c.total_spent for c in listed), ZERO),
        customers=listed
    )


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer_route(
    customer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    customer = get_customer(db, customer_id, current_user.id)
    if not customer:
        raise NotFoundError("Customer not found")
    return _with_stats(customer, get_customer_stats(db, current_user.id, [customer.id]))


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer_route(
    customer_data: CustomerCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    customer = create_customer(
        db=db,
        owner_id=current_user.id,
        name=customer_data.name,
        email=customer_data.email,
        phone=customer_data.phone,
        address=customer_data.address,
    )
    return CustomerResponse.model_validate(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer_route(
    customer_id: int,
    customer_data: CustomerUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Partial update; only the fields sent are changed."""
    customer = update_customer(
        db,
        customer_id,
        current_user.id,
        **customer_data.model_dump(exclude_unset=True)
    )
    if not customer:
        raise NotFoundError("Customer not found")
    return _with_stats(customer, get_customer_stats(db, current_user.id, [customer.id]))


@router.delete("/{customer_id}", response_model=DeleteResponse)
def delete_customer_route(
    customer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a customer. Its transactions are kept, without the customer reference."""
    if not delete_customer(db, customer_id, current_user.id):
        raise NotFoundError("Customer not found")
    return DeleteResponse(message="Customer deleted")
