from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from app.core.dependencies import get_db, get_current_user
from app.core.exceptions import NotFoundError
from app.models.transaction import TransactionKind
from app.models.user import User
from app.services.category_service import (
    get_categories,
    create_category,
    update_category,
    delete_category,
)
from app.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)
from app.schemas.common import DeleteResponse

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
def list_categories(
    kind: Optional[TransactionKind] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    categories = get_categories(db, current_user.id, kind=kind)
    return CategoryListResponse(
        total=len(categories),
        categories=[CategoryResponse.model_validate(c) for c in categories],
    )


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category_route(
    category_data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    category = create_category(
        db,
        current_user.id,
        name=category_data.name,
        kind=category_data.kind,
        color=category_data.color,
    )
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category_route(
    category_id: int,
    category_data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    category = update_category(
        db,
        category_id,
        current_user.id,
        **category_data.model_dump(exclude_unset=True),
    )
    if not category:
        raise NotFoundError("Category not found")
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=DeleteResponse)
def delete_category_route(
    category_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a category; transactions that used it become uncategorized."""
    if not delete_category(db, category_id, current_user.id):
        raise NotFoundError("Category not found")
    return DeleteResponse(message="Category deleted")
