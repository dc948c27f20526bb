from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, get_current_user
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.schemas.common import DeleteResponse
from app.schemas.hpp import (
    HppCalculationCreate,
    HppCalculationUpdate,
    HppCalculationResponse,
    HppCalculationListResponse,
    HppPreviewRequest,
    HppPreviewResponse,
)
from app.services.hpp_service import (
    get_hpp_calculation,
    get_hpp_calculations,
    create_hpp_calculation,
    update_hpp_calculation,
    delete_hpp_calculation,
)
from app.utilities.hpp import calculate_hpp

router = APIRouter()


@router.post("/preview", response_model=HppPreviewResponse)
def preview_hpp(data: HppPreviewRequest):
    """Calculate HPP without storing it; add a selling price to get margin and markup."""
    return HppPreviewResponse(**calculate_hpp(
        data.raw_material_cost,
        data.labor_cost,
        data.overhead_cost,
        data.total_units,
        selling_price=data.selling_price,
    ))


@router.get("", response_model=HppCalculationListResponse)
def list_hpp_calculations(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    calculations = get_hpp_calculations(db, current_user.id)
    return HppCalculationListResponse(
        total=len(calculations),
        calculations=[HppCalculationResponse.model_validate(c) for c in calculations],
    )


@router.get("/{calculation_id}", response_model=HppCalculationResponse)
def get_hpp_calculation_route(
    calculation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    calculation = get_hpp_calculation(db, calculation_id, current_user.id)
    if not calculation:
        raise NotFoundError("HPP calculation not found")
    return HppCalculationResponse.model_validate(calculation)


@router.post("", response_model=HppCalculationResponse, status_code=status.HTTP_201_CREATED)
def create_hpp_calculation_route(
    data: HppCalculationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Store a calculation; the totals are computed here, never taken from the request."""
    calculation = create_hpp_calculation(
        db,
        owner_id=current_user.id,
        product_name=data.product_name,
        raw_material_cost=data.raw_material_cost,
        labor_cost=data.labor_cost,
        overhead_cost=data.overhead_cost,
        total_units=data.total_units,
    )
    return HppCalculationResponse.model_validate(calculation)


@router.put("/{calculation_id}", response_model=HppCalculationResponse)
def update_hpp_calculation_route(
    calculation_id: int,
    data: HppCalculationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    calculation = update_hpp_calculation(
        db,
        calculation_id,
        current_user.id,
        **data.model_dump(exclude_unset=True),
    )
    if not calculation:
        raise NotFoundError("HPP calculation not found")
    return HppCalculationResponse.model_validate(calculation)


@router.delete("/{calculation_id}", response_model=DeleteResponse)
def delete_hpp_calculation_route(
    calculation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not delete_hpp_calculation(db, calculation_id, current_user.id):
        raise NotFoundError("HPP calculation not found")
    return DeleteResponse(message="HPP calculation deleted")
