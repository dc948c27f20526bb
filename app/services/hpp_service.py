"""
HPP calculation history.

total_hpp and hpp_per_unit are never taken from the caller: every write runs
calculate_hpp over the exact inputs stored in the same row.
"""

from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StoreError
from app.logger_config import logger
from app.models.hpp import HppCalculation
from app.utilities.hpp import calculate_hpp

INPUT_FIELDS = ("raw_material_cost", "labor_cost", "overhead_cost", "total_units")


def _store_result(calculation: HppCalculation, result: dict) -> None:
    for field in INPUT_FIELDS + ("total_hpp", "hpp_per_unit"):
        setattr(calculation, field, result[field])


def get_hpp_calculations(db: Session, owner_id: int) -> List[HppCalculation]:
    """Calculation history of the owner, newest first."""
    return (
        db.query(HppCalculation)
        .filter(HppCalculation.user_id == owner_id)
        .order_by(HppCalculation.created_at.desc(), HppCalculation.id.desc())
        .all()
    )


def get_hpp_calculation(db: Session, calculation_id: int, owner_id: int) -> Optional[HppCalculation]:
    return (
        db.query(HppCalculation)
        .filter(HppCalculation.id == calculation_id, HppCalculation.user_id == owner_id)
        .first()
    )


def create_hpp_calculation(
    db: Session,
    owner_id: int,
    product_name: str,
    raw_material_cost: Any,
    labor_cost: Any,
    overhead_cost: Any,
    total_units: int,
) -> HppCalculation:
    result = calculate_hpp(raw_material_cost, labor_cost, overhead_cost, total_units)
    calculation = HppCalculation(user_id=owner_id, product_name=product_name)
    _store_result(calculation, result)

    db.add(calculation)
    try:
        db.commit()
        db.refresh(calculation)
        logger.info(
            f"HPP calculation {calculation.id} for '{product_name}' created: "
            f"total {calculation.total_hpp}, per unit {calculation.hpp_per_unit}"
        )
        return calculation
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating HPP calculation")
        raise StoreError("Failed to create HPP calculation.")


def update_hpp_calculation(db: Session, calculation_id: int, owner_id: int, **fields: Any) -> Optional[HppCalculation]:
    """Change the product name or inputs; the derived totals are recomputed before the row is written."""
    calculation = get_hpp_calculation(db, calculation_id, owner_id)
    if not calculation:
        return None

    merged = {field: getattr(calculation, field) for field in INPUT_FIELDS}
    merged.update({field: fields[field] for field in INPUT_FIELDS if fields.get(field) is not None})
    result = calculate_hpp(**merged)

    _store_result(calculation, result)
    if fields.get("product_name") is not None:
        calculation.product_name = fields["product_name"]

    try:
        db.commit()
        db.refresh(calculation)
        return calculation
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating HPP calculation")
        raise StoreError("Failed to update HPP calculation.")


def delete_hpp_calculation(db: Session, calculation_id: int, owner_id: int) -> bool:
    calculation = get_hpp_calculation(db, calculation_id, owner_id)
    if not calculation:
        return False

    db.delete(calculation)
    try:
        db.commit()
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting HPP calculation")
        raise StoreError("Failed to delete HPP calculation.")
