from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StoreError
from app.logger_config import logger
from app.models.business_settings import BusinessSettings
from app.utilities.money import ZERO, non_negative_money


def get_business_settings(db: Session, owner_id: int) -> BusinessSettings:
    """Settings of the owner; an unsaved all-zero record when none is stored yet."""
    settings = db.query(BusinessSettings).filter(BusinessSettings.user_id == owner_id).first()
    if settings is None:
        return BusinessSettings(
            user_id=owner_id,
            fixed_costs=ZERO,
            target_profit=ZERO,
            average_selling_price=ZERO,
        )
    return settings


def _upsert_statement(dialect_name: str, values: dict):
    """INSERT ... ON CONFLICT (user_id) DO UPDATE for the dialects we run on."""
    update_values = {key: value for key, value in values.items() if key != "user_id"}

    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        stmt = insert(BusinessSettings).values(**values)
        return stmt.on_conflict_do_update(index_elements=["user_id"], set_=update_values)
    if dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        stmt = insert(BusinessSettings).values(**values)
        return stmt.on_conflict_do_update(index_elements=["user_id"], set_=update_values)
    if dialect_name in ("mysql", "mariadb"):
        from sqlalchemy.dialects.mysql import insert
        stmt = insert(BusinessSettings).values(**values)
        return stmt.on_duplicate_key_update(**update_values)

    raise StoreError(f"Business settings upsert is not supported on {dialect_name}")


def upsert_business_settings(
    db: Session,
    owner_id: int,
    fixed_costs: Any = ZERO,
    target_profit: Any = ZERO,
    average_selling_price: Any = ZERO,
) -> BusinessSettings:
    """
    Create or replace the owner's settings in a single conditional write keyed on
    user_id, so concurrent saves can never produce two rows.
    """
    values = {
        "user_id": owner_id,
        "fixed_costs": non_negative_money(fixed_costs, "fixed_costs"),
        "target_profit": non_negative_money(target_profit, "target_profit"),
        "average_selling_price": non_negative_money(average_selling_price, "average_selling_price"),
        "updated_at": func.now(),
    }
    stmt = _upsert_statement(db.get_bind().dialect.name, values)

    try:
        db.execute(stmt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving business settings")
        raise StoreError("Failed to save business settings.")

    logger.info(f"Business settings saved for user {owner_id}")
    return db.query(BusinessSettings).filter(BusinessSettings.user_id == owner_id).one()
