from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class HppCalculation(Base):
    """
    Stored cost-of-production calculation.
    total_hpp and hpp_per_unit are derived columns, written only by the HPP service
    together with the inputs they were computed from.
    """
    __tablename__ = "hpp_calculations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    raw_material_cost = Column(Numeric(15, 2), nullable=False)
    labor_cost = Column(Numeric(15, 2), nullable=False)
    overhead_cost = Column(Numeric(15, 2), nullable=False)
    total_units = Column(Integer, nullable=False)
    total_hpp = Column(Numeric(15, 2), nullable=False)
    hpp_per_unit = Column(Numeric(15, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="hpp_calculations")
