from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class BusinessSettings(Base):
    __tablename__ = "business_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique: one settings row per user, the upsert conflict target
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    fixed_costs = Column(Numeric(15, 2), nullable=False, default=0)
    target_profit = Column(Numeric(15, 2), nullable=False, default=0)
    average_selling_price = Column(Numeric(15, 2), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="business_settings")
