import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class TransactionKind(str, enum.Enum):
    income = "income"
    expense = "expense"


class TransactionCategory(Base):
    """Per-user income/expense category; a transaction may only use a category of its own kind."""
    __tablename__ = "transaction_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    kind = Column(Enum(TransactionKind, name="transaction_kind"), nullable=False)
    color = Column(String(7), nullable=False, default="#059669")

    user = relationship("User", back_populates="categories")
    transactions = relationship("Transaction", back_populates="category", passive_deletes=True)


class Transaction(Base):
    """Income or expense entry; occurred_at is the business date, created_at the insert time."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    category_id = Column(Integer, ForeignKey("transaction_categories.id", ondelete="SET NULL"), nullable=True)
    kind = Column(Enum(TransactionKind, name="transaction_kind"), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    description = Column(Text, nullable=False)
    occurred_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="transactions")
    customer = relationship("Customer", back_populates="transactions")
    category = relationship("TransactionCategory", back_populates="transactions")
