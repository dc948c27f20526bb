# app/models/__init__.py
from .user import User
from .customer import Customer
from .transaction import TransactionKind, TransactionCategory, Transaction
from .hpp import HppCalculation
from .business_settings import BusinessSettings
