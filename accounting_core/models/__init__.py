"""
Database models package.

All models must be imported here so that Base.metadata knows
every table before create_all() is called.
"""

from accounting_core.models.base import Base
from accounting_core.models.enums import Alignment
from accounting_core.models.account import Account
from accounting_core.models.journal import Journal
from accounting_core.models.transaction import Transaction
from accounting_core.models.currency import Currency

__all__ = [
    "Base",
    "Alignment",
    "Account",
    "Journal",
    "Transaction",
    "Currency",
]
