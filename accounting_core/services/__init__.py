"""Business logic services."""

from accounting_core.services.account_service import AccountService
from accounting_core.services.accounting_service import AccountingService
from accounting_core.services.exchange_service import ExchangeService
from accounting_core.services.journal_service import JournalService
from accounting_core.services.transaction_service import TransactionService

__all__ = [
    "AccountService",
    "AccountingService",
    "ExchangeService",
    "JournalService",
    "TransactionService",
]
