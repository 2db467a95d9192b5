"""
Transaction service: read access to admitted transactions.

Transactions are only ever written by JournalService, as part of
the journal that owns them.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from accounting_core.errors import AccountNotFoundError, TransactionNotFoundError
from accounting_core.models.account import Account
from accounting_core.models.transaction import Transaction
from accounting_core.pagination import paginate
from accounting_core.schemas.pagination import PageRequest, PageResult


class TransactionService:

    def __init__(self, db: Session):
        self.db = db

    def is_transaction_exist(self, transaction_id: str) -> bool:
        return self.db.get(Transaction, transaction_id) is not None

    def get_transaction(self, transaction_id: str) -> Transaction:
        transaction = self.db.get(Transaction, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(
                f"transaction {transaction_id} not found"
            )
        return transaction

    def list_transactions_on_account(
        self,
        account_number: str,
        start: datetime,
        until: datetime,
        request: PageRequest,
    ) -> tuple[PageResult, list[Transaction]]:
        """
        Transactions posted to one account in [start, until].

        Default order is the order they were admitted in, so the
        account_balance column reads as a running balance.
        """
        if self.db.get(Account, account_number) is None:
            raise AccountNotFoundError(f"account {account_number} not found")

        statement = select(Transaction).where(
            Transaction.account_number == account_number,
            Transaction.transaction_time >= start,
            Transaction.transaction_time <= until,
        )
        return paginate(
            self.db, statement, request, Transaction,
            default_order=[
                Transaction.created_at,
                Transaction.journal_id,
                Transaction.position,
            ],
        )
