"""Builders shared by the service tests."""

from decimal import Decimal

from accounting_core.ids import UniqueIDGenerator
from accounting_core.models.enums import Alignment
from accounting_core.schemas.account import AccountCreate
from accounting_core.schemas.journal import JournalCreate, TransactionCreate
from accounting_core.services.account_service import AccountService


class SequentialIDGenerator(UniqueIDGenerator):
    """Predictable, ordered IDs: P0001, P0002, ..."""

    def __init__(self, prefix: str = "ID"):
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count:04d}"


def make_account(
    db,
    account_number,
    alignment=Alignment.DEBIT,
    currency="GOLD",
    balance=Decimal("0"),
    coa="",
    name=None,
):
    """Create and commit an account."""
    account = AccountService(db).create_account(AccountCreate(
        account_number=account_number,
        name=name or f"Account {account_number}",
        description=f"test account {account_number}",
        currency=currency,
        alignment=alignment,
        balance=balance,
        coa=coa,
        created_by="tester",
    ))
    db.commit()
    return account


def debit(transaction_id, account_number, amount):
    return TransactionCreate(
        transaction_id=transaction_id,
        account_number=account_number,
        alignment=Alignment.DEBIT,
        amount=Decimal(amount),
    )


def credit(transaction_id, account_number, amount):
    return TransactionCreate(
        transaction_id=transaction_id,
        account_number=account_number,
        alignment=Alignment.CREDIT,
        amount=Decimal(amount),
    )


def journal(journal_id, *transactions, reversed_journal_id=None,
            created_by="tester", description="test journal"):
    return JournalCreate(
        journal_id=journal_id,
        description=description,
        reversed_journal_id=reversed_journal_id,
        created_by=created_by,
        transactions=list(transactions),
    )
