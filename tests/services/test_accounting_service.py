"""
Tests for the AccountingService orchestration.

Tests cover:
- Account creation with generated account numbers
- Journal and reversal construction
- Cancel after a failed commit
- Replaying an account's transactions reproduces its balance
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from accounting_core.errors import (
    JournalCannotDoubleReverseError,
    JournalNotBalancedError,
    JournalNotFoundError,
)
from accounting_core.models.account import Account
from accounting_core.models.base import utcnow
from accounting_core.models.enums import Alignment
from accounting_core.schemas.account import AccountCreate
from accounting_core.schemas.journal import (
    JournalRequest,
    ReversalRequest,
    TransactionInfo,
)
from accounting_core.schemas.pagination import PageRequest
from accounting_core.services.accounting_service import AccountingService
from tests.helpers import SequentialIDGenerator, make_account


def entry(account_number, alignment, amount, description=""):
    return TransactionInfo(
        account_number=account_number,
        alignment=alignment,
        amount=Decimal(amount),
        description=description,
    )


@pytest.fixture
def service(db_session):
    make_account(db_session, "CASH", Alignment.DEBIT)
    make_account(db_session, "REVENUE", Alignment.CREDIT)
    make_account(db_session, "BANK", Alignment.DEBIT)
    return AccountingService(db_session, id_generator=SequentialIDGenerator())


def sale(service, amount="100"):
    return service.create_journal(JournalRequest(
        description="cash sale",
        created_by="alice",
        transactions=[
            entry("CASH", Alignment.DEBIT, amount, "cash in"),
            entry("REVENUE", Alignment.CREDIT, amount, "sales"),
        ],
    ))


class TestCreateAccount:

    def test_account_number_generated_when_missing(self, db_session):
        service = AccountingService(
            db_session, id_generator=SequentialIDGenerator("ACC"),
        )
        account = service.create_account(AccountCreate(
            name="Inventory",
            description="Goods for sale",
            currency="GOLD",
            alignment=Alignment.DEBIT,
            created_by="alice",
        ))
        assert account.account_number == "ACC0001"
        assert service.accounts.is_account_exist("ACC0001")

    def test_given_account_number_kept(self, db_session):
        service = AccountingService(db_session)
        account = service.create_account(AccountCreate(
            account_number="5000",
            name="Expenses",
            description="Operating expenses",
            currency="GOLD",
            alignment=Alignment.DEBIT,
            created_by="alice",
        ))
        assert account.account_number == "5000"


class TestCreateJournal:

    def test_ids_and_authors_assigned(self, service):
        record = sale(service)
        assert record.journal_id == "ID0001"
        assert [t.transaction_id for t in record.transactions] == ["ID0002", "ID0003"]
        assert {t.created_by for t in record.transactions} == {"alice"}
        assert record.reversal is False

    def test_journal_is_committed(self, service, session_factory):
        record = sale(service)
        other = session_factory()
        try:
            assert other.get(Account, "CASH").balance == Decimal("100")
            assert other.get(Account, "REVENUE").balance == Decimal("100")
        finally:
            other.close()
        assert service.journals.is_journal_exist(record.journal_id)

    def test_rejected_journal_propagates_error(self, service, db_session):
        with pytest.raises(JournalNotBalancedError):
            service.create_journal(JournalRequest(
                description="broken",
                created_by="alice",
                transactions=[
                    entry("CASH", Alignment.DEBIT, "10"),
                    entry("REVENUE", Alignment.CREDIT, "1"),
                ],
            ))
        assert db_session.get(Account, "CASH").balance == Decimal("0")


class TestCreateReversal:

    def test_reversal_flips_every_transaction(self, service, db_session):
        original = sale(service)
        reversal = service.create_reversal(original.journal_id, ReversalRequest(
            description="refund", created_by="bob",
        ))

        assert reversal.reversal is True
        assert reversal.reversed_journal_id == original.journal_id
        assert reversal.amount == original.amount
        assert [
            (t.account_number, t.alignment, t.amount, t.description)
            for t in reversal.transactions
        ] == [
            ("CASH", Alignment.CREDIT, Decimal("100"), "cash in - reversed"),
            ("REVENUE", Alignment.DEBIT, Decimal("100"), "sales - reversed"),
        ]
        assert db_session.get(Account, "CASH").balance == Decimal("0")
        assert db_session.get(Account, "REVENUE").balance == Decimal("0")

    def test_second_reversal_rejected(self, service):
        original = sale(service)
        service.create_reversal(original.journal_id, ReversalRequest(created_by="bob"))
        with pytest.raises(JournalCannotDoubleReverseError):
            service.create_reversal(
                original.journal_id, ReversalRequest(created_by="bob"),
            )

    def test_reversal_of_unknown_journal(self, service):
        with pytest.raises(JournalNotFoundError):
            service.create_reversal("NOPE", ReversalRequest(created_by="bob"))


class TestFailedCommit:

    def test_failed_commit_is_cancelled(self, service, db_session, monkeypatch):
        def broken_commit():
            raise RuntimeError("database went away")

        monkeypatch.setattr(db_session, "commit", broken_commit)
        with pytest.raises(RuntimeError, match="went away"):
            sale(service)
        monkeypatch.undo()

        assert not service.journals.is_journal_exist("ID0001")
        assert db_session.get(Account, "CASH").balance == Decimal("0")
        # locks were released: the next journal goes through
        assert sale(service).journal_id == "ID0004"

    def test_commit_error_wins_over_cancel_error(
        self, service, db_session, monkeypatch
    ):
        def broken_commit():
            raise RuntimeError("commit failed")

        def broken_rollback():
            raise OSError("rollback failed")

        monkeypatch.setattr(db_session, "commit", broken_commit)
        monkeypatch.setattr(db_session, "rollback", broken_rollback)
        with pytest.raises(RuntimeError, match="commit failed"):
            sale(service)


class TestReplay:

    def test_replaying_transactions_reproduces_balances(self, service, db_session):
        first = sale(service, "100")
        sale(service, "40")
        service.create_journal(JournalRequest(
            description="deposit",
            created_by="alice",
            transactions=[
                entry("BANK", Alignment.DEBIT, "120"),
                entry("CASH", Alignment.CREDIT, "120"),
            ],
        ))
        service.create_reversal(first.journal_id, ReversalRequest(created_by="bob"))

        now = utcnow()
        start, until = now - timedelta(hours=1), now + timedelta(hours=1)
        for number in ("CASH", "REVENUE", "BANK"):
            account = db_session.get(Account, number)
            _, transactions = service.transactions.list_transactions_on_account(
                number, start, until, PageRequest(item_size=100),
            )
            balance = Decimal("0")
            for t in transactions:
                if t.alignment == account.alignment:
                    balance += t.amount
                else:
                    balance -= t.amount
                assert t.account_balance == balance
            assert account.balance == balance
