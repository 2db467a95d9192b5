"""
Tests for per-account locking and concurrent admission.
"""

import threading
from decimal import Decimal

from accounting_core.locking import AccountLockRegistry
from accounting_core.models.account import Account
from accounting_core.models.enums import Alignment
from accounting_core.schemas.journal import JournalRequest, TransactionInfo
from accounting_core.services.accounting_service import AccountingService
from tests.helpers import make_account


class TestAccountLockRegistry:

    def test_overlapping_sets_wait(self):
        registry = AccountLockRegistry()
        first = registry.acquire(["B", "A"])
        acquired = threading.Event()

        def second():
            with registry.acquire(["C", "B"]):
                acquired.set()

        worker = threading.Thread(target=second, daemon=True)
        worker.start()
        assert not acquired.wait(timeout=0.2)

        first.release()
        assert acquired.wait(timeout=2)
        worker.join(timeout=2)

    def test_disjoint_sets_do_not_wait(self):
        registry = AccountLockRegistry()
        first = registry.acquire(["A", "B"])
        acquired = threading.Event()

        def second():
            with registry.acquire(["C", "D"]):
                acquired.set()

        worker = threading.Thread(target=second, daemon=True)
        worker.start()
        assert acquired.wait(timeout=2)
        worker.join(timeout=2)
        first.release()

    def test_release_is_idempotent(self):
        registry = AccountLockRegistry()
        locks = registry.acquire(["A"])
        locks.release()
        locks.release()
        with registry.acquire(["A"]):
            pass


class TestConcurrentAdmission:

    def test_parallel_transfers_keep_balances_consistent(
        self, db_session, session_factory
    ):
        make_account(db_session, "CASH", Alignment.DEBIT, balance=Decimal("1000"))
        make_account(db_session, "BANK", Alignment.DEBIT)
        transfers_per_thread = 10
        errors = []

        def transfer(source, target):
            session = session_factory()
            try:
                service = AccountingService(session)
                for _ in range(transfers_per_thread):
                    service.create_journal(JournalRequest(
                        description=f"{source} to {target}",
                        created_by="worker",
                        transactions=[
                            TransactionInfo(account_number=target,
                                            alignment=Alignment.DEBIT,
                                            amount=Decimal("3")),
                            TransactionInfo(account_number=source,
                                            alignment=Alignment.CREDIT,
                                            amount=Decimal("3")),
                        ],
                    ))
            except Exception as e:
                errors.append(e)
            finally:
                session.close()

        workers = [
            threading.Thread(target=transfer, args=("CASH", "BANK")),
            threading.Thread(target=transfer, args=("CASH", "BANK")),
            threading.Thread(target=transfer, args=("BANK", "CASH")),
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=30)

        assert errors == []
        db_session.expire_all()
        cash = db_session.get(Account, "CASH").balance
        bank = db_session.get(Account, "BANK").balance
        assert cash == Decimal("1000") - 2 * 30 + 30
        assert bank == Decimal("30")
