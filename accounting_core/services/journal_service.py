"""
Journal service: the admission engine of the ledger.

A journal is admitted only if all of the following hold, checked in
this order (the first failure is reported, nothing is written):

1.  the journal exists and carries a journal ID
2.  it has at least one transaction
3.  its author is known
4.  the journal ID is not persisted yet
5.  every transaction carries a transaction ID
6.  no transaction ID is persisted yet
7.  total DEBIT equals total CREDIT
8.  no two transactions share an account
9.  every account exists
10. every account uses the same currency
11. a reversal targets a journal nobody has reversed yet

Persisting follows a two-phase protocol. persist() validates and
flushes: the journal is staged, visible only inside the caller's
session. commit() makes it durable, cancel() throws it away. The
accounts involved stay locked from the first store read in persist()
until commit() or cancel().
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounting_core.errors import (
    JournalAlreadyPersistedError,
    JournalCannotDoubleReverseError,
    JournalCommitError,
    JournalMissingAuthorError,
    JournalMissingIDError,
    JournalNilError,
    JournalNoTransactionError,
    JournalNotBalancedError,
    JournalNotFoundError,
    JournalReversalInconsistentError,
    JournalTransactionAccountDuplicateError,
    JournalTransactionAccountNotPersistedError,
    JournalTransactionAlreadyPersistedError,
    JournalTransactionInvalidAlignmentError,
    JournalTransactionInvalidAmountError,
    JournalTransactionMissingIDError,
    JournalTransactionMixCurrencyError,
    LedgerError,
)
from accounting_core.locking import AccountLockRegistry, account_locks
from accounting_core.models.account import Account
from accounting_core.models.base import utcnow
from accounting_core.models.enums import Alignment
from accounting_core.models.journal import Journal
from accounting_core.models.transaction import Transaction
from accounting_core.models.types import AMOUNT_PRECISION, AMOUNT_SCALE
from accounting_core.pagination import paginate
from accounting_core.schemas.journal import JournalCreate
from accounting_core.schemas.pagination import PageRequest, PageResult

logger = logging.getLogger(__name__)

AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)
AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)


def total_debit(journal) -> Decimal:
    """Sum of the DEBIT transactions of a journal."""
    return sum(
        (t.amount for t in journal.transactions
         if t.alignment == Alignment.DEBIT),
        Decimal("0"),
    )


def total_credit(journal) -> Decimal:
    """Sum of the CREDIT transactions of a journal."""
    return sum(
        (t.amount for t in journal.transactions
         if t.alignment == Alignment.CREDIT),
        Decimal("0"),
    )


class JournalService:
    """
    Admission, two-phase commit, and lookup of journals.

    The service works inside the caller's session. One instance should
    drive a journal from persist() to commit() or cancel(), from the
    same thread.
    """

    def __init__(self, db: Session, locks: AccountLockRegistry = account_locks):
        self.db = db
        self.locks = locks
        self._staged = {}

    # --- Two-phase protocol ---

    def persist(self, journal: JournalCreate | None) -> Journal:
        """
        Validate a journal and stage it in the session.

        Raises the LedgerValidationError subclass of the first failed
        check. On success the journal record is returned with its
        transactions, and every touched account carries its new balance.
        The caller must follow up with commit() or cancel().
        """
        if journal is None:
            logger.warning("rejected journal: journal is nil")
            raise JournalNilError()
        if not journal.journal_id:
            raise self._reject(journal, JournalMissingIDError())
        if not journal.transactions:
            raise self._reject(journal, JournalNoTransactionError())
        if not journal.created_by:
            raise self._reject(journal, JournalMissingAuthorError())

        locks = self.locks.acquire(
            t.account_number for t in journal.transactions
        )
        try:
            accounts, amount = self._check_admission(journal)
        except Exception:
            locks.release()
            raise

        try:
            record = self._stage(journal, accounts, amount)
        except IntegrityError as e:
            self.db.rollback()
            try:
                conflict = self._store_conflict(journal)
            finally:
                locks.release()
            if conflict is None:
                raise
            raise conflict from e
        except Exception:
            self.db.rollback()
            locks.release()
            raise

        self._staged[journal.journal_id] = locks
        return record

    def commit(self, journal) -> None:
        """
        Make a staged journal durable.

        The account locks are released whether or not the commit
        succeeds. After a failed commit the caller must still call
        cancel() to reset the session.
        """
        locks = self._staged.pop(journal.journal_id, None)
        if locks is None:
            raise JournalCommitError(
                f"journal {journal.journal_id} is not staged"
            )
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            conflict = self._store_conflict(journal)
            if conflict is None:
                raise
            raise conflict from e
        finally:
            locks.release()
        logger.info(
            "journal %s committed", journal.journal_id,
            extra={"journal_id": journal.journal_id},
        )

    def cancel(self, journal) -> None:
        """Roll back a staged (or failed to commit) journal."""
        locks = self._staged.pop(journal.journal_id, None)
        try:
            self.db.rollback()
        finally:
            if locks is not None:
                locks.release()
        logger.info(
            "journal %s cancelled", journal.journal_id,
            extra={"journal_id": journal.journal_id},
        )

    # --- Admission checks ---

    def _reject(self, journal: JournalCreate, error: LedgerError) -> LedgerError:
        logger.warning(
            "rejected journal %s: %s", journal.journal_id or "<no id>", error,
            extra={"journal_id": journal.journal_id},
        )
        return error

    def _check_admission(
        self, journal: JournalCreate
    ) -> tuple[dict[str, Account], Decimal]:
        """
        Run checks 4 to 11.

        Returns the locked accounts keyed by number, and the journal
        amount (total debit, equal to total credit).
        """
        if self.is_journal_exist(journal.journal_id):
            raise self._reject(journal, JournalAlreadyPersistedError(
                f"journal {journal.journal_id} is already persisted"
            ))

        for idx, trx in enumerate(journal.transactions):
            if not trx.transaction_id:
                raise self._reject(journal, JournalTransactionMissingIDError(
                    f"transaction {idx} is missing its transaction ID"
                ))

        transaction_ids = [t.transaction_id for t in journal.transactions]
        if len(set(transaction_ids)) != len(transaction_ids):
            raise self._reject(journal, JournalTransactionAlreadyPersistedError(
                "the same transaction ID is used twice in the journal"
            ))
        persisted = self._first_persisted_transaction(journal)
        if persisted is not None:
            raise self._reject(journal, JournalTransactionAlreadyPersistedError(
                f"transaction {persisted} is already persisted"
            ))

        debit_sum = Decimal("0")
        credit_sum = Decimal("0")
        for trx in journal.transactions:
            alignment = self._alignment_of(journal, trx)
            amount = self._amount_of(journal, trx)
            if alignment == Alignment.DEBIT:
                debit_sum += amount
            else:
                credit_sum += amount
        if debit_sum != credit_sum:
            raise self._reject(journal, JournalNotBalancedError(
                f"journal does not balance: "
                f"debit={debit_sum}, credit={credit_sum}"
            ))

        seen = set()
        for trx in journal.transactions:
            if trx.account_number in seen:
                raise self._reject(journal, JournalTransactionAccountDuplicateError(
                    f"account {trx.account_number} appears more than once"
                ))
            seen.add(trx.account_number)

        # Re-read the rows: balances cached in the identity map may be
        # older than the last commit made by another session.
        accounts = {
            account.account_number: account
            for account in self.db.execute(
                select(Account)
                .where(Account.account_number.in_(sorted(seen)))
                .with_for_update()
                .execution_options(populate_existing=True)
            ).scalars()
        }
        for trx in journal.transactions:
            if trx.account_number not in accounts:
                raise self._reject(journal, JournalTransactionAccountNotPersistedError(
                    f"account {trx.account_number} does not exist"
                ))

        currencies = {accounts[t.account_number].currency for t in journal.transactions}
        if len(currencies) > 1:
            raise self._reject(journal, JournalTransactionMixCurrencyError(
                f"journal mixes currencies {sorted(currencies)}"
            ))

        if journal.reversal:
            target = journal.reversed_journal_id
            try:
                already_reversed = self.is_journal_reversed(target)
            except JournalNotFoundError as e:
                raise self._reject(journal, e) from None
            if already_reversed:
                raise self._reject(journal, JournalCannotDoubleReverseError(
                    f"journal {target} is already reversed"
                ))

        return accounts, debit_sum

    def _first_persisted_transaction(self, journal: JournalCreate) -> str | None:
        return self.db.execute(
            select(Transaction.transaction_id)
            .where(Transaction.transaction_id.in_(
                [t.transaction_id for t in journal.transactions]
            ))
            .limit(1)
        ).scalar_one_or_none()

    def _alignment_of(self, journal: JournalCreate, trx) -> Alignment:
        try:
            return Alignment(trx.alignment)
        except ValueError:
            raise self._reject(journal, JournalTransactionInvalidAlignmentError(
                f"transaction {trx.transaction_id} has alignment "
                f"{trx.alignment!r}"
            )) from None

    def _amount_of(self, journal: JournalCreate, trx) -> Decimal:
        """The transaction amount, if the amount columns can hold it exactly."""
        amount = trx.amount
        if (
            not isinstance(amount, Decimal)
            or not amount.is_finite()
            or amount < 0
            or amount >= AMOUNT_LIMIT
            or amount != amount.quantize(AMOUNT_QUANTUM)
        ):
            raise self._reject(journal, JournalTransactionInvalidAmountError(
                f"transaction {trx.transaction_id} has amount {amount!r}"
            ))
        return amount

    def _store_conflict(self, journal: JournalCreate) -> LedgerError | None:
        """
        Name the admission rule a unique constraint caught.

        Another session committed a conflicting row after our checks
        ran; the session is already rolled back, so committed state is
        what gets read here.
        """
        if journal.reversal and self._reversed_by(journal.reversed_journal_id):
            return self._reject(journal, JournalCannotDoubleReverseError(
                f"journal {journal.reversed_journal_id} is already reversed"
            ))
        if self.is_journal_exist(journal.journal_id):
            return self._reject(journal, JournalAlreadyPersistedError(
                f"journal {journal.journal_id} is already persisted"
            ))
        persisted = self._first_persisted_transaction(journal)
        if persisted is not None:
            return self._reject(journal, JournalTransactionAlreadyPersistedError(
                f"transaction {persisted} is already persisted"
            ))
        return None

    def _stage(
        self,
        journal: JournalCreate,
        accounts: dict[str, Account],
        amount: Decimal,
    ) -> Journal:
        """Write the journal, its transactions and the new balances."""
        now = utcnow()
        record = Journal(
            journal_id=journal.journal_id,
            journaling_time=now,
            description=journal.description,
            reversal=journal.reversal,
            reversed_journal_id=journal.reversed_journal_id,
            amount=amount,
            created_at=now,
            created_by=journal.created_by,
        )
        self.db.add(record)

        # Input order: account_balance snapshots must be reproducible
        for position, trx in enumerate(journal.transactions):
            account = accounts[trx.account_number]
            alignment = Alignment(trx.alignment)
            if alignment == account.alignment:
                new_balance = account.balance + trx.amount
            else:
                new_balance = account.balance - trx.amount
            author = trx.created_by or journal.created_by

            record.transactions.append(Transaction(
                transaction_id=trx.transaction_id,
                transaction_time=now,
                account_number=account.account_number,
                journal_id=journal.journal_id,
                position=position,
                description=trx.description,
                alignment=alignment,
                amount=trx.amount,
                account_balance=new_balance,
                created_at=now,
                created_by=author,
            ))

            account.balance = new_balance
            account.updated_at = now
            account.updated_by = author

        self.db.flush()
        logger.info(
            "journal %s staged: %d transactions, amount %s",
            journal.journal_id, len(journal.transactions), amount,
            extra={"journal_id": journal.journal_id},
        )
        return record

    # --- Lookups ---

    def is_journal_exist(self, journal_id: str) -> bool:
        return self.db.get(Journal, journal_id) is not None

    def get_journal(self, journal_id: str) -> Journal:
        """
        Load a journal with its transactions.

        For a reversal the reversed journal is resolved too; a dangling
        reference raises JournalReversalInconsistentError, which is not
        the same thing as the journal itself being absent.
        """
        journal = self.db.get(Journal, journal_id)
        if journal is None:
            raise JournalNotFoundError(f"journal {journal_id} not found")
        self.get_reversed_journal(journal)
        return journal

    def get_reversed_journal(self, journal: Journal) -> Journal | None:
        """Resolve the journal that ``journal`` reverses, if any."""
        if not journal.reversal:
            return None
        try:
            return self.get_journal(journal.reversed_journal_id)
        except JournalNotFoundError:
            logger.error(
                "journal %s reverses missing journal %s",
                journal.journal_id, journal.reversed_journal_id,
                extra={"journal_id": journal.journal_id},
            )
            raise JournalReversalInconsistentError(
                f"journal {journal.journal_id} reverses missing journal "
                f"{journal.reversed_journal_id}"
            ) from None

    def is_journal_reversed(self, journal_id: str) -> bool:
        """True if some other journal reverses this one."""
        if not self.is_journal_exist(journal_id):
            raise JournalNotFoundError(f"journal {journal_id} not found")
        return self._reversed_by(journal_id) is not None

    def _reversed_by(self, journal_id: str) -> str | None:
        """ID of the journal that reverses ``journal_id``, if any."""
        return self.db.execute(
            select(Journal.journal_id)
            .where(Journal.reversed_journal_id == journal_id)
            .limit(1)
        ).scalar_one_or_none()

    def list_journals(
        self,
        start: datetime,
        until: datetime,
        request: PageRequest,
    ) -> tuple[PageResult, list[Journal]]:
        """Journals whose journaling time falls in [start, until]."""
        statement = select(Journal).where(
            Journal.journaling_time >= start,
            Journal.journaling_time <= until,
        )
        page, journals = paginate(
            self.db, statement, request, Journal,
            default_order=[Journal.journaling_time, Journal.journal_id],
        )
        for journal in journals:
            self.get_reversed_journal(journal)
        return page, journals
