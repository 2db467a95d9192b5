"""
Accounting service: the caller side of the ledger.

Builds journals from caller requests (assigning IDs and audit
fields), builds reversals of existing journals, and drives each one
through JournalService: persist, then commit, then cancel if the
commit fails.
"""

import logging

from sqlalchemy.orm import Session

from accounting_core.errors import JournalCommitError
from accounting_core.ids import UniqueIDGenerator, UUIDGenerator
from accounting_core.models.account import Account
from accounting_core.models.journal import Journal
from accounting_core.schemas.account import AccountCreate
from accounting_core.schemas.journal import (
    JournalCreate,
    JournalRequest,
    ReversalRequest,
    TransactionCreate,
)
from accounting_core.services.account_service import AccountService
from accounting_core.services.journal_service import JournalService
from accounting_core.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


class AccountingService:

    def __init__(
        self,
        db: Session,
        id_generator: UniqueIDGenerator | None = None,
        journals: JournalService | None = None,
    ):
        self.db = db
        self.id_generator = id_generator or UUIDGenerator()
        self.accounts = AccountService(db)
        self.transactions = TransactionService(db)
        self.journals = journals or JournalService(db)

    def create_account(self, request: AccountCreate) -> Account:
        """Create and commit an account, generating its number if missing."""
        if not request.account_number:
            request = request.model_copy(
                update={"account_number": self.id_generator.new_id()}
            )
        account = self.accounts.create_account(request)
        self.db.commit()
        return account

    def create_journal(self, request: JournalRequest) -> Journal:
        """Record a new journal. Every ID is generated here."""
        journal = JournalCreate(
            journal_id=self.id_generator.new_id(),
            description=request.description,
            created_by=request.created_by,
            transactions=[
                TransactionCreate(
                    transaction_id=self.id_generator.new_id(),
                    account_number=info.account_number,
                    description=info.description,
                    alignment=info.alignment,
                    amount=info.amount,
                    created_by=request.created_by,
                )
                for info in request.transactions
            ],
        )
        return self._admit(journal)

    def create_reversal(
        self, reversed_journal_id: str, request: ReversalRequest
    ) -> Journal:
        """
        Record the reversal of an existing journal.

        Each transaction of the original is mirrored on the same account
        with the same amount and the opposite alignment.
        """
        original = self.journals.get_journal(reversed_journal_id)
        journal = JournalCreate(
            journal_id=self.id_generator.new_id(),
            description=request.description,
            reversed_journal_id=original.journal_id,
            created_by=request.created_by,
            transactions=[
                TransactionCreate(
                    transaction_id=self.id_generator.new_id(),
                    account_number=trx.account_number,
                    description=f"{trx.description} - reversed",
                    alignment=trx.alignment.opposite,
                    amount=trx.amount,
                    created_by=request.created_by,
                )
                for trx in original.transactions
            ],
        )
        return self._admit(journal)

    def _admit(self, journal: JournalCreate) -> Journal:
        record = self.journals.persist(journal)
        try:
            self.journals.commit(journal)
        except Exception:
            try:
                self.journals.cancel(journal)
            except Exception:
                logger.exception(
                    "cancel of journal %s failed after a failed commit",
                    journal.journal_id,
                    extra={"journal_id": journal.journal_id},
                )
            raise
        if record is None:
            raise JournalCommitError(
                "commit journal raised no error but no content"
            )
        return record
