"""
Account service: manages the chart of accounts.

Accounts are created once. Afterwards only their descriptive fields
can be changed here; balance moves exclusively through journals
admitted by JournalService.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from accounting_core.errors import (
    AccountAlreadyPersistedError,
    AccountMissingCreatorError,
    AccountMissingDescriptionError,
    AccountMissingIDError,
    AccountMissingNameError,
    AccountNotFoundError,
    AccountNotPersistedError,
)
from accounting_core.models.account import Account
from accounting_core.models.base import utcnow
from accounting_core.pagination import paginate
from accounting_core.schemas.account import AccountCreate, AccountUpdate
from accounting_core.schemas.pagination import PageRequest, PageResult

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> Account:
        """
        Persist a new account.

        The account number, name, description and creator are all
        mandatory, and the account number must be new.
        """
        if not request.account_number:
            raise AccountMissingIDError()
        if not request.name:
            raise AccountMissingNameError()
        if not request.description:
            raise AccountMissingDescriptionError()
        if not request.created_by:
            raise AccountMissingCreatorError()

        if self.is_account_exist(request.account_number):
            raise AccountAlreadyPersistedError(
                f"account {request.account_number} already exists"
            )

        now = utcnow()
        account = Account(
            account_number=request.account_number,
            name=request.name,
            description=request.description,
            currency=request.currency,
            alignment=request.alignment,
            balance=request.balance,
            coa=request.coa,
            created_at=now,
            created_by=request.created_by,
            updated_at=now,
            updated_by=request.created_by,
        )
        self.db.add(account)
        self.db.flush()
        logger.info(
            "account %s created (%s, %s)",
            account.account_number, account.currency, account.alignment.value,
            extra={"account_number": account.account_number},
        )
        return account

    def update_account(
        self, account_number: str, request: AccountUpdate
    ) -> Account:
        """Change the name, description or COA of a persisted account."""
        if not account_number:
            raise AccountMissingIDError()
        account = self.db.get(Account, account_number)
        if account is None:
            raise AccountNotPersistedError(
                f"account {account_number} is not persisted"
            )

        if request.name is not None:
            if not request.name:
                raise AccountMissingNameError()
            account.name = request.name
        if request.description is not None:
            if not request.description:
                raise AccountMissingDescriptionError()
            account.description = request.description
        if request.coa is not None:
            account.coa = request.coa

        account.updated_at = utcnow()
        account.updated_by = request.updated_by
        self.db.flush()
        return account

    def is_account_exist(self, account_number: str) -> bool:
        return self.db.get(Account, account_number) is not None

    def get_account(self, account_number: str) -> Account:
        account = self.db.get(Account, account_number)
        if account is None:
            raise AccountNotFoundError(f"account {account_number} not found")
        return account

    def list_accounts(
        self, request: PageRequest
    ) -> tuple[PageResult, list[Account]]:
        return self._page(select(Account), request)

    def list_accounts_by_coa(
        self, coa: str, request: PageRequest
    ) -> tuple[PageResult, list[Account]]:
        return self._page(select(Account).where(Account.coa == coa), request)

    def find_accounts(
        self, name_like: str, request: PageRequest
    ) -> tuple[PageResult, list[Account]]:
        """Accounts whose name contains ``name_like``, ignoring case."""
        statement = select(Account).where(
            Account.name.icontains(name_like, autoescape=True)
        )
        return self._page(statement, request)

    def _page(self, statement, request: PageRequest):
        return paginate(
            self.db, statement, request, Account,
            default_order=[Account.created_at, Account.account_number],
        )
