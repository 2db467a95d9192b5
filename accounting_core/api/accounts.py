"""
Account API endpoints.

Accounts are opened here; their balance only ever moves through
journals (see the journals endpoints).
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounting_core.api.errors import to_http_error
from accounting_core.api.params import page_params
from accounting_core.models.base import get_db
from accounting_core.schemas.account import (
    AccountCreate,
    AccountPage,
    AccountResponse,
    AccountUpdate,
)
from accounting_core.schemas.journal import TransactionPage
from accounting_core.schemas.pagination import PageRequest
from accounting_core.services.account_service import AccountService
from accounting_core.services.accounting_service import AccountingService
from accounting_core.services.transaction_service import TransactionService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """
    Open a new account.

    When no account number is given one is generated.
    """
    service = AccountingService(db)
    try:
        return service.create_account(request)
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.get("", response_model=AccountPage)
def list_accounts(
    coa: str | None = None,
    name: str | None = None,
    page_request: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
):
    """
    List accounts, optionally restricted to one COA code or to names
    containing ``name`` (case-insensitive).
    """
    service = AccountService(db)
    try:
        if coa is not None:
            page, accounts = service.list_accounts_by_coa(coa, page_request)
        elif name is not None:
            page, accounts = service.find_accounts(name, page_request)
        else:
            page, accounts = service.list_accounts(page_request)
    except ValueError as e:
        raise to_http_error(e)
    return AccountPage(page=page, items=accounts)


@router.get("/{account_number}", response_model=AccountResponse)
def get_account(
    account_number: str,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        return service.get_account(account_number)
    except ValueError as e:
        raise to_http_error(e)


@router.patch("/{account_number}", response_model=AccountResponse)
def update_account(
    account_number: str,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    """Change an account's name, description or COA code."""
    service = AccountService(db)
    try:
        account = service.update_account(account_number, request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.get("/{account_number}/transactions", response_model=TransactionPage)
def list_account_transactions(
    account_number: str,
    start: datetime,
    until: datetime,
    page_request: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
):
    """Transactions posted to the account between start and until, inclusive."""
    service = TransactionService(db)
    try:
        page, transactions = service.list_transactions_on_account(
            account_number, start, until, page_request
        )
    except ValueError as e:
        raise to_http_error(e)
    return TransactionPage(page=page, items=transactions)
