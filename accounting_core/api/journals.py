"""
Journal API endpoints.

A journal is admitted as a whole or not at all. The response of a
rejected journal carries the reason in ``detail``.
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounting_core.api.errors import to_http_error
from accounting_core.api.params import page_params
from accounting_core.models.base import get_db
from accounting_core.schemas.journal import (
    JournalPage,
    JournalRequest,
    JournalResponse,
    ReversalRequest,
    ReversedStatusResponse,
    TransactionResponse,
)
from accounting_core.schemas.pagination import PageRequest
from accounting_core.services.accounting_service import AccountingService
from accounting_core.services.journal_service import JournalService
from accounting_core.services.transaction_service import TransactionService

router = APIRouter(tags=["Journals"])


@router.post("/journals", response_model=JournalResponse, status_code=201)
def create_journal(
    request: JournalRequest,
    db: Session = Depends(get_db),
):
    """
    Record a journal.

    Total debit must equal total credit, every account must exist and
    share one currency, and no account may appear twice.
    """
    service = AccountingService(db)
    try:
        return service.create_journal(request)
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.get("/journals", response_model=JournalPage)
def list_journals(
    start: datetime,
    until: datetime,
    page_request: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
):
    service = JournalService(db)
    try:
        page, journals = service.list_journals(start, until, page_request)
    except ValueError as e:
        raise to_http_error(e)
    return JournalPage(page=page, items=journals)


@router.get("/journals/{journal_id}", response_model=JournalResponse)
def get_journal(
    journal_id: str,
    db: Session = Depends(get_db),
):
    service = JournalService(db)
    try:
        return service.get_journal(journal_id)
    except ValueError as e:
        raise to_http_error(e)


@router.post(
    "/journals/{journal_id}/reversal",
    response_model=JournalResponse,
    status_code=201,
)
def reverse_journal(
    journal_id: str,
    request: ReversalRequest,
    db: Session = Depends(get_db),
):
    """Record the reversal of a journal. A journal can be reversed once."""
    service = AccountingService(db)
    try:
        return service.create_reversal(journal_id, request)
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.get(
    "/journals/{journal_id}/reversed",
    response_model=ReversedStatusResponse,
)
def is_journal_reversed(
    journal_id: str,
    db: Session = Depends(get_db),
):
    service = JournalService(db)
    try:
        reversed_ = service.is_journal_reversed(journal_id)
    except ValueError as e:
        raise to_http_error(e)
    return ReversedStatusResponse(journal_id=journal_id, reversed=reversed_)


@router.get(
    "/transactions/{transaction_id}",
    response_model=TransactionResponse,
)
def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
):
    service = TransactionService(db)
    try:
        return service.get_transaction(transaction_id)
    except ValueError as e:
        raise to_http_error(e)
