"""
Translation of ledger errors into HTTP errors.

    not found            -> 404
    other integrity      -> 409
    commit failure       -> 500
    anything else        -> 400
"""

from fastapi import HTTPException

from accounting_core.errors import (
    JournalCommitError,
    LedgerIntegrityError,
    RecordNotFoundError,
)


def to_http_error(error: ValueError) -> HTTPException:
    if isinstance(error, RecordNotFoundError):
        status_code = 404
    elif isinstance(error, LedgerIntegrityError):
        status_code = 409
    elif isinstance(error, JournalCommitError):
        status_code = 500
    else:
        status_code = 400
    return HTTPException(status_code=status_code, detail=str(error))
