"""
Pydantic schemas for journal operations.

JournalCreate is what the admission engine consumes: every ID is
already assigned. JournalRequest is the caller-facing shape, with
no IDs, that AccountingService turns into a JournalCreate.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from accounting_core.models.enums import Alignment
from accounting_core.models.types import AMOUNT_PRECISION, AMOUNT_SCALE
from accounting_core.schemas.pagination import PageResult


# --- Admission Schemas ---

class TransactionCreate(BaseModel):
    """A single debit or credit within a journal."""
    transaction_id: str = Field(default="", max_length=64)
    account_number: str = Field(max_length=64)
    description: str = Field(default="", max_length=255)
    alignment: Alignment
    amount: Decimal = Field(
        ge=0, max_digits=AMOUNT_PRECISION, decimal_places=AMOUNT_SCALE
    )
    created_by: str = Field(default="", max_length=100)


class JournalCreate(BaseModel):
    """
    A journal ready for admission.

    Setting reversed_journal_id marks the journal as a reversal of
    that journal.
    """
    journal_id: str = Field(default="", max_length=64)
    description: str = Field(default="", max_length=255)
    reversed_journal_id: str | None = Field(default=None, max_length=64)
    created_by: str = Field(default="", max_length=100)
    transactions: list[TransactionCreate] = Field(default_factory=list)

    @property
    def reversal(self) -> bool:
        return self.reversed_journal_id is not None


# --- Caller Schemas ---

class TransactionInfo(BaseModel):
    account_number: str = Field(min_length=1, max_length=64)
    description: str = Field(default="", max_length=255)
    alignment: Alignment
    amount: Decimal = Field(
        ge=0, max_digits=AMOUNT_PRECISION, decimal_places=AMOUNT_SCALE
    )


class JournalRequest(BaseModel):
    """Request to record a new journal."""
    description: str = Field(default="", max_length=255)
    created_by: str = Field(default="", max_length=100)
    transactions: list[TransactionInfo] = Field(default_factory=list)


class ReversalRequest(BaseModel):
    """Request to reverse an existing journal."""
    description: str = Field(default="", max_length=255)
    created_by: str = Field(default="", max_length=100)


# --- Response Schemas ---

class TransactionResponse(BaseModel):
    transaction_id: str
    transaction_time: datetime
    account_number: str
    journal_id: str
    description: str
    alignment: Alignment
    amount: Decimal
    account_balance: Decimal
    created_at: datetime
    created_by: str

    model_config = {"from_attributes": True}


class JournalResponse(BaseModel):
    journal_id: str
    journaling_time: datetime
    description: str
    reversal: bool
    reversed_journal_id: str | None
    amount: Decimal
    created_at: datetime
    created_by: str
    transactions: list[TransactionResponse]

    model_config = {"from_attributes": True}


class ReversedStatusResponse(BaseModel):
    journal_id: str
    reversed: bool


class JournalPage(BaseModel):
    page: PageResult
    items: list[JournalResponse]


class TransactionPage(BaseModel):
    page: PageResult
    items: list[TransactionResponse]
