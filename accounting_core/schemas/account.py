"""
Pydantic schemas for account operations.

Mandatory account fields default to empty strings on purpose:
AccountService reports each missing field with its own error.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from accounting_core.models.enums import Alignment
from accounting_core.models.types import AMOUNT_PRECISION, AMOUNT_SCALE
from accounting_core.schemas.pagination import PageResult


class AccountCreate(BaseModel):
    """Request to open a new account."""
    account_number: str = Field(default="", max_length=64)
    name: str = Field(default="", max_length=100)
    description: str = Field(default="", max_length=255)
    currency: str = Field(min_length=1, max_length=10)
    alignment: Alignment
    coa: str = Field(default="", max_length=20)
    balance: Decimal = Field(
        default=Decimal("0"),
        max_digits=AMOUNT_PRECISION,
        decimal_places=AMOUNT_SCALE,
    )
    created_by: str = Field(default="", max_length=100)


class AccountUpdate(BaseModel):
    """
    Change the descriptive fields of an account.

    Currency, alignment and balance are not updatable.
    """
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    coa: str | None = Field(default=None, max_length=20)
    updated_by: str = Field(min_length=1, max_length=100)


class AccountResponse(BaseModel):
    account_number: str
    name: str
    description: str
    currency: str
    alignment: Alignment
    balance: Decimal
    coa: str
    created_at: datetime
    created_by: str
    updated_at: datetime
    updated_by: str

    model_config = {"from_attributes": True}


class AccountPage(BaseModel):
    page: PageResult
    items: list[AccountResponse]
