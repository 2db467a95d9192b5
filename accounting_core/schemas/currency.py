"""
Pydantic schemas for currencies and exchange calculations.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CurrencyCreate(BaseModel):
    code: str = Field(min_length=1, max_length=10)
    name: str = Field(min_length=1, max_length=100)
    exchange: Decimal = Field(gt=0, max_digits=28, decimal_places=12)
    created_by: str = Field(min_length=1, max_length=100)


class CurrencyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    exchange: Decimal | None = Field(
        default=None, gt=0, max_digits=28, decimal_places=12
    )
    updated_by: str = Field(min_length=1, max_length=100)


class CurrencyResponse(BaseModel):
    code: str
    name: str
    exchange: Decimal
    created_at: datetime
    created_by: str
    updated_at: datetime
    updated_by: str

    model_config = {"from_attributes": True}


class DenominatorValue(BaseModel):
    value: Decimal = Field(gt=0)


class ExchangeRateResponse(BaseModel):
    from_currency: str
    to_currency: str
    rate: Decimal


class ExchangeResponse(BaseModel):
    from_currency: str
    to_currency: str
    amount: Decimal
    result: Decimal
