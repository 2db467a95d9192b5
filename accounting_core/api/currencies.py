"""
Currency and exchange API endpoints.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounting_core.api.errors import to_http_error
from accounting_core.models.base import get_db
from accounting_core.schemas.currency import (
    CurrencyCreate,
    CurrencyResponse,
    CurrencyUpdate,
    DenominatorValue,
    ExchangeRateResponse,
    ExchangeResponse,
)
from accounting_core.services.exchange_service import ExchangeService

router = APIRouter(tags=["Currencies"])


@router.post("/currencies", response_model=CurrencyResponse, status_code=201)
def create_currency(
    request: CurrencyCreate,
    db: Session = Depends(get_db),
):
    service = ExchangeService(db)
    try:
        currency = service.create_currency(request)
        db.commit()
        return currency
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.get("/currencies", response_model=list[CurrencyResponse])
def list_currencies(db: Session = Depends(get_db)):
    return ExchangeService(db).list_currencies()


@router.get("/currencies/{code}", response_model=CurrencyResponse)
def get_currency(
    code: str,
    db: Session = Depends(get_db),
):
    service = ExchangeService(db)
    try:
        return service.get_currency(code)
    except ValueError as e:
        raise to_http_error(e)


@router.patch("/currencies/{code}", response_model=CurrencyResponse)
def update_currency(
    code: str,
    request: CurrencyUpdate,
    db: Session = Depends(get_db),
):
    """Change a currency's name or exchange factor."""
    service = ExchangeService(db)
    try:
        currency = service.update_currency(code, request)
        db.commit()
        return currency
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.get("/exchange/denominator", response_model=DenominatorValue)
def get_denominator(db: Session = Depends(get_db)):
    return DenominatorValue(value=ExchangeService(db).get_denom())


@router.put("/exchange/denominator", response_model=DenominatorValue)
def set_denominator(
    request: DenominatorValue,
    db: Session = Depends(get_db),
):
    """Replace the common denominator every exchange factor refers to."""
    service = ExchangeService(db)
    try:
        service.set_denom(request.value)
    except ValueError as e:
        raise to_http_error(e)
    return DenominatorValue(value=service.get_denom())


@router.get("/exchange/rate", response_model=ExchangeRateResponse)
def get_exchange_rate(
    from_currency: str,
    to_currency: str,
    db: Session = Depends(get_db),
):
    service = ExchangeService(db)
    try:
        rate = service.calculate_exchange_rate(from_currency, to_currency)
    except ValueError as e:
        raise to_http_error(e)
    return ExchangeRateResponse(
        from_currency=from_currency, to_currency=to_currency, rate=rate
    )


@router.get("/exchange", response_model=ExchangeResponse)
def exchange(
    from_currency: str,
    to_currency: str,
    amount: Decimal,
    db: Session = Depends(get_db),
):
    """Convert an amount from one currency into another."""
    service = ExchangeService(db)
    try:
        result = service.calculate_exchange(from_currency, to_currency, amount)
    except ValueError as e:
        raise to_http_error(e)
    return ExchangeResponse(
        from_currency=from_currency,
        to_currency=to_currency,
        amount=amount,
        result=result,
    )
