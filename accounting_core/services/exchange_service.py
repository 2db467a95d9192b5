"""
Exchange service: currencies and conversion between them.

Every currency carries an exchange factor: the value of one unit of
that currency against a common denominator. The rate from A to B is

    (denominator / exchange(A)) * exchange(B) / denominator

Arithmetic is done on exact fractions and converted back to Decimal
once, at the end.

The denominator is process-wide. It starts from the
EXCHANGE_DENOMINATOR setting and can be changed at runtime.
"""

import logging
import threading
from decimal import Decimal
from fractions import Fraction

from sqlalchemy import select
from sqlalchemy.orm import Session

from accounting_core.config import get_settings
from accounting_core.errors import (
    CurrencyAlreadyPersistedError,
    CurrencyNotFoundError,
    InvalidDenominatorError,
)
from accounting_core.models.base import utcnow
from accounting_core.models.currency import Currency
from accounting_core.schemas.currency import CurrencyCreate, CurrencyUpdate

logger = logging.getLogger(__name__)

_denominator_lock = threading.Lock()
_denominator = Decimal(get_settings().EXCHANGE_DENOMINATOR)


def get_denom() -> Decimal:
    """Current common denominator."""
    with _denominator_lock:
        return _denominator


def set_denom(value) -> None:
    """Replace the common denominator. It must be greater than zero."""
    global _denominator
    value = Decimal(value)
    if value <= 0:
        raise InvalidDenominatorError(
            f"denominator must be greater than zero, got {value}"
        )
    with _denominator_lock:
        _denominator = value
    logger.info("exchange denominator set to %s", value)


def _to_decimal(value: Fraction) -> Decimal:
    return Decimal(value.numerator) / Decimal(value.denominator)


class ExchangeService:

    def __init__(self, db: Session):
        self.db = db

    def get_denom(self) -> Decimal:
        return get_denom()

    def set_denom(self, value) -> None:
        set_denom(value)

    # --- Currencies ---

    def is_currency_exist(self, code: str) -> bool:
        return self.db.get(Currency, code) is not None

    def get_currency(self, code: str) -> Currency:
        currency = self.db.get(Currency, code)
        if currency is None:
            raise CurrencyNotFoundError(f"currency {code} not found")
        return currency

    def list_currencies(self) -> list[Currency]:
        return list(
            self.db.execute(select(Currency).order_by(Currency.code)).scalars()
        )

    def create_currency(self, request: CurrencyCreate) -> Currency:
        if self.is_currency_exist(request.code):
            raise CurrencyAlreadyPersistedError(
                f"currency {request.code} already exists"
            )
        now = utcnow()
        currency = Currency(
            code=request.code,
            name=request.name,
            exchange=request.exchange,
            created_at=now,
            created_by=request.created_by,
            updated_at=now,
            updated_by=request.created_by,
        )
        self.db.add(currency)
        self.db.flush()
        logger.info(
            "currency %s created with exchange %s",
            currency.code, currency.exchange,
            extra={"currency": currency.code},
        )
        return currency

    def update_currency(self, code: str, request: CurrencyUpdate) -> Currency:
        currency = self.get_currency(code)
        if request.name is not None:
            currency.name = request.name
        if request.exchange is not None:
            currency.exchange = request.exchange
        currency.updated_at = utcnow()
        currency.updated_by = request.updated_by
        self.db.flush()
        return currency

    # --- Conversion ---

    def calculate_exchange_rate(
        self, from_currency: str, to_currency: str
    ) -> Decimal:
        """How many units of ``to_currency`` one unit of ``from_currency`` buys."""
        source = self.get_currency(from_currency)
        target = self.get_currency(to_currency)
        if source.code == target.code:
            return Decimal(1)
        return _to_decimal(self._rate(source, target))

    def calculate_exchange(
        self, from_currency: str, to_currency: str, amount: Decimal
    ) -> Decimal:
        """Convert ``amount`` of ``from_currency`` into ``to_currency``."""
        source = self.get_currency(from_currency)
        target = self.get_currency(to_currency)
        if source.code == target.code:
            return amount
        return _to_decimal(self._rate(source, target) * Fraction(amount))

    def _rate(self, source: Currency, target: Currency) -> Fraction:
        denom = Fraction(get_denom())
        return (
            denom / Fraction(source.exchange)
            * Fraction(target.exchange) / denom
        )
