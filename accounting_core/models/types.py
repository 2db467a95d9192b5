"""
Exact decimal column type.

SQLite has no decimal storage: SQLAlchemy's Numeric goes through a
float there and loses digits past about 15 significant figures. On
SQLite, ExactDecimal stores the decimal's text form instead and parses
it back unchanged. Other databases get a native NUMERIC.
"""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator

# Amounts and balances: 20 integer digits, 8 decimal places
AMOUNT_PRECISION = 28
AMOUNT_SCALE = 8


class ExactDecimal(TypeDecorator):
    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int = AMOUNT_PRECISION, scale: int = AMOUNT_SCALE):
        super().__init__(precision=precision, scale=scale, asdecimal=True)
        self.precision = precision
        self.scale = scale

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(64))
        return dialect.type_descriptor(
            Numeric(self.precision, self.scale, asdecimal=True)
        )

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(value)
        if dialect.name == "sqlite":
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
