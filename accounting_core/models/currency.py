"""
Currency model.

exchange is the value of one unit of this currency expressed
against the process-wide common denominator (see ExchangeService).
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from accounting_core.models.base import Base, utcnow
from accounting_core.models.types import ExactDecimal


class Currency(Base):
    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(10), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    exchange: Mapped[Decimal] = mapped_column(ExactDecimal(28, 12), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default=""
    )

    def __repr__(self) -> str:
        return f"<Currency {self.code} {self.exchange}>"
