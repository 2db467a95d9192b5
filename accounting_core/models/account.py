"""
Account model (chart of accounts).

The balance column is the running sum of every committed
transaction against the account. Only the journal admission
path in JournalService writes it.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from accounting_core.models.base import Base, utcnow
from accounting_core.models.enums import Alignment
from accounting_core.models.types import ExactDecimal


class Account(Base):
    __tablename__ = "accounts"

    account_number: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    alignment: Mapped[Alignment] = mapped_column(
        SAEnum(Alignment, name="alignment_enum"),
        nullable=False,
    )
    balance: Mapped[Decimal] = mapped_column(
        ExactDecimal(), nullable=False, default=Decimal("0")
    )
    coa: Mapped[str] = mapped_column(
        String(20), nullable=False, default="", index=True
    )
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
        return (
            f"<Account {self.account_number} "
            f"{self.alignment.value} {self.balance} {self.currency}>"
        )
