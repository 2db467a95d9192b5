"""
Journal model.

A journal groups the transactions of one balanced event. Journals
are never updated or deleted: a correction is a new reversal journal,
optionally followed by a corrective one.

reversed_journal_id is a plain lookup reference, not a foreign key
relationship. JournalService resolves it on read and reports a
dangling reference as an integrity error.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounting_core.models.base import Base, utcnow
from accounting_core.models.types import ExactDecimal


class Journal(Base):
    __tablename__ = "journals"

    journal_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    journaling_time: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, index=True
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    reversal: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    # Unique: a journal is reversed at most once. NULLs never collide.
    reversed_journal_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True, unique=True
    )
    amount: Mapped[Decimal] = mapped_column(ExactDecimal(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)

    # Transactions come back in the order they were admitted
    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="journal",
        order_by="Transaction.position",
    )

    def __repr__(self) -> str:
        kind = "reversal" if self.reversal else "journal"
        return f"<Journal {self.journal_id} {kind} {self.amount}>"
