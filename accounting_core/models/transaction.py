"""
Transaction model.

One debit or credit effect on one account, owned by exactly one
journal. Transactions are immutable once persisted. account_balance
is the owning account's balance right after this transaction was
applied.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Integer, ForeignKey,
    Enum as SAEnum, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounting_core.models.base import Base, utcnow
from accounting_core.models.enums import Alignment
from accounting_core.models.types import ExactDecimal


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        # One transaction per account per journal
        UniqueConstraint(
            "journal_id", "account_number",
            name="uq_transactions_journal_account",
        ),
    )

    transaction_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    transaction_time: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    account_number: Mapped[str] = mapped_column(
        ForeignKey("accounts.account_number"), nullable=False, index=True
    )
    journal_id: Mapped[str] = mapped_column(
        ForeignKey("journals.journal_id"), nullable=False, index=True
    )
    # Input order within the journal
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    alignment: Mapped[Alignment] = mapped_column(
        SAEnum(Alignment, name="alignment_enum"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(ExactDecimal(), nullable=False)
    account_balance: Mapped[Decimal] = mapped_column(
        ExactDecimal(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)

    journal: Mapped["Journal"] = relationship(back_populates="transactions")

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.transaction_id} {self.alignment.value} "
            f"{self.amount} on {self.account_number}>"
        )
