"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class Alignment(str, enum.Enum):
    """
    Polarity of a transaction, or the side that increases an account.

    Asset based accounts are DEBIT aligned; equity and liability
    based accounts are CREDIT aligned.
    """
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    @property
    def opposite(self) -> "Alignment":
        if self is Alignment.DEBIT:
            return Alignment.CREDIT
        return Alignment.DEBIT
