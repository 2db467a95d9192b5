"""
Ledger error taxonomy.

Every error derives from LedgerError, itself a ValueError, so callers
that only know "bad input raises ValueError" keep working. Callers that
need to branch use the three families:

- LedgerValidationError: the request was rejected, nothing was written.
- LedgerIntegrityError: the store is missing data or holds inconsistent
  references (not-found lookups live here too).
- JournalCommitError: the two-phase protocol did not complete.
"""


class LedgerError(ValueError):
    """Base class for all ledger errors."""

    default_message = "ledger operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


# --- Validation ---

class LedgerValidationError(LedgerError):
    default_message = "ledger request is invalid"


class JournalNilError(LedgerValidationError):
    default_message = "journal is nil"


class JournalMissingIDError(LedgerValidationError):
    default_message = "journal is missing its journal ID"


class JournalNoTransactionError(LedgerValidationError):
    default_message = "journal contains no transactions"


class JournalMissingAuthorError(LedgerValidationError):
    default_message = "journal author is not known"


class JournalAlreadyPersistedError(LedgerValidationError):
    default_message = "journal is already persisted"


class JournalTransactionMissingIDError(LedgerValidationError):
    default_message = "journal transaction is missing its transaction ID"


class JournalTransactionAlreadyPersistedError(LedgerValidationError):
    default_message = "journal transaction is already persisted"


class JournalTransactionInvalidAlignmentError(LedgerValidationError):
    default_message = "journal transaction alignment must be DEBIT or CREDIT"


class JournalTransactionInvalidAmountError(LedgerValidationError):
    default_message = (
        "journal transaction amount must be non-negative, below 10^20, "
        "with at most 8 decimal places"
    )


class JournalNotBalancedError(LedgerValidationError):
    default_message = "journal's sum of debit and sum of credit do not balance"


class JournalTransactionAccountDuplicateError(LedgerValidationError):
    default_message = "multiple journal transactions belong to the same account"


class JournalTransactionAccountNotPersistedError(LedgerValidationError):
    default_message = "journal transaction refers to a non-existent account"


class JournalTransactionMixCurrencyError(LedgerValidationError):
    default_message = (
        "journal transactions contain mixed currencies, all transactions "
        "in a journal must belong to the same currency"
    )


class JournalCannotDoubleReverseError(LedgerValidationError):
    default_message = "journal can only be reversed once"


class AccountAlreadyPersistedError(LedgerValidationError):
    default_message = "account is already persisted"


class AccountMissingIDError(LedgerValidationError):
    default_message = "account number is not provided"


class AccountMissingNameError(LedgerValidationError):
    default_message = "account name is not provided"


class AccountMissingDescriptionError(LedgerValidationError):
    default_message = "account description is not provided"


class AccountMissingCreatorError(LedgerValidationError):
    default_message = "account creator is not provided"


class CurrencyAlreadyPersistedError(LedgerValidationError):
    default_message = "currency already persisted"


class InvalidDenominatorError(LedgerValidationError):
    default_message = "exchange denominator must be a positive number"


class InvalidSortColumnError(LedgerValidationError):
    default_message = "cannot sort on the requested column"


# --- Integrity ---

class LedgerIntegrityError(LedgerError):
    default_message = "ledger store is inconsistent"


class JournalReversalInconsistentError(LedgerIntegrityError):
    default_message = "reversal journal refers to a non-existent journal"


class RecordNotFoundError(LedgerIntegrityError):
    default_message = "record not found"


class JournalNotFoundError(RecordNotFoundError):
    default_message = "journal with specified ID not in database"


class AccountNotFoundError(RecordNotFoundError):
    default_message = "account number not in database"


class AccountNotPersistedError(RecordNotFoundError):
    default_message = "account is not persisted"


class TransactionNotFoundError(RecordNotFoundError):
    default_message = "transaction ID not in database"


class CurrencyNotFoundError(RecordNotFoundError):
    default_message = "currency not found"


# --- Two-phase ---

class JournalCommitError(LedgerError):
    default_message = "journal commit did not complete"
