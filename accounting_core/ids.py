"""
Unique identifier generators.

Journals, transactions and accounts are identified by strings that the
caller assigns before admission. Any generator works as long as the IDs
it produces are unique across every process writing to the same ledger.
"""

import secrets
import threading
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

LOWER_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
UPPER_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMBERS = "1234567890"
SYMBOLS = "!@#$%^&*(){}[]|;:<>,./?~"

NANO_EPOCH = datetime(2021, 1, 1, tzinfo=timezone.utc)
NANO_EPOCH_NS = int(NANO_EPOCH.timestamp()) * 1_000_000_000


class UniqueIDGenerator(ABC):
    """Base class for ID generators."""

    @abstractmethod
    def new_id(self) -> str:
        ...


class UUIDGenerator(UniqueIDGenerator):

    def new_id(self) -> str:
        return str(uuid.uuid4())


class NanosecondGenerator(UniqueIDGenerator):
    """
    Nanoseconds elapsed since 2021-01-01 UTC.

    Strictly increasing within one generator: two calls in the same
    clock tick get consecutive values. Only unique as long as a single
    process issues IDs.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def new_id(self) -> str:
        with self._lock:
            nanos = max(time.time_ns() - NANO_EPOCH_NS, self._last + 1)
            self._last = nanos
        return str(nanos)


class RandomStringGenerator(UniqueIDGenerator):
    """
    Random string drawn from a configurable alphabet.

    With no character class selected the alphabet defaults to upper
    case letters and digits.
    """

    def __init__(
        self,
        length: int = 16,
        lower_alpha: bool = False,
        upper_alpha: bool = False,
        numeric: bool = False,
        symbols: bool = False,
    ):
        if length <= 0:
            raise ValueError("length must be positive")
        self.length = length

        if not (lower_alpha or upper_alpha or numeric):
            charset = UPPER_ALPHABET + NUMBERS
        else:
            charset = ""
            if lower_alpha:
                charset += LOWER_ALPHABET
            if upper_alpha:
                charset += UPPER_ALPHABET
            if numeric:
                charset += NUMBERS
        if symbols:
            charset += SYMBOLS
        self.charset = charset

    def new_id(self) -> str:
        return "".join(
            secrets.choice(self.charset) for _ in range(self.length)
        )
