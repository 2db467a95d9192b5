"""
Per-account critical sections.

Computing a new balance reads and then writes the account row, so two
journals touching the same account must be admitted one after the
other. Journals on disjoint account sets do not contend.

Locks are re-entrant: one thread may stage several journals over the
same accounts inside one session before committing.
"""

import threading
from collections.abc import Iterable


class AccountLockSet:
    """Locks held for one journal. release() is idempotent."""

    def __init__(self, locks: list):
        self._locks = locks
        self._released = False

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        for lock in reversed(self._locks):
            lock.release()

    def __enter__(self) -> "AccountLockSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class AccountLockRegistry:
    """Hands out one lock per account number."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, account_number: str):
        with self._guard:
            lock = self._locks.get(account_number)
            if lock is None:
                lock = threading.RLock()
                self._locks[account_number] = lock
            return lock

    def acquire(self, account_numbers: Iterable[str]) -> AccountLockSet:
        """
        Block until every listed account is locked.

        Locks are taken in sorted order so two journals with
        overlapping account sets cannot deadlock.
        """
        held = []
        try:
            for account_number in sorted(set(account_numbers)):
                lock = self._lock_for(account_number)
                lock.acquire()
                held.append(lock)
        except BaseException:
            for lock in reversed(held):
                lock.release()
            raise
        return AccountLockSet(held)


# Process-wide registry shared by every JournalService
account_locks = AccountLockRegistry()
