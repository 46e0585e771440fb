"""
Failed login tracking and temporary lockout, keyed by client IP.

A key moves Clean (no record) -> Warming (1-4 failures) -> Locked (5+
failures, lock_until in the future). A successful login deletes the record;
an elapsed lock is dropped the next time the key is checked. The periodic
sweep only bounds memory.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
LOCKOUT_SECONDS = 30 * 60
SWEEP_INTERVAL = 60 * 60


@dataclass
class AttemptRecord:
    count: int = 0
    lock_until: Optional[float] = None
    last_failure: float = 0.0


class AttemptStore:
    """Storage for attempt records.

    The in-memory store is per process. A deployment with several instances
    needs a shared implementation (e.g. a key-value store with TTLs).
    """

    def get(self, key: str) -> Optional[AttemptRecord]:
        raise NotImplementedError

    def set(self, key: str, record: AttemptRecord) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def items(self) -> Iterator[Tuple[str, AttemptRecord]]:
        raise NotImplementedError


class InMemoryAttemptStore(AttemptStore):
    """Dict-backed store guarded by a lock."""

    def __init__(self):
        self._records: Dict[str, AttemptRecord] = {}
        self.lock = threading.RLock()

    def get(self, key):
        with self.lock:
            return self._records.get(key)

    def set(self, key, record):
        with self.lock:
            self._records[key] = record

    def delete(self, key):
        with self.lock:
            self._records.pop(key, None)

    def items(self):
        with self.lock:
            return iter(list(self._records.items()))

    def __len__(self):
        with self.lock:
            return len(self._records)


class LockoutTracker:
    """Track consecutive failed logins per IP and lock noisy IPs out."""

    def __init__(self, store=None, max_attempts=MAX_ATTEMPTS,
                 lockout_seconds=LOCKOUT_SECONDS, clock=time.time):
        self.store = store if store is not None else InMemoryAttemptStore()
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self.clock = clock
        # Serialises read-modify-write sequences across request threads
        self._lock = threading.RLock()
        self._sweeper = None

    def _current(self, key, now):
        """Return the live record for key, dropping an elapsed lock."""
        record = self.store.get(key)
        if record is None:
            return None
        if record.lock_until is not None and now >= record.lock_until:
            self.store.delete(key)
            return None
        return record

    def is_locked(self, key: str) -> bool:
        with self._lock:
            record = self._current(key, self.clock())
            return record is not None and record.lock_until is not None

    def retry_after(self, key: str) -> int:
        """Seconds until the lock on key ends (0 when not locked)."""
        with self._lock:
            now = self.clock()
            record = self._current(key, now)
            if record is None or record.lock_until is None:
                return 0
            return max(0, int(round(record.lock_until - now)))

    def failure_count(self, key: str) -> int:
        with self._lock:
            record = self._current(key, self.clock())
            return record.count if record else 0

    def record_failure(self, key: str) -> AttemptRecord:
        """Count a failed login; the fifth one starts the lock."""
        with self._lock:
            now = self.clock()
            record = self._current(key, now) or AttemptRecord()
            record.count += 1
            record.last_failure = now
            if record.count >= self.max_attempts and record.lock_until is None:
                record.lock_until = now + self.lockout_seconds
                logger.warning('IP %s locked out for %ds after %d failed login attempts',
                               key, self.lockout_seconds, record.count)
            self.store.set(key, record)
            return record

    def record_success(self, key: str) -> None:
        with self._lock:
            self.store.delete(key)

    def sweep(self) -> int:
        """Drop expired locks and stale unlocked records. Returns how many."""
        with self._lock:
            now = self.clock()
            stale = []
            for key, record in self.store.items():
                if record.lock_until is not None:
                    if now >= record.lock_until:
                        stale.append(key)
                elif now - record.last_failure >= self.lockout_seconds:
                    stale.append(key)
            for key in stale:
                self.store.delete(key)
        if stale:
            logger.debug('Lockout sweep removed %d records', len(stale))
        return len(stale)

    def start_sweeper(self, interval=SWEEP_INTERVAL):
        """Run sweep() every interval seconds on a daemon timer."""
        def _run():
            try:
                self.sweep()
            except Exception:
                logger.exception('Lockout sweep failed')
            self._schedule(interval, _run)

        self._schedule(interval, _run)

    def _schedule(self, interval, func):
        timer = threading.Timer(interval, func)
        timer.daemon = True
        timer.start()
        self._sweeper = timer

    def stop_sweeper(self):
        if self._sweeper is not None:
            self._sweeper.cancel()
            self._sweeper = None
