"""Per-key serialization of command handlers.

Ledger mutations, order-number allocation and alert scans are
read-check-write sequences. Their handler methods are wrapped with
``@serialized(...)`` on top of ``@handle(...)``, so the lock for the
command's key is held across the whole unit of work (load, mutate, commit)
no matter who processes the command.

Within a process a ``threading.Lock`` per key queues callers. When the
default provider is PostgreSQL a session-level advisory lock on the same key
is taken as well, which queues workers running in other processes. A save
that still loses a version race (``ExpectedVersionError``) is retried once
with a fresh read.
"""

import functools
import os
import threading
import zlib
from contextlib import contextmanager

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from shared.errors import ConcurrencyConflict

logger = structlog.get_logger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


def lock_timeout() -> float:
    """Seconds to wait for a key lock before giving up on one attempt."""
    return float(os.getenv("STOCKROOM_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT))


class KeyedLocks:
    """A registry of one lock per key, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


_locks = KeyedLocks()


class LockTimeout(Exception):
    """A database lock could not be taken in time."""


def advisory_lock_id(key: str) -> int:
    """Stable signed 32-bit id for ``key``, as PostgreSQL advisory locks expect."""
    value = zlib.crc32(key.encode("utf-8"))
    return value - (1 << 32) if value >= (1 << 31) else value


@contextmanager
def database_lock(key: str, timeout: float, provider_name: str = "default"):
    """Hold a PostgreSQL advisory lock for ``key``; a no-op on other providers."""
    provider = current_domain.providers[provider_name]
    if getattr(provider, "__database__", None) != "postgresql":
        yield
        return

    lock_id = advisory_lock_id(key)
    with provider._engine.connect() as conn:
        conn.execute(
            text("SELECT set_config('lock_timeout', :timeout, false)"),
            {"timeout": f"{int(timeout * 1000)}ms"},
        )
        try:
            conn.execute(text("SELECT pg_advisory_lock(:lock_id)"), {"lock_id": lock_id})
        except OperationalError as exc:
            raise LockTimeout(key) from exc
        try:
            yield
        finally:
            conn.execute(text("SELECT pg_advisory_unlock(:lock_id)"), {"lock_id": lock_id})
            conn.commit()


def run_serialized(key: str, work, timeout: float | None = None, locks: KeyedLocks | None = None):
    """Run ``work()`` while holding every lock for ``key``.

    A timed-out acquisition or a stale-version save is retried once; a second
    failure surfaces ``ConcurrencyConflict``. Returns whatever ``work`` returns.
    """
    lock = (locks or _locks).lock_for(key)
    wait = lock_timeout() if timeout is None else timeout

    for attempt in (1, 2):
        if not lock.acquire(timeout=wait):
            logger.warning("lock_acquire_timeout", key=key, attempt=attempt, timeout=wait)
            continue
        try:
            with database_lock(key, wait):
                return work()
        except LockTimeout:
            logger.warning("database_lock_timeout", key=key, attempt=attempt, timeout=wait)
        except ExpectedVersionError as exc:
            logger.warning("stale_aggregate_version", key=key, attempt=attempt, error=str(exc))
        finally:
            lock.release()

    raise ConcurrencyConflict(
        f"Timed out waiting for a concurrent update of {key}",
        details={"key": key},
    )


def serialized(key_for):
    """Serialize a command handler method on ``key_for(command)``.

    Apply it above ``@handle`` so the lock also covers the commit::

        @serialized(lambda command: record_key(command.inventory_record_id))
        @handle(AdjustInventory)
        def adjust(self, command): ...
    """

    def decorator(handler_method):
        @functools.wraps(handler_method)
        def wrapper(handler, command):
            return run_serialized(key_for(command), lambda: handler_method(handler, command))

        return wrapper

    return decorator
