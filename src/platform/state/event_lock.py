"""
Per-event mutual exclusion for the booking path

Keyed anyio locks: every book/cancel for the same event runs one at a time inside
this process. Cross-process safety comes from the version check in the event
update; this lock keeps the common case free of CAS retries.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Dict

import anyio

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger


class _LockEntry:
    __slots__ = ('lock', 'holders')

    def __init__(self) -> None:
        self.lock = anyio.Lock()
        self.holders = 0  # Holding or waiting


class EventLockRegistry:
    def __init__(self, *, timeout_seconds: float = 5.0) -> None:
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[int, _LockEntry] = {}

    @asynccontextmanager
    async def hold(self, *, event_id: int) -> AsyncIterator[None]:
        """
        Acquire the lock for one event.

        Raises:
            ConflictError: lock not acquired within timeout_seconds
        """
        entry = self._locks.get(event_id)
        if entry is None:
            entry = self._locks[event_id] = _LockEntry()
        entry.holders += 1

        try:
            try:
                with anyio.fail_after(self.timeout_seconds):
                    await entry.lock.acquire()
            except TimeoutError:
                Logger.base.warning(f'⏳ [LOCK] Timed out waiting for event {event_id}')
                raise ConflictError('Event is busy, please retry') from None

            Logger.base.debug(f'🔒 [LOCK] Acquired event {event_id}')
            try:
                yield
            finally:
                entry.lock.release()
                Logger.base.debug(f'🔓 [LOCK] Released event {event_id}')
        finally:
            entry.holders -= 1
            if entry.holders == 0 and self._locks.get(event_id) is entry:
                del self._locks[event_id]

    def is_locked(self, *, event_id: int) -> bool:
        entry = self._locks.get(event_id)
        return bool(entry and entry.lock.locked())
