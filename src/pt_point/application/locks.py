"""Critical-section locks for apply_transaction.

Granularity is a deployment choice; correctness does not depend on it:
  - global: one asyncio.Lock for every user (simplest, serializes all writes)
  - user:   one asyncio.Lock per user id, created on first use

Waiters are released in an unspecified order.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Protocol

from src.pt_common.errors import LockTimeoutError

logger = logging.getLogger(__name__)


class TransactionLockProtocol(Protocol):
    def hold(self, user_id: int) -> AbstractAsyncContextManager[None]: ...


class _TransactionLock(ABC):
    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    @abstractmethod
    def _lock_for(self, user_id: int) -> asyncio.Lock: ...

    @asynccontextmanager
    async def hold(self, user_id: int) -> AsyncIterator[None]:
        lock = self._lock_for(user_id)
        if self._timeout is None:
            await lock.acquire()
        else:
            try:
                await asyncio.wait_for(lock.acquire(), self._timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "Transaction lock wait timed out: user=%s timeout=%.3fs",
                    user_id,
                    self._timeout,
                )
                raise LockTimeoutError(user_id, self._timeout) from None
        try:
            yield
        finally:
            lock.release()


class GlobalTransactionLock(_TransactionLock):
    def __init__(self, timeout: float | None = None) -> None:
        super().__init__(timeout)
        self._lock = asyncio.Lock()

    def _lock_for(self, user_id: int) -> asyncio.Lock:
        return self._lock


class UserTransactionLock(_TransactionLock):
    def __init__(self, timeout: float | None = None) -> None:
        super().__init__(timeout)
        self._user_locks: dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _lock_for(self, user_id: int) -> asyncio.Lock:
        return self._user_locks[user_id]


def build_transaction_lock(
    granularity: str, timeout: float | None = None
) -> GlobalTransactionLock | UserTransactionLock:
    if granularity == "global":
        return GlobalTransactionLock(timeout)
    if granularity == "user":
        return UserTransactionLock(timeout)
    raise ValueError(f"Unknown lock granularity: {granularity!r}")
