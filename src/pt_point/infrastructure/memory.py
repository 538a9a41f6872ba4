"""In-memory store backend — process-local dicts, nothing survives a restart.

Every operation awaits asyncio.sleep(latency) before touching state, even when
latency is 0, so concurrent callers really interleave between a read and the
following write. The coordinator's lock is what keeps that safe.
"""

import asyncio
from datetime import datetime

from src.pt_common.datetime_utils import utc_now
from src.pt_common.enums import TransactionType
from src.pt_point.domain.models import PointBalance, PointTransaction


class InMemoryBalanceStore:
    def __init__(self, latency: float = 0.0) -> None:
        self._latency = latency
        self._balances: dict[int, PointBalance] = {}

    async def select_by_id(self, user_id: int) -> PointBalance:
        await asyncio.sleep(self._latency)
        balance = self._balances.get(user_id)
        if balance is None:
            return PointBalance(user_id=user_id, amount=0, updated_at=utc_now())
        return balance

    async def insert_or_update(self, user_id: int, amount: int) -> PointBalance:
        await asyncio.sleep(self._latency)
        balance = PointBalance(user_id=user_id, amount=amount, updated_at=utc_now())
        self._balances[user_id] = balance
        return balance


class InMemoryHistoryStore:
    def __init__(self, latency: float = 0.0) -> None:
        self._latency = latency
        self._records: list[PointTransaction] = []
        self._cursor = 0  # last issued id, shared by all users

    async def insert(
        self,
        user_id: int,
        amount: int,
        kind: TransactionType,
        created_at: datetime,
    ) -> PointTransaction:
        await asyncio.sleep(self._latency)
        # id assignment and append happen with no await in between
        self._cursor += 1
        record = PointTransaction(
            id=self._cursor,
            user_id=user_id,
            amount=amount,
            kind=kind,
            created_at=created_at,
        )
        self._records.append(record)
        return record

    async def select_all_by_user_id(self, user_id: int) -> list[PointTransaction]:
        await asyncio.sleep(self._latency)
        return [r for r in self._records if r.user_id == user_id]
