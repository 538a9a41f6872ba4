"""Store Protocols — dependency inversion for testability.

Unit tests inject mocks that conform to these Protocols.
Infrastructure layer provides the in-memory and PostgreSQL implementations.
PointLedgerProtocol pairs the two writes of one transaction.
"""

from datetime import datetime
from typing import Protocol

from src.pt_common.enums import TransactionType
from src.pt_point.domain.models import PointBalance, PointTransaction


class BalanceStoreProtocol(Protocol):
    async def select_by_id(self, user_id: int) -> PointBalance:
        """Current balance; an unknown user yields a zero balance."""
        ...

    async def insert_or_update(self, user_id: int, amount: int) -> PointBalance: ...


class HistoryStoreProtocol(Protocol):
    async def insert(
        self,
        user_id: int,
        amount: int,
        kind: TransactionType,
        created_at: datetime,
    ) -> PointTransaction: ...

    async def select_all_by_user_id(self, user_id: int) -> list[PointTransaction]:
        """All records for the user in insertion order. Never filtered or paginated."""
        ...


class PointLedgerProtocol(Protocol):
    async def record(
        self,
        current: PointBalance,
        new_amount: int,
        amount: int,
        kind: TransactionType,
        created_at: datetime,
    ) -> tuple[PointBalance, PointTransaction]:
        """Upsert the balance and append its history record, all-or-nothing.

        ``current`` is the balance read inside the critical section; a failed
        append must leave the stored balance at ``current.amount``.
        """
        ...
