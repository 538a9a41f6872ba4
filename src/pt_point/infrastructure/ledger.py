"""Ledger over a plain balance/history store pair.

The stores have no shared transaction, so a failed history append is undone
by writing the previous amount back. The coordinator holds the transaction
lock for the whole call; nothing else writes that user's balance in between.
"""

import logging
from datetime import datetime

from src.pt_common.enums import TransactionType
from src.pt_point.domain.models import PointBalance, PointTransaction
from src.pt_point.domain.repository import BalanceStoreProtocol, HistoryStoreProtocol

logger = logging.getLogger(__name__)


class StorePairLedger:
    def __init__(
        self, balances: BalanceStoreProtocol, histories: HistoryStoreProtocol
    ) -> None:
        self._balances = balances
        self._histories = histories

    async def record(
        self,
        current: PointBalance,
        new_amount: int,
        amount: int,
        kind: TransactionType,
        created_at: datetime,
    ) -> tuple[PointBalance, PointTransaction]:
        balance = await self._balances.insert_or_update(current.user_id, new_amount)
        try:
            record = await self._histories.insert(current.user_id, amount, kind, created_at)
        except Exception:
            logger.warning(
                "History append failed, restoring balance: user=%s balance %d -> %d",
                current.user_id,
                new_amount,
                current.amount,
            )
            await self._balances.insert_or_update(current.user_id, current.amount)
            raise
        return balance, record
