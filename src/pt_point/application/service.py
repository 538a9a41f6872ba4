"""PointApplicationService — the transaction coordinator.

get_balance / get_history are plain read-throughs and take no lock.
apply_transaction runs read → validate → upsert balance → append history as
one critical section (see locks.py); a rejection inside it leaves both
stores untouched. The two writes go through a PointLedger, which commits
both or neither. Store exceptions propagate unchanged.
"""

import logging

from config.settings import settings
from src.pt_common.datetime_utils import utc_now
from src.pt_common.enums import TransactionType
from src.pt_common.errors import AppError
from src.pt_point.application.locks import (
    TransactionLockProtocol,
    build_transaction_lock,
)
from src.pt_point.domain.models import PointBalance, PointTransaction
from src.pt_point.domain.repository import (
    BalanceStoreProtocol,
    HistoryStoreProtocol,
    PointLedgerProtocol,
)
from src.pt_point.domain.rules import (
    calculate_new_amount,
    check_amount,
    check_transaction,
    parse_transaction_type,
)
from src.pt_point.infrastructure.factory import build_point_stores
from src.pt_point.infrastructure.ledger import StorePairLedger

logger = logging.getLogger(__name__)


class PointApplicationService:
    def __init__(
        self,
        balance_store: BalanceStoreProtocol | None = None,
        history_store: HistoryStoreProtocol | None = None,
        lock: TransactionLockProtocol | None = None,
        max_balance: int | None = None,
        ledger: PointLedgerProtocol | None = None,
    ) -> None:
        if balance_store is None and history_store is None:
            balance_store, history_store, default_ledger = build_point_stores()
            ledger = ledger or default_ledger
        elif balance_store is None or history_store is None:
            default_balance, default_history, _ = build_point_stores()
            balance_store = balance_store or default_balance
            history_store = history_store or default_history
        self._balances: BalanceStoreProtocol = balance_store
        self._histories: HistoryStoreProtocol = history_store
        self._ledger: PointLedgerProtocol = ledger or StorePairLedger(
            balance_store, history_store
        )
        self._lock: TransactionLockProtocol = lock or build_transaction_lock(
            settings.POINT_LOCK_GRANULARITY, settings.POINT_LOCK_TIMEOUT_SECONDS
        )
        self._max_balance = (
            max_balance if max_balance is not None else settings.POINT_MAX_BALANCE
        )

    @property
    def max_balance(self) -> int:
        return self._max_balance

    async def get_balance(self, user_id: int) -> PointBalance:
        return await self._balances.select_by_id(user_id)

    async def get_history(self, user_id: int) -> list[PointTransaction]:
        return list(await self._histories.select_all_by_user_id(user_id))

    async def apply_transaction(
        self, user_id: int, amount: int, kind: TransactionType | str
    ) -> PointBalance:
        # Preconditions need no store state; reject before queuing on the lock
        check_amount(amount)
        tx_type = parse_transaction_type(kind)

        async with self._lock.hold(user_id):
            current = await self._balances.select_by_id(user_id)
            try:
                check_transaction(current.amount, amount, tx_type, self._max_balance)
            except AppError as exc:
                logger.info(
                    "Point transaction rejected: user=%s kind=%s amount=%d balance=%d code=%d",
                    user_id,
                    tx_type.value,
                    amount,
                    current.amount,
                    exc.code,
                )
                raise

            new_amount = calculate_new_amount(current.amount, amount, tx_type)
            balance, record = await self._ledger.record(
                current, new_amount, amount, tx_type, utc_now()
            )

        logger.info(
            "Point transaction applied: user=%s kind=%s amount=%d balance %d -> %d id=%s",
            user_id,
            tx_type.value,
            amount,
            current.amount,
            balance.amount,
            record.id,
        )
        return balance

    async def charge(self, user_id: int, amount: int) -> PointBalance:
        return await self.apply_transaction(user_id, amount, TransactionType.CHARGE)

    async def use(self, user_id: int, amount: int) -> PointBalance:
        return await self.apply_transaction(user_id, amount, TransactionType.USE)
