"""PostgreSQL store backend — concrete implementations of the store Protocols.

All queries use raw text() SQL (no ORM). Each store read runs in its own
short transaction opened from the session factory. The write path of a
point transaction goes through PointLedgerRepository, which runs the
balance upsert and the history insert on one session and commits once.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.pt_common.datetime_utils import utc_now
from src.pt_common.enums import TransactionType
from src.pt_common.errors import InternalError
from src.pt_point.domain.models import PointBalance, PointTransaction

# ---------------------------------------------------------------------------
# SQL: user_points
# ---------------------------------------------------------------------------

_GET_POINT_SQL = text("""
    SELECT user_id, amount, updated_at
    FROM user_points
    WHERE user_id = :user_id
""")

_UPSERT_POINT_SQL = text("""
    INSERT INTO user_points (user_id, amount, updated_at)
    VALUES (:user_id, :amount, :updated_at)
    ON CONFLICT (user_id) DO UPDATE
        SET amount = EXCLUDED.amount,
            updated_at = EXCLUDED.updated_at
    RETURNING user_id, amount, updated_at
""")

# ---------------------------------------------------------------------------
# SQL: point_histories (append-only)
# ---------------------------------------------------------------------------

_INSERT_HISTORY_SQL = text("""
    INSERT INTO point_histories (user_id, amount, kind, created_at)
    VALUES (:user_id, :amount, :kind, :created_at)
    RETURNING id, user_id, amount, kind, created_at
""")

_LIST_HISTORY_SQL = text("""
    SELECT id, user_id, amount, kind, created_at
    FROM point_histories
    WHERE user_id = :user_id
    ORDER BY id ASC
""")


def _row_to_balance(row: object) -> PointBalance:
    return PointBalance(
        user_id=row.user_id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_transaction(row: object) -> PointTransaction:
    return PointTransaction(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        kind=TransactionType(row.kind),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


async def _upsert_balance(db: AsyncSession, user_id: int, amount: int) -> PointBalance:
    result = await db.execute(
        _UPSERT_POINT_SQL,
        {"user_id": user_id, "amount": amount, "updated_at": utc_now()},
    )
    row = result.fetchone()
    if row is None:
        raise InternalError("Point upsert returned no rows — this should never happen")
    return _row_to_balance(row)


async def _insert_history(
    db: AsyncSession,
    user_id: int,
    amount: int,
    kind: TransactionType,
    created_at: datetime,
) -> PointTransaction:
    result = await db.execute(
        _INSERT_HISTORY_SQL,
        {
            "user_id": user_id,
            "amount": amount,
            "kind": kind.value,
            "created_at": created_at,
        },
    )
    row = result.fetchone()
    if row is None:
        raise InternalError("History insert returned no rows — this should never happen")
    return _row_to_transaction(row)


class BalanceRepository:
    """Balance store over the user_points table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def select_by_id(self, user_id: int) -> PointBalance:
        async with self._session_factory.begin() as db:
            result = await db.execute(_GET_POINT_SQL, {"user_id": user_id})
            row = result.fetchone()
        if row is None:
            # Unknown user: implicit zero balance, no row is created
            return PointBalance(user_id=user_id, amount=0, updated_at=utc_now())
        return _row_to_balance(row)

    async def insert_or_update(self, user_id: int, amount: int) -> PointBalance:
        async with self._session_factory.begin() as db:
            return await _upsert_balance(db, user_id, amount)


class HistoryRepository:
    """History store over the append-only point_histories table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert(
        self,
        user_id: int,
        amount: int,
        kind: TransactionType,
        created_at: datetime,
    ) -> PointTransaction:
        async with self._session_factory.begin() as db:
            return await _insert_history(db, user_id, amount, kind, created_at)

    async def select_all_by_user_id(self, user_id: int) -> list[PointTransaction]:
        async with self._session_factory.begin() as db:
            result = await db.execute(_LIST_HISTORY_SQL, {"user_id": user_id})
            rows = result.fetchall()
        return [_row_to_transaction(row) for row in rows]


class PointLedgerRepository:
    """Balance upsert + history insert in one database transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(
        self,
        current: PointBalance,
        new_amount: int,
        amount: int,
        kind: TransactionType,
        created_at: datetime,
    ) -> tuple[PointBalance, PointTransaction]:
        async with self._session_factory() as db:
            try:
                balance = await _upsert_balance(db, current.user_id, new_amount)
                record = await _insert_history(db, current.user_id, amount, kind, created_at)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        return balance, record
