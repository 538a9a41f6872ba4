"""Pydantic schemas for pt_point API."""

from pydantic import BaseModel, Field

from src.pt_common.datetime_utils import to_epoch_millis
from src.pt_point.domain.models import PointBalance, PointTransaction

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PointAmountRequest(BaseModel):
    amount: int = Field(..., gt=0, strict=True, description="Points to charge or use")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PointBalanceResponse(BaseModel):
    user_id: int
    point: int
    updated_at: str  # ISO8601 string
    updated_millis: int

    @classmethod
    def from_domain(cls, balance: PointBalance) -> "PointBalanceResponse":
        return cls(
            user_id=balance.user_id,
            point=balance.amount,
            updated_at=balance.updated_at.isoformat(),
            updated_millis=to_epoch_millis(balance.updated_at),
        )


class PointHistoryItem(BaseModel):
    id: int
    user_id: int
    amount: int
    type: str  # TransactionType value
    created_at: str  # ISO8601 string
    created_millis: int

    @classmethod
    def from_domain(cls, record: PointTransaction) -> "PointHistoryItem":
        return cls(
            id=record.id,
            user_id=record.user_id,
            amount=record.amount,
            type=record.kind.value,
            created_at=record.created_at.isoformat(),
            created_millis=to_epoch_millis(record.created_at),
        )


class PointHistoryResponse(BaseModel):
    items: list[PointHistoryItem]
    count: int

    @classmethod
    def from_domain(cls, records: list[PointTransaction]) -> "PointHistoryResponse":
        items = [PointHistoryItem.from_domain(r) for r in records]
        return cls(items=items, count=len(items))
