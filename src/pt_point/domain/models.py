"""Domain models for pt_point — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.pt_common.enums import TransactionType


@dataclass(frozen=True)
class PointBalance:
    user_id: int
    amount: int          # points, 0 <= amount <= max_balance
    updated_at: datetime


@dataclass(frozen=True)
class PointTransaction:
    id: int              # shared sequence across all users
    user_id: int
    amount: int          # requested amount, always positive
    kind: TransactionType
    created_at: datetime
