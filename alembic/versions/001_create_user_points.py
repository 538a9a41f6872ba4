"""001: create user_points table

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Upper bound is POINT_MAX_BALANCE (config), enforced by the service
    op.execute("""
        CREATE TABLE user_points (
            user_id     BIGINT      PRIMARY KEY,
            amount      BIGINT      NOT NULL DEFAULT 0,
            updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_user_points_amount_gte_0 CHECK (amount >= 0)
        );
    """)
    op.execute("COMMENT ON TABLE user_points IS 'Current point balance per user — one row per user';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_points CASCADE;")
