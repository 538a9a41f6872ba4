"""002: create point_histories table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # id is one sequence shared by all users; per-user order = ORDER BY id
    op.execute("""
        CREATE TABLE point_histories (
            id          BIGSERIAL   PRIMARY KEY,
            user_id     BIGINT      NOT NULL,
            amount      BIGINT      NOT NULL,
            kind        VARCHAR(10) NOT NULL,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_point_histories_amount_gt_0 CHECK (amount > 0),
            CONSTRAINT ck_point_histories_kind CHECK (kind IN ('CHARGE', 'USE'))
        );
    """)
    op.execute("CREATE INDEX idx_point_histories_user_id ON point_histories (user_id, id);")
    op.execute("COMMENT ON TABLE point_histories IS 'Point transactions — Append-Only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS point_histories CASCADE;")
