"""003: create installation_pricing table

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE installation_pricing (
            id                  BIGSERIAL       PRIMARY KEY,
            zone_name           VARCHAR(128)    NOT NULL,
            billboard_size      VARCHAR(32)     NOT NULL,
            price               INT             NOT NULL DEFAULT 0,
            multiplier          NUMERIC(6, 3)   NOT NULL DEFAULT 1.0,
            currency            VARCHAR(16)     NOT NULL DEFAULT 'د.ل',
            description         TEXT,
            last_updated        TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_installation_price_gte_0 CHECK (price >= 0),
            CONSTRAINT ck_installation_multiplier_gt_0 CHECK (multiplier > 0)
        );
    """)
    op.execute("CREATE INDEX idx_installation_zone ON installation_pricing (zone_name);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS installation_pricing CASCADE;")
