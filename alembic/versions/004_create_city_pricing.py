"""004: create billboard_pricing and city_multipliers tables

Revision ID: 004
Revises: 003
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE billboard_pricing (
            id                  BIGSERIAL       PRIMARY KEY,
            billboard_size      VARCHAR(32)     NOT NULL,
            duration_months     SMALLINT        NOT NULL,
            price               INT             NOT NULL DEFAULT 0,
            price_category      CHAR(1)         NOT NULL DEFAULT 'A',
            zone_name           VARCHAR(128)    NOT NULL,
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_billboard_pricing_cell UNIQUE
                (billboard_size, duration_months, price_category, zone_name),
            CONSTRAINT ck_billboard_pricing_price_gte_0 CHECK (price >= 0),
            CONSTRAINT ck_billboard_pricing_category CHECK (price_category IN ('A', 'B'))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_billboard_pricing_updated_at
            BEFORE UPDATE ON billboard_pricing
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)

    op.execute("""
        CREATE TABLE city_multipliers (
            id                  BIGSERIAL       PRIMARY KEY,
            city_name           VARCHAR(128)    NOT NULL UNIQUE,
            multiplier          NUMERIC(6, 3)   NOT NULL DEFAULT 1.0,
            description         TEXT,
            is_active           BOOLEAN         NOT NULL DEFAULT TRUE,
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_city_multipliers_gt_0 CHECK (multiplier > 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_city_multipliers_updated_at
            BEFORE UPDATE ON city_multipliers
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS city_multipliers CASCADE;")
    op.execute("DROP TABLE IF EXISTS billboard_pricing CASCADE;")
