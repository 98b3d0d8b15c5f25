"""002: create pricing and pricing_sizes tables

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
    op.execute("""
        CREATE TABLE pricing (
            id                  BIGSERIAL       PRIMARY KEY,
            zone_name           VARCHAR(128)    NOT NULL,
            billboard_size      VARCHAR(32)     NOT NULL,
            customer_type       VARCHAR(20),
            price               INT             NOT NULL DEFAULT 0,
            ab_type             CHAR(1),
            package_duration    SMALLINT,
            currency            VARCHAR(16)     NOT NULL DEFAULT 'د.ل',
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_pricing_price_gte_0 CHECK (price >= 0),
            CONSTRAINT ck_pricing_customer_type CHECK (
                customer_type IS NULL
                OR customer_type IN ('marketers', 'individuals', 'companies')
            ),
            CONSTRAINT ck_pricing_ab_type CHECK (ab_type IS NULL OR ab_type IN ('A', 'B')),
            CONSTRAINT ck_pricing_duration CHECK (
                package_duration IS NULL OR package_duration IN (1, 3, 6, 12)
            ),
            CONSTRAINT ck_pricing_row_kind CHECK (
                (customer_type IS NOT NULL AND ab_type IS NULL AND package_duration IS NULL)
                OR (customer_type IS NULL AND ab_type IS NOT NULL AND package_duration IS NOT NULL)
            )
        );
    """)
    op.execute("CREATE INDEX idx_pricing_zone ON pricing (zone_name);")
    op.execute("COMMENT ON TABLE pricing IS 'Rental price list: legacy customer rows and A/B duration rows';")

    op.execute("""
        CREATE TABLE pricing_sizes (
            id                  BIGSERIAL       PRIMARY KEY,
            billboard_size      VARCHAR(32)     NOT NULL UNIQUE,
            position            INT             NOT NULL DEFAULT 0
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS pricing_sizes CASCADE;")
    op.execute("DROP TABLE IF EXISTS pricing CASCADE;")
