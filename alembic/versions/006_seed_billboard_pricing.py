"""006: seed billboard_pricing with the baseline grid

Revision ID: 006
Revises: 005
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # A = 1-month individuals price, B = round(A x 1.2); then the duration discount.
    op.execute("""
        INSERT INTO billboard_pricing
            (billboard_size, duration_months, price, price_category, zone_name)
        SELECT s.size,
               d.months,
               ROUND(ROUND(s.price * c.factor) * d.factor)::INT,
               c.category,
               z.zone
        FROM (VALUES ('5x13', 3500), ('4x12', 2800), ('4x10', 2200),
                     ('3x8', 1500),  ('3x6', 1000),  ('3x4', 800)) AS s(size, price)
        CROSS JOIN (VALUES (1, 1.00), (3, 0.95), (6, 0.90), (12, 0.80)) AS d(months, factor)
        CROSS JOIN (VALUES ('A', 1.0), ('B', 1.2)) AS c(category, factor)
        CROSS JOIN (VALUES ('مصراتة'), ('طرابلس'), ('بنغازي')) AS z(zone)
        ON CONFLICT (billboard_size, duration_months, price_category, zone_name) DO NOTHING;
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM billboard_pricing
        WHERE zone_name IN ('مصراتة', 'طرابلس', 'بنغازي')
          AND billboard_size IN ('5x13', '4x12', '4x10', '3x8', '3x6', '3x4');
    """)
