"""005: seed default city multipliers

Revision ID: 005
Revises: 004
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # مصراتة is the reference city (1.0)
    op.execute("""
        INSERT INTO city_multipliers (city_name, multiplier, description, is_active) VALUES
            ('طرابلس', 1.2,  'العاصمة - سعر مرتفع', TRUE),
            ('بنغازي', 1.1,  'المدينة الثانية - سعر متوسط مرتفع', TRUE),
            ('مصراتة', 1.0,  'السعر الأساسي', TRUE),
            ('صبراتة', 0.9,  'مدينة ساحلية - سعر منخفض', TRUE),
            ('سبها',   0.8,  'مدينة جنوبية - سعر منخفض', TRUE),
            ('طبرق',   0.85, 'مدينة شرقية - سعر منخفض', TRUE)
        ON CONFLICT (city_name) DO NOTHING;
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM city_multipliers
        WHERE city_name IN ('طرابلس', 'بنغازي', 'مصراتة', 'صبراتة', 'سبها', 'طبرق');
    """)
