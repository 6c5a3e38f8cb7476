"""Initial schema — publishers, sponsors, ad_slots.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "publishers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("monthly_views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_publishers_user_id", "publishers", ["user_id"], unique=True)

    op.create_table(
        "sponsors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sponsors_user_id", "sponsors", ["user_id"], unique=True)

    op.create_table(
        "ad_slots",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "publisher_id", UUID(as_uuid=True),
            sa.ForeignKey("publishers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("type", sa.String(20), nullable=False, server_default="DISPLAY"),
        sa.Column("position", sa.String(100), nullable=True),
        sa.Column("width", sa.Integer, nullable=True),
        sa.Column("height", sa.Integer, nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("base_price > 0", name="ck_ad_slots_base_price_positive"),
        sa.CheckConstraint(
            "type IN ('DISPLAY', 'VIDEO', 'NATIVE', 'NEWSLETTER', 'PODCAST')",
            name="ck_ad_slots_type",
        ),
    )
    op.create_index("ix_ad_slots_publisher_id", "ad_slots", ["publisher_id"])


def downgrade() -> None:
    op.drop_index("ix_ad_slots_publisher_id", table_name="ad_slots")
    op.drop_table("ad_slots")
    op.drop_index("ix_sponsors_user_id", table_name="sponsors")
    op.drop_table("sponsors")
    op.drop_index("ix_publishers_user_id", table_name="publishers")
    op.drop_table("publishers")
