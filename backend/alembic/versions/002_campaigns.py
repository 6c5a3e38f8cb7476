"""Campaigns — sponsor-owned campaigns.

Revision ID: 002_campaigns
Revises: 001_initial
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002_campaigns"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "campaigns",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "sponsor_id", UUID(as_uuid=True),
            sa.ForeignKey("sponsors.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("budget", sa.Numeric(12, 2), nullable=False),
        sa.Column("spent", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("cpm_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("cpc_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("target_categories", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("target_regions", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("budget > 0", name="ck_campaigns_budget_positive"),
        sa.CheckConstraint("end_date >= start_date", name="ck_campaigns_date_range"),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'ACTIVE', 'PAUSED', 'COMPLETED')",
            name="ck_campaigns_status",
        ),
    )
    op.create_index("ix_campaigns_sponsor_id", "campaigns", ["sponsor_id"])


def downgrade() -> None:
    op.drop_index("ix_campaigns_sponsor_id", table_name="campaigns")
    op.drop_table("campaigns")
