"""Initial schema — jackpots, fixtures, predictions.

Revision ID: 0001
Revises: None
Create Date: 2026-10-17
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # ── jackpots ──
    op.create_table(
        "jackpots",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("amount", sa.String(64), nullable=False),
        sa.Column("draw_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )

    # ── fixtures ──
    op.create_table(
        "fixtures",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column(
            "jackpot_id",
            sa.Integer(),
            sa.ForeignKey("jackpots.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("home_team", sa.String(128), nullable=False),
        sa.Column("away_team", sa.String(128), nullable=False),
        sa.Column("match_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("league", sa.String(128), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
    )
    op.create_index("ix_fixtures_jackpot_id", "fixtures", ["jackpot_id"])

    # ── predictions ──
    op.create_table(
        "predictions",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column(
            "fixture_id",
            sa.Integer(),
            sa.ForeignKey("fixtures.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("outcome", sa.String(1), nullable=False),
        sa.Column("confidence", sa.Integer(), nullable=False),
        sa.Column("reasoning", sa.Text(), nullable=True),
        sa.Column("strategy", sa.String(32), nullable=False, server_default="balanced"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_predictions_fixture_id", "predictions", ["fixture_id"])


def downgrade() -> None:
    op.drop_index("ix_predictions_fixture_id", table_name="predictions")
    op.drop_table("predictions")
    op.drop_index("ix_fixtures_jackpot_id", table_name="fixtures")
    op.drop_table("fixtures")
    op.drop_table("jackpots")
