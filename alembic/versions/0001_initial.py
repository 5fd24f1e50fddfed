"""Initial schema – clubs and per-season financials

Revision ID: 0001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- clubs ---
    op.create_table(
        "clubs",
        sa.Column("id", sa.BigInteger, sa.Identity(always=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("company_overview", sa.Text),
        sa.Column("website", sa.String(255)),
        sa.Column("country", sa.String(80)),
        sa.Column("league", sa.String(120)),
        sa.Column("year_founded", sa.Integer),
        sa.Column("location", sa.String(255)),
        sa.Column("owners", sa.String(255)),
        sa.Column("owner_location", sa.String(255)),
        sa.Column("ceo", sa.String(255)),
        sa.Column("chairman", sa.String(255)),
        sa.Column("profile", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_clubs_league", "clubs", ["league"])

    # --- financials ---
    op.create_table(
        "financials",
        sa.Column("id", sa.BigInteger, sa.Identity(always=True), primary_key=True),
        sa.Column(
            "club_id",
            sa.BigInteger,
            sa.ForeignKey("clubs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("revenue", sa.Numeric(20, 2)),
        sa.Column("revenue_yoy", sa.Numeric(20, 2)),
        sa.Column("ebitda", sa.Numeric(20, 2)),
        sa.Column("wages", sa.Numeric(20, 2)),
        sa.Column("amortization", sa.Numeric(20, 2)),
        sa.Column("other_expenses", sa.Numeric(20, 2)),
        sa.Column("matchday_revenue", sa.Numeric(20, 2)),
        sa.Column("commercial_revenue", sa.Numeric(20, 2)),
        sa.Column("broadcasting_revenue", sa.Numeric(20, 2)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("club_id", "year", name="uq_financials_club_year"),
    )
    op.create_index("ix_financials_club_id", "financials", ["club_id"])
    op.create_index("ix_financials_year", "financials", ["year"])


def downgrade() -> None:
    op.drop_index("ix_financials_year", table_name="financials")
    op.drop_index("ix_financials_club_id", table_name="financials")
    op.drop_table("financials")
    op.drop_index("ix_clubs_league", table_name="clubs")
    op.drop_table("clubs")
