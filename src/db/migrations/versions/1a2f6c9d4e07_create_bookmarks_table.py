"""
Create bookmarks table.

Revision ID: 1a2f6c9d4e07
Revises:
Create Date: 2026-10-19 10:12:41.205117

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "1a2f6c9d4e07"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the bookmarks table with a 0-5 rating check."""
    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.CheckConstraint(
            "rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range",
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop the bookmarks table."""
    op.drop_table("bookmarks")
