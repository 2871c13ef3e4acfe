"""Create perks table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `perks` table, its (title, merchant) uniqueness
       constraint and the created_at DESC index.
Rollback: downgrade() drops the table (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "perks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column(
            "description",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
        ),
        # One of: food, tech, travel, fitness, other (enforced by the API)
        sa.Column(
            "category",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'other'"),
        ),
        sa.Column(
            "discount_percent",
            sa.Float(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column(
            "merchant",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("title", "merchant", name="uq_perks_title_merchant"),
    )

    # Every listing is ORDER BY created_at DESC
    op.create_index(
        "idx_perks_created_at",
        "perks",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_perks_created_at", table_name="perks")
    op.drop_table("perks")
