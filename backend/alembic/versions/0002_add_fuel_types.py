"""Add the global ref_fueltype lookup.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def upgrade() -> None:
    op.create_table(
        "ref_fueltype",
        sa.Column("name", sa.String(10), nullable=False),
        sa.Column("description", sa.String(50)),
        sa.PrimaryKeyConstraint("name", name="pk_fueltype"),
    )


def downgrade() -> None:
    op.drop_table("ref_fueltype")
