"""Initial schema — search_groups and search_terms.

Revision ID: 001_initial
Revises: None
Create Date: 2025-08-22

Group names are unique case-insensitively (index on lower(name)); deleting a
group removes its terms through ON DELETE CASCADE.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "search_groups",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(450), nullable=False),
    )

    op.create_table(
        "search_terms",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("term", sa.Text, nullable=False),
        sa.Column("start_date", sa.DateTime, nullable=True),
        sa.Column("end_date", sa.DateTime, nullable=True),
        sa.Column("output_query", sa.Text, nullable=True),
        sa.Column(
            "search_group_id", sa.Integer,
            sa.ForeignKey("search_groups.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )

    op.create_index(
        "ix_search_groups_name_lower", "search_groups",
        [sa.text("lower(name)")], unique=True,
    )
    op.create_index(
        "ix_search_terms_search_group_id", "search_terms", ["search_group_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_search_terms_search_group_id", table_name="search_terms")
    op.drop_index("ix_search_groups_name_lower", table_name="search_groups")
    op.drop_table("search_terms")
    op.drop_table("search_groups")
