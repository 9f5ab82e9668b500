"""Persist the case-insensitive group-name key.

Revision ID: 002_group_name_key
Revises: 001_initial
Create Date: 2025-09-03

lower(name) folds ASCII only on SQLite, so "Ärger" and "ärger" slipped past the
001 index there while the in-memory backend rejected them. The key is now
computed in Python (str.casefold of the trimmed name) and stored in
search_groups.name_key under a unique index, identical on every dialect.
Backfill fails on existing rows that collide under the new key; those need a
manual rename before upgrading.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_group_name_key"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_groups = sa.table(
    "search_groups",
    sa.column("id", sa.Integer),
    sa.column("name", sa.String),
    sa.column("name_key", sa.String),
)


def upgrade() -> None:
    op.drop_index("ix_search_groups_name_lower", table_name="search_groups")
    op.add_column(
        "search_groups", sa.Column("name_key", sa.String(450), nullable=True),
    )

    bind = op.get_bind()
    rows = bind.execute(sa.select(_groups.c.id, _groups.c.name)).all()
    for group_id, name in rows:
        bind.execute(
            _groups.update()
            .where(_groups.c.id == group_id)
            .values(name_key=name.strip().casefold()),
        )

    # SQLite would need a table rebuild, and with foreign_keys=ON dropping the
    # old table cascades into search_terms; the ORM always sets name_key there
    if bind.dialect.name != "sqlite":
        op.alter_column(
            "search_groups", "name_key",
            existing_type=sa.String(450), nullable=False,
        )

    op.create_index(
        "ix_search_groups_name_key", "search_groups", ["name_key"], unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_search_groups_name_key", table_name="search_groups")
    op.drop_column("search_groups", "name_key")
    op.create_index(
        "ix_search_groups_name_lower", "search_groups",
        [sa.text("lower(name)")], unique=True,
    )
