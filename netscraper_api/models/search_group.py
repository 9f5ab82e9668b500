"""SearchGroup ORM — the named parent that owns search terms.

Invariants:
    - id is an autoincrement integer primary key
    - name is non-nullable, stored trimmed with its original casing
    - name_key = core.validate_input.name_key(name), unique; it carries the
      case-insensitive uniqueness so no database collation or lower() is involved
    - deleting a group deletes its terms (ORM cascade + ON DELETE CASCADE)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from netscraper_api.db.base import Base

NAME_MAX_LENGTH = 450


class SearchGroup(Base):
    """Search group aggregate root — owns all of its SearchTerms."""
    __tablename__ = "search_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    name_key: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, unique=True,
        index=True,
    )

    terms: Mapped[list["SearchTerm"]] = relationship(
        "SearchTerm", back_populates="search_group",
        cascade="all, delete-orphan", passive_deletes=True,
    )
