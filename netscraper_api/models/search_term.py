"""SearchTerm ORM — a search phrase with optional date window and output query.

Invariants:
    - Always belongs to a SearchGroup (search_group_id FK, ON DELETE CASCADE)
    - term is non-nullable text, stored trimmed
    - start_date/end_date are naive UTC
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from netscraper_api.db.base import Base


class SearchTerm(Base):
    """Search term entity owned by one group."""
    __tablename__ = "search_terms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    term: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    output_query: Mapped[str | None] = mapped_column(Text, nullable=True)
    search_group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("search_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    search_group: Mapped["SearchGroup"] = relationship(
        "SearchGroup", back_populates="terms",
    )
