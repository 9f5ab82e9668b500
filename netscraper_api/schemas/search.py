"""Search Schemas — camelCase transfer objects for groups and terms.

Invariants:
    - Wire format is camelCase (termCount, searchGroupId, startDate, ...)
    - Request bodies also accept snake_case field names
    - Blank-name and blank-term checks live in the repositories, so both
      backends reject them identically (400 with a message)
    - searchGroupId outside 1..MAX_ID is rejected before reaching a repository
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from netscraper_api.core.domain_types import MAX_ID, GroupSummary, TermRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateGroup(_CamelModel):
    """Group creation body."""
    name: str


class GroupResponse(_CamelModel):
    """Group summary with the number of terms it owns."""
    id: int
    name: str
    term_count: int

    @classmethod
    def from_summary(cls, summary: GroupSummary) -> "GroupResponse":
        return cls(id=summary.id, name=summary.name, term_count=summary.term_count)


class CreateTerm(_CamelModel):
    """Term creation body."""
    term: str
    search_group_id: int = Field(ge=1, le=MAX_ID)
    start_date: datetime | None = None
    end_date: datetime | None = None
    output_query: str | None = None


class TermResponse(_CamelModel):
    """Search term as returned to clients."""
    id: int
    term: str
    search_group_id: int
    start_date: datetime | None = None
    end_date: datetime | None = None
    output_query: str | None = None

    @classmethod
    def from_record(cls, record: TermRecord) -> "TermResponse":
        return cls(
            id=record.id,
            term=record.term,
            search_group_id=record.search_group_id,
            start_date=record.start_date,
            end_date=record.end_date,
            output_query=record.output_query,
        )
