"""Domain Types — identity aliases and read models returned by repositories.

Invariants:
    - GroupId, TermId wrap int surrogate keys generated by storage, in 1..MAX_ID
    - GroupSummary and TermRecord are immutable snapshots, never live ORM rows
    - Dates are naive UTC (see core/validate_input.to_naive_utc)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import NewType


GroupId = NewType("GroupId", int)
TermId = NewType("TermId", int)

# Surrogate keys are 32-bit INTEGER columns
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


@dataclass(frozen=True)
class GroupSummary:
    """A search group with the number of terms it owns."""
    id: GroupId
    name: str
    term_count: int


@dataclass(frozen=True)
class TermRecord:
    """A search term scoped to its owning group."""
    id: TermId
    term: str
    search_group_id: GroupId
    start_date: datetime | None = None
    end_date: datetime | None = None
    output_query: str | None = None
