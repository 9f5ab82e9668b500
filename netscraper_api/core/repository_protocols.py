"""Boundary Protocols — contract between the HTTP layer and storage backends.

Invariants:
    - Routes depend on SearchRepository only, never on a concrete backend
    - Every method is async because the durable implementation does IO
    - Errors are raised as core/errors types (ValidationError, ConflictError,
      NotFoundError, DatabaseError), never as driver exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, backends share no base class
"""

from datetime import datetime
from typing import Protocol

from netscraper_api.core.domain_types import GroupId, GroupSummary, TermId, TermRecord


class SearchRepository(Protocol):
    """Contract for search group/term persistence — implemented per backend."""

    async def list_groups(self) -> list[GroupSummary]: ...

    async def create_group(self, name: str) -> GroupSummary: ...

    async def delete_group(self, group_id: GroupId) -> None: ...

    async def list_terms_by_group(self, group_id: GroupId) -> list[TermRecord]: ...

    async def create_term(
        self,
        term: str,
        search_group_id: GroupId,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        output_query: str | None = None,
    ) -> TermRecord: ...

    async def delete_term(self, term_id: TermId) -> None: ...

    async def ping(self) -> bool: ...
