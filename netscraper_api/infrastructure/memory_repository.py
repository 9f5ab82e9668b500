"""In-Memory Search Repository — ephemeral SearchRepository for local development.

Invariants:
    - State lives in process-local dicts and is lost on restart
    - Seeded with one demo group and one demo term on first use
    - Methods never await, so each one is atomic on the event loop
    - Same validation, ordering, and cascade semantics as SqlSearchRepository
"""

import logging
from datetime import datetime, timedelta, timezone
from itertools import count

from netscraper_api.core.domain_types import (
    GroupId, GroupSummary, TermId, TermRecord,
)
from netscraper_api.core.errors import ConflictError, NotFoundError, ValidationError
from netscraper_api.core.validate_input import name_key, require_text, to_naive_utc

logger = logging.getLogger(__name__)

DEMO_GROUP_NAME = "Demo Group"
DEMO_TERM = "demo-term"
DEMO_OUTPUT_QUERY = "select 1"


class InMemorySearchRepository:
    """SearchRepository backed by dicts."""

    def __init__(self, seed: bool = True):
        self._groups: dict[GroupId, str] = {}
        self._terms: dict[TermId, TermRecord] = {}
        self._group_ids = count(1)
        self._term_ids = count(1)
        self._seeded = not seed

    def _ensure_seeded(self) -> None:
        if self._seeded:
            return
        self._seeded = True
        if self._groups:
            return
        group_id = GroupId(next(self._group_ids))
        self._groups[group_id] = DEMO_GROUP_NAME
        today = datetime.now(timezone.utc).replace(
            hour=0, minute=0, second=0, microsecond=0, tzinfo=None,
        )
        term_id = TermId(next(self._term_ids))
        self._terms[term_id] = TermRecord(
            id=term_id,
            term=DEMO_TERM,
            search_group_id=group_id,
            start_date=today,
            end_date=today + timedelta(days=7),
            output_query=DEMO_OUTPUT_QUERY,
        )
        logger.info("In-memory store seeded with demo data")

    def _term_count(self, group_id: GroupId) -> int:
        return sum(1 for t in self._terms.values() if t.search_group_id == group_id)

    async def list_groups(self) -> list[GroupSummary]:
        self._ensure_seeded()
        summaries = [
            GroupSummary(id=gid, name=name, term_count=self._term_count(gid))
            for gid, name in self._groups.items()
        ]
        return sorted(summaries, key=lambda g: g.name)

    async def create_group(self, name: str) -> GroupSummary:
        self._ensure_seeded()
        name = require_text(name, "name", "Name")
        key = name_key(name)
        if any(name_key(existing) == key for existing in self._groups.values()):
            raise ConflictError(f"Group '{name}' already exists", "name")
        group_id = GroupId(next(self._group_ids))
        self._groups[group_id] = name
        logger.info(f"Group created: {name}", extra={"group_id": group_id})
        return GroupSummary(id=group_id, name=name, term_count=0)

    async def delete_group(self, group_id: GroupId) -> None:
        self._ensure_seeded()
        if group_id not in self._groups:
            raise NotFoundError("SearchGroup", group_id)
        del self._groups[group_id]
        owned = [tid for tid, t in self._terms.items() if t.search_group_id == group_id]
        for tid in owned:
            del self._terms[tid]
        logger.info(
            f"Group {group_id} deleted with {len(owned)} term(s)",
            extra={"group_id": group_id},
        )

    async def list_terms_by_group(self, group_id: GroupId) -> list[TermRecord]:
        self._ensure_seeded()
        if group_id not in self._groups:
            raise NotFoundError("SearchGroup", group_id)
        return sorted(
            (t for t in self._terms.values() if t.search_group_id == group_id),
            key=lambda t: t.term,
        )

    async def create_term(
        self,
        term: str,
        search_group_id: GroupId,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        output_query: str | None = None,
    ) -> TermRecord:
        self._ensure_seeded()
        if search_group_id not in self._groups:
            raise ValidationError("Invalid SearchGroupId", "searchGroupId")
        text = require_text(term, "term", "Term")
        term_id = TermId(next(self._term_ids))
        record = TermRecord(
            id=term_id,
            term=text,
            search_group_id=search_group_id,
            start_date=to_naive_utc(start_date),
            end_date=to_naive_utc(end_date),
            output_query=output_query,
        )
        self._terms[term_id] = record
        logger.info(
            f"Term created: {text}",
            extra={"term_id": term_id, "group_id": search_group_id},
        )
        return record

    async def delete_term(self, term_id: TermId) -> None:
        self._ensure_seeded()
        if term_id not in self._terms:
            raise NotFoundError("SearchTerm", term_id)
        del self._terms[term_id]
        logger.info(f"Term {term_id} deleted", extra={"term_id": term_id})

    async def ping(self) -> bool:
        return True
