"""SQL Search Repository — durable SearchRepository over SQLAlchemy async.

Invariants:
    - Each public method runs in its own session via DatabaseSessionManager.run
      and commits at most once
    - Group deletion and its term cascade share one transaction
    - Unique name_key violations on group insert surface as ConflictError
    - Ids outside the INTEGER column range never reach the driver: they are
      NotFound (path lookups) or ValidationError (searchGroupId)
    - Returns GroupSummary/TermRecord snapshots, never ORM rows
"""

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from netscraper_api.core.domain_types import (
    GroupId, GroupSummary, TermId, TermRecord, is_storable_id,
)
from netscraper_api.core.errors import ConflictError, NotFoundError, ValidationError
from netscraper_api.core.validate_input import name_key, require_text, to_naive_utc
from netscraper_api.infrastructure.database import DatabaseSessionManager
from netscraper_api.models.search_group import SearchGroup
from netscraper_api.models.search_term import SearchTerm

logger = logging.getLogger(__name__)


def _to_record(t: SearchTerm) -> TermRecord:
    return TermRecord(
        id=TermId(t.id),
        term=t.term,
        search_group_id=GroupId(t.search_group_id),
        start_date=t.start_date,
        end_date=t.end_date,
        output_query=t.output_query,
    )


class SqlSearchRepository:
    """SearchRepository backed by a relational database."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def list_groups(self) -> list[GroupSummary]:
        async def op(session: AsyncSession) -> list[GroupSummary]:
            result = await session.execute(
                select(
                    SearchGroup.id,
                    SearchGroup.name,
                    func.count(SearchTerm.id),
                )
                .outerjoin(SearchTerm, SearchTerm.search_group_id == SearchGroup.id)
                .group_by(SearchGroup.id, SearchGroup.name)
                .order_by(SearchGroup.name),
            )
            return [
                GroupSummary(id=GroupId(gid), name=name, term_count=count)
                for gid, name, count in result.all()
            ]

        return await self._db.run(op)

    async def create_group(self, name: str) -> GroupSummary:
        name = require_text(name, "name", "Name")
        key = name_key(name)

        async def op(session: AsyncSession) -> GroupSummary:
            existing = await session.execute(
                select(SearchGroup.id).where(SearchGroup.name_key == key),
            )
            if existing.first() is not None:
                raise ConflictError(f"Group '{name}' already exists", "name")
            group = SearchGroup(name=name, name_key=key)
            session.add(group)
            try:
                await session.commit()
            except IntegrityError:
                # lost a race with a concurrent insert of the same name
                await session.rollback()
                raise ConflictError(f"Group '{name}' already exists", "name")
            return GroupSummary(id=GroupId(group.id), name=group.name, term_count=0)

        summary = await self._db.run(op)
        logger.info(f"Group created: {summary.name}", extra={"group_id": summary.id})
        return summary

    async def delete_group(self, group_id: GroupId) -> None:
        if not is_storable_id(group_id):
            raise NotFoundError("SearchGroup", group_id)

        async def op(session: AsyncSession) -> None:
            group = await session.get(SearchGroup, group_id)
            if group is None:
                raise NotFoundError("SearchGroup", group_id)
            await session.delete(group)
            await session.commit()

        await self._db.run(op)
        logger.info(f"Group {group_id} deleted with its terms", extra={"group_id": group_id})

    async def list_terms_by_group(self, group_id: GroupId) -> list[TermRecord]:
        if not is_storable_id(group_id):
            raise NotFoundError("SearchGroup", group_id)

        async def op(session: AsyncSession) -> list[TermRecord]:
            if await session.get(SearchGroup, group_id) is None:
                raise NotFoundError("SearchGroup", group_id)
            result = await session.execute(
                select(SearchTerm)
                .where(SearchTerm.search_group_id == group_id)
                .order_by(SearchTerm.term),
            )
            return [_to_record(t) for t in result.scalars().all()]

        return await self._db.run(op)

    async def create_term(
        self,
        term: str,
        search_group_id: GroupId,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        output_query: str | None = None,
    ) -> TermRecord:
        if not is_storable_id(search_group_id):
            raise ValidationError("Invalid SearchGroupId", "searchGroupId")

        async def op(session: AsyncSession) -> TermRecord:
            if await session.get(SearchGroup, search_group_id) is None:
                raise ValidationError("Invalid SearchGroupId", "searchGroupId")
            row = SearchTerm(
                term=require_text(term, "term", "Term"),
                search_group_id=search_group_id,
                start_date=to_naive_utc(start_date),
                end_date=to_naive_utc(end_date),
                output_query=output_query,
            )
            session.add(row)
            try:
                await session.commit()
            except IntegrityError:
                # group deleted between the existence check and the insert
                await session.rollback()
                raise ValidationError("Invalid SearchGroupId", "searchGroupId")
            return _to_record(row)

        record = await self._db.run(op)
        logger.info(
            f"Term created: {record.term}",
            extra={"term_id": record.id, "group_id": record.search_group_id},
        )
        return record

    async def delete_term(self, term_id: TermId) -> None:
        if not is_storable_id(term_id):
            raise NotFoundError("SearchTerm", term_id)

        async def op(session: AsyncSession) -> None:
            row = await session.get(SearchTerm, term_id)
            if row is None:
                raise NotFoundError("SearchTerm", term_id)
            await session.delete(row)
            await session.commit()

        await self._db.run(op)
        logger.info(f"Term {term_id} deleted", extra={"term_id": term_id})

    async def ping(self) -> bool:
        return await self._db.health_check()
