"""Search Term Routes — per-group listing, create, and delete.

Invariants:
    - GET /api/groups/{group_id}/terms is 404 when the group does not exist
    - POST /api/terms is 400 when searchGroupId does not reference a group
    - Terms are listed in ascending order of their text
"""

from fastapi import APIRouter, Depends, Response, status

from netscraper_api.core.domain_types import GroupId, TermId
from netscraper_api.core.repository_protocols import SearchRepository
from netscraper_api.infrastructure.storage import get_repository
from netscraper_api.schemas.search import CreateTerm, TermResponse

router = APIRouter(prefix="/api", tags=["terms"])


@router.get("/groups/{group_id}/terms", response_model=list[TermResponse])
async def list_terms(
    group_id: int, repo: SearchRepository = Depends(get_repository),
):
    """List the terms owned by a group."""
    records = await repo.list_terms_by_group(GroupId(group_id))
    return [TermResponse.from_record(r) for r in records]


@router.post(
    "/terms", response_model=TermResponse, status_code=status.HTTP_201_CREATED,
)
async def create_term(
    body: CreateTerm,
    response: Response,
    repo: SearchRepository = Depends(get_repository),
):
    """Create a term under an existing group."""
    record = await repo.create_term(
        body.term,
        GroupId(body.search_group_id),
        start_date=body.start_date,
        end_date=body.end_date,
        output_query=body.output_query,
    )
    response.headers["Location"] = f"/api/terms/{record.id}"
    return TermResponse.from_record(record)


@router.delete("/terms/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_term(
    term_id: int, repo: SearchRepository = Depends(get_repository),
):
    """Delete a single term."""
    await repo.delete_term(TermId(term_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
