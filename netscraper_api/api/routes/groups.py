"""Search Group Routes — list, create, and delete groups.

Invariants:
    - List is ordered by name and includes each group's term count
    - Create returns 201 with a Location header; blank or duplicate names are 400
    - Delete returns 204 and cascades to the group's terms; unknown id is 404
"""

from fastapi import APIRouter, Depends, Response, status

from netscraper_api.core.domain_types import GroupId
from netscraper_api.core.repository_protocols import SearchRepository
from netscraper_api.infrastructure.storage import get_repository
from netscraper_api.schemas.search import CreateGroup, GroupResponse

router = APIRouter(prefix="/api/groups", tags=["groups"])


@router.get("", response_model=list[GroupResponse])
async def list_groups(repo: SearchRepository = Depends(get_repository)):
    """List all groups with term counts."""
    return [GroupResponse.from_summary(g) for g in await repo.list_groups()]


@router.post(
    "", response_model=GroupResponse, status_code=status.HTTP_201_CREATED,
)
async def create_group(
    body: CreateGroup,
    response: Response,
    repo: SearchRepository = Depends(get_repository),
):
    """Create a group. Name is trimmed."""
    summary = await repo.create_group(body.name)
    response.headers["Location"] = f"/api/groups/{summary.id}"
    return GroupResponse.from_summary(summary)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int, repo: SearchRepository = Depends(get_repository),
):
    """Delete a group and all of its terms."""
    await repo.delete_group(GroupId(group_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
