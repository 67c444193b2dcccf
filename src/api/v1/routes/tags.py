"""Tag API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_tag_service
from api.v1.schemas.hour import HourListResponse, HourResponse
from api.v1.schemas.tag import TagListResponse, TagResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get(
    "",
    response_model=TagListResponse,
    summary="List all tags",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_tags(
    request: Request,
    user: CurrentUser,
    service: TagService = Depends(get_tag_service),
) -> TagListResponse:
    """Get all tags, including how many hours use each one."""
    tags_with_counts = await service.get_all()
    return TagListResponse(
        data=[TagResponse.from_usage(item) for item in tags_with_counts],
        meta={"total": len(tags_with_counts)},
    )


@router.get(
    "/{tag_id}/hours",
    response_model=HourListResponse,
    summary="List hours with a tag",
    responses={
        200: {"description": "Tagged hours, latest starting time first"},
        404: {"description": "Tag not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_tag_hours(
    request: Request,
    tag_id: UUID,
    user: CurrentUser,
    service: TagService = Depends(get_tag_service),
) -> HourListResponse:
    """Get the hours whose description currently carries the tag."""
    hours = await service.get_hours(tag_id)
    return HourListResponse(
        data=[HourResponse.model_validate(hour) for hour in hours],
        meta={"total": len(hours)},
    )
