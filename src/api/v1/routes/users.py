"""User API routes."""

import re
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies.auth import CurrentUser
from api.v1.csv_download import send_csv
from api.v1.dependencies import get_hour_service, get_user_service
from core.rate_limit import READ_LIMIT, limiter
from domain.entities.hour import HourFilter, HourQuery
from domain.services.hour_service import HourService
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]+")


def filename_slug(name: str) -> str:
    """Lowercase ``name`` and collapse anything unsafe in a filename to '-'."""
    return _UNSAFE_FILENAME_CHARS.sub("-", name).strip("-.").lower() or "user"


@router.get(
    "/{user_id}/hours/export",
    summary="Export a user's hours as CSV",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV download"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def export_user_hours(
    request: Request,
    user_id: UUID,
    user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
    hour_service: HourService = Depends(get_hour_service),
) -> Response:
    """Download every hour logged by a user, named after that user."""
    owner = await user_service.get_by_id(user_id)
    entries = await hour_service.list_entries(HourQuery(filter=HourFilter(user_id=user_id)))
    return send_csv(filename_slug(owner.display_name), entries)
