"""Hour API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from api.dependencies.auth import ActingUser, CurrentUser
from api.v1.csv_download import send_csv
from api.v1.dependencies import get_hour_service
from api.v1.schemas.audit import AuditListResponse, AuditResponse
from api.v1.schemas.hour import (
    HourCreate,
    HourDetailResponse,
    HourListResponse,
    HourResponse,
    HourUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.hour import Hour, HourFilter, HourOrder, HourQuery
from domain.services.hour_service import HourService

router = APIRouter(prefix="/hours", tags=["hours"])


def hour_query_params(
    from_date: str | None = Query(None, description="Earliest starting day, DD/MM/YYYY"),
    to_date: str | None = Query(None, description="Latest starting day, DD/MM/YYYY"),
    user_id: str | None = Query(None, description="Filter by user ID"),
    project_id: str | None = Query(None, description="Filter by project ID"),
    category_id: str | None = Query(None, description="Filter by category ID"),
    q: str | None = Query(None, description="Whole-word search in descriptions"),
    with_clients: bool = Query(False, description="Only hours on projects with a client"),
    order: HourOrder = Query(HourOrder.STARTING_TIME, description="Sort key, newest first"),
) -> HourQuery:
    """Collect list/export query parameters into one composable query.

    Filter values are parsed by ``HourFilter`` so malformed dates surface as
    ``INVALID_FILTER`` rather than a generic validation error.
    """
    entry_filter = HourFilter.from_mapping(
        {
            "from_date": from_date,
            "to_date": to_date,
            "user_id": user_id,
            "project_id": project_id,
            "category_id": category_id,
        }
    )
    return HourQuery(
        filter=entry_filter,
        search=q,
        with_clients=with_clients,
        order=order,
    )


def _build_hour_response(hour: Hour) -> HourResponse:
    """Build an HourResponse from a domain entity."""
    return HourResponse.model_validate(hour)


@router.get(
    "",
    response_model=HourListResponse,
    summary="List hours",
    responses={
        200: {"description": "Hours matching the filters, newest first"},
        400: {"description": "Malformed filter value"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_hours(
    request: Request,
    user: CurrentUser,
    hour_query: HourQuery = Depends(hour_query_params),
    service: HourService = Depends(get_hour_service),
) -> HourListResponse:
    """
    List logged hours.

    Date filters bound the starting time inclusively by whole days. Every
    supplied filter must hold. `q` matches complete words of the description,
    ignoring case.
    """
    hours = await service.list_hours(hour_query)
    return HourListResponse(
        data=[_build_hour_response(hour) for hour in hours],
        meta={
            "total": len(hours),
            "total_value": sum(hour.value for hour in hours),
        },
    )


@router.get(
    "/export",
    summary="Export hours as CSV",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV download"},
        400: {"description": "Malformed filter value"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def export_hours(
    request: Request,
    user: CurrentUser,
    hour_query: HourQuery = Depends(hour_query_params),
    service: HourService = Depends(get_hour_service),
) -> Response:
    """Download the hours matching the filters as a CSV file."""
    entries = await service.list_entries(hour_query)
    return send_csv("hours", entries)


@router.get(
    "/open",
    response_model=HourListResponse,
    summary="List my open hours",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_open_hours(
    request: Request,
    user: CurrentUser,
    service: HourService = Depends(get_hour_service),
) -> HourListResponse:
    """Hours of the authenticated user that have no ending time yet."""
    hours = await service.open_per_user(user.id)
    return HourListResponse(
        data=[_build_hour_response(hour) for hour in hours],
        meta={"total": len(hours)},
    )


@router.get(
    "/{hour_id}",
    response_model=HourDetailResponse,
    summary="Get an hour",
    responses={
        200: {"description": "Hour details with tags"},
        404: {"description": "Hour not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_hour(
    request: Request,
    hour_id: UUID,
    user: CurrentUser,
    service: HourService = Depends(get_hour_service),
) -> HourDetailResponse:
    """Get a specific hour by ID, including its tags."""
    hour = await service.get_by_id(hour_id)
    return HourDetailResponse(data=_build_hour_response(hour))


@router.post(
    "",
    response_model=HourDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log an hour",
    responses={
        201: {"description": "Hour logged successfully"},
        422: {"description": "Missing or unknown user, project or category"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_hour(
    request: Request,
    body: HourCreate,
    user: ActingUser,
    service: HourService = Depends(get_hour_service),
) -> HourDetailResponse:
    """
    Log a new hour.

    Hashtags in the description (`#word`) become the hour's tags. When
    `user_id` is omitted the hour is logged for the authenticated user.
    """
    hour = await service.create(
        actor_id=user.id,
        user_id=body.user_id or user.id,
        project_id=body.project_id,
        category_id=body.category_id,
        starting_time=body.starting_time,
        ending_time=body.ending_time,
        value=body.value,
        description=body.description,
    )
    return HourDetailResponse(data=_build_hour_response(hour))


@router.patch(
    "/{hour_id}",
    response_model=HourDetailResponse,
    summary="Update an hour",
    responses={
        200: {"description": "Hour updated successfully"},
        404: {"description": "Hour not found"},
        422: {"description": "Unknown user, project or category"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_hour(
    request: Request,
    hour_id: UUID,
    body: HourUpdate,
    user: ActingUser,
    service: HourService = Depends(get_hour_service),
) -> HourDetailResponse:
    """
    Update an hour.

    Only provided fields are changed. Sending `ending_time: null` reopens
    the hour and `description: null` clears it along with its tags.
    """
    update_kwargs: dict[str, object] = {}
    if "ending_time" in body.model_fields_set:
        update_kwargs["ending_time"] = body.ending_time
    if "description" in body.model_fields_set:
        update_kwargs["description"] = body.description

    hour = await service.update(
        hour_id=hour_id,
        actor_id=user.id,
        user_id=body.user_id,
        project_id=body.project_id,
        category_id=body.category_id,
        starting_time=body.starting_time,
        value=body.value,
        **update_kwargs,
    )
    return HourDetailResponse(data=_build_hour_response(hour))


@router.delete(
    "/{hour_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an hour",
    responses={
        204: {"description": "Hour deleted successfully"},
        404: {"description": "Hour not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_hour(
    request: Request,
    hour_id: UUID,
    user: ActingUser,
    service: HourService = Depends(get_hour_service),
) -> None:
    """Delete an hour. Tags it used are kept."""
    await service.delete(hour_id, actor_id=user.id)
    return None


@router.get(
    "/{hour_id}/audits",
    response_model=AuditListResponse,
    summary="Get the audit trail of an hour",
    responses={
        200: {"description": "Audit records, oldest first"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_hour_audits(
    request: Request,
    hour_id: UUID,
    user: CurrentUser,
    service: HourService = Depends(get_hour_service),
) -> AuditListResponse:
    """
    Every change made to an hour, with the user who made it.

    History outlives the hour: audits of a deleted hour are still returned.
    """
    audits = await service.get_history(hour_id)
    return AuditListResponse(
        data=[AuditResponse.model_validate(audit) for audit in audits],
        meta={"total": len(audits)},
    )
