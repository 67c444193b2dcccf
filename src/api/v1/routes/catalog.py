"""Client, Project and Category API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_catalog_service
from api.v1.schemas.catalog import (
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryResponse,
    ClientDetailResponse,
    ClientListResponse,
    ClientResponse,
    NamedCreate,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.catalog_service import CatalogService

clients_router = APIRouter(prefix="/clients", tags=["clients"])
projects_router = APIRouter(prefix="/projects", tags=["projects"])
categories_router = APIRouter(prefix="/categories", tags=["categories"])


@clients_router.get("", response_model=ClientListResponse, summary="List clients")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_clients(
    request: Request,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> ClientListResponse:
    """Get all clients, alphabetically."""
    clients = await service.list_clients()
    return ClientListResponse(data=[ClientResponse.model_validate(c) for c in clients])


@clients_router.post(
    "",
    response_model=ClientDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
    responses={409: {"description": "Client with this name already exists"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_client(
    request: Request,
    body: NamedCreate,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> ClientDetailResponse:
    client = await service.create_client(body.name)
    return ClientDetailResponse(data=ClientResponse.model_validate(client))


@projects_router.get("", response_model=ProjectListResponse, summary="List projects")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_projects(
    request: Request,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> ProjectListResponse:
    """Get all projects, alphabetically."""
    projects = await service.list_projects()
    return ProjectListResponse(data=[ProjectResponse.model_validate(p) for p in projects])


@projects_router.post(
    "",
    response_model=ProjectDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    responses={
        404: {"description": "Client not found"},
        409: {"description": "Project with this name already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_project(
    request: Request,
    body: ProjectCreate,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> ProjectDetailResponse:
    """Create a project, optionally billed to a client."""
    project = await service.create_project(body.name, client_id=body.client_id)
    return ProjectDetailResponse(data=ProjectResponse.model_validate(project))


@projects_router.patch(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Change the client of a project",
    responses={404: {"description": "Project or client not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_project(
    request: Request,
    project_id: UUID,
    body: ProjectUpdate,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> ProjectDetailResponse:
    """Move a project to another client; `client_id: null` detaches it."""
    project = await service.assign_client(project_id, body.client_id)
    return ProjectDetailResponse(data=ProjectResponse.model_validate(project))


@categories_router.get("", response_model=CategoryListResponse, summary="List categories")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_categories(
    request: Request,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> CategoryListResponse:
    categories = await service.list_categories()
    return CategoryListResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@categories_router.post(
    "",
    response_model=CategoryDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses={409: {"description": "Category with this name already exists"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_category(
    request: Request,
    body: NamedCreate,
    user: CurrentUser,
    service: CatalogService = Depends(get_catalog_service),
) -> CategoryDetailResponse:
    category = await service.create_category(body.name)
    return CategoryDetailResponse(data=CategoryResponse.model_validate(category))
