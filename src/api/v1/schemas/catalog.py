"""Pydantic schemas for Client, Project and Category API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NamedCreate(BaseModel):
    """Schema for creating a client or a category."""

    name: str = Field(..., min_length=1, max_length=255)


class ProjectCreate(NamedCreate):
    """Schema for creating a Project."""

    client_id: UUID | None = None


class ProjectUpdate(BaseModel):
    """Schema for moving a Project to another client (null detaches)."""

    client_id: UUID | None = None


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    client_id: UUID | None = None
    created_at: datetime


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime


class ClientListResponse(BaseModel):
    data: list[ClientResponse]


class ClientDetailResponse(BaseModel):
    data: ClientResponse


class ProjectListResponse(BaseModel):
    data: list[ProjectResponse]


class ProjectDetailResponse(BaseModel):
    data: ProjectResponse


class CategoryListResponse(BaseModel):
    data: list[CategoryResponse]


class CategoryDetailResponse(BaseModel):
    data: CategoryResponse
