"""Pydantic schemas for Hour API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.hour import naive_utc


class HourCreate(BaseModel):
    """Schema for logging an Hour.

    Required references are checked by the service so a missing field is
    reported the same way as a reference to an unknown record.
    """

    user_id: UUID | None = Field(None, description="Defaults to the authenticated user")
    project_id: UUID | None = None
    category_id: UUID | None = None
    starting_time: datetime | None = None
    ending_time: datetime | None = None
    value: float = Field(0.0, ge=0)
    description: str | None = Field(None, max_length=5000)

    @field_validator("starting_time", "ending_time")
    @classmethod
    def times_as_naive_utc(cls, value: datetime | None) -> datetime | None:
        return naive_utc(value)


class HourUpdate(BaseModel):
    """Schema for updating an Hour (all fields optional).

    Sending ``ending_time: null`` reopens the entry.
    """

    user_id: UUID | None = None
    project_id: UUID | None = None
    category_id: UUID | None = None
    starting_time: datetime | None = None
    ending_time: datetime | None = None
    value: float | None = Field(None, ge=0)
    description: str | None = Field(None, max_length=5000)

    @field_validator("starting_time", "ending_time")
    @classmethod
    def times_as_naive_utc(cls, value: datetime | None) -> datetime | None:
        return naive_utc(value)


class TagSummary(BaseModel):
    """Minimal tag representation for embedding in Hour response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class HourResponse(BaseModel):
    """Schema for Hour response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "223e4567-e89b-12d3-a456-426614174000",
                "project_id": "323e4567-e89b-12d3-a456-426614174000",
                "category_id": "423e4567-e89b-12d3-a456-426614174000",
                "starting_time": "2015-04-20T09:00:00",
                "ending_time": "2015-04-20T11:30:00",
                "value": 2.5,
                "description": "Pairing on #tdd for the #api",
                "tags": [
                    {"id": "523e4567-e89b-12d3-a456-426614174000", "name": "tdd"},
                    {"id": "623e4567-e89b-12d3-a456-426614174000", "name": "api"},
                ],
                "tag_list": "tdd, api",
                "is_open": False,
                "created_at": "2015-04-20T11:31:00",
                "updated_at": "2015-04-20T11:31:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    project_id: UUID
    category_id: UUID
    starting_time: datetime
    ending_time: datetime | None
    value: float
    description: str | None
    tags: list[TagSummary] = []
    tag_list: str = ""
    is_open: bool
    created_at: datetime
    updated_at: datetime


class HourListResponse(BaseModel):
    """Schema for list of Hours response."""

    data: list[HourResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class HourDetailResponse(BaseModel):
    """Schema for single Hour response."""

    data: HourResponse
