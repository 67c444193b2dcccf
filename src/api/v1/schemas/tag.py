"""Pydantic schemas for Tag API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.tag import TagWithCount


class TagResponse(BaseModel):
    """A hashtag as last written, with the number of hours carrying it."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "name": "ASP1000",
                "created_at": "2015-04-20T10:00:00",
                "hours_count": 5,
            }
        },
    )

    id: UUID
    name: str
    created_at: datetime
    hours_count: int = Field(default=0, ge=0)

    @classmethod
    def from_usage(cls, item: TagWithCount) -> "TagResponse":
        return cls(
            id=item.tag.id,
            name=item.tag.name,
            created_at=item.tag.created_at,
            hours_count=item.hours_count,
        )


class TagListResponse(BaseModel):
    data: list[TagResponse]
    meta: dict[str, int] = Field(default_factory=dict)
