"""Pydantic schemas for Audit API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuditResponse(BaseModel):
    """Schema for an audit record response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    auditable_type: str
    auditable_id: UUID
    action: str
    version: int
    user_id: UUID | None = None
    audited_changes: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class AuditListResponse(BaseModel):
    """Schema for an audit history response."""

    data: list[AuditResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
