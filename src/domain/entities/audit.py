"""Audit trail domain entity and action constants."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4


class AuditActions:
    """Audit action constants."""

    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"


@dataclass
class Audit:
    """Domain entity for one append-only audit record."""

    auditable_type: str
    auditable_id: UUID
    action: str
    id: UUID = field(default_factory=uuid4)
    user_id: UUID | None = None
    audited_changes: dict[str, Any] = field(default_factory=dict)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
