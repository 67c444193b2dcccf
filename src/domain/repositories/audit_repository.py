"""Audit repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.audit import Audit


class IAuditRepository(Protocol):
    """Repository interface for Audit entities."""

    async def create(self, audit: Audit) -> Audit:
        """Append a new audit record."""
        ...

    async def get_for_auditable(self, auditable_type: str, auditable_id: UUID) -> list[Audit]:
        """Get the audit history of a record, oldest first."""
        ...

    async def get_latest(self, auditable_type: str, auditable_id: UUID) -> Audit | None:
        """Get the most recent audit record of a record."""
        ...

    async def get_next_version(self, auditable_type: str, auditable_id: UUID) -> int:
        """Get the version number the next audit of a record should carry."""
        ...
