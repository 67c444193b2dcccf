"""Audit service layer for recording and querying change history."""

from collections.abc import Callable
from typing import Any
from uuid import UUID

from domain.entities.audit import Audit
from domain.repositories.unit_of_work import IUnitOfWork


class AuditService:
    """Service layer for the append-only audit trail."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def record(
        self,
        uow: IUnitOfWork,
        auditable_type: str,
        auditable_id: UUID,
        action: str,
        actor_id: UUID | None,
        changes: dict[str, Any] | None = None,
    ) -> Audit:
        """Append an audit record within an existing UoW transaction.

        Called by other services inside their own transaction so the audit
        commits or rolls back together with the change it describes.

        Args:
            uow: The active Unit of Work (caller manages commit).
            auditable_type: The type of record that changed.
            auditable_id: The ID of the record that changed.
            action: The action string (use AuditActions constants).
            actor_id: The user the change is attributed to.
            changes: Field-level changes {field: {old, new}}.

        Returns:
            The created Audit entry.
        """
        version = await uow.audits.get_next_version(auditable_type, auditable_id)
        audit = Audit(
            auditable_type=auditable_type,
            auditable_id=auditable_id,
            action=action,
            user_id=actor_id,
            audited_changes=changes or {},
            version=version,
        )
        return await uow.audits.create(audit)

    async def get_history(self, auditable_type: str, auditable_id: UUID) -> list[Audit]:
        """Get the audit history of a record, oldest first."""
        async with self._uow_factory() as uow:
            return await uow.audits.get_for_auditable(  # type: ignore[no-any-return]
                auditable_type, auditable_id
            )

    async def get_latest(self, auditable_type: str, auditable_id: UUID) -> Audit | None:
        """Get the most recent audit record of a record."""
        async with self._uow_factory() as uow:
            return await uow.audits.get_latest(auditable_type, auditable_id)  # type: ignore[no-any-return]

    @staticmethod
    def compute_diff(
        old_dict: dict[str, Any], new_dict: dict[str, Any]
    ) -> dict[str, dict[str, Any]]:
        """Compute field-level diff between two dictionaries.

        Args:
            old_dict: The original values.
            new_dict: The updated values.

        Returns:
            Dict of changed fields: {field_name: {"old": old_val, "new": new_val}}
        """
        diff: dict[str, dict[str, Any]] = {}
        all_keys = set(old_dict.keys()) | set(new_dict.keys())

        for key in sorted(all_keys):
            old_val = old_dict.get(key)
            new_val = new_dict.get(key)
            if old_val != new_val:
                diff[key] = {"old": old_val, "new": new_val}

        return diff
