"""SQLAlchemy implementation of Audit repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.audit import Audit
from infrastructure.database.models import AuditModel


class SQLAlchemyAuditRepository:
    """SQLAlchemy implementation of IAuditRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, audit: Audit) -> Audit:
        """Append a new audit record."""
        model = self._to_model(audit)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_for_auditable(self, auditable_type: str, auditable_id: UUID) -> list[Audit]:
        """Get the audit history of a record, oldest first."""
        stmt = (
            select(AuditModel)
            .where(
                AuditModel.auditable_type == auditable_type,
                AuditModel.auditable_id == auditable_id,
            )
            .order_by(AuditModel.version)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_latest(self, auditable_type: str, auditable_id: UUID) -> Audit | None:
        """Get the most recent audit record of a record."""
        stmt = (
            select(AuditModel)
            .where(
                AuditModel.auditable_type == auditable_type,
                AuditModel.auditable_id == auditable_id,
            )
            .order_by(AuditModel.version.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def get_next_version(self, auditable_type: str, auditable_id: UUID) -> int:
        """Get the version number the next audit of a record should carry."""
        stmt = select(func.max(AuditModel.version)).where(
            AuditModel.auditable_type == auditable_type,
            AuditModel.auditable_id == auditable_id,
        )
        result = await self._session.execute(stmt)
        return (result.scalar() or 0) + 1

    def _to_entity(self, model: AuditModel) -> Audit:
        """Convert ORM model to domain entity."""
        return Audit(
            id=model.id,
            auditable_type=model.auditable_type,
            auditable_id=model.auditable_id,
            action=model.action,
            audited_changes=model.audited_changes or {},
            user_id=model.user_id,
            version=model.version,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Audit) -> AuditModel:
        """Convert domain entity to ORM model."""
        return AuditModel(
            id=entity.id,
            auditable_type=entity.auditable_type,
            auditable_id=entity.auditable_id,
            action=entity.action,
            audited_changes=entity.audited_changes,
            user_id=entity.user_id,
            version=entity.version,
            created_at=entity.created_at,
        )
