"""Hour service layer: persistence, hashtag tagging, scopes and audit."""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import structlog

from core.exceptions import HourNotFoundError, HourValidationError
from domain.entities.audit import Audit, AuditActions
from domain.entities.hour import (
    Hour,
    HourEntry,
    HourFilter,
    HourQuery,
    naive_utc,
    parse_hashtags,
)
from domain.entities.tag import Tag
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.audit_service import AuditService

logger = structlog.get_logger()

AUDITABLE_TYPE = "hour"


class HourService:
    """Service layer for Hour business logic.

    Every mutation takes the acting user explicitly; it is recorded on the
    audit entry written in the same transaction.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        audit_service: Optional[AuditService] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._audit = audit_service or AuditService(uow_factory)

    # --- reads ---

    async def get_by_id(self, hour_id: UUID) -> Hour:
        """Get a specific hour with its tags."""
        async with self._uow_factory() as uow:
            hour = await uow.hours.get(hour_id)
            if not hour:
                raise HourNotFoundError(str(hour_id))
            return hour

    async def list_hours(self, hour_query: HourQuery | None = None) -> list[Hour]:
        """List hours matching a composition of scopes."""
        async with self._uow_factory() as uow:
            return await uow.hours.find(hour_query or HourQuery())  # type: ignore[no-any-return]

    async def list_entries(self, hour_query: HourQuery | None = None) -> list[HourEntry]:
        """List hours with related names resolved, for reports and exports."""
        async with self._uow_factory() as uow:
            return await uow.hours.find_entries(hour_query or HourQuery())  # type: ignore[no-any-return]

    async def by_last_created_at(self) -> list[Hour]:
        """All hours, most recently created first."""
        async with self._uow_factory() as uow:
            return await uow.hours.by_last_created_at()  # type: ignore[no-any-return]

    async def by_starting_time(self) -> list[Hour]:
        """All hours, latest starting time first."""
        async with self._uow_factory() as uow:
            return await uow.hours.by_starting_time()  # type: ignore[no-any-return]

    async def with_clients(self) -> list[Hour]:
        """Hours logged on projects that have a client."""
        async with self._uow_factory() as uow:
            return await uow.hours.with_clients()  # type: ignore[no-any-return]

    async def open_per_user(self, user_id: UUID) -> list[Hour]:
        """Hours of a user that are still in progress."""
        async with self._uow_factory() as uow:
            return await uow.hours.open_per_user(user_id)  # type: ignore[no-any-return]

    async def query(self, entry_filter: HourFilter | Mapping[str, Any]) -> list[Hour]:
        """Hours matching a filter; mappings carry dates as DD/MM/YYYY."""
        if not isinstance(entry_filter, HourFilter):
            entry_filter = HourFilter.from_mapping(entry_filter)
        async with self._uow_factory() as uow:
            return await uow.hours.query(entry_filter)  # type: ignore[no-any-return]

    async def search_by_description(self, term: str) -> list[Hour]:
        """Hours whose description contains every word of ``term``."""
        async with self._uow_factory() as uow:
            return await uow.hours.search_by_description(term)  # type: ignore[no-any-return]

    async def get_history(self, hour_id: UUID) -> list[Audit]:
        """Audit trail of an hour, oldest first."""
        return await self._audit.get_history(AUDITABLE_TYPE, hour_id)

    async def get_latest_audit(self, hour_id: UUID) -> Audit | None:
        """Most recent audit record of an hour."""
        return await self._audit.get_latest(AUDITABLE_TYPE, hour_id)

    # --- writes ---

    async def create(
        self,
        actor_id: UUID | None,
        user_id: UUID | None,
        project_id: UUID | None,
        category_id: UUID | None,
        starting_time: datetime | None,
        value: float = 0.0,
        ending_time: datetime | None = None,
        description: str | None = None,
    ) -> Hour:
        """Log a new hour entry, deriving its tags from the description."""
        async with self._uow_factory() as uow:
            await self._validate(
                uow,
                user_id=user_id,
                project_id=project_id,
                category_id=category_id,
                starting_time=starting_time,
            )

            hour = Hour(
                user_id=user_id,  # type: ignore[arg-type]
                project_id=project_id,  # type: ignore[arg-type]
                category_id=category_id,  # type: ignore[arg-type]
                starting_time=naive_utc(starting_time),  # type: ignore[arg-type]
                ending_time=naive_utc(ending_time),
                value=value,
                description=description,
            )

            created = await uow.hours.create(hour)
            await self._sync_tags(uow, created.id, created.description)

            await self._audit.record(
                uow=uow,
                auditable_type=AUDITABLE_TYPE,
                auditable_id=created.id,
                action=AuditActions.CREATE,
                actor_id=actor_id,
                changes=AuditService.compute_diff({}, created.audited_attributes()),
            )

            result = await uow.hours.get(created.id)
            await uow.commit()

        logger.info("hour_created", hour_id=str(created.id), actor_id=str(actor_id))
        return result  # type: ignore[return-value]

    async def update(
        self,
        hour_id: UUID,
        actor_id: UUID | None,
        user_id: UUID | None = None,
        project_id: UUID | None = None,
        category_id: UUID | None = None,
        starting_time: datetime | None = None,
        value: float | None = None,
        ending_time: object = ...,  # Sentinel to detect explicit None
        description: object = ...,
    ) -> Hour:
        """Update an hour. Writes one audit record when anything changed."""
        async with self._uow_factory() as uow:
            hour = await uow.hours.get(hour_id)
            if not hour:
                raise HourNotFoundError(str(hour_id))

            old_state = hour.audited_attributes()

            if user_id is not None:
                hour.user_id = user_id
            if project_id is not None:
                hour.project_id = project_id
            if category_id is not None:
                hour.category_id = category_id
            if starting_time is not None:
                hour.starting_time = naive_utc(starting_time)
            if value is not None:
                hour.value = value
            if ending_time is not ...:
                hour.ending_time = naive_utc(ending_time)  # type: ignore[arg-type]
            if description is not ...:
                hour.description = description  # type: ignore[assignment]

            changes = AuditService.compute_diff(old_state, hour.audited_attributes())
            if not changes:
                return hour

            await self._validate(
                uow,
                user_id=hour.user_id if "user_id" in changes else ...,
                project_id=hour.project_id if "project_id" in changes else ...,
                category_id=hour.category_id if "category_id" in changes else ...,
                starting_time=hour.starting_time,
            )

            hour.updated_at = datetime.utcnow()
            await uow.hours.update(hour)
            if "description" in changes:
                await self._sync_tags(uow, hour.id, hour.description)

            await self._audit.record(
                uow=uow,
                auditable_type=AUDITABLE_TYPE,
                auditable_id=hour.id,
                action=AuditActions.UPDATE,
                actor_id=actor_id,
                changes=changes,
            )

            result = await uow.hours.get(hour.id)
            await uow.commit()

        logger.info(
            "hour_updated",
            hour_id=str(hour_id),
            actor_id=str(actor_id),
            fields=sorted(changes),
        )
        return result  # type: ignore[return-value]

    async def delete(self, hour_id: UUID, actor_id: UUID | None) -> bool:
        """Delete an hour. Its tags stay in place even when orphaned."""
        async with self._uow_factory() as uow:
            hour = await uow.hours.get(hour_id)
            if not hour:
                raise HourNotFoundError(str(hour_id))

            await self._audit.record(
                uow=uow,
                auditable_type=AUDITABLE_TYPE,
                auditable_id=hour.id,
                action=AuditActions.DESTROY,
                actor_id=actor_id,
                changes=AuditService.compute_diff(hour.audited_attributes(), {}),
            )

            deleted = await uow.hours.delete(hour_id)
            await uow.commit()

        logger.info("hour_deleted", hour_id=str(hour_id), actor_id=str(actor_id))
        return deleted  # type: ignore[no-any-return]

    # --- helpers ---

    async def _sync_tags(self, uow: IUnitOfWork, hour_id: UUID, description: str | None) -> None:
        """Make the hour's taggings equal the hashtags of its description.

        Unknown hashtags create tags, known ones are matched ignoring case and
        take the new casing. Taggings that fell out of the description are
        removed; the tags themselves are kept.
        """
        names = parse_hashtags(description)
        wanted = {name.lower() for name in names}

        for tag in await uow.tags.for_hour(hour_id):
            if tag.name.lower() not in wanted:
                await uow.tags.untag(tag.id, hour_id)

        for name in names:
            tag = await uow.tags.find_by_name(name)
            if tag is None:
                tag = await uow.tags.add(Tag(name=name))
            elif tag.name != name:
                logger.info("tag_renamed", tag_id=str(tag.id), old=tag.name, new=name)
                tag = await uow.tags.rename(tag.id, name)
            await uow.tags.tag(tag.id, hour_id)

    async def _validate(
        self,
        uow: IUnitOfWork,
        user_id: object,
        project_id: object,
        category_id: object,
        starting_time: object,
    ) -> None:
        """Check required fields and that referenced records exist.

        ``...`` skips the existence check of an unchanged reference.
        """
        errors: dict[str, str] = {}
        references = (
            ("user", user_id, uow.users),
            ("project", project_id, uow.projects),
            ("category", category_id, uow.categories),
        )
        for name, ref_id, repo in references:
            if ref_id is ...:
                continue
            if ref_id is None:
                errors[name] = "can't be blank"
            elif await repo.get(ref_id) is None:
                errors[name] = "does not exist"

        if starting_time is None:
            errors["starting_time"] = "can't be blank"

        if errors:
            raise HourValidationError(errors)
