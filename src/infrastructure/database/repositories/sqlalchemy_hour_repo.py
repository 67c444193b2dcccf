"""SQLAlchemy implementation of Hour repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.hour import Hour, HourEntry, HourFilter, HourQuery, build_search_text
from domain.entities.tag import Tag
from infrastructure.database import scopes
from infrastructure.database.models import HourModel, ProjectModel, TaggingModel


class SQLAlchemyHourRepository:
    """SQLAlchemy implementation of IHourRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select(self) -> scopes.HourSelect:
        """Base statement with tags eagerly loaded, refreshing cached rows."""
        return (
            select(HourModel)
            .options(selectinload(HourModel.taggings).selectinload(TaggingModel.tag))
            .execution_options(populate_existing=True)
        )

    async def _all(self, stmt: scopes.HourSelect) -> list[Hour]:
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get(self, id: UUID) -> Hour | None:
        """Get an hour by ID, tags included."""
        stmt = self._select().where(HourModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, hour: Hour) -> Hour:
        """Create a new hour."""
        model = self._to_model(hour)
        self._session.add(model)
        await self._session.flush()
        return await self.get(model.id)  # type: ignore[return-value]

    async def update(self, hour: Hour) -> Hour:
        """Update an existing hour."""
        stmt = select(HourModel).where(HourModel.id == hour.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Hour {hour.id} not found")

        model.user_id = hour.user_id
        model.project_id = hour.project_id
        model.category_id = hour.category_id
        model.starting_time = hour.starting_time
        model.ending_time = hour.ending_time
        model.value = hour.value
        model.description = hour.description
        model.search_text = build_search_text(hour.description)
        model.updated_at = hour.updated_at

        await self._session.flush()
        return await self.get(hour.id)  # type: ignore[return-value]

    async def delete(self, id: UUID) -> bool:
        """Delete an hour together with its taggings. Tags are kept."""
        await self._session.execute(delete(TaggingModel).where(TaggingModel.hour_id == id))
        result = await self._session.execute(delete(HourModel).where(HourModel.id == id))
        await self._session.flush()
        return bool(result.rowcount)

    async def by_last_created_at(self) -> list[Hour]:
        """All hours, most recently created first."""
        return await self._all(scopes.by_last_created_at(self._select()))

    async def by_starting_time(self) -> list[Hour]:
        """All hours, latest starting time first."""
        return await self._all(scopes.by_starting_time(self._select()))

    async def with_clients(self) -> list[Hour]:
        """Hours whose project belongs to a client."""
        return await self._all(scopes.with_clients(self._select()))

    async def open_per_user(self, user_id: UUID) -> list[Hour]:
        """Hours of a user that have no ending time yet."""
        return await self._all(scopes.open_per_user(self._select(), user_id))

    async def query(self, entry_filter: HourFilter) -> list[Hour]:
        """Hours matching every predicate of the filter."""
        return await self._all(scopes.query(self._select(), entry_filter))

    async def search_by_description(self, term: str) -> list[Hour]:
        """Hours whose description contains every word of the term."""
        return await self._all(scopes.search_by_description(self._select(), term))

    async def find(self, hour_query: HourQuery) -> list[Hour]:
        """Hours matching a composition of scopes."""
        return await self._all(scopes.apply(self._select(), hour_query))

    async def find_entries(self, hour_query: HourQuery) -> list[HourEntry]:
        """Like find, with user/project/client/category names resolved."""
        stmt = scopes.apply(self._select(), hour_query).options(
            selectinload(HourModel.user),
            selectinload(HourModel.category),
            selectinload(HourModel.project).selectinload(ProjectModel.client),
        )
        result = await self._session.execute(stmt)
        entries = []
        for model in result.scalars():
            client = model.project.client
            entries.append(
                HourEntry(
                    hour=self._to_entity(model),
                    user_name=model.user.name or model.user.email,
                    project_name=model.project.name,
                    category_name=model.category.name,
                    client_name=client.name if client else None,
                )
            )
        return entries

    def _to_entity(self, model: HourModel) -> Hour:
        """Convert ORM model to domain entity."""
        return Hour(
            id=model.id,
            user_id=model.user_id,
            project_id=model.project_id,
            category_id=model.category_id,
            starting_time=model.starting_time,
            ending_time=model.ending_time,
            value=model.value,
            description=model.description,
            tags=[
                Tag(id=tagging.tag.id, name=tagging.tag.name, created_at=tagging.tag.created_at)
                for tagging in model.taggings
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Hour) -> HourModel:
        """Convert domain entity to ORM model."""
        return HourModel(
            id=entity.id,
            user_id=entity.user_id,
            project_id=entity.project_id,
            category_id=entity.category_id,
            starting_time=entity.starting_time,
            ending_time=entity.ending_time,
            value=entity.value,
            description=entity.description,
            search_text=build_search_text(entity.description),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
