"""SQLAlchemy implementation of Tag repository."""

from uuid import UUID

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.tag import Tag, TagWithCount
from infrastructure.database.models import TaggingModel, TagModel


class SQLAlchemyTagRepository:
    """Tags and the taggings that link them to hours."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, tag_id: UUID) -> Tag | None:
        model = await self._session.get(TagModel, tag_id)
        return self._to_entity(model) if model else None

    async def find_by_name(self, name: str) -> Tag | None:
        """Case-insensitive lookup through the stored ``name_key``.

        The key is folded in Python, so non-ASCII names match on every
        backend; SQLite's ``lower()`` only folds ASCII.
        """
        stmt = select(TagModel).where(TagModel.name_key == Tag.key_for(name))
        model = await self._session.scalar(stmt)
        return self._to_entity(model) if model else None

    async def for_hour(self, hour_id: UUID) -> list[Tag]:
        """Tags of an hour in the order they were linked."""
        stmt = (
            select(TagModel)
            .join(TaggingModel, TaggingModel.tag_id == TagModel.id)
            .where(TaggingModel.hour_id == hour_id)
            .order_by(TaggingModel.id)
        )
        return [self._to_entity(model) for model in await self._session.scalars(stmt)]

    async def list_with_counts(self) -> list[TagWithCount]:
        """Every tag by name, with the number of hours it is linked to."""
        hours_count = func.count(TaggingModel.id).label("hours_count")
        stmt = (
            select(TagModel, hours_count)
            .outerjoin(TaggingModel, TaggingModel.tag_id == TagModel.id)
            .group_by(TagModel.id)
            .order_by(TagModel.name_key)
        )
        rows = await self._session.execute(stmt)
        return [
            TagWithCount(tag=self._to_entity(model), hours_count=count)
            for model, count in rows.all()
        ]

    async def add(self, tag: Tag) -> Tag:
        model = TagModel(
            id=tag.id,
            name=tag.name,
            name_key=tag.key,
            created_at=tag.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def rename(self, tag_id: UUID, name: str) -> Tag:
        model = await self._session.get(TagModel, tag_id)
        if model is None:
            raise ValueError(f"Tag {tag_id} not found")
        model.name = name
        model.name_key = Tag.key_for(name)
        await self._session.flush()
        return self._to_entity(model)

    async def tag(self, tag_id: UUID, hour_id: UUID) -> None:
        """Link a tag to an hour unless the link already exists."""
        linked = await self._session.scalar(
            select(
                exists().where(
                    TaggingModel.tag_id == tag_id,
                    TaggingModel.hour_id == hour_id,
                )
            )
        )
        if linked:
            return
        self._session.add(TaggingModel(tag_id=tag_id, hour_id=hour_id))
        await self._session.flush()

    async def untag(self, tag_id: UUID, hour_id: UUID) -> None:
        await self._session.execute(
            delete(TaggingModel).where(
                TaggingModel.tag_id == tag_id,
                TaggingModel.hour_id == hour_id,
            )
        )

    @staticmethod
    def _to_entity(model: TagModel) -> Tag:
        return Tag(id=model.id, name=model.name, created_at=model.created_at)
