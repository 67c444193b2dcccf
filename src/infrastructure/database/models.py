"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserModel(Base):
    """User model."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    hours: Mapped[list["HourModel"]] = relationship(
        "HourModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class ClientModel(Base):
    """Client model."""

    __tablename__ = "clients"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    projects: Mapped[list["ProjectModel"]] = relationship(
        "ProjectModel",
        back_populates="client",
    )


class ProjectModel(Base):
    """Project model (optionally billed to a client)."""

    __tablename__ = "projects"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("clients.id", ondelete="SET NULL"),
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    client: Mapped[Optional["ClientModel"]] = relationship(
        "ClientModel",
        back_populates="projects",
    )
    hours: Mapped[list["HourModel"]] = relationship(
        "HourModel",
        back_populates="project",
    )


class CategoryModel(Base):
    """Category model."""

    __tablename__ = "categories"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    hours: Mapped[list["HourModel"]] = relationship(
        "HourModel",
        back_populates="category",
    )


class HourModel(Base):
    """Hour entry model."""

    __tablename__ = "hours"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("projects.id"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    starting_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    ending_time: Mapped[datetime | None] = mapped_column(DateTime)
    value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    description: Mapped[str | None] = mapped_column(Text)
    search_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    user: Mapped["UserModel"] = relationship("UserModel", back_populates="hours")
    project: Mapped["ProjectModel"] = relationship("ProjectModel", back_populates="hours")
    category: Mapped["CategoryModel"] = relationship("CategoryModel", back_populates="hours")
    taggings: Mapped[list["TaggingModel"]] = relationship(
        "TaggingModel",
        back_populates="hour",
        cascade="all, delete-orphan",
        order_by="TaggingModel.id",
    )


class TagModel(Base):
    """Tag model. ``name_key`` holds the case-folded name and is unique."""

    __tablename__ = "tags"
    __table_args__ = (Index("ix_tags_name_key", "name_key", unique=True),)

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name_key: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    taggings: Mapped[list["TaggingModel"]] = relationship(
        "TaggingModel",
        back_populates="tag",
    )


class TaggingModel(Base):
    """Join between an hour and a tag. Insertion order is association order."""

    __tablename__ = "taggings"
    __table_args__ = (UniqueConstraint("hour_id", "tag_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hour_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("hours.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    hour: Mapped["HourModel"] = relationship("HourModel", back_populates="taggings")
    tag: Mapped["TagModel"] = relationship("TagModel", back_populates="taggings")


class AuditModel(Base):
    """Append-only audit record of changes to an auditable row."""

    __tablename__ = "audits"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    auditable_type: Mapped[str] = mapped_column(String(50), nullable=False)
    auditable_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    audited_changes: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict)
    user_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    user: Mapped[Optional["UserModel"]] = relationship("UserModel")
