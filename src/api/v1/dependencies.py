"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.audit_service import AuditService
from domain.services.catalog_service import CatalogService
from domain.services.hour_service import HourService
from domain.services.tag_service import TagService
from domain.services.user_service import UserService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_audit_service() -> AuditService:
    """Get Audit service instance."""
    return AuditService(get_uow_factory())


@lru_cache
def get_hour_service() -> HourService:
    """Get Hour service instance."""
    return HourService(get_uow_factory(), audit_service=get_audit_service())


@lru_cache
def get_tag_service() -> TagService:
    """Get Tag service instance."""
    return TagService(get_uow_factory())


@lru_cache
def get_catalog_service() -> CatalogService:
    """Get Catalog service instance."""
    return CatalogService(get_uow_factory())


@lru_cache
def get_user_service() -> UserService:
    """Get User service instance."""
    return UserService(get_uow_factory())
