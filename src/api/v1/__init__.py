"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.catalog import categories_router, clients_router, projects_router
from api.v1.routes.hours import router as hours_router
from api.v1.routes.tags import router as tags_router
from api.v1.routes.users import router as users_router

router = APIRouter()
router.include_router(hours_router)
router.include_router(tags_router)
router.include_router(users_router)
router.include_router(clients_router)
router.include_router(projects_router)
router.include_router(categories_router)
