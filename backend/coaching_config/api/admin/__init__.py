"""Admin API routes."""
from fastapi import APIRouter

from coaching_config.api.admin import routes_config, routes_users

router = APIRouter()

router.include_router(routes_config.router, tags=["config"])
router.include_router(routes_users.router, prefix="/users", tags=["users"])
