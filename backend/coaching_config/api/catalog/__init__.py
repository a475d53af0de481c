"""Catalog API routes."""
from fastapi import APIRouter

from coaching_config.api.catalog import routes_catalog

router = APIRouter()

router.include_router(routes_catalog.router, prefix="/catalog", tags=["catalog"])
