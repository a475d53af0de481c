"""Catalog API routes."""
from fastapi import APIRouter, Depends

from coaching_config.api.deps import get_catalog_service, get_current_email
from coaching_config.domain.catalog.services import CatalogService

router = APIRouter()


@router.get("")
async def get_catalog(
    _: str = Depends(get_current_email),
    service: CatalogService = Depends(get_catalog_service),
):
    """Employees, workgroups, job profiles, expectations and forms with their questions in one object."""
    return await service.get_catalog()
