"""Form and question API routes."""
from fastapi import APIRouter

from coaching_config.api.forms import routes_forms

router = APIRouter()

router.include_router(routes_forms.router, tags=["forms"])
