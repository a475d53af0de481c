"""Expectation API routes."""
from fastapi import APIRouter

from coaching_config.api.expectations import routes_expectations

router = APIRouter()

router.include_router(routes_expectations.router, prefix="/expectations", tags=["expectations"])
