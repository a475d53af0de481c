"""Catalog service."""
import logging
from datetime import datetime, timezone
from typing import Any

from coaching_config.domain.catalog.projector import CatalogSource, build_catalog
from coaching_config.infra.sheets.layout import (
    COACHING_FORMS,
    COACHING_QUESTIONS,
    EMPLOYEES,
    EXPECTATIONS,
    FORMS,
    QUESTIONS,
)
from coaching_config.infra.sheets.store import TabularStore, read_data_rows

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, store: TabularStore):
        self.store = store

    async def get_catalog(self) -> dict[str, Any]:
        """Read every source table in one critical section and project them."""
        async with self.store.locked():
            source = CatalogSource(
                employees=await read_data_rows(self.store, EMPLOYEES),
                expectations=await read_data_rows(self.store, EXPECTATIONS),
                master_forms=await read_data_rows(self.store, FORMS),
                coaching_forms=await read_data_rows(self.store, COACHING_FORMS),
                question_links=await read_data_rows(self.store, QUESTIONS),
                coaching_questions=await read_data_rows(self.store, COACHING_QUESTIONS),
            )
        catalog = build_catalog(source, datetime.now(timezone.utc))
        logger.debug(
            "Built catalog: %d employees, %d forms, %d expectations",
            len(catalog["employees"]), len(catalog["forms"]), len(catalog["expectations"]),
        )
        return catalog
