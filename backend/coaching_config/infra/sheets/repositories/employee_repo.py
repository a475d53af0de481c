"""Employee lookups and the sheet-backed identity resolver."""
import logging
from typing import Optional

from coaching_config.domain.common.errors import IdentityNotFoundError
from coaching_config.domain.common.types import as_int
from coaching_config.domain.expectations.repositories import IdentityResolver
from coaching_config.infra.sheets.layout import EMPLOYEES, EmployeeCols
from coaching_config.infra.sheets.store import TabularStore, read_data_rows

logger = logging.getLogger(__name__)


async def find_employee_id(store: TabularStore, email: str) -> Optional[int]:
    """Employee id for an email address (case-insensitive). Caller holds the lock."""
    wanted = (email or "").strip().lower()
    if not wanted:
        return None
    for cells in await read_data_rows(store, EMPLOYEES):
        if str(cells[EmployeeCols.EMAIL - 1]).strip().lower() == wanted:
            return as_int(cells[EmployeeCols.ID - 1])
    return None


class SheetIdentityResolver(IdentityResolver):
    """Resolves the caller's email against the Employee sheet. Call inside store.locked()."""

    def __init__(self, store: TabularStore, email: Optional[str]):
        self.store = store
        self.email = email

    async def current_resource_id(self) -> int:
        resource_id = await find_employee_id(self.store, self.email or "")
        if resource_id is None:
            logger.warning("No employee id for %s", self.email)
            raise IdentityNotFoundError(self.email)
        return resource_id
