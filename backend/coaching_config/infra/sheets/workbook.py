"""Workbook files: a YAML or JSON mapping of sheet name to rows, loaded into a tabular store."""
import logging
from pathlib import Path

from coaching_config.config_store import parse_structured_file
from coaching_config.infra.sheets.store import Grid, TabularStore

logger = logging.getLogger(__name__)


def read_workbook_file(path: str | Path) -> dict[str, Grid]:
    """Parse a workbook file. Raises ValueError when it is not a mapping of sheet -> list of rows."""
    path = Path(path)
    data = parse_structured_file(path)
    if not isinstance(data, dict):
        raise ValueError(f"Workbook {path} must map sheet names to rows")
    for sheet, rows in data.items():
        if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
            raise ValueError(f"Sheet {sheet!r} in {path} must be a list of rows")
    return data


async def load_workbook(store: TabularStore, workbook: dict[str, Grid]) -> dict[str, int]:
    """Replace each named sheet with the given rows in one critical section. Returns rows written per sheet."""
    written: dict[str, int] = {}
    async with store.locked():
        for sheet, rows in workbook.items():
            # Delete bottom-up so no rows have to shift
            for row_index in range(await store.last_row(sheet), 0, -1):
                await store.delete_row(sheet, row_index)
            for row in rows:
                await store.append_row(sheet, row)
            written[sheet] = len(rows)
    logger.info("Loaded workbook: %s", ", ".join(f"{s}={n}" for s, n in written.items()))
    return written
