"""Tabular store interface, store lock and in-memory implementation.

Every primitive must run inside ``store.locked()``. Services hold the lock for
their whole read-check-write sequence, so primitives only assert ownership
instead of locking again.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Protocol

from coaching_config.domain.common.errors import LockTimeoutError
from coaching_config.domain.common.types import as_int
from coaching_config.infra.sheets.layout import SheetLayout

logger = logging.getLogger(__name__)

Grid = list[list[Any]]


class TabularStore(Protocol):
    """Row/column addressed store (1-based, like a spreadsheet)."""

    def locked(self) -> Any:
        """Async context manager holding the store lock."""
        ...

    async def last_row(self, sheet: str) -> int:
        """Index of the last populated row (0 for an empty sheet)."""
        ...

    async def read_range(
        self, sheet: str, start_row: int, start_col: int, num_rows: int, num_cols: int
    ) -> Grid:
        """Read a rectangular block; missing cells come back as ''."""
        ...

    async def write_range(
        self, sheet: str, start_row: int, start_col: int, num_rows: int, num_cols: int, values: Grid
    ) -> None:
        """Overwrite a rectangular block."""
        ...

    async def append_row(self, sheet: str, values: list[Any]) -> int:
        """Append a row after the last populated row; returns its index."""
        ...

    async def delete_row(self, sheet: str, row_index: int) -> None:
        """Delete a row, shifting the rows below it up."""
        ...


class StoreLock:
    """Process-wide mutex for the store with a bounded wait."""

    def __init__(self, timeout_seconds: float = 180.0):
        self.timeout_seconds = timeout_seconds
        self._lock = asyncio.Lock()
        self._owner: Optional[asyncio.Task] = None

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Store lock not acquired within %.1fs", self.timeout_seconds)
            raise LockTimeoutError(self.timeout_seconds) from None
        self._owner = asyncio.current_task()
        try:
            yield
        finally:
            self._owner = None
            self._lock.release()

    def held_by_current_task(self) -> bool:
        return self._owner is not None and self._owner is asyncio.current_task()


def _check_range(start_row: int, start_col: int, num_rows: int, num_cols: int) -> None:
    if start_row < 1 or start_col < 1:
        raise ValueError(f"Range must start at row/column 1 or later (got {start_row}, {start_col})")
    if num_rows < 0 or num_cols < 0:
        raise ValueError("Range size cannot be negative")


def _check_grid(values: Grid, num_rows: int, num_cols: int) -> None:
    if len(values) != num_rows or any(len(row) != num_cols for row in values):
        raise ValueError(f"Values do not match range size {num_rows}x{num_cols}")


class InMemoryTabularStore:
    """Workbook held in memory. Used for tests and local development."""

    def __init__(self, lock: Optional[StoreLock] = None, sheets: Optional[dict[str, Grid]] = None):
        self.lock = lock or StoreLock()
        self._sheets: dict[str, Grid] = {}
        for name, rows in (sheets or {}).items():
            self.load_sheet(name, rows)

    def load_sheet(self, sheet: str, rows: Grid) -> None:
        """Replace a whole sheet (setup helper, does not take the lock)."""
        self._sheets[sheet] = [list(row) for row in rows]

    def snapshot(self, sheet: str) -> Grid:
        """Copy of a sheet's rows (test helper)."""
        return [list(row) for row in self._sheets.get(sheet, [])]

    def locked(self):
        return self.lock.hold()

    def _require_lock(self) -> None:
        if not self.lock.held_by_current_task():
            raise RuntimeError("Store accessed outside store.locked()")

    def _rows(self, sheet: str) -> Grid:
        return self._sheets.setdefault(sheet, [])

    async def last_row(self, sheet: str) -> int:
        self._require_lock()
        return len(self._rows(sheet))

    async def read_range(
        self, sheet: str, start_row: int, start_col: int, num_rows: int, num_cols: int
    ) -> Grid:
        self._require_lock()
        _check_range(start_row, start_col, num_rows, num_cols)
        rows = self._rows(sheet)
        grid: Grid = []
        for r in range(start_row - 1, start_row - 1 + num_rows):
            row = rows[r] if r < len(rows) else []
            cells = row[start_col - 1:start_col - 1 + num_cols]
            grid.append(cells + [""] * (num_cols - len(cells)))
        return grid

    async def write_range(
        self, sheet: str, start_row: int, start_col: int, num_rows: int, num_cols: int, values: Grid
    ) -> None:
        self._require_lock()
        _check_range(start_row, start_col, num_rows, num_cols)
        _check_grid(values, num_rows, num_cols)
        rows = self._rows(sheet)
        while len(rows) < start_row - 1 + num_rows:
            rows.append([])
        for offset, new_cells in enumerate(values):
            row = rows[start_row - 1 + offset]
            if len(row) < start_col - 1 + num_cols:
                row.extend([""] * (start_col - 1 + num_cols - len(row)))
            row[start_col - 1:start_col - 1 + num_cols] = list(new_cells)

    async def append_row(self, sheet: str, values: list[Any]) -> int:
        self._require_lock()
        rows = self._rows(sheet)
        rows.append(list(values))
        return len(rows)

    async def delete_row(self, sheet: str, row_index: int) -> None:
        self._require_lock()
        rows = self._rows(sheet)
        if row_index < 1 or row_index > len(rows):
            raise ValueError(f"Row {row_index} is outside sheet {sheet!r}")
        del rows[row_index - 1]


async def read_data_rows(store: TabularStore, layout: SheetLayout) -> Grid:
    """All data rows of a table (header rows skipped). Caller holds the lock."""
    last = await store.last_row(layout.sheet_name)
    count = last - layout.header_rows
    if count <= 0:
        return []
    return await store.read_range(layout.sheet_name, layout.first_data_row, 1, count, layout.col_span)


async def find_row_index(store: TabularStore, layout: SheetLayout, id_value: Any) -> Optional[int]:
    """Sheet row holding id_value in the layout's id column, compared numerically."""
    wanted = as_int(id_value)
    if wanted is None:
        return None
    last = await store.last_row(layout.sheet_name)
    count = last - layout.header_rows
    if count <= 0:
        return None
    ids = await store.read_range(layout.sheet_name, layout.first_data_row, layout.id_col, count, 1)
    for offset, (cell,) in enumerate(ids):
        if as_int(cell) == wanted:
            return layout.first_data_row + offset
    return None


async def append_data_row(store: TabularStore, layout: SheetLayout, values: list[Any]) -> int:
    """Append below the table's header rows, padding a short sheet with blank headers first."""
    for _ in range(await store.last_row(layout.sheet_name), layout.header_rows):
        await store.append_row(layout.sheet_name, [""] * layout.col_span)
    return await store.append_row(layout.sheet_name, values)
