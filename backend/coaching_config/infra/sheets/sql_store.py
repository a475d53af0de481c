"""Tabular store persisted in a relational table (one DB row per sheet row)."""
import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coaching_config.infra.db.models.sheet_row import SheetRowModel
from coaching_config.infra.sheets.store import Grid, StoreLock, _check_grid, _check_range

logger = logging.getLogger(__name__)


def _cell(value: Any) -> Any:
    """JSON-safe cell value; dates are kept as ISO text."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


class SqlTabularStore:
    """SQLAlchemy-backed workbook. Row indexes stay contiguous per sheet."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], lock: Optional[StoreLock] = None):
        self._session_factory = session_factory
        self.lock = lock or StoreLock()

    def locked(self):
        return self.lock.hold()

    def _require_lock(self) -> None:
        if not self.lock.held_by_current_task():
            raise RuntimeError("Store accessed outside store.locked()")

    @staticmethod
    async def _max_row(session: AsyncSession, sheet: str) -> int:
        result = await session.execute(
            select(func.max(SheetRowModel.row_index)).where(SheetRowModel.sheet == sheet)
        )
        return result.scalar() or 0

    @staticmethod
    async def _rows_between(session: AsyncSession, sheet: str, first: int, last: int) -> dict[int, SheetRowModel]:
        result = await session.execute(
            select(SheetRowModel).where(
                SheetRowModel.sheet == sheet,
                SheetRowModel.row_index >= first,
                SheetRowModel.row_index <= last,
            )
        )
        return {model.row_index: model for model in result.scalars().all()}

    async def last_row(self, sheet: str) -> int:
        self._require_lock()
        async with self._session_factory() as session:
            return await self._max_row(session, sheet)

    async def read_range(
        self, sheet: str, start_row: int, start_col: int, num_rows: int, num_cols: int
    ) -> Grid:
        self._require_lock()
        _check_range(start_row, start_col, num_rows, num_cols)
        async with self._session_factory() as session:
            rows = await self._rows_between(session, sheet, start_row, start_row + num_rows - 1)
        grid: Grid = []
        for idx in range(start_row, start_row + num_rows):
            model = rows.get(idx)
            cells = list(model.cells or []) if model else []
            cells = cells[start_col - 1:start_col - 1 + num_cols]
            grid.append(cells + [""] * (num_cols - len(cells)))
        return grid

    async def write_range(
        self, sheet: str, start_row: int, start_col: int, num_rows: int, num_cols: int, values: Grid
    ) -> None:
        self._require_lock()
        _check_range(start_row, start_col, num_rows, num_cols)
        _check_grid(values, num_rows, num_cols)
        async with self._session_factory() as session:
            last = await self._max_row(session, sheet)
            # Fill any gap so row indexes stay contiguous
            for idx in range(last + 1, start_row):
                session.add(SheetRowModel(sheet=sheet, row_index=idx, cells=[]))
            rows = await self._rows_between(session, sheet, start_row, start_row + num_rows - 1)
            for offset, new_cells in enumerate(values):
                idx = start_row + offset
                model = rows.get(idx)
                if model is None:
                    model = SheetRowModel(sheet=sheet, row_index=idx, cells=[])
                    session.add(model)
                cells = list(model.cells or [])
                if len(cells) < start_col - 1 + num_cols:
                    cells.extend([""] * (start_col - 1 + num_cols - len(cells)))
                cells[start_col - 1:start_col - 1 + num_cols] = [_cell(v) for v in new_cells]
                # Assign a new list so the JSON column is flagged dirty
                model.cells = cells
            await session.commit()

    async def append_row(self, sheet: str, values: list[Any]) -> int:
        self._require_lock()
        async with self._session_factory() as session:
            idx = await self._max_row(session, sheet) + 1
            session.add(SheetRowModel(sheet=sheet, row_index=idx, cells=[_cell(v) for v in values]))
            await session.commit()
        return idx

    async def delete_row(self, sheet: str, row_index: int) -> None:
        self._require_lock()
        async with self._session_factory() as session:
            last = await self._max_row(session, sheet)
            if row_index < 1 or row_index > last:
                raise ValueError(f"Row {row_index} is outside sheet {sheet!r}")
            await session.execute(
                delete(SheetRowModel)
                .where(SheetRowModel.sheet == sheet, SheetRowModel.row_index == row_index)
                .execution_options(synchronize_session=False)
            )
            await session.execute(
                update(SheetRowModel)
                .where(SheetRowModel.sheet == sheet, SheetRowModel.row_index > row_index)
                .values(row_index=SheetRowModel.row_index - 1)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
        logger.info("Deleted row %d from sheet %s", row_index, sheet)
