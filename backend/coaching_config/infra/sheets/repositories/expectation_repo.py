"""Expectation repository implementation."""
from typing import Optional

from coaching_config.domain.expectations.models import Expectation
from coaching_config.domain.expectations.repositories import ExpectationRepository
from coaching_config.infra.sheets.layout import EXPECTATION_TYPES, EXPECTATIONS
from coaching_config.infra.sheets.store import TabularStore, append_data_row, find_row_index, read_data_rows


class ExpectationRepositoryImpl(ExpectationRepository):
    """Expectations kept in the tbl_coaching_expectations sheet."""

    def __init__(self, store: TabularStore):
        self.store = store

    async def list_all(self) -> list[Expectation]:
        rows = await read_data_rows(self.store, EXPECTATIONS)
        return [
            Expectation.from_row(cells, row=EXPECTATIONS.first_data_row + offset)
            for offset, cells in enumerate(rows)
        ]

    async def get(self, expectation_id: int) -> Optional[Expectation]:
        row = await find_row_index(self.store, EXPECTATIONS, expectation_id)
        if row is None:
            return None
        (cells,) = await self.store.read_range(EXPECTATIONS.sheet_name, row, 1, 1, EXPECTATIONS.col_span)
        return Expectation.from_row(cells, row=row)

    async def append(self, expectation: Expectation) -> Expectation:
        expectation.row = await append_data_row(self.store, EXPECTATIONS, expectation.to_row())
        return expectation

    async def replace(self, expectation: Expectation) -> Expectation:
        if expectation.row is None:
            raise ValueError(f"Expectation {expectation.id} has not been stored yet")
        await self.store.write_range(
            EXPECTATIONS.sheet_name,
            expectation.row,
            1,
            1,
            EXPECTATIONS.col_span,
            [expectation.to_row()],
        )
        return expectation

    async def list_types(self) -> list[str]:
        rows = await read_data_rows(self.store, EXPECTATION_TYPES)
        return [str(cells[0]).strip() for cells in rows if str(cells[0]).strip()]
