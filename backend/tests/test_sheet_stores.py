"""Tests for the tabular stores (in-memory and SQL over aiosqlite)."""
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from coaching_config.domain.expectations.models import ExpectationCandidate
from coaching_config.domain.expectations.services import ExpectationService
from coaching_config.infra.db.base import Base, create_session_factory
from coaching_config.infra.sheets.layout import EXPECTATIONS
from coaching_config.infra.sheets.repositories.employee_repo import SheetIdentityResolver, find_employee_id
from coaching_config.infra.sheets.repositories.expectation_repo import ExpectationRepositoryImpl
from coaching_config.infra.sheets.sql_store import SqlTabularStore
from coaching_config.infra.sheets.store import InMemoryTabularStore, StoreLock, find_row_index, read_data_rows
from coaching_config.domain.common.errors import IdentityNotFoundError

from conftest import EMPLOYEES, EXPECTATION_HEADER, FixedClock


@pytest.fixture
async def sql_store():
    """SQL store on an in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlTabularStore(create_session_factory(engine), lock=StoreLock(timeout_seconds=5))
    await engine.dispose()


@pytest.fixture(params=["memory", "sql"])
async def any_store(request, sql_store):
    if request.param == "memory":
        return InMemoryTabularStore(lock=StoreLock(timeout_seconds=5))
    return sql_store


async def _load(store, sheet, rows):
    async with store.locked():
        for row in rows:
            await store.append_row(sheet, row)


async def test_primitives_require_the_lock(any_store):
    with pytest.raises(RuntimeError):
        await any_store.last_row("anything")


async def test_append_read_and_last_row(any_store):
    async with any_store.locked():
        assert await any_store.last_row("s") == 0
        assert await any_store.append_row("s", ["a", 1]) == 1
        assert await any_store.append_row("s", ["b", 2, True]) == 2
        assert await any_store.last_row("s") == 2
        assert await any_store.read_range("s", 1, 1, 3, 3) == [["a", 1, ""], ["b", 2, True], ["", "", ""]]
        assert await any_store.read_range("s", 2, 2, 1, 1) == [[2]]


async def test_write_range_overwrites_block(any_store):
    await _load(any_store, "s", [["a", 1, "x"], ["b", 2, "y"]])
    async with any_store.locked():
        await any_store.write_range("s", 2, 2, 1, 2, [[20, "z"]])
        assert await any_store.read_range("s", 1, 1, 2, 3) == [["a", 1, "x"], ["b", 20, "z"]]


async def test_write_range_checks_shape(any_store):
    async with any_store.locked():
        with pytest.raises(ValueError):
            await any_store.write_range("s", 1, 1, 1, 2, [["only one"]])
        with pytest.raises(ValueError):
            await any_store.read_range("s", 0, 1, 1, 1)


async def test_delete_row_shifts_rows_up(any_store):
    await _load(any_store, "s", [["a"], ["b"], ["c"]])
    async with any_store.locked():
        await any_store.delete_row("s", 2)
        assert await any_store.last_row("s") == 2
        assert await any_store.read_range("s", 1, 1, 2, 1) == [["a"], ["c"]]
        assert await any_store.append_row("s", ["d"]) == 3
        with pytest.raises(ValueError):
            await any_store.delete_row("s", 9)


async def test_sheets_are_independent(any_store):
    await _load(any_store, "one", [["a"]])
    await _load(any_store, "two", [["b"], ["c"]])
    async with any_store.locked():
        assert await any_store.last_row("one") == 1
        assert await any_store.last_row("two") == 2


async def test_data_rows_and_row_lookup(any_store):
    await _load(any_store, EXPECTATIONS.sheet_name, EXPECTATION_HEADER)
    await _load(
        any_store,
        EXPECTATIONS.sheet_name,
        [
            [3, 502, 1, 1, 1, "2024-01-01", "2024-01-31", "Agent", True, 501, "2024-01-01", "", ""],
            ["5", 503, 1, 1, 1, "2024-01-01", "2024-01-31", "Agent", True, 501, "2024-01-01", "", ""],
        ],
    )
    async with any_store.locked():
        rows = await read_data_rows(any_store, EXPECTATIONS)
        assert [r[0] for r in rows] == [3, "5"]
        assert await find_row_index(any_store, EXPECTATIONS, "3") == 3
        assert await find_row_index(any_store, EXPECTATIONS, 5) == 4
        assert await find_row_index(any_store, EXPECTATIONS, 9) is None


async def test_employee_lookup_is_case_insensitive(any_store):
    await _load(any_store, "Employee", EMPLOYEES)
    async with any_store.locked():
        assert await find_employee_id(any_store, "Sam@Example.com") == 502
        assert await find_employee_id(any_store, "nobody@example.com") is None
        with pytest.raises(IdentityNotFoundError):
            await SheetIdentityResolver(any_store, "nobody@example.com").current_resource_id()


async def test_expectation_service_over_sql(sql_store):
    await _load(sql_store, EXPECTATIONS.sheet_name, EXPECTATION_HEADER)
    await _load(sql_store, "Employee", EMPLOYEES)
    service = ExpectationService(
        sql_store,
        ExpectationRepositoryImpl(sql_store),
        SheetIdentityResolver(sql_store, "kim@example.com"),
        FixedClock(),
    )
    candidate = ExpectationCandidate(
        resource_id="10",
        performance=1,
        one_to_one=2,
        side_by_side=3,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        expectation_type="Workgroup",
    )
    assert await service.add_expectation(candidate) == 1
    stored = await service.get_expectation(1)
    assert stored.resource_id == 10
    assert stored.start_date == date(2024, 1, 1)
    assert stored.created_by == 503
    assert stored.created_date == "2024-03-15"

    archived = await service.set_expectation_status(1, False)
    assert archived.modified_by == 503
    assert (await service.get_expectation(1)).active is False
