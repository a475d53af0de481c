"""Process-scoped resources: the tabular store, the property store and the task queue."""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from coaching_config.infra.db.base import Base, create_engine, create_session_factory
from coaching_config.infra.db.models import SheetRowModel  # noqa: F401
from coaching_config.infra.jobs.queue import SerialTaskQueue
from coaching_config.infra.properties.store import InMemoryPropertyStore, PropertyStore, RedisPropertyStore
from coaching_config.infra.sheets.sql_store import SqlTabularStore
from coaching_config.infra.sheets.store import InMemoryTabularStore, StoreLock, TabularStore
from coaching_config.infra.sheets.workbook import load_workbook, read_workbook_file
from coaching_config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class AppRuntime:
    store: TabularStore
    properties: PropertyStore
    queue: SerialTaskQueue
    engine: Optional[Any] = None
    workbook_file: str = ""
    users_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppRuntime":
        lock = StoreLock(timeout_seconds=settings.sheet_lock_timeout_seconds)
        engine = None
        if settings.store_backend == "sql":
            engine = create_engine(settings.database_url, echo=settings.database_echo)
            store: TabularStore = SqlTabularStore(create_session_factory(engine), lock=lock)
        else:
            store = InMemoryTabularStore(lock=lock)

        if settings.property_backend == "redis":
            properties: PropertyStore = RedisPropertyStore(settings.redis_url)
        else:
            properties = InMemoryPropertyStore()

        logger.info(
            "Runtime: store=%s properties=%s lock_timeout=%ss",
            settings.store_backend, settings.property_backend, settings.sheet_lock_timeout_seconds,
        )
        return cls(
            store=store,
            properties=properties,
            queue=SerialTaskQueue(maxsize=settings.task_queue_maxsize),
            engine=engine,
            workbook_file=settings.workbook_file if engine is None else "",
        )

    async def start(self) -> None:
        if self.engine is not None:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        if self.workbook_file:
            await load_workbook(self.store, read_workbook_file(self.workbook_file))
        self.queue.start()

    async def close(self) -> None:
        await self.queue.stop()
        if isinstance(self.properties, RedisPropertyStore):
            await self.properties.close()
        if self.engine is not None:
            await self.engine.dispose()
