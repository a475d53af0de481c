"""Readiness checks against in-process backends."""
from coaching_config.infra.jobs.queue import SerialTaskQueue
from coaching_config.infra.properties.store import InMemoryPropertyStore
from coaching_config.infra.sheets.store import InMemoryTabularStore
from coaching_config.readiness import is_ready, run_all_checks_async
from coaching_config.runtime import AppRuntime


class _BrokenProperties(InMemoryPropertyStore):
    async def get(self, key):
        raise ConnectionError("redis unreachable")


async def test_memory_runtime_is_ready():
    runtime = AppRuntime(store=InMemoryTabularStore(), properties=InMemoryPropertyStore(), queue=SerialTaskQueue())
    checks = await run_all_checks_async(runtime)
    # Core: config and packages must be ok for the app to load
    for name in ("config", "packages"):
        ok, msg = checks[name]
        assert ok, f"readiness {name}: {msg}"
    ready, summary = is_ready(checks)
    assert ready
    assert summary["store"] == "skipped (memory store)"


async def test_unreachable_property_store_is_not_ready():
    runtime = AppRuntime(store=InMemoryTabularStore(), properties=_BrokenProperties(), queue=SerialTaskQueue())
    ready, summary = is_ready(await run_all_checks_async(runtime))
    assert not ready
    assert summary["properties"] == "redis unreachable"
