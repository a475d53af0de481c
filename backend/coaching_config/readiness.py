"""Readiness checks: config, packages, tabular store, property store."""
import logging

from sqlalchemy import text

logger = logging.getLogger(__name__)

# Result: (passed: bool, message: str)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]


def check_config() -> CheckResult:
    """Load settings and read the keys the runtime is built from."""
    try:
        from coaching_config.settings import get_settings
        s = get_settings()
        _ = s.app_name
        _ = s.store_backend
        _ = s.property_backend
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_packages() -> CheckResult:
    """Import critical modules: uvicorn, sqlalchemy, redis, jose."""
    missing = []
    try:
        import uvicorn  # noqa: F401
    except ImportError:
        missing.append("uvicorn")
    try:
        import sqlalchemy  # noqa: F401
    except ImportError:
        missing.append("sqlalchemy")
    try:
        import redis  # noqa: F401
    except ImportError:
        missing.append("redis")
    try:
        import jose  # noqa: F401
    except ImportError:
        missing.append("python-jose")
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


async def check_store(runtime) -> CheckResult:
    """Trivial query against the database when rows are kept in SQL; memory store always passes."""
    if runtime.engine is None:
        return True, "skipped (memory store)"
    try:
        async with runtime.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True, "ok"
    except Exception as e:
        return False, str(e)


async def check_properties(runtime) -> CheckResult:
    """Round-trip read against the property store."""
    try:
        await runtime.properties.get("__ready__")
        return True, "ok"
    except Exception as e:
        return False, str(e)


async def run_all_checks_async(runtime) -> ChecksDict:
    """Run all readiness checks."""
    return {
        "config": check_config(),
        "packages": check_packages(),
        "store": await check_store(runtime),
        "properties": await check_properties(runtime),
    }


def is_ready(checks: ChecksDict) -> tuple[bool, dict[str, str]]:
    """
    True if all required checks pass.
    Returns (ready: bool, checks_summary: dict of name -> "ok" | "skipped" | error message).
    """
    required = {"config", "packages", "store", "properties"}
    summary: dict[str, str] = {}
    for name, (passed, msg) in checks.items():
        summary[name] = msg
        if not passed:
            logger.warning("Readiness check %s failed: %s", name, msg)
    all_required = all(checks[n][0] for n in required if n in checks)
    return all_required, summary
