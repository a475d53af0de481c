"""Seed the tabular store from a YAML/JSON workbook file (sheet name -> list of rows)."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from coaching_config.infra.sheets.workbook import load_workbook, read_workbook_file
from coaching_config.runtime import AppRuntime
from coaching_config.settings import get_settings


async def seed_workbook(path: str) -> None:
    """Replace every sheet named in the file; sheets not in the file are left alone."""
    runtime = AppRuntime.from_settings(get_settings())
    if runtime.engine is None:
        print("store_backend is 'memory'; nothing would persist. Set STORE_BACKEND=sql.")
        return
    await runtime.start()
    try:
        written = await load_workbook(runtime.store, read_workbook_file(path))
        for sheet, count in written.items():
            print(f"  {sheet}: {count} rows")
        print(f"Seeded {len(written)} sheets from {path}.")
    finally:
        await runtime.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: seed_workbook.py WORKBOOK_FILE")
        sys.exit(2)
    asyncio.run(seed_workbook(sys.argv[1]))
