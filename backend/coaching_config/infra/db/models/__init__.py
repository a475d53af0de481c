"""Database models."""
from coaching_config.infra.db.models.sheet_row import SheetRowModel

__all__ = ["SheetRowModel"]
