"""Sheet row database model."""
from datetime import datetime
from sqlalchemy import JSON, Column, DateTime, Index, Integer, String

from coaching_config.infra.db.base import Base


class SheetRowModel(Base):
    """One spreadsheet row; cells are kept as a JSON array."""

    __tablename__ = "sheet_rows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sheet = Column(String, nullable=False)
    row_index = Column(Integer, nullable=False)  # 1-based, contiguous per sheet
    cells = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (Index("ix_sheet_rows_sheet_row", "sheet", "row_index"),)
