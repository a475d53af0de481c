"""Expectation domain models."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from coaching_config.domain.common.types import (
    as_bool,
    as_int,
    normalize_resource_id,
    parse_date_or_none,
)


@dataclass
class ExpectationCandidate:
    """Caller-supplied fields of an expectation. Values are validated, not coerced."""

    resource_id: Any
    performance: Any
    one_to_one: Any
    side_by_side: Any
    start_date: Any
    end_date: Any
    expectation_type: str
    active: bool = True


@dataclass
class Expectation:
    """A stored expectation row."""

    id: int
    resource_id: Any
    performance: Any
    one_to_one: Any
    side_by_side: Any
    start_date: Optional[date]
    end_date: Optional[date]
    expectation_type: str
    active: bool
    created_by: Any = ""
    created_date: Any = ""
    modified_by: Any = ""
    modified_date: Any = ""
    # Sheet row the record was read from; None until persisted
    row: Optional[int] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_row(cls, cells: list[Any], row: Optional[int] = None) -> "Expectation":
        cells = list(cells) + [""] * (13 - len(cells))
        return cls(
            id=as_int(cells[0]),
            resource_id=normalize_resource_id(cells[1]),
            performance=cells[2],
            one_to_one=cells[3],
            side_by_side=cells[4],
            start_date=parse_date_or_none(cells[5]),
            end_date=parse_date_or_none(cells[6]),
            expectation_type=cells[7],
            active=as_bool(cells[8]),
            created_by=cells[9],
            created_date=cells[10],
            modified_by=cells[11],
            modified_date=cells[12],
            row=row,
        )

    def to_row(self) -> list[Any]:
        return [
            self.id,
            self.resource_id,
            self.performance,
            self.one_to_one,
            self.side_by_side,
            self.start_date.isoformat() if self.start_date else "",
            self.end_date.isoformat() if self.end_date else "",
            self.expectation_type,
            self.active,
            self.created_by,
            self.created_date,
            self.modified_by,
            self.modified_date,
        ]

    def to_dict(self) -> dict[str, Any]:
        """JSON shape used by the catalog and the API."""
        return {
            "id": self.id,
            "resourceId": self.resource_id,
            "performance": self.performance,
            "oneToOne": self.one_to_one,
            "sideBySide": self.side_by_side,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "expectationType": self.expectation_type,
            "active": self.active,
            "createdBy": self.created_by,
            "createdDate": self.created_date,
            "modifiedBy": self.modified_by,
            "modifiedDate": self.modified_date,
        }
