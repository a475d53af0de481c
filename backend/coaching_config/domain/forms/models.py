"""Form and question domain models."""
from dataclasses import dataclass, field
from typing import Any, Optional

from coaching_config.domain.common.types import as_bool, as_int


@dataclass(frozen=True)
class FormSummary:
    """A form from the master forms list."""

    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class CoachingForm:
    """A form enabled for coaching and the coaching kinds it may be used for."""

    id: int
    name: str
    performance: bool = False
    one_to_one: bool = False
    side_by_side: bool = False
    updated_by: Any = ""
    updated_on: Any = ""
    row: Optional[int] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_row(cls, cells: list[Any], row: Optional[int] = None) -> "CoachingForm":
        cells = list(cells) + [""] * (7 - len(cells))
        return cls(
            id=as_int(cells[0]),
            name=cells[1],
            performance=as_bool(cells[2]),
            one_to_one=as_bool(cells[3]),
            side_by_side=as_bool(cells[4]),
            updated_by=cells[5],
            updated_on=cells[6],
            row=row,
        )

    def to_row(self) -> list[Any]:
        return [
            self.id,
            self.name,
            self.performance,
            self.one_to_one,
            self.side_by_side,
            self.updated_by,
            self.updated_on,
        ]


@dataclass
class CoachingQuestion:
    """Coaching metadata for one question."""

    id: int
    form_id: Any
    text: str = ""
    category: str = ""
    hidden: bool = False
    updated_by: Any = ""
    updated_on: Any = ""
    row: Optional[int] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_row(cls, cells: list[Any], row: Optional[int] = None) -> "CoachingQuestion":
        cells = list(cells) + [""] * (7 - len(cells))
        return cls(
            id=as_int(cells[0]),
            form_id=cells[1],
            text=cells[2],
            category=cells[3],
            hidden=as_bool(cells[4]),
            updated_by=cells[5],
            updated_on=cells[6],
            row=row,
        )

    def to_row(self) -> list[Any]:
        return [
            self.id,
            self.form_id,
            self.text,
            self.category,
            self.hidden,
            self.updated_by,
            self.updated_on,
        ]
