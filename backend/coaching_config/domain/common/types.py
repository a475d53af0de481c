"""Common domain types."""
from datetime import date, datetime
from typing import Any, Optional, Protocol
from zoneinfo import ZoneInfo

# Audit dates are stamped as yyyy-MM-dd in one fixed time zone.
AUDIT_DATE_FORMAT = "%Y-%m-%d"


class Clock(Protocol):
    """Date source used for audit stamping."""

    def today(self) -> date:
        """Return the current date in the audit time zone."""
        ...


class ZonedClock:
    """System clock pinned to a single time zone."""

    def __init__(self, tz_name: str = "America/New_York"):
        self.tz = ZoneInfo(tz_name)

    def today(self) -> date:
        return datetime.now(self.tz).date()


def format_audit_date(value: date) -> str:
    """Format a date the way audit columns store it."""
    return value.strftime(AUDIT_DATE_FORMAT)


def parse_date(value: Any) -> date:
    """Parse a date cell or request value. Raises ValueError/TypeError when it is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # Accept full ISO timestamps as well as bare dates
        if len(text) > 10 and text[10] in ("T", " "):
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise TypeError(f"Expected a date, got {type(value).__name__}")


def parse_date_or_none(value: Any) -> Optional[date]:
    """Like parse_date, but blank or malformed cells become None."""
    if value is None or value == "":
        return None
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        return None


def as_int(value: Any) -> Optional[int]:
    """Coerce an id cell to int. Returns None for blanks and non-numeric cells."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def as_bool(value: Any) -> bool:
    """Read a checkbox cell (True/False or the strings TRUE/FALSE)."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def normalize_resource_id(value: Any) -> Any:
    """Integer-looking resource ids become ints so 42 and "42" compare equal; anything else is kept as text."""
    number = as_int(value)
    if number is not None:
        return number
    return value.strip() if isinstance(value, str) else value
