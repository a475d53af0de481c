"""Field checks for expectation candidates. Pure: no store access."""
import math
from datetime import date
from typing import Any

from coaching_config.domain.common.errors import ValidationError
from coaching_config.domain.common.types import parse_date
from coaching_config.domain.expectations.models import ExpectationCandidate

MIN_START_DATE = date(1990, 1, 1)
MAX_END_DATE = date(3000, 12, 31)

_COUNT_FIELDS = (
    ("performance", "Performance"),
    ("one_to_one", "One-to-One"),
    ("side_by_side", "Side-by-Side"),
)


def _is_count(value: Any) -> bool:
    """Non-negative int/float. Booleans and NaN do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return value >= 0


def _parse(value: Any, label: str) -> date:
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Validation failed: {label} {value!r} is not a valid date") from None


def validate_expectation(candidate: ExpectationCandidate) -> tuple[date, date]:
    """
    Check counts and the date window, stopping at the first failure.

    Returns the parsed (start_date, end_date). Raises ValidationError.
    """
    for attr, label in _COUNT_FIELDS:
        if not _is_count(getattr(candidate, attr)):
            raise ValidationError(f"Validation failed: {label} must be a number >= 0")

    start = _parse(candidate.start_date, "start date")
    if start < MIN_START_DATE:
        raise ValidationError(f"Validation failed: start date must be on or after {MIN_START_DATE.isoformat()}")

    end = _parse(candidate.end_date, "end date")
    if end > MAX_END_DATE:
        raise ValidationError(f"Validation failed: end date must be on or before {MAX_END_DATE.isoformat()}")

    if end < start:
        raise ValidationError("Validation failed: end date is before start date")
    return start, end
