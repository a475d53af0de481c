"""Overlap detection between expectation date ranges."""
from datetime import date
from typing import Any, Iterable, Optional

from coaching_config.domain.common.types import as_int, normalize_resource_id
from coaching_config.domain.expectations.models import Expectation


def ranges_overlap(new_start: date, new_end: date, start: date, end: date) -> bool:
    """Inclusive overlap: either new endpoint inside [start, end], or new range covers it."""
    return (
        (start <= new_start <= end)
        or (start <= new_end <= end)
        or (new_start <= start and new_end >= end)
    )


def find_conflict(
    expectations: Iterable[Expectation],
    resource_id: Any,
    expectation_type: str,
    start_date: date,
    end_date: date,
    exclude_id: Optional[int] = None,
) -> Optional[int]:
    """
    Id of the first active expectation (in storage order) for the same resource
    and type whose range overlaps [start_date, end_date], or None.

    First match wins; this is not necessarily the earliest conflicting range.
    """
    resource_id = normalize_resource_id(resource_id)
    exclude_id = as_int(exclude_id)
    for existing in expectations:
        if not existing.active:
            continue
        if existing.resource_id != resource_id or existing.expectation_type != expectation_type:
            continue
        if exclude_id is not None and existing.id == exclude_id:
            continue
        # Rows with unreadable dates cannot be compared
        if existing.start_date is None or existing.end_date is None:
            continue
        if ranges_overlap(start_date, end_date, existing.start_date, existing.end_date):
            return existing.id
    return None


def next_expectation_id(expectations: Iterable[Expectation]) -> int:
    """One more than the highest existing id; 1 for an empty table."""
    ids = [e.id for e in expectations if e.id is not None]
    return max(ids) + 1 if ids else 1
