"""Tests for overlap detection."""
from datetime import date

from coaching_config.domain.expectations.models import Expectation
from coaching_config.domain.expectations.overlap import find_conflict, next_expectation_id, ranges_overlap


def _exp(id, resource_id=502, start=date(2024, 1, 1), end=date(2024, 1, 31), type="Agent", active=True):
    return Expectation(
        id=id,
        resource_id=resource_id,
        performance=1,
        one_to_one=1,
        side_by_side=1,
        start_date=start,
        end_date=end,
        expectation_type=type,
        active=active,
    )


def test_ranges_overlap_cases():
    jan = (date(2024, 1, 1), date(2024, 1, 31))
    assert ranges_overlap(date(2024, 1, 15), date(2024, 2, 15), *jan)
    assert ranges_overlap(date(2023, 12, 1), date(2024, 1, 1), *jan)
    assert ranges_overlap(date(2023, 12, 1), date(2024, 3, 1), *jan)
    assert ranges_overlap(date(2024, 1, 10), date(2024, 1, 12), *jan)
    assert not ranges_overlap(date(2024, 2, 1), date(2024, 2, 28), *jan)
    assert not ranges_overlap(date(2023, 12, 1), date(2023, 12, 31), *jan)


def test_shared_boundary_date_conflicts():
    rows = [_exp(1)]
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 31), date(2024, 2, 28)) == 1


def test_adjacent_ranges_do_not_conflict():
    rows = [_exp(1)]
    assert find_conflict(rows, 502, "Agent", date(2024, 2, 1), date(2024, 2, 28)) is None


def test_inactive_rows_are_ignored():
    rows = [_exp(1, active=False)]
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 1), date(2024, 1, 31)) is None


def test_other_resource_or_type_is_ignored():
    rows = [_exp(1, resource_id=503), _exp(2, type="Workgroup")]
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 1), date(2024, 1, 31)) is None


def test_resource_id_text_and_number_match():
    rows = [_exp(1, resource_id=502)]
    assert find_conflict(rows, "502", "Agent", date(2024, 1, 5), date(2024, 1, 6)) == 1


def test_excluded_id_is_skipped():
    rows = [_exp(1), _exp(2, start=date(2024, 3, 1), end=date(2024, 3, 31))]
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 1), date(2024, 1, 31), exclude_id=1) is None
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 1), date(2024, 3, 5), exclude_id=1) == 2


def test_first_match_in_storage_order_wins():
    rows = [_exp(7, start=date(2024, 3, 1), end=date(2024, 3, 31)), _exp(3)]
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 1), date(2024, 12, 31)) == 7


def test_rows_without_dates_are_skipped():
    rows = [_exp(1, start=None, end=None)]
    assert find_conflict(rows, 502, "Agent", date(2024, 1, 1), date(2024, 1, 31)) is None


def test_next_id():
    assert next_expectation_id([]) == 1
    assert next_expectation_id([_exp(4), _exp(9), _exp(2)]) == 10
