"""Tests for expectation field validation."""
from datetime import date

import pytest

from coaching_config.domain.common.errors import ValidationError
from coaching_config.domain.expectations.models import ExpectationCandidate
from coaching_config.domain.expectations.validation import validate_expectation


def _candidate(**overrides):
    fields = dict(
        resource_id=502,
        performance=2,
        one_to_one=1,
        side_by_side=0,
        start_date="2024-01-01",
        end_date="2024-06-30",
        expectation_type="Agent",
    )
    fields.update(overrides)
    return ExpectationCandidate(**fields)


def test_valid_candidate_returns_parsed_dates():
    start, end = validate_expectation(_candidate())
    assert start == date(2024, 1, 1)
    assert end == date(2024, 6, 30)


def test_accepts_date_objects_and_timestamps():
    start, end = validate_expectation(
        _candidate(start_date=date(2024, 1, 1), end_date="2024-02-01T05:00:00")
    )
    assert start == date(2024, 1, 1)
    assert end == date(2024, 2, 1)


def test_utc_timestamps_with_z_suffix_parse():
    start, end = validate_expectation(
        _candidate(start_date="2024-01-01T00:00:00Z", end_date="2024-02-01T05:00:00z")
    )
    assert start == date(2024, 1, 1)
    assert end == date(2024, 2, 1)


def test_zero_and_fractional_counts_are_allowed():
    validate_expectation(_candidate(performance=0, one_to_one=0.5, side_by_side=0))


@pytest.mark.parametrize("field", ["performance", "one_to_one", "side_by_side"])
@pytest.mark.parametrize("value", [-1, "3", None, True, float("nan")])
def test_bad_counts_fail(field, value):
    with pytest.raises(ValidationError) as exc:
        validate_expectation(_candidate(**{field: value}))
    assert exc.value.message.startswith("Validation failed")


def test_end_before_start_fails():
    with pytest.raises(ValidationError, match="before start date"):
        validate_expectation(_candidate(start_date="2024-06-30", end_date="2024-01-01"))


def test_single_day_range_is_valid():
    start, end = validate_expectation(_candidate(start_date="2024-05-05", end_date="2024-05-05"))
    assert start == end


def test_start_before_window_fails():
    with pytest.raises(ValidationError, match="start date"):
        validate_expectation(_candidate(start_date="1989-12-31"))


def test_end_after_window_fails():
    with pytest.raises(ValidationError, match="end date"):
        validate_expectation(_candidate(end_date="3001-01-01"))


def test_window_bounds_are_inclusive():
    validate_expectation(_candidate(start_date="1990-01-01", end_date="3000-12-31"))


@pytest.mark.parametrize("value", ["", "not a date", "2024-13-01", 20240101])
def test_unparseable_start_fails(value):
    with pytest.raises(ValidationError, match="not a valid date"):
        validate_expectation(_candidate(start_date=value))


def test_counts_are_checked_before_dates():
    with pytest.raises(ValidationError, match="Performance"):
        validate_expectation(_candidate(performance=-5, start_date="garbage"))
