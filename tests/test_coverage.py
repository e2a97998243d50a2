"""Tests for coverage calculation."""

import pytest

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import ShiftAssignment
from shiftplan.domain.shifts import ShiftType, get_template
from shiftplan.scheduling.coverage import (
    calculate_coverage,
    covered_hours,
    coverage_for_config,
)


def make(shift_type: ShiftType, employee_id: str = "E001", cutoff=None) -> ShiftAssignment:
    shift = ShiftAssignment.from_template(employee_id, get_template(shift_type))
    if cutoff is not None:
        shift.clamp_end(cutoff)
    return shift


class TestCoveredHours:
    """Tests for covered clock hours."""

    def test_break_hour_not_covered(self):
        hours = covered_hours([make(ShiftType.MORNING)])
        assert sorted(hours) == [8, 9, 10, 11, 13, 14, 15, 16]

    def test_union_of_shifts(self):
        hours = covered_hours([make(ShiftType.MORNING), make(ShiftType.AFTERNOON, "E002")])
        assert sorted(hours) == list(range(8, 21))

    def test_no_shifts(self):
        assert covered_hours([]) == frozenset()


class TestCalculateCoverage:
    """Tests for the coverage summary."""

    def test_full_coverage(self):
        shifts = [make(ShiftType.MORNING), make(ShiftType.AFTERNOON, "E002", cutoff=20)]
        coverage = calculate_coverage(shifts)
        assert coverage.percentage == 100.0
        assert all(coverage.critical.values())

    def test_partial_coverage(self):
        coverage = calculate_coverage([make(ShiftType.MORNING)])
        assert coverage.percentage == pytest.approx(8 / 12 * 100)
        assert coverage.critical["11:59"]
        assert coverage.critical["09:00"]
        assert coverage.critical["15:00"]
        assert not coverage.critical["18:00"]

    def test_empty_day(self):
        coverage = calculate_coverage([])
        assert coverage.percentage == 0.0
        assert not any(coverage.critical.values())

    def test_percentage_ignores_hours_outside_window(self):
        coverage = calculate_coverage([make(ShiftType.SUPER_PEAK_AFTERNOON)])
        assert 21 in coverage.hours
        # 11-15 and 17-19 fall inside 08:00-20:00
        assert coverage.percentage == pytest.approx(8 / 12 * 100)

    def test_percentage_never_exceeds_100(self):
        shifts = [make(t, f"E{i}") for i, t in enumerate(ShiftType)]
        coverage = calculate_coverage(shifts)
        assert coverage.percentage == 100.0

    def test_window_must_sit_inside_one_segment(self):
        # Break 12:00-13:00 leaves 11:59 covered but not a 12:00 pickup
        coverage = calculate_coverage([make(ShiftType.MORNING)])
        assert coverage.critical["11:59"]
        noon = ScheduleConfig.from_dict(
            {"delivery_windows": [{"label": "12:00", "start": "12:00"}]}
        )
        assert not coverage_for_config([make(ShiftType.MORNING)], noon).critical["12:00"]

    def test_custom_operating_window(self):
        config = ScheduleConfig(open_hour=8, close_hour=12)
        coverage = coverage_for_config([make(ShiftType.MORNING)], config)
        assert coverage.percentage == 100.0
