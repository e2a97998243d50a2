"""Tests for per-employee statistics."""

import pytest

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import DaySchedule, Employee, MonthlySchedule
from shiftplan.domain.shifts import ShiftType
from shiftplan.scheduling.daily_assigner import make_shift
from shiftplan.scheduling.scheduler import generate_schedule
from shiftplan.validation.statistics import calculate_employee_stats


class TestCalculateEmployeeStats:
    """Tests for calculate_employee_stats."""

    @pytest.fixture
    def config(self):
        return ScheduleConfig()

    @pytest.fixture
    def roster(self):
        return [Employee(id="E001"), Employee(id="E002")]

    @pytest.fixture
    def schedule(self, config):
        schedule = MonthlySchedule(month=1, year=2026)
        schedule.days[1] = DaySchedule(
            day=1,
            weekday=4,
            is_holiday=True,
            shifts=[make_shift("E001", ShiftType.MORNING, True, True, config)],
        )
        schedule.days[2] = DaySchedule(
            day=2,
            weekday=5,
            shifts=[
                make_shift("E001", ShiftType.SUPER_PEAK_MORNING, False, True, config),
                make_shift("E002", ShiftType.AFTERNOON, False, False, config),
                make_shift("GHOST", ShiftType.MIDDAY, False, False, config),
            ],
        )
        schedule.rest_days = {"E001": [9, 3], "E002": [4]}
        return schedule

    def test_buckets(self, schedule, roster, config):
        stats = calculate_employee_stats(schedule, roster, config)
        e1 = stats["E001"]
        assert e1.regular_hours == pytest.approx(8.0)
        assert e1.overtime_hours == pytest.approx(3.0)
        assert e1.holiday_hours == pytest.approx(32.0)
        assert e1.total_hours == pytest.approx(18.0)
        assert e1.shift_count == 2
        assert e1.rest_days == (3, 9)

    def test_clamped_hours_counted(self, schedule, roster, config):
        stats = calculate_employee_stats(schedule, roster, config)
        assert stats["E002"].total_hours == pytest.approx(7.0)
        assert stats["E002"].shift_count == 1

    def test_unknown_employees_ignored(self, schedule, roster, config):
        stats = calculate_employee_stats(schedule, roster, config)
        assert set(stats) == {"E001", "E002"}

    def test_missing_employee_has_zero(self, schedule, config):
        stats = calculate_employee_stats(schedule, [Employee(id="E009")], config)
        assert stats["E009"].total_hours == 0
        assert stats["E009"].shift_count == 0
        assert stats["E009"].rest_days == ()

    def test_idempotent(self, schedule, roster, config):
        first = calculate_employee_stats(schedule, roster, config)
        second = calculate_employee_stats(schedule, roster, config)
        assert first == second

    def test_totals_match_shift_hours(self):
        roster = [Employee(id=f"E{i:03d}") for i in range(1, 4)]
        schedule = generate_schedule(1, 2026, roster)
        stats = calculate_employee_stats(schedule, roster)
        config = ScheduleConfig()
        for employee in roster:
            s = stats[employee.id]
            shift_total = sum(shift.hours for _, shift in schedule.shifts_for(employee.id))
            weighted = (
                s.regular_hours
                + s.overtime_hours / config.overtime_multiplier
                + s.holiday_hours / config.holiday_multiplier
            )
            assert weighted == pytest.approx(shift_total)
            assert s.total_hours == pytest.approx(shift_total)
