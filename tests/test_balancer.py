"""Tests for hour balancing."""

from datetime import time

import pytest

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import (
    DaySchedule,
    Employee,
    EmployeeRunningStats,
    WarningKind,
    split_shift_hours,
)
from shiftplan.domain.shifts import ShiftType
from shiftplan.scheduling.balancer import BalanceAction, HourBalancer
from shiftplan.scheduling.coverage import coverage_for_config
from shiftplan.scheduling.daily_assigner import make_shift


def build_day(config, day, weekday, assignments, super_peak=False) -> DaySchedule:
    """Build a day from (employee_id, shift_type) pairs."""
    shifts = [
        make_shift(emp_id, shift_type, False, super_peak, config)
        for emp_id, shift_type in assignments
    ]
    return DaySchedule(
        day=day,
        weekday=weekday,
        shifts=shifts,
        is_peak=super_peak,
        is_super_peak=super_peak,
        coverage=coverage_for_config(shifts, config),
    )


def running_for(days, employee_id, config, rest_days=()) -> EmployeeRunningStats:
    stats = EmployeeRunningStats(employee_id=employee_id, rest_days=list(rest_days))
    for day in days.values():
        shift = day.shift_for(employee_id)
        if shift is not None:
            stats.add(split_shift_hours(shift.hours, shift.is_holiday, config))
    return stats


class TestHourBalancerPlan:
    """Tests for planning balance operations."""

    @pytest.fixture
    def config(self):
        return ScheduleConfig(target_hours=20)

    @pytest.fixture
    def balancer(self, config):
        return HourBalancer(config)

    def test_no_deficit_no_plan(self, balancer):
        config = ScheduleConfig(target_hours=8)
        days = {1: build_day(config, 1, 1, [("E001", ShiftType.MORNING)])}
        stats = running_for(days, "E001", config)
        plan = HourBalancer(config).plan("E001", days, stats)
        assert plan.is_empty
        assert plan.remaining_deficit == pytest.approx(0.0)

    def test_extend_shifts_chronologically(self, config, balancer):
        days = {
            1: build_day(config, 1, 1, [("E001", ShiftType.MORNING)]),
            2: build_day(config, 2, 2, [("E001", ShiftType.MORNING)]),
        }
        plan = balancer.plan("E001", days, running_for(days, "E001", config))
        assert plan.starting_deficit == pytest.approx(4.0)
        assert [(op.action, op.day, op.hours) for op in plan.operations] == [
            (BalanceAction.EXTEND, 1, 2.0),
            (BalanceAction.EXTEND, 2, 2.0),
        ]
        assert plan.remaining_deficit == pytest.approx(0.0)

    def test_plan_does_not_mutate(self, config, balancer):
        days = {1: build_day(config, 1, 1, [("E001", ShiftType.MORNING)])}
        balancer.plan("E001", days, running_for(days, "E001", config))
        assert days[1].shifts[0].end == time(17)
        assert days[1].shifts[0].hours == 8

    def test_extension_respects_cutoff(self, config, balancer):
        # Clamped afternoon already ends at 20:00
        days = {1: build_day(config, 1, 1, [("E001", ShiftType.AFTERNOON)])}
        plan = balancer.plan("E001", days, running_for(days, "E001", config))
        assert not any(op.action is BalanceAction.EXTEND for op in plan.operations)

    def test_extension_capped_at_21_on_super_peak(self, config, balancer):
        days = {1: build_day(config, 1, 1, [("E001", ShiftType.AFTERNOON)], super_peak=True)}
        plan = balancer.plan("E001", days, running_for(days, "E001", config))
        # 12:00-21:00 has no room left before 21:00
        assert plan.is_empty

    def test_partial_extension_limited_by_headroom(self, config, balancer):
        days = {1: build_day(config, 1, 1, [("E001", ShiftType.MIDDAY)])}
        plan = balancer.plan("E001", days, running_for(days, "E001", config))
        # 10:00-19:00 can only reach 20:00
        assert plan.operations[0].hours == pytest.approx(1.0)

    def test_reclaim_rest_day(self, config, balancer):
        days = {
            1: build_day(config, 1, 1, [("E001", ShiftType.MORNING)]),
            2: build_day(config, 2, 2, [("E002", ShiftType.MORNING)]),
        }
        stats = running_for(days, "E001", config, rest_days=[2])
        plan = balancer.plan("E001", days, stats)
        assert [(op.action, op.day) for op in plan.operations] == [
            (BalanceAction.EXTEND, 1),
            (BalanceAction.RECLAIM, 2),
        ]
        reclaim = plan.operations[1]
        assert reclaim.shift_type is ShiftType.AFTERNOON
        assert reclaim.hours == pytest.approx(7.0)
        assert plan.remaining_deficit == pytest.approx(3.0)

    def test_reclaim_skips_sundays_and_full_days(self, config, balancer):
        full = [("E002", ShiftType.MORNING), ("E003", ShiftType.MIDDAY), ("E004", ShiftType.AFTERNOON)]
        days = {
            1: build_day(config, 1, 0, []),  # Sunday
            2: build_day(config, 2, 1, full),
        }
        stats = running_for(days, "E001", config, rest_days=[1, 2])
        plan = balancer.plan("E001", days, stats)
        assert plan.is_empty
        assert plan.remaining_deficit == pytest.approx(20.0)

    def test_reclaim_shift_type_by_day_load(self, config, balancer):
        days = {
            3: build_day(config, 3, 2, []),
        }
        stats = running_for(days, "E001", config, rest_days=[3])
        plan = balancer.plan("E001", days, stats)
        assert plan.operations[0].shift_type is ShiftType.MORNING
        assert plan.operations[0].hours == 8


class TestHourBalancerApply:
    """Tests for applying plans and the full balancing pass."""

    @pytest.fixture
    def config(self):
        return ScheduleConfig(target_hours=20)

    @pytest.fixture
    def balancer(self, config):
        return HourBalancer(config)

    def test_apply_extension_updates_buckets(self, config, balancer):
        days = {
            1: build_day(config, 1, 1, [("E001", ShiftType.MORNING)]),
            2: build_day(config, 2, 2, [("E001", ShiftType.MORNING)]),
        }
        running = {"E001": running_for(days, "E001", config)}
        warnings = balancer.balance(days, [Employee(id="E001")], running)

        assert warnings == []
        shift = days[1].shift_for("E001")
        assert shift.end == time(19)
        assert shift.hours == 10
        assert shift.is_overtime
        stats = running["E001"]
        assert stats.regular_hours == pytest.approx(16.0)
        assert stats.overtime_hours == pytest.approx(6.0)
        assert stats.raw_hours(config) == pytest.approx(20.0)

    def test_apply_reclaim_cancels_rest_day(self, config, balancer):
        days = {
            1: build_day(config, 1, 1, [("E001", ShiftType.MORNING)]),
            2: build_day(config, 2, 2, [("E002", ShiftType.MORNING)]),
        }
        running = {
            "E001": running_for(days, "E001", config, rest_days=[2]),
        }
        warnings = balancer.balance(days, [Employee(id="E001")], running)

        assert running["E001"].rest_days == []
        assert days[2].employee_ids == ["E002", "E001"]
        # Coverage of the touched day is recomputed
        assert days[2].coverage.percentage == 100.0
        assert running["E001"].raw_hours(config) == pytest.approx(17.0)
        assert [w.kind for w in warnings] == [WarningKind.HOURS_SHORTFALL]
        assert warnings[0].employee_id == "E001"

    def test_hours_match_shift_sum_after_balancing(self, config, balancer):
        days = {
            1: build_day(config, 1, 1, [("E001", ShiftType.MORNING), ("E002", ShiftType.AFTERNOON)]),
            2: build_day(config, 2, 2, [("E002", ShiftType.MIDDAY)]),
        }
        running = {
            "E001": running_for(days, "E001", config, rest_days=[2]),
            "E002": running_for(days, "E002", config),
        }
        balancer.balance(days, [Employee(id="E001"), Employee(id="E002")], running)
        for employee_id, stats in running.items():
            total = sum(
                d.shift_for(employee_id).hours
                for d in days.values()
                if d.shift_for(employee_id)
            )
            assert stats.raw_hours(config) == pytest.approx(total)

    def test_small_shortfall_tolerated(self):
        config = ScheduleConfig(target_hours=16.4)
        days = {
            1: build_day(config, 1, 1, [("E001", ShiftType.AFTERNOON)]),
            2: build_day(config, 2, 2, [("E001", ShiftType.AFTERNOON)]),
            3: build_day(config, 3, 3, [("E001", ShiftType.AFTERNOON)]),
        }
        running = {"E001": running_for(days, "E001", config)}
        # 21h worked already, nothing to do
        assert HourBalancer(config).balance(days, [Employee(id="E001")], running) == []

        config = ScheduleConfig(target_hours=7.4)
        days = {1: build_day(config, 1, 1, [("E001", ShiftType.AFTERNOON)])}
        running = {"E001": running_for(days, "E001", config)}
        # 0.4h short with no headroom and no rest days stays silent
        assert HourBalancer(config).balance(days, [Employee(id="E001")], running) == []
