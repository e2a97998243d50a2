"""Per-employee hour statistics derived from a schedule."""

from typing import Optional

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import (
    Employee,
    EmployeeRunningStats,
    EmployeeStats,
    MonthlySchedule,
    split_shift_hours,
)


def calculate_employee_stats(
    schedule: MonthlySchedule,
    roster: list[Employee],
    config: Optional[ScheduleConfig] = None,
) -> dict[str, EmployeeStats]:
    """Recompute hour totals purely from the shift list.

    Uses the same bucketing as generation, so the result matches the
    running totals of a freshly generated schedule. Shifts belonging to
    employees outside the roster are ignored. Calling this twice on the
    same schedule gives the same result.

    Args:
        schedule: Schedule to summarise.
        roster: Employees to report on.
        config: Engine configuration (multipliers).

    Returns:
        Dict mapping employee IDs to EmployeeStats, in roster order.
    """
    config = config or ScheduleConfig()
    totals = {e.id: EmployeeRunningStats(employee_id=e.id) for e in roster}
    shift_counts = {e.id: 0 for e in roster}

    for day_schedule in schedule:
        for shift in day_schedule.shifts:
            running = totals.get(shift.employee_id)
            if running is None:
                continue
            running.add(split_shift_hours(shift.hours, shift.is_holiday, config))
            shift_counts[shift.employee_id] += 1

    return {
        employee_id: EmployeeStats(
            employee_id=employee_id,
            regular_hours=running.regular_hours,
            overtime_hours=running.overtime_hours,
            holiday_hours=running.holiday_hours,
            total_hours=running.raw_hours(config),
            rest_days=tuple(sorted(schedule.rest_days.get(employee_id, ()))),
            shift_count=shift_counts[employee_id],
        )
        for employee_id, running in totals.items()
    }
