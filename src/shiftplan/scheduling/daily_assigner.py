"""Daily shift assignment.

For each day this module:
1. Determines who is available (not resting)
2. Calls resting employees back in when a peak day is short-staffed
3. Picks a shift-type set that fits the headcount and day type
4. Gives the first slots to the employees with the fewest hours so far
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from shiftplan.domain.calendar_rules import DayInfo
from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import (
    DaySchedule,
    Employee,
    EmployeeRunningStats,
    GenerationWarning,
    ShiftAssignment,
    WarningKind,
    split_shift_hours,
)
from shiftplan.domain.policies import DefaultStaffingPolicy, StaffingPolicy
from shiftplan.domain.shifts import (
    MINIMAL_SHIFTS,
    PEAK_SHIFTS,
    STANDARD_SHIFTS,
    SUPER_PEAK_SHIFTS,
    ShiftType,
    get_template,
)
from shiftplan.scheduling.coverage import coverage_for_config

logger = logging.getLogger(__name__)


def cutoff_hour(is_super_peak: bool, config: ScheduleConfig) -> int:
    """Latest hour a shift may end on a day."""
    if is_super_peak:
        return config.super_peak_cutoff_hour
    return config.normal_cutoff_hour


def make_shift(
    employee_id: str,
    shift_type: ShiftType,
    is_holiday: bool,
    is_super_peak: bool,
    config: ScheduleConfig,
) -> ShiftAssignment:
    """Create a shift from its template, clamped to the day's cutoff."""
    shift = ShiftAssignment.from_template(
        employee_id,
        get_template(shift_type),
        is_holiday=is_holiday,
        standard_hours=config.standard_shift_hours,
    )
    if not is_super_peak:
        shift.clamp_end(config.normal_cutoff_hour, config.standard_shift_hours)
    return shift


@dataclass
class DayAssignment:
    """Result of assigning one day.

    Attributes:
        schedule: The populated day schedule.
        called_in: Employees whose rest day was cancelled for this day.
        warnings: Soft issues found while assigning.
    """

    schedule: DaySchedule
    called_in: list[str] = field(default_factory=list)
    warnings: list[GenerationWarning] = field(default_factory=list)


class DailyShiftAssigner:
    """Assigns shifts for one day at a time.

    The assigner mutates the running stats it is given: hours are booked
    as shifts are created and rest days are cancelled on call-in, so later
    days see up-to-date totals.
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        staffing_policy: Optional[StaffingPolicy] = None,
    ):
        self.config = config or ScheduleConfig()
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()

    def assign(
        self,
        day: DayInfo,
        employees: list[Employee],
        running: dict[str, EmployeeRunningStats],
    ) -> DayAssignment:
        """Build the schedule for a day.

        Args:
            day: Classification of the day.
            employees: Roster in order.
            running: Running stats per employee ID (mutated).

        Returns:
            DayAssignment with the day schedule and any warnings.
        """
        result = DayAssignment(
            schedule=DaySchedule(
                day=day.day,
                weekday=day.weekday,
                is_peak=day.is_peak,
                is_super_peak=day.is_super_peak,
                is_holiday=day.is_holiday,
            )
        )

        available = [e.id for e in employees if not running[e.id].is_resting(day.day)]
        required = self.staffing_policy.required_employees(day)

        if day.is_peak and len(available) < required:
            result.called_in = self.emergency_call_in(
                day, employees, available, required, running
            )
            for employee_id in result.called_in:
                result.warnings.append(
                    GenerationWarning(
                        kind=WarningKind.EMERGENCY_CALL_IN,
                        message=f"{employee_id} called in on peak day (rest day cancelled)",
                        day=day.day,
                        employee_id=employee_id,
                    )
                )

        count = min(required, len(available))
        if count < required:
            logger.warning(
                "Day %d: only %d of %d required employees available",
                day.day, count, required,
            )
            result.warnings.append(
                GenerationWarning(
                    kind=WarningKind.UNDERSTAFFED_DAY,
                    message=f"Only {count} of {required} required employees available",
                    day=day.day,
                )
            )

        shift_types = self.select_shift_types(count, day)

        # Fewest hours first; sorted() is stable so ties keep roster order
        ordered = sorted(
            available, key=lambda emp_id: running[emp_id].raw_hours(self.config)
        )

        for index, employee_id in enumerate(ordered[:count]):
            shift = make_shift(
                employee_id,
                shift_types[index % len(shift_types)],
                is_holiday=day.is_holiday,
                is_super_peak=day.is_super_peak,
                config=self.config,
            )
            result.schedule.shifts.append(shift)
            running[employee_id].add(
                split_shift_hours(shift.hours, shift.is_holiday, self.config)
            )

        result.schedule.coverage = coverage_for_config(
            result.schedule.shifts, self.config
        )
        return result

    def emergency_call_in(
        self,
        day: DayInfo,
        employees: list[Employee],
        available: list[str],
        required: int,
        running: dict[str, EmployeeRunningStats],
    ) -> list[str]:
        """Cancel rest days in roster order until the day is staffed.

        ``available`` is extended in place.

        Returns:
            IDs of the employees called in.
        """
        logger.warning(
            "Day %d is a peak day with only %d of %d employees; calling in",
            day.day, len(available), required,
        )
        called_in = []
        for employee in employees:
            if len(available) >= required:
                break
            stats = running[employee.id]
            if stats.is_resting(day.day):
                stats.cancel_rest_day(day.day)
                available.append(employee.id)
                called_in.append(employee.id)
                logger.info("Called in %s on peak day %d", employee.id, day.day)
        return called_in

    def select_shift_types(self, count: int, day: DayInfo) -> tuple[ShiftType, ...]:
        """Shift types for the number of employees actually working.

        Three or more people rotate three shifts (extended ones on
        super-peak days); one or two people take morning and afternoon so
        the warehouse stays covered until closing.
        """
        if count <= 0:
            return ()
        if count >= 3:
            if day.is_super_peak:
                return SUPER_PEAK_SHIFTS if self.config.super_peak_enabled else PEAK_SHIFTS
            return STANDARD_SHIFTS
        return MINIMAL_SHIFTS
