"""Hour balancing toward the monthly target.

After the daily pass, employees below the target are topped up in two
ways: existing shifts are extended, then rest days are reclaimed. Each
employee's changes are computed as a ``BalancePlan`` first and applied
afterwards, so the schedule is never mutated while it is being walked.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import (
    DaySchedule,
    Employee,
    EmployeeRunningStats,
    GenerationWarning,
    WarningKind,
    split_shift_hours,
)
from shiftplan.domain.shifts import ShiftType
from shiftplan.scheduling.coverage import coverage_for_config
from shiftplan.scheduling.daily_assigner import cutoff_hour, make_shift

logger = logging.getLogger(__name__)

# Deficits up to this many hours are accepted without reclaiming rest days
SHORTFALL_TOLERANCE_HOURS = 0.5

# Shift added on a reclaimed day, indexed by shifts already on that day
RECLAIM_SHIFTS = (ShiftType.MORNING, ShiftType.AFTERNOON, ShiftType.MIDDAY)

_EPSILON = 1e-9


class BalanceAction(Enum):
    """Kinds of balancing operations."""

    EXTEND = "extend"
    RECLAIM = "reclaim"


@dataclass(frozen=True)
class BalanceOperation:
    """A single planned change to the schedule.

    Attributes:
        action: Extend an existing shift or reclaim a rest day.
        day: Day the change applies to.
        employee_id: Employee affected.
        hours: Hours gained by the change.
        shift_type: Shift added on a reclaimed day.
    """

    action: BalanceAction
    day: int
    employee_id: str
    hours: float
    shift_type: Optional[ShiftType] = None


@dataclass
class BalancePlan:
    """Planned operations for one employee."""

    employee_id: str
    starting_deficit: float
    operations: list[BalanceOperation] = field(default_factory=list)

    @property
    def planned_hours(self) -> float:
        return sum(op.hours for op in self.operations)

    @property
    def remaining_deficit(self) -> float:
        return self.starting_deficit - self.planned_hours

    @property
    def is_empty(self) -> bool:
        return not self.operations


class HourBalancer:
    """Best-effort post-pass pushing employees toward the hour target.

    Example:
        >>> balancer = HourBalancer(config)
        >>> warnings = balancer.balance(days, employees, running)
    """

    def __init__(self, config: Optional[ScheduleConfig] = None):
        self.config = config or ScheduleConfig()

    def balance(
        self,
        days: dict[int, DaySchedule],
        employees: list[Employee],
        running: dict[str, EmployeeRunningStats],
    ) -> list[GenerationWarning]:
        """Plan and apply balancing for every employee in roster order.

        Returns:
            Warnings for employees still short of the target.
        """
        warnings = []
        for employee in employees:
            plan = self.plan(employee.id, days, running[employee.id])
            if not plan.is_empty:
                logger.debug(
                    "%s: deficit %.1fh, %d balancing operations",
                    employee.id, plan.starting_deficit, len(plan.operations),
                )
                self.apply(plan, days, running)

            if plan.remaining_deficit > SHORTFALL_TOLERANCE_HOURS:
                logger.warning(
                    "%s still needs %.1f hours to reach target",
                    employee.id, plan.remaining_deficit,
                )
                warnings.append(
                    GenerationWarning(
                        kind=WarningKind.HOURS_SHORTFALL,
                        message=(
                            f"{employee.id} is {plan.remaining_deficit:.1f}h short of "
                            f"the {self.config.target_hours:g}h target"
                        ),
                        employee_id=employee.id,
                    )
                )
        return warnings

    def plan(
        self,
        employee_id: str,
        days: dict[int, DaySchedule],
        stats: EmployeeRunningStats,
    ) -> BalancePlan:
        """Compute balancing operations without touching the schedule."""
        deficit = self.config.target_hours - stats.raw_hours(self.config)
        plan = BalancePlan(employee_id=employee_id, starting_deficit=deficit)
        if deficit <= _EPSILON:
            return plan

        # Strategy 1: extend existing shifts, earliest day first
        for day in sorted(days):
            if deficit <= _EPSILON:
                break
            day_schedule = days[day]
            shift = day_schedule.shift_for(employee_id)
            if shift is None or shift.hours >= self.config.max_shift_hours:
                continue
            latest_end = 60 * min(
                self.config.extension_cap_hour,
                cutoff_hour(day_schedule.is_super_peak, self.config),
            )
            headroom = (latest_end - shift.end_minutes) / 60
            extra = min(
                self.config.max_extension_hours,
                deficit,
                self.config.max_shift_hours - shift.hours,
                headroom,
            )
            if extra <= _EPSILON:
                continue
            plan.operations.append(
                BalanceOperation(BalanceAction.EXTEND, day, employee_id, extra)
            )
            deficit -= extra

        # Strategy 2: reclaim rest days on days that still have room
        if deficit > SHORTFALL_TOLERANCE_HOURS:
            for day in sorted(stats.rest_days):
                if deficit <= _EPSILON:
                    break
                day_schedule = days.get(day)
                if day_schedule is None or day_schedule.is_sunday:
                    continue
                if len(day_schedule.shifts) >= len(RECLAIM_SHIFTS):
                    continue
                if day_schedule.shift_for(employee_id) is not None:
                    continue
                shift_type = RECLAIM_SHIFTS[len(day_schedule.shifts)]
                hours = self._new_shift(employee_id, shift_type, day_schedule).hours
                if hours <= _EPSILON:
                    continue
                plan.operations.append(
                    BalanceOperation(
                        BalanceAction.RECLAIM, day, employee_id, hours, shift_type
                    )
                )
                deficit -= hours

        return plan

    def apply(
        self,
        plan: BalancePlan,
        days: dict[int, DaySchedule],
        running: dict[str, EmployeeRunningStats],
    ) -> None:
        """Apply a plan, keeping hour buckets and coverage in step."""
        stats = running[plan.employee_id]
        touched = set()

        for op in plan.operations:
            day_schedule = days[op.day]
            if op.action is BalanceAction.EXTEND:
                shift = day_schedule.shift_for(op.employee_id)
                stats.subtract(
                    split_shift_hours(shift.hours, shift.is_holiday, self.config)
                )
                shift.extend(op.hours, self.config.standard_shift_hours)
            else:
                stats.cancel_rest_day(op.day)
                shift = self._new_shift(op.employee_id, op.shift_type, day_schedule)
                day_schedule.shifts.append(shift)
            stats.add(split_shift_hours(shift.hours, shift.is_holiday, self.config))
            touched.add(op.day)

        for day in touched:
            days[day].coverage = coverage_for_config(days[day].shifts, self.config)

    def _new_shift(self, employee_id, shift_type, day_schedule):
        return make_shift(
            employee_id,
            shift_type,
            is_holiday=day_schedule.is_holiday,
            is_super_peak=day_schedule.is_super_peak,
            config=self.config,
        )
