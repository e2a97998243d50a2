"""Validation module for checking generated schedules.

Errors mark a schedule as unusable (missing days, unknown employees).
Warnings flag soft problems (thin staffing, uncovered delivery windows,
hour shortfalls) without affecting validity.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shiftplan.domain.calendar_rules import days_in_month
from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import DaySchedule, Employee, MonthlySchedule
from shiftplan.scheduling.coverage import calculate_coverage, window_covered
from shiftplan.validation.statistics import calculate_employee_stats

logger = logging.getLogger(__name__)

MIN_SHIFTS_PER_DAY = 2
MIN_COVERAGE_PERCENT = 80.0
MIN_TARGET_RATIO = 0.9


class IssueType(Enum):
    """Types of validation issues."""

    # Errors
    EMPTY_SCHEDULE = "empty_schedule"
    MISSING_DAY = "missing_day"
    DAY_OUT_OF_RANGE = "day_out_of_range"
    UNKNOWN_EMPLOYEE = "unknown_employee"
    # Warnings
    UNDERSTAFFED_DAY = "understaffed_day"
    CRITICAL_TIME_UNCOVERED = "critical_time_uncovered"
    LOW_COVERAGE = "low_coverage"
    HOURS_BELOW_TARGET = "hours_below_target"
    OVERTIME_EXCEEDED = "overtime_exceeded"


@dataclass
class ValidationIssue:
    """A single validation error or warning."""

    issue_type: IssueType
    message: str
    day: Optional[int] = None
    employee_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.issue_type.value}]"]
        if self.day is not None:
            parts.append(f"Day {self.day}:")
        if self.employee_id:
            parts.append(f"{self.employee_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def add_error(self, error: ValidationIssue) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: ValidationIssue) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def issues_of(self, issue_type: IssueType) -> list[ValidationIssue]:
        return [i for i in self.errors + self.warnings if i.issue_type is issue_type]


class ScheduleValidator:
    """Validates monthly schedules.

    The validator only reads the schedule; coverage is recomputed from the
    shift lists so externally edited schedules are judged on their shifts.

    Example:
        >>> validator = ScheduleValidator(config)
        >>> result = validator.validate(schedule, roster)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, config: Optional[ScheduleConfig] = None):
        self.config = config or ScheduleConfig()

    def validate(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
    ) -> ValidationResult:
        """Validate a complete monthly schedule.

        Args:
            schedule: The schedule to validate.
            roster: Active employees.

        Returns:
            ValidationResult with is_valid flag, errors and warnings.
        """
        result = ValidationResult(is_valid=True)

        if not schedule.days:
            result.add_error(
                ValidationIssue(
                    issue_type=IssueType.EMPTY_SCHEDULE,
                    message="Schedule has no days",
                )
            )
            return result

        num_days = days_in_month(schedule.month, schedule.year)
        for day in range(1, num_days + 1):
            if day not in schedule.days:
                result.add_error(
                    ValidationIssue(
                        issue_type=IssueType.MISSING_DAY,
                        message="No schedule for this day",
                        day=day,
                    )
                )
        for day in sorted(schedule.days):
            if not 1 <= day <= num_days:
                result.add_error(
                    ValidationIssue(
                        issue_type=IssueType.DAY_OUT_OF_RANGE,
                        message=f"Day is outside 1..{num_days}",
                        day=day,
                    )
                )

        roster_ids = {e.id for e in roster}
        for day_schedule in schedule:
            if 1 <= day_schedule.day <= num_days:
                self._validate_day(day_schedule, roster_ids, result)

        self._validate_hours(schedule, roster, result)

        logger.debug(
            "Validated %02d/%d: %d errors, %d warnings",
            schedule.month, schedule.year, len(result.errors), len(result.warnings),
        )
        return result

    def _validate_day(
        self,
        day_schedule: DaySchedule,
        roster_ids: set[str],
        result: ValidationResult,
    ) -> None:
        """Validate a single day's shifts and coverage."""
        day = day_schedule.day

        for shift in day_schedule.shifts:
            if shift.employee_id not in roster_ids:
                result.add_error(
                    ValidationIssue(
                        issue_type=IssueType.UNKNOWN_EMPLOYEE,
                        message=f"Shift assigned to unknown employee {shift.employee_id}",
                        day=day,
                        employee_id=shift.employee_id,
                    )
                )

        if len(day_schedule.shifts) < MIN_SHIFTS_PER_DAY:
            result.add_warning(
                ValidationIssue(
                    issue_type=IssueType.UNDERSTAFFED_DAY,
                    message=f"Only {len(day_schedule.shifts)} employee(s) scheduled",
                    day=day,
                    details={"shifts": len(day_schedule.shifts)},
                )
            )

        for window in self.config.delivery_windows:
            if not window.applies_on(day_schedule.weekday):
                continue
            if not window_covered(day_schedule.shifts, window):
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.CRITICAL_TIME_UNCOVERED,
                        message=f"Delivery at {window.label} ({window.carrier}) not covered",
                        day=day,
                        details={"window": window.label},
                    )
                )

        coverage = calculate_coverage(
            day_schedule.shifts,
            delivery_windows=self.config.delivery_windows,
            open_hour=self.config.open_hour,
            close_hour=self.config.close_hour,
        )
        if coverage.percentage < MIN_COVERAGE_PERCENT:
            result.add_warning(
                ValidationIssue(
                    issue_type=IssueType.LOW_COVERAGE,
                    message=f"Coverage only {coverage.percentage:.0f}%",
                    day=day,
                    details={"percentage": coverage.percentage},
                )
            )

    def _validate_hours(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
        result: ValidationResult,
    ) -> None:
        """Validate per-employee hour totals."""
        stats = calculate_employee_stats(schedule, roster, self.config)
        floor = self.config.target_hours * MIN_TARGET_RATIO

        for employee_id, employee_stats in stats.items():
            if employee_stats.total_hours < floor:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.HOURS_BELOW_TARGET,
                        message=(
                            f"{employee_stats.total_hours:.1f}h is below "
                            f"{MIN_TARGET_RATIO:.0%} of the {self.config.target_hours:g}h target"
                        ),
                        employee_id=employee_id,
                        details={"total_hours": employee_stats.total_hours},
                    )
                )
            if employee_stats.overtime_hours > self.config.max_overtime_hours:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.OVERTIME_EXCEEDED,
                        message=(
                            f"{employee_stats.overtime_hours:.1f}h overtime exceeds "
                            f"{self.config.max_overtime_hours:g}h"
                        ),
                        employee_id=employee_id,
                        details={"overtime_hours": employee_stats.overtime_hours},
                    )
                )


def validate_schedule(
    schedule: MonthlySchedule,
    roster: list[Employee],
    config: Optional[ScheduleConfig] = None,
) -> ValidationResult:
    """Validate a schedule with a fresh ScheduleValidator."""
    return ScheduleValidator(config).validate(schedule, roster)
