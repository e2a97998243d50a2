"""Main scheduler interface.

This module provides the high-level MonthlyScheduler class that
orchestrates rest-day allocation, daily assignment and hour balancing.
"""

import logging
from typing import Optional

from shiftplan.domain.calendar_rules import classify_month
from shiftplan.domain.calendar_rules import peak_days_for as _peak_days_for
from shiftplan.domain.config import ConfigurationError, ScheduleConfig
from shiftplan.domain.models import (
    Employee,
    EmployeeRunningStats,
    MonthlySchedule,
)
from shiftplan.domain.policies import (
    DefaultRestDayPolicy,
    DefaultStaffingPolicy,
    RestDayPolicy,
    StaffingPolicy,
)
from shiftplan.scheduling.balancer import HourBalancer
from shiftplan.scheduling.daily_assigner import DailyShiftAssigner
from shiftplan.scheduling.rest_days import RestDayAllocator

logger = logging.getLogger(__name__)


def validate_request(month: int, year: int, employees: list[Employee]) -> None:
    """Reject inputs that cannot be scheduled.

    Raises:
        ConfigurationError: On an invalid month/year, an empty roster or
            duplicate employee IDs.
    """
    if not 1 <= month <= 12:
        raise ConfigurationError(f"Month must be 1-12, got {month}")
    if year < 1:
        raise ConfigurationError(f"Year must be >= 1, got {year}")
    if not employees:
        raise ConfigurationError("Employee roster is empty")
    ids = [e.id for e in employees]
    if len(set(ids)) != len(ids):
        raise ConfigurationError("Employee IDs must be unique")


class MonthlyScheduler:
    """High-level scheduler for generating monthly schedules.

    Generation runs in three strictly ordered passes:
    1. Rest days are allocated for every employee
    2. Each day is staffed in calendar order
    3. Hours are balanced toward the monthly target

    Each call works on its own copy of the roster and its own running
    stats, so a scheduler can be reused across months.

    Example:
        >>> scheduler = MonthlyScheduler(ScheduleConfig(target_hours=208))
        >>> schedule = scheduler.generate_schedule(2, 2026, employees)
        >>> len(schedule)
        28
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        staffing_policy: Optional[StaffingPolicy] = None,
        rest_day_policy: Optional[RestDayPolicy] = None,
    ):
        """Initialize scheduler with configuration and policies.

        Args:
            config: Engine configuration.
            staffing_policy: Policy for required headcount per day.
            rest_day_policy: Policy for scoring rest days.
        """
        self.config = config or ScheduleConfig()
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()
        self.rest_day_policy = rest_day_policy or DefaultRestDayPolicy()

        self.rest_day_allocator = RestDayAllocator(self.rest_day_policy)
        self.assigner = DailyShiftAssigner(self.config, self.staffing_policy)
        self.balancer = HourBalancer(self.config)

    def generate_schedule(
        self,
        month: int,
        year: int,
        employees: list[Employee],
    ) -> MonthlySchedule:
        """Generate a complete schedule for a month.

        Args:
            month: Month (1-12).
            year: Year.
            employees: Roster in order.

        Returns:
            MonthlySchedule with one DaySchedule per calendar day.

        Raises:
            ConfigurationError: If the inputs are rejected.
        """
        validate_request(month, year, employees)
        roster = list(employees)
        month_days = classify_month(month, year, self.config)
        logger.info(
            "Generating schedule for %02d/%d: %d employees, %d days",
            month, year, len(roster), len(month_days),
        )

        rest_days = self.rest_day_allocator.allocate(roster, month_days)
        running = {
            e.id: EmployeeRunningStats(employee_id=e.id, rest_days=list(rest_days[e.id]))
            for e in roster
        }

        schedule = MonthlySchedule(month=month, year=year)
        for day in month_days:
            result = self.assigner.assign(day, roster, running)
            schedule.days[day.day] = result.schedule
            schedule.warnings.extend(result.warnings)

        schedule.warnings.extend(
            self.balancer.balance(schedule.days, roster, running)
        )
        schedule.rest_days = {
            employee_id: sorted(stats.rest_days)
            for employee_id, stats in running.items()
        }

        for employee in roster:
            logger.info(
                "%s: %.1fh (target %gh)",
                employee.id,
                running[employee.id].raw_hours(self.config),
                self.config.target_hours,
            )
        return schedule

    def peak_days_for(self, month: int, year: int) -> list[int]:
        """Sorted peak days of a month under this scheduler's config."""
        return _peak_days_for(month, year, self.config)


def generate_schedule(
    month: int,
    year: int,
    employees: list[Employee],
    config: Optional[ScheduleConfig] = None,
) -> MonthlySchedule:
    """Generate a monthly schedule with default policies."""
    return MonthlyScheduler(config).generate_schedule(month, year, employees)


def peak_days_for(
    month: int,
    year: int,
    config: Optional[ScheduleConfig] = None,
) -> list[int]:
    """Sorted peak days of a month."""
    if not 1 <= month <= 12:
        raise ConfigurationError(f"Month must be 1-12, got {month}")
    return _peak_days_for(month, year, config)
