"""Policy definitions for scheduling rules.

This module contains configurable policies for staffing levels and
rest-day preferences. Policies are kept separate from the scheduling
engine to allow independent testing and easy modification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shiftplan.domain.calendar_rules import DayInfo


class StaffingPolicy(ABC):
    """Abstract base class for daily headcount rules."""

    @abstractmethod
    def required_employees(self, day: DayInfo) -> int:
        """Number of employees a day should be staffed with."""
        pass


class RestDayPolicy(ABC):
    """Abstract base class for rest-day preference scoring."""

    @abstractmethod
    def preferred_weekday(self, employee_index: int) -> int:
        """Weekday (0 = Sunday) an employee prefers to rest on.

        Args:
            employee_index: Position of the employee in the roster.
        """
        pass

    @abstractmethod
    def score(self, day: DayInfo, preferred_weekday: int) -> int:
        """Score a day as a rest day. Higher is a better day to rest."""
        pass


@dataclass
class DefaultStaffingPolicy(StaffingPolicy):
    """Default staffing levels.

    - Peak days: 3 employees
    - Sundays: 2 employees
    - Other days: 3 employees (three rotating shifts)

    Peak takes precedence over Sunday.
    """

    peak_employees: int = 3
    sunday_employees: int = 2
    weekday_employees: int = 3

    def required_employees(self, day: DayInfo) -> int:
        if day.is_peak:
            return self.peak_employees
        if day.is_sunday:
            return self.sunday_employees
        return self.weekday_employees


@dataclass
class DefaultRestDayPolicy(RestDayPolicy):
    """Default rest-day scoring.

    Peak days are heavily penalized, holidays avoided, each employee's
    preferred weekday is staggered across the roster, Sundays are avoided
    because fewer people work them anyway, and Monday-Thursday get a small
    bonus.
    """

    not_peak_bonus: int = 30
    peak_penalty: int = -50
    not_holiday_bonus: int = 20
    preferred_weekday_bonus: int = 10
    not_sunday_bonus: int = 5
    midweek_bonus: int = 3
    weekday_offset: int = 2

    def preferred_weekday(self, employee_index: int) -> int:
        return (employee_index + self.weekday_offset) % 7

    def score(self, day: DayInfo, preferred_weekday: int) -> int:
        score = self.peak_penalty if day.is_peak else self.not_peak_bonus
        if not day.is_holiday:
            score += self.not_holiday_bonus
        if day.weekday == preferred_weekday:
            score += self.preferred_weekday_bonus
        if not day.is_sunday:
            score += self.not_sunday_bonus
        if 1 <= day.weekday <= 4:
            score += self.midweek_bonus
        return score
