"""Rest-day allocation for a scheduling month.

Each employee gets roughly one rest day per calendar week. The month is
split into 7-day windows and the best-scoring day of each window is taken
until the employee's quota is reached.
"""

import logging
from typing import Optional

from shiftplan.domain.calendar_rules import DayInfo
from shiftplan.domain.models import Employee
from shiftplan.domain.policies import DefaultRestDayPolicy, RestDayPolicy

logger = logging.getLogger(__name__)


def rest_day_quota(num_days: int) -> int:
    """Rest days owed for a month: one per full week."""
    return num_days // 7


def week_windows(num_days: int) -> list[range]:
    """Split a month into consecutive windows of at most 7 days."""
    return [
        range(start, min(start + 6, num_days) + 1)
        for start in range(1, num_days + 1, 7)
    ]


class RestDayAllocator:
    """Greedy per-employee rest-day allocation.

    Employees are handled independently; there is no attempt to spread
    rest days across the roster beyond the staggered preferred weekday.

    Example:
        >>> allocator = RestDayAllocator()
        >>> rest = allocator.allocate(employees, classify_month(3, 2025))
        >>> rest["E001"]
        [4, 11, 18, 24]
    """

    def __init__(self, policy: Optional[RestDayPolicy] = None):
        self.policy = policy or DefaultRestDayPolicy()

    def allocate(
        self,
        employees: list[Employee],
        month_days: list[DayInfo],
    ) -> dict[str, list[int]]:
        """Choose sorted rest days for every employee.

        Args:
            employees: Roster in order; position drives the preferred weekday.
            month_days: Classification of every day of the month.

        Returns:
            Dict mapping employee IDs to sorted rest-day numbers.
        """
        result = {}
        for index, employee in enumerate(employees):
            rest_days = self.allocate_for(index, month_days)
            result[employee.id] = rest_days
            logger.debug(
                "%s: %d rest days - %s",
                employee.id,
                len(rest_days),
                ", ".join(str(d) for d in rest_days),
            )
        return result

    def allocate_for(
        self,
        employee_index: int,
        month_days: list[DayInfo],
    ) -> list[int]:
        """Choose rest days for the employee at a roster position."""
        quota = rest_day_quota(len(month_days))
        preferred = self.policy.preferred_weekday(employee_index)
        by_day = {info.day: info for info in month_days}

        rest_days = []
        for window in week_windows(len(month_days)):
            if len(rest_days) >= quota:
                break
            best_day = None
            best_score = float("-inf")
            for day in window:
                score = self.policy.score(by_day[day], preferred)
                # Strict comparison keeps the earliest day on ties
                if score > best_score:
                    best_score = score
                    best_day = day
            if best_day is not None:
                rest_days.append(best_day)

        return sorted(rest_days)
