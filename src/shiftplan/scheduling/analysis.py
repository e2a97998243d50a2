"""Staffing analysis for a scheduling month.

Estimates how many employees a month needs from its coverage hours and
recommends hiring, reducing or keeping the current roster size.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shiftplan.domain.calendar_rules import (
    days_in_month,
    is_super_peak_day,
    peak_days_for,
)
from shiftplan.domain.config import ConfigurationError, ScheduleConfig

# Warehouse hours covered per day
NORMAL_DAY_HOURS = 12
SUPER_PEAK_DAY_HOURS = 14

# Minimum people on the floor per day, used as the analysis baseline
BASELINE_EMPLOYEES_PER_DAY = 2


class StaffingAction(Enum):
    """Recommended roster change."""

    HIRE = "hire"
    REDUCE = "reduce"
    MAINTAIN = "maintain"


@dataclass(frozen=True)
class StaffingAnalysis:
    """Outcome of a staffing analysis.

    Attributes:
        month: Month analysed.
        year: Year analysed.
        current: Current roster size.
        optimal: Suggested roster size.
        action: Recommended change.
        reason: Human-readable explanation of the recommendation.
        total_hours: Hours of work the month needs.
        avg_hours_per_employee: Hours per person with the current roster.
        overtime_risk: Hours per person above the monthly target.
        peak_days: Sorted peak days of the month.
    """

    month: int
    year: int
    current: int
    optimal: int
    action: StaffingAction
    reason: str
    total_hours: float
    avg_hours_per_employee: float
    overtime_risk: float
    peak_days: list[int] = field(default_factory=list)

    def has_high_overtime_risk(self, threshold: float) -> bool:
        return self.overtime_risk > threshold


def required_hours(month: int, year: int) -> float:
    """Hours of work a month needs at baseline staffing."""
    total = sum(
        SUPER_PEAK_DAY_HOURS if is_super_peak_day(day, month) else NORMAL_DAY_HOURS
        for day in range(1, days_in_month(month, year) + 1)
    )
    return float(total * BASELINE_EMPLOYEES_PER_DAY)


def analyze_staffing(
    month: int,
    year: int,
    roster_size: int,
    config: Optional[ScheduleConfig] = None,
) -> StaffingAnalysis:
    """Recommend a roster size for a month.

    Args:
        month: Month (1-12).
        year: Year.
        roster_size: Current number of employees.
        config: Engine configuration (target hours and peak days).

    Returns:
        StaffingAnalysis with the recommendation.

    Raises:
        ConfigurationError: On an invalid month or a non-positive roster size.
    """
    config = config or ScheduleConfig()
    if not 1 <= month <= 12:
        raise ConfigurationError(f"Month must be 1-12, got {month}")
    if roster_size <= 0:
        raise ConfigurationError(f"Roster size must be positive, got {roster_size}")

    total = required_hours(month, year)
    optimal = math.ceil(total / config.target_hours)

    if optimal > roster_size:
        action = StaffingAction.HIRE
        reason = (
            f"Hire {optimal - roster_size} more employee(s) to keep everyone "
            f"near {config.target_hours:g}h"
        )
    elif optimal < roster_size - 1:
        action = StaffingAction.REDUCE
        reason = f"Roster could shrink by {roster_size - optimal} to reduce cost"
    else:
        action = StaffingAction.MAINTAIN
        reason = "Current roster size fits the month"

    avg = total / roster_size
    return StaffingAnalysis(
        month=month,
        year=year,
        current=roster_size,
        optimal=optimal,
        action=action,
        reason=reason,
        total_hours=total,
        avg_hours_per_employee=avg,
        overtime_risk=avg - config.target_hours,
        peak_days=peak_days_for(month, year, config),
    )
