"""Scheduling engine for generating monthly schedules."""

from shiftplan.scheduling.analysis import (
    StaffingAction,
    StaffingAnalysis,
    analyze_staffing,
)
from shiftplan.scheduling.balancer import (
    BalanceAction,
    BalanceOperation,
    BalancePlan,
    HourBalancer,
)
from shiftplan.scheduling.coverage import calculate_coverage, coverage_for_config
from shiftplan.scheduling.daily_assigner import DailyShiftAssigner, DayAssignment
from shiftplan.scheduling.rest_days import RestDayAllocator, rest_day_quota
from shiftplan.scheduling.scheduler import (
    MonthlyScheduler,
    generate_schedule,
    peak_days_for,
)

__all__ = [
    # Core scheduler
    "MonthlyScheduler",
    "generate_schedule",
    "peak_days_for",
    # Passes
    "RestDayAllocator",
    "rest_day_quota",
    "DailyShiftAssigner",
    "DayAssignment",
    "HourBalancer",
    "BalanceAction",
    "BalanceOperation",
    "BalancePlan",
    # Coverage
    "calculate_coverage",
    "coverage_for_config",
    # Analysis
    "StaffingAction",
    "StaffingAnalysis",
    "analyze_staffing",
]
