"""Validation module for checking schedules and summarising hours."""

from shiftplan.validation.statistics import calculate_employee_stats
from shiftplan.validation.validator import (
    IssueType,
    ScheduleValidator,
    ValidationIssue,
    ValidationResult,
    validate_schedule,
)

__all__ = [
    "IssueType",
    "ScheduleValidator",
    "ValidationIssue",
    "ValidationResult",
    "calculate_employee_stats",
    "validate_schedule",
]
