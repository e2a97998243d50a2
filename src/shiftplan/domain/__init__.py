"""Domain models and business rules for monthly scheduling."""

from shiftplan.domain.calendar_rules import (
    DayInfo,
    classify_month,
    day_of_week,
    days_in_month,
    is_holiday,
    is_peak_day,
    is_super_peak_day,
    peak_days_for,
)
from shiftplan.domain.config import (
    ConfigurationError,
    ScheduleConfig,
)
from shiftplan.domain.models import (
    CoverageSummary,
    DaySchedule,
    Employee,
    EmployeeRunningStats,
    EmployeeStats,
    GenerationWarning,
    HourBuckets,
    MonthlySchedule,
    ShiftAssignment,
    WarningKind,
    split_shift_hours,
)
from shiftplan.domain.policies import (
    DefaultRestDayPolicy,
    DefaultStaffingPolicy,
    RestDayPolicy,
    StaffingPolicy,
)
from shiftplan.domain.shifts import (
    SHIFT_CATALOG,
    BreakWindow,
    DeliveryWindow,
    ShiftKind,
    ShiftTemplate,
    ShiftType,
    get_template,
)

__all__ = [
    # Models
    "CoverageSummary",
    "DaySchedule",
    "Employee",
    "EmployeeRunningStats",
    "EmployeeStats",
    "GenerationWarning",
    "HourBuckets",
    "MonthlySchedule",
    "ShiftAssignment",
    "WarningKind",
    "split_shift_hours",
    # Calendar
    "DayInfo",
    "classify_month",
    "day_of_week",
    "days_in_month",
    "is_holiday",
    "is_peak_day",
    "is_super_peak_day",
    "peak_days_for",
    # Configuration
    "ConfigurationError",
    "ScheduleConfig",
    # Shift catalog
    "SHIFT_CATALOG",
    "BreakWindow",
    "DeliveryWindow",
    "ShiftKind",
    "ShiftTemplate",
    "ShiftType",
    "get_template",
    # Policies
    "DefaultRestDayPolicy",
    "DefaultStaffingPolicy",
    "RestDayPolicy",
    "StaffingPolicy",
]
