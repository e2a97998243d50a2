"""Domain models for monthly warehouse scheduling.

This module contains the core data structures shared by the engine:
employees, shift assignments, day schedules, coverage summaries, hour
bookkeeping and the monthly schedule output.
"""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Iterator, Optional

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.shifts import BreakWindow, ShiftTemplate, ShiftType


def to_minutes(t: time) -> int:
    """Minutes from midnight."""
    return t.hour * 60 + t.minute


def from_minutes(minutes: int) -> time:
    """Clock time from minutes after midnight (24:00 is clamped to 23:59)."""
    minutes = max(0, min(minutes, 24 * 60 - 1))
    hours, mins = divmod(minutes, 60)
    return time(hour=hours, minute=mins)


@dataclass(frozen=True)
class Employee:
    """A member of the warehouse roster.

    Attributes:
        id: Unique identifier.
        name: Display name.
    """

    id: str
    name: str = ""

    def __post_init__(self):
        if not self.name:
            object.__setattr__(self, "name", self.id)


@dataclass(frozen=True)
class HourBuckets:
    """Weighted hours a shift contributes to each pay bucket."""

    regular: float = 0.0
    overtime: float = 0.0
    holiday: float = 0.0


def split_shift_hours(
    hours: float,
    is_holiday: bool,
    config: ScheduleConfig,
) -> HourBuckets:
    """Split a shift's hours into weighted pay buckets.

    Holiday hours are weighted entirely at the holiday multiplier. On other
    days the first ``standard_shift_hours`` are regular and the remainder is
    weighted at the overtime multiplier.
    """
    if is_holiday:
        return HourBuckets(holiday=hours * config.holiday_multiplier)
    if hours > config.standard_shift_hours:
        extra = hours - config.standard_shift_hours
        return HourBuckets(
            regular=config.standard_shift_hours,
            overtime=extra * config.overtime_multiplier,
        )
    return HourBuckets(regular=hours)


@dataclass
class ShiftAssignment:
    """A shift worked by one employee on one day.

    Attributes:
        employee_id: ID of the employee.
        shift_type: Template the shift was created from.
        start: Resolved start time.
        end: Resolved end time (may be clamped or extended).
        hours: Paid hours (may be adjusted by clamping or balancing).
        is_overtime: Hours exceed a standard shift.
        is_holiday: Shift falls on a public holiday.
        description: Human-readable shift name.
        break_window: Unpaid break, if any.
        coverage: The template's (pre-break, post-break) hour ranges.
    """

    employee_id: str
    shift_type: ShiftType
    start: time
    end: time
    hours: float
    is_overtime: bool = False
    is_holiday: bool = False
    description: str = ""
    break_window: Optional[BreakWindow] = None
    coverage: tuple[tuple[int, int], ...] = ()

    @classmethod
    def from_template(
        cls,
        employee_id: str,
        template: ShiftTemplate,
        is_holiday: bool = False,
        standard_hours: float = 8.0,
    ) -> "ShiftAssignment":
        """Create an assignment with the template's nominal times."""
        return cls(
            employee_id=employee_id,
            shift_type=template.shift_type,
            start=template.start,
            end=template.end,
            hours=template.actual_hours,
            is_overtime=template.actual_hours > standard_hours,
            is_holiday=is_holiday,
            description=template.description,
            break_window=template.break_window,
            coverage=template.coverage,
        )

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    def work_segments(self) -> list[tuple[int, int]]:
        """On-floor intervals in minutes, split around the break.

        Shifts from the catalog use the template's coverage ranges. The
        post-break range follows the actual end time, so clamped and
        extended shifts are measured as worked.
        """
        if self.coverage:
            (pre_start, pre_end), (post_start, _) = self.coverage
            candidates = [
                (
                    max(self.start_minutes, pre_start * 60),
                    min(pre_end * 60, self.end_minutes),
                ),
                (max(self.start_minutes, post_start * 60), self.end_minutes),
            ]
            return [(start, end) for start, end in candidates if end > start]
        if self.break_window is None:
            return [(self.start_minutes, self.end_minutes)]
        segments = []
        pre_end = min(self.break_window.start_minutes, self.end_minutes)
        if pre_end > self.start_minutes:
            segments.append((self.start_minutes, pre_end))
        post_start = max(self.break_window.end_minutes, self.start_minutes)
        if self.end_minutes > post_start:
            segments.append((post_start, self.end_minutes))
        return segments

    def clamp_end(self, cutoff_hour: int, standard_hours: float = 8.0) -> float:
        """Pull the end time back to a cutoff, dropping the excess hours.

        Returns:
            Hours removed (0 if the shift already ends by the cutoff).
        """
        cutoff = cutoff_hour * 60
        if self.end_minutes <= cutoff:
            return 0.0
        over = (self.end_minutes - cutoff) / 60
        removed = min(over, self.hours)
        self.end = from_minutes(cutoff)
        self.hours = max(0.0, self.hours - over)
        self.is_overtime = self.hours > standard_hours
        return removed

    def extend(self, hours: float, standard_hours: float = 8.0) -> None:
        """Push the end time forward and add paid hours."""
        self.end = from_minutes(self.end_minutes + round(hours * 60))
        self.hours += hours
        self.is_overtime = self.hours > standard_hours

    def __repr__(self) -> str:
        return (
            f"ShiftAssignment({self.employee_id} {self.shift_type.value} "
            f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')} "
            f"{self.hours:g}h)"
        )


@dataclass(frozen=True)
class CoverageSummary:
    """Derived coverage of a day.

    Attributes:
        hours: Clock hours (0-23) with someone on the floor.
        critical: Delivery window label -> covered.
        percentage: Share of the reference operating window covered.
    """

    hours: frozenset[int] = frozenset()
    critical: dict[str, bool] = field(default_factory=dict)
    percentage: float = 0.0

    @property
    def sorted_hours(self) -> list[int]:
        return sorted(self.hours)


@dataclass
class DaySchedule:
    """Schedule for a single calendar day.

    Attributes:
        day: Day of month.
        weekday: Day of week, 0 = Sunday.
        shifts: Ordered shift assignments.
        is_peak: Day needed peak staffing.
        is_super_peak: Peak day that may run until the late cutoff.
        is_holiday: Day is a public holiday.
        coverage: Coverage derived from ``shifts``.
    """

    day: int
    weekday: int
    shifts: list[ShiftAssignment] = field(default_factory=list)
    is_peak: bool = False
    is_super_peak: bool = False
    is_holiday: bool = False
    coverage: CoverageSummary = field(default_factory=CoverageSummary)

    @property
    def is_sunday(self) -> bool:
        return self.weekday == 0

    @property
    def employee_ids(self) -> list[str]:
        return [s.employee_id for s in self.shifts]

    def shift_for(self, employee_id: str) -> Optional[ShiftAssignment]:
        """Get an employee's shift on this day, if any."""
        for shift in self.shifts:
            if shift.employee_id == employee_id:
                return shift
        return None


@dataclass
class EmployeeRunningStats:
    """Hour totals tracked for an employee during generation.

    Overtime and holiday hours are stored multiplier-weighted.
    """

    employee_id: str
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    holiday_hours: float = 0.0
    rest_days: list[int] = field(default_factory=list)

    def add(self, buckets: HourBuckets) -> None:
        self.regular_hours += buckets.regular
        self.overtime_hours += buckets.overtime
        self.holiday_hours += buckets.holiday

    def subtract(self, buckets: HourBuckets) -> None:
        self.regular_hours -= buckets.regular
        self.overtime_hours -= buckets.overtime
        self.holiday_hours -= buckets.holiday

    def raw_hours(self, config: ScheduleConfig) -> float:
        """Hours actually worked, with multipliers normalized out."""
        return (
            self.regular_hours
            + self.overtime_hours / config.overtime_multiplier
            + self.holiday_hours / config.holiday_multiplier
        )

    def is_resting(self, day: int) -> bool:
        return day in self.rest_days

    def cancel_rest_day(self, day: int) -> None:
        """Turn a rest day back into a work day."""
        if day in self.rest_days:
            self.rest_days.remove(day)


@dataclass(frozen=True)
class EmployeeStats:
    """Per-employee totals for reporting."""

    employee_id: str
    regular_hours: float
    overtime_hours: float
    holiday_hours: float
    total_hours: float
    rest_days: tuple[int, ...]
    shift_count: int


class WarningKind(Enum):
    """Kinds of in-band warnings raised while generating."""

    EMERGENCY_CALL_IN = "emergency_call_in"
    UNDERSTAFFED_DAY = "understaffed_day"
    HOURS_SHORTFALL = "hours_shortfall"


@dataclass(frozen=True)
class GenerationWarning:
    """A soft issue found during generation."""

    kind: WarningKind
    message: str
    day: Optional[int] = None
    employee_id: Optional[str] = None

    def __str__(self) -> str:
        parts = [f"[{self.kind.value}]"]
        if self.day is not None:
            parts.append(f"Day {self.day}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class MonthlySchedule:
    """Complete schedule output for a month.

    Attributes:
        month: Month (1-12).
        year: Year.
        days: Day number -> DaySchedule.
        rest_days: Employee ID -> finalized rest days.
        warnings: Soft issues found during generation.
    """

    month: int
    year: int
    days: dict[int, DaySchedule] = field(default_factory=dict)
    rest_days: dict[str, list[int]] = field(default_factory=dict)
    warnings: list[GenerationWarning] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DaySchedule]:
        """Iterate day schedules in calendar order."""
        for day in sorted(self.days):
            yield self.days[day]

    def __getitem__(self, day: int) -> DaySchedule:
        return self.days[day]

    def shifts_for(self, employee_id: str) -> list[tuple[int, ShiftAssignment]]:
        """All (day, shift) pairs worked by an employee."""
        result = []
        for day_schedule in self:
            shift = day_schedule.shift_for(employee_id)
            if shift is not None:
                result.append((day_schedule.day, shift))
        return result

    def total_hours(self) -> float:
        return sum(s.hours for d in self.days.values() for s in d.shifts)
