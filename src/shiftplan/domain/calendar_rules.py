"""Calendar classification for a scheduling month.

Weekdays in this package follow the warehouse convention
0 = Sunday, 1 = Monday, ..., 6 = Saturday.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Optional

from shiftplan.domain.config import ScheduleConfig

SUNDAY = 0
FIXED_PEAK_DAYS = (15, 25)


@dataclass(frozen=True)
class DayInfo:
    """Classification of a single calendar day.

    Attributes:
        day: Day of month (1-based).
        weekday: Day of week, 0 = Sunday.
        is_peak: Day needs peak staffing.
        is_super_peak: Peak day that may run until the late cutoff.
        is_holiday: Day is a public holiday.
    """

    day: int
    weekday: int
    is_peak: bool
    is_super_peak: bool
    is_holiday: bool

    @property
    def is_sunday(self) -> bool:
        return self.weekday == SUNDAY


def days_in_month(month: int, year: int) -> int:
    """Number of days in a Gregorian month."""
    return calendar.monthrange(year, month)[1]


def day_of_week(day: int, month: int, year: int) -> int:
    """Day of week with 0 = Sunday."""
    return (date(year, month, day).weekday() + 1) % 7


def double_day(month: int) -> int:
    """The month's "double date": 1/1, 2/2, ..., 12/12."""
    return month


def is_double_day(day: int, month: int) -> bool:
    return day == double_day(month)


def is_peak_day(
    day: int,
    month: int,
    year: int,
    custom_peak_days: Iterable[int] = (),
    fixed_peak_days: Iterable[int] = FIXED_PEAK_DAYS,
    include_double_day: bool = True,
) -> bool:
    """Check if a day needs peak staffing."""
    if not 1 <= day <= days_in_month(month, year):
        return False
    if day in set(fixed_peak_days) or day in set(custom_peak_days):
        return True
    return include_double_day and is_double_day(day, month)


def is_super_peak_day(day: int, month: int) -> bool:
    """Double dates and the 15th/25th may run until 22:00."""
    return is_double_day(day, month) or day in FIXED_PEAK_DAYS


def is_holiday(
    day: int,
    month: int,
    holidays: Optional[Mapping[int, Iterable[int]]] = None,
) -> bool:
    """Check a day against a month -> days holiday table."""
    if not holidays:
        return False
    return day in set(holidays.get(month, ()))


def peak_days_for(
    month: int,
    year: int,
    config: Optional[ScheduleConfig] = None,
) -> list[int]:
    """Sorted peak days of a month."""
    config = config or ScheduleConfig()
    return [
        day
        for day in range(1, days_in_month(month, year) + 1)
        if is_peak_day(
            day,
            month,
            year,
            custom_peak_days=config.custom_peak_days,
            fixed_peak_days=config.fixed_peak_days,
            include_double_day=config.double_day_peaks,
        )
    ]


def classify_month(
    month: int,
    year: int,
    config: Optional[ScheduleConfig] = None,
) -> list[DayInfo]:
    """Classify every day of a month once for a generation run."""
    config = config or ScheduleConfig()
    peaks = set(peak_days_for(month, year, config))
    holidays = set(config.holidays_in(month))
    return [
        DayInfo(
            day=day,
            weekday=day_of_week(day, month, year),
            is_peak=day in peaks,
            is_super_peak=day in peaks and is_super_peak_day(day, month),
            is_holiday=day in holidays,
        )
        for day in range(1, days_in_month(month, year) + 1)
    ]
