"""Coverage calculation for a day's shift list."""

from typing import Iterable, Optional

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import CoverageSummary, ShiftAssignment
from shiftplan.domain.shifts import DEFAULT_DELIVERY_WINDOWS, DeliveryWindow


def covered_hours(shifts: Iterable[ShiftAssignment]) -> frozenset[int]:
    """Clock hours whose start (h:00) falls inside someone's work segment."""
    hours = set()
    for shift in shifts:
        for seg_start, seg_end in shift.work_segments():
            first_hour = -(-seg_start // 60)  # ceil
            for hour in range(first_hour, 24):
                if hour * 60 >= seg_end:
                    break
                hours.add(hour)
    return frozenset(hours)


def window_covered(
    shifts: Iterable[ShiftAssignment],
    window: DeliveryWindow,
) -> bool:
    """True when a single work segment spans the whole delivery window."""
    for shift in shifts:
        for seg_start, seg_end in shift.work_segments():
            if seg_start <= window.start_minutes and window.end_minutes <= seg_end:
                return True
    return False


def calculate_coverage(
    shifts: Iterable[ShiftAssignment],
    delivery_windows: tuple[DeliveryWindow, ...] = DEFAULT_DELIVERY_WINDOWS,
    open_hour: int = 8,
    close_hour: int = 20,
) -> CoverageSummary:
    """Derive the coverage summary of a shift list.

    Args:
        shifts: Shifts worked on the day.
        delivery_windows: Carrier windows to flag.
        open_hour: Start of the reference window.
        close_hour: End of the reference window (exclusive).

    Returns:
        CoverageSummary whose percentage only counts hours inside the
        reference window, so it never exceeds 100.
    """
    shifts = list(shifts)
    hours = covered_hours(shifts)
    critical = {w.label: window_covered(shifts, w) for w in delivery_windows}
    window = close_hour - open_hour
    in_window = sum(1 for h in hours if open_hour <= h < close_hour)
    return CoverageSummary(
        hours=hours,
        critical=critical,
        percentage=in_window / window * 100 if window else 0.0,
    )


def coverage_for_config(
    shifts: Iterable[ShiftAssignment],
    config: Optional[ScheduleConfig] = None,
) -> CoverageSummary:
    """Calculate coverage with the windows and operating hours of a config."""
    config = config or ScheduleConfig()
    return calculate_coverage(
        shifts,
        delivery_windows=config.delivery_windows,
        open_hour=config.open_hour,
        close_hour=config.close_hour,
    )
