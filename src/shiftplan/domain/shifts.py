"""Shift catalog and delivery windows.

The catalog is a read-only table of shift templates. Standard shifts span
nine clock hours with a one-hour break (eight paid hours), peak variants
add an hour and super-peak variants reach 22:00 with ten paid hours.
"""

from dataclasses import dataclass
from datetime import time
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class ShiftType(Enum):
    """Identifiers of the shift templates."""

    MORNING = "morning"
    MIDDAY = "midday"
    AFTERNOON = "afternoon"
    PEAK_MORNING = "peak_morning"
    PEAK_MIDDAY = "peak_midday"
    PEAK_AFTERNOON = "peak_afternoon"
    SUPER_PEAK_MORNING = "super_peak_morning"
    SUPER_PEAK_MIDDAY = "super_peak_midday"
    SUPER_PEAK_AFTERNOON = "super_peak_afternoon"


class ShiftKind(Enum):
    """Family a shift template belongs to."""

    STANDARD = "standard"
    PEAK = "peak"
    SUPER_PEAK = "super_peak"


@dataclass(frozen=True)
class BreakWindow:
    """Unpaid break inside a shift.

    Attributes:
        start: Clock time the break starts.
        end: Clock time the break ends.
    """

    start: time
    end: time

    @property
    def start_minutes(self) -> int:
        return self.start.hour * 60 + self.start.minute

    @property
    def end_minutes(self) -> int:
        return self.end.hour * 60 + self.end.minute

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


@dataclass(frozen=True)
class ShiftTemplate:
    """Static definition of a shift.

    Attributes:
        shift_type: Catalog key of the template.
        start: Clock time the shift starts.
        end: Clock time the shift ends.
        actual_hours: Paid hours (shift span minus break).
        kind: Standard, peak or super-peak family.
        description: Human-readable name.
        break_window: Break inside the shift, if any.
        coverage: Either empty or exactly two half-open hour ranges
            (pre-break, post-break).
    """

    shift_type: ShiftType
    start: time
    end: time
    actual_hours: float
    kind: ShiftKind
    description: str
    break_window: Optional[BreakWindow] = None
    coverage: tuple[tuple[int, int], ...] = ()

    def __post_init__(self):
        if len(self.coverage) not in (0, 2):
            raise ValueError(
                f"Shift {self.shift_type.value} must have zero or two coverage "
                f"ranges, got {len(self.coverage)}"
            )
        for start_hour, end_hour in self.coverage:
            if not 0 <= start_hour < end_hour <= 24:
                raise ValueError(
                    f"Shift {self.shift_type.value} has invalid coverage range "
                    f"[{start_hour}, {end_hour})"
                )

    @property
    def is_peak(self) -> bool:
        """True for peak and super-peak variants."""
        return self.kind is not ShiftKind.STANDARD

    @property
    def end_hour(self) -> int:
        return self.end.hour


def _template(
    shift_type: ShiftType,
    start: int,
    end: int,
    break_start: int,
    hours: float,
    kind: ShiftKind,
    description: str,
) -> ShiftTemplate:
    """Build a template whose one-hour break starts at ``break_start``."""
    return ShiftTemplate(
        shift_type=shift_type,
        start=time(start),
        end=time(end),
        actual_hours=hours,
        kind=kind,
        description=description,
        break_window=BreakWindow(time(break_start), time(break_start + 1)),
        coverage=((start, break_start), (break_start + 1, end)),
    )


SHIFT_CATALOG: Mapping[ShiftType, ShiftTemplate] = MappingProxyType({
    template.shift_type: template
    for template in (
        _template(ShiftType.MORNING, 8, 17, 12, 8, ShiftKind.STANDARD, "Morning shift"),
        _template(ShiftType.MIDDAY, 10, 19, 14, 8, ShiftKind.STANDARD, "Midday shift"),
        _template(ShiftType.AFTERNOON, 12, 21, 16, 8, ShiftKind.STANDARD, "Afternoon shift"),
        _template(ShiftType.PEAK_MORNING, 8, 18, 12, 9, ShiftKind.PEAK, "Extended morning shift"),
        _template(ShiftType.PEAK_MIDDAY, 9, 19, 13, 9, ShiftKind.PEAK, "Extended midday shift"),
        _template(ShiftType.PEAK_AFTERNOON, 11, 21, 15, 9, ShiftKind.PEAK, "Extended afternoon shift"),
        _template(
            ShiftType.SUPER_PEAK_MORNING, 8, 19, 12, 10,
            ShiftKind.SUPER_PEAK, "Super-peak morning shift",
        ),
        _template(
            ShiftType.SUPER_PEAK_MIDDAY, 10, 21, 14, 10,
            ShiftKind.SUPER_PEAK, "Super-peak midday shift",
        ),
        _template(
            ShiftType.SUPER_PEAK_AFTERNOON, 11, 22, 16, 10,
            ShiftKind.SUPER_PEAK, "Super-peak afternoon shift",
        ),
    )
})

STANDARD_SHIFTS = (ShiftType.MORNING, ShiftType.MIDDAY, ShiftType.AFTERNOON)
PEAK_SHIFTS = (ShiftType.PEAK_MORNING, ShiftType.PEAK_MIDDAY, ShiftType.PEAK_AFTERNOON)
SUPER_PEAK_SHIFTS = (
    ShiftType.SUPER_PEAK_MORNING,
    ShiftType.SUPER_PEAK_MIDDAY,
    ShiftType.SUPER_PEAK_AFTERNOON,
)
# Two people still cover 08:00-20:00 with these.
MINIMAL_SHIFTS = (ShiftType.MORNING, ShiftType.AFTERNOON)


def get_template(shift_type: ShiftType) -> ShiftTemplate:
    """Look up a shift template.

    Raises:
        KeyError: If the shift type has no template.
    """
    try:
        return SHIFT_CATALOG[shift_type]
    except KeyError:
        raise KeyError(f"Unknown shift type: {shift_type!r}") from None


@dataclass(frozen=True)
class DeliveryWindow:
    """A carrier pickup that needs someone on the floor.

    Attributes:
        label: Key used in coverage summaries (e.g. "11:59").
        carrier: Carrier name(s) for display.
        start: Start of the window.
        end: End of the window (exclusive). ``None`` means a single minute.
        weekdays: Days the window applies (0 = Sunday). ``None`` means every day.
    """

    label: str
    carrier: str
    start: time
    end: Optional[time] = None
    weekdays: Optional[frozenset[int]] = None

    @property
    def start_minutes(self) -> int:
        return self.start.hour * 60 + self.start.minute

    @property
    def end_minutes(self) -> int:
        if self.end is None:
            return self.start_minutes + 1
        return self.end.hour * 60 + self.end.minute

    def applies_on(self, weekday: int) -> bool:
        """Check if the window is active on a weekday (0 = Sunday)."""
        return self.weekdays is None or weekday in self.weekdays


DEFAULT_DELIVERY_WINDOWS: tuple[DeliveryWindow, ...] = (
    DeliveryWindow("11:59", "Shopee Express / GHN", time(11, 59)),
    DeliveryWindow("18:00", "Shopee Express / GHN", time(18, 0)),
    DeliveryWindow(
        "15:00", "VNP bulky", time(15, 0), time(15, 30),
        weekdays=frozenset({2, 3, 4, 5, 6}),  # Tue-Sat
    ),
    DeliveryWindow(
        "09:00", "VNP bulky (early)", time(9, 0), time(10, 0),
        weekdays=frozenset({0, 1}),  # Sun, Mon
    ),
)
