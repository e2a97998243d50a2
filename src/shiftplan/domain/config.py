"""Engine configuration.

A ``ScheduleConfig`` is built once and passed explicitly into every
engine call. It is frozen; use ``dataclasses.replace`` or the helper
methods to derive variants.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import time
from types import MappingProxyType
from typing import Any, Mapping

from shiftplan.domain.shifts import DEFAULT_DELIVERY_WINDOWS, DeliveryWindow

# Fixed public holidays (month -> days). Lunar holidays are merged in
# by callers through ``ScheduleConfig.with_holidays``.
DEFAULT_HOLIDAYS: dict[int, tuple[int, ...]] = {
    1: (1,),  # New Year
    4: (30,),  # Reunification Day
    5: (1,),  # Labour Day
    9: (2,),  # National Day
}


class ConfigurationError(ValueError):
    """Raised when engine inputs are rejected before generation starts."""


@dataclass(frozen=True)
class ScheduleConfig:
    """Configuration for monthly schedule generation.

    Attributes:
        target_hours: Monthly hour quota per employee.
        overtime_multiplier: Pay weight of hours beyond a standard shift.
        holiday_multiplier: Pay weight of hours worked on a holiday.
        fixed_peak_days: Peak days every month (mid-month and end-month sales).
        custom_peak_days: Extra user-defined peak days.
        double_day_peaks: Whether the double date (e.g. 8/8) is a peak day.
        holidays: Holiday table mapping month to day numbers.
        super_peak_enabled: Use the ten-hour super-peak templates on
            super-peak days.
        max_overtime_hours: Weighted overtime above which the validator warns.
        standard_shift_hours: Hours of a shift before overtime applies.
        max_shift_hours: Ceiling for balancing extensions.
        max_extension_hours: Largest single extension the balancer applies.
        normal_cutoff_hour: Latest shift end on ordinary days.
        super_peak_cutoff_hour: Latest shift end on super-peak days.
        extension_cap_hour: Latest end time a balancing extension may reach.
        open_hour: Start of the reference coverage window.
        close_hour: End of the reference coverage window.
        delivery_windows: Carrier pickups that need floor coverage.
    """

    target_hours: float = 208.0
    overtime_multiplier: float = 1.5
    holiday_multiplier: float = 4.0
    fixed_peak_days: tuple[int, ...] = (15, 25)
    custom_peak_days: tuple[int, ...] = ()
    double_day_peaks: bool = True
    holidays: Mapping[int, tuple[int, ...]] = field(
        default_factory=lambda: dict(DEFAULT_HOLIDAYS), hash=False
    )
    super_peak_enabled: bool = True
    max_overtime_hours: float = 40.0
    standard_shift_hours: float = 8.0
    max_shift_hours: float = 10.0
    max_extension_hours: float = 2.0
    normal_cutoff_hour: int = 20
    super_peak_cutoff_hour: int = 22
    extension_cap_hour: int = 21
    open_hour: int = 8
    close_hour: int = 20
    delivery_windows: tuple[DeliveryWindow, ...] = DEFAULT_DELIVERY_WINDOWS

    def __post_init__(self):
        # Copy container fields so the caller cannot mutate them afterwards
        object.__setattr__(self, "fixed_peak_days", tuple(self.fixed_peak_days))
        object.__setattr__(self, "custom_peak_days", tuple(self.custom_peak_days))
        object.__setattr__(self, "delivery_windows", tuple(self.delivery_windows))
        object.__setattr__(
            self,
            "holidays",
            MappingProxyType(
                {month: tuple(days) for month, days in self.holidays.items()}
            ),
        )

        if self.target_hours <= 0:
            raise ConfigurationError(
                f"target_hours must be positive, got {self.target_hours}"
            )
        if self.overtime_multiplier <= 0 or self.holiday_multiplier <= 0:
            raise ConfigurationError("Hour multipliers must be positive")
        for day in (*self.fixed_peak_days, *self.custom_peak_days):
            if not 1 <= day <= 31:
                raise ConfigurationError(f"Peak day {day} is outside 1..31")
        for month, days in self.holidays.items():
            if not 1 <= month <= 12:
                raise ConfigurationError(f"Holiday month {month} is outside 1..12")
            for day in days:
                if not 1 <= day <= 31:
                    raise ConfigurationError(
                        f"Holiday {day}/{month} is outside 1..31"
                    )
        if not 0 <= self.open_hour < self.close_hour <= 24:
            raise ConfigurationError(
                f"Invalid operating window {self.open_hour}-{self.close_hour}"
            )

    @property
    def reference_window_hours(self) -> int:
        """Length of the operating window used for coverage percentages."""
        return self.close_hour - self.open_hour

    def holidays_in(self, month: int) -> tuple[int, ...]:
        return tuple(self.holidays.get(month, ()))

    def with_holidays(self, month: int, days: list[int]) -> "ScheduleConfig":
        """Return a copy with extra holiday dates merged in for a month."""
        merged = dict(self.holidays)
        merged[month] = tuple(sorted(set(merged.get(month, ())) | set(days)))
        return replace(self, holidays=merged)

    def with_custom_peak_days(self, days: list[int]) -> "ScheduleConfig":
        """Return a copy with the given custom peak days."""
        return replace(self, custom_peak_days=tuple(sorted(set(days))))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScheduleConfig":
        """Build a config from a JSON-style mapping.

        Holiday tables may use string month keys. Delivery windows are
        given as objects with ``label``, ``carrier``, ``start`` ("HH:MM"),
        optional ``end`` and optional ``weekdays`` (0 = Sunday).

        Raises:
            ConfigurationError: On unknown keys or malformed values.
        """
        types = {f.name: f.type for f in fields(cls)}
        unknown = set(payload) - set(types)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )

        kwargs: dict[str, Any] = {}
        try:
            for key, value in payload.items():
                if key == "holidays":
                    kwargs[key] = {
                        int(month): tuple(int(d) for d in days)
                        for month, days in value.items()
                    }
                elif key in ("fixed_peak_days", "custom_peak_days"):
                    kwargs[key] = tuple(int(d) for d in value)
                elif key == "delivery_windows":
                    kwargs[key] = tuple(_parse_window(item) for item in value)
                else:
                    kwargs[key] = _coerce_scalar(key, value, types[key])
            return cls(**kwargs)
        except ConfigurationError:
            raise
        except (TypeError, ValueError, AttributeError, KeyError) as exc:
            raise ConfigurationError(f"Malformed configuration: {exc}") from exc


def _coerce_scalar(key: str, value: Any, kind: type) -> Any:
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{key} must be true or false, got {value!r}")
        return value
    if isinstance(value, bool) or value is None:
        raise ConfigurationError(f"{key} must be a number, got {value!r}")
    return kind(value)


def _parse_window(item: Mapping[str, Any]) -> DeliveryWindow:
    weekdays = item.get("weekdays")
    end = item.get("end")
    return DeliveryWindow(
        label=str(item["label"]),
        carrier=str(item.get("carrier", item["label"])),
        start=time.fromisoformat(item["start"]),
        end=time.fromisoformat(end) if end else None,
        weekdays=frozenset(int(d) for d in weekdays) if weekdays is not None else None,
    )
