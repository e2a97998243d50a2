"""Plain-text report output for monthly schedules.

The report lists every day's shifts, per-employee hour totals, the
warnings raised during generation and the validation outcome.
"""

from collections import defaultdict
from pathlib import Path
from typing import Optional, Union

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import Employee, MonthlySchedule
from shiftplan.validation.statistics import calculate_employee_stats
from shiftplan.validation.validator import ScheduleValidator

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class ReportGenerator:
    """Generates a human-readable text report of a monthly schedule.

    Example:
        >>> text = ReportGenerator(config).generate_to_string(schedule, roster)
    """

    def __init__(self, config: Optional[ScheduleConfig] = None):
        self.config = config or ScheduleConfig()

    def generate(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
        output_path: Union[str, Path],
    ) -> str:
        """Generate the report and save it to a file.

        Args:
            schedule: The monthly schedule to report on.
            roster: Active employees.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(schedule, roster)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
    ) -> str:
        """Generate the report and return it as a string."""
        return self._generate_content(schedule, roster)

    def _generate_content(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
    ) -> str:
        names = {e.id: e.name for e in roster}
        lines = []

        # Header
        lines.append("=" * 80)
        lines.append(f"MONTHLY SCHEDULE REPORT - {schedule.month:02d}/{schedule.year}")
        lines.append("=" * 80)
        lines.append("")
        lines.append(f"Employees: {len(roster)}")
        lines.append(f"Days: {len(schedule)}")
        lines.append(f"Target hours: {self.config.target_hours:g}")
        peaks = [d.day for d in schedule if d.is_peak]
        lines.append(f"Peak days: {', '.join(str(d) for d in peaks) or '-'}")
        lines.append("")

        # Daily view
        lines.append("-" * 80)
        lines.append("DAILY SCHEDULE")
        lines.append("-" * 80)
        for day_schedule in schedule:
            flags = []
            if day_schedule.is_holiday:
                flags.append("HOLIDAY")
            if day_schedule.is_super_peak:
                flags.append("SUPER-PEAK")
            elif day_schedule.is_peak:
                flags.append("PEAK")
            flag_str = f" [{', '.join(flags)}]" if flags else ""
            lines.append(
                f"{day_schedule.day:>2} {WEEKDAY_NAMES[day_schedule.weekday]}"
                f"{flag_str}  coverage {day_schedule.coverage.percentage:.0f}%"
            )
            if not day_schedule.shifts:
                lines.append("     (no shifts)")
            for shift in day_schedule.shifts:
                name = names.get(shift.employee_id, shift.employee_id)[:20]
                marker = " OT" if shift.is_overtime else ""
                lines.append(
                    f"     {name:<20} {shift.shift_type.value:<22} "
                    f"{shift.start.strftime('%H:%M')}-{shift.end.strftime('%H:%M')} "
                    f"{shift.hours:>5.1f}h{marker}"
                )
            missed = [
                label for label, covered in day_schedule.coverage.critical.items()
                if not covered
            ]
            if missed:
                lines.append(f"     uncovered windows: {', '.join(missed)}")
        lines.append("")

        # Employee totals
        lines.append("-" * 80)
        lines.append("EMPLOYEE TOTALS")
        lines.append("-" * 80)
        lines.append(
            f"{'Employee':<20} {'Shifts':>6} {'Regular':>8} {'Overtime':>9} "
            f"{'Holiday':>8} {'Total':>7}  Rest days"
        )
        stats = calculate_employee_stats(schedule, roster, self.config)
        for employee in roster:
            s = stats[employee.id]
            rest = ", ".join(str(d) for d in s.rest_days) or "-"
            lines.append(
                f"{employee.name[:20]:<20} {s.shift_count:>6} {s.regular_hours:>8.1f} "
                f"{s.overtime_hours:>9.1f} {s.holiday_hours:>8.1f} "
                f"{s.total_hours:>7.1f}  {rest}"
            )
        lines.append("")

        # Generation warnings, grouped by kind
        lines.append("-" * 80)
        lines.append(f"GENERATION WARNINGS ({len(schedule.warnings)})")
        lines.append("-" * 80)
        by_kind = defaultdict(list)
        for warning in schedule.warnings:
            by_kind[warning.kind].append(warning)
        for kind in sorted(by_kind, key=lambda k: k.value):
            lines.append(f"{kind.value}: {len(by_kind[kind])}")
            for warning in by_kind[kind]:
                lines.append(f"  {warning}")
        lines.append("")

        # Validation
        result = ScheduleValidator(self.config).validate(schedule, roster)
        lines.append("-" * 80)
        lines.append(
            f"VALIDATION: {'PASSED' if result.is_valid else 'FAILED'} "
            f"({len(result.errors)} errors, {len(result.warnings)} warnings)"
        )
        lines.append("-" * 80)
        for error in result.errors:
            lines.append(f"ERROR   {error}")
        for warning in result.warnings:
            lines.append(f"WARNING {warning}")

        lines.append("")
        lines.append("=" * 80)
        lines.append("END OF REPORT")
        lines.append("=" * 80)

        return "\n".join(lines)
