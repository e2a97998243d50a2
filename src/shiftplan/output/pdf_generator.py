"""PDF generation for monthly schedule output.

This module creates printable PDF schedules showing:
- One row per calendar day with its shifts and coverage
- Peak, super-peak and holiday highlighting
- A summary page with per-employee hour totals and daily coverage
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import DaySchedule, Employee, MonthlySchedule
from shiftplan.validation.statistics import calculate_employee_stats

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "super_peak": (0.98, 0.8, 0.6),  # Orange
    "peak": (1.0, 0.92, 0.6),  # Yellow
    "holiday": (0.9, 0.7, 0.7),  # Light red
    "sunday": (0.88, 0.92, 0.98),  # Light blue
    "normal": (1.0, 1.0, 1.0),
    "coverage": (0.4, 0.6, 0.8),  # Blue
    "low_coverage": (0.85, 0.4, 0.4),  # Red
}


def _load_canvas():
    try:
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas, landscape(letter)


class PDFGenerator:
    """Generates printable PDF schedules for a month.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(schedule, roster, "schedule.pdf")
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.config = config or ScheduleConfig()
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
        output_path: Union[str, Path],
        include_summary: bool = True,
    ) -> None:
        """Generate PDF schedule and save to file.

        Args:
            schedule: The monthly schedule to render.
            roster: Employees, used for display names and the summary.
            output_path: Path to save the PDF.
            include_summary: Whether to include the summary page.
        """
        canvas, pagesize = _load_canvas()
        c = canvas.Canvas(str(output_path), pagesize=pagesize)
        self._draw(c, schedule, roster, include_summary)
        c.save()

    def generate_to_buffer(
        self,
        schedule: MonthlySchedule,
        roster: list[Employee],
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        canvas, pagesize = _load_canvas()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        self._draw(c, schedule, roster, include_summary)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw(self, c, schedule, roster, include_summary) -> None:
        names = {e.id: e.name for e in roster}
        self._draw_schedule_pages(c, schedule, names)
        if include_summary:
            self._draw_summary_page(c, schedule, roster)

    def _draw_schedule_pages(
        self,
        c,
        schedule: MonthlySchedule,
        names: dict[str, str],
    ) -> None:
        """Draw the day-by-day table, continuing over as many pages as needed."""
        row_height = 30
        header_height = 60
        footer_height = 40
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(1, int(usable_height / row_height))

        days = list(schedule)
        total_pages = max(1, (len(days) + rows_per_page - 1) // rows_per_page)

        for page_start in range(0, max(len(days), 1), rows_per_page):
            page_days = days[page_start : page_start + rows_per_page]
            self._draw_header(c, schedule)
            y = self.page_height - self.margin - header_height
            self._draw_column_titles(c, y)

            for day_schedule in page_days:
                y -= row_height
                self._draw_day_row(c, day_schedule, schedule, names, y, row_height - 2)

            self._draw_legend(c, self.margin, self.margin + 10)

            page_num = (page_start // rows_per_page) + 1
            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_num} of {total_pages}",
            )
            c.showPage()

    def _draw_header(self, c, schedule: MonthlySchedule) -> None:
        """Draw page header with month and roster size."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Monthly Schedule - {schedule.month:02d}/{schedule.year}",
        )

        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"Days: {len(schedule)}    Employees: {len(schedule.rest_days)}",
        )

    def _draw_column_titles(self, c, y: float) -> None:
        c.setFont("Helvetica-Bold", 9)
        c.setFillColorRGB(0, 0, 0)
        c.drawString(self.margin, y, "Date")
        c.drawString(self.margin + 70, y, "Type")
        c.drawString(self.margin + 140, y, "Shifts")
        c.drawRightString(self.page_width - self.margin, y, "Coverage")

    def _draw_day_row(
        self,
        c,
        day_schedule: DaySchedule,
        schedule: MonthlySchedule,
        names: dict[str, str],
        y: float,
        height: float,
    ) -> None:
        """Draw a single day's row."""
        width = self.page_width - 2 * self.margin
        c.setFillColorRGB(*COLORS[self._day_kind(day_schedule)])
        c.setStrokeColorRGB(0.7, 0.7, 0.7)
        c.rect(self.margin, y, width, height, fill=1, stroke=1)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(
            self.margin + 4,
            y + height / 2 - 3,
            f"{day_schedule.day:02d}/{schedule.month:02d} "
            f"{WEEKDAY_NAMES[day_schedule.weekday]}",
        )

        c.setFont("Helvetica", 8)
        c.drawString(self.margin + 70, y + height / 2 - 3, self._day_label(day_schedule))

        # Shifts, two lines at most
        entries = [
            f"{names.get(s.employee_id, s.employee_id)[:14]} "
            f"{s.start.strftime('%H:%M')}-{s.end.strftime('%H:%M')} ({s.hours:g}h)"
            for s in day_schedule.shifts
        ] or ["No shifts"]
        c.setFont("Helvetica", 7)
        c.drawString(self.margin + 140, y + height - 10, "   ".join(entries[:2]))
        if len(entries) > 2:
            c.drawString(self.margin + 140, y + 4, "   ".join(entries[2:]))

        # Coverage bar
        pct = day_schedule.coverage.percentage
        bar_width = 60
        bar_x = self.page_width - self.margin - bar_width - 4
        color = COLORS["coverage"] if pct >= 80 else COLORS["low_coverage"]
        c.setFillColorRGB(*color)
        c.rect(bar_x, y + 4, bar_width * pct / 100, 8, fill=1, stroke=0)
        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.rect(bar_x, y + 4, bar_width, 8, fill=0, stroke=1)
        c.setFillColorRGB(0, 0, 0)
        c.drawRightString(self.page_width - self.margin - 4, y + height - 10, f"{pct:.0f}%")

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for row colors."""
        c.setFont("Helvetica-Bold", 8)
        c.setFillColorRGB(0, 0, 0)
        c.drawString(x, y, "Legend:")

        items = [
            ("super_peak", "Super-peak"),
            ("peak", "Peak"),
            ("holiday", "Holiday"),
            ("sunday", "Sunday"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45
        for key, label in items:
            c.setFillColorRGB(*COLORS[key])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 70

    def _draw_summary_page(
        self,
        c,
        schedule: MonthlySchedule,
        roster: list[Employee],
    ) -> None:
        """Draw summary page with employee totals and daily coverage."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Schedule Summary - {schedule.month:02d}/{schedule.year}",
        )

        y = self.page_height - self.margin - 60
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Employee Hours")
        y -= 20

        columns = [
            ("Employee", 0),
            ("Shifts", 150),
            ("Regular", 210),
            ("Overtime", 280),
            ("Holiday", 350),
            ("Total", 420),
            ("Rest days", 480),
        ]
        c.setFont("Helvetica-Bold", 9)
        for title, offset in columns:
            c.drawString(self.margin + offset, y, title)
        y -= 15

        stats = calculate_employee_stats(schedule, roster, self.config)
        c.setFont("Helvetica", 9)
        for employee in roster:
            s = stats[employee.id]
            values = [
                employee.name[:24],
                str(s.shift_count),
                f"{s.regular_hours:.1f}",
                f"{s.overtime_hours:.1f}",
                f"{s.holiday_hours:.1f}",
                f"{s.total_hours:.1f}",
                ", ".join(str(d) for d in s.rest_days) or "-",
            ]
            for value, (_, offset) in zip(values, columns):
                c.drawString(self.margin + offset, y, value)
            y -= 15
            if y < self.margin + 200:
                break

        y -= 20
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Daily Coverage")
        chart_height = min(140, y - self.margin - 30)
        if chart_height > 20:
            self._draw_coverage_chart(
                c, schedule, self.margin, y - chart_height - 10, 600, chart_height
            )

        c.showPage()

    def _draw_coverage_chart(
        self,
        c,
        schedule: MonthlySchedule,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Draw a bar chart of coverage percentage per day."""
        days = list(schedule)
        if not days:
            return

        bar_width = width / len(days)

        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(1)
        c.line(x, y, x, y + height)  # Y axis
        c.line(x, y, x + width, y)  # X axis

        c.setFont("Helvetica", 7)
        for i, day_schedule in enumerate(days):
            pct = day_schedule.coverage.percentage
            color = COLORS["coverage"] if pct >= 80 else COLORS["low_coverage"]
            c.setFillColorRGB(*color)
            c.rect(x + i * bar_width, y, bar_width - 1, pct / 100 * height, fill=1, stroke=0)
            c.setFillColorRGB(0, 0, 0)
            c.drawCentredString(x + (i + 0.5) * bar_width, y - 10, str(day_schedule.day))

        c.drawRightString(x - 5, y, "0%")
        c.drawRightString(x - 5, y + height - 5, "100%")

    @staticmethod
    def _day_kind(day_schedule: DaySchedule) -> str:
        if day_schedule.is_holiday:
            return "holiday"
        if day_schedule.is_super_peak:
            return "super_peak"
        if day_schedule.is_peak:
            return "peak"
        if day_schedule.is_sunday:
            return "sunday"
        return "normal"

    @staticmethod
    def _day_label(day_schedule: DaySchedule) -> str:
        flags = []
        if day_schedule.is_holiday:
            flags.append("Holiday")
        if day_schedule.is_super_peak:
            flags.append("Super-peak")
        elif day_schedule.is_peak:
            flags.append("Peak")
        return ", ".join(flags) or "Normal"
