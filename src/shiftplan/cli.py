"""Command-line interface for the warehouse shift planner."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from shiftplan.domain.calendar_rules import days_in_month
from shiftplan.domain.config import ConfigurationError, ScheduleConfig
from shiftplan.domain.models import Employee, WarningKind
from shiftplan.output.pdf_generator import PDFGenerator
from shiftplan.output.report_generator import ReportGenerator
from shiftplan.scheduling.analysis import analyze_staffing
from shiftplan.scheduling.scheduler import MonthlyScheduler, peak_days_for
from shiftplan.validation.statistics import calculate_employee_stats
from shiftplan.validation.validator import ScheduleValidator


class UsageError(Exception):
    """Raised for invalid command-line arguments."""


def create_sample_employees(count: int = 3) -> list[Employee]:
    """Create a numbered roster for quick runs.

    Args:
        count: Number of employees to create.
    """
    names = [
        "An", "Binh", "Chi", "Dung", "Giang", "Hoa", "Khanh", "Lan",
        "Minh", "Nam", "Phuong", "Quang", "Son", "Thao", "Uyen", "Vy",
    ]
    employees = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name}{i // len(names) + 1}"
        employees.append(Employee(id=f"E{i + 1:03d}", name=name))
    return employees


def load_config(path: Optional[str], target_hours: Optional[float] = None) -> ScheduleConfig:
    """Build a config from an optional JSON file and CLI overrides.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    config = ScheduleConfig()
    if path:
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot read config {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Config {path} must contain a JSON object")
        config = ScheduleConfig.from_dict(payload)
    if target_hours is not None:
        config = replace(config, target_hours=target_hours)
    return config


def build_roster(employees: Optional[str], count: Optional[int]) -> list[Employee]:
    """Roster from a comma-separated ID list or a sample of ``count`` people."""
    if employees:
        ids = [e.strip() for e in employees.split(",") if e.strip()]
        if not ids:
            raise UsageError("--employees must list at least one ID")
        return [Employee(id=i) for i in ids]
    if count is not None and count <= 0:
        raise UsageError("--count must be positive")
    return create_sample_employees(count or 3)


def check_month(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise UsageError(f"--month must be 1-12, got {month}")
    if year < 1:
        raise UsageError(f"--year must be >= 1, got {year}")


def run_generate(args: argparse.Namespace) -> None:
    """Generate a month, print a summary and write optional outputs."""
    check_month(args.month, args.year)
    roster = build_roster(args.employees, args.count)
    config = load_config(args.config, args.target_hours)

    print(
        f"Generating schedule for {args.month:02d}/{args.year} "
        f"with {len(roster)} employees..."
    )
    schedule = MonthlyScheduler(config).generate_schedule(args.month, args.year, roster)
    stats = calculate_employee_stats(schedule, roster, config)

    print(f"\nSchedule generated: {len(schedule)} days")
    print(f"  Peak days: {', '.join(str(d) for d in peak_days_for(args.month, args.year, config))}")
    avg_coverage = sum(d.coverage.percentage for d in schedule) / max(len(schedule), 1)
    print(f"  Average coverage: {avg_coverage:.1f}%")

    print("\n  Employee hours:")
    for employee in roster:
        s = stats[employee.id]
        print(
            f"    {employee.name:<12} {s.total_hours:6.1f}h "
            f"({s.shift_count} shifts, rest days: "
            f"{', '.join(str(d) for d in s.rest_days) or '-'})"
        )

    if schedule.warnings:
        print(f"\n  Generation warnings: {len(schedule.warnings)}")
        for kind in WarningKind:
            count = sum(1 for w in schedule.warnings if w.kind is kind)
            if count:
                print(f"    - {kind.value}: {count}")

    result = ScheduleValidator(config).validate(schedule, roster)
    if result.is_valid:
        print(f"\n  Validation: PASSED ({len(result.warnings)} warnings)")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if args.report:
        ReportGenerator(config).generate(schedule, roster, args.report)
        print(f"\nReport written: {args.report}")

    if args.output:
        print(f"\nGenerating PDF: {args.output}")
        PDFGenerator(config).generate(schedule, roster, args.output)
        print("  PDF created successfully!")


def run_peak_days(args: argparse.Namespace) -> None:
    """Print the peak days of a month."""
    check_month(args.month, args.year)
    config = load_config(args.config)
    peaks = peak_days_for(args.month, args.year, config)
    print(
        f"Peak days for {args.month:02d}/{args.year} "
        f"({days_in_month(args.month, args.year)} days): "
        f"{', '.join(str(d) for d in peaks) or 'none'}"
    )


def run_analyze(args: argparse.Namespace) -> None:
    """Print a staffing recommendation for a month."""
    check_month(args.month, args.year)
    if args.count <= 0:
        raise UsageError("--count must be positive")
    config = load_config(args.config)
    analysis = analyze_staffing(args.month, args.year, args.count, config)

    print(f"Staffing analysis for {analysis.month:02d}/{analysis.year}")
    print(f"  Current employees: {analysis.current}")
    print(f"  Suggested employees: {analysis.optimal}")
    print(f"  Hours needed: {analysis.total_hours:.0f}h")
    print(f"  Average per employee: {analysis.avg_hours_per_employee:.0f}h")
    print(f"  Recommendation: {analysis.action.value.upper()} - {analysis.reason}")
    if analysis.has_high_overtime_risk(config.max_overtime_hours):
        print(f"  Warning: high overtime risk ({analysis.overtime_risk:.0f}h per employee)")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Shift Planner - Monthly Warehouse Scheduling Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate --month 2 --year 2026              3 sample employees
  %(prog)s generate --month 2 --year 2026 --count 5    5 sample employees
  %(prog)s generate --month 2 --year 2026 --employees An,Binh,Chi --output feb.pdf

  %(prog)s peak-days --month 8 --year 2026
  %(prog)s analyze --month 8 --year 2026 --count 4
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a monthly schedule")
    generate_parser.add_argument("--month", "-m", type=int, required=True, help="Month (1-12)")
    generate_parser.add_argument("--year", "-y", type=int, required=True, help="Year")
    roster_group = generate_parser.add_mutually_exclusive_group()
    roster_group.add_argument(
        "--employees", "-e",
        type=str,
        help="Comma-separated employee IDs in roster order",
    )
    roster_group.add_argument(
        "--count", "-c",
        type=int,
        help="Number of sample employees to generate (default: 3)",
    )
    generate_parser.add_argument(
        "--target-hours", "-t",
        type=float,
        help="Monthly hour target per employee (default: 208)",
    )
    generate_parser.add_argument("--config", type=str, help="JSON configuration file")
    generate_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")
    generate_parser.add_argument("--report", "-r", type=str, help="Output text report path")
    generate_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    # Peak days command
    peak_parser = subparsers.add_parser("peak-days", help="List the peak days of a month")
    peak_parser.add_argument("--month", "-m", type=int, required=True, help="Month (1-12)")
    peak_parser.add_argument("--year", "-y", type=int, required=True, help="Year")
    peak_parser.add_argument("--config", type=str, help="JSON configuration file")

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Recommend a roster size")
    analyze_parser.add_argument("--month", "-m", type=int, required=True, help="Month (1-12)")
    analyze_parser.add_argument("--year", "-y", type=int, required=True, help="Year")
    analyze_parser.add_argument(
        "--count", "-c",
        type=int,
        required=True,
        help="Current number of employees",
    )
    analyze_parser.add_argument("--config", type=str, help="JSON configuration file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "generate": run_generate,
        "peak-days": run_peak_days,
        "analyze": run_analyze,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        command(args)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
