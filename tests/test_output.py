"""Tests for report and PDF output."""

import pytest

from shiftplan.domain.config import ScheduleConfig
from shiftplan.domain.models import Employee
from shiftplan.output.report_generator import ReportGenerator
from shiftplan.scheduling.scheduler import generate_schedule


@pytest.fixture
def roster():
    return [Employee(id="E001", name="An"), Employee(id="E002", name="Binh")]


@pytest.fixture
def schedule(roster):
    return generate_schedule(2, 2026, roster)


class TestReportGenerator:
    """Tests for the text report."""

    def test_report_sections(self, schedule, roster):
        text = ReportGenerator().generate_to_string(schedule, roster)
        assert "MONTHLY SCHEDULE REPORT - 02/2026" in text
        assert "DAILY SCHEDULE" in text
        assert "EMPLOYEE TOTALS" in text
        assert "GENERATION WARNINGS" in text
        assert "VALIDATION: PASSED" in text
        assert text.rstrip().endswith("=" * 80)

    def test_report_lists_every_day(self, schedule, roster):
        text = ReportGenerator().generate_to_string(schedule, roster)
        daily = [
            line for line in text.splitlines()
            if line[:2].strip().isdigit() and " coverage " in line
        ]
        assert len(daily) == 28

    def test_report_uses_names(self, schedule, roster):
        text = ReportGenerator().generate_to_string(schedule, roster)
        assert "An" in text
        assert "Binh" in text

    def test_report_flags_peaks(self, schedule, roster):
        text = ReportGenerator().generate_to_string(schedule, roster)
        assert " 2 Mon [SUPER-PEAK]" in text
        assert "understaffed_day" in text

    def test_report_written_to_file(self, schedule, roster, tmp_path):
        path = tmp_path / "report.txt"
        content = ReportGenerator(ScheduleConfig()).generate(schedule, roster, path)
        assert path.read_text(encoding="utf-8") == content


class TestPDFGenerator:
    """Tests for PDF output (skipped without reportlab)."""

    @pytest.fixture
    def generator(self):
        pytest.importorskip("reportlab")
        from shiftplan.output.pdf_generator import PDFGenerator

        return PDFGenerator()

    def test_generate_to_buffer(self, generator, schedule, roster):
        buffer = generator.generate_to_buffer(schedule, roster)
        assert buffer.read(4) == b"%PDF"

    def test_generate_file(self, generator, schedule, roster, tmp_path):
        path = tmp_path / "schedule.pdf"
        generator.generate(schedule, roster, path)
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

    def test_without_summary(self, generator, schedule, roster):
        with_summary = generator.generate_to_buffer(schedule, roster).getvalue()
        without = generator.generate_to_buffer(
            schedule, roster, include_summary=False
        ).getvalue()
        assert len(without) < len(with_summary)
