"""Output generation for schedules (PDF, text report)."""

from shiftplan.output.pdf_generator import PDFGenerator
from shiftplan.output.report_generator import ReportGenerator

__all__ = [
    "PDFGenerator",
    "ReportGenerator",
]
