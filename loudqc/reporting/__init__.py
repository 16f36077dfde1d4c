"""Report building and display formatting."""

from loudqc.reporting.format import format_db, format_lufs
from loudqc.reporting.report import build_report_dict, difference_dict, summarize_result

__all__ = [
    "build_report_dict",
    "difference_dict",
    "format_db",
    "format_lufs",
    "summarize_result",
]
