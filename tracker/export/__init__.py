# tracker/export/__init__.py
"""
Export - injection-safe CSV writing and the downloadable reports.
"""

from tracker.export.csv_writer import escape_csv_field, generate_csv
from tracker.export.reports import (
    CsvReport,
    csv_response_headers,
    contractors_report,
    productivity_report,
    rankings_report,
    under_performers_report,
)

__all__ = [
    "escape_csv_field",
    "generate_csv",
    "CsvReport",
    "csv_response_headers",
    "contractors_report",
    "productivity_report",
    "rankings_report",
    "under_performers_report",
]
