# tracker/ingest/__init__.py
"""
Ingest - CSV parsing and record validation for uploads.
"""

from tracker.ingest.csv_reader import (
    PRODUCTIVITY_HEADERS,
    ROSTER_HEADERS,
    parse_csv_line,
    headers_match,
)
from tracker.ingest.parser import (
    MAX_DISPLAY_ERRORS,
    ParseResult,
    ProductivityRow,
    RosterRow,
    parse_productivity_csv,
    parse_roster_csv,
)
from tracker.ingest.validator import (
    ValidationReport,
    validate_productivity_rows,
    validate_employee_data,
)

__all__ = [
    "PRODUCTIVITY_HEADERS",
    "ROSTER_HEADERS",
    "parse_csv_line",
    "headers_match",
    "MAX_DISPLAY_ERRORS",
    "ParseResult",
    "ProductivityRow",
    "RosterRow",
    "parse_productivity_csv",
    "parse_roster_csv",
    "ValidationReport",
    "validate_productivity_rows",
    "validate_employee_data",
]
