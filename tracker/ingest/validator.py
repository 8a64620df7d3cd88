# tracker/ingest/validator.py
"""
Record validation - domain checks on parsed productivity rows.

Separate from the inline parse errors: a row can parse cleanly and still
break a business rule. Every failing rule on every row is reported; rows
are never modified.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from tracker.ingest.parser import ProductivityRow
from tracker.ingest.utils import MONTH_ABBREVIATIONS, parse_productive_hours

logger = logging.getLogger(__name__)

MIN_EMPLOYEE_NUMBER = 1
MAX_EMPLOYEE_NUMBER = 999


@dataclass
class ValidationResult:
    """Single failed check on one row."""
    row_number: int
    check_name: str
    message: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.message}"


@dataclass
class ValidationReport:
    """Collection of validation results for an upload."""
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.results

    @property
    def messages(self) -> List[str]:
        return [str(r) for r in self.results]

    @property
    def failing_rows(self) -> Dict[int, List[str]]:
        rows: Dict[int, List[str]] = {}
        for r in self.results:
            rows.setdefault(r.row_number, []).append(str(r))
        return rows

    def add(self, result: ValidationResult) -> None:
        self.results.append(result)
        logger.warning(f"  [✗] {result.check_name}: {result}")


def check_employee_number(row: ProductivityRow, report: ValidationReport) -> None:
    if row.emp_no < MIN_EMPLOYEE_NUMBER or row.emp_no > MAX_EMPLOYEE_NUMBER:
        report.add(ValidationResult(
            row_number=row.row_number,
            check_name="Employee Number Range",
            message=f"Employee number should be between {MIN_EMPLOYEE_NUMBER} and {MAX_EMPLOYEE_NUMBER}"
        ))


def check_month_abbreviation(row: ProductivityRow, report: ValidationReport) -> None:
    abbreviation = row.month.split("-")[0]
    if abbreviation not in MONTH_ABBREVIATIONS:
        report.add(ValidationResult(
            row_number=row.row_number,
            check_name="Month Abbreviation",
            message=f'Invalid month abbreviation "{abbreviation}". '
                    f"Use standard 3-letter abbreviations (Jan, Feb, etc.)"
        ))


def check_productivity_range(row: ProductivityRow, report: ValidationReport) -> None:
    if row.productivity < 0 or row.productivity > 100:
        report.add(ValidationResult(
            row_number=row.row_number,
            check_name="Productivity Range (0-100)",
            message="Productivity should be between 0 and 100"
        ))


def check_hours_not_negative(row: ProductivityRow, report: ValidationReport) -> None:
    if row.total_hours < 0:
        report.add(ValidationResult(
            row_number=row.row_number,
            check_name="Hours Not Negative",
            message="Hours cannot be negative"
        ))


def check_productive_within_total(row: ProductivityRow, report: ValidationReport) -> None:
    productive = parse_productive_hours(row.productive_hours_raw)
    if productive > row.total_hours:
        report.add(ValidationResult(
            row_number=row.row_number,
            check_name="Productive Hours <= Total Hours",
            message=f"Productive hours ({productive:.2f}) cannot exceed total hours ({row.total_hours:g})"
        ))


ROW_CHECKS = [
    check_employee_number,
    check_month_abbreviation,
    check_productivity_range,
    check_hours_not_negative,
    check_productive_within_total,
]


def validate_productivity_rows(rows: List[ProductivityRow]) -> ValidationReport:
    """
    Run every row check against every row.

    Returns:
        ValidationReport holding one result per failing rule per row
    """
    report = ValidationReport()
    for row in rows:
        for check in ROW_CHECKS:
            check(row, report)

    if report.passed:
        logger.info(f"Validation passed for {len(rows)} rows")
    else:
        logger.warning(
            f"Validation found {len(report.results)} issues in {len(report.failing_rows)} rows"
        )
    return report


def validate_employee_data(rows: List[ProductivityRow]) -> List[str]:
    """Return the validation messages for rows, in row order."""
    return validate_productivity_rows(rows).messages
