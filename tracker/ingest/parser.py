# tracker/ingest/parser.py
"""
Upload parsers - turn raw CSV text into typed productivity or roster rows.

Header problems reject the whole file. Row problems are recorded as
"Row N: ..." messages (header is row 1) and the row is skipped.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Generic, TypeVar

from tracker.common.exceptions import NoValidRowsError
from tracker.ingest.csv_reader import (
    PRODUCTIVITY_MODE,
    ROSTER_MODE,
    parse_csv_line,
    read_header_and_rows,
    split_simple_line,
)
from tracker.ingest.utils import (
    normalize_month,
    parse_int,
    parse_productive_hours,
    parse_productivity,
    parse_total_hours,
)

logger = logging.getLogger(__name__)

# Only the first errors are shown to the uploader
MAX_DISPLAY_ERRORS = 10

PRODUCTIVITY_COLUMN_COUNT = 6
ROSTER_COLUMN_COUNT = 9

RowT = TypeVar("RowT")


@dataclass
class ProductivityRow:
    """One parsed line of a productivity upload."""
    row_number: int
    emp_no: int
    name: str
    month: str
    productive_hours_raw: str
    productive_hours: float
    total_hours: float
    productivity: float

    def to_record(self) -> dict:
        return {
            "contractor_id": self.emp_no,
            "month": self.month,
            "productive_hours": self.productive_hours,
            "total_hours": self.total_hours,
            "productivity": self.productivity,
        }


@dataclass
class RosterRow:
    """One parsed line of a contractor roster upload."""
    row_number: int
    id: int
    name: str
    personal_email: str = ""
    work_email: str = ""
    work_location: str = ""
    position: str = ""
    start_date: str = ""
    separation_date: str = ""
    birthday: str = ""

    def to_contractor(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "personal_email": self.personal_email,
            "work_email": self.work_email,
            "work_location": self.work_location,
            "position": self.position,
            "start_date": self.start_date,
            "separation_date": self.separation_date,
            "birthday": self.birthday,
        }


@dataclass
class ParseResult(Generic[RowT]):
    """Rows that parsed cleanly plus every per-row error message."""
    rows: List[RowT] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def display_errors(self) -> List[str]:
        return self.errors[:MAX_DISPLAY_ERRORS]

    def add_error(self, row_number: int, message: str) -> None:
        self.errors.append(f"Row {row_number}: {message}")

    def raise_if_empty(self, message: str = "No valid data to process") -> None:
        """Fail the whole batch when no row survived."""
        if not self.rows:
            raise NoValidRowsError(message, errors=self.display_errors)


# PRODUCTIVITY UPLOADS

def parse_productivity_line(line: str, row_number: int) -> ProductivityRow:
    """
    Parse a single productivity data line.

    Raises:
        ValueError: With a user-facing message when the line is unusable
    """
    columns = parse_csv_line(line)
    if len(columns) < PRODUCTIVITY_COLUMN_COUNT:
        raise ValueError(
            f"Insufficient columns (expected {PRODUCTIVITY_COLUMN_COUNT}, got {len(columns)})"
        )

    emp_no = parse_int(columns[0])
    if emp_no is None:
        raise ValueError(f"Invalid employee number '{columns[0]}'")

    productivity = parse_productivity(columns[5])
    if productivity is None:
        raise ValueError(f"Invalid productivity value '{columns[5]}'")

    return ProductivityRow(
        row_number=row_number,
        emp_no=emp_no,
        name=columns[1],
        month=normalize_month(columns[2]),
        productive_hours_raw=columns[3],
        productive_hours=parse_productive_hours(columns[3]),
        total_hours=parse_total_hours(columns[4]),
        productivity=productivity,
    )


def parse_productivity_csv(content: str) -> ParseResult[ProductivityRow]:
    """
    Parse a productivity upload.

    Args:
        content: Decoded CSV text

    Returns:
        ParseResult with typed rows and per-row errors

    Raises:
        EmptyFileError, HeaderMismatchError: Whole-file rejections
    """
    _, data_lines = read_header_and_rows(content, PRODUCTIVITY_MODE)
    result: ParseResult[ProductivityRow] = ParseResult()

    for index, line in enumerate(data_lines):
        row_number = index + 2
        try:
            result.rows.append(parse_productivity_line(line, row_number))
        except ValueError as e:
            result.add_error(row_number, str(e))

    logger.info(
        f"Parsed productivity upload: {len(result.rows)} rows, {len(result.errors)} errors"
    )
    return result


# ROSTER UPLOADS

def parse_roster_line(line: str, row_number: int) -> RosterRow:
    """
    Parse a single roster data line.

    Raises:
        ValueError: With a user-facing message when the line is unusable
    """
    columns = split_simple_line(line)
    if len(columns) < ROSTER_COLUMN_COUNT:
        raise ValueError(
            f"Insufficient columns (expected {ROSTER_COLUMN_COUNT}, got {len(columns)})"
        )

    (name, id_str, personal_email, work_email, work_location,
     position, start_date, separation_date, birthday) = columns[:ROSTER_COLUMN_COUNT]

    contractor_id = parse_int(id_str)
    if contractor_id is None:
        raise ValueError(f"Invalid ID '{id_str}' - must be a number")
    if not name:
        raise ValueError("Name is required")

    return RosterRow(
        row_number=row_number,
        id=contractor_id,
        name=name,
        personal_email=personal_email,
        work_email=work_email,
        work_location=work_location,
        position=position,
        start_date=start_date,
        separation_date=separation_date,
        birthday=birthday,
    )


def parse_roster_csv(content: str) -> ParseResult[RosterRow]:
    """Parse a contractor roster upload; same contract as parse_productivity_csv."""
    _, data_lines = read_header_and_rows(content, ROSTER_MODE)
    result: ParseResult[RosterRow] = ParseResult()

    for index, line in enumerate(data_lines):
        row_number = index + 2
        try:
            result.rows.append(parse_roster_line(line, row_number))
        except ValueError as e:
            result.add_error(row_number, str(e))

    logger.info(
        f"Parsed roster upload: {len(result.rows)} rows, {len(result.errors)} errors"
    )
    return result
