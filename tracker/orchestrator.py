# tracker/orchestrator.py
"""
Upload pipeline orchestrator.
Runs parse → roster check → validate → persist for productivity uploads,
and parse → persist for roster uploads.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from tracker.common.config import Settings, get_settings
from tracker.common.exceptions import NoValidRowsError
from tracker.common.logging import log_section
from tracker.ingest.parser import MAX_DISPLAY_ERRORS, parse_productivity_csv, parse_roster_csv
from tracker.ingest.validator import validate_productivity_rows
from tracker.storage.base import ProductivityStorage

logger = logging.getLogger(__name__)

_ROW_PREFIX = re.compile(r"^Row (\d+):")


@dataclass
class UploadResult:
    """Outcome of one upload; errors and warnings are already capped for display."""
    processed: int
    item_label: str = "records"
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    data: List[Any] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Successfully processed {self.processed} {self.item_label}"


def _row_number(message: str) -> int:
    match = _ROW_PREFIX.match(message)
    return int(match.group(1)) if match else 0


def _in_row_order(messages: List[str]) -> List[str]:
    return sorted(messages, key=_row_number)


def process_productivity_upload(
    content: str,
    storage: ProductivityStorage,
    settings: Optional[Settings] = None
) -> UploadResult:
    """
    Ingest a productivity CSV.

    Args:
        content: Decoded CSV text
        storage: Storage backend
        settings: Controls whether validator findings drop rows

    Returns:
        UploadResult with the stored records

    Raises:
        EmptyFileError, HeaderMismatchError: The file was rejected as a whole
        NoValidRowsError: No row survived parsing and checks
    """
    settings = settings or get_settings()

    # STEP 1: PARSE
    log_section(logger, "STEP 1: PARSE - Reading productivity CSV")
    parsed = parse_productivity_csv(content)
    errors = list(parsed.errors)

    # STEP 2: ROSTER CHECK
    log_section(logger, "STEP 2: ROSTER CHECK - Matching contractors")
    roster_ids = {c.id for c in storage.get_all_contractors()}
    rows = []
    for row in parsed.rows:
        if row.emp_no not in roster_ids:
            errors.append(f"Row {row.row_number}: Contractor {row.emp_no} ({row.name}) not found in roster")
            continue
        rows.append(row)
    logger.info(f"{len(rows)} of {len(parsed.rows)} rows matched the roster")

    # STEP 3: VALIDATE
    log_section(logger, "STEP 3: VALIDATE - Checking business rules")
    report = validate_productivity_rows(rows)
    warnings: List[str] = []
    if not report.passed:
        if settings.enforce_row_validation:
            failing = report.failing_rows
            rows = [row for row in rows if row.row_number not in failing]
            errors.extend(report.messages)
            logger.warning(f"Dropped {len(failing)} rows that failed validation")
        else:
            warnings = report.messages
            logger.warning("Proceeding with upload despite validation issues...")

    errors = _in_row_order(errors)
    if not rows:
        logger.error("No valid data to process")
        raise NoValidRowsError("No valid data to process", errors=errors[:MAX_DISPLAY_ERRORS])

    # STEP 4: PERSIST
    log_section(logger, "STEP 4: PERSIST - Upserting productivity records")
    saved = storage.upsert_productivity_records(row.to_record() for row in rows)
    if len(saved) < len(rows):
        errors.append(f"{len(rows) - len(saved)} records could not be saved")

    logger.info(f"Upload complete: {len(saved)} processed, {len(errors)} errors, {len(warnings)} warnings")
    return UploadResult(
        processed=len(saved),
        item_label="records",
        errors=errors[:MAX_DISPLAY_ERRORS],
        warnings=warnings[:MAX_DISPLAY_ERRORS],
        data=saved,
    )


def process_roster_upload(content: str, storage: ProductivityStorage) -> UploadResult:
    """
    Ingest a contractor roster CSV.

    New ids are created as active Full Time contractors. Existing ids get
    their roster fields refreshed and keep their status and type.

    Raises:
        EmptyFileError, HeaderMismatchError: The file was rejected as a whole
        NoValidRowsError: No row could be parsed
    """
    log_section(logger, "ROSTER UPLOAD - Parsing contractor roster")
    parsed = parse_roster_csv(content)
    parsed.raise_if_empty("No valid contractor data to process")

    saved = storage.upsert_contractors(row.to_contractor() for row in parsed.rows)
    errors = list(parsed.errors)
    if len(saved) < len(parsed.rows):
        errors.append(f"{len(parsed.rows) - len(saved)} contractors could not be saved")

    logger.info(f"Roster upload complete: {len(saved)} contractors, {len(errors)} errors")
    return UploadResult(
        processed=len(saved),
        item_label="contractors",
        errors=errors[:MAX_DISPLAY_ERRORS],
        data=saved,
    )
