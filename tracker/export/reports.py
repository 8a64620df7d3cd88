# tracker/export/reports.py
"""
Export reports - the four downloadable CSV files.

Each builder reads from storage, shapes rows, and returns the finished CSV
text together with its download filename.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

from tracker.export.csv_writer import generate_csv
from tracker.ranking.engine import UNKNOWN_NAME, monthly_rankings, under_performers
from tracker.ranking.thresholds import threshold_label
from tracker.storage.base import ProductivityStorage

logger = logging.getLogger(__name__)

CONTRACTOR_EXPORT_HEADERS = ["ID", "Name", "Work Location", "Position", "Start Date", "Status"]
PRODUCTIVITY_EXPORT_HEADERS = [
    "Contractor ID", "Name", "Month", "Productive Hours", "Total Hours", "Productivity %"
]
RANKING_EXPORT_HEADERS = ["Rank", "Contractor ID", "Name", "Month", "Productive Hours"]
UNDER_PERFORMER_EXPORT_HEADERS = [
    "Contractor ID", "Name", "Month", "Productive Hours", "Productivity %", "Threshold Type"
]


@dataclass
class CsvReport:
    filename: str
    content: str


def csv_response_headers(filename: str) -> Dict[str, str]:
    """HTTP headers for a CSV download."""
    return {
        "Content-Type": "text/csv; charset=utf-8",
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Cache-Control": "no-cache, no-store, must-revalidate",
    }


def contractors_report(storage: ProductivityStorage) -> CsvReport:
    """Roster export. Emails, separation date and birthday are left out."""
    rows: List[list] = [CONTRACTOR_EXPORT_HEADERS]
    for c in storage.get_all_contractors():
        rows.append([c.id, c.name, c.work_location, c.position, c.start_date, c.status])

    logger.info(f"Exported {len(rows) - 1} contractors")
    return CsvReport(filename="contractors.csv", content=generate_csv(rows))


def productivity_report(storage: ProductivityStorage, month: str) -> CsvReport:
    names = {c.id: c.name for c in storage.get_all_contractors()}
    rows: List[list] = [PRODUCTIVITY_EXPORT_HEADERS]
    for record in storage.get_productivity_by_month(month):
        rows.append([
            record.contractor_id,
            names.get(record.contractor_id, UNKNOWN_NAME),
            record.month,
            f"{record.productive_hours:.2f}",
            f"{record.total_hours:.2f}",
            f"{record.productivity:.1f}",
        ])

    logger.info(f"Exported {len(rows) - 1} productivity records for {month}")
    return CsvReport(filename=f"productivity-{month}.csv", content=generate_csv(rows))


def rankings_report(storage: ProductivityStorage, month: str) -> CsvReport:
    rankings = monthly_rankings(
        month, storage.get_productivity_by_month(month), storage.get_all_contractors()
    )
    rows: List[list] = [RANKING_EXPORT_HEADERS]
    for r in rankings:
        rows.append([r.rank, r.contractor_id, r.name, r.month, f"{r.hours:.2f}"])

    return CsvReport(filename=f"rankings-{month}.csv", content=generate_csv(rows))


def under_performers_report(storage: ProductivityStorage, month: str) -> CsvReport:
    """Under-performers with the threshold rule each one was measured against."""
    flagged = under_performers(
        month, storage.get_productivity_by_month(month), storage.get_all_contractors()
    )
    rows: List[list] = [UNDER_PERFORMER_EXPORT_HEADERS]
    for r in flagged:
        rows.append([
            r.contractor_id,
            r.name,
            r.month,
            f"{r.hours:.2f}",
            f"{r.productivity:.1f}",
            threshold_label(r.contractor_type),
        ])

    return CsvReport(filename=f"under-performers-{month}.csv", content=generate_csv(rows))
