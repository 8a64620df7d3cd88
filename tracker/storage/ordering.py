# tracker/storage/ordering.py
"""Result ordering shared by both storage backends."""

from typing import Iterable, List

from tracker.ingest.utils import month_sort_key
from tracker.storage.base import ProductivityRecord


def sort_months(months: Iterable[str]) -> List[str]:
    """Chronological order; tokens that are not "Mmm-YY" go last, alphabetically."""
    months = list(months)
    known = [m for m in months if month_sort_key(m) is not None]
    unknown = [m for m in months if month_sort_key(m) is None]
    return sorted(known, key=month_sort_key) + sorted(unknown)


def sort_month_records(records: List[ProductivityRecord]) -> List[ProductivityRecord]:
    """Hours descending, then productivity descending; stable for ties."""
    return sorted(records, key=lambda r: (-r.productive_hours, -r.productivity))
