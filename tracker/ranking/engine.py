# tracker/ranking/engine.py
"""
Ranking engine - monthly rankings, top and under performers.

Pure functions over already-fetched records and the roster. Records are
loaded into a DataFrame, joined to the roster for name/type lookups, then
sorted and numbered.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List

import pandas as pd

from tracker.ranking.thresholds import medium_threshold
from tracker.storage.base import Contractor, ProductivityRecord, FULL_TIME

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"
DEFAULT_TOP_LIMIT = 3

RECORD_COLUMNS = ["contractor_id", "month", "productive_hours", "productivity"]


@dataclass
class MonthlyRanking:
    """One contractor's position in a month's ordering."""
    contractor_id: int
    name: str
    hours: float
    rank: int
    month: str
    productivity: float = 0.0
    contractor_type: str = FULL_TIME

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# FRAME BUILDING

def build_month_frame(
    month: str,
    records: Iterable[ProductivityRecord],
    contractors: Iterable[Contractor]
) -> pd.DataFrame:
    """
    Build a DataFrame of a month's records enriched with roster fields.

    Args:
        month: Month token, e.g. "Aug-25"
        records: Productivity records (other months are ignored)
        contractors: Roster used for name, type and status lookup

    Returns:
        DataFrame with record columns plus name, contractor_type, status, in_roster
    """
    df = pd.DataFrame(
        [
            {
                "contractor_id": r.contractor_id,
                "month": r.month,
                "productive_hours": float(r.productive_hours),
                "productivity": float(r.productivity),
            }
            for r in records
            if r.month == month
        ],
        columns=RECORD_COLUMNS,
    )

    roster = {c.id: c for c in contractors}
    ids = df["contractor_id"]
    df["in_roster"] = ids.map(lambda cid: cid in roster).astype(bool)
    df["name"] = ids.map(lambda cid: roster[cid].name if cid in roster else UNKNOWN_NAME)
    df["contractor_type"] = ids.map(
        lambda cid: roster[cid].contractor_type if cid in roster else FULL_TIME
    )
    df["status"] = ids.map(lambda cid: roster[cid].status if cid in roster else None)
    return df


def _to_rankings(df: pd.DataFrame, month: str) -> List[MonthlyRanking]:
    df = df.reset_index(drop=True)
    df["rank"] = range(1, len(df) + 1)
    return [
        MonthlyRanking(
            contractor_id=int(row.contractor_id),
            name=str(row.name),
            hours=float(row.productive_hours),
            rank=int(row.rank),
            month=month,
            productivity=float(row.productivity),
            contractor_type=str(row.contractor_type),
        )
        for row in df.itertuples(index=False)
    ]


# RANKINGS

def monthly_rankings(
    month: str,
    records: Iterable[ProductivityRecord],
    contractors: Iterable[Contractor]
) -> List[MonthlyRanking]:
    """
    Rank every record of a month.

    Order is productive hours descending, then productivity descending.
    The sort is stable and ranks run 1..N with no shared ranks, so equal
    hours and productivity keep their input order.
    """
    df = build_month_frame(month, records, contractors)
    if df.empty:
        return []

    df = df.sort_values(
        ["productive_hours", "productivity"],
        ascending=[False, False],
        kind="mergesort",
    )
    return _to_rankings(df, month)


def top_performers(
    month: str,
    records: Iterable[ProductivityRecord],
    contractors: Iterable[Contractor],
    limit: int = DEFAULT_TOP_LIMIT
) -> List[MonthlyRanking]:
    """First `limit` entries of the month's full ranking."""
    return monthly_rankings(month, records, contractors)[:max(limit, 0)]


def under_performers(
    month: str,
    records: Iterable[ProductivityRecord],
    contractors: Iterable[Contractor],
    active_only: bool = False
) -> List[MonthlyRanking]:
    """
    Contractors below their type's medium threshold for a month.

    Records with zero productive hours mean "no data yet" and are never
    included. Records with no roster entry are skipped because their type
    is unknown. Ordered worst first (hours ascending, then productivity
    descending) and ranked 1..M within this subset.
    """
    df = build_month_frame(month, records, contractors)
    df = df[df["in_roster"]]
    if active_only:
        df = df[df["status"] == "active"]
    if df.empty:
        return []

    df = df.assign(medium=df["contractor_type"].map(medium_threshold))
    df = df[(df["productive_hours"] > 0) & (df["productive_hours"] < df["medium"])]
    if df.empty:
        return []

    df = df.sort_values(
        ["productive_hours", "productivity"],
        ascending=[True, False],
        kind="mergesort",
    )
    rankings = _to_rankings(df, month)
    logger.info(f"{month}: {len(rankings)} under-performers")
    return rankings
