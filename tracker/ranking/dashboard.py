# tracker/ranking/dashboard.py
"""
Dashboard aggregates - monthly summary and the "coming up" sections.

The summary reads the month's records and the roster; special sections
look only at the roster and today's date.
"""

import logging
from dataclasses import dataclass, field, asdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd
from dateutil.relativedelta import MO, TH, relativedelta
from pandas.tseries.holiday import AbstractHolidayCalendar, Holiday
from pandas.tseries.offsets import DateOffset

from tracker.ingest.utils import month_sort_key
from tracker.ranking.engine import (
    DEFAULT_TOP_LIMIT,
    MonthlyRanking,
    build_month_frame,
    top_performers,
    under_performers,
)
from tracker.ranking.thresholds import medium_threshold
from tracker.storage.base import Contractor, ProductivityRecord

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 30

# Roster dates are free text; try the common shapes in order
ROSTER_DATE_FORMATS = ["%m/%d/%Y", "%Y-%m-%d", "%m/%d/%y", "%m-%d-%Y"]


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a spreadsheet does (0.5 goes up), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def latest_month(months: Iterable[str]) -> Optional[str]:
    """Most recent "Mmm-YY" token in months; unrecognized tokens are ignored."""
    keyed = [(month_sort_key(m), m) for m in months]
    keyed = [(key, m) for key, m in keyed if key is not None]
    if not keyed:
        return None
    return max(keyed, key=lambda pair: pair[0])[1]


# SUMMARY

@dataclass
class DashboardSummary:
    total_contractors: int
    total_hours: float
    average_hours: float
    above_threshold_percentage: int
    top_performers: List[MonthlyRanking] = field(default_factory=list)
    under_performers: List[MonthlyRanking] = field(default_factory=list)
    current_month: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def dashboard_summary(
    month: str,
    records: Iterable[ProductivityRecord],
    contractors: Iterable[Contractor]
) -> DashboardSummary:
    """
    Compute the dashboard headline numbers for one month.

    Args:
        month: Month token to summarize
        records: Productivity records (other months are ignored)
        contractors: Full roster, archived included

    Returns:
        DashboardSummary
    """
    records = list(records)
    contractors = list(contractors)
    active = [c for c in contractors if c.is_active]

    df = build_month_frame(month, records, contractors)
    total_hours = float(df["productive_hours"].sum()) if not df.empty else 0.0
    average_hours = total_hours / len(df) if len(df) else 0.0

    # Active contractors with real hours this month
    considered = df[(df["status"] == "active") & (df["productive_hours"] > 0)]
    considered = considered.drop_duplicates(subset="contractor_id")
    if considered.empty:
        above_pct = 0
    else:
        above = considered["productive_hours"] >= considered["contractor_type"].map(medium_threshold)
        above_pct = int(round_half_up(above.sum() / len(considered) * 100))

    summary = DashboardSummary(
        total_contractors=len(active),
        total_hours=round_half_up(total_hours, 2),
        average_hours=round_half_up(average_hours, 2),
        above_threshold_percentage=above_pct,
        top_performers=top_performers(month, records, contractors, limit=DEFAULT_TOP_LIMIT),
        under_performers=under_performers(month, records, contractors, active_only=True),
        current_month=month,
    )
    logger.info(
        f"Dashboard {month}: {summary.total_contractors} active, "
        f"{summary.total_hours}h total, {summary.above_threshold_percentage}% above threshold"
    )
    return summary


# SPECIAL SECTIONS

@dataclass
class UpcomingEvent:
    name: str
    date: str
    days_until: int
    contractor_id: Optional[int] = None
    years: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SpecialSections:
    birthdays: List[UpcomingEvent] = field(default_factory=list)
    anniversaries: List[UpcomingEvent] = field(default_factory=list)
    holidays: List[UpcomingEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_roster_date(value: Optional[str]) -> Optional[date]:
    """Parse a free-text roster date; None when no known format matches."""
    if not value or not value.strip():
        return None
    text = value.strip()
    for fmt in ROSTER_DATE_FORMATS:
        parsed = pd.to_datetime(text, format=fmt, errors="coerce")
        if not pd.isna(parsed):
            return parsed.date()
    return None


def in_year(original: date, year: int) -> date:
    """original's month and day in another year (Feb 29 becomes Feb 28)."""
    return original + relativedelta(years=year - original.year)


def next_occurrence(original: date, today: date) -> date:
    """Next date on or after today that falls on original's month and day."""
    candidate = in_year(original, today.year)
    if candidate < today:
        candidate = in_year(original, today.year + 1)
    return candidate


class HolidayCalendar(AbstractHolidayCalendar):
    """US federal holidays on their calendar dates (no weekend observance shift)."""

    rules = [
        Holiday("New Year's Day", month=1, day=1),
        Holiday("Martin Luther King Jr. Day", month=1, day=1, offset=DateOffset(weekday=MO(3))),
        Holiday("Presidents' Day", month=2, day=1, offset=DateOffset(weekday=MO(3))),
        Holiday("Memorial Day", month=5, day=31, offset=DateOffset(weekday=MO(-1))),
        Holiday("Independence Day", month=7, day=4),
        Holiday("Labor Day", month=9, day=1, offset=DateOffset(weekday=MO(1))),
        Holiday("Columbus Day", month=10, day=1, offset=DateOffset(weekday=MO(2))),
        Holiday("Veterans Day", month=11, day=11),
        Holiday("Thanksgiving", month=11, day=1, offset=DateOffset(weekday=TH(4))),
        Holiday("Christmas Day", month=12, day=25),
    ]


HOLIDAY_CALENDAR = HolidayCalendar()


def us_federal_holidays(year: int) -> List[Tuple[str, date]]:
    """(name, date) pairs for a year's US federal holidays, in date order."""
    holidays = HOLIDAY_CALENDAR.holidays(
        start=pd.Timestamp(year, 1, 1),
        end=pd.Timestamp(year, 12, 31),
        return_name=True,
    )
    return [(name, stamp.date()) for stamp, name in holidays.sort_index().items()]


def special_sections(
    contractors: Iterable[Contractor],
    today: Optional[date] = None,
    window_days: int = UPCOMING_WINDOW_DAYS
) -> SpecialSections:
    """
    Upcoming birthdays, work anniversaries and holidays.

    Only active contractors are considered. Anniversaries need at least one
    completed year. Holidays are the rest of the current calendar year.
    """
    today = today or date.today()
    sections = SpecialSections()

    for contractor in contractors:
        if not contractor.is_active:
            continue

        birthday = parse_roster_date(contractor.birthday)
        if birthday:
            upcoming = next_occurrence(birthday, today)
            days_until = (upcoming - today).days
            if days_until <= window_days:
                sections.birthdays.append(UpcomingEvent(
                    name=contractor.name,
                    date=upcoming.isoformat(),
                    days_until=days_until,
                    contractor_id=contractor.id,
                ))

        start = parse_roster_date(contractor.start_date)
        if start:
            anniversary = in_year(start, today.year)
            days_until = (anniversary - today).days
            years = today.year - start.year
            if 0 <= days_until <= window_days and years >= 1:
                sections.anniversaries.append(UpcomingEvent(
                    name=contractor.name,
                    date=anniversary.isoformat(),
                    days_until=days_until,
                    contractor_id=contractor.id,
                    years=years,
                ))

    for name, holiday in us_federal_holidays(today.year):
        days_until = (holiday - today).days
        if days_until >= 0:
            sections.holidays.append(UpcomingEvent(
                name=name,
                date=holiday.isoformat(),
                days_until=days_until,
            ))

    sections.birthdays.sort(key=lambda e: e.days_until)
    sections.anniversaries.sort(key=lambda e: e.days_until)
    return sections
