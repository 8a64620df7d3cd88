# api/dashboard.py
"""Dashboard endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.database import get_app_settings, get_storage, get_today
from api.schemas import DashboardSummaryResponse, SpecialSectionsResponse
from tracker.common.config import Settings
from tracker.ranking.dashboard import dashboard_summary, latest_month, special_sections
from tracker.storage.base import ProductivityStorage

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


def resolve_dashboard_month(
    requested: Optional[str],
    settings: Settings,
    storage: ProductivityStorage
) -> Optional[str]:
    """Requested month, else the configured one, else the latest month with data."""
    return requested or settings.dashboard_month or latest_month(storage.list_months())


@router.get("/summary", response_model=DashboardSummaryResponse)
def get_summary(
    month: Optional[str] = Query(None, description="Month token, e.g. Aug-25"),
    storage: ProductivityStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings)
):
    """
    Headline numbers for a month.

    - **totalContractors**: active contractors
    - **totalHours** / **averageHours**: over all of the month's records
    - **aboveThresholdPercentage**: share of active contractors with hours at
      or above their type's threshold
    """
    contractors = storage.get_all_contractors()
    current = resolve_dashboard_month(month, settings, storage)
    if current is None:
        return DashboardSummaryResponse(
            total_contractors=sum(1 for c in contractors if c.is_active),
            total_hours=0,
            average_hours=0,
            above_threshold_percentage=0,
        )

    return dashboard_summary(current, storage.get_productivity_by_month(current), contractors)


@router.get("/special-sections", response_model=SpecialSectionsResponse)
def get_special_sections(
    storage: ProductivityStorage = Depends(get_storage),
    today: date = Depends(get_today)
):
    """Upcoming birthdays, work anniversaries and the rest of this year's US holidays."""
    return special_sections(storage.get_all_contractors(), today=today)
