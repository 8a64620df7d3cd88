# api/productivity.py
"""Productivity records and ranking endpoints."""

import logging
from typing import List, Optional
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from api.auth import client_key, require_admin
from api.database import get_storage
from api.schemas import MessageResponse, MonthlyRankingResponse, ProductivityRecordResponse
from tracker.ingest.utils import is_month_token, parse_int
from tracker.ranking.engine import DEFAULT_TOP_LIMIT, monthly_rankings, top_performers, under_performers
from tracker.storage.base import ProductivityStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Productivity"])


def resolve_top_limit(raw: Optional[str]) -> int:
    limit = parse_int(raw)
    if limit is None or limit < 1:
        return DEFAULT_TOP_LIMIT
    return limit


@router.get("/productivity/{month}", response_model=List[ProductivityRecordResponse])
def get_month_productivity(month: str, storage: ProductivityStorage = Depends(get_storage)):
    """All records for a month, most productive hours first."""
    return storage.get_productivity_by_month(month)


@router.delete(
    "/productivity/{month}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)]
)
def delete_month_productivity(
    month: str,
    request: Request,
    storage: ProductivityStorage = Depends(get_storage)
):
    """
    Delete every record of a month.

    - 400 unless month looks like "Aug-25"
    - 403 when the Origin header names another host
    - 404 when the month had no records
    """
    if not is_month_token(month):
        raise HTTPException(
            status_code=400,
            detail="Invalid month format. Expected format: 'MMM-YY' (e.g., 'Aug-25')"
        )

    origin = request.headers.get("origin")
    if origin and urlparse(origin).netloc != request.headers.get("host"):
        raise HTTPException(status_code=403, detail="Forbidden: Invalid origin")

    if not storage.delete_productivity_for_month(month):
        raise HTTPException(status_code=404, detail=f"No productivity data found for {month}")

    logger.info(f"Admin deleted productivity data for {month} from {client_key(request)}")
    return MessageResponse(message=f"Successfully deleted all productivity data for {month}")


@router.get("/rankings/{month}", response_model=List[MonthlyRankingResponse])
def get_rankings(month: str, storage: ProductivityStorage = Depends(get_storage)):
    return monthly_rankings(month, storage.get_productivity_by_month(month), storage.get_all_contractors())


@router.get("/top-performers/{month}", response_model=List[MonthlyRankingResponse])
def get_top_performers(
    month: str,
    limit: Optional[str] = Query(None, description="How many to return (default 3)"),
    storage: ProductivityStorage = Depends(get_storage)
):
    """Missing, non-numeric or non-positive limits fall back to 3."""
    return top_performers(
        month,
        storage.get_productivity_by_month(month),
        storage.get_all_contractors(),
        limit=resolve_top_limit(limit),
    )


@router.get("/under-performers/{month}", response_model=List[MonthlyRankingResponse])
def get_under_performers(month: str, storage: ProductivityStorage = Depends(get_storage)):
    """Contractors below their type's threshold (Full Time < 100h, Part Time < 50h)."""
    return under_performers(month, storage.get_productivity_by_month(month), storage.get_all_contractors())
