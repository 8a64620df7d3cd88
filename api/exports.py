# api/exports.py
"""CSV download endpoints (admin only)."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from api.auth import require_admin
from api.database import get_storage
from tracker.export.reports import (
    CsvReport,
    contractors_report,
    csv_response_headers,
    productivity_report,
    rankings_report,
    under_performers_report,
)
from tracker.storage.base import ProductivityStorage

router = APIRouter(prefix="/api/export", tags=["Exports"], dependencies=[Depends(require_admin)])


def csv_response(report: CsvReport) -> Response:
    headers = csv_response_headers(report.filename)
    media_type = headers.pop("Content-Type")
    return Response(content=report.content.encode("utf-8"), media_type=media_type, headers=headers)


@router.get("/contractors")
def export_contractors(storage: ProductivityStorage = Depends(get_storage)):
    """Roster without personal contact details."""
    return csv_response(contractors_report(storage))


@router.get("/productivity/{month}")
def export_productivity(month: str, storage: ProductivityStorage = Depends(get_storage)):
    return csv_response(productivity_report(storage, month))


@router.get("/rankings/{month}")
def export_rankings(month: str, storage: ProductivityStorage = Depends(get_storage)):
    return csv_response(rankings_report(storage, month))


@router.get("/under-performers/{month}")
def export_under_performers(month: str, storage: ProductivityStorage = Depends(get_storage)):
    return csv_response(under_performers_report(storage, month))
