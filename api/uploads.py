# api/uploads.py
"""CSV upload endpoints for productivity data and the contractor roster."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from api.auth import require_admin
from api.database import get_app_settings, get_storage
from api.schemas import ProductivityUploadResponse, RosterUploadResponse
from tracker.common.config import Settings
from tracker.orchestrator import process_productivity_upload, process_roster_upload
from tracker.storage.base import ProductivityStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Uploads"], dependencies=[Depends(require_admin)])

CSV_CONTENT_TYPES = ("text/csv", "application/csv", "application/vnd.ms-excel")


async def read_csv_upload(csv_file: Optional[UploadFile], settings: Settings) -> str:
    """Validate an uploaded file and return its text."""
    if csv_file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    filename = (csv_file.filename or "").lower()
    if not filename.endswith(".csv") and csv_file.content_type not in CSV_CONTENT_TYPES:
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")

    # Read one byte past the cap
    raw = await csv_file.read(settings.max_upload_bytes + 1)
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    logger.info(f"Received upload {csv_file.filename} ({len(raw)} bytes)")
    return raw.decode("utf-8", errors="replace")


@router.post("/upload-csv", response_model=ProductivityUploadResponse)
async def upload_productivity_csv(
    csv_file: Optional[UploadFile] = File(None, alias="csvFile"),
    storage: ProductivityStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings)
):
    """
    Upload monthly productivity data.

    Expected header: Emp No.,Name,Month,Productive Hours,Hours,Productivity
    """
    content = await read_csv_upload(csv_file, settings)
    result = process_productivity_upload(content, storage, settings)
    return ProductivityUploadResponse(
        message=result.message,
        processed=result.processed,
        errors=result.errors,
        warnings=result.warnings,
        data=[item.to_dict() for item in result.data],
    )


@router.post("/upload-contractor-roster", response_model=RosterUploadResponse)
async def upload_contractor_roster(
    csv_file: Optional[UploadFile] = File(None, alias="csvFile"),
    storage: ProductivityStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings)
):
    """
    Upload the contractor roster.

    Expected header: Name,ID,Personal Email,Work Email,Work Location,Position,
    Start Date,Separation Date,Birthday
    """
    content = await read_csv_upload(csv_file, settings)
    result = process_roster_upload(content, storage)
    return RosterUploadResponse(
        message=result.message,
        processed=result.processed,
        errors=result.errors,
        data=[item.to_dict() for item in result.data],
    )
