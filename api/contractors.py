# api/contractors.py
"""Contractor roster endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.auth import require_admin
from api.database import get_storage
from api.schemas import (
    ContractorCreate,
    ContractorResponse,
    ContractorUpdate,
    ContractorWithDataResponse,
    MessageResponse,
)
from tracker.common.exceptions import ContractorNotFoundError
from tracker.storage.base import CONTRACTOR_TEXT_FIELDS, ProductivityStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contractors", tags=["Contractors"])


@router.get("", response_model=List[ContractorResponse])
def list_contractors(storage: ProductivityStorage = Depends(get_storage)):
    """List every contractor, archived included, ordered by id."""
    return storage.get_all_contractors()


@router.get("/with-data", response_model=List[ContractorWithDataResponse])
def list_contractors_with_data(storage: ProductivityStorage = Depends(get_storage)):
    """List contractors together with all of their productivity records."""
    return storage.get_contractors_with_data()


@router.post(
    "",
    response_model=ContractorResponse,
    status_code=201,
    dependencies=[Depends(require_admin)]
)
def create_contractor(contractor: ContractorCreate, storage: ProductivityStorage = Depends(get_storage)):
    """
    Create a contractor.

    - **id**: Optional business id; the next free id (max + 1) when omitted
    - **name**: Required
    - 409 when the id is taken
    """
    return storage.create_contractor(contractor.model_dump())


@router.put(
    "/{contractor_id}",
    response_model=ContractorResponse,
    dependencies=[Depends(require_admin)]
)
def update_contractor(
    contractor_id: int,
    contractor_update: ContractorUpdate,
    storage: ProductivityStorage = Depends(get_storage)
):
    """
    Update an existing contractor.

    - Only provided fields are updated
    - An id in the body is ignored
    """
    update_data = {
        field: value
        for field, value in contractor_update.model_dump(exclude_unset=True).items()
        if value is not None or field in CONTRACTOR_TEXT_FIELDS
    }
    updated = storage.update_contractor(contractor_id, update_data)
    if updated is None:
        raise ContractorNotFoundError(contractor_id)
    return updated


@router.delete(
    "/{contractor_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)]
)
def archive_contractor(contractor_id: int, storage: ProductivityStorage = Depends(get_storage)):
    """
    Archive a contractor.

    Nothing is deleted: productivity history stays in place and the
    contractor drops out of active views.
    """
    if not storage.archive_contractor(contractor_id):
        raise ContractorNotFoundError(contractor_id)

    logger.info(f"Contractor {contractor_id} archived")
    return MessageResponse(message="Contractor archived successfully. Data preserved for historical records.")
