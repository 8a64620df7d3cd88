# tracker/storage/__init__.py
"""
Storage - one ProductivityStorage interface, memory and relational backends.
"""

import logging
from pathlib import Path
from typing import Optional

from db.db_utils import get_engine
from tracker.common.config import Settings, get_settings
from tracker.storage.base import (
    Contractor,
    ContractorWithData,
    ProductivityRecord,
    ProductivityStorage,
    FULL_TIME,
    PART_TIME,
    STATUS_ACTIVE,
    STATUS_ARCHIVED,
)
from tracker.storage.memory import MemoryStorage
from tracker.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(database_url: str) -> None:
    prefix = "sqlite:///"
    if database_url.startswith(prefix) and ":memory:" not in database_url:
        Path(database_url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings: Optional[Settings] = None) -> ProductivityStorage:
    """
    Build the storage backend named by settings.storage_backend.

    The relational backend creates its tables on first use.
    """
    if settings is None:
        settings = get_settings()

    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return MemoryStorage()

    _ensure_sqlite_directory(settings.database_url)
    storage = SqlStorage(get_engine(settings.database_url))
    storage.create_tables()
    logger.info("Using database storage")
    return storage


__all__ = [
    "Contractor",
    "ContractorWithData",
    "ProductivityRecord",
    "ProductivityStorage",
    "FULL_TIME",
    "PART_TIME",
    "STATUS_ACTIVE",
    "STATUS_ARCHIVED",
    "MemoryStorage",
    "SqlStorage",
    "create_storage",
]
