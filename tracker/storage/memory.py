# tracker/storage/memory.py
"""In-memory storage backend - dict-backed, used for tests and demos."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from tracker.common.exceptions import DuplicateContractorError
from tracker.storage.base import (
    CONTRACTOR_TEXT_FIELDS,
    ROSTER_FIELDS,
    STATUS_ARCHIVED,
    Contractor,
    ContractorWithData,
    ProductivityRecord,
    contractor_defaults,
)
from tracker.storage.ordering import sort_months, sort_month_records

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ROSTER_FIELDS + ("status", "contractor_type")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage:
    """Dict-backed ProductivityStorage. State lives only as long as the instance."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._contractors: Dict[int, Contractor] = {}
        self._records: Dict[Tuple[int, str], ProductivityRecord] = {}

    # CONTRACTORS

    def get_contractor(self, contractor_id: int) -> Optional[Contractor]:
        contractor = self._contractors.get(contractor_id)
        return replace(contractor) if contractor else None

    def get_all_contractors(self) -> List[Contractor]:
        return [replace(self._contractors[cid]) for cid in sorted(self._contractors)]

    def _next_id(self) -> int:
        return max(self._contractors, default=0) + 1

    def create_contractor(self, data: Dict[str, Any]) -> Contractor:
        values = contractor_defaults(data)
        if values.get("id") is None:
            values["id"] = self._next_id()
        if values["id"] in self._contractors:
            raise DuplicateContractorError(values["id"])

        contractor = Contractor(**{k: v for k, v in values.items() if k in Contractor.__dataclass_fields__})
        self._contractors[contractor.id] = contractor
        logger.info(f"Created contractor {contractor.id} ({contractor.name})")
        return replace(contractor)

    def update_contractor(self, contractor_id: int, changes: Dict[str, Any]) -> Optional[Contractor]:
        contractor = self._contractors.get(contractor_id)
        if contractor is None:
            return None
        for name, value in changes.items():
            if name not in UPDATABLE_FIELDS:
                continue
            if value is None and name in CONTRACTOR_TEXT_FIELDS:
                value = ""
            setattr(contractor, name, value)
        return replace(contractor)

    def archive_contractor(self, contractor_id: int) -> bool:
        contractor = self._contractors.get(contractor_id)
        if contractor is None:
            return False
        contractor.status = STATUS_ARCHIVED
        logger.info(f"Archived contractor {contractor_id}")
        return True

    def upsert_contractors(self, rows: Iterable[Dict[str, Any]]) -> List[Contractor]:
        saved = []
        for row in rows:
            existing = self._contractors.get(row["id"])
            if existing is None:
                saved.append(self.create_contractor(row))
                continue
            for name in ROSTER_FIELDS:
                if name in row:
                    setattr(existing, name, row[name] if row[name] is not None else "")
            saved.append(replace(existing))
        return saved

    # PRODUCTIVITY

    def get_productivity_for_contractor(self, contractor_id: int) -> List[ProductivityRecord]:
        return [replace(r) for r in self._records.values() if r.contractor_id == contractor_id]

    def get_all_productivity(self) -> List[ProductivityRecord]:
        return [replace(r) for r in self._records.values()]

    def get_productivity_by_month(self, month: str) -> List[ProductivityRecord]:
        return sort_month_records([replace(r) for r in self._records.values() if r.month == month])

    def list_months(self) -> List[str]:
        return sort_months({r.month for r in self._records.values()})

    def upsert_productivity_records(self, rows: Iterable[Dict[str, Any]]) -> List[ProductivityRecord]:
        saved = []
        for row in rows:
            try:
                key = (int(row["contractor_id"]), row["month"])
                existing = self._records.get(key)
                record = ProductivityRecord(
                    id=existing.id if existing else str(uuid4()),
                    contractor_id=key[0],
                    month=key[1],
                    productive_hours=float(row["productive_hours"]),
                    total_hours=float(row["total_hours"]),
                    productivity=float(row["productivity"]),
                    created_at=self._clock(),
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping productivity record {row}: {e}")
                continue
            self._records[key] = record
            saved.append(replace(record))
        return saved

    def delete_productivity_for_month(self, month: str) -> bool:
        keys = [key for key in self._records if key[1] == month]
        for key in keys:
            del self._records[key]
        logger.info(f"Deleted {len(keys)} productivity records for {month}")
        return bool(keys)

    # COMBINED

    def get_contractors_with_data(self) -> List[ContractorWithData]:
        return [
            ContractorWithData(
                **contractor.to_dict(),
                productivity_data=self.get_productivity_for_contractor(contractor.id),
            )
            for contractor in self.get_all_contractors()
        ]
