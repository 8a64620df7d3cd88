# tracker/storage/base.py
"""
Storage interface and the domain records it exchanges.

Both backends (in-memory and relational) implement ProductivityStorage and
return these plain dataclasses, so callers never see ORM objects.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol

STATUS_ACTIVE = "active"
STATUS_ARCHIVED = "archived"
CONTRACTOR_STATUSES = (STATUS_ACTIVE, STATUS_ARCHIVED)

FULL_TIME = "Full Time"
PART_TIME = "Part Time"

CONTRACTOR_TEXT_FIELDS = (
    "personal_email", "work_email", "work_location", "position",
    "start_date", "separation_date", "birthday",
)
ROSTER_FIELDS = ("name",) + CONTRACTOR_TEXT_FIELDS


@dataclass
class Contractor:
    id: int
    name: str
    personal_email: str = ""
    work_email: str = ""
    work_location: str = ""
    position: str = ""
    start_date: str = ""
    separation_date: str = ""
    birthday: str = ""
    status: str = STATUS_ACTIVE
    contractor_type: str = FULL_TIME

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProductivityRecord:
    id: str
    contractor_id: int
    month: str
    productive_hours: float
    total_hours: float
    productivity: float
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ContractorWithData(Contractor):
    productivity_data: List[ProductivityRecord] = field(default_factory=list)


def contractor_defaults(data: Dict[str, Any]) -> Dict[str, Any]:
    """Fill the optional contractor fields so nothing is ever None."""
    values = dict(data)
    for name in CONTRACTOR_TEXT_FIELDS:
        if values.get(name) is None:
            values[name] = ""
    if not values.get("status"):
        values["status"] = STATUS_ACTIVE
    if not values.get("contractor_type"):
        values["contractor_type"] = FULL_TIME
    return values


class ProductivityStorage(Protocol):
    """Persistence gateway used by the upload pipeline, engine and API."""

    # Contractor operations
    def get_contractor(self, contractor_id: int) -> Optional[Contractor]: ...

    def get_all_contractors(self) -> List[Contractor]: ...

    def create_contractor(self, data: Dict[str, Any]) -> Contractor: ...

    def update_contractor(self, contractor_id: int, changes: Dict[str, Any]) -> Optional[Contractor]: ...

    def archive_contractor(self, contractor_id: int) -> bool: ...

    def upsert_contractors(self, rows: Iterable[Dict[str, Any]]) -> List[Contractor]: ...

    # Productivity operations
    def get_productivity_for_contractor(self, contractor_id: int) -> List[ProductivityRecord]: ...

    def get_all_productivity(self) -> List[ProductivityRecord]: ...

    def get_productivity_by_month(self, month: str) -> List[ProductivityRecord]: ...

    def list_months(self) -> List[str]: ...

    def upsert_productivity_records(self, rows: Iterable[Dict[str, Any]]) -> List[ProductivityRecord]: ...

    def delete_productivity_for_month(self, month: str) -> bool: ...

    # Combined
    def get_contractors_with_data(self) -> List[ContractorWithData]: ...
