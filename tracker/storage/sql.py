# tracker/storage/sql.py
"""
Relational storage backend on SQLAlchemy.

Every operation opens its own session. Productivity upserts go through the
dialect's native INSERT ... ON CONFLICT DO UPDATE so the last write for a
(contractor_id, month) pair wins atomically.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from sqlalchemy import func, select, delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from db.db_utils import create_all_tables, get_session_factory, session_scope, upsert_row
from db.models import ContractorModel, ProductivityRecordModel
from tracker.common.exceptions import DuplicateContractorError, StorageError
from tracker.storage.base import (
    CONTRACTOR_TEXT_FIELDS,
    ROSTER_FIELDS,
    STATUS_ARCHIVED,
    Contractor,
    ContractorWithData,
    ProductivityRecord,
    contractor_defaults,
)
from tracker.storage.ordering import sort_months

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ROSTER_FIELDS + ("status", "contractor_type")
CONTRACTOR_COLUMNS = ("id",) + UPDATABLE_FIELDS


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# MODEL CONVERSION

def to_contractor(model: ContractorModel) -> Contractor:
    return Contractor(**{name: getattr(model, name) for name in CONTRACTOR_COLUMNS})


def to_record(model: ProductivityRecordModel) -> ProductivityRecord:
    return ProductivityRecord(
        id=model.id,
        contractor_id=model.contractor_id,
        month=model.month,
        productive_hours=model.productive_hours,
        total_hours=model.total_hours,
        productivity=model.productivity,
        created_at=model.created_at,
    )


class SqlStorage:
    """ProductivityStorage backed by a relational database."""

    def __init__(self, engine: Engine, clock: Callable[[], datetime] = utc_now) -> None:
        self.engine = engine
        self._session_factory = get_session_factory(engine)
        self._clock = clock

    def create_tables(self) -> None:
        create_all_tables(self.engine)

    def _session(self):
        return session_scope(self._session_factory)

    # CONTRACTORS

    def get_contractor(self, contractor_id: int) -> Optional[Contractor]:
        with self._session() as session:
            model = session.get(ContractorModel, contractor_id)
            return to_contractor(model) if model else None

    def get_all_contractors(self) -> List[Contractor]:
        with self._session() as session:
            models = session.scalars(select(ContractorModel).order_by(ContractorModel.id)).all()
            return [to_contractor(m) for m in models]

    def create_contractor(self, data: Dict[str, Any]) -> Contractor:
        values = contractor_defaults(data)
        values = {k: v for k, v in values.items() if k in CONTRACTOR_COLUMNS}
        try:
            with self._session() as session:
                if values.get("id") is None:
                    max_id = session.scalar(select(func.max(ContractorModel.id)))
                    values["id"] = (max_id or 0) + 1
                elif session.get(ContractorModel, values["id"]) is not None:
                    raise DuplicateContractorError(values["id"])

                model = ContractorModel(**values)
                session.add(model)
                session.flush()
                contractor = to_contractor(model)
        except IntegrityError as e:
            raise DuplicateContractorError(values["id"], original_error=e)
        except SQLAlchemyError as e:
            raise StorageError("Failed to create contractor", operation="create_contractor", original_error=e)

        logger.info(f"Created contractor {contractor.id} ({contractor.name})")
        return contractor

    def update_contractor(self, contractor_id: int, changes: Dict[str, Any]) -> Optional[Contractor]:
        try:
            with self._session() as session:
                model = session.get(ContractorModel, contractor_id)
                if model is None:
                    return None
                for name, value in changes.items():
                    if name not in UPDATABLE_FIELDS:
                        continue
                    if value is None and name in CONTRACTOR_TEXT_FIELDS:
                        value = ""
                    setattr(model, name, value)
                session.flush()
                return to_contractor(model)
        except SQLAlchemyError as e:
            raise StorageError("Failed to update contractor", operation="update_contractor", original_error=e)

    def archive_contractor(self, contractor_id: int) -> bool:
        with self._session() as session:
            model = session.get(ContractorModel, contractor_id)
            if model is None:
                return False
            model.status = STATUS_ARCHIVED
        logger.info(f"Archived contractor {contractor_id}")
        return True

    def upsert_contractors(self, rows: Iterable[Dict[str, Any]]) -> List[Contractor]:
        saved = []
        for row in rows:
            try:
                with self._session() as session:
                    model = session.get(ContractorModel, row["id"])
                    if model is None:
                        values = contractor_defaults(row)
                        model = ContractorModel(**{k: v for k, v in values.items() if k in CONTRACTOR_COLUMNS})
                        session.add(model)
                    else:
                        for name in ROSTER_FIELDS:
                            if name in row:
                                setattr(model, name, row[name] if row[name] is not None else "")
                    session.flush()
                    saved.append(to_contractor(model))
            except SQLAlchemyError as e:
                logger.error(f"Failed to save contractor {row.get('id')}: {e}")
        return saved

    # PRODUCTIVITY

    def get_productivity_for_contractor(self, contractor_id: int) -> List[ProductivityRecord]:
        with self._session() as session:
            stmt = select(ProductivityRecordModel).where(
                ProductivityRecordModel.contractor_id == contractor_id
            )
            return [to_record(m) for m in session.scalars(stmt).all()]

    def get_all_productivity(self) -> List[ProductivityRecord]:
        with self._session() as session:
            return [to_record(m) for m in session.scalars(select(ProductivityRecordModel)).all()]

    def get_productivity_by_month(self, month: str) -> List[ProductivityRecord]:
        with self._session() as session:
            stmt = (
                select(ProductivityRecordModel)
                .where(ProductivityRecordModel.month == month)
                .order_by(
                    ProductivityRecordModel.productive_hours.desc(),
                    ProductivityRecordModel.productivity.desc(),
                )
            )
            return [to_record(m) for m in session.scalars(stmt).all()]

    def list_months(self) -> List[str]:
        with self._session() as session:
            months = session.scalars(select(ProductivityRecordModel.month).distinct()).all()
            return sort_months(months)

    def upsert_productivity_records(self, rows: Iterable[Dict[str, Any]]) -> List[ProductivityRecord]:
        """
        Upsert records one at a time.

        Each row commits on its own; a failing row is logged and skipped
        without rolling back the rows before it.
        """
        saved = []
        for row in rows:
            key = (row.get("contractor_id"), row.get("month"))
            try:
                values = {
                    "id": str(uuid4()),
                    "contractor_id": int(row["contractor_id"]),
                    "month": row["month"],
                    "productive_hours": float(row["productive_hours"]),
                    "total_hours": float(row["total_hours"]),
                    "productivity": float(row["productivity"]),
                    "created_at": self._clock(),
                }
                with self._session() as session:
                    upsert_row(
                        session,
                        ProductivityRecordModel,
                        values,
                        conflict_columns=["contractor_id", "month"],
                    )
                    model = session.scalars(
                        select(ProductivityRecordModel).where(
                            ProductivityRecordModel.contractor_id == values["contractor_id"],
                            ProductivityRecordModel.month == values["month"],
                        )
                    ).one()
                    saved.append(to_record(model))
            except (KeyError, TypeError, ValueError, SQLAlchemyError) as e:
                logger.error(f"Failed to upsert productivity record {key}: {e}")
        return saved

    def delete_productivity_for_month(self, month: str) -> bool:
        with self._session() as session:
            result = session.execute(
                delete(ProductivityRecordModel).where(ProductivityRecordModel.month == month)
            )
            deleted = result.rowcount or 0
        logger.info(f"Deleted {deleted} productivity records for {month}")
        return deleted > 0

    # COMBINED

    def get_contractors_with_data(self) -> List[ContractorWithData]:
        contractors = self.get_all_contractors()
        records_by_contractor: Dict[int, List[ProductivityRecord]] = {}
        for record in self.get_all_productivity():
            records_by_contractor.setdefault(record.contractor_id, []).append(record)

        return [
            ContractorWithData(
                **c.to_dict(),
                productivity_data=records_by_contractor.get(c.id, []),
            )
            for c in contractors
        ]
