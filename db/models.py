# db/models.py
"""
Tracker Models - contractor roster and monthly productivity records.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Float, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ContractorModel(Base):
    """Roster entry. The id is assigned by the business, not the database."""

    __tablename__ = "contractors"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String, nullable=False)

    # Roster details, stored as entered
    personal_email = Column(String, nullable=False, default="")
    work_email = Column(String, nullable=False, default="")
    work_location = Column(String, nullable=False, default="")
    position = Column(String, nullable=False, default="")
    start_date = Column(String, nullable=False, default="")
    separation_date = Column(String, nullable=False, default="")
    birthday = Column(String, nullable=False, default="")

    status = Column(String, nullable=False, default="active")
    contractor_type = Column(String, nullable=False, default="Full Time")

    def __repr__(self):
        return f"<ContractorModel(id={self.id}, name={self.name}, status={self.status})>"


class ProductivityRecordModel(Base):
    """One contractor's hours for one month. No foreign key to contractors."""

    __tablename__ = "productivity_data"
    __table_args__ = (
        UniqueConstraint("contractor_id", "month", name="uq_productivity_contractor_month"),
    )

    id = Column(String, primary_key=True)
    contractor_id = Column(Integer, nullable=False, index=True)
    month = Column(String, nullable=False, index=True)
    productive_hours = Column(Float, nullable=False, default=0)
    total_hours = Column(Float, nullable=False, default=0)
    productivity = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return (
            f"<ProductivityRecordModel(contractor_id={self.contractor_id}, "
            f"month={self.month}, hours={self.productive_hours})>"
        )
