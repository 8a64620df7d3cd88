"""Pydantic schemas for request/response validation."""

from datetime import datetime
from typing import Optional, List, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# CONTRACTOR SCHEMAS

class ContractorBase(CamelModel):
    """Base contractor schema with common fields."""
    name: str = Field(..., min_length=1, description="Contractor display name")
    personal_email: Optional[str] = ""
    work_email: Optional[str] = ""
    work_location: Optional[str] = ""
    position: Optional[str] = ""
    start_date: Optional[str] = Field("", description="Free text, usually M/D/YYYY")
    separation_date: Optional[str] = ""
    birthday: Optional[str] = ""
    status: Literal["active", "archived"] = "active"
    contractor_type: str = Field("Full Time", description="'Full Time' or 'Part Time'")


class ContractorCreate(ContractorBase):
    """Schema for creating a contractor; id is assigned when omitted."""
    id: Optional[int] = Field(None, ge=1, description="Business id (max + 1 when omitted)")


class ContractorUpdate(CamelModel):
    """Schema for updating a contractor (all fields optional, id cannot change)."""
    name: Optional[str] = Field(None, min_length=1)
    personal_email: Optional[str] = None
    work_email: Optional[str] = None
    work_location: Optional[str] = None
    position: Optional[str] = None
    start_date: Optional[str] = None
    separation_date: Optional[str] = None
    birthday: Optional[str] = None
    status: Optional[Literal["active", "archived"]] = None
    contractor_type: Optional[str] = None


class ContractorResponse(ContractorBase):
    """Schema for contractor response with all fields."""
    id: int


# PRODUCTIVITY SCHEMAS

class ProductivityRecordResponse(CamelModel):
    """One month of hours for one contractor."""
    id: str
    contractor_id: int
    month: str
    productive_hours: float
    total_hours: float
    productivity: float
    created_at: Optional[datetime] = None


class ContractorWithDataResponse(ContractorResponse):
    """Contractor plus every productivity record it has."""
    productivity_data: List[ProductivityRecordResponse] = []


class MonthlyRankingResponse(CamelModel):
    contractor_id: int
    name: str
    hours: float
    rank: int
    month: str
    productivity: float = 0.0
    contractor_type: str = "Full Time"


# DASHBOARD SCHEMAS

class DashboardSummaryResponse(CamelModel):
    total_contractors: int
    total_hours: float
    average_hours: float
    above_threshold_percentage: int
    top_performers: List[MonthlyRankingResponse] = []
    under_performers: List[MonthlyRankingResponse] = []
    current_month: Optional[str] = None


class UpcomingEventResponse(CamelModel):
    name: str
    date: str
    days_until: int
    contractor_id: Optional[int] = None
    years: Optional[int] = None


class SpecialSectionsResponse(CamelModel):
    birthdays: List[UpcomingEventResponse] = []
    anniversaries: List[UpcomingEventResponse] = []
    holidays: List[UpcomingEventResponse] = []


# UPLOAD SCHEMAS

class UploadResponse(CamelModel):
    """Result of an upload; errors and warnings hold at most 10 entries each."""
    message: str
    processed: int
    errors: List[str] = []
    warnings: List[str] = []


class ProductivityUploadResponse(UploadResponse):
    data: List[ProductivityRecordResponse] = []


class RosterUploadResponse(UploadResponse):
    data: List[ContractorResponse] = []


# AUTH SCHEMAS

class LoginRequest(CamelModel):
    password: str


class LoginResponse(CamelModel):
    success: bool
    message: str
    token: Optional[str] = None
    token_type: str = "bearer"


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str


class AuthStatusResponse(CamelModel):
    is_admin: bool


class MessageResponse(CamelModel):
    success: bool = True
    message: str
