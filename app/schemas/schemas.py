"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Wire names are camelCase (companyName, eligibleCourses, ...) and match the
field names stored in MongoDB. Python attributes stay snake_case.
Required request fields are declared Optional on purpose: the service layer
reports missing values as a 400 with a readable message.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored datetimes are naive UTC; mark them so JSON carries the offset."""
    if value is not None and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# ============================================================
# AUTH SCHEMAS
# ============================================================

class StudentRegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    college_email: Optional[EmailStr] = None
    password: Optional[str] = None
    mobile: Optional[str] = None
    roll_no: Optional[str] = None
    reg_no: Optional[str] = None
    college_name: Optional[str] = None
    specialization: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    passout_year: Optional[str] = None

class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None

class AdminLoginRequest(CamelModel):
    password: Optional[str] = None

class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    college_email: Optional[str] = None
    specialization: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    passout_year: Optional[str] = None

class TokenResponse(CamelModel):
    message: str
    token: str
    user: UserSummary

class AdminPrincipal(CamelModel):
    id: str = "admin"
    role: str = "admin"

class AdminTokenResponse(CamelModel):
    message: str
    token: str
    admin: AdminPrincipal


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentResponse(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    college_email: str
    mobile: str
    roll_no: str
    reg_no: str
    college_name: str
    specialization: str
    branch: str
    year: str
    passout_year: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_serializer("created_at")
    def serialize_created_at(self, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class StudentSummary(CamelModel):
    """Student view joined into a drive's registrations for admins."""
    id: str = Field(alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    specialization: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None


# ============================================================
# DRIVE SCHEMAS
# ============================================================

class DriveFields(CamelModel):
    company_name: Optional[str] = None
    statuses: Optional[List[str]] = None
    deadline: Optional[datetime] = None
    eligible_courses: Optional[List[str]] = None
    eligible_passout_years: Optional[List[str]] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_date_only(cls, value):
        # Admin forms send a bare date (YYYY-MM-DD); treat it as midnight UTC
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if len(value) == 10:
                return datetime.strptime(value, "%Y-%m-%d")
        return value

class DriveCreate(DriveFields):
    pass

class DriveUpdate(DriveFields):
    is_active: Optional[bool] = None

class StatusUpdateRequest(CamelModel):
    drive_id: Optional[str] = None
    status: Optional[str] = None

class RegistrationResponse(CamelModel):
    user_id: Union[StudentSummary, str, None] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_reg_no: Optional[str] = None
    user_mobile: Optional[str] = None
    user_specialization: Optional[str] = None
    user_branch: Optional[str] = None
    user_year: Optional[str] = None
    user_passout_year: Optional[str] = None
    status: Optional[str] = None
    timestamp: Optional[datetime] = None

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class DriveResponse(CamelModel):
    id: str = Field(alias="_id")
    company_name: str
    statuses: List[str] = []
    deadline: datetime
    eligible_courses: List[str] = []
    eligible_passout_years: List[str] = []
    registrations: List[RegistrationResponse] = []
    is_active: bool = True
    created_at: Optional[datetime] = None
    is_past: Optional[bool] = None

    @field_serializer("deadline", "created_at")
    def serialize_dates(self, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class DriveMessageResponse(CamelModel):
    message: str
    drive: DriveResponse


# ============================================================
# ADMIN SCHEMAS
# ============================================================

CollegeStatsResponse = Dict[str, int]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
