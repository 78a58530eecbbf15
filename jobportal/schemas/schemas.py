"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Wire names follow the web client (camelCase profile fields, snake_case
`user_email`), so fields declare aliases and accept either spelling.
"""

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, field_validator, model_validator
from typing import Annotated, Optional, List, Any
from enum import Enum


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


Email = Annotated[EmailStr, BeforeValidator(_strip)]


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    company = "company"
    freelancer = "freelancer"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accept = "accept"
    reject = "reject"


class ApplicationAction(str, Enum):
    accept = "accept"
    reject = "reject"


# ============================================================
# STRUCTURED LIST ENTRIES (stored as JSON text columns)
# ============================================================

class SkillEntry(WireModel):
    skill: str = Field(..., min_length=1)
    experience_years: int = Field(0, ge=0, le=80, alias="experienceYears")

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_keys(cls, data: Any) -> Any:
        # Older clients sent {"skills": ..., "experience": ...}
        if isinstance(data, dict):
            data = dict(data)
            if "skill" not in data and "skills" in data:
                data["skill"] = data.pop("skills")
            if "experienceYears" not in data and "experience_years" not in data and "experience" in data:
                data["experienceYears"] = data.pop("experience")
            if data.get("experienceYears") in ("", None):
                data.pop("experienceYears", None)
        return data


class CompanyEntry(WireModel):
    company_name: str = Field(..., min_length=1, alias="companyName")
    location: Optional[str] = None


# ============================================================
# AUTH SCHEMAS
# ============================================================

class CredentialsRequest(WireModel):
    user_email: Email
    password: str = Field(..., min_length=1)


class RegisterRequest(CredentialsRequest):
    pass


class LoginRequest(CredentialsRequest):
    pass


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileDetails(WireModel):
    """Flat Profile + FreelancerProfile record as the client stores it."""
    name: Optional[str] = None
    age: Optional[int] = None
    role: Optional[UserRole] = None
    company_name: Optional[str] = Field(None, alias="companyName")
    location: Optional[str] = None
    companies: List[CompanyEntry] = []
    company_id: Optional[int] = None
    skills_list: List[SkillEntry] = Field([], alias="skillsList")
    experience: Optional[int] = None
    details_completed: bool = Field(False, alias="detailsCompleted")


class ProfileUpdate(WireModel):
    # Accepted for compatibility; the account always comes from the token
    user_email: Optional[str] = None
    name: Optional[str] = Field(None, max_length=255)
    age: Optional[int] = Field(None, ge=18, le=65)
    role: Optional[UserRole] = None
    company_name: Optional[str] = Field(None, max_length=255, alias="companyName")
    location: Optional[str] = Field(None, max_length=255)
    companies: Optional[List[CompanyEntry]] = None
    skills_list: Optional[List[SkillEntry]] = Field(None, alias="skillsList")

    @field_validator("companies", "skills_list", mode="before")
    @classmethod
    def blank_string_is_empty_list(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return []
        return value

    @field_validator("name", "company_name", "location")
    @classmethod
    def blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class AuthResponse(WireModel):
    success: bool = True
    message: str
    token: str
    user_email: str
    user_details: ProfileDetails = Field(..., alias="userDetails")
    is_new_user: bool = Field(..., alias="isNewUser")
    role: Optional[UserRole] = None


class ProfileResponse(WireModel):
    success: bool = True
    message: Optional[str] = None
    user_email: Optional[str] = None
    user_details: ProfileDetails = Field(..., alias="userDetails")


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(WireModel):
    user_email: Email
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    location: Optional[str] = Field(None, max_length=255)


class JobUpdate(WireModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, max_length=255)


class JobResponse(WireModel):
    id: int
    title: str
    description: str
    location: Optional[str] = None
    company_id: int
    company_name: Optional[str] = Field(None, alias="companyName")


class JobCreateResponse(WireModel):
    success: bool = True
    message: str
    job: JobResponse


class JobListResponse(WireModel):
    success: bool = True
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_jobs: int = Field(..., alias="totalJobs")
    limit: int
    jobs: List[JobResponse]


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationRequest(WireModel):
    user_email: Email
    job_id: int = Field(..., ge=1)


class ApplicationRespond(WireModel):
    action: ApplicationAction


class ApplicantResponse(WireModel):
    application_id: int = Field(..., alias="applicationId")
    status: ApplicationStatus
    user_email: str
    name: Optional[str] = None
    skills_list: List[SkillEntry] = Field([], alias="skillsList")
    experience: Optional[int] = None


class FreelancerApplication(WireModel):
    application_id: int = Field(..., alias="applicationId")
    status: ApplicationStatus
    job_id: int
    title: str
    description: str
    company_name: Optional[str] = Field(None, alias="companyName")
    location: Optional[str] = None


class FreelancerApplicationsResponse(WireModel):
    success: bool = True
    applications: List[FreelancerApplication]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(WireModel):
    success: bool = True
    message: str
