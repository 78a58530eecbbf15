"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas (what the API accepts)
- Response schemas (what the API returns)
- SkillEntry / CompanyEntry: the structured lists stored as JSON columns
"""

from jobportal.schemas.schemas import (
    UserRole, ApplicationStatus, ApplicationAction,
    SkillEntry, CompanyEntry, ProfileDetails, ProfileUpdate,
)

__all__ = [
    "UserRole",
    "ApplicationStatus",
    "ApplicationAction",
    "SkillEntry",
    "CompanyEntry",
    "ProfileDetails",
    "ProfileUpdate",
]
