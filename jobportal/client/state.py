"""
Client-side mirror of the logged-in user's server state.

UserState is a flat snapshot of the account's profile plus the ids of
the jobs it applied to. Reducers return a new snapshot; they never
touch storage (see SessionStore) or the network (see JobBoardClient).

`details_completed` is whatever the server last said. Local patches
never recompute it.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from jobportal.schemas.schemas import CompanyEntry, ProfileDetails, SkillEntry, UserRole


class UserState(BaseModel):
    user_email: str = ""
    token: str = ""
    logged_in: bool = False
    details_completed: bool = False
    role: Optional[UserRole] = None
    name: Optional[str] = None
    age: Optional[int] = None
    company_name: Optional[str] = None
    company_id: Optional[int] = None
    location: Optional[str] = None
    companies: List[CompanyEntry] = []
    skills_list: List[SkillEntry] = []
    experience: Optional[int] = None
    applied_jobs: List[int] = Field(default_factory=list)


# Profile fields a server payload or a local patch may carry
PROFILE_FIELDS = (
    "name", "age", "role", "company_name", "company_id", "location",
    "companies", "skills_list", "experience",
)


def register_success(payload: Dict[str, Any]) -> UserState:
    """Fresh snapshot for a just-registered account; nothing carries over."""
    token = payload.get("token") or ""
    return UserState(
        user_email=payload.get("user_email") or "",
        token=token,
        logged_in=bool(token),
    )


def login_success(state: UserState, payload: Dict[str, Any]) -> UserState:
    """
    Merge a login (or profile) response into the snapshot.

    Accepts either the full envelope ({token, user_email, userDetails, role})
    or a bare details record. Fields the payload does not carry keep their
    current value.
    """
    raw_details = payload.get("userDetails", payload)
    details = ProfileDetails.model_validate(raw_details)
    sent = details.model_fields_set

    changes: Dict[str, Any] = {
        "user_email": payload.get("user_email") or state.user_email,
        "token": payload.get("token") or state.token,
        "logged_in": True,
    }
    for field in PROFILE_FIELDS:
        if field in sent:
            changes[field] = getattr(details, field)
    if payload.get("role") is not None:
        changes["role"] = UserRole(payload["role"])
    if "appliedJobs" in raw_details:
        changes["applied_jobs"] = list(raw_details["appliedJobs"])
    if "details_completed" in sent:
        changes["details_completed"] = details.details_completed

    return state.model_copy(update=changes)


def update_details(state: UserState, patch: Dict[str, Any]) -> UserState:
    """
    Apply a local edit. Keys present in the patch overwrite, None clears.
    details_completed is left untouched.
    """
    changes = {k: v for k, v in patch.items() if k in PROFILE_FIELDS}
    for field in ("companies", "skills_list"):
        if field in changes and changes[field] is None:
            changes[field] = []
    merged = state.model_dump()
    merged.update(changes)
    return UserState.model_validate(merged)


def set_details_completed(state: UserState, completed: bool) -> UserState:
    return state.model_copy(update={"details_completed": completed})


def add_applied_job(state: UserState, job_id: int) -> UserState:
    if job_id in state.applied_jobs:
        return state
    return state.model_copy(update={"applied_jobs": state.applied_jobs + [job_id]})


def remove_applied_job(state: UserState, job_id: int) -> UserState:
    return state.model_copy(update={"applied_jobs": [j for j in state.applied_jobs if j != job_id]})


def reset() -> UserState:
    return UserState()
