"""
Profile Service - account rows and profile reconciliation.

An account owns three rows, created together at registration:
1. user_login         - email + password hash
2. user_details       - role, name, age, company projection, details_completed
3. freelancer_details - skill list + aggregate experience

The server is the only place `details_completed` is decided. It is set
by update_profile() and reset by clear_profile(); it is never derived
from which fields happen to be filled in.

JSON list columns (companies, skills_json) are validated before they are
written. Reads stay lenient: a legacy value that no longer decodes comes
back as an empty list instead of failing the request.
"""

import json
import logging
from typing import Optional, List, Type

from fastapi import HTTPException
from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy import text
from sqlalchemy.orm import Session

from jobportal.schemas.schemas import (
    Email, UserRole, SkillEntry, CompanyEntry, ProfileDetails, ProfileUpdate
)

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(Email)


# ============================================================
# ACCOUNTS
# ============================================================

def find_account_id(db: Session, email: str) -> Optional[int]:
    """Return the account id for an email, or None."""
    row = db.execute(
        text("SELECT id FROM user_login WHERE user_email = :email"),
        {"email": email}
    ).fetchone()
    return row[0] if row else None


def require_account_id(db: Session, email: str) -> int:
    """Account id for an email; 404 when nobody registered it."""
    user_id = find_account_id(db, email)
    if user_id is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user_id


def normalize_email(email: str) -> str:
    """
    Normalize an email taken from a URL the same way request bodies are,
    so path lookups match what registration stored. Unparseable input
    cannot belong to an account.
    """
    try:
        return str(_email_adapter.validate_python(email))
    except ValidationError:
        raise HTTPException(status_code=404, detail="User not found")


def create_account(db: Session, email: str, password_hash: str) -> int:
    """
    Insert the login row plus empty profile rows.

    Runs inside the caller's unit of work, so the three inserts commit
    together or not at all.
    """
    result = db.execute(
        text("INSERT INTO user_login (user_email, password) VALUES (:email, :password) RETURNING id"),
        {"email": email, "password": password_hash}
    )
    user_id = result.fetchone()[0]

    db.execute(
        text("INSERT INTO user_details (user_id, details_completed) VALUES (:id, FALSE)"),
        {"id": user_id}
    )
    db.execute(
        text("INSERT INTO freelancer_details (user_id) VALUES (:id)"),
        {"id": user_id}
    )
    return user_id


# ============================================================
# JSON LIST COLUMNS
# ============================================================

def decode_json_list(raw: Optional[str], item_model: Type[BaseModel], column: str, user_id: int) -> list:
    """
    Decode a JSON list column into validated entries.

    Anything that is not a well-formed list of entries becomes [] and is
    logged, never raised.
    """
    if not raw:
        return []
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError("not a JSON list")
        return TypeAdapter(List[item_model]).validate_python(items)
    except (ValueError, ValidationError) as e:
        logger.warning("Unreadable %s for user %s, defaulting to []: %s", column, user_id, e)
        return []


def encode_json_list(items: List[BaseModel]) -> str:
    return json.dumps([item.model_dump(by_alias=True) for item in items])


def aggregate_experience(skills: List[SkillEntry]) -> Optional[int]:
    """Longest experience across all skills."""
    if not skills:
        return None
    return max(s.experience_years for s in skills)


# ============================================================
# READ PATH
# ============================================================

def load_profile(db: Session, user_id: int) -> ProfileDetails:
    """Reassemble Profile + FreelancerProfile into one flat record."""
    ud = db.execute(
        text("""
            SELECT name, age, role, company_name, location, companies, details_completed
            FROM user_details WHERE user_id = :id
        """),
        {"id": user_id}
    ).mappings().first()
    fd = db.execute(
        text("SELECT name, skills_json, experience FROM freelancer_details WHERE user_id = :id"),
        {"id": user_id}
    ).mappings().first()

    ud = ud or {}
    fd = fd or {}

    return ProfileDetails(
        name=ud.get("name") or fd.get("name"),
        age=ud.get("age"),
        role=ud.get("role"),
        company_name=ud.get("company_name"),
        location=ud.get("location"),
        companies=decode_json_list(ud.get("companies"), CompanyEntry, "companies", user_id),
        company_id=user_id,
        skills_list=decode_json_list(fd.get("skills_json"), SkillEntry, "skills_json", user_id),
        experience=fd.get("experience"),
        details_completed=bool(ud.get("details_completed")),
    )


# ============================================================
# WRITE PATH
# ============================================================

def resolve_role(requested: Optional[UserRole], stored: Optional[str]) -> UserRole:
    """Explicit role wins, then the persisted one. Nothing is inferred."""
    if requested is not None:
        return requested
    if stored:
        return UserRole(stored)
    raise HTTPException(status_code=400, detail="role required")


def project_companies(company_name: Optional[str], location: Optional[str],
                      companies: Optional[List[CompanyEntry]]) -> List[CompanyEntry]:
    """
    Build the company list for a company profile.

    At most one company per account: companyName/location win, a
    single-element `companies` input is the fallback.
    """
    if companies and len(companies) > 1:
        raise HTTPException(status_code=400, detail="Only one company per account is supported")
    if company_name:
        return [CompanyEntry(company_name=company_name, location=location)]
    if companies:
        return [companies[0]]
    return []


def update_profile(db: Session, user_id: int, data: ProfileUpdate) -> ProfileDetails:
    """
    Upsert the caller's profile and mark details as completed.

    Fields absent from the request keep their stored value. The role
    decides which projection is written: company fields for companies,
    the freelancer_details row for freelancers. A company needs a company
    name and a freelancer a non-empty skill list, sent or already stored.
    """
    sent = data.model_fields_set
    existing = db.execute(
        text("SELECT name, age, role, company_name, location, companies FROM user_details WHERE user_id = :id"),
        {"id": user_id}
    ).mappings().first()
    stored = dict(existing) if existing else {}

    role = resolve_role(data.role, stored.get("role"))

    def pick(field: str, column: str):
        return getattr(data, field) if field in sent else stored.get(column)

    name = pick("name", "name")
    age = pick("age", "age")
    location = pick("location", "location")

    skills = None
    if role == UserRole.company:
        company_name = pick("company_name", "company_name")
        companies = project_companies(company_name, location, data.companies)
        if not companies:
            raise HTTPException(status_code=400, detail="companyName required")
        company_name = companies[0].company_name
        location = companies[0].location
    else:
        company_name = None
        companies = []
        skills = _resolve_skills(db, user_id, data.skills_list if "skills_list" in sent else None)
        if not skills:
            raise HTTPException(status_code=400, detail="skillsList required")

    params = {
        "id": user_id,
        "name": name,
        "age": age,
        "role": role.value,
        "company_name": company_name,
        "location": location,
        "companies": encode_json_list(companies),
    }

    if existing is None:
        db.execute(
            text("""
                INSERT INTO user_details (user_id, name, age, role, company_name, location, companies, details_completed)
                VALUES (:id, :name, :age, :role, :company_name, :location, :companies, TRUE)
            """),
            params
        )
    else:
        db.execute(
            text("""
                UPDATE user_details
                SET name = :name, age = :age, role = :role, company_name = :company_name,
                    location = :location, companies = :companies, details_completed = TRUE
                WHERE user_id = :id
            """),
            params
        )

    if role == UserRole.freelancer:
        _upsert_freelancer(db, user_id, name, skills)

    logger.info("Profile updated for user %s (role=%s)", user_id, role.value)
    return load_profile(db, user_id)


def _resolve_skills(db: Session, user_id: int,
                    sent: Optional[List[SkillEntry]]) -> List[SkillEntry]:
    """The skill list the update will store: the sent one, else the stored one."""
    if sent is not None:
        return sent
    row = db.execute(
        text("SELECT skills_json FROM freelancer_details WHERE user_id = :id"),
        {"id": user_id}
    ).fetchone()
    return decode_json_list(row[0] if row else None, SkillEntry, "skills_json", user_id)


def _upsert_freelancer(db: Session, user_id: int, name: Optional[str],
                       skills: List[SkillEntry]) -> None:
    row = db.execute(
        text("SELECT user_id FROM freelancer_details WHERE user_id = :id"),
        {"id": user_id}
    ).fetchone()

    params = {
        "id": user_id,
        "name": name,
        "skills": encode_json_list(skills),
        "experience": aggregate_experience(skills),
    }
    if row is None:
        db.execute(
            text("""
                INSERT INTO freelancer_details (user_id, name, skills_json, experience)
                VALUES (:id, :name, :skills, :experience)
            """),
            params
        )
    else:
        db.execute(
            text("""
                UPDATE freelancer_details SET name = :name, skills_json = :skills, experience = :experience
                WHERE user_id = :id
            """),
            params
        )


def clear_profile(db: Session, user_id: int) -> None:
    """Null every profile field; the rows themselves stay."""
    db.execute(
        text("""
            UPDATE user_details
            SET name = NULL, age = NULL, role = NULL, company_name = NULL, location = NULL,
                companies = NULL, details_completed = FALSE
            WHERE user_id = :id
        """),
        {"id": user_id}
    )
    db.execute(
        text("UPDATE freelancer_details SET name = NULL, skills_json = NULL, experience = NULL WHERE user_id = :id"),
        {"id": user_id}
    )
    logger.info("Profile cleared for user %s", user_id)
