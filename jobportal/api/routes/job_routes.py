"""
Job Routes

POST /jobs/create - Create job posting
GET /jobs - List postings with pagination
PUT /jobs/{job_id} - Update posting
DELETE /jobs/{job_id} - Delete posting and its applications
"""

import logging
import math

from fastapi import APIRouter, HTTPException, Query
from sqlalchemy import text

from jobportal.db.database import get_db_session, execute_raw_sql
from jobportal.services import profile_service, application_service
from jobportal.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobCreateResponse, JobListResponse, MessageResponse
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

JOB_COLUMNS = """
    jp.id, jp.title, jp.description, jp.location, jp.company_id, ud.company_name
    FROM job_posts jp
    LEFT JOIN user_details ud ON jp.company_id = ud.user_id
"""


def _job_from_row(r: dict) -> JobResponse:
    return JobResponse(
        id=r["id"], title=r["title"], description=r["description"], location=r["location"],
        company_id=r["company_id"], company_name=r["company_name"]
    )


@router.post("/create", response_model=JobCreateResponse, status_code=201)
async def create_job(job: JobCreate):
    """Create a job posting owned by the account behind `user_email`."""
    with get_db_session() as db:
        company_id = profile_service.require_account_id(db, job.user_email)

        # Postings join on user_details for the company name
        result = db.execute(text("SELECT user_id FROM user_details WHERE user_id = :id"), {"id": company_id})
        if not result.fetchone():
            db.execute(text("INSERT INTO user_details (user_id) VALUES (:id)"), {"id": company_id})

        result = db.execute(
            text("""
                INSERT INTO job_posts (company_id, title, description, location)
                VALUES (:company_id, :title, :description, :location)
                RETURNING id
            """),
            {"company_id": company_id, "title": job.title, "description": job.description, "location": job.location}
        )
        job_id = result.fetchone()[0]

        row = db.execute(text(f"SELECT {JOB_COLUMNS} WHERE jp.id = :jid"), {"jid": job_id}).mappings().first()

    logger.info("Job %s created by user %s", job_id, company_id)
    return JobCreateResponse(message="Job posted successfully", job=_job_from_row(row))


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """List postings, newest first, with the owner's company name."""
    total = execute_raw_sql("SELECT COUNT(id) AS count FROM job_posts")[0]["count"]
    offset = (page - 1) * limit

    rows = execute_raw_sql(
        f"SELECT {JOB_COLUMNS} ORDER BY jp.id DESC LIMIT :limit OFFSET :offset",
        {"limit": limit, "offset": offset}
    )

    return JobListResponse(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_jobs=total,
        limit=limit,
        jobs=[_job_from_row(r) for r in rows],
    )


@router.put("/{job_id}", response_model=MessageResponse)
async def update_job(job_id: int, update: JobUpdate):
    """Update a job posting. Only provided fields change; a null location clears it."""
    with get_db_session() as db:
        if not application_service.job_exists(db, job_id):
            raise HTTPException(status_code=404, detail="Job not found")

        updates = []
        params = {"jid": job_id}

        for field in ["title", "description", "location"]:
            if field not in update.model_fields_set:
                continue
            value = getattr(update, field)
            if value is None and field != "location":
                raise HTTPException(status_code=400, detail=f"{field} cannot be null")
            updates.append(f"{field} = :{field}")
            params[field] = value

        if updates:
            db.execute(text(f"UPDATE job_posts SET {', '.join(updates)} WHERE id = :jid"), params)

    return MessageResponse(message="Job updated successfully")


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: int):
    """Delete a job posting. Its applications are removed first, in the same transaction."""
    with get_db_session() as db:
        application_service.delete_job_with_applications(db, job_id)

    return MessageResponse(message="Job deleted successfully")
