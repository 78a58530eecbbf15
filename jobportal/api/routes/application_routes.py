"""
Application Routes

POST /jobs/apply - Apply to a job
DELETE /jobs/withdraw - Withdraw a pending application
GET /jobs/{job_id}/applications - Applicants for a job
PUT /jobs/applications/{application_id}/respond - Accept or reject
GET /jobs/freelancer/{email}/applications - An applicant's applications

Shares the /jobs prefix with job_routes and must be included before it,
so /jobs/withdraw is not taken for a job id.
"""

from typing import List

from fastapi import APIRouter

from jobportal.db.database import get_db_session, execute_raw_sql
from jobportal.services import profile_service, application_service
from jobportal.services.profile_service import decode_json_list
from jobportal.schemas.schemas import (
    ApplicationRequest, ApplicationRespond, ApplicantResponse, SkillEntry,
    FreelancerApplication, FreelancerApplicationsResponse, MessageResponse
)

router = APIRouter(prefix="/jobs", tags=["Applications"])


@router.post("/apply", response_model=MessageResponse, status_code=201)
async def apply_to_job(request: ApplicationRequest):
    """Apply to a job. A second application to the same job is refused."""
    with get_db_session() as db:
        applicant_id = profile_service.require_account_id(db, request.user_email)
        application_service.apply(db, request.job_id, applicant_id)

    return MessageResponse(message="Applied successfully")


@router.delete("/withdraw", response_model=MessageResponse)
async def withdraw_application(request: ApplicationRequest):
    """Withdraw an application that has not been answered yet."""
    with get_db_session() as db:
        applicant_id = profile_service.require_account_id(db, request.user_email)
        application_service.withdraw(db, request.job_id, applicant_id)

    return MessageResponse(message="Application withdrawn successfully")


@router.put("/applications/{application_id}/respond", response_model=MessageResponse)
async def respond_to_application(application_id: int, request: ApplicationRespond):
    """Accept or reject an application."""
    with get_db_session() as db:
        application_service.respond(db, application_id, request.action)

    return MessageResponse(message=f"Application {request.action.value}ed successfully")


@router.get("/freelancer/{email}/applications", response_model=FreelancerApplicationsResponse)
async def get_applications_by_freelancer(email: str):
    """All applications of one applicant, newest first."""
    with get_db_session() as db:
        applicant_id = profile_service.require_account_id(db, profile_service.normalize_email(email))

    results = execute_raw_sql("""
        SELECT ja.id AS application_id, ja.status, ja.job_id, jp.title, jp.description,
               ud.company_name, jp.location
        FROM job_applications ja
        JOIN job_posts jp ON ja.job_id = jp.id
        LEFT JOIN user_details ud ON jp.company_id = ud.user_id
        WHERE ja.applicant_id = :aid
        ORDER BY ja.id DESC
    """, {"aid": applicant_id})

    return FreelancerApplicationsResponse(applications=[
        FreelancerApplication(
            application_id=r["application_id"], status=r["status"], job_id=r["job_id"],
            title=r["title"], description=r["description"], company_name=r["company_name"],
            location=r["location"]
        ) for r in results
    ])


@router.get("/{job_id}/applications", response_model=List[ApplicantResponse])
async def get_applicants_by_job(job_id: int):
    """Applicants for one job with their freelancer details."""
    results = execute_raw_sql("""
        SELECT ja.id AS application_id, ja.status, u.id AS user_id, u.user_email,
               fd.name, fd.skills_json, fd.experience
        FROM job_applications ja
        JOIN user_login u ON ja.applicant_id = u.id
        LEFT JOIN freelancer_details fd ON u.id = fd.user_id
        WHERE ja.job_id = :jid
        ORDER BY ja.id
    """, {"jid": job_id})

    return [
        ApplicantResponse(
            application_id=r["application_id"], status=r["status"], user_email=r["user_email"],
            name=r["name"], experience=r["experience"],
            skills_list=decode_json_list(r["skills_json"], SkillEntry, "skills_json", r["user_id"])
        ) for r in results
    ]
