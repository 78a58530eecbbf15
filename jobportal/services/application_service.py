"""
Application Service - job application lifecycle.

    pending --respond(accept)--> accept
    pending --respond(reject)--> reject
    pending --withdraw-------->  (row deleted)

One row per (job, applicant) is guaranteed by the uq_job_applicant
constraint, not by a read-then-insert check. A second apply is refused
whatever the first application's status is: applications are one-shot
per job, and only a withdrawn (deleted) application frees the slot.
"""

import logging

from fastapi import HTTPException
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.schemas.schemas import ApplicationStatus, ApplicationAction

logger = logging.getLogger(__name__)


def job_exists(db: Session, job_id: int) -> bool:
    row = db.execute(text("SELECT id FROM job_posts WHERE id = :jid"), {"jid": job_id}).fetchone()
    return row is not None


def apply(db: Session, job_id: int, applicant_id: int) -> int:
    """Create a pending application and return its id."""
    if not job_exists(db, job_id):
        raise HTTPException(status_code=404, detail="Job not found")

    # A violation aborts the whole unit of work; the caller rolls it back
    try:
        result = db.execute(
            text("""
                INSERT INTO job_applications (job_id, applicant_id, status)
                VALUES (:jid, :aid, :status)
                RETURNING id
            """),
            {"jid": job_id, "aid": applicant_id, "status": ApplicationStatus.pending.value}
        )
        application_id = result.fetchone()[0]
    except IntegrityError:
        logger.info("Duplicate application refused: job %s, applicant %s", job_id, applicant_id)
        raise HTTPException(status_code=400, detail="Already applied")

    logger.info("Application %s created: job %s, applicant %s", application_id, job_id, applicant_id)
    return application_id


def respond(db: Session, application_id: int, action: ApplicationAction) -> None:
    """
    Company decision on an application.

    Overwrites the status unconditionally, so answering twice is allowed.
    """
    result = db.execute(
        text("UPDATE job_applications SET status = :status WHERE id = :id"),
        {"status": action.value, "id": application_id}
    )
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Application not found")
    logger.info("Application %s set to %s", application_id, action.value)


def withdraw(db: Session, job_id: int, applicant_id: int) -> None:
    """Delete the applicant's application, only while it is still pending."""
    row = db.execute(
        text("SELECT id, status FROM job_applications WHERE job_id = :jid AND applicant_id = :aid"),
        {"jid": job_id, "aid": applicant_id}
    ).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Application not found")

    application_id, status = row
    if status != ApplicationStatus.pending.value:
        raise HTTPException(status_code=400, detail="Only pending applications can be withdrawn")

    result = db.execute(
        text("DELETE FROM job_applications WHERE id = :id AND status = :pending"),
        {"id": application_id, "pending": ApplicationStatus.pending.value}
    )
    if result.rowcount == 0:
        # Answered between the read and the delete
        raise HTTPException(status_code=400, detail="Only pending applications can be withdrawn")
    logger.info("Application %s withdrawn", application_id)


def delete_job_with_applications(db: Session, job_id: int) -> None:
    """Remove a posting and every application to it, applications first."""
    if not job_exists(db, job_id):
        raise HTTPException(status_code=404, detail="Job not found")

    removed = db.execute(
        text("DELETE FROM job_applications WHERE job_id = :jid"),
        {"jid": job_id}
    ).rowcount
    db.execute(text("DELETE FROM job_posts WHERE id = :jid"), {"jid": job_id})
    logger.info("Job %s deleted with %s application(s)", job_id, removed)
