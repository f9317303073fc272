"""
Applications: candidates applying to jobs and recruiters reviewing them.

Service functions that write notifications return them alongside the
result so the route can push them over the realtime channel after commit.
"""
import logging
from datetime import datetime
from typing import Dict, List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quickjob.core.policies import can_review_application, can_view_job_contact, is_transition_allowed
from quickjob.db.models.application import Application, APPLICATION_STATUSES
from quickjob.db.models.conversation import Conversation
from quickjob.db.models.job import Job
from quickjob.db.models.notification import Notification
from quickjob.db.models.user import User
from quickjob.services.job_service import get_job_or_404
from quickjob.services.notification_service import STATUS_MESSAGES, create_notification
from quickjob.services.quota_service import enforce_application_quota, increment_applications_created

logger = logging.getLogger(__name__)


def apply_to_job(db: Session, candidate: User, job_id: int, message: str = None) -> Tuple[Application, List[Notification]]:
    """
    Create an application for an open job.

    Raises:
        HTTPException: 404 unknown job, 409 job not open or already applied,
            402 when the candidate's plan limit is reached
    """
    job = get_job_or_404(db, job_id)
    if job.status != "open":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This job is no longer accepting applications")

    existing = db.query(Application).filter(
        Application.candidate_id == candidate.id,
        Application.job_id == job.id
    ).first()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already applied to this job")

    db.refresh(candidate)
    enforce_application_quota(candidate)

    application = Application(
        candidate_id=candidate.id,
        job_id=job.id,
        message=message,
        status="pending",
    )
    db.add(application)
    increment_applications_created(db, candidate)
    job.applications_count = (job.applications_count or 0) + 1
    db.flush()

    name = candidate.full_name or candidate.email
    notification = create_notification(
        db,
        user_id=job.recruiter_id,
        type="new_application",
        title="Nouvelle candidature",
        message=f"{name} a postulé à votre offre « {job.title} ».",
        related_id=application.id,
    )
    db.commit()
    db.refresh(application)

    logger.info(f"Application created: application_id={application.id}, job_id={job.id}, candidate_id={candidate.id}")
    return application, [notification]


def get_application_or_404(db: Session, application_id: int) -> Application:
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return application


def open_conversation(db: Session, application: Application) -> Conversation:
    """Return the conversation for an application, creating it on first call."""
    conversation = db.query(Conversation).filter(Conversation.application_id == application.id).first()
    if conversation:
        return conversation

    conversation = Conversation(
        application_id=application.id,
        job_id=application.job_id,
        candidate_id=application.candidate_id,
        recruiter_id=application.job.recruiter_id,
    )
    db.add(conversation)
    db.flush()
    logger.info(f"Conversation opened: conversation_id={conversation.id}, application_id={application.id}")
    return conversation


def update_application_status(
    db: Session,
    user: User,
    application_id: int,
    new_status: str,
) -> Tuple[Application, List[Notification]]:
    if new_status not in APPLICATION_STATUSES:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Invalid status: {new_status}")

    application = get_application_or_404(db, application_id)
    if not can_review_application(user, application):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the job's recruiter can update this application")

    if not is_transition_allowed(application.status, new_status):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot change application status from {application.status} to {new_status}"
        )

    previous = application.status
    application.status = new_status
    application.status_updated_at = datetime.utcnow()

    if new_status == "accepted":
        open_conversation(db, application)

    notification = create_notification(
        db,
        user_id=application.candidate_id,
        type="application_status",
        title="Mise à jour de candidature",
        message=f"{STATUS_MESSAGES[new_status]} ({application.job.title})",
        related_id=application.id,
    )
    db.commit()
    db.refresh(application)

    logger.info(
        f"Application status changed: application_id={application.id}, {previous} -> {new_status}, by user_id={user.id}"
    )
    return application, [notification]


def list_candidate_applications(db: Session, candidate: User) -> List[Dict]:
    """Candidate's applications with a job summary; contact fields only when visible."""
    applications = (
        db.query(Application)
        .filter(Application.candidate_id == candidate.id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )

    results = []
    for application in applications:
        job: Job = application.job
        contact_visible = can_view_job_contact(db, candidate, job)
        results.append({
            "id": application.id,
            "job_id": job.id,
            "status": application.status,
            "message": application.message,
            "created_at": application.created_at,
            "status_updated_at": application.status_updated_at,
            "job": {
                "id": job.id,
                "title": job.title,
                "category": job.category,
                "amount": job.amount,
                "currency": job.currency,
                "location": job.location,
                "status": job.status,
                "contact_phone": job.contact_phone if contact_visible else None,
                "contact_whatsapp": job.contact_whatsapp if contact_visible else None,
            },
        })
    return results


def list_received_applications(db: Session, recruiter: User) -> Dict[str, List[Dict]]:
    """Applications on the recruiter's jobs, grouped by status."""
    query = db.query(Application).join(Job, Application.job_id == Job.id)
    if recruiter.role != "admin":
        query = query.filter(Job.recruiter_id == recruiter.id)
    applications = query.order_by(Application.created_at.desc(), Application.id.desc()).all()

    grouped: Dict[str, List[Dict]] = {key: [] for key in APPLICATION_STATUSES}
    for application in applications:
        candidate = application.candidate
        grouped.setdefault(application.status, []).append({
            "id": application.id,
            "job_id": application.job_id,
            "job_title": application.job.title,
            "status": application.status,
            "message": application.message,
            "created_at": application.created_at,
            "candidate": {
                "id": candidate.id,
                "first_name": candidate.first_name,
                "last_name": candidate.last_name,
                "email": candidate.email,
                "phone": candidate.phone,
                "whatsapp": candidate.whatsapp,
                "location": candidate.location,
            },
        })
    return grouped


def get_candidate_stats(db: Session, candidate: User) -> Dict[str, int]:
    rows = db.query(Application.status).filter(Application.candidate_id == candidate.id).all()
    stats = {"total": len(rows)}
    for key in APPLICATION_STATUSES:
        stats[key] = sum(1 for (value,) in rows if value == key)
    return stats
