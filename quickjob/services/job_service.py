"""
Job offer operations for recruiters and the public job board.
"""
import logging
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from quickjob.core.plan_limits import can_feature_jobs
from quickjob.core.policies import can_manage_job, can_view_job_contact
from quickjob.db.models.application import Application
from quickjob.db.models.conversation import Conversation, Message
from quickjob.db.models.job import Job, JOB_STATUSES
from quickjob.db.models.user import User
from quickjob.services.quota_service import enforce_job_quota, increment_jobs_published

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "description",
    "category",
    "amount",
    "currency",
    "location",
    "commune",
    "quartier",
    "contact_phone",
    "contact_whatsapp",
)


def get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


def _ensure_can_feature(user: User) -> None:
    if user.role != "admin" and not can_feature_jobs(user.subscription_plan):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Passez au plan Pro pour mettre vos offres en avant."
        )


def create_job(db: Session, recruiter: User, data: Dict) -> Job:
    """
    Publish a job offer.

    Re-reads the recruiter row before checking the plan limit, then counts
    the publication against the recruiter's plan.
    """
    db.refresh(recruiter)
    enforce_job_quota(recruiter)

    is_featured = bool(data.pop("is_featured", False))
    if is_featured:
        _ensure_can_feature(recruiter)

    job = Job(
        recruiter_id=recruiter.id,
        status="open",
        is_featured=is_featured,
        **{field: data[field] for field in EDITABLE_FIELDS if data.get(field) is not None}
    )
    db.add(job)
    increment_jobs_published(db, recruiter)
    db.commit()
    db.refresh(job)

    logger.info(f"Job created: job_id={job.id}, recruiter_id={recruiter.id}, featured={is_featured}")
    return job


def list_open_jobs(
    db: Session,
    location: Optional[str] = None,
    commune: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    min_amount: Optional[float] = None,
    max_amount: Optional[float] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[Job], int]:
    """Public job board: open offers, featured first, newest next."""
    query = db.query(Job).filter(Job.status == "open")

    if location:
        query = query.filter(Job.location.ilike(f"%{location}%"))
    if commune:
        query = query.filter(Job.commune.ilike(f"%{commune}%"))
    if category:
        query = query.filter(Job.category == category)
    if search:
        term = f"%{search}%"
        query = query.filter(or_(Job.title.ilike(term), Job.description.ilike(term)))
    if min_amount is not None:
        query = query.filter(Job.amount >= min_amount)
    if max_amount is not None:
        query = query.filter(Job.amount <= max_amount)

    total = query.count()
    jobs = (
        query.order_by(Job.is_featured.desc(), Job.created_at.desc(), Job.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return jobs, total


def list_recruiter_jobs(db: Session, recruiter: User) -> List[Job]:
    return (
        db.query(Job)
        .filter(Job.recruiter_id == recruiter.id)
        .order_by(Job.created_at.desc(), Job.id.desc())
        .all()
    )


def view_job(db: Session, job_id: int) -> Job:
    job = get_job_or_404(db, job_id)
    job.views_count = (job.views_count or 0) + 1
    db.commit()
    db.refresh(job)
    return job


def _get_managed_job(db: Session, user: User, job_id: int) -> Job:
    job = get_job_or_404(db, job_id)
    if not can_manage_job(user, job):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to modify this job")
    return job


def update_job(db: Session, user: User, job_id: int, changes: Dict) -> Job:
    job = _get_managed_job(db, user, job_id)

    new_status = changes.pop("status", None)
    if new_status is not None:
        if new_status not in JOB_STATUSES:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Invalid job status: {new_status}")
        job.status = new_status

    if "is_featured" in changes:
        is_featured = bool(changes.pop("is_featured"))
        if is_featured:
            _ensure_can_feature(user)
        job.is_featured = is_featured

    for field, value in changes.items():
        if field in EDITABLE_FIELDS:
            setattr(job, field, value)

    db.commit()
    db.refresh(job)
    logger.info(f"Job updated: job_id={job.id}, by user_id={user.id}")
    return job


def delete_job(db: Session, user: User, job_id: int) -> None:
    """Delete a job with its applications, conversations and messages."""
    job = _get_managed_job(db, user, job_id)

    conversation_ids = [
        conversation_id for (conversation_id,) in db.query(Conversation.id).filter(Conversation.job_id == job.id).all()
    ]
    db.query(Message).filter(Message.conversation_id.in_(conversation_ids)).delete(synchronize_session=False)
    db.query(Conversation).filter(Conversation.job_id == job.id).delete(synchronize_session=False)
    db.query(Application).filter(Application.job_id == job.id).delete(synchronize_session=False)
    db.delete(job)
    db.commit()
    logger.info(f"Job deleted: job_id={job_id}, by user_id={user.id}")


def get_job_contact_info(db: Session, user: User, job_id: int) -> Dict[str, Optional[str]]:
    """Contact details of a job, or 403 when the caller may not see them."""
    job = get_job_or_404(db, job_id)
    if not can_view_job_contact(db, user, job):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Contact information is available once your application is accepted"
        )
    return {
        "contact_phone": job.contact_phone,
        "contact_whatsapp": job.contact_whatsapp,
    }
