"""
Job board endpoints.

Recruiters publish and manage offers; anyone can browse open offers.
Contact details are only served by GET /jobs/{job_id}/contact.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_current_user_obj, get_db, require_role
from quickjob.db.models.user import User
from quickjob.schemas.job import (
    JobContactResponse,
    JobCreate,
    JobFeatureUpdate,
    JobListResponse,
    JobResponse,
    JobStatusUpdate,
    JobUpdate,
)
from quickjob.services import job_service
from quickjob.services.realtime import manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    job_data: JobCreate,
    background_tasks: BackgroundTasks,
    user: User = Depends(require_role("recruiter", "admin")),
    db: Session = Depends(get_db)
):
    """
    Publish a job offer.

    Counts against the recruiter's monthly plan limit (402 once reached).
    Featuring an offer requires the pro plan.
    """
    job = job_service.create_job(db, user, job_data.model_dump())

    background_tasks.add_task(manager.broadcast_to_role, "candidate", {
        "event": "new_job",
        "job_id": job.id,
        "title": job.title,
        "location": job.location,
        "commune": job.commune,
        "amount": job.amount,
        "currency": job.currency,
    })
    return job


@router.get("", response_model=JobListResponse)
def list_jobs(
    location: Optional[str] = Query(None),
    commune: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches title or description"),
    min_amount: Optional[float] = Query(None, ge=0),
    max_amount: Optional[float] = Query(None, ge=0),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    jobs, total = job_service.list_open_jobs(
        db,
        location=location,
        commune=commune,
        category=category,
        search=search,
        min_amount=min_amount,
        max_amount=max_amount,
        page=page,
        page_size=page_size,
    )
    return {"items": jobs, "total": total, "page": page, "page_size": page_size}


@router.get("/mine", response_model=List[JobResponse])
def list_my_jobs(
    user: User = Depends(require_role("recruiter", "admin")),
    db: Session = Depends(get_db)
):
    return job_service.list_recruiter_jobs(db, user)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return job_service.view_job(db, job_id)


@router.get("/{job_id}/contact", response_model=JobContactResponse)
def get_job_contact(
    job_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Contact details, for the job's recruiter, admins, and accepted candidates."""
    return job_service.get_job_contact_info(db, user, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    changes: JobUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return job_service.update_job(db, user, job_id, changes.model_dump(exclude_unset=True))


@router.patch("/{job_id}/status", response_model=JobResponse)
def update_job_status(
    job_id: int,
    data: JobStatusUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return job_service.update_job(db, user, job_id, {"status": data.status})


@router.patch("/{job_id}/featured", response_model=JobResponse)
def toggle_featured(
    job_id: int,
    data: JobFeatureUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return job_service.update_job(db, user, job_id, {"is_featured": data.is_featured})


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    job_service.delete_job(db, user, job_id)
