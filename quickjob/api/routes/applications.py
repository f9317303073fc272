"""
Application endpoints for candidates and recruiters.
"""
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_db, require_role
from quickjob.db.models.user import User
from quickjob.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    CandidateApplicationResponse,
    CandidateStatsResponse,
    ReceivedApplicationsResponse,
)
from quickjob.services import application_service
from quickjob.services.notification_service import push_notifications

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def apply(
    data: ApplicationCreate,
    background_tasks: BackgroundTasks,
    user: User = Depends(require_role("candidate")),
    db: Session = Depends(get_db)
):
    """
    Apply to an open job.

    One application per job; counts against the candidate's monthly plan limit.
    """
    application, notifications = application_service.apply_to_job(db, user, data.job_id, data.message)
    push_notifications(background_tasks, notifications)
    return application


@router.get("/mine", response_model=List[CandidateApplicationResponse])
def list_my_applications(
    user: User = Depends(require_role("candidate")),
    db: Session = Depends(get_db)
):
    return application_service.list_candidate_applications(db, user)


@router.get("/stats", response_model=CandidateStatsResponse)
def my_application_stats(
    user: User = Depends(require_role("candidate")),
    db: Session = Depends(get_db)
):
    return application_service.get_candidate_stats(db, user)


@router.get("/received", response_model=ReceivedApplicationsResponse)
def list_received_applications(
    user: User = Depends(require_role("recruiter", "admin")),
    db: Session = Depends(get_db)
):
    """Applications on the recruiter's jobs, grouped by status, with applicant phone numbers."""
    return application_service.list_received_applications(db, user)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
def update_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    background_tasks: BackgroundTasks,
    user: User = Depends(require_role("recruiter", "admin")),
    db: Session = Depends(get_db)
):
    """
    Move an application along pending -> accepted | rejected, accepted -> accomplished.

    Accepting opens a conversation between the recruiter and the candidate.
    """
    application, notifications = application_service.update_application_status(db, user, application_id, data.status)
    push_notifications(background_tasks, notifications)
    return application
