"""
Authorization rules shared by the job, application and messaging endpoints.

- Job contact details are visible to the job's recruiter, to admins, and to
  candidates holding an accepted (or since accomplished) application for it.
- Application status only moves pending -> accepted | rejected and
  accepted -> accomplished, and only the job's recruiter or an admin moves it.
"""
from typing import Dict, FrozenSet

from sqlalchemy.orm import Session

from quickjob.db.models.application import Application
from quickjob.db.models.job import Job
from quickjob.db.models.user import User

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "pending": frozenset({"accepted", "rejected"}),
    "accepted": frozenset({"accomplished"}),
    "rejected": frozenset(),
    "accomplished": frozenset(),
}

CONTACT_GRANTING_STATUSES = ("accepted", "accomplished")


def is_transition_allowed(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


def is_job_owner(user: User, job: Job) -> bool:
    return job.recruiter_id == user.id


def can_manage_job(user: User, job: Job) -> bool:
    return user.role == "admin" or is_job_owner(user, job)


def can_view_job_contact(db: Session, user: User, job: Job) -> bool:
    if can_manage_job(user, job):
        return True
    if user.role != "candidate":
        return False

    accepted = db.query(Application.id).filter(
        Application.job_id == job.id,
        Application.candidate_id == user.id,
        Application.status.in_(CONTACT_GRANTING_STATUSES)
    ).first()
    return accepted is not None


def can_review_application(user: User, application: Application) -> bool:
    return user.role == "admin" or application.job.recruiter_id == user.id
