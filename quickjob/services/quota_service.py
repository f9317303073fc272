"""
Quota service for plan usage limits.

Candidates consume one unit of applications_created_count per application,
recruiters one unit of jobs_published per job offer. Free-plan counters are
reset monthly by reset_free_plan_counters().
"""
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quickjob.core.config import FRONTEND_URL
from quickjob.core.plan_limits import (
    COUNTER_BY_ROLE,
    get_plan_limit,
    get_remaining,
    normalize_plan,
)
from quickjob.db.models.user import User

logger = logging.getLogger(__name__)

FEATURE_BY_ROLE = {
    "candidate": "applications",
    "recruiter": "job_posts",
}


def get_used(user: User) -> int:
    counter = COUNTER_BY_ROLE.get(user.role)
    if counter is None:
        return 0
    return getattr(user, counter) or 0


def _enforce(user: User, role: str, message: str) -> None:
    plan = normalize_plan(user.subscription_plan)
    limit = get_plan_limit(role, plan)
    if limit is None:
        return

    used = get_used(user)
    if used >= limit:
        logger.warning(
            f"Plan limit reached: user_id={user.id}, role={role}, plan={plan}, used={used}, limit={limit}"
        )
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={
                "detail": message,
                "code": "PAYWALL",
                "feature": FEATURE_BY_ROLE[role],
                "plan": plan,
                "limit": limit,
                "used": used,
                "upgrade_url": f"{FRONTEND_URL}/pricing",
            }
        )


def enforce_application_quota(user: User) -> None:
    """Raise 402 when a candidate has used every application of their plan."""
    _enforce(user, "candidate", "Limite de candidatures atteinte. Passez au plan supérieur pour postuler davantage.")


def enforce_job_quota(user: User) -> None:
    """Raise 402 when a recruiter has used every job publication of their plan."""
    if user.role == "admin":
        return
    _enforce(user, "recruiter", "Limite de publications atteinte. Passez au plan supérieur pour publier plus d'offres.")


def increment_applications_created(db: Session, user: User) -> None:
    user.applications_created_count = (user.applications_created_count or 0) + 1
    db.flush()


def increment_jobs_published(db: Session, user: User) -> None:
    user.jobs_published = (user.jobs_published or 0) + 1
    db.flush()


def get_usage_for_response(user: User) -> Dict:
    """
    Usage data formatted for GET /me/usage.

    Returns:
        Dictionary with role, plan, counter name, limit, used, remaining, unlimited
    """
    plan = normalize_plan(user.subscription_plan)
    counter: Optional[str] = COUNTER_BY_ROLE.get(user.role)
    limit = get_plan_limit(user.role, plan)
    used = get_used(user)

    return {
        "role": user.role,
        "plan": plan,
        "counter": counter,
        "limit": limit,
        "used": used,
        "remaining": get_remaining(user.role, plan, used),
        "unlimited": limit is None,
    }


def reset_free_plan_counters(db: Session) -> List[User]:
    """
    Zero both usage counters for every user on the free plan.

    Returns:
        The users whose counters were reset
    """
    free_users = db.query(User).filter(User.subscription_plan == "free").all()
    if not free_users:
        logger.info("No users on the free plan to reset")
        return []

    for user in free_users:
        user.applications_created_count = 0
        user.jobs_published = 0
    db.commit()

    logger.info(f"Reset counters for {len(free_users)} free-plan users")
    return free_users
