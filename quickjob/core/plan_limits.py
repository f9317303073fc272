"""
Plan-based usage limits configuration.

Single source of truth for monthly quota limits per role and plan.
None means unlimited quota for that plan.
"""
from typing import Dict, Optional

SUPPORTED_PLANS = ("free", "standard", "pro")
DEFAULT_PLAN = "free"

# Which usage counter on the User row each role consumes
COUNTER_BY_ROLE: Dict[str, str] = {
    "candidate": "applications_created_count",
    "recruiter": "jobs_published",
}

# Plan limits (per month)
PLAN_LIMITS: Dict[str, Dict[str, Optional[int]]] = {
    "candidate": {
        "free": 20,
        "standard": 45,
        "pro": 100,
    },
    "recruiter": {
        "free": 30,
        "standard": 65,
        "pro": None,  # Unlimited
    },
}

# Plans allowed to put their job offers forward
FEATURED_JOB_PLANS = ("pro",)


def normalize_plan(plan: Optional[str]) -> str:
    """Lower-case the plan name, falling back to free for unknown values."""
    plan = (plan or DEFAULT_PLAN).lower()
    return plan if plan in SUPPORTED_PLANS else DEFAULT_PLAN


def get_plan_limit(role: str, plan: Optional[str]) -> Optional[int]:
    """
    Get the monthly limit for a role in a given plan.

    Args:
        role: User role (candidate, recruiter, admin)
        plan: Plan name (free, standard, pro)

    Returns:
        Monthly limit (int) or None for unlimited. Admins and unknown roles
        are never limited.
    """
    limits = PLAN_LIMITS.get(role)
    if limits is None:
        return None
    return limits[normalize_plan(plan)]


def has_unlimited_quota(role: str, plan: Optional[str]) -> bool:
    """Check if the plan has unlimited quota for this role."""
    return get_plan_limit(role, plan) is None


def get_remaining(role: str, plan: Optional[str], used: int) -> Optional[int]:
    """Remaining quota, never negative; None when unlimited."""
    limit = get_plan_limit(role, plan)
    if limit is None:
        return None
    return max(0, limit - (used or 0))


def can_feature_jobs(plan: Optional[str]) -> bool:
    return normalize_plan(plan) in FEATURED_JOB_PLANS
