"""
Unit tests for plan limits and the quota service.
Tests limit tables, paywall errors, usage reporting and the monthly reset.
"""
import pytest
from fastapi import HTTPException

from quickjob.core.plan_limits import (
    can_feature_jobs,
    get_plan_limit,
    get_remaining,
    has_unlimited_quota,
    normalize_plan,
)
from quickjob.services.quota_service import (
    enforce_application_quota,
    enforce_job_quota,
    get_usage_for_response,
    increment_applications_created,
    reset_free_plan_counters,
)


@pytest.mark.parametrize("role,plan,expected", [
    ("candidate", "free", 20),
    ("candidate", "standard", 45),
    ("candidate", "pro", 100),
    ("recruiter", "free", 30),
    ("recruiter", "standard", 65),
    ("recruiter", "pro", None),
    ("admin", "free", None),
])
def test_plan_limits(role, plan, expected):
    assert get_plan_limit(role, plan) == expected


def test_unknown_plan_falls_back_to_free():
    assert normalize_plan("premium") == "free"
    assert normalize_plan(None) == "free"
    assert normalize_plan("PRO") == "pro"
    assert get_plan_limit("candidate", "enterprise") == 20


def test_remaining_and_unlimited():
    assert get_remaining("candidate", "free", 5) == 15
    assert get_remaining("candidate", "free", 25) == 0
    assert get_remaining("recruiter", "pro", 500) is None
    assert has_unlimited_quota("recruiter", "pro")
    assert not has_unlimited_quota("recruiter", "standard")


def test_only_pro_can_feature_jobs():
    assert can_feature_jobs("pro")
    assert not can_feature_jobs("standard")
    assert not can_feature_jobs("free")


def test_free_candidate_can_create_twentieth_application(make_user):
    user = make_user(role="candidate", applications_created_count=19)
    enforce_application_quota(user)


def test_free_candidate_blocked_at_twenty_one(make_user):
    user = make_user(role="candidate", applications_created_count=20)

    with pytest.raises(HTTPException) as exc_info:
        enforce_application_quota(user)

    assert exc_info.value.status_code == 402
    detail = exc_info.value.detail
    assert detail["code"] == "PAYWALL"
    assert detail["feature"] == "applications"
    assert detail["limit"] == 20
    assert detail["used"] == 20
    assert detail["upgrade_url"].endswith("/pricing")


def test_standard_candidate_has_more_room(make_user):
    user = make_user(role="candidate", plan="standard", applications_created_count=20)
    enforce_application_quota(user)


def test_recruiter_quota(make_user):
    free = make_user(role="recruiter", jobs_published=30)
    with pytest.raises(HTTPException) as exc_info:
        enforce_job_quota(free)
    assert exc_info.value.detail["feature"] == "job_posts"

    pro = make_user(role="recruiter", plan="pro", jobs_published=5000)
    enforce_job_quota(pro)


def test_admin_never_limited(make_user):
    admin = make_user(role="admin", jobs_published=10_000)
    enforce_job_quota(admin)


def test_increment_and_usage_response(db, make_user):
    user = make_user(role="candidate", applications_created_count=4)

    increment_applications_created(db, user)
    db.commit()

    usage = get_usage_for_response(user)
    assert usage == {
        "role": "candidate",
        "plan": "free",
        "counter": "applications_created_count",
        "limit": 20,
        "used": 5,
        "remaining": 15,
        "unlimited": False,
    }


def test_usage_endpoint(client, make_user, headers):
    recruiter = make_user(role="recruiter", plan="pro", jobs_published=12)

    response = client.get("/me/usage", headers=headers(recruiter))

    assert response.status_code == 200
    data = response.json()
    assert data["counter"] == "jobs_published"
    assert data["used"] == 12
    assert data["limit"] is None
    assert data["unlimited"] is True


def test_reset_only_touches_free_plan(db, make_user):
    free_candidate = make_user(role="candidate", applications_created_count=20)
    free_recruiter = make_user(role="recruiter", jobs_published=7)
    paying = make_user(role="candidate", plan="standard", applications_created_count=30)

    reset = reset_free_plan_counters(db)

    assert {u.id for u in reset} == {free_candidate.id, free_recruiter.id}
    db.refresh(free_candidate)
    db.refresh(free_recruiter)
    db.refresh(paying)
    assert free_candidate.applications_created_count == 0
    assert free_recruiter.jobs_published == 0
    assert paying.applications_created_count == 30
