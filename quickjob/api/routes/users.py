"""
Profile and usage endpoints for the signed-in user.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_current_user_obj, get_db
from quickjob.db.models.user import User
from quickjob.schemas.usage import UsageResponse
from quickjob.schemas.user import ProfileUpdate, UserResponse
from quickjob.services.quota_service import get_usage_for_response
from quickjob.services.user_service import update_profile

router = APIRouter(prefix="/me", tags=["Profile"])


@router.get("", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user_obj)):
    return user


@router.patch("", response_model=UserResponse)
def update_me(
    changes: ProfileUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return update_profile(db, user, changes.model_dump(exclude_unset=True))


@router.get("/usage", response_model=UsageResponse)
def get_usage(user: User = Depends(get_current_user_obj)):
    """
    Plan usage for the current month.

    Candidates are counted on applications sent, recruiters on job offers published.
    """
    return get_usage_for_response(user)
