"""
Operational functions: admin user management and the monthly free-plan reset.

These endpoints answer with {"success": ..., ...} envelopes instead of
HTTPException details so that schedulers and the admin console can read
every outcome the same way.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_db, optional_oauth2_scheme
from quickjob.core.config import CRON_SECRET
from quickjob.core.responses import error_response, success_response
from quickjob.core.security import decode_access_token
from quickjob.db.models.user import User
from quickjob.schemas.admin import AdminUserActionRequest
from quickjob.services.admin_service import UnknownActionError, run_user_action
from quickjob.services.email_service import EmailSender, get_email_sender
from quickjob.services.quota_service import reset_free_plan_counters
from quickjob.services.user_service import find_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])


def _user_from_token(db: Session, token: Optional[str]) -> User:
    if not token:
        raise ValueError("Authorization header missing")
    email = decode_access_token(token)
    user = find_user_by_email(db, email) if email else None
    if not user:
        raise ValueError("Authentication failed")
    return user


@router.post("/admin-user-manager")
def admin_user_manager(
    body: AdminUserActionRequest,
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db)
):
    """
    Admin account operations: create_candidate, reset_password, delete_account.

    403 for non-admin callers, 400 for an unknown action, 500 for anything else.
    """
    try:
        caller = _user_from_token(db, token)
        if caller.role != "admin":
            return error_response("Forbidden: admin only", status_code=status.HTTP_403_FORBIDDEN)

        result = run_user_action(db, body.action, body.payload)
        return success_response(**result)
    except UnknownActionError as e:
        return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        db.rollback()
        logger.error(f"admin-user-manager error: action={body.action}: {e}", exc_info=True)
        return error_response(str(e))


@router.post("/reset-free-plan-counters")
def reset_free_plan_counters_function(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    x_cron_secret: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender)
):
    """
    Monthly reset of free-plan usage counters.

    Callable by the scheduler (X-Cron-Secret header) or by an admin.
    """
    try:
        from_scheduler = bool(CRON_SECRET) and x_cron_secret == CRON_SECRET
        if not from_scheduler:
            caller = _user_from_token(db, token) if token else None
            if caller is None or caller.role != "admin":
                return error_response("Forbidden", status_code=status.HTTP_403_FORBIDDEN)

        users = reset_free_plan_counters(db)
        if not users:
            return success_response(message="No users on the free plan to reset.", reset_count=0)

        email_sender.send_reset_notices(users)
        return success_response(message=f"Reset counters for {len(users)} users.", reset_count=len(users))
    except Exception as e:
        db.rollback()
        logger.error(f"reset-free-plan-counters error: {e}", exc_info=True)
        return error_response(str(e))
