"""
User account and profile operations.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from quickjob.core.security import hash_password
from quickjob.db.models.user import User, USER_ROLES

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "whatsapp",
    "company_name",
    "location",
    "commune",
    "quartier",
)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    """Case-insensitive email lookup."""
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def create_user_profile(
    db: Session,
    email: str,
    password: str,
    role: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
    location: Optional[str] = None,
    **extra_fields,
) -> User:
    """
    Create an account together with its profile row.

    New accounts start on the free plan with zeroed usage counters.

    Raises:
        ValueError: unknown role or email already registered
    """
    if role not in USER_ROLES:
        raise ValueError(f"Invalid role: {role}")
    if find_user_by_email(db, email):
        raise ValueError("Email already registered")

    user = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        role=role,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        location=location,
        applications_created_count=0,
        jobs_published=0,
        subscription_plan="free",
    )
    for field, value in extra_fields.items():
        if field in PROFILE_FIELDS and value is not None:
            setattr(user, field, value)

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User profile created: user_id={user.id}, role={role}")
    return user


def update_profile(db: Session, user: User, changes: dict) -> User:
    """Apply profile edits; plan and counter fields are not editable here."""
    for field, value in changes.items():
        if field in PROFILE_FIELDS:
            setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def set_password(db: Session, user: User, new_password: str) -> None:
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info(f"Password updated: user_id={user.id}")
