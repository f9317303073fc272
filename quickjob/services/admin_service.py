"""
Administrative operations: account management, platform statistics,
manual plan changes and knowledge-base curation.
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from quickjob.core.logging_config import sanitize_log_data
from quickjob.core.plan_limits import SUPPORTED_PLANS
from quickjob.db.models.ai_session import AISession
from quickjob.db.models.application import Application
from quickjob.db.models.candidate_post import CandidatePost
from quickjob.db.models.conversation import Conversation, Message
from quickjob.db.models.job import Job
from quickjob.db.models.knowledge_base import KnowledgeBaseEntry
from quickjob.db.models.notification import Notification
from quickjob.db.models.subscription import Subscription
from quickjob.db.models.user import User
from quickjob.services.user_service import create_user_profile, find_user_by_email, set_password

logger = logging.getLogger(__name__)

MANUAL_PLAN_DAYS = 30


class UnknownActionError(ValueError):
    pass


def create_candidate(db: Session, payload: Dict) -> User:
    email = payload.get("email")
    password = payload.get("password")
    if not email or not password:
        raise ValueError("email and password are required")

    return create_user_profile(
        db,
        email=email,
        password=password,
        role="candidate",
        first_name=payload.get("first_name"),
        last_name=payload.get("last_name"),
        phone=payload.get("phone"),
        location=payload.get("location"),
    )


def reset_password(db: Session, payload: Dict) -> User:
    email = payload.get("email")
    new_password = payload.get("new_password")
    if not email or not new_password:
        raise ValueError("email and new_password are required")

    user = find_user_by_email(db, email)
    if not user:
        raise ValueError("User not found")
    set_password(db, user, new_password)
    return user


def delete_account(db: Session, payload: Dict) -> None:
    """Remove a user and every row that depends on them."""
    email = payload.get("email")
    if not email:
        raise ValueError("email is required")

    user = find_user_by_email(db, email)
    if not user:
        raise ValueError("User not found")
    user_id = user.id

    job_ids = [job_id for (job_id,) in db.query(Job.id).filter(Job.recruiter_id == user.id).all()]
    conversation_query = db.query(Conversation.id).filter(
        or_(Conversation.candidate_id == user.id, Conversation.recruiter_id == user.id, Conversation.job_id.in_(job_ids))
    )
    conversation_ids = [conversation_id for (conversation_id,) in conversation_query.all()]

    db.query(Message).filter(
        or_(Message.conversation_id.in_(conversation_ids), Message.sender_id == user.id)
    ).delete(synchronize_session=False)
    db.query(Conversation).filter(Conversation.id.in_(conversation_ids)).delete(synchronize_session=False)
    db.query(Application).filter(
        or_(Application.candidate_id == user.id, Application.job_id.in_(job_ids))
    ).delete(synchronize_session=False)
    db.query(Job).filter(Job.id.in_(job_ids)).delete(synchronize_session=False)
    db.query(CandidatePost).filter(CandidatePost.candidate_id == user.id).delete(synchronize_session=False)
    for model in (Notification, Subscription, AISession):
        db.query(model).filter(model.user_id == user.id).delete(synchronize_session=False)
    db.delete(user)
    db.commit()

    logger.info(f"Account deleted: user_id={user_id}")


ACTIONS = {
    "create_candidate": create_candidate,
    "reset_password": reset_password,
    "delete_account": delete_account,
}


def run_user_action(db: Session, action: Optional[str], payload: Optional[Dict]) -> Dict:
    """
    Dispatch an admin user-manager action.

    Raises:
        UnknownActionError: action is not one of ACTIONS
        ValueError: missing payload fields or unknown user
    """
    handler = ACTIONS.get(action or "")
    if handler is None:
        raise UnknownActionError("Unknown action")

    result = handler(db, payload or {})
    logger.info(f"Admin action completed: action={action}, payload={sanitize_log_data(payload or {})}")
    if action == "create_candidate":
        return {"user_id": result.id}
    return {}


def get_platform_stats(db: Session) -> Dict[str, int]:
    return {
        "total_users": db.query(User).count(),
        "recruiters": db.query(User).filter(User.role == "recruiter").count(),
        "candidates": db.query(User).filter(User.role == "candidate").count(),
        "total_jobs": db.query(Job).count(),
        "open_jobs": db.query(Job).filter(Job.status == "open").count(),
        "total_applications": db.query(Application).count(),
        "paying_users": db.query(User).filter(User.subscription_plan != "free").count(),
    }


def list_users(db: Session, role: Optional[str] = None) -> List[User]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


def set_user_plan(db: Session, user_id: int, plan: str) -> User:
    if plan not in SUPPORTED_PLANS:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Invalid plan: {plan}")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    user.subscription_plan = plan
    user.subscription_end = None if plan == "free" else datetime.utcnow() + timedelta(days=MANUAL_PLAN_DAYS)
    db.commit()
    db.refresh(user)

    logger.info(f"Plan set by admin: user_id={user.id}, plan={plan}")
    return user


def list_subscriptions(db: Session) -> List[Subscription]:
    return db.query(Subscription).order_by(Subscription.updated_at.desc(), Subscription.id.desc()).all()


def list_knowledge_base(db: Session) -> List[KnowledgeBaseEntry]:
    return db.query(KnowledgeBaseEntry).order_by(KnowledgeBaseEntry.id.asc()).all()


def create_knowledge_entry(db: Session, data: Dict) -> KnowledgeBaseEntry:
    entry = KnowledgeBaseEntry(
        question=data["question"],
        answer=data["answer"],
        category=data.get("category"),
        keywords=data.get("keywords") or [],
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def delete_knowledge_entry(db: Session, entry_id: int) -> None:
    entry = db.query(KnowledgeBaseEntry).filter(KnowledgeBaseEntry.id == entry_id).first()
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Knowledge base entry not found")
    db.delete(entry)
    db.commit()
