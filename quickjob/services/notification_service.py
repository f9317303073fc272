"""
In-app notifications.

Rows are written inside the caller's transaction; realtime delivery is
scheduled by the routes once the response has been produced.
"""
import logging
from typing import List, Optional

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.orm import Session

from quickjob.db.models.notification import Notification
from quickjob.db.models.user import User
from quickjob.services.realtime import manager

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    "accepted": "Votre candidature a été acceptée !",
    "rejected": "Votre candidature a été refusée.",
    "accomplished": "Votre mission a été marquée comme accomplie.",
}


def create_notification(
    db: Session,
    user_id: int,
    type: str,
    title: str,
    message: str,
    related_id: Optional[int] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_id=related_id,
        is_read=False,
    )
    db.add(notification)
    db.flush()
    logger.debug(f"Notification queued: user_id={user_id}, type={type}")
    return notification


def to_payload(notification: Notification) -> dict:
    """Realtime representation of a notification."""
    return {
        "event": "notification",
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "related_id": notification.related_id,
    }


def list_notifications(db: Session, user: User, unread_only: bool = False) -> List[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user.id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()


def count_unread(db: Session, user: User) -> int:
    return db.query(Notification).filter(
        Notification.user_id == user.id,
        Notification.is_read.is_(False)
    ).count()


def _get_owned(db: Session, user: User, notification_id: int) -> Notification:
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user.id
    ).first()
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return notification


def mark_as_read(db: Session, user: User, notification_id: int) -> Notification:
    notification = _get_owned(db, user, notification_id)
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_as_read(db: Session, user: User) -> int:
    updated = db.query(Notification).filter(
        Notification.user_id == user.id,
        Notification.is_read.is_(False)
    ).update({Notification.is_read: True}, synchronize_session=False)
    db.commit()
    return updated


def delete_notification(db: Session, user: User, notification_id: int) -> None:
    notification = _get_owned(db, user, notification_id)
    db.delete(notification)
    db.commit()


def push_notifications(background_tasks: BackgroundTasks, notifications: List[Notification]) -> None:
    """Deliver committed notifications to connected sockets once the response is sent."""
    for notification in notifications:
        background_tasks.add_task(manager.send_to_user, notification.user_id, to_payload(notification))
