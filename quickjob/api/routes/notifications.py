from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_current_user_obj, get_db
from quickjob.db.models.user import User
from quickjob.schemas.notification import MarkAllReadResponse, NotificationResponse, UnreadCountResponse
from quickjob.services import notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    unread_only: bool = Query(False),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return notification_service.list_notifications(db, user, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return {"unread": notification_service.count_unread(db, user)}


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return {"updated": notification_service.mark_all_as_read(db, user)}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return notification_service.mark_as_read(db, user, notification_id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    notification_service.delete_notification(db, user, notification_id)
