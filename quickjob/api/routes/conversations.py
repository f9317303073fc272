"""
Private messaging between a recruiter and an accepted candidate.
"""
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_current_user_obj, get_db
from quickjob.db.models.user import User
from quickjob.schemas.messaging import ConversationResponse, MessageCreate, MessageResponse
from quickjob.services import messaging_service
from quickjob.services.notification_service import push_notifications

router = APIRouter(prefix="/conversations", tags=["Messaging"])


@router.get("", response_model=List[ConversationResponse])
def list_conversations(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return messaging_service.list_conversations(db, user)


@router.get("/{conversation_id}/messages", response_model=List[MessageResponse])
def list_messages(
    conversation_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return messaging_service.list_messages(db, user, conversation_id)


@router.post("/{conversation_id}/messages", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def send_message(
    conversation_id: int,
    data: MessageCreate,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    message, notifications = messaging_service.send_message(db, user, conversation_id, data.content)
    push_notifications(background_tasks, notifications)
    return message
