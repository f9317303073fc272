"""
Private conversations between a recruiter and an accepted candidate.
"""
import logging
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from quickjob.db.models.conversation import Conversation, Message
from quickjob.db.models.notification import Notification
from quickjob.db.models.user import User
from quickjob.services.notification_service import create_notification

logger = logging.getLogger(__name__)


def list_conversations(db: Session, user: User) -> List[Conversation]:
    return (
        db.query(Conversation)
        .filter(or_(Conversation.candidate_id == user.id, Conversation.recruiter_id == user.id))
        .order_by(Conversation.created_at.desc(), Conversation.id.desc())
        .all()
    )


def get_participant_conversation(db: Session, user: User, conversation_id: int) -> Conversation:
    conversation = db.query(Conversation).filter(Conversation.id == conversation_id).first()
    if not conversation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")
    if user.id not in (conversation.candidate_id, conversation.recruiter_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a participant of this conversation")
    return conversation


def list_messages(db: Session, user: User, conversation_id: int) -> List[Message]:
    conversation = get_participant_conversation(db, user, conversation_id)
    return (
        db.query(Message)
        .filter(Message.conversation_id == conversation.id)
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )


def send_message(db: Session, user: User, conversation_id: int, content: str) -> Tuple[Message, List[Notification]]:
    conversation = get_participant_conversation(db, user, conversation_id)

    content = (content or "").strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Message cannot be empty")

    message = Message(conversation_id=conversation.id, sender_id=user.id, content=content)
    db.add(message)
    db.flush()

    recipient_id = conversation.recruiter_id if user.id == conversation.candidate_id else conversation.candidate_id
    notification = create_notification(
        db,
        user_id=recipient_id,
        type="new_message",
        title="Nouveau message",
        message=f"{user.full_name or user.email} : {content[:80]}",
        related_id=conversation.id,
    )
    db.commit()
    db.refresh(message)

    logger.info(f"Message sent: conversation_id={conversation.id}, sender_id={user.id}")
    return message, [notification]
