"""
Pydantic schemas for conversation endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ConversationResponse(BaseModel):
    id: int
    application_id: int
    job_id: int
    candidate_id: int
    recruiter_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=4000)


class MessageResponse(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
