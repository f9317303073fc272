"""
Pydantic schemas for the chatbot and assistant functions.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ChatbotRequest(BaseModel):
    message: Optional[str] = Field(None, max_length=4000)

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Comment publier une offre ?"
            }
        }


class AssistantRequest(BaseModel):
    message: Optional[str] = Field(None, max_length=4000)
    session_id: Optional[int] = Field(None, description="Previous session to continue (authenticated users)")
