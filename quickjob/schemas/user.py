"""
Pydantic schemas for profile endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Authenticated user's profile."""
    id: int
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    commune: Optional[str] = None
    quartier: Optional[str] = None
    subscription_plan: str
    subscription_end: Optional[datetime] = None
    applications_created_count: int
    jobs_published: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Editable profile fields; plan and counters are managed by billing."""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    whatsapp: Optional[str] = Field(None, max_length=30)
    company_name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=100)
    commune: Optional[str] = Field(None, max_length=100)
    quartier: Optional[str] = Field(None, max_length=100)
