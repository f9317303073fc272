"""
Pydantic schemas for candidate post endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class CandidatePostUpsert(BaseModel):
    """A candidate's availability listing."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    hourly_rate: float = Field(..., ge=0)
    currency: str = Field(default="FCFA", max_length=10)
    location: str = Field(..., min_length=1, max_length=100)
    skills: List[str] = Field(default_factory=list)
    availability: str = Field(..., min_length=1, max_length=100, description="e.g. week-ends, temps plein")
    status: str = Field(default="active", pattern="^(active|inactive)$")


class CandidatePostResponse(BaseModel):
    id: int
    candidate_id: int
    title: str
    description: str
    hourly_rate: float
    currency: str
    location: str
    skills: List[str] = []
    availability: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
