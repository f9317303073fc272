"""
Pydantic schemas for application endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

APPLICATION_STATUS_PATTERN = "^(pending|accepted|rejected|accomplished)$"


class ApplicationCreate(BaseModel):
    job_id: int = Field(..., description="Job to apply to")
    message: Optional[str] = Field(None, max_length=2000, description="Short note to the recruiter")


class ApplicationStatusUpdate(BaseModel):
    status: str = Field(..., pattern=APPLICATION_STATUS_PATTERN)


class ApplicationResponse(BaseModel):
    id: int
    candidate_id: int
    job_id: int
    message: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    status_updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationJobSummary(BaseModel):
    id: int
    title: str
    category: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    location: Optional[str] = None
    status: str
    contact_phone: Optional[str] = None
    contact_whatsapp: Optional[str] = None


class CandidateApplicationResponse(BaseModel):
    """A candidate's application with the job it targets."""
    id: int
    job_id: int
    status: str
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    status_updated_at: Optional[datetime] = None
    job: ApplicationJobSummary


class ApplicantSummary(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    location: Optional[str] = None


class ReceivedApplicationResponse(BaseModel):
    id: int
    job_id: int
    job_title: str
    status: str
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    candidate: ApplicantSummary


class ReceivedApplicationsResponse(BaseModel):
    pending: List[ReceivedApplicationResponse] = []
    accepted: List[ReceivedApplicationResponse] = []
    rejected: List[ReceivedApplicationResponse] = []
    accomplished: List[ReceivedApplicationResponse] = []


class CandidateStatsResponse(BaseModel):
    total: int
    pending: int
    accepted: int
    rejected: int
    accomplished: int
