"""
Pydantic schemas for admin endpoints.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field


class AdminUserActionRequest(BaseModel):
    """
    Request schema for POST /functions/admin-user-manager.

    payload depends on the action:
    - create_candidate: email, password, first_name?, last_name?, phone?, location?
    - reset_password: email, new_password
    - delete_account: email
    """
    action: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "action": "reset_password",
                "payload": {"email": "awa.kone@example.ci", "new_password": "NouveauPass456"}
            }
        }


class PlatformStatsResponse(BaseModel):
    total_users: int
    recruiters: int
    candidates: int
    total_jobs: int
    open_jobs: int
    total_applications: int
    paying_users: int


class AdminUserResponse(BaseModel):
    id: int
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    subscription_plan: str
    subscription_end: Optional[datetime] = None
    applications_created_count: int
    jobs_published: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PlanUpdateRequest(BaseModel):
    plan: str = Field(..., pattern="^(free|standard|pro)$")


class KnowledgeEntryCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    keywords: List[str] = Field(default_factory=list)


class KnowledgeEntryResponse(BaseModel):
    id: int
    question: str
    answer: str
    category: Optional[str] = None
    keywords: List[str] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
