"""
Pydantic schemas for usage endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field


class UsageResponse(BaseModel):
    """Response schema for GET /me/usage."""
    role: str = Field(..., description="candidate, recruiter or admin")
    plan: str = Field(..., description="Current plan (free, standard, pro)")
    counter: Optional[str] = Field(None, description="User column counting usage for this role")
    limit: Optional[int] = Field(None, description="Monthly limit (None for unlimited)")
    used: int = Field(..., description="Current month usage")
    remaining: Optional[int] = Field(None, description="Remaining quota (None for unlimited)")
    unlimited: bool = Field(..., description="Whether the quota is unlimited")

    class Config:
        json_schema_extra = {
            "example": {
                "role": "candidate",
                "plan": "free",
                "counter": "applications_created_count",
                "limit": 20,
                "used": 5,
                "remaining": 15,
                "unlimited": False
            }
        }
