"""
Pydantic schemas for billing endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class CreatePlanRequest(BaseModel):
    """Request schema for POST /functions/create-paystack-plan."""
    plan_type: Optional[str] = Field(None, description="Catalog plan: 'standard' or 'pro'")

    class Config:
        json_schema_extra = {
            "example": {
                "plan_type": "pro"
            }
        }


class CreateSubscriptionRequest(BaseModel):
    """Request schema for POST /functions/create-paystack-subscription."""
    plan: Optional[str] = Field(None, description="Catalog plan: 'standard' or 'pro'")

    class Config:
        json_schema_extra = {
            "example": {
                "plan": "standard"
            }
        }


class SubscriptionResponse(BaseModel):
    """Response schema for GET /billing/subscription."""
    id: int
    user_id: int
    plan: str
    status: str
    paystack_subscription_id: Optional[str] = None
    plan_id: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    jobs_limit: Optional[int] = None
    trial_days: Optional[int] = None
    renew_date: Optional[datetime] = None
    next_payment_date: Optional[datetime] = None
    trial_end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
