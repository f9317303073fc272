"""
Pydantic schemas for job endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

JOB_STATUS_PATTERN = "^(open|closed|in_progress|accomplished)$"


class JobBase(BaseModel):
    """Base job schema with common fields."""
    title: str = Field(..., description="Job title", min_length=1, max_length=255)
    description: str = Field(..., description="What needs to be done", min_length=1)
    category: Optional[str] = Field(None, description="livraison, ménage, déménagement, ...", max_length=100)
    amount: Optional[float] = Field(None, ge=0, description="Pay offered")
    currency: str = Field(default="FCFA", max_length=10)
    location: str = Field(..., description="City", min_length=1, max_length=100)
    commune: Optional[str] = Field(None, max_length=100)
    quartier: Optional[str] = Field(None, max_length=100)


class JobCreate(JobBase):
    """Schema for publishing a job."""
    contact_phone: Optional[str] = Field(None, max_length=30)
    contact_whatsapp: Optional[str] = Field(None, max_length=30)
    is_featured: bool = Field(default=False, description="Pro plan only")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Livreur à moto",
                "description": "Livraison de colis dans Cocody, 3 jours par semaine.",
                "category": "livraison",
                "amount": 15000,
                "currency": "FCFA",
                "location": "Abidjan",
                "commune": "Cocody",
                "quartier": "Angré",
                "contact_phone": "+2250700000000",
                "is_featured": False
            }
        }


class JobUpdate(BaseModel):
    """Schema for updating an existing job."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, max_length=10)
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    commune: Optional[str] = Field(None, max_length=100)
    quartier: Optional[str] = Field(None, max_length=100)
    contact_phone: Optional[str] = Field(None, max_length=30)
    contact_whatsapp: Optional[str] = Field(None, max_length=30)
    status: Optional[str] = Field(None, pattern=JOB_STATUS_PATTERN)
    is_featured: Optional[bool] = None

    @field_validator("title", "description", "amount", "currency", "location", "status", "is_featured")
    @classmethod
    def reject_null(cls, v):
        # omit a field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class JobStatusUpdate(BaseModel):
    status: str = Field(..., pattern=JOB_STATUS_PATTERN)


class JobFeatureUpdate(BaseModel):
    is_featured: bool


class JobResponse(JobBase):
    """Public job representation. Contact fields are served by /jobs/{id}/contact only."""
    id: int
    recruiter_id: int
    status: str
    is_featured: bool
    views_count: int
    applications_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobListResponse(BaseModel):
    items: List[JobResponse]
    total: int
    page: int
    page_size: int


class JobContactResponse(BaseModel):
    contact_phone: Optional[str] = None
    contact_whatsapp: Optional[str] = None
