"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from quickjob.core.security import BCRYPT_MAX_BYTES


def _check_password_bytes(v: str) -> str:
    password_bytes = v.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        raise ValueError("Password too long (bcrypt limit 72 bytes)")
    if len(password_bytes) < 6:
        raise ValueError("Password must be at least 6 characters")
    return v


class SignupRequest(BaseModel):
    """Request schema for user signup."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password (min 6 characters)")
    role: str = Field(..., pattern="^(candidate|recruiter)$", description="Account type")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    whatsapp: Optional[str] = Field(None, max_length=30)
    company_name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=100)
    commune: Optional[str] = Field(None, max_length=100)
    quartier: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        return _check_password_bytes(v)

    class Config:
        json_schema_extra = {
            "example": {
                "email": "awa.kone@example.ci",
                "password": "MotDePasse123",
                "role": "candidate",
                "first_name": "Awa",
                "last_name": "Koné",
                "phone": "+2250700000000",
                "location": "Abidjan",
                "commune": "Cocody"
            }
        }


class SignupResponse(BaseModel):
    message: str
    user_id: int
    role: str
    redirect_to: str


class TokenResponse(BaseModel):
    """Response schema for POST /auth/login."""
    access_token: str
    token_type: str = "bearer"
    role: str
    redirect_to: str = Field(..., description="Dashboard path for the user's role")


class RedirectResponse(BaseModel):
    role: str
    redirect_to: str

