"""
Onboarding module data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class CompleteOnboardingRequest(BaseModel):
    """Body of POST /api/onboarding/complete."""

    session_id: str = Field(..., min_length=1)
    onboarding_token: Optional[str] = Field(default=None, min_length=1)
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    artist_name: Optional[str] = None
    referral_code: Optional[str] = Field(default=None, pattern=r"^[A-Z0-9]{6}$")
    password: str = Field(..., min_length=8)


class CreateFallbackRequest(BaseModel):
    """Body of POST /api/onboarding/create-fallback."""

    session_id: str = Field(..., min_length=1)
    onboarding_token: Optional[str] = Field(default=None, min_length=1)


class OnboardingResult(BaseModel):
    message: str
    user_id: Optional[str] = None
    email: Optional[str] = None


class OnboardingStatus(BaseModel):
    session_id: str
    user_id: str
    onboarding_completed: bool
    token_expired: bool
    expires_at: Optional[datetime] = None


def split_full_name(full_name: str) -> tuple[str, Optional[str]]:
    """Split "First Middle Last" into ("First", "Middle Last")."""
    parts = full_name.strip().split()
    if not parts:
        return full_name.strip(), None
    return parts[0], " ".join(parts[1:]) or None
