"""
Profile module data models.
"""

from typing import Optional

from pydantic import BaseModel, Field

from modules.auth.models import AccountType


class Profile(BaseModel):
    """The caller's own profile as returned by GET /api/profile."""

    id: str
    email: Optional[str] = None
    account_type: AccountType = AccountType.ARTIST
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    artist_name: Optional[str] = None
    referral_code: Optional[str] = None
    referred_by: Optional[str] = None
    referral_credits: Optional[int] = None
    subscription_status: Optional[str] = None
    onboarding_completed: bool = False


class ReferralRequest(BaseModel):
    referral_code: str = Field(..., pattern=r"^[A-Z0-9]{6}$")


class Referrer(BaseModel):
    id: str
    name: str
    referral_code: str


class ReferralValidation(BaseModel):
    valid: bool = True
    referrer: Referrer
