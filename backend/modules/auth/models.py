"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from shared.models import AuthenticatedUser

MUTATION_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class AccountType(str, Enum):
    """Account types stored on user_profiles.account_type."""

    ADMIN = "admin"
    ARTIST = "artist"
    MANAGER = "manager"
    LABEL = "label"


class AccessDecision(str, Enum):
    """Terminal states of a subscription check."""

    ADMIN = "admin"
    ALLOWED = "allowed"
    READ_ONLY = "read_only"
    DENIED = "denied"


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class UserAccount(BaseModel):
    """
    A row of user_profiles, restricted to the fields this backend reads.

    Subscription fields are written only by the billing reconciler.
    """

    model_config = {"extra": "ignore"}

    id: str
    account_type: AccountType = AccountType.ARTIST
    email: Optional[str] = None

    # Subscription state mirrored from Stripe
    subscription_status: Optional[str] = None
    subscription_plan_id: Optional[str] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    trial_end: Optional[datetime] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_session_id: Optional[str] = None

    # Denormalized payment audit fields
    last_payment_status: Optional[str] = None
    last_payment_date: Optional[datetime] = None
    last_payment_amount_cents: Optional[int] = None

    # Onboarding
    onboarding_token: Optional[str] = None
    onboarding_token_expires: Optional[datetime] = None
    onboarding_completed: bool = False

    # Profile and referrals
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    artist_name: Optional[str] = None
    referral_code: Optional[str] = None
    referred_by: Optional[str] = None
    referral_credits: int = 0

    @field_validator(
        "account_type", "onboarding_completed", "cancel_at_period_end", "referral_credits", mode="before"
    )
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        # Columns added to an existing table may still hold NULL
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class SubscriptionAccess(BaseModel):
    """Derived access tier for a user at a given instant."""

    is_admin: bool = False
    has_active_subscription: bool = False
    has_active_trial: bool = False
    subscription_status: Optional[str] = None

    @property
    def has_access(self) -> bool:
        return self.is_admin or self.has_active_subscription or self.has_active_trial

    @property
    def is_read_only(self) -> bool:
        return not self.has_access


class Identity(BaseModel):
    """A Supabase auth user as returned by the admin API."""

    id: str
    email: Optional[str] = None
    user_metadata: dict = Field(default_factory=dict)


__all__ = [
    "MUTATION_METHODS",
    "AccountType",
    "AccessDecision",
    "AuthenticatedUser",
    "JWTPayload",
    "UserAccount",
    "SubscriptionAccess",
    "Identity",
]
