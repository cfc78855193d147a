"""
Profile module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    def __init__(self, user_id: Optional[str] = None):
        super().__init__("Profile not found", code="PROFILE_NOT_FOUND")
        if user_id:
            self.details["user_id"] = user_id


class ReferralInvalidError(ValidationError):
    """Unknown code, self-referral, or a user who already has a referrer."""

    def __init__(self, reason: str):
        super().__init__(reason, code="REFERRAL_INVALID")


class ReferralApplyFailedError(ExternalServiceError):
    """The apply_referral_code procedure failed; nothing was written."""

    def __init__(self):
        super().__init__(
            "Failed to apply referral code",
            service="supabase",
            code="REFERRAL_APPLY_FAILED",
        )
