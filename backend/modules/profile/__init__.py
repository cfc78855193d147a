"""
Profile module.

The caller's profile and referral codes.

Public API:
- ProfileService: get_profile / validate_referral_code / apply_referral_code
- ReferralRepository: Atomic referral procedure
"""

from .models import Profile, ReferralRequest, ReferralValidation, Referrer
from .repository import ReferralRepository
from .service import ProfileService
from .exceptions import ProfileNotFoundError, ReferralApplyFailedError, ReferralInvalidError

__all__ = [
    "ProfileService",
    "ReferralRepository",
    "Profile",
    "ReferralRequest",
    "ReferralValidation",
    "Referrer",
    "ProfileNotFoundError",
    "ReferralApplyFailedError",
    "ReferralInvalidError",
]
