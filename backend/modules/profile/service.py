"""
Profile service.

Read access to the caller's own profile and the referral flow.
"""

import logging

from modules.auth.interfaces import IUserAccountRepository

from .exceptions import ProfileNotFoundError, ReferralApplyFailedError, ReferralInvalidError
from .models import Profile, ReferralValidation, Referrer
from .repository import ReferralRepository

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, accounts: IUserAccountRepository, referrals: ReferralRepository) -> None:
        self._accounts = accounts
        self._referrals = referrals

    async def get_profile(self, user_id: str) -> Profile:
        account = self._accounts.get_by_id(user_id)
        if account is None:
            raise ProfileNotFoundError(user_id)
        return Profile(**account.model_dump(include=set(Profile.model_fields)))

    async def validate_referral_code(self, code: str, user_id: str) -> ReferralValidation:
        """
        Check that ``code`` may be applied to ``user_id``.

        Raises:
            ReferralInvalidError: Unknown code, own code, or already referred
        """
        referrer = self._accounts.find_by_referral_code(code)
        if referrer is None:
            raise ReferralInvalidError("Invalid referral code")

        if referrer.id == user_id:
            raise ReferralInvalidError("Cannot use your own referral code")

        account = self._accounts.get_by_id(user_id)
        if account is not None and account.referred_by:
            raise ReferralInvalidError("User already has a referrer")

        name = f"{referrer.first_name or ''} {referrer.last_name or ''}".strip()
        return ReferralValidation(
            referrer=Referrer(id=referrer.id, name=name, referral_code=code),
        )

    async def apply_referral_code(self, code: str, user_id: str) -> ReferralValidation:
        """
        Validate ``code`` and apply it in a single database transaction.

        There is no client-side retry or partial write: if the procedure
        fails, neither the user nor the referrer has changed.

        Raises:
            ReferralInvalidError: If validation fails
            ReferralApplyFailedError: If the procedure fails
        """
        validation = await self.validate_referral_code(code, user_id)

        try:
            self._referrals.apply_referral_code(code, user_id)
        except Exception as e:
            logger.error("apply_referral_code failed for user %s", user_id, exc_info=True)
            raise ReferralApplyFailedError() from e

        logger.info("Applied referral code %s for user %s", code, user_id)
        return validation
