"""
Onboarding service.

Consumes the onboarding token minted at checkout. A paying customer
arrives here with the Stripe session ID and the token from their
onboarding link, sets a password and profile details, and the
temporary account created by the webhook becomes a real one.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import stripe

from modules.auth.interfaces import IIdentityRepository, IUserAccountRepository
from modules.billing.interfaces import IBillingService, IPaymentGateway
from modules.billing.service import session_customer_email, session_onboarding_token

from .exceptions import (
    OnboardingAccountLookupFailedError,
    OnboardingAccountUpdateFailedError,
    OnboardingAlreadyCompletedError,
    OnboardingCustomerDetailsMissingError,
    OnboardingEmailExistsError,
    OnboardingEmailMismatchError,
    OnboardingProfileUpdateFailedError,
    OnboardingReferralInvalidError,
    OnboardingSessionExpiredError,
    OnboardingSessionInvalidError,
    OnboardingStatusNotFoundError,
    OnboardingTokenInvalidError,
)
from .models import (
    CompleteOnboardingRequest,
    OnboardingResult,
    OnboardingStatus,
    split_full_name,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OnboardingService:
    """Completes accounts created by the billing reconciler."""

    def __init__(
        self,
        accounts: IUserAccountRepository,
        identities: IIdentityRepository,
        gateway: IPaymentGateway,
        billing: IBillingService,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._accounts = accounts
        self._identities = identities
        self._gateway = gateway
        self._billing = billing
        self._clock = clock

    async def complete(self, request: CompleteOnboardingRequest) -> OnboardingResult:
        """
        Finish onboarding for the account created by a checkout session.

        Checks run in a fixed order and nothing is written until all pass:
        session known, not yet completed, token unexpired, email matches the
        checkout, onboarding token matches, referral code resolves.
        """
        email = normalize_email(request.email)

        account = self._accounts.find_by_session_id(request.session_id)
        if account is None:
            if self._identities.find_identity_by_email(email) is not None:
                raise OnboardingEmailExistsError()
            raise OnboardingSessionInvalidError()

        if account.onboarding_completed:
            raise OnboardingAlreadyCompletedError()

        expires_at = account.onboarding_token_expires
        if expires_at is None or self._clock() > _as_utc(expires_at):
            raise OnboardingSessionExpiredError()

        session = self._retrieve_session(request.session_id)

        checkout_email = session_customer_email(session)
        if not checkout_email or normalize_email(checkout_email) != email:
            raise OnboardingEmailMismatchError()

        self._check_token(
            presented=request.onboarding_token,
            issued=session_onboarding_token(session),
            stored=account.onboarding_token,
        )

        try:
            identity = self._identities.get_identity(account.id)
        except Exception as e:
            logger.error("Auth user lookup failed for %s", account.id, exc_info=True)
            raise OnboardingAccountLookupFailedError() from e
        if identity is None or not identity.email:
            raise OnboardingAccountLookupFailedError()
        if normalize_email(identity.email) != email:
            raise OnboardingEmailMismatchError()

        referred_by: Optional[str] = None
        if request.referral_code:
            referrer = self._accounts.find_by_referral_code(request.referral_code)
            if referrer is None:
                raise OnboardingReferralInvalidError()
            referred_by = referrer.id

        now = self._clock()
        try:
            self._identities.update_identity(
                account.id,
                {
                    "password": request.password,
                    "user_metadata": {
                        "full_name": request.full_name,
                        "artist_name": request.artist_name,
                        "onboarding_completed": True,
                        "completed_at": now.isoformat(),
                    },
                },
            )
        except Exception as e:
            logger.error("Failed to update auth user %s", account.id, exc_info=True)
            raise OnboardingAccountUpdateFailedError() from e

        first_name, last_name = split_full_name(request.full_name)
        try:
            self._accounts.update_fields(
                account.id,
                {
                    "first_name": first_name,
                    "last_name": last_name,
                    "artist_name": request.artist_name,
                    "referred_by": referred_by,
                    "onboarding_completed": True,
                    "onboarding_completed_at": now,
                    "onboarding_token": None,
                    "onboarding_token_expires": None,
                },
            )
        except Exception as e:
            logger.error("Failed to update profile %s", account.id, exc_info=True)
            raise OnboardingProfileUpdateFailedError() from e

        logger.info("Onboarding completed for user %s", account.id)
        return OnboardingResult(
            message="Onboarding completed successfully",
            user_id=account.id,
            email=identity.email,
        )

    async def status(self, session_id: str) -> OnboardingStatus:
        account = self._accounts.find_by_session_id(session_id)
        if account is None:
            raise OnboardingStatusNotFoundError()

        expires_at = account.onboarding_token_expires
        return OnboardingStatus(
            session_id=session_id,
            user_id=account.id,
            onboarding_completed=account.onboarding_completed,
            token_expired=expires_at is None or self._clock() > _as_utc(expires_at),
            expires_at=expires_at,
        )

    async def create_fallback(self, session_id: str, onboarding_token: Optional[str]) -> OnboardingResult:
        """
        Create the account from the checkout session directly.

        Used by the success page when the webhook has not arrived yet. Safe
        to call repeatedly: an existing account is reported, not recreated.
        """
        session = self._retrieve_session(session_id)

        issued = session_onboarding_token(session)
        if issued and onboarding_token != issued:
            raise OnboardingTokenInvalidError()

        existing = self._accounts.find_by_session_id(session_id)
        if existing is not None:
            return OnboardingResult(message="Account already exists", user_id=existing.id)

        if not session_customer_email(session):
            raise OnboardingCustomerDetailsMissingError()

        user_id = await self._billing.handle_checkout_completed(session)
        logger.info("Created account %s via onboarding fallback for session %s", user_id, session_id)
        return OnboardingResult(message="Account created successfully via fallback", user_id=user_id)

    def _retrieve_session(self, session_id: str) -> dict:
        try:
            return self._gateway.retrieve_checkout_session(session_id)
        except stripe.StripeError as e:
            logger.warning("Could not retrieve checkout session %s: %s", session_id, e)
            raise OnboardingSessionInvalidError() from e

    @staticmethod
    def _check_token(presented: Optional[str], issued: Optional[str], stored: Optional[str]) -> None:
        """
        Compare the presented token with the one issued at checkout.

        When the session carries a token, the presented token and the stored
        one must both equal it. Sessions without one (created before tokens
        were issued) only check the presented token against the stored one.
        """
        if issued:
            if presented != issued:
                raise OnboardingTokenInvalidError()
            if stored and stored != issued:
                raise OnboardingTokenInvalidError()
        elif presented and stored and presented != stored:
            raise OnboardingTokenInvalidError()
