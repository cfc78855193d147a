"""Tests for the onboarding service."""

from datetime import datetime, timedelta, timezone

import pytest

from modules.auth.models import Identity, UserAccount
from modules.billing.service import BillingService
from modules.onboarding.exceptions import (
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
from modules.onboarding.models import CompleteOnboardingRequest
from modules.onboarding.service import OnboardingService
from tests.fakes import (
    FakeAccountRepository,
    FakeIdentityRepository,
    FakePaymentGateway,
    checkout_session,
)

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
TOKEN = "tok_abcdefghijklmnopqrstuvwxyz012345"
SESSION_ID = "cs_test_1"
USER_ID = "user-1"
EMAIL = "artist@example.com"


@pytest.fixture
def accounts():
    return FakeAccountRepository(
        UserAccount(
            id=USER_ID,
            email=EMAIL,
            stripe_session_id=SESSION_ID,
            stripe_customer_id="cus_123",
            onboarding_token=TOKEN,
            onboarding_token_expires=NOW + timedelta(hours=23),
            subscription_status="pending",
        ),
        UserAccount(id="referrer-1", referral_code="ABC123", first_name="Ref"),
    )


@pytest.fixture
def identities():
    return FakeIdentityRepository(Identity(id=USER_ID, email=EMAIL))


@pytest.fixture
def gateway():
    gateway = FakePaymentGateway()
    gateway.sessions[SESSION_ID] = checkout_session(session_id=SESSION_ID, email=EMAIL, onboarding_token=TOKEN)
    return gateway


@pytest.fixture
def service(accounts, identities, gateway):
    billing = BillingService(accounts, identities, gateway, webhook_secret="whsec", clock=lambda: NOW)
    return OnboardingService(accounts, identities, gateway, billing, clock=lambda: NOW)


def make_request(**overrides) -> CompleteOnboardingRequest:
    values = {
        "session_id": SESSION_ID,
        "onboarding_token": TOKEN,
        "full_name": "Jane Q Artist",
        "email": EMAIL,
        "artist_name": "JQA",
        "password": "correct-horse",
    }
    values.update(overrides)
    return CompleteOnboardingRequest(**values)


class TestCompleteOnboarding:
    @pytest.mark.asyncio
    async def test_success(self, service, accounts, identities):
        result = await service.complete(make_request(referral_code="ABC123"))

        assert result.user_id == USER_ID
        assert result.email == EMAIL
        assert identities.passwords[USER_ID] == "correct-horse"

        account = accounts.accounts[USER_ID]
        assert account.onboarding_completed is True
        assert account.first_name == "Jane"
        assert account.last_name == "Q Artist"
        assert account.artist_name == "JQA"
        assert account.referred_by == "referrer-1"
        assert account.onboarding_token is None
        assert account.onboarding_token_expires is None

    @pytest.mark.asyncio
    async def test_email_is_case_insensitive(self, service):
        result = await service.complete(make_request(email="Artist@Example.COM"))
        assert result.user_id == USER_ID

    @pytest.mark.asyncio
    async def test_unknown_session(self, service):
        with pytest.raises(OnboardingSessionInvalidError) as exc_info:
            await service.complete(make_request(session_id="cs_unknown", email="new@example.com"))
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_session_with_registered_email(self, service):
        with pytest.raises(OnboardingEmailExistsError) as exc_info:
            await service.complete(make_request(session_id="cs_unknown"))
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_already_completed(self, service):
        await service.complete(make_request())
        with pytest.raises(OnboardingAlreadyCompletedError):
            await service.complete(make_request())

    @pytest.mark.asyncio
    async def test_expired(self, service, accounts):
        accounts.accounts[USER_ID] = accounts.accounts[USER_ID].model_copy(
            update={"onboarding_token_expires": NOW - timedelta(seconds=1)}
        )
        with pytest.raises(OnboardingSessionExpiredError):
            await service.complete(make_request())

    @pytest.mark.asyncio
    async def test_email_mismatch(self, service):
        with pytest.raises(OnboardingEmailMismatchError):
            await service.complete(make_request(email="someone@example.com"))

    @pytest.mark.asyncio
    async def test_wrong_token(self, service, identities):
        with pytest.raises(OnboardingTokenInvalidError) as exc_info:
            await service.complete(make_request(onboarding_token="tok_guess"))
        assert exc_info.value.status_code == 403
        assert identities.updated == []

    @pytest.mark.asyncio
    async def test_missing_token_when_session_has_one(self, service):
        with pytest.raises(OnboardingTokenInvalidError):
            await service.complete(make_request(onboarding_token=None))

    @pytest.mark.asyncio
    async def test_session_without_token(self, service, gateway, accounts):
        gateway.sessions[SESSION_ID] = checkout_session(session_id=SESSION_ID, email=EMAIL, onboarding_token=None)
        result = await service.complete(make_request(onboarding_token=None))
        assert result.user_id == USER_ID

    @pytest.mark.asyncio
    async def test_stripe_session_missing(self, service, gateway):
        gateway.sessions.clear()
        with pytest.raises(OnboardingSessionInvalidError):
            await service.complete(make_request())

    @pytest.mark.asyncio
    async def test_identity_missing(self, service, identities):
        identities.identities.clear()
        with pytest.raises(OnboardingAccountLookupFailedError):
            await service.complete(make_request())

    @pytest.mark.asyncio
    async def test_invalid_referral_writes_nothing(self, service, accounts, identities):
        with pytest.raises(OnboardingReferralInvalidError):
            await service.complete(make_request(referral_code="ZZZ999"))
        assert identities.updated == []
        assert accounts.updates == []

    @pytest.mark.asyncio
    async def test_auth_update_failure(self, service, identities):
        identities.fail_updates = True
        with pytest.raises(OnboardingAccountUpdateFailedError):
            await service.complete(make_request())

    @pytest.mark.asyncio
    async def test_profile_update_failure(self, service, accounts):
        accounts.fail_writes = True
        with pytest.raises(OnboardingProfileUpdateFailedError):
            await service.complete(make_request())


class TestOnboardingStatus:
    @pytest.mark.asyncio
    async def test_status(self, service):
        status = await service.status(SESSION_ID)
        assert status.user_id == USER_ID
        assert status.onboarding_completed is False
        assert status.token_expired is False

    @pytest.mark.asyncio
    async def test_unknown(self, service):
        with pytest.raises(OnboardingStatusNotFoundError):
            await service.status("cs_unknown")


class TestCreateFallback:
    @pytest.mark.asyncio
    async def test_existing_account(self, service, accounts):
        result = await service.create_fallback(SESSION_ID, TOKEN)
        assert result.message == "Account already exists"
        assert result.user_id == USER_ID
        assert accounts.inserts == []

    @pytest.mark.asyncio
    async def test_creates_account_when_webhook_missed(self, service, gateway, accounts):
        gateway.sessions["cs_test_2"] = checkout_session(
            session_id="cs_test_2", email="late@example.com", onboarding_token="tok_late"
        )

        result = await service.create_fallback("cs_test_2", "tok_late")

        account = accounts.accounts[result.user_id]
        assert account.stripe_session_id == "cs_test_2"
        assert account.onboarding_token == "tok_late"

    @pytest.mark.asyncio
    async def test_token_required(self, service, gateway):
        gateway.sessions["cs_test_2"] = checkout_session(session_id="cs_test_2", email="late@example.com", onboarding_token="tok_late")
        with pytest.raises(OnboardingTokenInvalidError):
            await service.create_fallback("cs_test_2", "tok_wrong")

    @pytest.mark.asyncio
    async def test_no_customer_email(self, service, gateway):
        gateway.sessions["cs_test_2"] = checkout_session(session_id="cs_test_2", email=None, onboarding_token=None)
        with pytest.raises(OnboardingCustomerDetailsMissingError):
            await service.create_fallback("cs_test_2", None)
