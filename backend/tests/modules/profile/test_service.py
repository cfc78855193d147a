"""Tests for the profile service and referral flow."""

import pytest
from unittest.mock import MagicMock

from modules.auth.models import UserAccount
from modules.profile.exceptions import ProfileNotFoundError, ReferralApplyFailedError, ReferralInvalidError
from modules.profile.repository import ReferralRepository
from modules.profile.service import ProfileService
from tests.fakes import FakeAccountRepository, active_account


@pytest.fixture
def accounts():
    return FakeAccountRepository(
        active_account("u1", email="me@example.com", referral_code="MINE01", artist_name="Me"),
        UserAccount(id="ref", first_name="Rita", last_name="Ref", referral_code="ABC123"),
        UserAccount(id="referred", referred_by="ref"),
    )


@pytest.fixture
def referrals():
    return MagicMock(spec=ReferralRepository)


@pytest.fixture
def service(accounts, referrals):
    return ProfileService(accounts, referrals)


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_profile(self, service):
        profile = await service.get_profile("u1")
        assert profile.id == "u1"
        assert profile.email == "me@example.com"
        assert profile.referral_code == "MINE01"
        assert profile.subscription_status == "active"

    @pytest.mark.asyncio
    async def test_missing(self, service):
        with pytest.raises(ProfileNotFoundError):
            await service.get_profile("nobody")


class TestReferrals:
    @pytest.mark.asyncio
    async def test_validate(self, service):
        result = await service.validate_referral_code("ABC123", "u1")
        assert result.valid is True
        assert result.referrer.id == "ref"
        assert result.referrer.name == "Rita Ref"

    @pytest.mark.asyncio
    async def test_unknown_code(self, service):
        with pytest.raises(ReferralInvalidError) as exc_info:
            await service.validate_referral_code("ZZZ999", "u1")
        assert exc_info.value.message == "Invalid referral code"
        assert exc_info.value.code == "REFERRAL_INVALID"

    @pytest.mark.asyncio
    async def test_own_code(self, service):
        with pytest.raises(ReferralInvalidError) as exc_info:
            await service.validate_referral_code("MINE01", "u1")
        assert exc_info.value.message == "Cannot use your own referral code"

    @pytest.mark.asyncio
    async def test_already_referred(self, service):
        with pytest.raises(ReferralInvalidError) as exc_info:
            await service.validate_referral_code("ABC123", "referred")
        assert exc_info.value.message == "User already has a referrer"

    @pytest.mark.asyncio
    async def test_apply_calls_procedure(self, service, referrals):
        result = await service.apply_referral_code("ABC123", "u1")
        assert result.referrer.id == "ref"
        referrals.apply_referral_code.assert_called_once_with("ABC123", "u1")

    @pytest.mark.asyncio
    async def test_apply_invalid_never_calls_procedure(self, service, referrals):
        with pytest.raises(ReferralInvalidError):
            await service.apply_referral_code("MINE01", "u1")
        referrals.apply_referral_code.assert_not_called()

    @pytest.mark.asyncio
    async def test_apply_procedure_failure(self, service, referrals):
        referrals.apply_referral_code.side_effect = RuntimeError("deadlock detected")
        with pytest.raises(ReferralApplyFailedError) as exc_info:
            await service.apply_referral_code("ABC123", "u1")
        assert exc_info.value.status_code == 500


class TestReferralRepository:
    def test_rpc_parameters(self):
        mock_db = MagicMock()
        mock_db.rpc.return_value.execute.return_value.data = {"credits_awarded": 1}

        data = ReferralRepository(mock_db).apply_referral_code("ABC123", "u1")

        assert data == {"credits_awarded": 1}
        mock_db.rpc.assert_called_once_with(
            "apply_referral_code",
            {"p_referral_code": "ABC123", "p_referred_user_id": "u1", "p_credit_amount": 1},
        )
