"""Tests for the subscription access gate."""

import pytest
from datetime import datetime, timedelta, timezone

from modules.auth.access import AccessGate, evaluate_access, is_mutation
from modules.auth.exceptions import SubscriptionRequiredError, SubscriptionVerifyFailedError
from modules.auth.models import AccessDecision, AccountType, SubscriptionAccess, UserAccount
from tests.fakes import FakeAccountRepository, active_account, admin_account, lapsed_account

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
UPGRADE_URL = "/profile?tab=pay"


class TestEvaluateAccess:
    def test_missing_account_has_no_access(self):
        access = evaluate_access(None, NOW)
        assert access == SubscriptionAccess()
        assert access.is_read_only

    def test_admin(self):
        access = evaluate_access(UserAccount(id="u", account_type=AccountType.ADMIN), NOW)
        assert access.is_admin
        assert access.has_access

    def test_active_subscription_in_period(self):
        account = UserAccount(id="u", subscription_status="active", current_period_end=NOW + timedelta(days=1))
        assert evaluate_access(account, NOW).has_active_subscription

    def test_active_status_with_ended_period(self):
        """Status alone is not enough; the paid period must still be running."""
        account = UserAccount(id="u", subscription_status="active", current_period_end=NOW - timedelta(seconds=1))
        access = evaluate_access(account, NOW)
        assert not access.has_active_subscription
        assert access.subscription_status == "active"

    def test_period_end_equal_to_now_is_expired(self):
        account = UserAccount(id="u", subscription_status="active", current_period_end=NOW)
        assert not evaluate_access(account, NOW).has_active_subscription

    def test_active_status_without_period(self):
        account = UserAccount(id="u", subscription_status="active")
        assert not evaluate_access(account, NOW).has_active_subscription

    def test_past_due_in_period(self):
        account = UserAccount(id="u", subscription_status="past_due", current_period_end=NOW + timedelta(days=3))
        assert not evaluate_access(account, NOW).has_active_subscription

    def test_trial(self):
        account = UserAccount(id="u", trial_end=NOW + timedelta(hours=1))
        access = evaluate_access(account, NOW)
        assert access.has_active_trial
        assert not access.has_active_subscription
        assert access.has_access

    def test_expired_trial(self):
        account = UserAccount(id="u", trial_end=NOW - timedelta(hours=1))
        assert not evaluate_access(account, NOW).has_access

    def test_naive_timestamps_treated_as_utc(self):
        account = UserAccount(
            id="u",
            subscription_status="active",
            current_period_end=datetime(2026, 6, 2),
        )
        assert evaluate_access(account, NOW).has_active_subscription


class TestDecide:
    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "post"])
    def test_mutations(self, method):
        assert is_mutation(method)

    @pytest.mark.parametrize("method", ["GET", "HEAD", "OPTIONS"])
    def test_reads(self, method):
        assert not is_mutation(method)

    def test_admin_bypasses_everything(self):
        access = SubscriptionAccess(is_admin=True)
        assert AccessGate.decide(access, "DELETE", strict=True) == AccessDecision.ADMIN

    def test_active_allowed(self):
        access = SubscriptionAccess(has_active_subscription=True)
        assert AccessGate.decide(access, "POST") == AccessDecision.ALLOWED
        assert AccessGate.decide(access, "GET", strict=True) == AccessDecision.ALLOWED

    def test_lapsed_read_is_read_only(self):
        assert AccessGate.decide(SubscriptionAccess(), "GET") == AccessDecision.READ_ONLY

    def test_lapsed_mutation_denied(self):
        assert AccessGate.decide(SubscriptionAccess(), "PUT") == AccessDecision.DENIED

    def test_lapsed_read_denied_when_strict(self):
        assert AccessGate.decide(SubscriptionAccess(), "GET", strict=True) == AccessDecision.DENIED


class TestAccessGate:
    def make_gate(self, *accounts):
        repo = FakeAccountRepository(*accounts)
        return AccessGate(repo, upgrade_url=UPGRADE_URL), repo

    @pytest.mark.asyncio
    async def test_active_user_allowed(self):
        gate, _ = self.make_gate(active_account("u1"))
        assert await gate.check("u1", "POST") == AccessDecision.ALLOWED

    @pytest.mark.asyncio
    async def test_lapsed_user_can_read(self):
        gate, _ = self.make_gate(lapsed_account("u1"))
        assert await gate.check("u1", "GET") == AccessDecision.READ_ONLY

    @pytest.mark.asyncio
    async def test_lapsed_user_cannot_mutate(self):
        gate, _ = self.make_gate(lapsed_account("u1"))
        with pytest.raises(SubscriptionRequiredError) as exc_info:
            await gate.check("u1", "POST")

        error = exc_info.value
        assert error.status_code == 403
        assert error.code == "SUBSCRIPTION_REQUIRED"
        assert error.message == "Active subscription required for this action"
        assert error.to_dict()["upgrade_url"] == UPGRADE_URL

    @pytest.mark.asyncio
    async def test_strict_gate_message(self):
        gate, _ = self.make_gate(lapsed_account("u1"))
        with pytest.raises(SubscriptionRequiredError) as exc_info:
            await gate.check("u1", "GET", strict=True)
        assert exc_info.value.message == "Active subscription required"

    @pytest.mark.asyncio
    async def test_missing_account_is_read_only(self):
        gate, _ = self.make_gate()
        assert await gate.check("nobody", "GET") == AccessDecision.READ_ONLY
        with pytest.raises(SubscriptionRequiredError):
            await gate.check("nobody", "DELETE")

    @pytest.mark.asyncio
    async def test_admin(self):
        gate, _ = self.make_gate(admin_account("root"))
        assert await gate.check("root", "DELETE", strict=True) == AccessDecision.ADMIN

    @pytest.mark.asyncio
    async def test_lookup_failure_never_fails_open(self):
        gate, repo = self.make_gate(active_account("u1"))
        repo.fail_reads = True
        with pytest.raises(SubscriptionVerifyFailedError) as exc_info:
            await gate.check("u1", "GET")
        assert exc_info.value.code == "SUBSCRIPTION_VERIFY_FAILED"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_uses_injected_clock(self):
        account = UserAccount(id="u1", subscription_status="active", current_period_end=NOW)
        gate = AccessGate(
            FakeAccountRepository(account),
            upgrade_url=UPGRADE_URL,
            clock=lambda: NOW - timedelta(minutes=1),
        )
        assert await gate.check("u1", "POST") == AccessDecision.ALLOWED
