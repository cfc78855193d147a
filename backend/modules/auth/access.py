"""
Subscription-aware access control.

Decides, per request, whether an authenticated caller may perform the
requested operation given the subscription state stored on their account:

    Unchecked -> ADMIN                      (account_type == admin)
    Unchecked -> Evaluated -> ALLOWED       (active subscription or trial)
                           -> READ_ONLY     (no access, read method, lenient gate)
                           -> DENIED        (no access, mutation or strict gate)

DENIED is surfaced as SubscriptionRequiredError. Lapsed subscribers keep
read access to their data; only mutations are blocked.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .exceptions import SubscriptionRequiredError, SubscriptionVerifyFailedError
from .interfaces import IUserAccountRepository
from .models import (
    MUTATION_METHODS,
    AccessDecision,
    AccountType,
    SubscriptionAccess,
    UserAccount,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def evaluate_access(account: Optional[UserAccount], now: datetime) -> SubscriptionAccess:
    """
    Derive the effective access tier of an account at ``now``.

    A missing account has no subscription and no trial.
    """
    if account is None:
        return SubscriptionAccess()

    if account.account_type == AccountType.ADMIN:
        return SubscriptionAccess(
            is_admin=True,
            subscription_status=account.subscription_status,
        )

    now = _as_utc(now)
    has_active_subscription = (
        account.subscription_status == "active"
        and account.current_period_end is not None
        and _as_utc(account.current_period_end) > now
    )
    has_active_trial = account.trial_end is not None and _as_utc(account.trial_end) > now

    return SubscriptionAccess(
        has_active_subscription=has_active_subscription,
        has_active_trial=has_active_trial,
        subscription_status=account.subscription_status,
    )


def is_mutation(method: str) -> bool:
    return method.upper() in MUTATION_METHODS


class AccessGate:
    """
    Evaluates subscription state for protected route groups.

    One read-only account lookup per check. Lookup failures are fatal
    (SubscriptionVerifyFailedError); the gate never fails open.
    """

    def __init__(
        self,
        accounts: IUserAccountRepository,
        upgrade_url: str,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._accounts = accounts
        self._upgrade_url = upgrade_url
        self._clock = clock

    async def get_access(self, user_id: str) -> SubscriptionAccess:
        """Load the account and compute its access tier."""
        try:
            account = self._accounts.get_by_id(user_id)
        except Exception as e:
            logger.error("Error fetching subscription status for user %s", user_id, exc_info=True)
            raise SubscriptionVerifyFailedError(user_id) from e
        return evaluate_access(account, self._clock())

    async def check(self, user_id: str, method: str, strict: bool = False) -> AccessDecision:
        """
        Authorize ``method`` for ``user_id``.

        Args:
            user_id: Authenticated user's ID
            method: HTTP method of the incoming request
            strict: Premium gate; without access, every method is denied

        Returns:
            ADMIN, ALLOWED or READ_ONLY

        Raises:
            SubscriptionRequiredError: When the decision is DENIED
            SubscriptionVerifyFailedError: When the account cannot be read
        """
        access = await self.get_access(user_id)
        decision = self.decide(access, method, strict)
        if decision == AccessDecision.DENIED:
            raise SubscriptionRequiredError(self._upgrade_url, strict=strict)
        return decision

    @staticmethod
    def decide(access: SubscriptionAccess, method: str, strict: bool = False) -> AccessDecision:
        if access.is_admin:
            return AccessDecision.ADMIN
        if access.has_access:
            return AccessDecision.ALLOWED
        if strict or is_mutation(method):
            return AccessDecision.DENIED
        return AccessDecision.READ_ONLY
