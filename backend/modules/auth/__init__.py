"""
Authentication module.

Handles JWT validation, user accounts and subscription-aware authorization.

Public API:
- IAuthService: Interface for auth operations
- AccessGate / evaluate_access: Subscription-aware authorization
- AuthenticatedUser: Minimal user info from JWT
- UserAccount: Subscription and onboarding fields of user_profiles
- Auth exceptions: AuthHeaderInvalidError, SubscriptionRequiredError, etc.
"""

from .interfaces import IAuthService, IUserAccountRepository, IIdentityRepository
from .access import AccessGate, evaluate_access
from .models import (
    AccessDecision,
    AccountType,
    AuthenticatedUser,
    Identity,
    JWTPayload,
    SubscriptionAccess,
    UserAccount,
)
from .exceptions import (
    AuthHeaderInvalidError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthConfigError,
    SubscriptionRequiredError,
    SubscriptionVerifyFailedError,
    AdminRequiredError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserAccountRepository",
    "IIdentityRepository",
    # Access control
    "AccessGate",
    "evaluate_access",
    # Models
    "AccessDecision",
    "AccountType",
    "AuthenticatedUser",
    "Identity",
    "JWTPayload",
    "SubscriptionAccess",
    "UserAccount",
    # Exceptions
    "AuthHeaderInvalidError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthConfigError",
    "SubscriptionRequiredError",
    "SubscriptionVerifyFailedError",
    "AdminRequiredError",
]
