"""
Authentication module interface.

Other modules should depend on these protocols, not the concrete
implementations. The access gate and the billing reconciler only see the
intention-revealing repository methods, which keeps them testable with
in-memory fakes.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import AuthenticatedUser, Identity, SubscriptionAccess, UserAccount


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def try_validate_token(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """Validate a token without raising; returns None when it is unusable."""
        ...


@runtime_checkable
class IUserAccountRepository(Protocol):
    """Data access for user_profiles rows."""

    def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        ...

    def find_by_customer_id(self, customer_id: str) -> Optional[UserAccount]:
        ...

    def find_by_session_id(self, session_id: str) -> Optional[UserAccount]:
        ...

    def find_by_referral_code(self, referral_code: str) -> Optional[UserAccount]:
        ...

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        ...

    def insert(self, values: dict[str, Any]) -> None:
        ...


@runtime_checkable
class IIdentityRepository(Protocol):
    """Data access for Supabase auth identities (admin API)."""

    def create_identity(
        self,
        email: str,
        password: str,
        user_metadata: dict[str, Any],
    ) -> Identity:
        """
        Create a confirmed auth identity.

        Raises:
            IdentityExistsError: If the email is already registered
        """
        ...

    def find_identity_by_email(self, email: str) -> Optional[Identity]:
        ...

    def get_identity(self, user_id: str) -> Optional[Identity]:
        ...

    def update_identity(self, user_id: str, attributes: dict[str, Any]) -> None:
        ...


@runtime_checkable
class IAccessGate(Protocol):
    """Subscription-aware authorization."""

    async def check(self, user_id: str, method: str, strict: bool = False):
        ...

    async def get_access(self, user_id: str) -> SubscriptionAccess:
        ...
