"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests replace services either with ``app.dependency_overrides`` (route
dependencies) or ``get_container().override(...)`` (the rate limit
middleware, which runs outside dependency injection).
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAccessGate, IAuthService, IIdentityRepository, IUserAccountRepository
    from modules.billing.interfaces import IBillingService, IPaymentGateway
    from modules.onboarding.service import OnboardingService
    from modules.profile.service import ProfileService
    from modules.ratelimit.service import RateLimiter
    from modules.ratelimit.store import InMemoryStore
    from modules.releases.service import ReleaseService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._services: dict[str, Any] = {}

    def _get(self, name: str, factory) -> Any:
        if name not in self._services:
            self._services[name] = factory()
        return self._services[name]

    def override(self, **services: Any) -> None:
        """Install pre-built services (tests only)."""
        self._services.update(services)

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        from modules.auth.service import get_auth_service
        return self._get("auth", get_auth_service)

    @property
    def accounts(self) -> "IUserAccountRepository":
        """Get the user_profiles repository."""
        def build():
            from modules.auth.repository import UserAccountRepository
            from shared.database import get_supabase_client
            return UserAccountRepository(get_supabase_client())
        return self._get("accounts", build)

    @property
    def identities(self) -> "IIdentityRepository":
        """Get the Supabase auth admin repository."""
        def build():
            from modules.auth.repository import IdentityRepository
            from shared.database import get_supabase_client
            return IdentityRepository(get_supabase_client())
        return self._get("identities", build)

    @property
    def access_gate(self) -> "IAccessGate":
        """Get the subscription access gate."""
        def build():
            from modules.auth.access import AccessGate
            return AccessGate(self.accounts, upgrade_url=get_settings().upgrade_url)
        return self._get("access_gate", build)

    @property
    def payment_gateway(self) -> "IPaymentGateway":
        """Get the Stripe gateway."""
        def build():
            from modules.billing.gateway import StripeGateway
            return StripeGateway(get_settings().stripe_secret_key)
        return self._get("payment_gateway", build)

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        def build():
            from modules.billing.service import BillingService
            settings = get_settings()
            return BillingService(
                accounts=self.accounts,
                identities=self.identities,
                gateway=self.payment_gateway,
                webhook_secret=settings.stripe_webhook_secret,
                onboarding_token_ttl=timedelta(hours=settings.onboarding_token_ttl_hours),
            )
        return self._get("billing", build)

    @property
    def onboarding(self) -> "OnboardingService":
        """Get the onboarding service instance."""
        def build():
            from modules.onboarding.service import OnboardingService
            return OnboardingService(
                accounts=self.accounts,
                identities=self.identities,
                gateway=self.payment_gateway,
                billing=self.billing,
            )
        return self._get("onboarding", build)

    @property
    def profile(self) -> "ProfileService":
        """Get the profile service instance."""
        def build():
            from modules.profile.repository import ReferralRepository
            from modules.profile.service import ProfileService
            from shared.database import get_supabase_client
            return ProfileService(self.accounts, ReferralRepository(get_supabase_client()))
        return self._get("profile", build)

    @property
    def releases(self) -> "ReleaseService":
        """Get the release service instance."""
        def build():
            from modules.releases.repository import ReleaseRepository
            from modules.releases.service import ReleaseService
            from shared.database import get_supabase_client
            return ReleaseService(ReleaseRepository(get_supabase_client()))
        return self._get("releases", build)

    @property
    def rate_limit_memory(self) -> "InMemoryStore":
        """Get the in-memory fallback store (its sweeper runs with the app)."""
        def build():
            from modules.ratelimit.store import InMemoryStore
            return InMemoryStore()
        return self._get("rate_limit_memory", build)

    @property
    def rate_limiter(self) -> "RateLimiter":
        """Get the rate limiter: persistent store with in-memory fallback."""
        def build():
            from modules.ratelimit import FallbackStore, PersistentStore, RateLimitConfig, RateLimiter
            from shared.database import get_supabase_client
            settings = get_settings()
            store = FallbackStore(
                primary=PersistentStore(get_supabase_client, rpc_name=settings.rate_limit_rpc_name),
                fallback=self.rate_limit_memory,
            )
            return RateLimiter(store, RateLimitConfig.from_settings(settings))
        return self._get("rate_limiter", build)

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._services.clear()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_access_gate() -> "IAccessGate":
    """FastAPI dependency for the subscription access gate."""
    return get_container().access_gate


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_onboarding_service() -> "OnboardingService":
    """FastAPI dependency for onboarding service."""
    return get_container().onboarding


def get_profile_service() -> "ProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profile


def get_release_service() -> "ReleaseService":
    """FastAPI dependency for release service."""
    return get_container().releases
