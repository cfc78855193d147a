"""
Database client factory for Supabase.

Provides the service-role client used by repositories. Row ownership is
enforced by the repositories themselves (every query filters by user id).
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings
from .exceptions import DatabaseConfigError

# Module-level client cache
_service_client: Optional[Client] = None


def is_database_configured() -> bool:
    """Return True when both the Supabase URL and service key are set."""
    settings = get_settings()
    return bool(settings.supabase_url and settings.supabase_service_role_key)


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as reconciling billing webhooks or creating onboarding accounts.

    Returns:
        Supabase client configured with service role key

    Raises:
        DatabaseConfigError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", settings.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise DatabaseConfigError(missing)
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
